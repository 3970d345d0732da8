"""Progress reporting while frames are encoded."""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, TextIO

__all__ = ["ProgressReporter", "NoProgress", "ProgressBar"]

_REFRESH_INTERVAL = 0.25
_BAR_WIDTH = 30


class ProgressReporter(ABC):
    """Receives notifications about encoding progress."""

    @abstractmethod
    def increase(self) -> bool:
        """Called once per frame; return ``False`` to abort encoding."""

    def written_bytes(self, bytes_written: int) -> None:
        """Called with the number of bytes written so far."""

    def done(self, msg: str) -> None:
        """Called once when the file has been written."""


class NoProgress(ProgressReporter):
    """Reports nothing and never aborts."""

    def increase(self) -> bool:
        return True


class ProgressBar(ProgressReporter):
    """A console bar showing frames done and the estimated file size."""

    def __init__(self, total: Optional[int] = None, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.total = total
        self.bar_total = total if total is not None else 100
        self.frames = 0
        self.message = "Frame "
        self.previous_estimate = 0
        self.displayed_estimate = 0
        self._clock: Callable[[], float] = time.monotonic
        self._last_draw: Optional[float] = None

    def _draw(self, force: bool = False) -> None:
        now = self._clock()
        if (
            not force
            and self._last_draw is not None
            and now - self._last_draw < _REFRESH_INTERVAL
            and self.frames < self.bar_total
        ):
            return
        self._last_draw = now
        done = min(self.frames, self.bar_total)
        filled = done * _BAR_WIDTH // self.bar_total if self.bar_total else _BAR_WIDTH
        bar = " " + "#" * filled + "." * (_BAR_WIDTH - filled) + " "
        self.stream.write(f"\r{self.message}{self.frames} / {self.bar_total}{bar}")
        self.stream.flush()

    def increase(self) -> bool:
        self.frames += 1
        if self.total is None:
            self.bar_total = max(self.frames + 50, 100)
        self._draw()
        return True

    def written_bytes(self, bytes_written: int) -> None:
        if self.total is None:
            min_frames = 10
        else:
            min_frames = max(5, min(50, self.total // 16))
        if self.frames <= min_frames:
            return
        total_size = bytes_written * self.bar_total // self.frames
        if total_size >= self.previous_estimate:
            new_estimate = total_size
        else:
            new_estimate = (self.previous_estimate + total_size) // 2
        self.previous_estimate = new_estimate
        if abs(self.displayed_estimate - new_estimate) > new_estimate // 10:
            self.displayed_estimate = new_estimate
            if new_estimate > 1_000_000:
                num = new_estimate / 1_000_000
                unit = "MB"
                decimals = 0 if new_estimate > 10_000_000 else 1
            else:
                num = new_estimate / 1_000
                unit = "KB"
                decimals = 0
            self.message = f"{num:.{decimals}f}{unit} GIF; Frame "

    def done(self, msg: str) -> None:
        self._draw(force=True)
        self.stream.write(f"\r{msg}\n")
        self.stream.flush()