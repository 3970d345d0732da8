"""A sequence of PNG files used as animation frames."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .collector import Collector
from .source import Fps, Source

__all__ = ["PngSequence"]


class PngSequence(Source):
    """PNG files shown one after another at a fixed rate.

    Each entry of ``delays``, when given, overrides the display time of the
    matching frame in milliseconds; ``None`` keeps the default timing.
    """

    def __init__(
        self,
        frames: Sequence[Union[str, PathLike]],
        fps: Fps,
        delays: Optional[Sequence[Optional[int]]] = None,
    ) -> None:
        self._frames: List[Path] = [Path(f) for f in frames]
        self.fps = float(fps.fps) * float(fps.speed)
        self._delays: Optional[List[Optional[int]]] = (
            list(delays) if delays is not None else None
        )

    def total_frames(self) -> Optional[int]:
        """Number of files still to be added."""
        return len(self._frames)

    def _duration(self, index: int, default: float) -> float:
        if self._delays is None or index >= len(self._delays):
            return default
        delay_ms = self._delays[index]
        if delay_ms is None:
            return default
        return delay_ms / 1000.0

    def collect(self, dest: Collector) -> None:
        """Queue every file with its presentation timestamp."""
        frames, self._frames = self._frames, []
        default_duration = 1.0 / self.fps
        accumulated = 0.0
        for index, path in enumerate(frames):
            dest.add_frame_png_file(index, path, accumulated)
            accumulated += self._duration(index, default_duration)
        self._delays = None