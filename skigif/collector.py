"""Collecting animation frames for the encoder.

A :class:`Collector` is a bounded, thread-safe queue of :class:`InputFrame`
objects. Producers add frames; the writer consumes them with
:meth:`Collector.frames` until the collector is closed.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterator, Sequence, Tuple, Union

__all__ = [
    "Image",
    "Pixels",
    "PngData",
    "PngPath",
    "InputFrame",
    "CollectorClosed",
    "Collector",
]

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Image:
    """A width × height grid of RGBA pixels stored row by row."""

    width: int
    height: int
    pixels: Tuple[RGBA, ...]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("image dimensions must be positive")
        pixels = tuple(tuple(p) for p in self.pixels)
        if len(pixels) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} pixels, got {len(pixels)}"
            )
        for p in pixels:
            if len(p) != 4 or any(not 0 <= c <= 255 for c in p):
                raise ValueError(f"invalid RGBA pixel {p!r}")
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, data: bytes) -> "Image":
        """Build an image from packed RGBA bytes."""
        if len(data) != width * height * 4:
            raise ValueError("RGBA buffer size does not match dimensions")
        return cls(width, height, tuple(zip(*[iter(data)] * 4)))

    def to_rgba_bytes(self) -> bytes:
        """Return the pixels as packed RGBA bytes."""
        return bytes(c for p in self.pixels for c in p)

    def rows(self) -> Iterator[Sequence[RGBA]]:
        """Yield the image one row at a time."""
        for start in range(0, len(self.pixels), self.width):
            yield self.pixels[start:start + self.width]


@dataclass(frozen=True)
class Pixels:
    """Frame given as decoded pixels."""

    image: Image


@dataclass(frozen=True)
class PngData:
    """Frame given as in-memory PNG-compressed data."""

    data: bytes


@dataclass(frozen=True)
class PngPath:
    """Frame given as the path of a PNG file on disk."""

    path: Path


FrameSource = Union[Pixels, PngData, PngPath]


@dataclass(frozen=True)
class InputFrame:
    """A frame waiting to be resized and encoded."""

    frame: FrameSource
    presentation_timestamp: float
    frame_index: int


class CollectorClosed(Exception):
    """Raised when a frame is added after the collector was closed."""


class Collector:
    """Collect frames that will be encoded.

    Writing finishes only when the collector is closed, so add frames on a
    different thread from the one consuming :meth:`frames`, or close the
    collector before consuming.
    """

    def __init__(self, capacity: int = 4) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._queue: deque[InputFrame] = deque()
        self._closed = False
        self._cond = threading.Condition()

    def __enter__(self) -> "Collector":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def _send(self, frame: InputFrame) -> None:
        with self._cond:
            while not self._closed and len(self._queue) >= self._capacity:
                self._cond.wait()
            if self._closed:
                raise CollectorClosed(
                    f"frame {frame.frame_index} can't be added any more, "
                    "because the collector has been closed"
                )
            self._queue.append(frame)
            self._cond.notify_all()

    def add_frame_rgba(
        self, frame_index: int, frame: Image, presentation_timestamp: float
    ) -> None:
        """Queue a frame of RGBA pixels.

        Frame indices start at 0. Presentation timestamp is the time in
        seconds since the start (at 0) when the frame is displayed. Blocks
        while the queue is full.
        """
        self._send(InputFrame(Pixels(frame), presentation_timestamp, frame_index))

    def add_frame_png_data(
        self, frame_index: int, png_data: bytes, presentation_timestamp: float
    ) -> None:
        """Queue a frame given as in-memory PNG data."""
        self._send(
            InputFrame(PngData(bytes(png_data)), presentation_timestamp, frame_index)
        )

    def add_frame_png_file(
        self,
        frame_index: int,
        path: Union[str, PathLike],
        presentation_timestamp: float,
    ) -> None:
        """Queue a frame to be read from a PNG file."""
        self._send(InputFrame(PngPath(Path(path)), presentation_timestamp, frame_index))

    def close(self) -> None:
        """Stop accepting frames; already queued frames remain readable."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def frames(self) -> Iterator[InputFrame]:
        """Yield queued frames in arrival order until closed and drained."""
        while True:
            with self._cond:
                while not self._queue and not self._closed:
                    self._cond.wait()
                if not self._queue:
                    return
                item = self._queue.popleft()
                self._cond.notify_all()
            yield item