"""Reading YUV4MPEG2 video as a frame source."""

from __future__ import annotations

import os
from enum import Enum
from os import PathLike
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from .collector import Collector, Image
from .source import Fps, Source
from .yuv import ColorRange, MatrixCoefficients, RGBConvert

__all__ = ["Y4MError", "Y4MSource"]

_MAGIC = b"YUV4MPEG2 "
_FRAME_MAGIC = b"FRAME"
_MAX_PARAMS = 1024
_MAX_FRAME_BYTES = 1 << 32

_TRUNCATED = "The y4m file is truncated or invalid"
_BAD_METADATA = "The y4m file contains invalid metadata"
_UNKNOWN_COLORSPACE = "y4m uses an unusual color format that is not supported"
_OUT_OF_MEMORY = "Out of memory, or the y4m file has bogus dimensions"
_NOT_Y4M = "The input is not a y4m file"


class Y4MError(Exception):
    """Raised for unreadable or unsupported YUV4MPEG2 input."""


class _EndOfStream(Exception):
    pass


class _Samp(Enum):
    MONO = "mono"
    S1X1 = "1x1"
    S2X1 = "2x1"
    S2X2 = "2x2"


class _Colorspace(Enum):
    MONO = "mono"
    MONO12 = "mono12"
    C420 = "420"
    C420P10 = "420p10"
    C420P12 = "420p12"
    C420JPEG = "420jpeg"
    C420PALDV = "420paldv"
    C420MPEG2 = "420mpeg2"
    C422 = "422"
    C422P10 = "422p10"
    C422P12 = "422p12"
    C444 = "444"
    C444P10 = "444p10"
    C444P12 = "444p12"


# subsampling, bytes per sample, frame size in quarters of a luma plane
_LAYOUT: dict[_Colorspace, Tuple[_Samp, int, int]] = {
    _Colorspace.MONO: (_Samp.MONO, 1, 4),
    _Colorspace.MONO12: (_Samp.MONO, 2, 4),
    _Colorspace.C420: (_Samp.S2X2, 1, 6),
    _Colorspace.C420P10: (_Samp.S2X2, 2, 6),
    _Colorspace.C420P12: (_Samp.S2X2, 2, 6),
    _Colorspace.C420JPEG: (_Samp.S2X2, 1, 6),
    _Colorspace.C420PALDV: (_Samp.S2X2, 1, 6),
    _Colorspace.C420MPEG2: (_Samp.S2X2, 1, 6),
    _Colorspace.C422: (_Samp.S2X1, 1, 8),
    _Colorspace.C422P10: (_Samp.S2X1, 2, 8),
    _Colorspace.C422P12: (_Samp.S2X1, 2, 8),
    _Colorspace.C444: (_Samp.S1X1, 1, 12),
    _Colorspace.C444P10: (_Samp.S1X1, 2, 12),
    _Colorspace.C444P12: (_Samp.S1X1, 2, 12),
}

_UNSUPPORTED = {
    _Colorspace.MONO12,
    _Colorspace.C420P10,
    _Colorspace.C420P12,
    _Colorspace.C422P10,
    _Colorspace.C422P12,
    _Colorspace.C444P10,
    _Colorspace.C444P12,
}

Planes = Tuple[bytes, bytes, bytes]


def _chunks_exact(data: bytes, size: int) -> List[bytes]:
    """Split into whole chunks of ``size``, dropping any remainder."""
    return [data[start:start + size] for start in range(0, len(data) - size + 1, size)]


def _doubled(items):
    for item in items:
        yield item
        yield item


def _parse_number(value: bytes) -> int:
    try:
        number = int(value.decode("ascii"))
    except (UnicodeDecodeError, ValueError) as err:
        raise Y4MError(f"y4m contains invalid data: {err}") from None
    if number < 0:
        raise Y4MError(f"y4m contains invalid data: negative number {number}")
    return number


class Y4MSource(Source):
    """Decodes a YUV4MPEG2 stream, resampling it to the wanted frame rate."""

    def __init__(
        self,
        src: Union[str, PathLike, BinaryIO],
        fps: Fps,
        in_color_space: Optional[MatrixCoefficients] = None,
    ) -> None:
        self._fps = fps
        self._in_color_space = in_color_space
        self.file_size: Optional[int] = None
        if hasattr(src, "read"):
            self._stream: BinaryIO = src  # type: ignore[assignment]
            self._owned = False
        else:
            self._stream = open(src, "rb")
            self._owned = True
            self.file_size = os.fstat(self._stream.fileno()).st_size
        try:
            self._read_header()
        except BaseException:
            self.close()
            raise

    def close(self) -> None:
        """Close the underlying file if this source opened it."""
        if self._owned:
            self._stream.close()

    def __enter__(self) -> "Y4MSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _read_exact(self, size: int) -> bytes:
        parts = []
        remaining = size
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                raise _EndOfStream
            parts.append(chunk)
            remaining -= len(chunk)
        return b"".join(parts)

    def _read_params(self) -> bytes:
        line = self._stream.readline(_MAX_PARAMS + 1)
        if not line.endswith(b"\n"):
            if len(line) > _MAX_PARAMS:
                raise Y4MError("y4m contains invalid data: parameters too long")
            raise _EndOfStream
        return line[:-1]

    def _read_header(self) -> None:
        try:
            magic = self._read_exact(len(_MAGIC))
            if magic != _MAGIC:
                raise Y4MError(_NOT_Y4M)
            raw = self._read_params()
        except _EndOfStream:
            raise Y4MError(_TRUNCATED) from None

        width = height = None
        framerate = None
        colorspace = _Colorspace.C420
        for token in raw.split(b" "):
            if not token:
                continue
            key, value = token[:1], token[1:]
            if key == b"W":
                width = _parse_number(value)
            elif key == b"H":
                height = _parse_number(value)
            elif key == b"F":
                num, sep, den = value.partition(b":")
                if not sep:
                    raise Y4MError(_BAD_METADATA)
                framerate = (_parse_number(num), _parse_number(den))
            elif key == b"C":
                try:
                    colorspace = _Colorspace(value.decode("ascii"))
                except (UnicodeDecodeError, ValueError):
                    raise Y4MError(_UNKNOWN_COLORSPACE) from None

        if not width or not height or framerate is None or 0 in framerate:
            raise Y4MError(_BAD_METADATA)
        _, bytes_per_sample, _ = _LAYOUT[colorspace]
        if width * height * bytes_per_sample > _MAX_FRAME_BYTES:
            raise Y4MError(_OUT_OF_MEMORY)

        self.raw_params = raw
        self.width = width
        self.height = height
        self.framerate = framerate
        self._colorspace = colorspace

    def _plane_sizes(self) -> Tuple[int, int]:
        samp, bytes_per_sample, _ = _LAYOUT[self._colorspace]
        w, h = self.width, self.height
        half_w, half_h = (w + 1) // 2, (h + 1) // 2
        chroma = {
            _Samp.MONO: 0,
            _Samp.S1X1: w * h,
            _Samp.S2X1: half_w * h,
            _Samp.S2X2: half_w * half_h,
        }[samp]
        return w * h * bytes_per_sample, chroma * bytes_per_sample

    def _frames(self) -> Iterator[Planes]:
        luma_size, chroma_size = self._plane_sizes()
        while True:
            try:
                head = self._read_exact(len(_FRAME_MAGIC))
            except _EndOfStream:
                return
            if head != _FRAME_MAGIC:
                raise Y4MError("y4m contains invalid data: bad frame header")
            try:
                self._read_params()
                y = self._read_exact(luma_size)
                u = self._read_exact(chroma_size)
                v = self._read_exact(chroma_size)
            except _EndOfStream:
                return
            yield y, u, v

    def total_frames(self) -> Optional[int]:
        """Estimate of the frame count from the file size, if known."""
        if self.file_size is None:
            return None
        _, bytes_per_sample, factor = _LAYOUT[self._colorspace]
        frame_size = self.width * self.height * bytes_per_sample * factor // 4 + 6
        return max(0, self.file_size - len(self.raw_params)) // frame_size

    def _bad_frame(self, raw: str) -> Y4MError:
        return Y4MError(f"Bad Y4M frame (using {raw})")

    def _to_rgba(
        self, samp: _Samp, planes: Planes, conv: RGBConvert, raw: str
    ) -> List[Tuple[int, int, int, int]]:
        y, u, v = planes
        width = self.width
        cache: dict[Tuple[int, int, int], Tuple[int, int, int, int]] = {}

        def rgba(triple: Tuple[int, int, int]) -> Tuple[int, int, int, int]:
            pixel = cache.get(triple)
            if pixel is None:
                pixel = cache[triple] = (*conv.to_rgb(*triple), 255)
            return pixel

        if samp is _Samp.MONO:
            return [rgba((s, s, s)) for s in y]

        if samp is _Samp.S1X1:
            if len(v) != len(y):
                raise self._bad_frame(raw)
            rows = zip(_chunks_exact(y, width), _chunks_exact(u, width), _chunks_exact(v, width))
            if len(_chunks_exact(y, width)) != len(_chunks_exact(v, width)):
                raise self._bad_frame(raw)
            return [rgba(t) for yr, ur, vr in rows for t in zip(yr, ur, vr)]

        chroma_width = (width + 1) // 2
        y_rows = _chunks_exact(y, width)
        u_rows = _chunks_exact(u, chroma_width)
        v_rows = _chunks_exact(v, chroma_width)
        if samp is _Samp.S2X1:
            if len(y_rows) != len(v_rows):
                raise self._bad_frame(raw)
            u_iter, v_iter = iter(u_rows), iter(v_rows)
        else:
            u_iter, v_iter = _doubled(u_rows), _doubled(v_rows)
        return [
            rgba(t)
            for yr, ur, vr in zip(y_rows, u_iter, v_iter)
            for t in zip(yr, _doubled(ur), _doubled(vr))
        ]

    def collect(self, dest: Collector) -> None:
        """Convert every kept frame to RGBA and add it to ``dest``."""
        try:
            self._collect(dest)
        finally:
            self.close()

    def _collect(self, dest: Collector) -> None:
        num, den = self.framerate
        frame_time = 1.0 / (num / den)
        wanted_frame_time = 1.0 / self._fps.fps
        width, height = self.width, self.height
        raw = self.raw_params.decode("utf-8", errors="replace")

        _, found, rest = raw.partition("COLORRANGE=")
        color_range = ColorRange.LIMITED
        if found and rest.startswith("FULL"):
            color_range = ColorRange.FULL

        matrix = self._in_color_space
        if matrix is None:
            matrix = (
                MatrixCoefficients.BT601
                if height <= 480 and width <= 720
                else MatrixCoefficients.BT709
            )

        if self._colorspace in _UNSUPPORTED:
            raise Y4MError(f"Y4M with C{self._colorspace.value} is not supported yet")
        samp = _LAYOUT[self._colorspace][0]
        if samp is _Samp.MONO:
            matrix = MatrixCoefficients.IDENTITY
        conv = RGBConvert(color_range, matrix)

        if width > 0xFFFF or height > 0xFFFF:
            raise Y4MError("Video too large")

        index = 0
        presentation_timestamp = 0.0
        wanted_pts = 0.0
        for planes in self._frames():
            this_frame_pts = presentation_timestamp / self._fps.speed
            presentation_timestamp += frame_time
            if presentation_timestamp < wanted_pts:
                continue
            wanted_pts += wanted_frame_time

            y, u, v = planes
            if not y or len(u) != len(v):
                raise self._bad_frame(raw)
            pixels = self._to_rgba(samp, planes, conv, raw)
            if len(pixels) != width * height:
                raise self._bad_frame(raw)
            dest.add_frame_rgba(index, Image(width, height, tuple(pixels)), this_frame_pts)
            index += 1