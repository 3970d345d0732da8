"""Reading an existing GIF as input for re-encoding."""

from __future__ import annotations

from os import PathLike
from typing import BinaryIO, Optional, Union

from PIL import Image as PILImage
from PIL import ImageSequence, UnidentifiedImageError

from .collector import Collector, Image
from .source import Fps, Source

__all__ = ["GifSource"]


class GifSource(Source):
    """Decodes the frames of a GIF, composited onto the full screen."""

    def __init__(self, src: Union[str, PathLike, BinaryIO], fps: Fps) -> None:
        self.speed = float(fps.speed)
        try:
            image = PILImage.open(src)
        except UnidentifiedImageError as err:
            raise ValueError(f"not a GIF file: {err}") from None
        if image.format != "GIF":
            image.close()
            raise ValueError(f"not a GIF file: found {image.format}")
        self._image = image

    def total_frames(self) -> Optional[int]:
        """The frame count of a GIF is not known up front."""
        return None

    def collect(self, dest: Collector) -> None:
        """Add every frame with timestamps scaled by the speed factor."""
        scale = 1.0 / (100.0 * self.speed)
        delay_ts = 0
        try:
            for index, frame in enumerate(ImageSequence.Iterator(self._image)):
                rgba = frame.convert("RGBA")
                width, height = rgba.size
                pixels = Image.from_rgba_bytes(width, height, rgba.tobytes())
                dest.add_frame_rgba(index, pixels, delay_ts * scale)
                # Delays in the file are in hundredths of a second.
                delay_ts += round(frame.info.get("duration", 0) / 10)
        finally:
            self._image.close()