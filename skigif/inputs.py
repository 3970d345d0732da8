"""Interpreting command-line inputs: colours, file names, file types, paths."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

from .yuv import MatrixCoefficients

__all__ = [
    "FileType",
    "DestPath",
    "parse_color",
    "parse_colors",
    "parse_color_space",
    "natural_sort_key",
    "extract_delay_from_filename",
    "extract_delays_from_filenames",
    "detect_file_type",
    "check_if_paths_exist",
]

RGB = Tuple[int, int, int]

_HEX_BYTE = re.compile(r"\+?[0-9A-Fa-f]{1,2}")
_DELAY = re.compile(r"\+?[0-9]+")
_DIGITS = re.compile(r"(\d+)")
_U32_MAX = 0xFFFF_FFFF
_ASCII_WHITESPACE = " \t\n\x0c\r"

_COLOR_SPACES = {
    "bt709": MatrixCoefficients.BT709,
    "fcc": MatrixCoefficients.FCC,
    "bt470bg": MatrixCoefficients.BT470BG,
    "bt601": MatrixCoefficients.BT601,
    "smpte240": MatrixCoefficients.SMPTE240,
    "ycgco": MatrixCoefficients.YCGCO,
}


class FileType(Enum):
    """Kinds of input recognised by extension or magic bytes."""

    PNG = "png"
    GIF = "gif"
    JPEG = "jpeg"
    Y4M = "y4m"
    OTHER = "other"


@dataclass(frozen=True)
class DestPath:
    """Output destination: a file path, or standard output when ``path`` is ``None``."""

    path: Optional[str] = None

    @classmethod
    def from_arg(cls, path: Union[str, PathLike]) -> "DestPath":
        """Interpret an output argument; ``"-"`` means standard output."""
        text = os.fspath(path)
        if text == "-":
            return cls(None)
        return cls(text)

    @property
    def is_stdout(self) -> bool:
        return self.path is None

    def __str__(self) -> str:
        if self.path is None:
            return "stdout"
        try:
            return str(Path(self.path).resolve(strict=True))
        except (OSError, RuntimeError):
            return self.path


def parse_color(text: str) -> RGB:
    """Parse a colour written as 6 hex digits, optionally prefixed with ``#``."""
    c = text.strip(_ASCII_WHITESPACE)
    if c.startswith("#"):
        c = c[1:]
    if len(c.encode("utf-8")) != 6:
        raise ValueError(f"color must be 6-char hex format, not '{c}'")
    channels = []
    for start in (0, 2, 4):
        pair = c[start:start + 2]
        if not _HEX_BYTE.fullmatch(pair):
            raise ValueError(f"invalid digit found in string '{pair}'")
        channels.append(int(pair, 16))
    r, g, b = channels
    return (r, g, b)


def parse_colors(text: str) -> List[RGB]:
    """Parse colours separated by spaces and/or commas."""
    return [parse_color(part) for part in re.split(r"[ ,]", text) if part]


def parse_color_space(value: str) -> MatrixCoefficients:
    """Look up a YUV colour matrix by name, case-insensitively."""
    matrix = _COLOR_SPACES.get(value.lower().strip())
    if matrix is None:
        raise ValueError("unsupported color space")
    return matrix


def natural_sort_key(text: str):
    """Sort key that orders runs of digits by their numeric value."""
    parts = tuple(
        int(piece) if position % 2 else piece
        for position, piece in enumerate(_DIGITS.split(text))
    )
    return (parts, text)


def extract_delay_from_filename(filename: str) -> Optional[int]:
    """Return the delay in milliseconds written as ``name(delay).ext``, if any."""
    stem = Path(filename).stem
    start = stem.rfind("(")
    if start < 0:
        return None
    end = stem.find(")", start)
    if end < 0:
        return None
    delay = stem[start + 1:end]
    if not _DELAY.fullmatch(delay):
        return None
    value = int(delay)
    return value if value <= _U32_MAX else None


def extract_delays_from_filenames(
    frames: Sequence[str],
) -> Tuple[List[Tuple[str, Optional[int]]], bool]:
    """Pair each file name with its custom delay; also report whether any had one."""
    pairs = [(name, extract_delay_from_filename(name)) for name in frames]
    return pairs, any(delay is not None for _, delay in pairs)


def _peek(stream: BinaryIO, size: int) -> bytes:
    peek = getattr(stream, "peek", None)
    if peek is not None:
        return peek(size)[:size]
    if stream.seekable():
        position = stream.tell()
        data = stream.read(size)
        stream.seek(position)
        return data
    raise ValueError("stream must support peek or seek")


def detect_file_type(src: Union[str, PathLike, BinaryIO]) -> FileType:
    """Identify the input by its extension or its first four bytes.

    Streams are inspected without consuming any data. Files shorter than
    four bytes raise ``EOFError``.
    """
    if hasattr(src, "read"):
        head = _peek(src, 4).ljust(4, b"\0")  # type: ignore[arg-type]
    else:
        path = Path(src)
        extension = path.suffix[1:].lower()
        if extension == "y4m":
            return FileType.Y4M
        if extension == "png":
            return FileType.PNG
        with open(path, "rb") as file:
            head = file.read(4)
        if len(head) < 4:
            raise EOFError(f"{os.fspath(src)} is too short to identify")

    if head == b"\x89PNG":
        return FileType.PNG
    if head == b"GIF8":
        return FileType.GIF
    if head == b"YUV4":
        return FileType.Y4M
    if head[:2] == b"\xff\xd8":
        return FileType.JPEG
    return FileType.OTHER


def _try_exists(path: str) -> bool:
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except NotADirectoryError:
        return False
    return True


def check_if_paths_exist(paths: Sequence[Union[str, PathLike]]) -> None:
    """Raise with a helpful message for the first input that does not exist.

    A single ``"-"`` (standard input) is accepted.
    """
    texts = [os.fspath(p) for p in paths]
    for text in texts:
        if text == "-" and len(texts) == 1:
            break
        missing = False
        try:
            if _try_exists(text):
                continue
            missing = True
            msg = f'Unable to find the input file: "{text}"'
        except OSError as err:
            msg = f'Unable to access the input file "{text}": {err}'

        parent = os.path.dirname(text)
        if parent and missing:
            if len(msg) > 80:
                msg += "\n"
            msg += f' (directory "{parent}" doesn\'t exist either)'

        if any(ch in text for ch in "*?["):
            msg += "\nThe wildcard pattern did not match any files."
        elif not os.path.isabs(text):
            msg += f' (searched in "{os.getcwd()}")'

        if Path(text).suffix == ".gif":
            msg = (
                f'\nDid you mean to use -o "{text}" to specify it as the '
                "output file instead?"
            )
        if missing:
            raise FileNotFoundError(msg)
        raise OSError(msg)