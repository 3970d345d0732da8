"""Conversion of Y'CbCr samples to RGB."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Tuple

__all__ = ["MatrixCoefficients", "ColorRange", "RGBConvert"]


class MatrixCoefficients(IntEnum):
    """Colour matrices, numbered as in ITU-T H.273."""

    IDENTITY = 0
    BT709 = 1
    FCC = 4
    BT470BG = 5
    BT601 = 6
    SMPTE240 = 7
    YCGCO = 8


class ColorRange(Enum):
    """Whether samples use the studio (limited) or the full 0-255 range."""

    LIMITED = "limited"
    FULL = "full"


# (Kr, Kb) luma weights of the red and blue primaries.
_WEIGHTS: dict[MatrixCoefficients, Tuple[float, float]] = {
    MatrixCoefficients.BT709: (0.2126, 0.0722),
    MatrixCoefficients.FCC: (0.30, 0.11),
    MatrixCoefficients.BT470BG: (0.299, 0.114),
    MatrixCoefficients.BT601: (0.299, 0.114),
    MatrixCoefficients.SMPTE240: (0.212, 0.087),
}


def _clamp(value: float) -> int:
    return max(0, min(255, int(round(value))))


class RGBConvert:
    """Converts 8-bit Y'CbCr triples to 8-bit RGB for a range and matrix."""

    def __init__(self, color_range: ColorRange, matrix: MatrixCoefficients) -> None:
        self.color_range = ColorRange(color_range)
        self.matrix = MatrixCoefficients(matrix)
        if self.color_range is ColorRange.LIMITED:
            self._luma_offset = 16.0
            self._luma_scale = 255.0 / 219.0
            self._chroma_scale = 255.0 / 224.0
        else:
            self._luma_offset = 0.0
            self._luma_scale = 1.0
            self._chroma_scale = 1.0

        weights = _WEIGHTS.get(self.matrix)
        if weights is not None:
            kr, kb = weights
            kg = 1.0 - kr - kb
            self._r_cr = 2.0 * (1.0 - kr)
            self._b_cb = 2.0 * (1.0 - kb)
            self._g_cb = 2.0 * kb * (1.0 - kb) / kg
            self._g_cr = 2.0 * kr * (1.0 - kr) / kg

    def _luma(self, sample: int) -> float:
        return (sample - self._luma_offset) * self._luma_scale

    def _chroma(self, sample: int) -> float:
        return (sample - 128) * self._chroma_scale

    def to_rgb(self, y: int, u: int, v: int) -> Tuple[int, int, int]:
        """Return the ``(r, g, b)`` colour of one sample triple."""
        for sample in (y, u, v):
            if not 0 <= sample <= 255:
                raise ValueError(f"sample {sample} is outside 0-255")

        if self.matrix is MatrixCoefficients.IDENTITY:
            # Planes carry G, B, R directly.
            return (_clamp(self._luma(v)), _clamp(self._luma(y)), _clamp(self._luma(u)))

        luma = self._luma(y)
        cb = self._chroma(u)
        cr = self._chroma(v)
        if self.matrix is MatrixCoefficients.YCGCO:
            t = luma - cb
            return (_clamp(t + cr), _clamp(luma + cb), _clamp(t - cr))

        r = luma + self._r_cr * cr
        g = luma - self._g_cb * cb - self._g_cr * cr
        b = luma + self._b_cb * cb
        return (_clamp(r), _clamp(g), _clamp(b))