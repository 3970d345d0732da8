import pytest

from skigif.yuv import ColorRange, MatrixCoefficients, RGBConvert

NON_IDENTITY = [m for m in MatrixCoefficients if m is not MatrixCoefficients.IDENTITY]


def test_limited_black_and_white():
    conv = RGBConvert(ColorRange.LIMITED, MatrixCoefficients.BT709)
    assert conv.to_rgb(16, 128, 128) == (0, 0, 0)
    assert conv.to_rgb(235, 128, 128) == (255, 255, 255)


@pytest.mark.parametrize("matrix", NON_IDENTITY)
def test_full_range_grey_is_unchanged(matrix):
    conv = RGBConvert(ColorRange.FULL, matrix)
    for y in range(0, 256, 17):
        assert conv.to_rgb(y, 128, 128) == (y, y, y)


@pytest.mark.parametrize("matrix", NON_IDENTITY)
def test_limited_grey_has_equal_channels(matrix):
    conv = RGBConvert(ColorRange.LIMITED, matrix)
    for y in range(16, 236, 13):
        r, g, b = conv.to_rgb(y, 128, 128)
        assert r == g == b


def test_identity_full_maps_planes_to_gbr():
    conv = RGBConvert(ColorRange.FULL, MatrixCoefficients.IDENTITY)
    assert conv.to_rgb(10, 20, 30) == (30, 10, 20)


@pytest.mark.parametrize("matrix", list(MatrixCoefficients))
@pytest.mark.parametrize("color_range", list(ColorRange))
def test_output_is_clamped(matrix, color_range):
    conv = RGBConvert(color_range, matrix)
    for triple in [(0, 0, 0), (255, 255, 255), (0, 255, 0), (255, 0, 255)]:
        assert all(0 <= c <= 255 for c in conv.to_rgb(*triple))


def test_high_cr_is_red():
    conv = RGBConvert(ColorRange.FULL, MatrixCoefficients.BT709)
    r, g, b = conv.to_rgb(100, 128, 240)
    assert r > g
    assert r > b


def test_high_cb_is_blue():
    conv = RGBConvert(ColorRange.FULL, MatrixCoefficients.BT601)
    r, g, b = conv.to_rgb(100, 240, 128)
    assert b > r
    assert b > g


def test_luma_is_monotonic():
    conv = RGBConvert(ColorRange.LIMITED, MatrixCoefficients.BT601)
    greys = [conv.to_rgb(y, 128, 128)[0] for y in range(0, 256)]
    assert greys == sorted(greys)


def test_sample_out_of_range_rejected():
    conv = RGBConvert(ColorRange.FULL, MatrixCoefficients.BT601)
    with pytest.raises(ValueError):
        conv.to_rgb(256, 128, 128)
    with pytest.raises(ValueError):
        conv.to_rgb(0, -1, 128)


def test_unknown_matrix_rejected():
    with pytest.raises(ValueError):
        RGBConvert(ColorRange.FULL, 3)