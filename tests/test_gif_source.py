import io

import pytest
from PIL import Image as PILImage

from skigif.collector import Collector, Pixels
from skigif.gif_source import GifSource
from skigif.source import Fps

COLORS = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]


def _gif_bytes(duration=100):
    images = [PILImage.new("RGB", (4, 3), c) for c in COLORS]
    buf = io.BytesIO()
    images[0].save(
        buf,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=duration,
        loop=0,
    )
    return buf.getvalue()


def _collect(source):
    collector = Collector(capacity=64)
    source.collect(collector)
    collector.close()
    return list(collector.frames())


def test_total_frames_unknown():
    assert GifSource(io.BytesIO(_gif_bytes()), Fps(20.0)).total_frames() is None


def test_frames_decoded_with_colors():
    frames = _collect(GifSource(io.BytesIO(_gif_bytes()), Fps(20.0)))
    assert [f.frame_index for f in frames] == [0, 1, 2]
    for frame, color in zip(frames, COLORS):
        assert isinstance(frame.frame, Pixels)
        image = frame.frame.image
        assert (image.width, image.height) == (4, 3)
        assert set(image.pixels) == {(*color, 255)}


def test_timestamps_from_delays():
    frames = _collect(GifSource(io.BytesIO(_gif_bytes(100)), Fps(20.0)))
    assert [f.presentation_timestamp for f in frames] == pytest.approx([0.0, 0.1, 0.2])


def test_speed_shortens_timestamps():
    normal = _collect(GifSource(io.BytesIO(_gif_bytes(100)), Fps(20.0, 1.0)))
    fast = _collect(GifSource(io.BytesIO(_gif_bytes(100)), Fps(20.0, 2.0)))
    for n, f in zip(normal, fast):
        assert f.presentation_timestamp == pytest.approx(n.presentation_timestamp / 2)


def test_reads_from_path(tmp_path):
    path = tmp_path / "anim.gif"
    path.write_bytes(_gif_bytes())
    frames = _collect(GifSource(path, Fps(20.0)))
    assert len(frames) == len(COLORS)


def test_png_input_rejected():
    buf = io.BytesIO()
    PILImage.new("RGB", (2, 2)).save(buf, format="PNG")
    buf.seek(0)
    with pytest.raises(ValueError):
        GifSource(buf, Fps(20.0))


def test_garbage_input_rejected():
    with pytest.raises(ValueError):
        GifSource(io.BytesIO(b"not an image at all"), Fps(20.0))