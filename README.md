# skigif

`skigif` gathers the frames of an animation from several kinds of input and
delivers them, each with its frame index and presentation timestamp, through
a thread-safe queue for a GIF encoder to consume.

Supported inputs:

- a sequence of PNG files (`skigif.png_source.PngSequence`), at a fixed frame
  rate or with per-file delays in milliseconds;
- an existing GIF (`skigif.gif_source.GifSource`, decoded with Pillow), whose
  frame delays are kept and optionally sped up;
- a YUV4MPEG2 video (`skigif.y4m_source.Y4MSource`), resampled to the
  requested frame rate and converted from YUV to RGBA.

## Installation

```
pip install .
```

Pillow is the only runtime dependency. Tests run with `pip install .[test]`
and `pytest`.

## Collecting frames

Every input is a `skigif.source.Source`. A source reports how many frames it
expects with `total_frames()` (`None` when unknown) and pushes its frames into
a `skigif.collector.Collector` with `collect(dest)`. The collector is a bounded
queue: producers add frames from one thread and block while it is full, while
the consumer iterates `frames()` on another thread until the collector is
closed and drained.

```python
import threading

from skigif.collector import Collector
from skigif.png_source import PngSequence
from skigif.source import Fps

paths = ["frame1.png", "frame2.png", "frame3.png"]
source = PngSequence(paths, Fps(fps=20.0, speed=1.0), None)
collector = Collector(4)


def produce():
    try:
        source.collect(collector)
    finally:
        collector.close()


threading.Thread(target=produce).start()
for frame in collector.frames():
    print(frame.frame_index, frame.presentation_timestamp)
```

Each queued `InputFrame` holds one of three frame kinds:

- `Pixels` — a decoded `Image` (width, height and RGBA pixel tuples; see
  `Image.from_rgba_bytes` and `Image.to_rgba_bytes`), added with
  `add_frame_rgba`;
- `PngData` — in-memory PNG bytes, added with `add_frame_png_data`;
- `PngPath` — the path of a PNG file, added with `add_frame_png_file`.

Adding a frame after `close()` raises `CollectorClosed`. The collector is
also a context manager that closes itself on exit.

### Sources in detail

- `PngSequence(frames, fps, delays)` queues each file as a `PngPath`. The
  default frame duration is `1 / (fps.fps * fps.speed)`; an entry of `delays`
  that is not `None` replaces the duration of that frame, in milliseconds.
- `GifSource(src, fps)` accepts a path or binary stream and raises
  `ValueError` if it is not a GIF. Frames are composited to full RGBA images;
  timestamps are the accumulated GIF delays divided by `fps.speed`.
- `Y4MSource(src, fps, in_color_space)` accepts a path or binary stream and
  raises `Y4MError` for truncated, invalid or unsupported input. 4:2:0, 4:2:2,
  4:4:4 and monochrome 8-bit streams are converted; high-bit-depth streams are
  rejected. Frames are dropped to match `fps.fps`, and timestamps are divided
  by `fps.speed`. When reading from a file, `total_frames()` estimates the
  count from the file size. Without `in_color_space`, BT.601 is used up to
  720×480 and BT.709 above; a `COLORRANGE=FULL` header selects full range.

`skigif.yuv.RGBConvert(color_range, matrix)` performs the conversion of one
`(y, u, v)` sample triple with `to_rgb`, for the `MatrixCoefficients`
IDENTITY, BT709, FCC, BT470BG, BT601, SMPTE240 and YCGCO, in `ColorRange`
LIMITED or FULL.

## Interpreting user input

`skigif.inputs` holds helpers for command-line style arguments:

```python
from skigif.inputs import (
    extract_delay_from_filename,
    natural_sort_key,
    parse_colors,
)

sorted(["f10.png", "f2.png", "f1.png"], key=natural_sort_key)
# ['f1.png', 'f2.png', 'f10.png']

extract_delay_from_filename("frame(1500).png")   # 1500
extract_delay_from_filename("frame.png")         # None

parse_colors("#123456 78abCD")                   # [(18, 52, 86), (120, 171, 205)]
```

- `parse_color` / `parse_colors` read 6-digit hex colours (optional `#`,
  several separated by spaces or commas) and raise `ValueError` otherwise.
- `parse_color_space` maps `bt709`, `fcc`, `bt470bg`, `bt601`, `smpte240`
  and `ycgco` to a `MatrixCoefficients` value.
- `extract_delays_from_filenames` pairs each name with its delay and reports
  whether any name carried one.
- `detect_file_type` returns a `FileType` (PNG, GIF, JPEG, Y4M or OTHER) from
  the extension or the first four bytes; streams are inspected without being
  consumed.
- `check_if_paths_exist` raises `FileNotFoundError` (or `OSError`) with a
  helpful message for the first missing input; a lone `"-"` is accepted.
- `DestPath.from_arg("-")` stands for standard output; any other argument is
  a file path.

## Progress and status codes

`skigif.progress.ProgressBar(total, stream)` writes a frame counter and bar to
`stream` (standard output by default), redrawn at most every 0.25 s, and
shows an estimate of the final file size from `written_bytes`. `NoProgress`
reports nothing. Both implement `ProgressReporter`, whose `increase()`
returns `False` to ask for encoding to stop.

`skigif.errors.GifskiError` enumerates encoder status codes. `error_from_code`
and `error_from_errno` map integers and `errno` values to it, and
`error_to_exception` builds the matching `OSError`.

## What this package does not do

`skigif` prepares and delivers frames; it does not quantize colours or write
GIF files, and it provides no command-line program. PNG frames are queued
as paths or bytes and are not decoded here. Video formats other than
YUV4MPEG2 are not read.