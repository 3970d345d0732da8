import io

import pytest

from skigif.progress import NoProgress, ProgressBar, ProgressReporter


def test_no_progress_never_aborts():
    reporter = NoProgress()
    assert all(reporter.increase() for _ in range(5))


def test_reporter_is_abstract():
    with pytest.raises(TypeError):
        ProgressReporter()


def test_increase_counts_frames_and_continues():
    bar = ProgressBar(10, io.StringIO())
    assert bar.increase() is True
    assert bar.increase() is True
    assert bar.frames == 2
    assert bar.bar_total == 10


def test_unknown_total_grows():
    bar = ProgressBar(None, io.StringIO())
    bar.increase()
    assert bar.bar_total == 100
    for _ in range(59):
        bar.increase()
    assert bar.bar_total == bar.frames + 50


def test_no_estimate_before_enough_frames():
    bar = ProgressBar(None, io.StringIO())
    for _ in range(10):
        bar.increase()
    bar.written_bytes(50_000)
    assert bar.message == "Frame "
    assert bar.previous_estimate == 0


def test_estimate_in_kilobytes():
    bar = ProgressBar(None, io.StringIO())
    for _ in range(11):
        bar.increase()
    bar.written_bytes(1_100)
    assert bar.message.endswith("KB GIF; Frame ")
    assert bar.displayed_estimate == bar.previous_estimate


def test_estimate_in_megabytes():
    bar = ProgressBar(None, io.StringIO())
    for _ in range(11):
        bar.increase()
    bar.written_bytes(220_000)
    assert bar.message.endswith("MB GIF; Frame ")
    assert bar.previous_estimate > 1_000_000


def test_smaller_estimate_is_averaged():
    bar = ProgressBar(None, io.StringIO())
    for _ in range(11):
        bar.increase()
    bar.written_bytes(11_000)
    first = bar.previous_estimate
    bar.written_bytes(1_100)
    second = bar.previous_estimate
    smaller = 1_100 * bar.bar_total // bar.frames
    assert smaller < second < first


def test_done_prints_message():
    stream = io.StringIO()
    bar = ProgressBar(3, stream)
    for _ in range(3):
        bar.increase()
    bar.done("gifski created out.gif")
    assert stream.getvalue().endswith("gifski created out.gif\n")
    assert "3 / 3" in stream.getvalue()