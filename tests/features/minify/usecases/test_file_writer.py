"""
Summary: Tests for the change-aware ``.min`` writer.
Why: Repeated builds must not rewrite identical files nor skip notifications.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from conftest import EventRecorder

from bundleminifier.features.minify import (
    EventBus,
    MinFileWriter,
    MinificationResult,
    MinifyEvent,
)
from bundleminifier.shared.bundle import Bundle


def _result(bundle: Bundle, content: str) -> MinificationResult:
    return MinificationResult(file_name=bundle.absolute_output_file(), minified_content=content)


def test_write_creates_directories_and_trims_content(
    tmp_path: Path,
    events: EventBus,
    recorder: EventRecorder,
    make_bundle: Callable[..., Bundle],
) -> None:
    bundle = make_bundle("dist/css/site.css", ".a{}")
    result = _result(bundle, "  a{color:red}\n")

    MinFileWriter(events).write(bundle, result)

    min_file = tmp_path / "dist" / "css" / "site.min.css"
    assert min_file.read_bytes() == b"a{color:red}"
    assert result.changed is True
    assert result.written_file == min_file
    assert result.minified_content == "a{color:red}"
    assert recorder.names == [MinifyEvent.BEFORE_WRITE, MinifyEvent.AFTER_WRITE]

    after = recorder.of(MinifyEvent.AFTER_WRITE)[0]
    assert after.source_file == bundle.absolute_output_file()
    assert after.destination_file == min_file
    assert after.bundle is bundle
    assert after.changed is True


def test_unchanged_content_only_fires_before_write(
    tmp_path: Path,
    events: EventBus,
    recorder: EventRecorder,
    make_bundle: Callable[..., Bundle],
) -> None:
    bundle = make_bundle("site.css", ".a{}")
    min_file = tmp_path / "site.min.css"
    _ = min_file.write_text("a{color:red}", encoding="utf-8")
    stamp = min_file.stat().st_mtime_ns

    result = _result(bundle, "a{color:red}")
    MinFileWriter(events).write(bundle, result)

    assert result.changed is False
    assert min_file.stat().st_mtime_ns == stamp
    assert recorder.names == [MinifyEvent.BEFORE_WRITE]
    assert recorder.of(MinifyEvent.BEFORE_WRITE)[0].changed is False


def test_unchanged_content_does_not_create_directories(
    tmp_path: Path,
    events: EventBus,
    make_bundle: Callable[..., Bundle],
) -> None:
    bundle = make_bundle("already.min.css", ".a{}")
    _ = (tmp_path / "already.min.css").write_text("a{}", encoding="utf-8")

    MinFileWriter(events).write(bundle, _result(bundle, "a{}"))

    assert sorted(path.name for path in tmp_path.iterdir()) == ["already.min.css"]


def test_written_file_has_no_byte_order_mark(
    tmp_path: Path,
    events: EventBus,
    make_bundle: Callable[..., Bundle],
) -> None:
    bundle = make_bundle("page.html", "<p>é</p>")

    MinFileWriter(events).write(bundle, _result(bundle, "<p>é</p>"))

    assert (tmp_path / "page.min.html").read_bytes() == "<p>é</p>".encode("utf-8")
