"""Shared pytest fixtures for pipeline tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from bundleminifier.features.minify import EventBus, MinifyEvent, MinifyFileEvent
from bundleminifier.shared.bundle import Bundle


class EventRecorder:
    """Collect every notification emitted on a bus as ``(event, payload)`` pairs."""

    def __init__(self, events: EventBus) -> None:
        self.calls: list[tuple[MinifyEvent, MinifyFileEvent]] = []
        for event in MinifyEvent:
            events.subscribe(event, self._recorder(event))

    def _recorder(self, event: MinifyEvent) -> Callable[[MinifyFileEvent], None]:
        def _record(payload: MinifyFileEvent) -> None:
            self.calls.append((event, payload))

        return _record

    def of(self, event: MinifyEvent) -> list[MinifyFileEvent]:
        return [payload for recorded, payload in self.calls if recorded is event]

    @property
    def names(self) -> list[MinifyEvent]:
        return [event for event, _ in self.calls]


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(events: EventBus) -> EventRecorder:
    return EventRecorder(events)


@pytest.fixture
def make_bundle(tmp_path: Path) -> Callable[..., Bundle]:
    """Build bundles whose definition file lives in ``tmp_path``."""

    def _make(
        output_file_name: str,
        output: str | None = "",
        *,
        input_files: tuple[str, ...] = (),
        source_map: bool = False,
        **minify: Any,
    ) -> Bundle:
        return Bundle(
            file_name=tmp_path / "bundleconfig.json",
            output_file_name=output_file_name,
            input_files=input_files,
            output=output,
            minify=minify,
            source_map=source_map,
        )

    return _make


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import bundleminifier.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    return tmp_path


@pytest.fixture
def reset_config_singleton() -> Iterator[None]:
    """Reset the configuration singleton around a test run."""

    from bundleminifier.config.config import Config

    original_instance = Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    Config._instance = None  # pyright: ignore[reportPrivateUsage]
    Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    try:
        yield None
    finally:
        Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]
