from __future__ import annotations

from contextlib import contextmanager
from typing import Any, List, Tuple

import pytest

from paged_selection.runtime import telemetry


class RecordingLogger:
    def __init__(self) -> None:
        self.entries: List[Tuple[str, str, Any]] = []
        self.components: List[str] = []
        self.profiled: List[str] = []

    def info_with(self, message: str, pairs: Any) -> None:
        self.entries.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.entries.append(("error", message, dict(pairs)))

    @contextmanager
    def track_component(self, name: str):
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str):
        self.profiled.append(name)
        yield


@pytest.fixture
def recording(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    log = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: log)
    return log


def test_span_profiles_and_tracks_component(recording: RecordingLogger) -> None:
    with telemetry.span("store.bulk", component="SelectionStore") as handle:
        handle.add_metadata("count", 3)

    assert recording.profiled == ["store.bulk"]
    assert recording.components == ["SelectionStore"]
    assert recording.entries == []


def test_span_logs_failure_with_metadata_and_reraises(recording: RecordingLogger) -> None:
    with pytest.raises(KeyError):
        with telemetry.span("resolver.resolve", metadata={"page": 2}) as handle:
            handle.add_metadata("pending", 4)
            raise KeyError("gone")

    level, message, data = recording.entries[-1]
    assert level == "error"
    assert message == "event::span::fail"
    assert data["span"] == "resolver.resolve"
    assert data["page"] == "2" and data["pending"] == "4"
    assert recording.components == []


def test_record_event_attaches_payload(recording: RecordingLogger) -> None:
    telemetry.record_event("page_loader.stale", data={"page": 3})

    assert recording.entries == [
        ("info", "event::page_loader.stale", {"event": "page_loader.stale", "page": "3"})
    ]
