from __future__ import annotations

import pytest

from paged_selection.runtime.config import DEFAULT_API_URL, EngineConfig
from paged_selection.selection import MarkerCollisionError


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAGED_SELECTION_API_URL", "https://records.test/items")
    monkeypatch.setenv("PAGED_SELECTION_PAGE_SIZE", "25")
    monkeypatch.setenv("PAGED_SELECTION_MARKER_BASE", "1000")
    monkeypatch.setenv("PAGED_SELECTION_START_PAGE", "3")

    config = EngineConfig.from_env()

    assert config.api_url == "https://records.test/items"
    assert config.page_size == 25
    assert config.marker_base == 1000
    assert config.start_page == 3


def test_from_env_falls_back_on_bad_integers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PAGED_SELECTION_API_URL", raising=False)
    monkeypatch.setenv("PAGED_SELECTION_PAGE_SIZE", "twelve")

    config = EngineConfig.from_env()

    assert config.page_size == 12
    assert config.api_url == DEFAULT_API_URL


def test_overrides_only_replace_given_values() -> None:
    config = EngineConfig().with_overrides(page_size=50, api_url=None)

    assert config.page_size == 50
    assert config.api_url == DEFAULT_API_URL


def test_validate_rejects_bad_settings() -> None:
    with pytest.raises(MarkerCollisionError):
        EngineConfig(page_size=100, marker_base=100).validate()
    with pytest.raises(ValueError):
        EngineConfig(page_size=0).validate()
    with pytest.raises(ValueError):
        EngineConfig(start_page=0).validate()
