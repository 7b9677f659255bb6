"""Environment-driven engine configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from paged_selection.selection.markers import DEFAULT_MARKER_BASE, MarkerCodec

from .telemetry import env

DEFAULT_API_URL = "https://api.artic.edu/api/v1/artworks"
DEFAULT_PAGE_SIZE = 12
DEFAULT_REQUEST_TIMEOUT = 10.0


def _env_int(name: str, fallback: int) -> int:
    value = env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_float(name: str, fallback: float) -> float:
    value = env(name)
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings shared by the fetcher, loader and selection store."""

    api_url: str = DEFAULT_API_URL
    page_size: int = DEFAULT_PAGE_SIZE
    marker_base: int = DEFAULT_MARKER_BASE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    start_page: int = 1

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            api_url=env("API_URL") or DEFAULT_API_URL,
            page_size=_env_int("PAGE_SIZE", DEFAULT_PAGE_SIZE),
            marker_base=_env_int("MARKER_BASE", DEFAULT_MARKER_BASE),
            request_timeout=_env_float("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            start_page=_env_int("START_PAGE", 1),
        )

    def with_overrides(
        self,
        *,
        api_url: Optional[str] = None,
        page_size: Optional[int] = None,
        marker_base: Optional[int] = None,
        start_page: Optional[int] = None,
    ) -> "EngineConfig":
        changes = {
            key: value
            for key, value in {
                "api_url": api_url,
                "page_size": page_size,
                "marker_base": marker_base,
                "start_page": start_page,
            }.items()
            if value is not None
        }
        return replace(self, **changes)

    def validate(self) -> "EngineConfig":
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.start_page <= 0:
            raise ValueError(f"start_page must be positive, got {self.start_page}")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        MarkerCodec(self.marker_base).ensure_capacity(self.page_size)
        return self


__all__ = ["EngineConfig", "DEFAULT_API_URL", "DEFAULT_PAGE_SIZE"]
