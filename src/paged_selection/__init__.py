"""UI-agnostic selection engine for remotely paginated record sets."""

__all__ = [
    "adapters",
    "events",
    "records",
    "runtime",
    "selection",
    "session",
]

__version__ = "0.1.0"
