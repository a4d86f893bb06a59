from __future__ import annotations


class EmptyWatchlistError(ValueError):
    """Raised when a briefing is requested for an empty symbol list."""


class BriefingGenerationError(RuntimeError):
    """Any failure to produce a complete briefing: service, transport, JSON or schema."""
