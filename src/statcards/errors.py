"""Exception types raised by the aggregation and cache layers."""

from __future__ import annotations

RATE_LIMIT_STATUSES = frozenset({403, 429})


class StatCardsError(Exception):
    """Base exception for all statcards errors."""


class UpstreamError(StatCardsError):
    """Raised when a call to the GitHub API fails.

    ``status`` is the HTTP status of the failed response, or a synthetic
    gateway status (502 for transport errors, 504 for timeouts).
    ``operation`` names the aggregation step that failed, when known.
    """

    def __init__(
        self, status: int, message: str, operation: str | None = None
    ) -> None:
        self.status = status
        self.message = message
        self.operation = operation
        super().__init__(f"GitHub API returned {status}: {message}")

    @property
    def is_rate_limited(self) -> bool:
        return self.status in RATE_LIMIT_STATUSES

    def tagged(self, operation: str) -> UpstreamError:
        """Return a copy of this error attributed to ``operation``."""
        return UpstreamError(self.status, self.message, operation=operation)


class ValidationError(StatCardsError):
    """Raised for malformed card requests before any upstream access."""
