"""Error taxonomy for the tourism data layer.

Low-level helpers (fetcher, envelope normalizer) raise the generic kinds.
Endpoint methods decide per endpoint whether a kind is fatal or a soft
empty result, so callers only ever see the classes below.
"""

from __future__ import annotations


class TourApiError(Exception):
    """Base class for every failure surfaced by the tour data layer."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code!r})"


class ConfigurationError(TourApiError):
    """Required credential or setting is missing. Never retried."""


class ClientError(TourApiError):
    """Upstream 4xx or invalid caller parameters. Never retried."""


class NotFoundError(ClientError):
    """The requested content does not exist (upstream 404 or no item)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, cause=cause)


class TransientError(TourApiError):
    """Upstream 5xx or network failure, raised once the retry budget is spent."""

    retryable = True

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message, status_code=status_code, cause=cause)
        self.attempts = attempts


class MissingDataError(TourApiError):
    """Envelope was well-formed but carried no ``items.item``."""


class AggregateExhaustionError(TourApiError):
    """Every branch of a fan-out failed."""
