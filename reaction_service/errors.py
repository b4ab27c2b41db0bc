"""Error types raised by the reaction store and aggregation queries.

Not-found outcomes are values (``None`` / ``False``), never exceptions.
"""

from __future__ import annotations


class ReactionError(Exception):
    """Base class for reaction service errors."""


class ReactionValidationError(ReactionError):
    """Raised when a required field is missing or fails its check."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        self.message = message or f"{field} is invalid"
        super().__init__(self.message)


class ServerError(ReactionError):
    """Raised when an operation is refused because of how it was called."""


class PreconditionError(ServerError):
    """Raised when a single-row lookup is requested without any filter."""

    def __init__(self, message: str = "Filter is required.") -> None:
        super().__init__(message)


class StoreUnavailableError(ReactionError):
    """Raised when the underlying database is unreachable or erroring."""
