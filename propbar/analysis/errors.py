"""Usage errors raised by the proportion statistic and chart builders."""

from __future__ import annotations


class PropUsageError(ValueError):
    """Base class for invalid aesthetics or data passed by the caller."""


class StatPropError(PropUsageError):
    """Raised when the proportion statistic receives unsupported aesthetics.

    Covers a mapped `y` aesthetic (the value axis is always the computed count)
    and a `by` aesthetic holding free-form text instead of categories.
    """


class AestheticError(PropUsageError):
    """Raised when a required aesthetic is missing or references no column."""

    def __init__(self, message: str, *, aesthetic: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            aesthetic: Offending aesthetic name, when known.
        """

        super().__init__(message)
        self.aesthetic = aesthetic
