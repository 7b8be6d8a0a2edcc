"""Failure values returned by lifecycle operations.

Expected failures are returned rather than raised, the same way the store
hands back an error message instead of throwing.  Callers check the result
with ``isinstance(result, Failure)``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Failure:
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationFailure(Failure):
    """Rejected input; nothing was written."""


@dataclass(frozen=True)
class NotFoundFailure(Failure):
    """The referenced mission or panel does not exist."""
