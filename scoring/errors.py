"""
Scoring errors

Structural problems with the input abort the pipeline and reach the caller.
Table misses are never errors: unknown ingredients only raise a warning.
"""

from typing import Optional


class ScoringError(Exception):
    """Base class for every error raised by the scoring engine."""


class ValidationError(ScoringError):
    """Product input cannot be analysed. Never retried."""

    def __init__(self, field: str, reason: str, hint: Optional[str] = None):
        self.field = field
        self.reason = reason
        self.hint = hint
        message = f"{field}: {reason}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"field": self.field, "reason": self.reason, "hint": self.hint}


class EnrichmentTimeoutError(ScoringError):
    """The narrative service did not answer in time. Internal only."""


class TableLoadError(ScoringError):
    """A static lookup table file is missing or does not match its schema."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Cannot load table {path}: {reason}")


class UnknownIngredientWarning(UserWarning):
    """Some ingredients matched no table and were left unclassified."""
