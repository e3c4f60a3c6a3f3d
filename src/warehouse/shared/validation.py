"""Validation results returned as data.

Business-rule checks never raise; they return a list of
``ValidationError`` values. An empty list means the check passed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """A single broken rule and the field it concerns."""

    message: str
    field: str

    def __str__(self) -> str:
        return self.message


def join_messages(errors: list[ValidationError]) -> str:
    return "; ".join(error.message for error in errors)
