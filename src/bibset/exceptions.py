"""Custom exception types for bibset operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import File


class BibsetError(Exception):
    """Base exception for all bibset operations."""


class ParseError(BibsetError):
    """Raised when the input does not follow the record grammar.

    Parsing stops at the first error. ``partial`` holds the records that were
    closed before the offending line.
    """

    def __init__(self, line: int, message: str, partial: File | None = None) -> None:
        super().__init__(f"parsing error at {line}: {message}")
        self.line = line
        self.message = message
        self.partial = partial


class ProcessingError(BibsetError):
    """Raised when processing operations fail."""


class EmptyInputError(ProcessingError):
    """Raised when an operation is given no records to work on."""


class NoCommonRecordsError(ProcessingError):
    """Raised when an intersection finds no duplicate sets."""


class UnsupportedOperationError(ProcessingError):
    """Raised for unknown set actions or sort specifications."""


class ConfigError(BibsetError):
    """Raised when a configuration file fails validation."""
