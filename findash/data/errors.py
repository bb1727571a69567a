"""
Ingestion error taxonomy. Every error is fatal to the current operation;
row-level problems never raise (see ``normalize.normalize_row``).
"""
from __future__ import annotations


class IngestionError(Exception):
    """Base class — ``message`` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnsupportedFileTypeError(IngestionError):
    """Extension / MIME type is not a recognized spreadsheet format."""


class UnreadableFileError(IngestionError):
    """The bytes could not be decoded into a worksheet."""


class EmptySheetError(IngestionError):
    """Fewer than two rows — a header and at least one data row are required."""


class NoValidTransactionsError(IngestionError):
    """Every data row was rejected during normalization."""
