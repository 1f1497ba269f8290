"""Output formatters for HTMLVal."""

from htmlval.output.report import (
    DocumentReport,
    DocumentStatus,
    ValidationReport,
    build_report,
    document_report,
    unreadable_document,
)

__all__ = [
    "DocumentReport",
    "DocumentStatus",
    "ValidationReport",
    "build_report",
    "document_report",
    "unreadable_document",
]
