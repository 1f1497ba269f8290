"""
Validation Report — JSON summary across several documents.

One DocumentReport per validated input plus run-wide totals. A document
that could not be read still gets an entry, with status ``error`` and a
message instead of diagnostics.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import BaseModel, Field

from htmlval import __version__
from htmlval.ir.enums import ValidationStatus
from htmlval.ir.schema import Diagnostic, ValidationResult


REPORT_VERSION = "1.0"


class DocumentStatus(str, Enum):
    """Outcome of one document in a report."""

    SUCCESS = "success"    # No errors
    FAILED = "failed"      # At least one error
    ERROR = "error"        # Could not be read or could not be checked


# ============================================================================
# Report Models
# ============================================================================

class DocumentReport(BaseModel):
    """The result for a single input document."""

    source: str = Field(..., description="File path, '-' for stdin, or a label")
    status: DocumentStatus
    timestamp: datetime = Field(default_factory=datetime.now)

    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0

    message: Optional[str] = Field(None, description="Why the document could not be checked")

    @property
    def unreadable(self) -> bool:
        """True when the input never reached the validator."""
        return self.status == DocumentStatus.ERROR and not self.errors


class ValidationReport(BaseModel):
    """Totals and per-document results for one CLI or API run."""

    version: str = REPORT_VERSION
    generator: str = f"htmlval {__version__}"
    generated_at: datetime = Field(default_factory=datetime.now)

    total_documents: int = 0
    passed_documents: int = 0
    failed_documents: int = 0
    total_errors: int = 0
    total_warnings: int = 0

    results: list[DocumentReport] = Field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return self.failed_documents == 0

    def summary(self) -> str:
        return (
            f"{self.total_documents} document(s): {self.passed_documents} passed, "
            f"{self.failed_documents} failed, {self.total_errors} error(s), "
            f"{self.total_warnings} warning(s)"
        )


# ============================================================================
# Builders
# ============================================================================

def document_report(
    result: ValidationResult,
    source: Optional[str] = None,
    warnings_as_errors: bool = False,
) -> DocumentReport:
    """
    Summarize one ValidationResult.

    With ``warnings_as_errors`` a document that only has warnings is
    reported as failed. A run that ended in parse-error is reported as
    ``error`` and carries the parse-error message.
    """
    failed = bool(result.errors) or (warnings_as_errors and bool(result.warnings))
    message = None
    if result.status == ValidationStatus.ERROR:
        status = DocumentStatus.ERROR
        message = result.errors[-1].message
    elif failed:
        status = DocumentStatus.FAILED
    else:
        status = DocumentStatus.SUCCESS

    return DocumentReport(
        source=source or result.source or "<input>",
        status=status,
        timestamp=result.timestamp,
        errors=list(result.errors),
        warnings=list(result.warnings),
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        message=message,
    )


def unreadable_document(source: str, message: str) -> DocumentReport:
    """Entry for an input that never reached the validator."""
    return DocumentReport(source=source, status=DocumentStatus.ERROR, message=message)


def build_report(documents: Iterable[DocumentReport]) -> ValidationReport:
    """Collect document entries and compute the totals."""
    report = ValidationReport()
    for doc in documents:
        report.results.append(doc)
        report.total_errors += doc.error_count
        report.total_warnings += doc.warning_count
        if doc.status == DocumentStatus.SUCCESS:
            report.passed_documents += 1
        else:
            report.failed_documents += 1
    report.total_documents = len(report.results)
    return report


# ============================================================================
# Serialization
# ============================================================================

def to_json(report: ValidationReport, indent: int = 2) -> str:
    """Serialize a report; unset optional diagnostic fields are left out."""
    return report.model_dump_json(indent=indent, exclude_none=True)


def from_json(json_str: str) -> ValidationReport:
    return ValidationReport.model_validate_json(json_str)


def save(report: ValidationReport, path: Union[str, Path]) -> Path:
    """
    Write a report as JSON.

    A ``.json`` suffix is added when the path has none. Returns the path
    actually written.
    """
    path = Path(path)
    if path.suffix != ".json":
        path = path.with_name(path.name + ".json")
    path.write_text(to_json(report), encoding="utf-8")
    return path


def load(path: Union[str, Path]) -> ValidationReport:
    return from_json(Path(path).read_text(encoding="utf-8"))
