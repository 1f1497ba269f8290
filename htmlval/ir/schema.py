"""
IR Schema — Pydantic models for diagnostics and validation results.

A diagnostic is immutable once created. Its identity is its position in
the sequence it was appended to.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from htmlval.ir.enums import RULE_SEVERITY, RuleId, Severity, ValidationStatus

RESULT_VERSION = "0.1.0"

# Upper bound on the markup fragment attached to a diagnostic
EXTRACT_LIMIT = 200


class Diagnostic(BaseModel):
    """A single error or warning."""

    model_config = ConfigDict(frozen=True)

    type: Severity = Field(..., description="error or warning; fixed by the rule")
    message: str = Field(..., description="Human-readable explanation")
    rule: RuleId = Field(..., description="Machine-readable rule identifier")
    line: Optional[int] = Field(None, ge=1, description="1-based source line")
    column: Optional[int] = Field(None, ge=1, description="1-based source column")
    extract: Optional[str] = Field(
        None,
        max_length=EXTRACT_LIMIT,
        description="Offending markup fragment",
    )

    @model_validator(mode="after")
    def _severity_matches_rule(self) -> "Diagnostic":
        expected = RULE_SEVERITY[self.rule]
        if self.type != expected:
            raise ValueError(
                f"rule '{self.rule.value}' is always a {expected.value}, not a {self.type.value}"
            )
        return self

    @classmethod
    def for_rule(
        cls,
        rule: RuleId,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        extract: Optional[str] = None,
    ) -> "Diagnostic":
        """Build a diagnostic, taking its severity from the rule."""
        if extract is not None:
            extract = extract[:EXTRACT_LIMIT]
        return cls(
            type=RULE_SEVERITY[rule],
            message=message,
            rule=rule,
            line=line,
            column=column,
            extract=extract,
        )

    def to_wire(self) -> dict[str, Any]:
        """Wire shape: unset optional fields are omitted."""
        return self.model_dump(mode="json", exclude_none=True)

    def format(self, source: str = "<input>") -> str:
        """One-line rendering in the usual ``path:line:col:`` style; unknown positions are left out."""
        location = source
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"{location}: {self.type.value} [{self.rule.value}] {self.message}"


class TraceEntry(BaseModel):
    """A single pass trace entry."""

    id: str
    timestamp: datetime
    pass_name: str
    action: str
    before: Optional[str] = None
    after: Optional[str] = None


class ValidationResult(BaseModel):
    """The complete output of one validation run."""

    version: str = Field(default=RESULT_VERSION, description="Result schema version")
    request_id: str = Field(..., description="Unique validation run ID")
    timestamp: datetime = Field(..., description="When the run started")
    processing_duration_ms: float = Field(default=0.0)
    source: Optional[str] = Field(None, description="File name or label of the input")

    status: ValidationStatus = Field(default=ValidationStatus.VALID)
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)

    trace: list[TraceEntry] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def rules(self) -> list[str]:
        """Rule identifiers of all diagnostics, errors first."""
        return [d.rule.value for d in self.errors + self.warnings]

    def to_wire(self) -> dict[str, list[dict[str, Any]]]:
        """The ``{errors, warnings}`` pair in wire shape."""
        return {
            "errors": [d.to_wire() for d in self.errors],
            "warnings": [d.to_wire() for d in self.warnings],
        }

    def summary(self) -> str:
        """Short text summary of the run."""
        if self.status == ValidationStatus.ERROR:
            return f"Validation ERROR - {self.errors[-1].message}"
        if self.is_valid:
            return f"Validation PASSED - No errors found, {len(self.warnings)} warning(s)"
        return f"Validation FAILED - {len(self.errors)} error(s), {len(self.warnings)} warning(s)"
