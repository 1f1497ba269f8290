"""
IR — Diagnostics and results

The result of a run is data: two ordered diagnostic sequences plus a
trace. Presentation is a rendering of that data.
"""

from htmlval.ir.enums import RULE_SEVERITY, RuleId, Severity, ValidationStatus
from htmlval.ir.schema import (
    EXTRACT_LIMIT,
    Diagnostic,
    TraceEntry,
    ValidationResult,
)

__all__ = [
    # Enums
    "RuleId",
    "Severity",
    "ValidationStatus",
    "RULE_SEVERITY",
    # Models
    "Diagnostic",
    "TraceEntry",
    "ValidationResult",
    "EXTRACT_LIMIT",
]
