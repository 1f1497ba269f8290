"""
ValidationContext — Per-run state passed between pipeline passes.

Each pass reads prior artifacts and mutates only its allowed fields.
The context is also the diagnostic aggregator: errors and warnings are
appended in the order the passes find them.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from htmlval.dom.tree import DocumentParseError, DocumentTree
from htmlval.ir.enums import RULE_SEVERITY, RuleId, Severity, ValidationStatus
from htmlval.ir.schema import Diagnostic, TraceEntry, ValidationResult
from htmlval.rules.loader import get_rules
from htmlval.rules.models import RuleTables


@dataclass
class ValidationRequest:
    """Input to the validation pipeline."""

    text: str
    request_id: Optional[str] = None
    # File name or label used in reports
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())


@dataclass
class ValidationContext:
    """
    Mutable context passed through pipeline passes.

    Each pass may read all fields but should only mutate
    the fields it is responsible for.
    """

    # Input
    request: ValidationRequest
    raw_text: str
    # Loaded by the engine before the first pass (ensure_rules)
    rules: Optional[RuleTables] = None

    # Raw text with comment/script/style interiors blanked (p10_tag_balance)
    neutralized_text: str = ""

    # Parsed document (p20_parse_tree)
    tree: Optional[DocumentTree] = None

    # id value -> number of elements carrying it (p40_elements)
    id_index: Counter = field(default_factory=Counter)

    # Diagnostics, in insertion order
    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    trace: list[TraceEntry] = field(default_factory=list)
    status: ValidationStatus = ValidationStatus.VALID

    start_time: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_request(
        cls,
        request: ValidationRequest,
        rules: Optional[RuleTables] = None,
    ) -> "ValidationContext":
        """Create a context from a request; rules left unset load on ensure_rules()."""
        return cls(
            request=request,
            raw_text=request.text,
            rules=rules,
        )

    def ensure_rules(self) -> RuleTables:
        """
        The rule tables for this run, loading the default ruleset if unset.

        Raises:
            FileNotFoundError: If the default ruleset is missing
            RulesetError: If the default ruleset is malformed
        """
        if self.rules is None:
            self.rules = get_rules()
        return self.rules

    def require_tree(self) -> DocumentTree:
        """The parsed document; raises if parsing never produced one."""
        if self.tree is None:
            raise DocumentParseError("document tree is not available")
        return self.tree

    def add_diagnostic(
        self,
        rule: RuleId,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        extract: Optional[str] = None,
    ) -> Diagnostic:
        """Record a diagnostic in the sequence its rule belongs to."""
        diagnostic = Diagnostic.for_rule(
            rule,
            message,
            line=line,
            column=column,
            extract=extract,
        )
        if RULE_SEVERITY[rule] == Severity.ERROR:
            self.errors.append(diagnostic)
        else:
            self.warnings.append(diagnostic)
        return diagnostic

    def rules_found(self) -> list[str]:
        """Rule identifiers recorded so far, errors then warnings."""
        return [d.rule.value for d in self.errors + self.warnings]

    def add_trace(self, pass_name: str, action: str, **kwargs: Any) -> None:
        """Add a trace entry."""
        self.trace.append(
            TraceEntry(
                id=str(uuid4()),
                timestamp=datetime.now(),
                pass_name=pass_name,
                action=action,
                before=kwargs.get("before"),
                after=kwargs.get("after"),
            )
        )

    def to_result(self) -> ValidationResult:
        """Convert context to the final ValidationResult."""
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        status = self.status
        if status != ValidationStatus.ERROR:
            status = ValidationStatus.INVALID if self.errors else ValidationStatus.VALID
        return ValidationResult(
            request_id=self.request.request_id or str(uuid4()),
            timestamp=self.start_time,
            processing_duration_ms=duration_ms,
            source=self.request.source,
            status=status,
            errors=list(self.errors),
            warnings=list(self.warnings),
            trace=self.trace,
        )
