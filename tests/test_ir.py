"""
Tests for the diagnostic and result models.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from htmlval.ir.enums import RULE_SEVERITY, RuleId, Severity, ValidationStatus
from htmlval.ir.schema import Diagnostic, ValidationResult


class TestRuleVocabulary:
    def test_every_rule_has_a_severity(self):
        assert set(RULE_SEVERITY) == set(RuleId)

    def test_warning_rules(self):
        warnings = {rule.value for rule, sev in RULE_SEVERITY.items() if sev == Severity.WARNING}

        assert warnings == {
            "doctype-position",
            "html-lang",
            "charset-recommended",
            "deprecated-element",
            "input-type-recommended",
            "empty-attribute",
            "inline-event-handler",
            "charset-missing",
        }

    def test_rule_values_are_stable(self):
        assert RuleId.PARSE_ERROR.value == "parse-error"
        assert RuleId.VOID_ELEMENT_CONTENT.value == "void-element-content"
        assert len(RuleId) == 25


class TestDiagnostic:
    def test_for_rule_takes_severity_from_rule(self):
        diag = Diagnostic.for_rule(RuleId.EMPTY_ATTRIBUTE, "empty")

        assert diag.type == Severity.WARNING

    def test_severity_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            Diagnostic(type=Severity.WARNING, message="x", rule=RuleId.UNCLOSED_TAG)

    def test_extract_truncated(self):
        diag = Diagnostic.for_rule(RuleId.INVALID_ELEMENT, "x", extract="y" * 250)

        assert len(diag.extract) == 200

    def test_line_must_be_positive(self):
        with pytest.raises(ValidationError):
            Diagnostic.for_rule(RuleId.UNCLOSED_TAG, "x", line=0)

    def test_immutable(self):
        diag = Diagnostic.for_rule(RuleId.UNCLOSED_TAG, "x", line=3)

        with pytest.raises(ValidationError):
            diag.line = 4

    def test_wire_shape_omits_unset(self):
        diag = Diagnostic.for_rule(RuleId.DOCTYPE_REQUIRED, "missing", line=1)

        assert diag.to_wire() == {
            "type": "error",
            "message": "missing",
            "rule": "doctype-required",
            "line": 1,
        }

    def test_format(self):
        diag = Diagnostic.for_rule(RuleId.UNCLOSED_TAG, "left open", line=7, column=2)

        assert diag.format("page.html") == "page.html:7:2: error [unclosed-tag] left open"

    def test_format_without_position(self):
        """Positions the parser did not report are left out of the line."""
        line_only = Diagnostic.for_rule(RuleId.UNCLOSED_TAG, "left open", line=3)
        nowhere = Diagnostic.for_rule(RuleId.INVALID_ELEMENT, "bad")

        assert line_only.format("page.html") == "page.html:3: error [unclosed-tag] left open"
        assert nowhere.format("page.html") == "page.html: error [invalid-element] bad"


class TestValidationResult:
    def _result(self, **kwargs):
        return ValidationResult(request_id="r1", timestamp=datetime.now(), **kwargs)

    def test_valid_with_warnings(self):
        result = self._result(warnings=[Diagnostic.for_rule(RuleId.HTML_LANG, "lang")])

        assert result.is_valid
        assert result.summary() == "Validation PASSED - No errors found, 1 warning(s)"

    def test_invalid(self):
        result = self._result(
            status=ValidationStatus.INVALID,
            errors=[Diagnostic.for_rule(RuleId.BODY_REQUIRED, "no body")],
        )

        assert not result.is_valid
        assert result.rules() == ["body-required"]
        assert result.summary() == "Validation FAILED - 1 error(s), 0 warning(s)"

    def test_error_summary_uses_parse_error(self):
        result = self._result(
            status=ValidationStatus.ERROR,
            errors=[Diagnostic.for_rule(RuleId.PARSE_ERROR, "Parse error: boom")],
        )

        assert result.summary() == "Validation ERROR - Parse error: boom"

    def test_to_wire(self):
        result = self._result(warnings=[Diagnostic.for_rule(RuleId.CHARSET_MISSING, "no charset")])

        assert result.to_wire() == {
            "errors": [],
            "warnings": [{"type": "warning", "message": "no charset", "rule": "charset-missing"}],
        }
