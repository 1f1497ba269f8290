"""
IR Enums — Severities, rule identifiers and run status.

No stringly-typed rule names scattered across passes.
"""

from enum import Enum


class Severity(str, Enum):
    """Which of the two result sequences a diagnostic lands in."""

    ERROR = "error"
    WARNING = "warning"


class RuleId(str, Enum):
    """
    The closed vocabulary of rule identifiers.

    Every diagnostic names exactly one of these. The value is the stable,
    machine-readable string used for filtering and in reports.
    """

    # Catastrophic
    PARSE_ERROR = "parse-error"

    # Raw-text document checks
    DOCTYPE_REQUIRED = "doctype-required"
    DOCTYPE_POSITION = "doctype-position"

    # Tag balance
    UNMATCHED_CLOSING_TAG = "unmatched-closing-tag"
    UNCLOSED_TAG = "unclosed-tag"

    # Document skeleton
    ROOT_ELEMENT = "root-element"
    HTML_LANG = "html-lang"
    HEAD_REQUIRED = "head-required"
    TITLE_REQUIRED = "title-required"
    TITLE_EMPTY = "title-empty"
    CHARSET_RECOMMENDED = "charset-recommended"
    BODY_REQUIRED = "body-required"

    # Per-element structure
    INVALID_ELEMENT = "invalid-element"
    DEPRECATED_ELEMENT = "deprecated-element"
    IMG_SRC_REQUIRED = "img-src-required"
    IMG_ALT_REQUIRED = "img-alt-required"
    AREA_ALT_REQUIRED = "area-alt-required"
    INPUT_TYPE_RECOMMENDED = "input-type-recommended"
    INVALID_PARENT = "invalid-parent"
    FORBIDDEN_CHILD = "forbidden-child"
    VOID_ELEMENT_CONTENT = "void-element-content"

    # Attributes
    DUPLICATE_ID = "duplicate-id"
    EMPTY_ATTRIBUTE = "empty-attribute"
    INLINE_EVENT_HANDLER = "inline-event-handler"

    # Document-wide encoding
    CHARSET_MISSING = "charset-missing"


class ValidationStatus(str, Enum):
    """Overall outcome of a validation run."""

    VALID = "valid"        # No errors (warnings allowed)
    INVALID = "invalid"    # At least one error
    ERROR = "error"        # The run could not complete (parse-error)


# Fixed severity per rule. A rule never changes sequence between emissions.
RULE_SEVERITY: dict[RuleId, Severity] = {
    RuleId.PARSE_ERROR: Severity.ERROR,
    RuleId.DOCTYPE_REQUIRED: Severity.ERROR,
    RuleId.DOCTYPE_POSITION: Severity.WARNING,
    RuleId.UNMATCHED_CLOSING_TAG: Severity.ERROR,
    RuleId.UNCLOSED_TAG: Severity.ERROR,
    RuleId.ROOT_ELEMENT: Severity.ERROR,
    RuleId.HTML_LANG: Severity.WARNING,
    RuleId.HEAD_REQUIRED: Severity.ERROR,
    RuleId.TITLE_REQUIRED: Severity.ERROR,
    RuleId.TITLE_EMPTY: Severity.ERROR,
    RuleId.CHARSET_RECOMMENDED: Severity.WARNING,
    RuleId.BODY_REQUIRED: Severity.ERROR,
    RuleId.INVALID_ELEMENT: Severity.ERROR,
    RuleId.DEPRECATED_ELEMENT: Severity.WARNING,
    RuleId.IMG_SRC_REQUIRED: Severity.ERROR,
    RuleId.IMG_ALT_REQUIRED: Severity.ERROR,
    RuleId.AREA_ALT_REQUIRED: Severity.ERROR,
    RuleId.INPUT_TYPE_RECOMMENDED: Severity.WARNING,
    RuleId.INVALID_PARENT: Severity.ERROR,
    RuleId.FORBIDDEN_CHILD: Severity.ERROR,
    RuleId.VOID_ELEMENT_CONTENT: Severity.ERROR,
    RuleId.DUPLICATE_ID: Severity.ERROR,
    RuleId.EMPTY_ATTRIBUTE: Severity.WARNING,
    RuleId.INLINE_EVENT_HANDLER: Severity.WARNING,
    RuleId.CHARSET_MISSING: Severity.WARNING,
}
