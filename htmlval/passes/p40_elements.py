"""
Pass 40 — Element Rules

Visits every element of the tree once, in document order, and applies
the per-element structural checks in a fixed order:

1. Element name is a legal HTML5 name (custom elements are exempt)
2. Element is not deprecated
3. Required attributes (img, area, input)
4. Parent is one the element may appear in
5. No forbidden immediate children
6. Void elements have no content
7. Attribute conventions (unique ids, no empty values, no inline handlers)

Ids are counted over the whole tree before the walk starts, so every
element that shares an id is reported, not just the later ones.
"""

from collections import Counter
from typing import Callable

from htmlval.core.context import ValidationContext
from htmlval.core.contracts import ElementView
from htmlval.core.logging import get_pass_logger
from htmlval.ir.enums import RuleId

PASS_NAME = "p40_elements"
log = get_pass_logger(PASS_NAME)

ElementCheck = Callable[[ValidationContext, ElementView, str], None]


def check_elements(ctx: ValidationContext) -> ValidationContext:
    """Apply every element check to every element."""
    tree = ctx.require_tree()

    ctx.id_index = build_id_index(tree.iter_elements())
    log.debug("id_index_built", ids=len(ctx.id_index))

    visited = 0
    errors_before = len(ctx.errors)
    warnings_before = len(ctx.warnings)

    for element in tree.iter_elements():
        tag_name = element.tag_name
        for check in ELEMENT_CHECKS:
            check(ctx, element, tag_name)
        visited += 1

    log.verbose(
        "elements_checked",
        elements=visited,
        errors=len(ctx.errors) - errors_before,
        warnings=len(ctx.warnings) - warnings_before,
    )

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="checked_elements",
        before=f"{visited} elements",
        after=f"{len(ctx.errors) - errors_before} errors",
    )

    return ctx


def build_id_index(elements) -> Counter:
    """Count how many elements carry each id value."""
    index: Counter = Counter()
    for element in elements:
        value = element.get_attribute("id")
        if value is not None:
            index[value] += 1
    return index


def _report(ctx: ValidationContext, element: ElementView, rule: RuleId, message: str) -> None:
    ctx.add_diagnostic(
        rule,
        message,
        line=element.line,
        column=element.column,
        extract=element.fragment(ctx.rules.settings.fragment_limit),
    )


# =============================================================================
# Checks
# =============================================================================

def check_element_name(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    rules = ctx.rules
    if rules.is_custom_element(tag_name):
        return
    if not rules.is_valid_element(tag_name):
        _report(ctx, element, RuleId.INVALID_ELEMENT, f"<{tag_name}> is not a valid HTML5 element.")


def check_deprecated(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    if ctx.rules.is_deprecated(tag_name):
        _report(
            ctx,
            element,
            RuleId.DEPRECATED_ELEMENT,
            f"<{tag_name}> element is deprecated (deprecated elements should not be used). "
            "Modern alternatives should be used.",
        )


def check_required_attributes(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    """
    Only img, area and input produce diagnostics.

    The table lists requirements for more elements (a, link, meta, form,
    script, ...); those entries are reference data with no rule of their own.
    """
    if ctx.rules.get_required_attributes(tag_name) is None:
        return

    if tag_name == "img":
        if not element.has_attribute("src"):
            _report(ctx, element, RuleId.IMG_SRC_REQUIRED, '<img> element must have "src" attribute.')
        if not element.has_attribute("alt"):
            _report(
                ctx,
                element,
                RuleId.IMG_ALT_REQUIRED,
                '<img> element must have "alt" attribute (accessibility).',
            )
    elif tag_name == "area" and not element.has_attribute("alt"):
        _report(ctx, element, RuleId.AREA_ALT_REQUIRED, '<area> element must have "alt" attribute.')
    elif tag_name == "input" and not element.has_attribute("type"):
        _report(ctx, element, RuleId.INPUT_TYPE_RECOMMENDED, '<input> element must have "type" attribute.')


def check_parent(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    allowed = ctx.rules.get_required_parents(tag_name)
    if allowed is None:
        return

    parent = element.parent
    if parent is None:
        return

    parent_tag = parent.tag_name
    if parent_tag not in allowed:
        _report(
            ctx,
            element,
            RuleId.INVALID_PARENT,
            f"<{tag_name}> element must be inside <{'>, <'.join(allowed)}> elements. "
            f"Currently inside <{parent_tag}> element.",
        )


def check_forbidden_children(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    forbidden = ctx.rules.get_forbidden_children(tag_name)
    if not forbidden:
        return

    for child in element.children:
        child_tag = child.tag_name
        if child_tag in forbidden:
            _report(
                ctx,
                element,
                RuleId.FORBIDDEN_CHILD,
                f"<{tag_name}> element cannot contain <{child_tag}> element.",
            )


def check_void_content(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    if ctx.rules.is_void(tag_name) and element.has_child_nodes():
        _report(
            ctx,
            element,
            RuleId.VOID_ELEMENT_CONTENT,
            f"<{tag_name}> is a void element and cannot have content.",
        )


def check_attributes(ctx: ValidationContext, element: ElementView, tag_name: str) -> None:
    settings = ctx.rules.settings

    for name, value in element.attributes:
        if name == "id" and ctx.id_index[value] > 1:
            _report(
                ctx,
                element,
                RuleId.DUPLICATE_ID,
                f'ID "{value}" is used in multiple elements. IDs must be unique.',
            )

        if not value and name not in settings.empty_attribute_exempt:
            _report(ctx, element, RuleId.EMPTY_ATTRIBUTE, f'"{name}" attribute has an empty value.')

        if name.startswith(settings.event_handler_prefix):
            _report(
                ctx,
                element,
                RuleId.INLINE_EVENT_HANDLER,
                f'Inline event handler "{name}" is not recommended. '
                "Use addEventListener in JavaScript file.",
            )


# Order matters: diagnostics for one element come out in this order
ELEMENT_CHECKS: tuple[ElementCheck, ...] = (
    check_element_name,
    check_deprecated,
    check_required_attributes,
    check_parent,
    check_forbidden_children,
    check_void_content,
    check_attributes,
)
