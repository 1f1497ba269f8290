"""
Pass 00 — Doctype

Checks the raw text, before any parsing:
- A ``<!DOCTYPE html>`` declaration must appear somewhere (error)
- The document must begin with it, ignoring surrounding whitespace (warning)
"""

import re

from htmlval.core.context import ValidationContext
from htmlval.core.logging import get_pass_logger
from htmlval.ir.enums import RuleId

PASS_NAME = "p00_doctype"
log = get_pass_logger(PASS_NAME)

DOCTYPE_PATTERN = re.compile(r"<!DOCTYPE\s+html>", re.IGNORECASE)


def check_doctype(ctx: ValidationContext) -> ValidationContext:
    """Report a missing or misplaced HTML5 doctype declaration."""
    raw = ctx.raw_text
    expected = ctx.rules.settings.doctype

    present = DOCTYPE_PATTERN.search(raw) is not None
    if not present:
        ctx.add_diagnostic(
            RuleId.DOCTYPE_REQUIRED,
            'DOCTYPE declaration is missing or invalid. Use "<!DOCTYPE html>" for HTML5.',
            line=1,
        )

    # The two checks are independent: a doctype buried after other
    # content satisfies the first and fails the second.
    first = raw.strip()
    leading = first.lower().startswith(expected.lower())
    if not leading:
        ctx.add_diagnostic(
            RuleId.DOCTYPE_POSITION,
            "DOCTYPE declaration must be at the beginning of the document.",
        )

    log.verbose("doctype_checked", present=present, leading=leading)

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="checked_doctype",
        after=f"present={present} leading={leading}",
    )

    return ctx
