"""
Pass 50 — Character Encoding

Document-wide: some <meta> must declare the encoding, either with
``charset`` or with ``http-equiv="Content-Type"``.
"""

from htmlval.core.context import ValidationContext
from htmlval.core.logging import get_pass_logger
from htmlval.ir.enums import RuleId

PASS_NAME = "p50_charset"
log = get_pass_logger(PASS_NAME)


def check_charset(ctx: ValidationContext) -> ValidationContext:
    tree = ctx.require_tree()

    declared = (
        tree.find_with_attribute("meta", "charset") is not None
        or tree.find_with_attribute("meta", "http-equiv", "Content-Type") is not None
    )
    if not declared:
        ctx.add_diagnostic(
            RuleId.CHARSET_MISSING,
            "Character encoding (charset) is not specified.",
        )

    log.verbose("charset_checked", declared=declared)

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="checked_charset",
        after=f"declared={declared}",
    )

    return ctx
