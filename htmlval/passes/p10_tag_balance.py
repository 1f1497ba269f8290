"""
Pass 10 — Tag Balance

Verifies that opening and closing tags pair up, working on the raw text
before any tree is built.

Comments and the interiors of <script>/<style> are blanked out first
(newlines are kept, so line numbers stay true). The remaining tags are
walked with a stack. A closing tag is only ever matched against the
nearest unclosed element; on a mismatch the stack top is reported and
popped anyway, and no deeper search is attempted.
"""

import re
from dataclasses import dataclass

from htmlval.core.context import ValidationContext
from htmlval.core.logging import get_pass_logger
from htmlval.ir.enums import RuleId

PASS_NAME = "p10_tag_balance"
log = get_pass_logger(PASS_NAME)

COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
RAW_TEXT_PATTERNS = {
    name: re.compile(rf"(<{name}\b[^>]*>)(.*?)(</{name}>)", re.IGNORECASE | re.DOTALL)
    for name in ("script", "style")
}
TAG_PATTERN = re.compile(r"</?([a-zA-Z][a-zA-Z0-9-]*)\b[^>]*>")


@dataclass
class TagFrame:
    """An opening tag still waiting for its closing tag."""

    tag_name: str
    # Offset of the opening tag in the neutralized text
    position: int


def neutralize(text: str) -> str:
    """
    Blank out regions that must not be scanned as markup.

    Comments become their newlines only. Script and style elements keep
    their own opening and closing tags; their content becomes its newlines.
    """
    text = COMMENT_PATTERN.sub(lambda m: "\n" * m.group(0).count("\n"), text)
    for name, pattern in RAW_TEXT_PATTERNS.items():
        text = pattern.sub(
            lambda m, name=name: m.group(1) + "\n" * m.group(2).count("\n") + f"</{name}>",
            text,
        )
    return text


def line_at(text: str, position: int) -> int:
    """1-based line number of an offset."""
    return text.count("\n", 0, position) + 1


def check_tag_balance(ctx: ValidationContext) -> ValidationContext:
    """Report closing tags without an opener and elements left open."""
    text = neutralize(ctx.raw_text)
    ctx.neutralized_text = text

    void = ctx.rules.void_elements
    stack: list[TagFrame] = []
    scanned = 0
    errors_before = len(ctx.errors)

    for match in TAG_PATTERN.finditer(text):
        full_tag = match.group(0)
        tag_name = match.group(1).lower()
        position = match.start()

        # Self-closing syntax and void elements never take part in pairing
        if full_tag.endswith("/>") or tag_name in void:
            continue
        scanned += 1

        if not full_tag.startswith("</"):
            stack.append(TagFrame(tag_name, position))
            continue

        line = line_at(text, position)
        if not stack:
            ctx.add_diagnostic(
                RuleId.UNMATCHED_CLOSING_TAG,
                f'Closing tag "</{tag_name}>" found without a matching opening tag.',
                line=line,
                extract=full_tag,
            )
            continue

        top = stack[-1]
        if top.tag_name != tag_name:
            opened_at = line_at(text, top.position)
            ctx.add_diagnostic(
                RuleId.UNCLOSED_TAG,
                f'"<{top.tag_name}>" tag (line {opened_at}) was left open. '
                f'"</{tag_name}>" tries to close it.',
                line=line,
                extract=full_tag,
            )
        stack.pop()

    for frame in stack:
        opened_at = line_at(text, frame.position)
        ctx.add_diagnostic(
            RuleId.UNCLOSED_TAG,
            f'"<{frame.tag_name}>" tag (line {opened_at}) was left open. '
            f'No closing tag "</{frame.tag_name}>" was found.',
            line=opened_at,
        )

    found = len(ctx.errors) - errors_before
    log.verbose("tags_balanced", tags=scanned, unclosed=len(stack), problems=found)

    ctx.add_trace(
        pass_name=PASS_NAME,
        action="checked_tag_balance",
        before=f"{scanned} tags",
        after=f"{found} problems",
    )

    return ctx
