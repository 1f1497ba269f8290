"""
Shared fixtures for HTMLVal tests.
"""

import pytest

from htmlval.core.context import ValidationContext, ValidationRequest
from htmlval.core.logging import configure_logging
from htmlval.rules.loader import get_rules


WELL_FORMED = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Test page</title>
</head>
<body>
<h1>Heading</h1>
<p>Some <em>text</em>.</p>
<ul>
<li>One</li>
<li>Two</li>
</ul>
<img src="logo.png" alt="Logo">
</body>
</html>
"""


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output free of pipeline logs."""
    configure_logging(level="silent", force=True)


@pytest.fixture
def rules():
    return get_rules()


@pytest.fixture
def well_formed() -> str:
    return WELL_FORMED


@pytest.fixture
def make_context(rules):
    """Factory for a fresh context over some markup."""

    def _make(text: str) -> ValidationContext:
        return ValidationContext.from_request(ValidationRequest(text=text), rules=rules)

    return _make


PAGE_HEAD = '<meta charset="UTF-8"><title>T</title>'


@pytest.fixture
def make_page():
    """Factory that wraps body markup in an otherwise valid document."""

    def _page(body: str, head: str = PAGE_HEAD) -> str:
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            f"<head>{head}</head>\n"
            f"<body>\n{body}\n</body>\n"
            "</html>\n"
        )

    return _page
