"""
HTMLVal — HTML5 Structural Validator

A deterministic checker that reports where an HTML document breaks the
structural rules of HTML5: tag balance, document skeleton, required
attributes, parent/child constraints and attribute conventions.

The checker reports problems. It never repairs the markup.
"""

__version__ = "0.1.0"

from htmlval.core.engine import validate  # noqa: E402

__all__ = ["__version__", "validate"]
