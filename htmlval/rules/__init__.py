"""
Rules — HTML5 rule tables

Static reference data loaded from YAML. Tables are immutable once loaded
and shared read-only by every validation run.
"""

from htmlval.rules.loader import (
    DEFAULT_RULESET,
    RulesetError,
    clear_cache,
    get_rules,
    list_rulesets,
    load_rules,
    load_rules_from_path,
)
from htmlval.rules.models import RuleSettings, RuleTables

__all__ = [
    "DEFAULT_RULESET",
    "RuleSettings",
    "RuleTables",
    "RulesetError",
    "clear_cache",
    "get_rules",
    "list_rulesets",
    "load_rules",
    "load_rules_from_path",
]
