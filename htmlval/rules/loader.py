"""
Rule Loader — Load and parse rule tables from YAML files.

Rulesets live in ``rulesets/`` next to this module. The default
``html5`` ruleset is loaded once per process and cached.
"""

from pathlib import Path
from typing import Any, Optional

import yaml

from htmlval.core.logging import LogChannel, get_logger
from htmlval.rules.models import RuleSettings, RuleTables

# Default ruleset directory
RULESETS_DIR = Path(__file__).parent / "rulesets"

DEFAULT_RULESET = "html5"

log = get_logger(LogChannel.RULES)

_SET_SECTIONS = (
    "void_elements",
    "deprecated_elements",
    "valid_element_names",
    "metadata_elements",
    "interactive_elements",
    "block_elements",
    "inline_elements",
    "global_attributes",
    "boolean_attributes",
    "must_close_elements",
)

_MAP_SECTIONS = (
    "required_attributes",
    "required_parents",
    "forbidden_children",
)


class RulesetError(ValueError):
    """A ruleset file is structurally invalid."""


def load_rules(name: str = DEFAULT_RULESET) -> RuleTables:
    """
    Load a ruleset by name.

    Args:
        name: Ruleset name (without .yaml extension)

    Raises:
        FileNotFoundError: If the ruleset file doesn't exist
        RulesetError: If the ruleset is invalid
    """
    path = RULESETS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Ruleset not found: {path}")
    return load_rules_from_path(path)


def load_rules_from_path(path: Path) -> RuleTables:
    """Load a ruleset from an arbitrary path."""
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise RulesetError(f"Ruleset {path} must be a mapping, got {type(data).__name__}")

    rules = parse_rules(data, default_name=path.stem)

    log.verbose(
        "ruleset_loaded",
        ruleset=rules.name,
        path=str(path),
        elements=len(rules.valid_element_names),
    )
    for problem in rules.inconsistencies():
        log.debug("ruleset_inconsistency", ruleset=rules.name, detail=problem)

    return rules


def parse_rules(data: dict, default_name: str = "unnamed") -> RuleTables:
    """Parse rule tables from a dictionary."""
    settings = _parse_settings(data.get("settings") or {})

    sets = {section: _parse_name_set(data, section) for section in _SET_SECTIONS}
    maps = {section: _parse_name_map(data, section) for section in _MAP_SECTIONS}

    return RuleTables(
        name=data.get("name", default_name),
        version=str(data.get("version", "1.0")),
        description=data.get("description", ""),
        settings=settings,
        void_elements=sets["void_elements"],
        deprecated_elements=sets["deprecated_elements"],
        valid_element_names=sets["valid_element_names"],
        required_attributes=maps["required_attributes"],
        required_parents=maps["required_parents"],
        forbidden_children=maps["forbidden_children"],
        metadata_elements=sets["metadata_elements"],
        interactive_elements=sets["interactive_elements"],
        block_elements=sets["block_elements"],
        inline_elements=sets["inline_elements"],
        global_attributes=sets["global_attributes"],
        boolean_attributes=sets["boolean_attributes"],
        must_close_elements=sets["must_close_elements"],
    )


def _parse_settings(data: dict) -> RuleSettings:
    if not isinstance(data, dict):
        raise RulesetError("settings must be a mapping")
    defaults = RuleSettings()
    return RuleSettings(
        fragment_limit=int(data.get("fragment_limit", defaults.fragment_limit)),
        empty_attribute_exempt=tuple(
            str(name).lower() for name in data.get("empty_attribute_exempt", defaults.empty_attribute_exempt)
        ),
        event_handler_prefix=str(data.get("event_handler_prefix", defaults.event_handler_prefix)).lower(),
        doctype=str(data.get("doctype", defaults.doctype)),
    )


def _parse_name_set(data: dict, section: str) -> frozenset[str]:
    values = data.get(section) or []
    if not isinstance(values, list):
        raise RulesetError(f"{section} must be a list of element names")
    return frozenset(str(v).lower() for v in values)


def _parse_name_map(data: dict, section: str) -> dict[str, tuple[str, ...]]:
    values: Any = data.get(section) or {}
    if not isinstance(values, dict):
        raise RulesetError(f"{section} must map element names to lists")
    parsed: dict[str, tuple[str, ...]] = {}
    for key, names in values.items():
        if not isinstance(names, list):
            raise RulesetError(f"{section}.{key} must be a list")
        parsed[str(key).lower()] = tuple(str(n).lower() for n in names)
    return parsed


def list_rulesets() -> list[str]:
    """List available ruleset names."""
    return sorted(p.stem for p in RULESETS_DIR.glob("*.yaml"))


# Cache for loaded rulesets
_cache: dict[str, RuleTables] = {}


def get_rules(name: Optional[str] = None, use_cache: bool = True) -> RuleTables:
    """Get a ruleset, using cache by default."""
    name = name or DEFAULT_RULESET
    if use_cache and name in _cache:
        return _cache[name]

    rules = load_rules(name)
    _cache[name] = rules
    return rules


def clear_cache() -> None:
    """Clear the ruleset cache."""
    _cache.clear()
