"""
Rule Models — Immutable HTML5 rule tables.

Lookups are by exact lowercase element name. A missing key means
"no constraint of that kind applies", never "forbidden".
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


def _freeze_map(data: Mapping[str, tuple[str, ...]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType(dict(data))


@dataclass(frozen=True)
class RuleSettings:
    """Knobs that shape how the tables are applied."""
    fragment_limit: int = 200
    # Attributes allowed to carry an empty value without a warning
    empty_attribute_exempt: tuple[str, ...] = ("alt",)
    # Attribute-name prefix of inline event handlers (onclick, onload, ...)
    event_handler_prefix: str = "on"
    # Declaration the document must begin with (compared case-insensitively)
    doctype: str = "<!doctype html>"


@dataclass(frozen=True)
class RuleTables:
    """
    A complete, read-only HTML5 rule table set.

    Built once by the loader and passed by reference into every pass.
    """
    name: str
    version: str
    description: str
    settings: RuleSettings

    void_elements: frozenset[str]
    deprecated_elements: frozenset[str]
    valid_element_names: frozenset[str]

    # Element-specific interpretation, see the structural checks
    required_attributes: Mapping[str, tuple[str, ...]]
    # Kept in table order so messages list parents as declared
    required_parents: Mapping[str, tuple[str, ...]]
    forbidden_children: Mapping[str, frozenset[str]]

    # Lexical categories for auxiliary checks
    metadata_elements: frozenset[str] = frozenset()
    interactive_elements: frozenset[str] = frozenset()
    block_elements: frozenset[str] = frozenset()
    inline_elements: frozenset[str] = frozenset()
    global_attributes: frozenset[str] = frozenset()
    boolean_attributes: frozenset[str] = frozenset()
    must_close_elements: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "required_attributes", _freeze_map(self.required_attributes))
        object.__setattr__(self, "required_parents", _freeze_map(self.required_parents))
        object.__setattr__(
            self,
            "forbidden_children",
            MappingProxyType({k: frozenset(v) for k, v in self.forbidden_children.items()}),
        )

    def is_void(self, name: str) -> bool:
        return name in self.void_elements

    def is_custom_element(self, name: str) -> bool:
        """Custom element names contain a hyphen and skip the legality check."""
        return "-" in name

    def is_deprecated(self, name: str) -> bool:
        return name in self.deprecated_elements

    def is_valid_element(self, name: str) -> bool:
        return name in self.valid_element_names

    def get_required_attributes(self, name: str) -> Optional[tuple[str, ...]]:
        return self.required_attributes.get(name)

    def get_required_parents(self, name: str) -> Optional[tuple[str, ...]]:
        return self.required_parents.get(name)

    def get_forbidden_children(self, name: str) -> Optional[frozenset[str]]:
        return self.forbidden_children.get(name)

    def inconsistencies(self) -> list[str]:
        """
        Element names used by a table but missing from the legal names.

        Reported only; the checker never enforces table consistency.
        """
        problems: list[str] = []
        tables: dict[str, list[str]] = {
            "void_elements": sorted(self.void_elements),
            "required_attributes": list(self.required_attributes),
            "required_parents": list(self.required_parents)
            + [p for parents in self.required_parents.values() for p in parents],
            "forbidden_children": list(self.forbidden_children)
            + [c for children in self.forbidden_children.values() for c in sorted(children)],
        }
        seen: set[tuple[str, str]] = set()
        for table, names in tables.items():
            for name in names:
                if self.is_valid_element(name) or self.is_custom_element(name):
                    continue
                if (table, name) in seen:
                    continue
                seen.add((table, name))
                problems.append(f"{table}: <{name}> is not a legal element name")
        return problems
