"""Component attribute rules: parse rule options, build the normalized-name registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import yaml

from uispec.naming import normalize, normalized_variants

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Config keys are accepted in both camelCase (original schema) and snake_case.
_KEY_ALIASES: dict[str, str] = {
    "matchNames": "match_names",
    "displayName": "display_name",
    "allowEmpty": "allow_empty",
}
_COMPONENT_KEYS: frozenset[str] = frozenset(
    {"component", "match_names", "display_name", "library", "attributes"}
)
_ATTRIBUTE_KEYS: frozenset[str] = frozenset({"name", "allow_empty", "reason", "suggestion"})
_OPTION_KEYS: frozenset[str] = frozenset({"components", "libraries"})
_GROUP_KEYS: frozenset[str] = frozenset({"name", "components"})

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AttributeRequirement:
    """One attribute a component must declare.

    With ``allow_empty`` left at ``False`` a declared-but-empty literal value
    still violates the rule.  Absence is always reported.
    """

    name: str
    allow_empty: bool = False
    reason: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class ComponentRule:
    """Attribute requirements for one component and its aliases."""

    component: str
    attributes: tuple[AttributeRequirement, ...]
    match_names: tuple[str, ...] = ()
    display_name: str | None = None
    library: str | None = None

    @property
    def label(self) -> str:
        """Name rendered in violation messages."""
        return self.display_name or self.component

    def keys(self) -> set[str]:
        """Every normalized name this rule answers to."""
        keys = normalized_variants(self.component)
        for extra in self.match_names:
            key = normalize(extra)
            if key:
                keys.add(key)
        return keys


@dataclass(frozen=True)
class RuleGroup:
    """Library-scoped rules; ``name`` becomes ``library`` on each rule."""

    name: str
    components: tuple[ComponentRule, ...] = ()


@dataclass(frozen=True)
class RuleOptions:
    """Top-level rule configuration: flat component rules plus library groups."""

    components: tuple[ComponentRule, ...] = ()
    libraries: tuple[RuleGroup, ...] = ()

    def iter_rules(self) -> Iterator[ComponentRule]:
        """Yield flat rules first, then grouped rules tagged with their library."""
        yield from self.components
        for group in self.libraries:
            for rule in group.components:
                yield ComponentRule(
                    component=rule.component,
                    attributes=rule.attributes,
                    match_names=rule.match_names,
                    display_name=rule.display_name,
                    library=group.name,
                )


@dataclass
class RuleRegistry:
    """Normalized component name -> ComponentRule.

    All aliases of one rule point at the same instance.
    """

    _rules: dict[str, ComponentRule] = field(default_factory=dict)

    def register(self, keys: Iterable[str], rule: ComponentRule) -> None:
        """Register *rule* under every key; later registrations win."""
        for key in keys:
            self._rules[key] = rule

    def get(self, key: str) -> ComponentRule | None:
        return self._rules.get(key)

    def lookup(self, name: str) -> ComponentRule | None:
        """Find the rule for a raw tag or component name."""
        return self._rules.get(normalize(name))

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    @property
    def rules(self) -> list[ComponentRule]:
        """Distinct rules still reachable through at least one key."""
        seen: dict[int, ComponentRule] = {}
        for rule in self._rules.values():
            seen.setdefault(id(rule), rule)
        return list(seen.values())

    @property
    def rule_count(self) -> int:
        return len(self.rules)


# ---------------------------------------------------------------------------
# Registry builder
# ---------------------------------------------------------------------------


def build_registry(options: RuleOptions | None) -> RuleRegistry:
    """Flatten *options* into a lookup keyed by every normalized alias.

    Rules with no attributes or no usable name are skipped silently; a
    partial configuration degrades to fewer checks instead of failing.
    """
    registry = RuleRegistry()
    if options is None:
        return registry

    for rule in options.iter_rules():
        if not rule.attributes:
            continue
        keys = rule.keys()
        if not keys:
            continue
        registry.register(keys, rule)

    return registry


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _canonical_keys(
    data: dict[str, object], allowed: frozenset[str], context: str
) -> dict[str, object]:
    """Map camelCase aliases to snake_case and reject unknown keys."""
    result: dict[str, object] = {}
    for raw_key, value in data.items():
        key = _KEY_ALIASES.get(str(raw_key), str(raw_key))
        if key not in allowed:
            msg = f"{context}: unknown key '{raw_key}', expected one of {sorted(allowed)}"
            raise ValueError(msg)
        result[key] = value
    return result


def _optional_str(value: object, context: str, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{context}: '{key}' must be a string"
        raise ValueError(msg)
    return value


def _parse_attribute(data: object, context: str) -> AttributeRequirement:
    """Parse one attribute requirement: a bare name or a mapping."""
    if isinstance(data, str):
        return AttributeRequirement(name=data)
    if not isinstance(data, dict):
        msg = f"{context}: attribute must be a string or a mapping"
        raise ValueError(msg)

    fields = _canonical_keys(data, _ATTRIBUTE_KEYS, context)
    name = fields.get("name")
    if not isinstance(name, str) or not name:
        msg = f"{context}: attribute requires a non-empty 'name'"
        raise ValueError(msg)

    allow_empty = fields.get("allow_empty", False)
    if not isinstance(allow_empty, bool):
        msg = f"{context}: 'allowEmpty' must be a boolean"
        raise ValueError(msg)

    return AttributeRequirement(
        name=name,
        allow_empty=allow_empty,
        reason=_optional_str(fields.get("reason"), context, "reason"),
        suggestion=_optional_str(fields.get("suggestion"), context, "suggestion"),
    )


def _parse_component(data: object, context: str) -> ComponentRule:
    """Parse one component rule mapping.

    Inside a library group a ``library`` key is accepted but the group name wins.
    """
    if not isinstance(data, dict):
        msg = f"{context}: component rule must be a mapping"
        raise ValueError(msg)

    fields = _canonical_keys(data, _COMPONENT_KEYS, context)

    component = fields.get("component")
    if not isinstance(component, str):
        msg = f"{context}: 'component' must be a string"
        raise ValueError(msg)
    context = f"{context} ({component})"

    match_raw = fields.get("match_names") or []
    if not isinstance(match_raw, list) or not all(isinstance(m, str) for m in match_raw):
        msg = f"{context}: 'matchNames' must be a list of strings"
        raise ValueError(msg)

    attributes_raw = fields.get("attributes")
    if not isinstance(attributes_raw, list):
        msg = f"{context}: 'attributes' must be a list"
        raise ValueError(msg)

    attributes = tuple(
        _parse_attribute(item, f"{context} attributes[{idx}]")
        for idx, item in enumerate(attributes_raw)
    )

    return ComponentRule(
        component=component,
        attributes=attributes,
        match_names=tuple(match_raw),
        display_name=_optional_str(fields.get("display_name"), context, "displayName"),
        library=_optional_str(fields.get("library"), context, "library"),
    )


def _parse_group(data: object, context: str) -> RuleGroup:
    if not isinstance(data, dict):
        msg = f"{context}: library group must be a mapping"
        raise ValueError(msg)

    fields = _canonical_keys(data, _GROUP_KEYS, context)
    name = fields.get("name")
    if not isinstance(name, str) or not name:
        msg = f"{context}: library group requires a non-empty 'name'"
        raise ValueError(msg)

    components_raw = fields.get("components")
    if not isinstance(components_raw, list):
        msg = f"{context} ({name}): 'components' must be a list"
        raise ValueError(msg)

    return RuleGroup(
        name=name,
        components=tuple(
            _parse_component(item, f"{context} ({name}) components[{idx}]")
            for idx, item in enumerate(components_raw)
        ),
    )


def parse_rule_options(data: object) -> RuleOptions:
    """Convert the rule configuration schema into :class:`RuleOptions`.

    Raises
    ------
    ValueError
        When the configuration is structurally invalid (wrong types, unknown
        keys, attributes without a name).
    """
    if data is None:
        return RuleOptions()
    if not isinstance(data, dict):
        msg = "Rule options must be a mapping with 'components' and/or 'libraries'"
        raise ValueError(msg)

    fields = _canonical_keys(data, _OPTION_KEYS, "Rule options")

    components_raw = fields.get("components") or []
    if not isinstance(components_raw, list):
        msg = "Rule options: 'components' must be a list"
        raise ValueError(msg)
    libraries_raw = fields.get("libraries") or []
    if not isinstance(libraries_raw, list):
        msg = "Rule options: 'libraries' must be a list"
        raise ValueError(msg)

    return RuleOptions(
        components=tuple(
            _parse_component(item, f"components[{idx}]") for idx, item in enumerate(components_raw)
        ),
        libraries=tuple(
            _parse_group(item, f"libraries[{idx}]") for idx, item in enumerate(libraries_raw)
        ),
    )


def load_rule_options(path: Path) -> RuleOptions:
    """Read a YAML rules file.  An empty file yields empty options."""
    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"{path.name}: invalid YAML: {exc}"
        raise ValueError(msg) from exc
    return parse_rule_options(data)
