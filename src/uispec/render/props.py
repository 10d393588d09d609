"""Prop resolution: merge rule defaults with caller props at render time."""

from __future__ import annotations

import logging
import string
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_TEMPLATE = "请输入{label}"

Props = dict[str, Any]
PlaceholderPolicy = bool | str | Callable[[str], str]


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class UiRule:
    """Render-time rule for one component.

    ``auto_placeholder`` is ``False`` (off), ``True`` (default Chinese
    prompt), a format template with a ``{label}`` field, or a callable
    receiving the label.  ``transform`` replaces the merged props wholesale.
    """

    defaults: Mapping[str, Any] = field(default_factory=dict)
    auto_placeholder: PlaceholderPolicy = False
    transform: Callable[[Props], Props] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "defaults", _frozen(self.defaults))


def placeholder_template_error(template: str) -> str | None:
    """Return why *template* cannot render a placeholder, or ``None`` if it can.

    The only replacement field allowed is ``{label}``.
    """
    try:
        names = [name for _, name, _, _ in string.Formatter().parse(template) if name is not None]
    except ValueError as exc:
        return str(exc)
    for name in names:
        if name != "label":
            return f"unknown field {{{name}}}"
    try:
        template.format(label="")
    except (ValueError, TypeError) as exc:
        return str(exc)
    return None


def placeholder_for(policy: PlaceholderPolicy, label: str) -> str:
    """Render the placeholder text for *label* under *policy*.

    A template that cannot be formatted falls back to the default prompt.
    """
    if callable(policy):
        return str(policy(label))
    if isinstance(policy, str):
        error = placeholder_template_error(policy)
        if error is None:
            return policy.format(label=label)
        logger.warning("Bad placeholder template %r (%s), using the default", policy, error)
    return DEFAULT_PLACEHOLDER_TEMPLATE.format(label=label)


def resolve_props(
    rule: UiRule,
    declared: Iterable[str] = (),
    passed_attrs: Mapping[str, Any] | None = None,
    explicit_props: Mapping[str, Any] | None = None,
) -> Props:
    """Produce the final props for a wrapped component.

    Precedence, lowest first: ``rule.defaults``, forwarded ``passed_attrs``
    (keys named in *declared* are props, not attrs, and are not forwarded),
    ``explicit_props``.  A ``transform`` then replaces the result.
    Placeholder synthesis runs last and only ever adds ``placeholder``.
    """
    declared_names = frozenset(declared)

    merged: Props = dict(rule.defaults)
    for key, value in (passed_attrs or {}).items():
        if key not in declared_names:
            merged[key] = value
    merged.update(explicit_props or {})

    if rule.transform is not None:
        merged = dict(rule.transform(merged))

    if rule.auto_placeholder and not merged.get("placeholder"):
        label = merged.get("label")
        if label:
            merged["placeholder"] = placeholder_for(rule.auto_placeholder, str(label))

    return merged


@dataclass(frozen=True)
class EnhancedComponent:
    """A component wrapped with a :class:`UiRule`.

    Calling it resolves props and invokes the original component with
    ``(props, slots)``, the calling convention of a render function.
    """

    name: str
    original: Any
    rule: UiRule
    declared: frozenset[str] = frozenset()

    def props_for(
        self,
        attrs: Mapping[str, Any] | None = None,
        props: Mapping[str, Any] | None = None,
    ) -> Props:
        return resolve_props(self.rule, self.declared, attrs, props)

    def __call__(
        self,
        attrs: Mapping[str, Any] | None = None,
        props: Mapping[str, Any] | None = None,
        slots: Mapping[str, Any] | None = None,
    ) -> Any:
        if not callable(self.original):
            msg = f"{self.name}: wrapped component {self.original!r} is not callable"
            raise TypeError(msg)
        return self.original(self.props_for(attrs, props), slots)


def with_ui_rules(
    component_name: str,
    component: Any,
    rule: UiRule,
    *,
    declared: Iterable[str] = (),
) -> EnhancedComponent:
    """Wrap *component* so every render applies *rule*."""
    return EnhancedComponent(
        name=f"UiEnhanced_{component_name}",
        original=component,
        rule=rule,
        declared=frozenset(declared),
    )
