"""Rule engine: walk markup elements and report missing or empty required attributes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from uispec.lint.markup import attribute_name, is_empty
from uispec.naming import normalize

if TYPE_CHECKING:
    from collections.abc import Iterable

    from uispec.lint.markup import MarkupAttribute, MarkupElement
    from uispec.lint.rules import AttributeRequirement, ComponentRule, RuleRegistry

MESSAGE_TEMPLATE = 'Component <{component}> must define attribute "{attribute}"{reason}.'


@dataclass(frozen=True)
class Violation:
    """One missing, or present-but-empty, required attribute.

    ``attribute`` is the offending attribute node when the requirement was
    declared with an empty value, and ``None`` when it was not declared at
    all (the violation is then anchored at the element).
    """

    element: MarkupElement
    attribute: MarkupAttribute | None
    component: str
    attribute_name: str
    reason: str | None = None
    suggestion: str | None = None
    library: str | None = None

    @property
    def is_missing(self) -> bool:
        return self.attribute is None

    @property
    def line(self) -> int:
        anchor = self.attribute if self.attribute is not None else self.element
        return anchor.line

    @property
    def column(self) -> int:
        anchor = self.attribute if self.attribute is not None else self.element
        return anchor.column

    @property
    def message(self) -> str:
        return format_message(self.component, self.attribute_name, self.reason)


def format_message(component: str, attribute: str, reason: str | None = None) -> str:
    """Render the report message for one violation."""
    return MESSAGE_TEMPLATE.format(
        component=component,
        attribute=attribute,
        reason=f" ({reason})" if reason else "",
    )


def _find_attribute(element: MarkupElement, name: str) -> MarkupAttribute | None:
    """First attribute on *element* whose classified name equals *name*."""
    for attr in element.attributes:
        if attribute_name(attr) == name:
            return attr
    return None


def _violation(
    element: MarkupElement,
    attr: MarkupAttribute | None,
    rule: ComponentRule,
    required: AttributeRequirement,
) -> Violation:
    return Violation(
        element=element,
        attribute=attr,
        component=rule.label,
        attribute_name=required.name,
        reason=required.reason,
        suggestion=required.suggestion,
        library=rule.library,
    )


def check_element(element: MarkupElement, registry: RuleRegistry) -> list[Violation]:
    """Check a single element; unmatched tags produce no violations."""
    rule = registry.get(normalize(element.tag))
    if rule is None:
        return []

    violations: list[Violation] = []
    for required in rule.attributes:
        attr = _find_attribute(element, required.name)
        if attr is None:
            violations.append(_violation(element, None, rule, required))
        elif not required.allow_empty and is_empty(attr):
            violations.append(_violation(element, attr, rule, required))
    return violations


def check(elements: Iterable[MarkupElement], registry: RuleRegistry) -> list[Violation]:
    """Check every element in document order.

    Violations are ordered by element, then by requirement declaration order
    within the element.  Every requirement is checked; nothing short-circuits.
    """
    if not registry:
        return []

    violations: list[Violation] = []
    for element in elements:
        violations.extend(check_element(element, registry))
    return violations
