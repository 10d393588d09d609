"""Markup element model and the attribute classifier.

Elements come from an external template parser (see
:mod:`uispec.lint.template_parser`).  Attributes are a closed union of
literal attributes (``maxlength="50"``) and bound directives
(``:maxlength="limit"``, ``@click``, ``v-model``).
"""

from __future__ import annotations

from dataclasses import dataclass

BIND_DIRECTIVE = "bind"

# Vue directive shorthands: ``:x`` is v-bind, ``@x`` is v-on, ``#x`` is v-slot,
# ``.x`` is v-bind with the ``prop`` modifier.
_SHORTHANDS: dict[str, str] = {
    ":": "bind",
    ".": "bind",
    "@": "on",
    "#": "slot",
}

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LiteralAttribute:
    """A static attribute; ``raw_value`` is ``None`` when no value was written."""

    name: str
    raw_value: str | None = None
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class BoundAttribute:
    """A directive attribute whose value is evaluated at runtime.

    ``argument`` is ``None`` for directives without a static argument
    (``v-bind="obj"``, ``:[key]``, ``v-if``).
    """

    directive: str
    argument: str | None = None
    line: int = 0
    column: int = 0


MarkupAttribute = LiteralAttribute | BoundAttribute


@dataclass(frozen=True)
class MarkupElement:
    """Read-only view of one element: tag as written plus its attributes in order."""

    tag: str
    attributes: tuple[MarkupAttribute, ...] = ()
    line: int = 0
    column: int = 0


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def attribute_name(attr: MarkupAttribute) -> str:
    """Return the logical attribute name, or ``""`` when *attr* names none.

    Only property bindings with a static argument count for bound
    attributes: ``:maxlength`` names ``maxlength``, ``@input`` names nothing.
    """
    if isinstance(attr, LiteralAttribute):
        return attr.name
    if isinstance(attr, BoundAttribute):
        if attr.directive != BIND_DIRECTIVE:
            return ""
        return attr.argument or ""
    msg = f"Unsupported markup attribute: {attr!r}"
    raise TypeError(msg)


def is_empty(attr: MarkupAttribute) -> bool:
    """Return True when a literal attribute has no value or only whitespace.

    Bound attributes are never empty: their value is computed at runtime and
    cannot be judged absent statically.
    """
    if isinstance(attr, BoundAttribute):
        return False
    if isinstance(attr, LiteralAttribute):
        return attr.raw_value is None or not attr.raw_value.strip()
    msg = f"Unsupported markup attribute: {attr!r}"
    raise TypeError(msg)


def _split_argument(rest: str) -> str | None:
    """Strip ``.modifiers`` from a directive argument; dynamic ``[expr]`` has none."""
    if not rest or rest.startswith("["):
        return None
    argument = rest.split(".", 1)[0]
    return argument or None


def parse_attribute(
    raw_name: str,
    raw_value: str | None = None,
    *,
    line: int = 0,
    column: int = 0,
) -> MarkupAttribute:
    """Classify a raw attribute as written in a template.

    Examples::

        maxlength="50"       -> LiteralAttribute("maxlength", "50")
        :maxlength="limit"   -> BoundAttribute("bind", "maxlength")
        v-bind:max.number    -> BoundAttribute("bind", "max")
        v-bind="attrs"       -> BoundAttribute("bind", None)
        @click="go"          -> BoundAttribute("on", "click")
        v-model:value="x"    -> BoundAttribute("model", "value")
    """
    prefix = raw_name[:1]
    if prefix in _SHORTHANDS and len(raw_name) > 1:
        return BoundAttribute(
            directive=_SHORTHANDS[prefix],
            argument=_split_argument(raw_name[1:]),
            line=line,
            column=column,
        )

    if raw_name.startswith("v-") and len(raw_name) > 2:
        body = raw_name[2:]
        if ":" in body:
            directive, rest = body.split(":", 1)
        else:
            directive, rest = body.split(".", 1)[0], ""
        return BoundAttribute(
            directive=directive,
            argument=_split_argument(rest),
            line=line,
            column=column,
        )

    return LiteralAttribute(name=raw_name, raw_value=raw_value, line=line, column=column)
