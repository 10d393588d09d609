"""Template parsing: tree-sitter HTML grammar -> :class:`MarkupElement` sequence.

``.vue`` single-file components contribute only the elements inside their
top-level ``<template>`` block; ``.html`` documents contribute every element.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language, Parser

from uispec.lint.markup import MarkupElement, parse_attribute

if TYPE_CHECKING:
    from pathlib import Path

    from tree_sitter import Node as TSNode

    from uispec.lint.markup import MarkupAttribute

SFC_EXTENSIONS: frozenset[str] = frozenset({".vue"})
HTML_EXTENSIONS: frozenset[str] = frozenset({".html", ".htm"})
SUPPORTED_EXTENSIONS: frozenset[str] = SFC_EXTENSIONS | HTML_EXTENSIONS

_TAG_NODES: frozenset[str] = frozenset({"start_tag", "self_closing_tag"})
# Raw-text containers: their bodies are never template markup.
_OPAQUE_NODES: frozenset[str] = frozenset({"script_element", "style_element", "comment"})

# Loaded grammar, keyed by name (empty until first use).
_LANG_CACHE: dict[str, Language] = {}


class TemplateParseError(Exception):
    """Raised when the HTML grammar is unavailable."""


def _load_language() -> Language:
    language = _LANG_CACHE.get("html")
    if language is None:
        try:
            import tree_sitter_html as tshtml
        except ImportError as exc:
            msg = "tree-sitter-html is not installed"
            raise TemplateParseError(msg) from exc
        language = Language(tshtml.language())
        _LANG_CACHE["html"] = language
    return language


def _text(node: TSNode | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _position(node: TSNode, source: bytes) -> tuple[int, int]:
    """1-based (line, column) counted in characters.

    tree-sitter points are 0-based and their columns count UTF-8 bytes.
    """
    line_start = node.start_byte - node.start_point.column
    prefix = source[line_start : node.start_byte].decode("utf-8", errors="replace")
    return node.start_point.row + 1, len(prefix) + 1


def _attribute_value(attr_node: TSNode) -> str | None:
    """Value of an ``attribute`` node; ``""`` for ``x=""``, ``None`` for bare ``x``."""
    for child in attr_node.named_children:
        if child.type == "attribute_value":
            return _text(child)
        if child.type == "quoted_attribute_value":
            inner = [c for c in child.named_children if c.type == "attribute_value"]
            return _text(inner[0]) if inner else ""
    return None


def _convert_attribute(attr_node: TSNode, source: bytes) -> MarkupAttribute | None:
    name_node = next((c for c in attr_node.named_children if c.type == "attribute_name"), None)
    if name_node is None:
        return None
    line, column = _position(attr_node, source)
    return parse_attribute(
        _text(name_node), _attribute_value(attr_node), line=line, column=column
    )


def _convert_tag(tag_node: TSNode, source: bytes) -> MarkupElement | None:
    """Build an element from a ``start_tag`` / ``self_closing_tag`` node."""
    tag_name = ""
    attributes: list[MarkupAttribute] = []
    for child in tag_node.named_children:
        if child.type == "tag_name":
            tag_name = _text(child)
        elif child.type == "attribute":
            attr = _convert_attribute(child, source)
            if attr is not None:
                attributes.append(attr)
    if not tag_name:
        return None
    line, column = _position(tag_node, source)
    return MarkupElement(tag=tag_name, attributes=tuple(attributes), line=line, column=column)


def _collect(root: TSNode, source: bytes) -> list[MarkupElement]:
    """Pre-order walk: tags come out in document order."""
    elements: list[MarkupElement] = []
    stack: list[TSNode] = [root]
    while stack:
        node = stack.pop()
        if node.type in _OPAQUE_NODES:
            continue
        if node.type in _TAG_NODES:
            element = _convert_tag(node, source)
            if element is not None:
                elements.append(element)
            continue
        stack.extend(reversed(node.children))
    return elements


def _tag_name_of(element_node: TSNode) -> str:
    for child in element_node.children:
        if child.type in _TAG_NODES:
            name_node = next((c for c in child.named_children if c.type == "tag_name"), None)
            return _text(name_node)
    return ""


def _parse_tree(source: str) -> tuple[TSNode, bytes]:
    data = source.encode("utf-8")
    return Parser(_load_language()).parse(data).root_node, data


def parse_markup(source: str) -> list[MarkupElement]:
    """Return every element of an HTML-like document in document order."""
    if not source.strip():
        return []
    root, data = _parse_tree(source)
    return _collect(root, data)


def parse_sfc_template(source: str) -> list[MarkupElement]:
    """Return the elements inside the top-level ``<template>`` of a ``.vue`` file.

    The ``<template>`` wrapper itself is not reported.  A component without
    a template block yields an empty list.
    """
    if not source.strip():
        return []
    root, data = _parse_tree(source)
    elements: list[MarkupElement] = []
    for child in root.children:
        if _tag_name_of(child).lower() != "template":
            continue
        for inner in child.children:
            if inner.type in _TAG_NODES or inner.type == "end_tag":
                continue
            elements.extend(_collect(inner, data))
    return elements


def parse_file(path: Path) -> list[MarkupElement]:
    """Parse a template file, choosing SFC or plain-HTML mode by extension."""
    source = path.read_text(encoding="utf-8")
    if path.suffix.lower() in SFC_EXTENSIONS:
        return parse_sfc_template(source)
    return parse_markup(source)
