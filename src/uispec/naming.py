"""Component name normalization: one comparable key for tag, declared and alias names."""

from __future__ import annotations

import re

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_CASE_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_SEGMENT_SPLIT_RE = re.compile(r"[-_]")


def normalize(name: str) -> str:
    """Return the canonical comparison key for a component name.

    Every character outside ``[A-Za-z0-9]`` is dropped and the rest is
    lower-cased, so ``el-input``, ``ElInput`` and ``EL_INPUT`` collide.
    """
    return _NON_ALNUM_RE.sub("", name).lower()


def to_kebab_case(name: str) -> str:
    """``ElInputNumber`` -> ``el-input-number``."""
    return _CASE_BOUNDARY_RE.sub(r"\1-\2", name).replace("_", "-").lower()


def to_pascal_case(name: str) -> str:
    """``el-input-number`` -> ``ElInputNumber``."""
    segments = [s for s in _SEGMENT_SPLIT_RE.split(name) if s]
    return "".join(s[0].upper() + s[1:] for s in segments)


def expand_variants(name: str) -> set[str]:
    """Return the raw, kebab-case and declared-style spellings of *name*.

    Whitespace-only input yields an empty set, so no rule can match it.
    """
    trimmed = name.strip()
    if not trimmed:
        return set()
    variants = {trimmed, to_kebab_case(trimmed), to_pascal_case(trimmed)}
    return {v for v in variants if v}


def normalized_variants(name: str) -> set[str]:
    """Normalized keys for every variant of *name* (registry insertion keys)."""
    keys = {normalize(v) for v in expand_variants(name)}
    keys.discard("")
    return keys
