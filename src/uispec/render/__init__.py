"""Render domain - UI rules, prop resolution, built-in presets."""

from uispec.render.presets import PRESETS, get_preset
from uispec.render.props import (
    DEFAULT_PLACEHOLDER_TEMPLATE,
    EnhancedComponent,
    UiRule,
    placeholder_for,
    resolve_props,
    with_ui_rules,
)

__all__ = [
    "DEFAULT_PLACEHOLDER_TEMPLATE",
    "PRESETS",
    "EnhancedComponent",
    "UiRule",
    "get_preset",
    "placeholder_for",
    "resolve_props",
    "with_ui_rules",
]
