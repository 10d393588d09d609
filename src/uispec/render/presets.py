"""Built-in UI rule presets, one per supported component library.

Each preset maps a component's declared name to the :class:`UiRule` applied
when the resolver runs with ``use_preset`` enabled.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from uispec.render.props import UiRule

if TYPE_CHECKING:
    from collections.abc import Mapping

INPUT_PLACEHOLDER = "请输入{label}"
SELECT_PLACEHOLDER = "请选择{label}"

# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

ELEMENT_PLUS: Mapping[str, UiRule] = MappingProxyType(
    {
        "ElInput": UiRule(defaults={"clearable": True}, auto_placeholder=INPUT_PLACEHOLDER),
        "ElSelect": UiRule(
            defaults={"clearable": True, "filterable": True},
            auto_placeholder=SELECT_PLACEHOLDER,
        ),
        "ElButton": UiRule(defaults={"type": "warning", "loading": True}),
        "ElDatePicker": UiRule(
            defaults={"clearable": True, "valueFormat": "YYYY-MM-DD"},
            auto_placeholder=SELECT_PLACEHOLDER,
        ),
        "ElTimePicker": UiRule(defaults={"clearable": True}, auto_placeholder=SELECT_PLACEHOLDER),
    }
)

VANT: Mapping[str, UiRule] = MappingProxyType(
    {
        "VanField": UiRule(
            defaults={"clearable": True, "inputAlign": "right"},
            auto_placeholder=INPUT_PLACEHOLDER,
        ),
        "VanForm": UiRule(defaults={"colon": True}),
        "VanButton": UiRule(defaults={"round": True, "type": "danger"}),
    }
)

NAIVE_UI: Mapping[str, UiRule] = MappingProxyType(
    {
        "NInput": UiRule(defaults={"clearable": True}, auto_placeholder=INPUT_PLACEHOLDER),
        "NSelect": UiRule(
            defaults={"clearable": True, "filterable": True, "consistentMenuWidth": False},
            auto_placeholder=SELECT_PLACEHOLDER,
        ),
        "NDatePicker": UiRule(
            defaults={"clearable": True, "valueFormat": "yyyy-MM-dd"},
            auto_placeholder=SELECT_PLACEHOLDER,
        ),
    }
)

VARLET: Mapping[str, UiRule] = MappingProxyType(
    {
        "VarInput": UiRule(defaults={"clearable": True}, auto_placeholder=INPUT_PLACEHOLDER),
        "VarSelect": UiRule(defaults={"clearable": True}, auto_placeholder=SELECT_PLACEHOLDER),
    }
)

ANT_DESIGN_VUE: Mapping[str, UiRule] = MappingProxyType(
    {
        "AInput": UiRule(defaults={"allowClear": True}, auto_placeholder=INPUT_PLACEHOLDER),
        "ASelect": UiRule(
            defaults={"allowClear": True, "showSearch": True},
            auto_placeholder=SELECT_PLACEHOLDER,
        ),
        "ADatePicker": UiRule(
            defaults={"allowClear": True, "valueFormat": "YYYY-MM-DD"},
            auto_placeholder=SELECT_PLACEHOLDER,
        ),
    }
)

PRESETS: Mapping[str, Mapping[str, UiRule]] = MappingProxyType(
    {
        "element-plus": ELEMENT_PLUS,
        "vant": VANT,
        "naive-ui": NAIVE_UI,
        "varlet": VARLET,
        "ant-design-vue": ANT_DESIGN_VUE,
    }
)


def get_preset(library: str) -> Mapping[str, UiRule]:
    """Return the preset for *library*, or an empty mapping for unknown libraries."""
    return PRESETS.get(library, MappingProxyType({}))
