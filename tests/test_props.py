"""Tests for uispec.render.props - prop resolution and the with_ui_rules wrapper."""

from __future__ import annotations

from typing import Any

import pytest

from uispec.render.props import UiRule, placeholder_for, resolve_props, with_ui_rules


class TestResolveProps:
    def test_precedence_defaults_attrs_explicit(self) -> None:
        rule = UiRule(defaults={"clearable": True, "size": "small", "type": "text"})
        props = resolve_props(
            rule,
            passed_attrs={"size": "large", "type": "password"},
            explicit_props={"type": "number"},
        )
        assert props == {"clearable": True, "size": "large", "type": "number"}

    def test_declared_props_not_forwarded_as_attrs(self) -> None:
        rule = UiRule(defaults={"size": "small"})
        props = resolve_props(rule, declared={"size"}, passed_attrs={"size": "large"})
        assert props == {"size": "small"}

    def test_transform_replaces_result(self) -> None:
        rule = UiRule(defaults={"a": 1}, transform=lambda p: {"b": p["a"] + 1})
        assert resolve_props(rule) == {"b": 2}

    def test_placeholder_from_label(self) -> None:
        rule = UiRule(auto_placeholder=True)
        props = resolve_props(rule, explicit_props={"label": "姓名"})
        assert props["placeholder"] == "请输入姓名"

    def test_placeholder_template(self) -> None:
        rule = UiRule(auto_placeholder="请选择{label}")
        assert resolve_props(rule, passed_attrs={"label": "城市"})["placeholder"] == "请选择城市"

    def test_placeholder_callable(self) -> None:
        rule = UiRule(auto_placeholder=lambda label: f"Enter {label}")
        assert resolve_props(rule, explicit_props={"label": "name"})["placeholder"] == "Enter name"

    def test_existing_placeholder_kept(self) -> None:
        rule = UiRule(auto_placeholder=True)
        props = resolve_props(rule, explicit_props={"label": "姓名", "placeholder": "custom"})
        assert props["placeholder"] == "custom"

    def test_empty_placeholder_replaced(self) -> None:
        rule = UiRule(auto_placeholder=True)
        props = resolve_props(rule, explicit_props={"label": "姓名", "placeholder": ""})
        assert props["placeholder"] == "请输入姓名"

    def test_unusable_template_falls_back_to_default(self) -> None:
        rule = UiRule(auto_placeholder="请输入{name}")
        props = resolve_props(rule, explicit_props={"label": "姓名"})
        assert props["placeholder"] == "请输入姓名"
        assert placeholder_for("{", "城市") == "请输入城市"

    @pytest.mark.parametrize("label", [None, ""])
    def test_no_label_no_placeholder(self, label: str | None) -> None:
        rule = UiRule(auto_placeholder=True)
        assert "placeholder" not in resolve_props(rule, explicit_props={"label": label})

    def test_placeholder_disabled(self) -> None:
        assert "placeholder" not in resolve_props(UiRule(), explicit_props={"label": "x"})

    def test_placeholder_runs_after_transform(self) -> None:
        rule = UiRule(auto_placeholder=True, transform=lambda p: {**p, "label": "新"})
        assert resolve_props(rule)["placeholder"] == "请输入新"

    def test_inputs_not_mutated(self) -> None:
        attrs = {"size": "large"}
        rule = UiRule(defaults={"clearable": True}, auto_placeholder=True)
        resolve_props(rule, passed_attrs=attrs, explicit_props={"label": "x"})
        assert attrs == {"size": "large"}
        assert dict(rule.defaults) == {"clearable": True}


class TestUiRule:
    def test_defaults_read_only(self) -> None:
        rule = UiRule(defaults={"a": 1})
        with pytest.raises(TypeError):
            rule.defaults["a"] = 2  # type: ignore[index]

    def test_placeholder_for_default_template(self) -> None:
        assert placeholder_for(True, "年龄") == "请输入年龄"


class TestWithUiRules:
    def test_wrapper_name_and_render(self) -> None:
        calls: list[tuple[dict[str, Any], Any]] = []

        def original(props: dict[str, Any], slots: Any) -> str:
            calls.append((props, slots))
            return "vnode"

        wrapped = with_ui_rules("ElInput", original, UiRule(defaults={"clearable": True}))
        assert wrapped.name == "UiEnhanced_ElInput"
        assert wrapped({"size": "large"}, {"label": "x"}, {"default": "slot"}) == "vnode"
        assert calls == [({"clearable": True, "size": "large", "label": "x"}, {"default": "slot"})]

    def test_declared_filters_attrs(self) -> None:
        wrapped = with_ui_rules("ElInput", print, UiRule(), declared=["modelValue"])
        assert wrapped.props_for({"modelValue": 1, "id": "a"}) == {"id": "a"}

    def test_non_callable_original(self) -> None:
        wrapped = with_ui_rules("ElInput", object(), UiRule())
        with pytest.raises(TypeError, match="not callable"):
            wrapped()


class TestExplicitOverDefault:
    def test_explicit_wins_and_placeholder_added(self) -> None:
        rule = UiRule(defaults={"clearable": True}, auto_placeholder=True)
        assert resolve_props(rule, explicit_props={"clearable": False}) == {"clearable": False}
        props = resolve_props(rule, explicit_props={"clearable": False, "label": "Name"})
        assert props == {"clearable": False, "label": "Name", "placeholder": "请输入Name"}
