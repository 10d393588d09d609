"""Tests for uispec.config.loader - override file discovery and normalization."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from uispec.config.loader import (
    define_config,
    find_config_file,
    load_project_config,
    load_user_config,
    normalize_config,
    normalize_rule,
)
from uispec.render.props import UiRule, resolve_props

if TYPE_CHECKING:
    from pathlib import Path


def upper_label(props: dict[str, object]) -> dict[str, object]:
    """Transform used through a ``module:attr`` import string."""
    return {**props, "label": str(props.get("label", "")).upper()}


class TestFindConfigFile:
    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert find_config_file(tmp_path) is None

    def test_priority_order(self, tmp_path: Path) -> None:
        (tmp_path / "uas.config.py").write_text("config = {}\n", encoding="utf-8")
        (tmp_path / "uispec.config.toml").write_text("", encoding="utf-8")
        (tmp_path / "uispec.config.yaml").write_text("", encoding="utf-8")
        assert find_config_file(tmp_path) == tmp_path / "uispec.config.yaml"


class TestNormalize:
    def test_unknown_fields_ignored(self) -> None:
        rule = normalize_rule({"defaults": {"a": 1}, "colour": "red"})
        assert rule == UiRule(defaults={"a": 1})

    def test_malformed_fields_dropped(self) -> None:
        rule = normalize_rule({"defaults": [1], "autoPlaceholder": 3, "transform": 5})
        assert rule == UiRule()

    def test_non_mapping_rule_dropped(self) -> None:
        config = normalize_config({"vant": {"rules": {"VanField": "oops", "VanForm": {}}}})
        assert config is not None
        assert set(config["vant"].rules or {}) == {"VanForm"}

    def test_use_preset_spellings(self) -> None:
        config = normalize_config({"vant": {"usePreset": False}, "varlet": {"use_preset": True}})
        assert config is not None
        assert config["vant"].use_preset is False
        assert config["varlet"].use_preset is True

    def test_non_bool_use_preset_ignored(self) -> None:
        config = normalize_config({"vant": {"usePreset": "no"}})
        assert config is not None
        assert config["vant"].use_preset is None

    def test_non_mapping_library_dropped(self) -> None:
        assert normalize_config({"vant": 1}) is None
        assert normalize_config(["vant"]) is None

    def test_transform_import_string(self) -> None:
        rule = normalize_rule({"transform": f"{__name__}:upper_label"})
        assert rule is not None
        assert resolve_props(rule, explicit_props={"label": "ab"})["label"] == "AB"

    def test_bad_transform_import_string(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            rule = normalize_rule({"transform": "nowhere.module:fn"})
        assert rule == UiRule()
        assert "cannot import transform" in caplog.text

    @pytest.mark.parametrize("template", ["请输入{name}", "请输入{", "{}", "{label:d}"])
    def test_unusable_placeholder_template_dropped(
        self, template: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            config = normalize_config(
                {"element-plus": {"rules": {"ElInput": {"autoPlaceholder": template}}}}
            )
        assert config is not None
        rules = config["element-plus"].rules or {}
        assert rules["ElInput"].auto_placeholder is False
        assert "ignoring autoPlaceholder" in caplog.text
        assert resolve_props(rules["ElInput"], explicit_props={"label": "x"}) == {"label": "x"}

    def test_label_template_kept(self) -> None:
        rule = normalize_rule({"autoPlaceholder": "填写{label}!"})
        assert rule is not None
        assert rule.auto_placeholder == "填写{label}!"
        assert resolve_props(rule, explicit_props={"label": "名称"})["placeholder"] == "填写名称!"

    def test_define_config_identity(self) -> None:
        data = {"vant": {}}
        assert define_config(data) is data


class TestLoadUserConfig:
    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "uispec.config.yml"
        path.write_text(
            "element-plus:\n"
            "  usePreset: false\n"
            "  rules:\n"
            "    ElInput:\n"
            "      defaults: {clearable: false}\n"
            "      autoPlaceholder: '填写{label}'\n",
            encoding="utf-8",
        )
        config = load_user_config(path)
        assert config is not None
        override = config["element-plus"]
        assert override.use_preset is False
        rule = (override.rules or {})["ElInput"]
        assert dict(rule.defaults) == {"clearable": False}
        assert rule.auto_placeholder == "填写{label}"

    def test_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "uispec.config.toml"
        path.write_text(
            '[vant]\nusePreset = true\n\n[vant.rules.VanField.defaults]\nclearable = false\n',
            encoding="utf-8",
        )
        config = load_user_config(path)
        assert config is not None
        assert config["vant"].use_preset is True
        assert dict((config["vant"].rules or {})["VanField"].defaults) == {"clearable": False}

    def test_python_default_export(self, tmp_path: Path) -> None:
        path = tmp_path / "uispec.config.py"
        path.write_text(
            "from uispec.config.loader import define_config\n"
            "\n"
            "default = define_config({\n"
            "    'naive-ui': {\n"
            "        'rules': {\n"
            "            'NInput': {'autoPlaceholder': lambda label: label + '?'},\n"
            "        },\n"
            "    },\n"
            "})\n",
            encoding="utf-8",
        )
        config = load_user_config(path)
        assert config is not None
        rule = (config["naive-ui"].rules or {})["NInput"]
        assert resolve_props(rule, explicit_props={"label": "x"})["placeholder"] == "x?"

    def test_python_namespace_export(self, tmp_path: Path) -> None:
        path = tmp_path / "uas.config.py"
        path.write_text("vant = {'usePreset': False}\n_private = {'x': 1}\n", encoding="utf-8")
        config = load_user_config(path)
        assert config is not None
        assert set(config) == {"vant"}

    def test_python_reloads_edits(self, tmp_path: Path) -> None:
        path = tmp_path / "uispec.config.py"
        path.write_text("config = {'vant': {'usePreset': False}}\n", encoding="utf-8")
        first = load_user_config(path)
        path.write_text("config = {'vant': {'usePreset': True}}\n", encoding="utf-8")
        second = load_user_config(path)
        assert first is not None and second is not None
        assert first["vant"].use_preset is False
        assert second["vant"].use_preset is True

    def test_failure_logged_and_absent(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "uispec.config.py"
        path.write_text("raise RuntimeError('broken config')\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_user_config(path) is None
        assert "broken config" in caplog.text

    def test_invalid_yaml_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "uispec.config.yaml"
        path.write_text("vant: [\n", encoding="utf-8")
        assert load_user_config(path) is None

    def test_none_path(self) -> None:
        assert load_user_config(None) is None


class TestLoadProjectConfig:
    def test_discovers_file(self, tmp_path: Path) -> None:
        (tmp_path / "uispec.config.yaml").write_text("vant: {usePreset: false}\n", "utf-8")
        config = load_project_config(tmp_path)
        assert config is not None
        assert config["vant"].use_preset is False

    def test_no_file(self, tmp_path: Path) -> None:
        assert load_project_config(tmp_path) is None
