"""Recommended lint configuration: Element Plus input limits."""

from __future__ import annotations

from uispec.lint.rules import AttributeRequirement, ComponentRule, RuleGroup, RuleOptions

RECOMMENDED_NAME = "uispec/recommended"

RECOMMENDED_OPTIONS = RuleOptions(
    libraries=(
        RuleGroup(
            name="element-plus",
            components=(
                ComponentRule(
                    component="ElInput",
                    match_names=("el-input",),
                    attributes=(
                        AttributeRequirement(
                            name="maxlength",
                            reason="统一输入上限，防止超长数据写入后端",
                        ),
                        AttributeRequirement(
                            name="show-word-limit",
                            reason="搭配 maxlength 展示字数提示",
                            allow_empty=True,
                        ),
                    ),
                ),
                ComponentRule(
                    component="ElInputNumber",
                    match_names=("el-input-number",),
                    attributes=(
                        AttributeRequirement(
                            name="max",
                            reason="数值型输入必须设置 max 防止越界",
                        ),
                        AttributeRequirement(
                            name="min",
                            reason="数值型输入必须设置 min 防止越界",
                        ),
                    ),
                ),
            ),
        ),
    ),
)
