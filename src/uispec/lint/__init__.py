"""Lint domain - component attribute rules, markup classifier, rule engine, linter."""

from uispec.lint.engine import Violation, check, check_element, format_message
from uispec.lint.linter import (
    FileReport,
    LintError,
    LintResult,
    collect_template_files,
    format_json,
    format_porcelain,
    format_rich,
    lint,
)
from uispec.lint.markup import (
    BoundAttribute,
    LiteralAttribute,
    MarkupAttribute,
    MarkupElement,
    attribute_name,
    is_empty,
    parse_attribute,
)
from uispec.lint.recommended import RECOMMENDED_OPTIONS
from uispec.lint.rules import (
    AttributeRequirement,
    ComponentRule,
    RuleGroup,
    RuleOptions,
    RuleRegistry,
    build_registry,
    load_rule_options,
    parse_rule_options,
)

__all__ = [
    "RECOMMENDED_OPTIONS",
    "AttributeRequirement",
    "BoundAttribute",
    "ComponentRule",
    "FileReport",
    "LintError",
    "LintResult",
    "LiteralAttribute",
    "MarkupAttribute",
    "MarkupElement",
    "RuleGroup",
    "RuleOptions",
    "RuleRegistry",
    "Violation",
    "attribute_name",
    "build_registry",
    "check",
    "check_element",
    "collect_template_files",
    "format_json",
    "format_message",
    "format_porcelain",
    "format_rich",
    "is_empty",
    "lint",
    "load_rule_options",
    "parse_attribute",
    "parse_rule_options",
]
