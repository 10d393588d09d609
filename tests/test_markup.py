"""Tests for uispec.lint.markup - attribute classification."""

from __future__ import annotations

import pytest

from uispec.lint.markup import (
    BoundAttribute,
    LiteralAttribute,
    attribute_name,
    is_empty,
    parse_attribute,
)


class TestParseAttribute:
    def test_literal(self) -> None:
        attr = parse_attribute("maxlength", "50", line=3, column=12)
        assert attr == LiteralAttribute("maxlength", "50", line=3, column=12)

    def test_bare_literal_has_no_value(self) -> None:
        attr = parse_attribute("disabled")
        assert isinstance(attr, LiteralAttribute)
        assert attr.raw_value is None

    @pytest.mark.parametrize(
        ("raw", "directive", "argument"),
        [
            (":maxlength", "bind", "maxlength"),
            ("v-bind:maxlength", "bind", "maxlength"),
            (":max.number", "bind", "max"),
            (".value", "bind", "value"),
            ("v-bind", "bind", None),
            (":[key]", "bind", None),
            ("@click", "on", "click"),
            ("v-on:input.stop", "on", "input"),
            ("#default", "slot", "default"),
            ("v-model", "model", None),
            ("v-model:value", "model", "value"),
            ("v-if", "if", None),
        ],
    )
    def test_directives(self, raw: str, directive: str, argument: str | None) -> None:
        attr = parse_attribute(raw, "expr")
        assert attr == BoundAttribute(directive, argument)


class TestAttributeName:
    def test_literal_name(self) -> None:
        assert attribute_name(LiteralAttribute("maxlength", "10")) == "maxlength"

    def test_bind_with_argument(self) -> None:
        assert attribute_name(BoundAttribute("bind", "maxlength")) == "maxlength"

    def test_bind_without_argument_names_nothing(self) -> None:
        assert attribute_name(BoundAttribute("bind", None)) == ""

    def test_non_bind_names_nothing(self) -> None:
        assert attribute_name(BoundAttribute("on", "maxlength")) == ""
        assert attribute_name(BoundAttribute("model", "value")) == ""

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(TypeError):
            attribute_name("maxlength")  # type: ignore[arg-type]


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_empty_literal(self, value: str | None) -> None:
        assert is_empty(LiteralAttribute("maxlength", value))

    def test_filled_literal(self) -> None:
        assert not is_empty(LiteralAttribute("maxlength", " 50 "))

    def test_bound_never_empty(self) -> None:
        assert not is_empty(BoundAttribute("bind", "maxlength"))
        assert not is_empty(BoundAttribute("bind", None))
