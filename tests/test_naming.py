"""Tests for uispec.naming - component name normalization and variants."""

from __future__ import annotations

import pytest

from uispec.naming import (
    expand_variants,
    normalize,
    normalized_variants,
    to_kebab_case,
    to_pascal_case,
)


class TestNormalize:
    @pytest.mark.parametrize("name", ["el-input", "ElInput", "EL_INPUT", "el.input", "El Input"])
    def test_spellings_collide(self, name: str) -> None:
        assert normalize(name) == "elinput"

    def test_idempotent(self) -> None:
        once = normalize("Van-Field_2")
        assert normalize(once) == once

    def test_only_punctuation_is_empty(self) -> None:
        assert normalize("--__") == ""


class TestCaseConversion:
    def test_kebab_from_pascal(self) -> None:
        assert to_kebab_case("ElInputNumber") == "el-input-number"

    def test_kebab_from_snake(self) -> None:
        assert to_kebab_case("el_input") == "el-input"

    def test_pascal_from_kebab(self) -> None:
        assert to_pascal_case("el-input-number") == "ElInputNumber"

    def test_pascal_keeps_pascal(self) -> None:
        assert to_pascal_case("ElInput") == "ElInput"


class TestVariants:
    def test_expand_contains_raw_kebab_pascal(self) -> None:
        assert expand_variants("ElInput") >= {"ElInput", "el-input"}
        assert expand_variants("el-input") >= {"el-input", "ElInput"}

    def test_whitespace_only_has_no_variants(self) -> None:
        assert expand_variants("   ") == set()
        assert normalized_variants("   ") == set()

    def test_normalized_variants_single_key(self) -> None:
        assert normalized_variants("ElInput") == {"elinput"}
        assert normalized_variants(" el-input ") == {"elinput"}
