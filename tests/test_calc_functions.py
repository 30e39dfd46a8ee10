"""Tests for the function whitelist and registry."""

from __future__ import annotations

import pytest

from xlsearch.calc._functions import FUNCTION_WHITELIST, FunctionRegistry, is_supported
from xlsearch.calc._values import ExcelError


class TestWhitelist:
    def test_categories(self) -> None:
        assert FUNCTION_WHITELIST["XLOOKUP"] == "lookup"
        assert FUNCTION_WHITELIST["INDEX"] == "reference"

    def test_is_supported_case_insensitive(self) -> None:
        assert is_supported("vlookup")
        assert is_supported("XMatch")
        assert not is_supported("SUM")

    def test_every_whitelisted_function_has_a_builtin(self) -> None:
        registry = FunctionRegistry()
        for name in FUNCTION_WHITELIST:
            assert registry.has(name)


class TestFunctionRegistry:
    def test_call_builtin(self) -> None:
        registry = FunctionRegistry()
        assert registry.call("MATCH", [5, [1, 3, 5, 5, 9], 0]) == 3
        assert registry.call("xlookup", [2, [1, 2], ["a", "b"]]) == "b"
        assert registry.call("CHOOSE", [2, "x", "y"]) == "y"
        assert registry.call("ROWS", [[[1], [2]]]) == 2

    def test_unknown_function_is_name_error(self) -> None:
        registry = FunctionRegistry()
        assert registry.call("SUM", [1, 2]) is ExcelError.NAME

    @pytest.mark.parametrize(
        ("name", "args"),
        [
            ("MATCH", [1]),
            ("VLOOKUP", [1, [[1, 2]]]),
            ("XLOOKUP", [1, [1], [1], None, 0, 1, "extra"]),
            ("XMATCH", [1]),
            ("INDEX", [[1]]),
            ("CHOOSE", [1]),
            ("ROWS", []),
            ("COLUMNS", [[1], [2]]),
        ],
    )
    def test_wrong_arity_is_na(self, name: str, args: list) -> None:
        registry = FunctionRegistry()
        assert registry.call(name, args) is ExcelError.NA

    def test_register_custom(self) -> None:
        registry = FunctionRegistry()
        registry.register("double", lambda args: args[0] * 2)
        assert registry.has("DOUBLE")
        assert registry.call("Double", [21]) == 42
        assert "DOUBLE" in registry.supported_functions

    def test_registries_are_independent(self) -> None:
        first = FunctionRegistry()
        first.register("ONLYHERE", lambda args: 1)
        assert not FunctionRegistry().has("ONLYHERE")

    def test_get(self) -> None:
        registry = FunctionRegistry()
        assert registry.get("hlookup") is not None
        assert registry.get("NOPE") is None
