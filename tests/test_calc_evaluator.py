"""Tests for gridcalc.calc FormulaEvaluator."""

from __future__ import annotations

import pytest

from gridcalc._cell import Cell
from gridcalc.calc._errors import CalcError, is_error
from gridcalc.calc._evaluator import FormulaEvaluator, evaluate, format_number


def _evaluator(**cells: str) -> FormulaEvaluator:
    store = {ref: Cell(value) for ref, value in cells.items()}
    return FormulaEvaluator(store.get)


class TestArithmetic:
    @pytest.mark.parametrize(
        ("formula", "expected"),
        [
            ("=1+2", "3"),
            ("=7/2", "3.5"),
            ("=2+3*4", "14"),
            ("=(2+3)*4", "20"),
            ("=-5+3", "-2"),
            ("=2*-3", "-6"),
            ("=--5", "5"),
            ("=-(2+3)*4", "-20"),
            ("=8-2-1", "5"),
            ("=1/3", "0.3333333333333333"),
            ("=0.1+0.2", "0.30000000000000004"),
            ("= 1 +  2", "3"),
            ("=2+3)", "5"),
        ],
    )
    def test_expression(self, formula: str, expected: str) -> None:
        assert _evaluator().evaluate(formula) == expected

    def test_literal_passthrough(self) -> None:
        assert _evaluator().evaluate("hello") == "hello"
        assert _evaluator().evaluate("1+2") == "1+2"


class TestCellReferences:
    def test_numeric_reference(self) -> None:
        ev = _evaluator(A1="5")
        assert ev.evaluate("=A1*2") == "10"

    def test_negative_stored_value(self) -> None:
        ev = _evaluator(A1="-3")
        assert ev.evaluate("=A1*2") == "-6"

    def test_multiple_references(self) -> None:
        ev = _evaluator(A1="4", B2="0.5")
        assert ev.evaluate("=A1*B2+A1") == "6"

    def test_unknown_reference_invalid(self) -> None:
        assert _evaluator().evaluate("=Z99+1") == "invalid"

    def test_non_numeric_value_invalid(self) -> None:
        ev = _evaluator(B1="abc")
        assert ev.evaluate("=B1+1") == "invalid"

    def test_empty_value_invalid(self) -> None:
        ev = _evaluator(B1="")
        assert ev.evaluate("=B1+1") == "invalid"

    def test_sentinel_value_invalid(self) -> None:
        ev = _evaluator(B1="#DIV/0!")
        assert ev.evaluate("=B1*2") == "invalid"

    def test_non_ascii_digit_value_invalid(self) -> None:
        ev = _evaluator(A1="５", B1="٣")
        assert ev.evaluate("=A1+1") == "invalid"
        assert ev.evaluate("=B1+1") == "invalid"

    def test_non_ascii_digit_literal_invalid(self) -> None:
        assert _evaluator().evaluate("=５+1") == "invalid"


class TestErrors:
    def test_division_by_zero(self) -> None:
        assert _evaluator().evaluate("=5/0") == "#DIV/0!"

    def test_division_by_zero_expression(self) -> None:
        assert _evaluator().evaluate("=5/(2-2)") == "#DIV/0!"

    def test_empty_formula_undefined(self) -> None:
        assert _evaluator().evaluate("=") == "undefined"

    def test_empty_parens_undefined(self) -> None:
        assert _evaluator().evaluate("=()") == "undefined"

    def test_missing_operand_undefined(self) -> None:
        assert _evaluator().evaluate("=5+") == "undefined"

    def test_malformed_number_invalid(self) -> None:
        assert _evaluator().evaluate("=1.2.3+1") == "invalid"

    def test_stray_open_paren_invalid(self) -> None:
        assert _evaluator().evaluate("=2*(3") == "invalid"

    def test_typed_results(self) -> None:
        ev = _evaluator()
        assert ev.evaluate_typed("=1+1") == 2.0
        assert ev.evaluate_typed("=1/0") is CalcError.DIV0
        assert is_error(ev.evaluate_typed("=X"))


class TestModuleEvaluate:
    def test_lookup_callable(self) -> None:
        cells = {"A1": Cell("2")}
        assert evaluate("=A1+A1", cells.get) == "4"


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (8.0, "8"),
            (-2.0, "-2"),
            (0.0, "0"),
            (3.5, "3.5"),
            (1e-07, "0.0000001"),
            (1e21, "1000000000000000000000"),
            (float("inf"), "inf"),
            (float("-inf"), "-inf"),
        ],
    )
    def test_rendering(self, value: float, expected: str) -> None:
        assert format_number(value) == expected


class TestCalcError:
    def test_singletons(self) -> None:
        assert CalcError.of("invalid") is CalcError.INVALID
        assert CalcError.of("#DIV/0!") is CalcError.DIV0

    def test_equals_sentinel_string(self) -> None:
        assert CalcError.DIV0 == "#DIV/0!"
        assert CalcError.UNDEFINED == "undefined"
        assert CalcError.INVALID != "undefined"

    def test_str(self) -> None:
        assert str(CalcError.INVALID) == "invalid"
