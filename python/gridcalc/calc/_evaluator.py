"""FormulaEvaluator: postfix evaluation of arithmetic formulas.

Formulas are converted to postfix by :mod:`gridcalc.calc._parser` and then
evaluated over a stack of floats. Cell references resolve through a lookup
callable, so the evaluator holds no state of its own beyond read access to
the store. Failures are :class:`CalcError` values internally and become
their sentinel strings (``"invalid"``, ``"#DIV/0!"``, ``"undefined"``) only
when the result is rendered for storage.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Callable

from gridcalc._cell import Cell
from gridcalc.calc._errors import CalcError
from gridcalc.calc._parser import NUMBER, REF, UNARY_MINUS, FormulaParser, Token, is_number

logger = logging.getLogger(__name__)

CellLookup = Callable[[str], "Cell | None"]


# ---------------------------------------------------------------------------
# Number helpers
# ---------------------------------------------------------------------------


def _parse_number(text: str) -> float | CalcError:
    """Parse a numeric-looking string; malformed ones (``"1.2.3"``) are invalid."""
    if not is_number(text):
        return CalcError.INVALID
    try:
        return float(text)
    except ValueError:
        return CalcError.INVALID


def format_number(value: float) -> str:
    """Render a float in plain decimal form.

    Integral values drop the fractional part (``8.0`` -> ``"8"``) and no
    exponent notation is used (``1e-07`` -> ``"0.0000001"``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def render(result: float | CalcError | str) -> str:
    """Storage form of an evaluation result."""
    if isinstance(result, CalcError):
        return result.code
    if isinstance(result, float):
        return format_number(result)
    return result


def _binary_op(left: float, op: str, right: float) -> float | CalcError:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        return CalcError.DIV0 if right == 0 else left / right
    # a stray "(" from unbalanced input
    return CalcError.INVALID


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class FormulaEvaluator:
    """Evaluates ``=``-prefixed arithmetic formulas.

    Usage::

        evaluator = FormulaEvaluator(store.get_cell_internal)
        evaluator.evaluate("=A1*2")   # -> "10"
    """

    def __init__(self, lookup: CellLookup) -> None:
        self._lookup = lookup
        self._parser = FormulaParser(lambda ref: lookup(ref) is not None)

    def evaluate(self, formula: str) -> str:
        """Evaluate *formula* and render the result as cell text.

        Text that does not start with ``=`` is returned unchanged.
        """
        return render(self.evaluate_typed(formula))

    def evaluate_typed(self, formula: str) -> float | CalcError | str:
        """Like :meth:`evaluate` but without rendering numbers and errors."""
        if not formula.startswith("="):
            return formula
        postfix = self._parser.postfix(formula)
        if isinstance(postfix, CalcError):
            logger.debug("Cannot parse formula %r: %s", formula, postfix)
            return postfix
        result = self._eval_postfix(postfix)
        if isinstance(result, CalcError):
            logger.debug("Formula %r evaluated to %s", formula, result)
        return result

    def _eval_postfix(self, postfix: list[Token]) -> float | CalcError:
        stack: list[float] = []
        for kind, text in postfix:
            if kind == NUMBER:
                value = _parse_number(text)
                if isinstance(value, CalcError):
                    return value
                stack.append(value)
            elif kind == REF:
                value = self._resolve_ref(text)
                if isinstance(value, CalcError):
                    return value
                stack.append(value)
            elif text == UNARY_MINUS:
                if stack:
                    stack.append(-stack.pop())
            else:
                if len(stack) < 2:
                    return CalcError.UNDEFINED
                right = stack.pop()
                left = stack.pop()
                result = _binary_op(left, text, right)
                if isinstance(result, CalcError):
                    return result
                stack.append(result)

        if not stack:
            return CalcError.UNDEFINED
        return stack[-1]

    def _resolve_ref(self, ref: str) -> float | CalcError:
        """Numeric value of a referenced cell, or INVALID."""
        cell = self._lookup(ref)
        if cell is None:
            return CalcError.INVALID
        return _parse_number(cell.value)


def evaluate(formula: str, lookup: CellLookup) -> str:
    """Evaluate *formula* against cells returned by *lookup*."""
    return FormulaEvaluator(lookup).evaluate(formula)
