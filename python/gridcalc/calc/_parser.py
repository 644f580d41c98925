"""Formula parser: reference extraction, tokenizer and shunting-yard conversion."""

from __future__ import annotations

import re
from typing import Callable, NamedTuple

from gridcalc._utils import is_ascii_digits
from gridcalc.calc._errors import CalcError

# ---------------------------------------------------------------------------
# Reference extraction
# ---------------------------------------------------------------------------

_CELL_REF_RE = re.compile(r"[A-Z]+[0-9]+")


def extract_references(formula: str) -> list[str]:
    """All ``A1``-style references in *formula*, in order of occurrence.

    Duplicates are kept: ``"=A1+A1"`` -> ``["A1", "A1"]``.
    """
    return _CELL_REF_RE.findall(formula)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

NUMBER = "number"
REF = "ref"
OPERATOR = "operator"

UNARY_MINUS = "u-"
OPERATOR_CHARS = "+-*/()"

PRECEDENCE: dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    UNARY_MINUS: 3,
}


class Token(NamedTuple):
    kind: str
    text: str


def is_number(text: str) -> bool:
    """ASCII digits and dots with an optional leading ``-`` (``"1.2.3"`` passes)."""
    body = text[1:] if text.startswith("-") else text
    return bool(body) and all(ch == "." or is_ascii_digits(ch) for ch in body)


def tokenize(formula: str) -> list[str]:
    """Split a formula body into operand runs and single-char operators.

    The leading ``=`` (if any) is skipped. Whitespace is dropped everywhere,
    including inside operand runs.
    """
    body = formula[1:] if formula.startswith("=") else formula
    tokens: list[str] = []
    current = ""
    for ch in body:
        if ch.isspace():
            continue
        if ch in OPERATOR_CHARS:
            if current:
                tokens.append(current)
                current = ""
            tokens.append(ch)
        else:
            current += ch
    if current:
        tokens.append(current)
    return tokens


# ---------------------------------------------------------------------------
# Shunting-yard
# ---------------------------------------------------------------------------


def to_postfix(
    tokens: list[str],
    is_known: Callable[[str], bool],
) -> list[Token] | CalcError:
    """Convert infix tokens to postfix order.

    Operand runs are classified as numbers or cell references; a run that is
    neither a number nor a reference accepted by *is_known* makes the whole
    formula ``CalcError.INVALID``. Unbalanced parentheses are tolerated.
    """
    output: list[Token] = []
    stack: list[str] = []
    prev: str | None = None

    for tok in tokens:
        if tok not in OPERATOR_CHARS:
            if is_number(tok):
                output.append(Token(NUMBER, tok))
            elif is_known(tok):
                output.append(Token(REF, tok))
            else:
                return CalcError.INVALID
        elif tok == "-" and (prev is None or (prev in OPERATOR_CHARS and prev != ")")):
            # prefix minus binds tighter than anything, so it never pops
            stack.append(UNARY_MINUS)
        elif tok == "(":
            stack.append(tok)
        elif tok == ")":
            while stack:
                op = stack.pop()
                if op == "(":
                    break
                output.append(Token(OPERATOR, op))
        else:
            prec = PRECEDENCE[tok]
            while stack and PRECEDENCE.get(stack[-1], 0) >= prec:
                output.append(Token(OPERATOR, stack.pop()))
            stack.append(tok)
        prev = tok

    while stack:
        output.append(Token(OPERATOR, stack.pop()))
    return output


class FormulaParser:
    """Parses formulas against a set of known cell references.

    *is_known* decides whether an operand run that is not a number names a
    stored cell.
    """

    def __init__(self, is_known: Callable[[str], bool]) -> None:
        self._is_known = is_known

    def postfix(self, formula: str) -> list[Token] | CalcError:
        return to_postfix(tokenize(formula), self._is_known)
