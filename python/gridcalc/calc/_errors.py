"""Typed error values produced by formula evaluation."""

from __future__ import annotations

from typing import Any


class CalcError:
    """Error result of a formula evaluation.

    Use ``CalcError.of(code)`` to get a cached singleton for each code.
    The code is the sentinel string written into the cell, and errors compare
    equal to it (``CalcError.DIV0 == "#DIV/0!"``).
    """

    __slots__ = ("code",)
    _cache: dict[str, CalcError] = {}

    INVALID: CalcError
    DIV0: CalcError
    UNDEFINED: CalcError

    def __init__(self, code: str) -> None:
        self.code = code

    @classmethod
    def of(cls, code: str) -> CalcError:
        if code not in cls._cache:
            cls._cache[code] = cls(code)
        return cls._cache[code]

    def __repr__(self) -> str:
        return f"CalcError({self.code!r})"

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CalcError):
            return self.code == other.code
        if isinstance(other, str):
            return self.code == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)


# Singletons
CalcError.INVALID = CalcError.of("invalid")
CalcError.DIV0 = CalcError.of("#DIV/0!")
CalcError.UNDEFINED = CalcError.of("undefined")


def is_error(val: Any) -> bool:
    """Return True if *val* is a CalcError instance."""
    return isinstance(val, CalcError)
