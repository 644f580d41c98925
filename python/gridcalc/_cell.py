"""Cell record stored in a spreadsheet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Cell:
    """Text value of a cell plus the formula that produced it, if any.

    ``value`` is always a string: a literal, a rendered number, or one of
    the error sentinels (``"invalid"``, ``"#DIV/0!"``, ``"undefined"``).
    ``formula`` holds the original ``=``-prefixed text, or None for literals.
    """

    value: str
    formula: str | None = None

    @property
    def is_formula(self) -> bool:
        return self.formula is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialized shape used at the host boundary."""
        return {"value": self.value, "formula": self.formula}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cell:
        return cls(value=data["value"], formula=data.get("formula"))
