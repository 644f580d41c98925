"""CalcEngine protocol and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gridcalc._cell import Cell


@dataclass(frozen=True)
class CellDelta:
    """A single cell's value change from recalculation."""

    cell_ref: str
    old_value: str
    new_value: str
    formula: str | None = None  # the formula that produced new_value

    @property
    def changed(self) -> bool:
        return self.old_value != self.new_value


@dataclass(frozen=True)
class RecalcResult:
    """Result of writing one cell and propagating the change."""

    cell_ref: str
    cell: Cell
    deltas: tuple[CellDelta, ...] = ()

    @property
    def recomputed(self) -> list[str]:
        return [d.cell_ref for d in self.deltas]

    @property
    def changed_cells(self) -> int:
        return sum(1 for d in self.deltas if d.changed)


@runtime_checkable
class CalcEngine(Protocol):
    """Protocol for reactive spreadsheet engines."""

    def write(self, ref: str, text: str) -> RecalcResult:
        """Store *text* (literal or ``=`` formula) and update dependents."""
        ...

    def recompute(self, ref: str) -> Cell:
        """Re-evaluate the formula of *ref* against current values."""
        ...

    def bulk_load(self, ref: str, text: str) -> None:
        """Store *text* verbatim as a literal without propagation."""
        ...
