"""Spreadsheet: reactive engine over a CellStore and a DependencyGraph.

Writes go through :meth:`Spreadsheet.write`, which evaluates formulas,
rewires the dependency graph and recomputes every formula cell downstream
of the written reference. :meth:`Spreadsheet.bulk_load` is the raw path for
initial population: text is stored verbatim and nothing is recomputed.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from typing import Any

from gridcalc._cell import Cell
from gridcalc._store import CellStore
from gridcalc._utils import column_label
from gridcalc.calc._evaluator import FormulaEvaluator
from gridcalc.calc._graph import DependencyGraph
from gridcalc.calc._parser import extract_references
from gridcalc.calc._protocol import CellDelta, RecalcResult

logger = logging.getLogger(__name__)


class Spreadsheet:
    """A single sheet of cells addressed by ``A1``-style references.

    Usage::

        sheet = Spreadsheet()
        sheet.set_cell_value("A1", "5")
        sheet.set_cell_value("A2", "=A1+1")
        sheet.set_cell_value("A1", "10")
        sheet.get_cell("A2")   # Cell(value='11', formula='=A1+1')

    Not thread-safe; callers serialize mutations per instance.
    """

    __slots__ = ("_store", "_graph", "_evaluator")

    def __init__(self) -> None:
        self._store = CellStore()
        self._graph = DependencyGraph()
        self._evaluator = FormulaEvaluator(self._store.get_cell_internal)

    @property
    def store(self) -> CellStore:
        return self._store

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    # ------------------------------------------------------------------
    # Engine operations
    # ------------------------------------------------------------------

    def write(self, ref: str, text: str) -> RecalcResult:
        """Store *text* at *ref* and recompute its dependents.

        ``=``-prefixed text is a formula: it is evaluated now and its
        references replace the cell's edges in the dependency graph. Any
        other text is a literal and clears a previous formula.
        """
        if text.startswith("="):
            cell = Cell(value=self._evaluator.evaluate(text), formula=text)
            self._store.insert_cell(ref, cell)
            self._graph.set_formula(ref, text)
        else:
            cell = Cell(value=text)
            self._store.insert_cell(ref, cell)
            self._graph.set_formula(ref, None)

        deltas: list[CellDelta] = []

        def _recompute(dep: str) -> bool:
            current = self._store.get_cell_internal(dep)
            if current is None or current.formula is None:
                return False
            try:
                updated = self.recompute(dep)
            except (KeyError, ValueError) as e:
                logger.debug("Skipping recompute of %s: %s", dep, e)
                return False
            self._store.insert_cell(dep, updated)
            deltas.append(CellDelta(
                cell_ref=dep,
                old_value=current.value,
                new_value=updated.value,
                formula=updated.formula,
            ))
            return True

        self._graph.propagate(ref, _recompute)
        return RecalcResult(cell_ref=ref, cell=dataclasses.replace(cell), deltas=tuple(deltas))

    def recompute(self, ref: str) -> Cell:
        """Re-evaluate the formula stored at *ref*.

        Raises KeyError if nothing is stored at *ref* and ValueError if the
        cell is a literal. The store is not modified.
        """
        cell = self._store.get_cell_internal(ref)
        if cell is None:
            raise KeyError(f"Cell '{ref}' not found")
        if cell.formula is None:
            raise ValueError(f"Cell '{ref}' has no formula")
        return Cell(value=self._evaluator.evaluate(cell.formula), formula=cell.formula)

    def bulk_load(self, ref: str, text: str) -> None:
        """Store *text* verbatim as a literal; no formula handling, no propagation."""
        self._store.insert_cell(ref, Cell(value=text))

    def evaluate(self, formula: str) -> str:
        """Evaluate *formula* against the current cells without storing it."""
        return self._evaluator.evaluate(formula)

    # ------------------------------------------------------------------
    # Host boundary
    # ------------------------------------------------------------------

    def get_cell(self, ref: str) -> Cell | str:
        """The cell at *ref*, or ``""`` if it was never written."""
        cell = self._store.get_cell_internal(ref)
        return "" if cell is None else dataclasses.replace(cell)

    def get_cell_split(self, col_index: int, row_index: int) -> Cell | str:
        """Like :meth:`get_cell` with 0-based column and row indexes."""
        cell = self._store.get_internal(column_label(col_index), str(row_index + 1))
        return "" if cell is None else dataclasses.replace(cell)

    def set_cell_value(self, ref: str, text: str) -> Spreadsheet:
        """Perform :meth:`write` and return a snapshot of the new state."""
        self.write(ref, text)
        return self.copy()

    def init_cell(self, ref: str, text: str) -> None:
        """Perform :meth:`bulk_load`."""
        self.bulk_load(ref, text)

    def extract_references(self, formula: str) -> list[str]:
        return extract_references(formula)

    def input_text(self, ref: str) -> str:
        """Text to show when editing *ref*: its formula if any, else its value."""
        cell = self._store.get_cell_internal(ref)
        if cell is None:
            return ""
        return cell.formula if cell.formula is not None else cell.value

    def __getitem__(self, ref: str) -> Cell | str:
        """``sheet['A1']`` -> Cell or ``""``."""
        return self.get_cell(ref)

    def __setitem__(self, ref: str, text: str) -> None:
        """``sheet['A1'] = '=B1*2'`` -- shorthand for :meth:`write`."""
        self.write(ref, text)

    def __contains__(self, ref: object) -> bool:
        return ref in self._store

    def __len__(self) -> int:
        return len(self._store)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """``{ref: {"value": ..., "formula": ...}}`` for every stored cell."""
        return {ref: cell.to_dict() for ref, cell in self._store.items()}

    def copy(self) -> Spreadsheet:
        """Independent deep copy of the cells and the dependency graph."""
        sheet = object.__new__(Spreadsheet)
        sheet._store = copy.deepcopy(self._store)
        sheet._graph = copy.deepcopy(self._graph)
        sheet._evaluator = FormulaEvaluator(sheet._store.get_cell_internal)
        return sheet

    def __repr__(self) -> str:
        return f"<Spreadsheet cells={len(self._store)}>"
