"""CellStore: column-label trie with a row -> Cell map on each node."""

from __future__ import annotations

from collections.abc import Iterator

from gridcalc._cell import Cell
from gridcalc._utils import split_ref


class _Node:
    __slots__ = ("children", "rows")

    def __init__(self) -> None:
        # one child per column character
        self.children: dict[str, _Node] = {}
        # row string -> cell, for the column spelled by the path to this node
        self.rows: dict[str, Cell] = {}


class CellStore:
    """Stores cells keyed by ``(column, row)``.

    Columns are walked one character at a time, so ``"AB"`` lives under
    ``root -> "A" -> "B"``. Nodes are created on first insert and never
    pruned. A missing node or row entry means the cell was never written.
    """

    __slots__ = ("_root", "_size")

    def __init__(self) -> None:
        self._root = _Node()
        self._size = 0

    # ------------------------------------------------------------------
    # Column/row access
    # ------------------------------------------------------------------

    def insert(self, column: str, row: str, cell: Cell) -> None:
        """Set (or overwrite) the cell at *column*/*row*."""
        node = self._root
        for ch in column:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = _Node()
            node = child
        if row not in node.rows:
            self._size += 1
        node.rows[row] = cell

    def get_internal(self, column: str, row: str) -> Cell | None:
        """The stored cell, or None if it was never written."""
        node = self._root
        for ch in column:
            node = node.children.get(ch)  # type: ignore[assignment]
            if node is None:
                return None
        return node.rows.get(row)

    def get(self, column: str, row: str) -> Cell | str:
        """Host-facing read: unwritten cells read as ``""``."""
        cell = self.get_internal(column, row)
        return "" if cell is None else cell

    # ------------------------------------------------------------------
    # Reference-string access
    # ------------------------------------------------------------------

    def insert_cell(self, ref: str, cell: Cell) -> None:
        column, row = split_ref(ref)
        self.insert(column, row, cell)

    def get_cell_internal(self, ref: str) -> Cell | None:
        column, row = split_ref(ref)
        return self.get_internal(column, row)

    def get_cell(self, ref: str) -> Cell | str:
        column, row = split_ref(ref)
        return self.get(column, row)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def items(self) -> Iterator[tuple[str, Cell]]:
        """Yield ``(reference, cell)`` for every stored cell, depth first."""
        stack: list[tuple[str, _Node]] = [("", self._root)]
        while stack:
            column, node = stack.pop()
            for row, cell in node.rows.items():
                yield f"{column}{row}", cell
            for ch in sorted(node.children, reverse=True):
                stack.append((column + ch, node.children[ch]))

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, str) and self.get_cell_internal(ref) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        for ref, _ in self.items():
            yield ref

    def __repr__(self) -> str:
        return f"<CellStore cells={self._size}>"
