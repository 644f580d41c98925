"""Reverse dependency graph and reactive propagation."""

from __future__ import annotations

import logging
from typing import Callable

from gridcalc.calc._parser import extract_references

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Tracks which cells must be recomputed when a cell changes.

    Edges point from a referenced cell to the cells whose formulas mention
    it, so ``dependents["A1"]`` is the set of formula cells that read A1.
    Cycles are not rejected.
    """

    __slots__ = ("dependents",)

    def __init__(self) -> None:
        # cell -> set of cells that read from it
        self.dependents: dict[str, set[str]] = {}

    def clear_edges_from(self, ref: str) -> None:
        """Drop *ref* from every dependent set (its old formula's edges)."""
        for deps in self.dependents.values():
            deps.discard(ref)

    def add_edge(self, referenced: str, dependent: str) -> None:
        if referenced not in self.dependents:
            self.dependents[referenced] = set()
        self.dependents[referenced].add(dependent)

    def set_formula(self, ref: str, formula: str | None) -> None:
        """Replace the edges of *ref* with those of *formula*."""
        self.clear_edges_from(ref)
        if formula is None:
            return
        for referenced in extract_references(formula):
            self.add_edge(referenced, ref)

    def dependents_of(self, ref: str) -> set[str]:
        return set(self.dependents.get(ref, ()))

    def propagate(
        self,
        start: str,
        recompute: Callable[[str], bool],
    ) -> list[str]:
        """Recompute everything downstream of *start*.

        Depth-first over an explicit stack with a visited set, so each
        reference is expanded at most once and cyclic formulas terminate.
        *recompute* is called for each dependent and returns True when it
        updated the cell; only updated cells have their own dependents
        visited. Returns the recomputed references in order.
        """
        recomputed: list[str] = []
        visited: set[str] = set()
        stack: list[str] = [start]

        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            for dep in list(self.dependents.get(current, ())):
                if recompute(dep):
                    recomputed.append(dep)
                    stack.append(dep)

        logger.debug("Propagated %s to %d cell(s)", start, len(recomputed))
        return recomputed

    def to_dict(self) -> dict[str, list[str]]:
        """Referenced cell -> sorted dependents, omitting empty sets."""
        return {ref: sorted(deps) for ref, deps in self.dependents.items() if deps}

    def __repr__(self) -> str:
        return f"<DependencyGraph edges={sum(len(d) for d in self.dependents.values())}>"
