"""Depth-first backtracking search interleaved with constraint propagation."""

from __future__ import annotations
from enum import Enum
from typing import Optional
import logging

from .base_solver import BaseSolver
from ..core.grid import Grid

log = logging.getLogger(__name__)


class SearchResult(Enum):
    """Outcome of one search call."""
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    NOTHING_TO_SEARCH = "nothing_to_search"


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search over candidate digits.

    For the first unfixed cell (scanning column by column) every remaining
    digit is tried in ascending order on a clone of the grid. After the
    digit is fixed, cells that propagation has narrowed to a single digit
    are fixed as well. A complete clone is the answer; otherwise the search
    recurses on it. Failed clones are simply dropped, and the first
    solution found is copied back into the caller's grid.

    No cell-ordering heuristic is used and only the first solution is
    returned.
    """

    name = "Backtracking+Propagation"

    def _solve(self, grid: Grid) -> Optional[Grid]:
        """Solve using propagation and backtracking."""
        self.stats.iterations = 0
        self.stats.backtracks = 0
        self.stats.nodes_explored = 0
        self.stats.max_depth = 0

        result = self.search(grid)
        if result is SearchResult.NOTHING_TO_SEARCH:
            log.debug("Grid already complete, nothing to search")
            return grid
        if result is SearchResult.SOLVED:
            return grid
        log.debug("Search exhausted after %d nodes", self.stats.nodes_explored)
        return None

    def search(self, grid: Grid, depth: int = 0) -> SearchResult:
        """
        Recursive search step.

        On success the solved cells are adopted into ``grid``; on failure
        ``grid`` is left untouched.
        """
        self.stats.iterations += 1
        self.stats.max_depth = max(self.stats.max_depth, depth)

        cell = grid.first_unfixed()
        if cell is None:
            return SearchResult.NOTHING_TO_SEARCH

        x, y = cell
        for digit in grid.cell(x, y).digits():
            self.stats.nodes_explored += 1
            branch = grid.clone()
            if not branch.fix(x, y, digit) or not self._fix_forced(branch):
                log.debug("depth %d: %d at (%d, %d) contradicts", depth, digit, x, y)
                self.stats.backtracks += 1
                continue

            if branch.complete() or self.search(branch, depth + 1) is SearchResult.SOLVED:
                grid.adopt(branch)
                return SearchResult.SOLVED

            self.stats.backtracks += 1

        return SearchResult.EXHAUSTED

    @staticmethod
    def _fix_forced(grid: Grid) -> bool:
        """
        Fix every cell propagation has narrowed to one digit.

        Returns:
            False if one of those fixes reaches a contradiction.
        """
        while True:
            fixed, invalid = grid.fix_next_forced()
            if invalid:
                return False
            if not fixed:
                return True

    def solve_string(self, s: str) -> Optional[str]:
        """
        Solve a puzzle given in its 81-character form.

        Raises:
            GridError: ``s`` is malformed or has conflicting presets.

        Returns:
            The solved grid in 81-character form, or None if unsolvable.
        """
        solution, _ = self.solve(Grid.deserialize(s))
        if solution is None:
            return None
        return solution.serialize()
