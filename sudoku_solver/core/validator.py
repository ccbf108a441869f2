"""Validation utilities for solved grids."""

from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING

from .propagation import SIZE, BOX

if TYPE_CHECKING:
    from .grid import Grid

_EXPECTED = np.arange(1, SIZE + 1)


def _holds_every_digit(unit: np.ndarray) -> bool:
    return np.array_equal(np.sort(unit.ravel()), _EXPECTED)


def is_valid_solution(values: np.ndarray) -> bool:
    """
    Check that every row, column and box holds 1-9 exactly once.

    Args:
        values: A (9, 9) int array indexed by (row, column), as returned by
            ``Grid.to_array``.

    Returns:
        True if the array is a complete, conflict-free solution.
    """
    if values.shape != (SIZE, SIZE):
        return False

    for i in range(SIZE):
        if not _holds_every_digit(values[i, :]):
            return False
        if not _holds_every_digit(values[:, i]):
            return False

    for box_row in range(0, SIZE, BOX):
        for box_col in range(0, SIZE, BOX):
            if not _holds_every_digit(values[box_row:box_row + BOX, box_col:box_col + BOX]):
                return False

    return True


def respects_clues(puzzle: Grid, solution: Grid) -> bool:
    """Check that every fixed digit of ``puzzle`` is kept in ``solution``."""
    clues = puzzle.to_array()
    answer = solution.to_array()
    mask = clues != 0
    return bool(np.array_equal(clues[mask], answer[mask]))


def validate_solution(puzzle: Grid, solution: Grid) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if the solution is complete, valid and keeps the puzzle's clues.
    """
    return solution.complete() and is_valid_solution(solution.to_array()) and respects_clues(puzzle, solution)
