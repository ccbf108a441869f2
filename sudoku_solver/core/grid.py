"""Sudoku grid of candidate sets with propagation on every fix."""

from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from .candidates import CandidateSet
from .errors import InvalidCharacter, InvalidLength, InvalidPlacement
from .propagation import SIZE, BOX, propagate

CELLS = SIZE * SIZE
UNSET_CHARS = "0 _"
DIGIT_CHARS = "123456789"
UNSET_DISPLAY = "_"


class Grid:
    """
    A 9x9 board where each cell holds the digits still possible there.

    Cells are addressed by column ``x`` and row ``y``, both 0-8. The grid
    keeps a count of fixed cells; it is complete once all 81 are fixed.

    A grid is only trustworthy after a successful ``fix``. When ``fix``
    returns False the grid is left half-propagated and must be thrown away,
    which is why the search always works on clones.
    """

    def __init__(self):
        self.cells: List[List[CandidateSet]] = [
            [CandidateSet() for _ in range(SIZE)] for _ in range(SIZE)
        ]
        self._fixed = 0

    @property
    def fixed_count(self) -> int:
        """Number of fixed cells."""
        return self._fixed

    def cell(self, x: int, y: int) -> CandidateSet:
        """Candidate set at column ``x``, row ``y``."""
        return self.cells[x][y]

    def fix(self, x: int, y: int, digit: int) -> bool:
        """
        Fix ``digit`` at (x, y) and propagate the consequences.

        Args:
            x, y: Cell position.
            digit: Digit to place (1-9).

        Returns:
            False if the digit is no longer possible there or propagation
            reaches a contradiction.
        """
        node = self.cell(x, y)
        if digit not in node:
            return False
        was_fixed = node.fixed
        node.fix(digit)
        if not propagate(self):
            return False
        if not was_fixed:
            self._fixed += 1
        return True

    def fix_next_forced(self) -> Tuple[bool, bool]:
        """
        Fix the first unfixed cell that propagation left with one digit.

        Cells are scanned column by column.

        Returns:
            ``(fixed, invalid)``: whether a forced cell was found, and
            whether fixing it reached a contradiction.
        """
        for x in range(SIZE):
            for y in range(SIZE):
                node = self.cells[x][y]
                if node.fixed or node.size() != 1:
                    continue
                return True, not self.fix(x, y, node.value())
        return False, False

    def first_unfixed(self) -> Optional[Tuple[int, int]]:
        """Position of the first unfixed cell, column by column, or None."""
        for x in range(SIZE):
            for y in range(SIZE):
                if not self.cells[x][y].fixed:
                    return x, y
        return None

    def complete(self) -> bool:
        """True once every cell is fixed."""
        return self._fixed == CELLS

    def clone(self) -> Grid:
        """Deep copy, independent of this grid."""
        new_grid = Grid.__new__(Grid)
        new_grid.cells = [[node.clone() for node in column] for column in self.cells]
        new_grid._fixed = self._fixed
        return new_grid

    def adopt(self, other: Grid) -> None:
        """Take over the cells and fixed count of a solved branch."""
        self.cells = other.cells
        self._fixed = other._fixed

    @classmethod
    def deserialize(cls, s: str) -> Grid:
        """
        Build a grid from its 81-character form.

        Characters are read row by row: index ``i`` is column ``i % 9``,
        row ``i // 9``. ``'1'``-``'9'`` are preset digits; ``'0'``, ``' '``
        and ``'_'`` are empty cells.

        Raises:
            InvalidLength: ``s`` is not 81 characters long.
            InvalidCharacter: ``s`` holds any other character.
            InvalidPlacement: a preset conflicts with an earlier one.
        """
        if len(s) != CELLS:
            raise InvalidLength(len(s))

        grid = cls()
        for i, c in enumerate(s):
            if c in UNSET_CHARS:
                continue
            if c not in DIGIT_CHARS:
                raise InvalidCharacter(c, i)
            x, y, digit = i % SIZE, i // SIZE, int(c)
            if not grid.fix(x, y, digit):
                raise InvalidPlacement(x, y, digit)
        return grid

    from_string = deserialize

    def serialize(self) -> str:
        """81-character form; unfixed cells are written as ``'_'``."""
        chars = []
        for y in range(SIZE):
            for x in range(SIZE):
                node = self.cells[x][y]
                chars.append(str(node.value()) if node.fixed else UNSET_DISPLAY)
        return "".join(chars)

    to_string = serialize

    def to_array(self) -> np.ndarray:
        """Fixed digits as a (row, column) int array, 0 for unfixed cells."""
        values = np.zeros((SIZE, SIZE), dtype=np.int32)
        for x in range(SIZE):
            for y in range(SIZE):
                node = self.cells[x][y]
                if node.fixed:
                    values[y, x] = node.value()
        return values

    def display(self) -> str:
        """
        Human-readable layout with the 3x3 boxes set apart.

        A space separates every three columns and a blank line every three
        rows. Not accepted back by ``deserialize``.
        """
        lines = []
        for y in range(SIZE):
            row = ""
            for x in range(SIZE):
                if x > 0 and x % BOX == 0:
                    row += " "
                node = self.cells[x][y]
                row += str(node.value()) if node.fixed else UNSET_DISPLAY
            lines.append(row)
            if y != SIZE - 1 and (y + 1) % BOX == 0:
                lines.append("")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"Grid(fixed={self._fixed})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return self._fixed == other._fixed and self.cells == other.cells
