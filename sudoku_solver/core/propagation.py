"""
Naked-single constraint propagation.

Whenever a cell is down to one digit, that digit is struck from every other
cell sharing its column, row or box. Passes over all 27 groups repeat until
nothing changes or a cell runs out of digits.
"""

from __future__ import annotations
from typing import Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .grid import Grid

SIZE = 9
BOX = 3

Cell = Tuple[int, int]


def column_cells(x: int) -> Tuple[Cell, ...]:
    """Cells of column ``x``, top to bottom."""
    return tuple((x, y) for y in range(SIZE))


def row_cells(y: int) -> Tuple[Cell, ...]:
    """Cells of row ``y``, left to right."""
    return tuple((x, y) for x in range(SIZE))


def box_cells(x: int, y: int) -> Tuple[Cell, ...]:
    """Cells of the 3x3 box containing (x, y), row by row."""
    x0 = BOX * (x // BOX)
    y0 = BOX * (y // BOX)
    return tuple(
        (xx, yy)
        for yy in range(y0, y0 + BOX)
        for xx in range(x0, x0 + BOX)
    )


COLUMNS = tuple(column_cells(x) for x in range(SIZE))
ROWS = tuple(row_cells(y) for y in range(SIZE))
BOXES = tuple(
    box_cells(x, y)
    for x in range(0, SIZE, BOX)
    for y in range(0, SIZE, BOX)
)
# Pass order: columns, then rows, then boxes
GROUPS: Tuple[Tuple[Cell, ...], ...] = COLUMNS + ROWS + BOXES


def reduce_group(grid: Grid, group: Sequence[Cell]) -> Tuple[bool, bool]:
    """
    Apply the naked-single rule inside one group.

    Returns:
        ``(reduced, invalid)``. ``invalid`` is set as soon as a removal
        leaves a cell with no digits; the group is not processed further.
    """
    sets = [grid.cell(x, y) for x, y in group]
    reduced = False
    for i, single in enumerate(sets):
        if single.size() != 1:
            continue
        digit = single.value()
        for j, peer in enumerate(sets):
            if j == i:
                continue
            if peer.remove(digit):
                if peer.size() == 0:
                    return True, True
                reduced = True
    return reduced, False


def reduce(grid: Grid) -> Tuple[bool, bool]:
    """
    One full pass over every column, row and box.

    Returns:
        ``(reduced, invalid)`` aggregated over all groups. Stops at the
        first invalid group.
    """
    reduced = False
    for group in GROUPS:
        red, invalid = reduce_group(grid, group)
        if invalid:
            return True, True
        if red:
            reduced = True
    return reduced, False


def propagate(grid: Grid) -> bool:
    """
    Run reduction passes until a fixpoint.

    Returns:
        False if a contradiction was reached, True otherwise.
    """
    while True:
        reduced, invalid = reduce(grid)
        if invalid:
            return False
        if not reduced:
            return True
