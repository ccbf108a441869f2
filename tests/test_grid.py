"""Unit tests for candidate sets, the grid and propagation."""

import pytest
import numpy as np
from sudoku_solver.core.candidates import CandidateSet
from sudoku_solver.core.errors import InvalidCharacter, InvalidLength, InvalidPlacement
from sudoku_solver.core.grid import Grid
from sudoku_solver.core.propagation import BOXES, COLUMNS, GROUPS, ROWS, box_cells, propagate, reduce, reduce_group
from sudoku_solver.core.validator import is_valid_solution, respects_clues, validate_solution


PUZZLE = "_______6_28______4__7__58__5__34__2_4__5_1__8_1__76__3__51__2__3______81_9_______"
SOLUTION = "153498762289763514647215839578349126436521978912876453865134297324957681791682345"


class TestCandidateSet:
    """Tests for CandidateSet."""

    def test_new_set_holds_all_digits(self):
        """A fresh set allows every digit and is not fixed."""
        node = CandidateSet()
        assert node.size() == 9
        assert node.digits() == [1, 2, 3, 4, 5, 6, 7, 8, 9]
        assert not node.fixed

    def test_fix(self):
        """Fixing collapses the set to one digit."""
        node = CandidateSet()
        node.fix(7)
        assert node.fixed
        assert node.size() == 1
        assert node.value() == 7
        assert 7 in node
        assert 3 not in node

    def test_remove(self):
        """Removing reports whether the digit was present."""
        node = CandidateSet()
        assert node.remove(4)
        assert not node.remove(4)
        assert 4 not in node
        assert node.size() == 8

    def test_remove_from_fixed_is_noop(self):
        """Fixed sets never lose their digit."""
        node = CandidateSet()
        node.fix(2)
        assert not node.remove(2)
        assert node.value() == 2

    def test_value_ascending_single(self):
        """The remaining digit is found regardless of which ones were removed."""
        node = CandidateSet()
        for digit in (1, 2, 3, 4, 6, 7, 8, 9):
            node.remove(digit)
        assert not node.fixed
        assert node.value() == 5

    def test_value_with_no_candidates(self):
        """Reading an empty set is an invariant violation."""
        node = CandidateSet()
        for digit in range(1, 10):
            node.remove(digit)
        with pytest.raises(AssertionError, match="no values"):
            node.value()

    def test_value_with_multiple_candidates(self):
        """Reading a set with several digits is an invariant violation."""
        with pytest.raises(AssertionError, match="multiple values"):
            CandidateSet().value()

    def test_clone_is_independent(self):
        """Changing a clone leaves the original alone."""
        node = CandidateSet()
        copy = node.clone()
        copy.remove(1)
        assert 1 in node
        assert copy != node


class TestPropagation:
    """Tests for the naked-single reduction."""

    def test_groups(self):
        """27 groups of 9 distinct cells, every cell in exactly 3 groups."""
        assert len(COLUMNS) == len(ROWS) == len(BOXES) == 9
        assert len(GROUPS) == 27
        counts = {}
        for group in GROUPS:
            assert len(set(group)) == 9
            for cell in group:
                counts[cell] = counts.get(cell, 0) + 1
        assert len(counts) == 81
        assert set(counts.values()) == {3}

    def test_box_cells(self):
        """Any cell of a box yields the same box."""
        assert box_cells(4, 7) == box_cells(3, 6) == box_cells(5, 8)
        assert (3, 6) in box_cells(4, 7)

    def test_reduce_group_removes_fixed_digit(self):
        """A fixed cell strikes its digit from the rest of its group."""
        grid = Grid()
        grid.cell(0, 0).fix(5)
        reduced, invalid = reduce_group(grid, ROWS[0])
        assert reduced
        assert not invalid
        for x in range(1, 9):
            assert 5 not in grid.cell(x, 0)
        # Cells outside the group are untouched
        assert 5 in grid.cell(0, 1)

    def test_reduce_group_detects_contradiction(self):
        """Two cells narrowed to the same digit empty each other."""
        grid = Grid()
        for digit in range(1, 9):
            grid.cell(0, 0).remove(digit)
            grid.cell(1, 0).remove(digit)
        reduced, invalid = reduce_group(grid, ROWS[0])
        assert invalid

    def test_reduce_without_singles(self):
        """An empty grid has nothing to reduce."""
        assert reduce(Grid()) == (False, False)

    def test_propagate_reaches_fixpoint(self):
        """Propagation chains through cells narrowed along the way."""
        grid = Grid()
        for x, digit in enumerate((1, 2, 3, 4, 5, 6, 7, 8)):
            grid.cell(x, 0).fix(digit)
        assert propagate(grid)
        # The last cell of the row is forced to 9 and removes 9 from its column
        assert grid.cell(8, 0).digits() == [9]
        assert not grid.cell(8, 0).fixed
        assert 9 not in grid.cell(8, 5)
        assert reduce(grid) == (False, False)


class TestGrid:
    """Tests for Grid."""

    def test_create_empty_grid(self):
        """A new grid has no fixed cells."""
        grid = Grid()
        assert grid.fixed_count == 0
        assert not grid.complete()
        assert grid.serialize() == "_" * 81

    def test_fix_counts_one_cell(self):
        """Fixing counts only the requested cell, not propagated singles."""
        grid = Grid()
        for x in range(8):
            assert grid.fix(x, 0, x + 1)
        assert grid.fixed_count == 8
        assert grid.cell(8, 0).size() == 1
        assert not grid.cell(8, 0).fixed

    def test_fix_same_digit_twice(self):
        """Re-fixing a fixed cell keeps the count equal to the fixed cells."""
        grid = Grid()
        assert grid.fix(4, 4, 3)
        assert grid.fix(4, 4, 3)
        assert grid.fixed_count == 1

    def test_fix_impossible_digit(self):
        """A digit already excluded by a peer cannot be fixed."""
        grid = Grid()
        assert grid.fix(0, 0, 5)
        assert not grid.fix(8, 0, 5)
        assert not grid.fix(0, 8, 5)
        assert not grid.fix(2, 2, 5)

    def test_fix_next_forced(self):
        """Forced cells are fixed one at a time."""
        grid = Grid()
        for x in range(8):
            grid.fix(x, 0, x + 1)
        assert grid.fix_next_forced() == (True, False)
        assert grid.cell(8, 0).fixed
        assert grid.cell(8, 0).value() == 9
        assert grid.fixed_count == 9
        assert grid.fix_next_forced() == (False, False)

    def test_first_unfixed_is_column_major(self):
        """The scan runs down each column before moving right."""
        grid = Grid()
        assert grid.first_unfixed() == (0, 0)
        grid.fix(0, 0, 1)
        assert grid.first_unfixed() == (0, 1)

    def test_deserialize(self):
        """Presets are placed row by row."""
        grid = Grid.deserialize(PUZZLE)
        assert grid.cell(7, 0).value() == 6
        assert grid.cell(0, 1).value() == 2
        assert grid.cell(1, 1).value() == 8
        assert not grid.cell(0, 0).fixed
        assert grid.fixed_count == sum(1 for c in PUZZLE if c != "_")

    def test_unset_characters(self):
        """'0', ' ' and '_' all mean an empty cell."""
        a = Grid.deserialize("0" * 40 + "5" + "0" * 40)
        b = Grid.deserialize(" " * 40 + "5" + "_" * 40)
        assert a == b
        assert a.serialize() == "_" * 40 + "5" + "_" * 40

    def test_round_trip_complete_grid(self):
        """A complete grid serializes back to its input."""
        grid = Grid.deserialize(SOLUTION)
        assert grid.complete()
        assert grid.serialize() == SOLUTION
        assert Grid.from_string(SOLUTION).to_string() == SOLUTION

    def test_invalid_length(self):
        """Anything but 81 characters is rejected."""
        with pytest.raises(InvalidLength):
            Grid.deserialize("_" * 80)
        with pytest.raises(InvalidLength) as exc_info:
            Grid.deserialize(SOLUTION + "1")
        assert exc_info.value.length == 82

    def test_invalid_character(self):
        """Characters outside the accepted set are rejected."""
        with pytest.raises(InvalidCharacter) as exc_info:
            Grid.deserialize("_" * 10 + "x" + "_" * 70)
        assert exc_info.value.char == "x"
        assert exc_info.value.index == 10

        with pytest.raises(InvalidCharacter):
            Grid.deserialize("." * 81)

    @pytest.mark.parametrize("puzzle", [
        "55" + "_" * 79,                      # same row
        "5" + "_" * 8 + "5" + "_" * 71,       # same column
        "5" + "_" * 9 + "5" + "_" * 70,       # same box
    ])
    def test_duplicate_presets(self, puzzle):
        """Two equal presets in a row, column or box are rejected."""
        with pytest.raises(InvalidPlacement):
            Grid.deserialize(puzzle)

    def test_placement_contradiction_from_propagation(self):
        """A preset that leaves a peer without digits is rejected."""
        # (7, 0) and (8, 0) are left with {8, 9}; an 8 in their box empties one
        puzzle = "1234567__" + "_______8_" + "_" * 63
        with pytest.raises(InvalidPlacement) as exc_info:
            Grid.deserialize(puzzle)
        assert (exc_info.value.x, exc_info.value.y, exc_info.value.digit) == (7, 1, 8)

    def test_errors_are_value_errors(self):
        """Format errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Grid.deserialize("")

    def test_clone_is_independent(self):
        """Fixing a clone leaves the original alone."""
        grid = Grid.deserialize(PUZZLE)
        copy = grid.clone()
        assert copy == grid
        assert copy.fix(0, 0, 1)
        assert not grid.cell(0, 0).fixed
        assert copy.fixed_count == grid.fixed_count + 1

    def test_adopt(self):
        """Adopting takes over cells and count."""
        grid = Grid()
        solved = Grid.deserialize(SOLUTION)
        grid.adopt(solved)
        assert grid.complete()
        assert grid.serialize() == SOLUTION

    def test_to_array(self):
        """The array is indexed by (row, column)."""
        values = Grid.deserialize(PUZZLE).to_array()
        assert values.shape == (9, 9)
        assert values[0, 7] == 6
        assert values[1, 0] == 2
        assert values[0, 0] == 0

    def test_display(self):
        """Boxes are set apart by spaces and blank lines."""
        expected = (
            "153 498 762\n"
            "289 763 514\n"
            "647 215 839\n"
            "\n"
            "578 349 126\n"
            "436 521 978\n"
            "912 876 453\n"
            "\n"
            "865 134 297\n"
            "324 957 681\n"
            "791 682 345"
        )
        assert str(Grid.deserialize(SOLUTION)) == expected

    def test_display_unset_cells(self):
        """Unset cells are shown as '_'."""
        lines = Grid.deserialize(PUZZLE).display().split("\n")
        assert len(lines) == 11
        assert lines[0] == "___ ___ _6_"
        assert lines[3] == ""


class TestValidator:
    """Tests for validation utilities."""

    def test_valid_solution(self):
        """A correct solution passes every check."""
        assert is_valid_solution(Grid.deserialize(SOLUTION).to_array())
        assert validate_solution(Grid.deserialize(PUZZLE), Grid.deserialize(SOLUTION))

    def test_latin_square_is_not_enough(self):
        """Rows and columns alone do not make a solution."""
        latin = np.array([[(i + j) % 9 + 1 for j in range(9)] for i in range(9)])
        assert not is_valid_solution(latin)

    def test_incomplete_array(self):
        """Empty cells fail validation."""
        assert not is_valid_solution(Grid.deserialize(PUZZLE).to_array())
        assert not is_valid_solution(np.zeros((3, 3), dtype=np.int32))

    def test_respects_clues(self):
        """The solution must keep the puzzle's presets."""
        puzzle = Grid.deserialize("2" + "_" * 80)
        assert not respects_clues(puzzle, Grid.deserialize(SOLUTION))
        assert respects_clues(Grid.deserialize(PUZZLE), Grid.deserialize(SOLUTION))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
