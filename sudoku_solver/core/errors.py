"""Errors raised while building a grid from user input."""


class GridError(ValueError):
    """Base class for malformed or contradictory puzzle input."""


class InvalidLength(GridError):
    """The serialized grid is not exactly 81 characters long."""

    def __init__(self, length: int):
        super().__init__(f"invalid length: expected 81 characters, got {length}")
        self.length = length


class InvalidCharacter(GridError):
    """The serialized grid holds a character outside the accepted set."""

    def __init__(self, char: str, index: int):
        super().__init__(f"invalid char {char!r} at index {index}")
        self.char = char
        self.index = index


class InvalidPlacement(GridError):
    """A preset digit conflicts with another preset in its row, column or box."""

    def __init__(self, x: int, y: int, digit: int):
        super().__init__(f"invalid grid: {digit} cannot be placed at column {x}, row {y}")
        self.x = x
        self.y = y
        self.digit = digit


class IncompleteGrid(GridError):
    """Filtered input did not leave exactly 81 grid characters."""

    def __init__(self, length: int):
        super().__init__(f"incomplete grid: found {length} of 81 cells")
        self.length = length
