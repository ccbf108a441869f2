"""Core module: candidate sets, the grid and constraint propagation."""

from .candidates import CandidateSet
from .errors import GridError, InvalidLength, InvalidCharacter, InvalidPlacement, IncompleteGrid
from .grid import Grid
from .propagation import propagate
from .validator import is_valid_solution, respects_clues, validate_solution

__all__ = [
    "CandidateSet",
    "Grid",
    "GridError",
    "InvalidLength",
    "InvalidCharacter",
    "InvalidPlacement",
    "IncompleteGrid",
    "propagate",
    "is_valid_solution",
    "respects_clues",
    "validate_solution",
]
