"""Sudoku solving by constraint propagation and backtracking."""

from .core import (
    CandidateSet,
    Grid,
    GridError,
    InvalidLength,
    InvalidCharacter,
    InvalidPlacement,
    IncompleteGrid,
)
from .solvers import BacktrackingSolver, SolverStats

__version__ = "1.0.0"

__all__ = [
    "CandidateSet",
    "Grid",
    "GridError",
    "InvalidLength",
    "InvalidCharacter",
    "InvalidPlacement",
    "IncompleteGrid",
    "BacktrackingSolver",
    "SolverStats",
]
