"""Solvers module for Sudoku grids."""

from .base_solver import BaseSolver, SolverStats
from .backtracking_solver import BacktrackingSolver, SearchResult

__all__ = [
    "BaseSolver",
    "SolverStats",
    "BacktrackingSolver",
    "SearchResult",
]
