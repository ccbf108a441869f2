"""Base solver interface and run statistics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import time
import tracemalloc

from ..core.grid import Grid

log = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0
    max_depth: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "max_depth": self.max_depth,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for grid solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = True):
        """
        Args:
            track_memory: Record peak allocation with tracemalloc. Tracing
                slows the run down noticeably, so batch runs turn it off.
        """
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, grid: Grid) -> tuple[Optional[Grid], SolverStats]:
        """
        Solve a grid with timing and memory tracking.

        The input grid is never modified.

        Args:
            grid: The puzzle to solve.

        Returns:
            Tuple of (solution or None, stats). None means the puzzle has
            no solution.
        """
        self.reset_stats()

        if self.track_memory:
            tracemalloc.start()

        start_time = time.perf_counter()

        try:
            solution = self._solve(grid.clone())
            self.stats.solved = solution is not None and solution.complete()
        except AssertionError:
            # Internal invariant broken: a bug, not an unsolvable puzzle
            if self.track_memory:
                tracemalloc.stop()
            raise
        except Exception as e:
            log.exception("%s failed", self.name)
            self.stats.extra["error"] = str(e)
            solution = None

        self.stats.time_seconds = time.perf_counter() - start_time

        if self.track_memory:
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        return solution, self.stats

    @abstractmethod
    def _solve(self, grid: Grid) -> Optional[Grid]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            grid: A copy of the puzzle to solve (can be modified).

        Returns:
            The solved grid, or None if no solution exists.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
