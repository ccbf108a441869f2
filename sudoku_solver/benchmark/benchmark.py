"""Batch solving of many puzzles with collected statistics."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple
import json
import logging
import os

from tqdm import tqdm

from ..core.errors import GridError
from ..core.grid import Grid
from ..solvers import BaseSolver, BacktrackingSolver

log = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Result of solving one puzzle in a batch."""
    puzzle_id: int
    puzzle: str
    solved: bool
    solution: Optional[str]
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    max_depth: int
    rejected: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "puzzle": self.puzzle,
            "solved": self.solved,
            "solution": self.solution,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "max_depth": self.max_depth,
            "rejected": self.rejected,
            **self.extra
        }


class BatchRunner:
    """
    Runs a solver over a list of puzzles and collects performance metrics.

    Malformed puzzles are recorded as rejected results carrying an
    ``error`` entry instead of stopping the batch. A solver error on a
    well-formed puzzle also carries ``error`` but is not a rejection.
    """

    def __init__(self, solver: Optional[BaseSolver] = None, show_progress: bool = True):
        """
        Args:
            solver: Solver to run (default: BacktrackingSolver without
                memory tracking).
            show_progress: Show a tqdm progress bar.
        """
        self.solver = solver or BacktrackingSolver(track_memory=False)
        self.show_progress = show_progress
        self.results: List[BatchResult] = []

    def run(self, puzzles: Iterable[Tuple[int, str]]) -> List[BatchResult]:
        """
        Solve every ``(puzzle_id, puzzle)`` pair.

        Returns:
            List of BatchResult objects, in input order.
        """
        puzzles = list(puzzles)
        self.results = []

        for puzzle_id, puzzle in tqdm(puzzles, desc="Solving", disable=not self.show_progress):
            self.results.append(self._run_single(puzzle_id, puzzle))

        return self.results

    def _run_single(self, puzzle_id: int, puzzle: str) -> BatchResult:
        """Run the solver on a single puzzle."""
        try:
            grid = Grid.deserialize(puzzle)
        except GridError as e:
            log.warning("Puzzle %d rejected: %s", puzzle_id, e)
            return BatchResult(
                puzzle_id=puzzle_id,
                puzzle=puzzle,
                solved=False,
                solution=None,
                time_seconds=0.0,
                memory_bytes=0,
                iterations=0,
                backtracks=0,
                nodes_explored=0,
                max_depth=0,
                rejected=True,
                extra={"error": str(e)}
            )

        solution, stats = self.solver.solve(grid)
        return BatchResult(
            puzzle_id=puzzle_id,
            puzzle=puzzle,
            solved=stats.solved,
            solution=solution.serialize() if solution is not None else None,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            max_depth=stats.max_depth,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from batch results."""
        total = len(self.results)
        solved = [r for r in self.results if r.solved]
        rejected = [r for r in self.results if r.rejected]
        searched = [r for r in self.results if not r.rejected]
        failed = [r for r in searched if "error" in r.extra]

        summary: Dict[str, Any] = {
            "algorithm": self.solver.name,
            "total_puzzles": total,
            "total_solved": len(solved),
            "total_unsolvable": len(searched) - len(solved) - len(failed),
            "total_rejected": len(rejected),
            "total_failed": len(failed),
            "solve_rate": len(solved) / total * 100 if total else 0.0,
        }

        if searched:
            times = [r.time_seconds for r in searched]
            summary.update({
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_nodes_explored": sum(r.nodes_explored for r in searched) / len(searched),
                "avg_backtracks": sum(r.backtracks for r in searched) / len(searched),
            })

        return summary

    def save_results(self, output_dir: str) -> List[str]:
        """
        Save raw results and summary as JSON.

        Returns:
            Paths of the written files.
        """
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "batch_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "batch_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        return [results_file, summary_file]
