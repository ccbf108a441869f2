"""Charts and tables for batch results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BatchResult


class Visualizer:
    """
    Chart generator for batch solving results.

    Only puzzles that reached the solver are plotted; rejected puzzles
    appear in the summary table counts.
    """

    SOLVED_COLOR = "#2ecc71"
    UNSOLVED_COLOR = "#e74c3c"

    def __init__(self, results: List[BatchResult], output_dir: str = "results"):
        """
        Args:
            results: List of batch results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.searched = [r for r in results if not r.rejected]
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        sns.set_theme(style="whitegrid")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        if not self.searched:
            return []
        return [
            self.plot_time_distribution(),
            self.plot_nodes_vs_time(),
        ]

    def plot_time_distribution(self) -> str:
        """Histogram of solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        times = [r.time_seconds for r in self.searched]
        sns.histplot(times, ax=ax, color=self.SOLVED_COLOR, edgecolor="black", linewidth=0.5)

        ax.axvline(np.median(times), color="black", linestyle="--", linewidth=1,
                   label=f"median {np.median(times):.4f}s")
        ax.set_xlabel("Time (seconds)", fontsize=12)
        ax.set_ylabel("Puzzles", fontsize=12)
        ax.set_title("Solve Time Distribution", fontsize=14, fontweight="bold")
        ax.legend()

        plt.tight_layout()
        path = os.path.join(self.output_dir, "time_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return path

    def plot_nodes_vs_time(self) -> str:
        """Scatter plot of search nodes against solve time."""
        fig, ax = plt.subplots(figsize=(10, 6))

        colors = [self.SOLVED_COLOR if r.solved else self.UNSOLVED_COLOR for r in self.searched]
        ax.scatter(
            [max(r.nodes_explored, 1) for r in self.searched],
            [r.time_seconds for r in self.searched],
            c=colors, edgecolors="black", linewidths=0.5, alpha=0.8
        )

        ax.set_xlabel("Nodes Explored (Log Scale)", fontsize=12)
        ax.set_ylabel("Time (seconds)", fontsize=12)
        ax.set_title("Search Size vs Solve Time", fontsize=14, fontweight="bold")
        # Node counts span several orders of magnitude
        ax.set_xscale("log")

        plt.tight_layout()
        path = os.path.join(self.output_dir, "nodes_vs_time.png")
        plt.savefig(path, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return path

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        solved = sum(1 for r in self.results if r.solved)
        rejected = len(self.results) - len(self.searched)
        failed = sum(1 for r in self.searched if "error" in r.extra)
        unsolvable = len(self.searched) - solved - failed

        if self.searched:
            avg_time = np.mean([r.time_seconds for r in self.searched])
            avg_nodes = np.mean([r.nodes_explored for r in self.searched])
            avg_backtracks = np.mean([r.backtracks for r in self.searched])
        else:
            avg_time = avg_nodes = avg_backtracks = 0.0

        lines = [
            "# Batch Summary\n",
            "| Puzzles | Solved | Unsolvable | Rejected | Failed | Avg Time | Avg Nodes | Avg Backtracks |",
            "|---------|--------|------------|----------|--------|----------|-----------|----------------|",
            f"| {len(self.results)} | {solved} | {unsolvable} | {rejected} | {failed} | {avg_time:.4f}s "
            f"| {avg_nodes:,.1f} | {avg_backtracks:,.1f} |",
        ]

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "batch_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
