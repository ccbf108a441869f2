"""Command-line interface for the Sudoku solver."""

import argparse
import logging
import sys
from typing import List, Optional

from .benchmark import BatchRunner, Visualizer
from .core.errors import GridError
from .core.grid import Grid
from .reader import read_puzzle, read_puzzles
from .solvers import BacktrackingSolver

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sudoku",
        description="Sudoku solver using constraint propagation and backtracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle from a file
  sudoku solve puzzle.txt

  # Solve a puzzle from standard input
  sudoku solve < puzzle.txt

  # Solve one puzzle per line and write results and charts
  sudoku batch puzzles.txt --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a single puzzle")
    solve_parser.add_argument(
        "file", nargs="?", default=None,
        help="Puzzle file (default: standard input). Anything other than "
             "digits, '_' and spaces is ignored"
    )
    solve_parser.add_argument(
        "--stats", action="store_true",
        help="Show search statistics"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Solve one puzzle per line")
    batch_parser.add_argument(
        "file",
        help="File with one 81-character puzzle per line ('#' starts a comment)"
    )
    batch_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    batch_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )
    batch_parser.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar"
    )
    batch_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(EXIT_USAGE)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "solve":
        sys.exit(cmd_solve(args))
    elif args.command == "batch":
        sys.exit(cmd_batch(args))


def die(message: str) -> int:
    """Print a one-line diagnostic to stderr and return the failure status."""
    print(f"sudoku: {message}", file=sys.stderr)
    return EXIT_FAILURE


def cmd_solve(args) -> int:
    """Handle the solve command."""
    try:
        grid = Grid.deserialize(read_puzzle(args.file))
    except (GridError, OSError) as e:
        return die(str(e))

    solver = BacktrackingSolver()
    solution, stats = solver.solve(grid)
    if solution is None:
        return die("not solvable")

    print(solution)
    if args.stats:
        print()
        print(f"Solved in {stats.time_seconds:.4f}s")
        print(f"  Iterations: {stats.iterations:,}")
        print(f"  Nodes explored: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Max depth: {stats.max_depth}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")
    return EXIT_SUCCESS


def cmd_batch(args) -> int:
    """Handle the batch command."""
    try:
        puzzles = list(read_puzzles(args.file))
    except OSError as e:
        return die(str(e))

    log.info("Read %d puzzles from %s", len(puzzles), args.file)

    runner = BatchRunner(show_progress=not args.no_progress)
    results = runner.run(puzzles)
    summary = runner.get_summary()

    print("=" * 60)
    print("BATCH RESULTS")
    print("=" * 60)
    print(f"Puzzles: {summary['total_puzzles']}")
    print(f"Solved: {summary['total_solved']} ({summary['solve_rate']:.1f}%)")
    print(f"Unsolvable: {summary['total_unsolvable']}")
    print(f"Rejected: {summary['total_rejected']}")
    print(f"Failed: {summary['total_failed']}")
    if "avg_time_seconds" in summary:
        print(f"Avg Time: {summary['avg_time_seconds']:.4f}s")
        print(f"Avg Nodes: {summary['avg_nodes_explored']:,.1f}")

    paths = runner.save_results(args.output)

    visualizer = Visualizer(results, args.output)
    paths.append(visualizer.generate_summary_table())
    if not args.no_charts:
        paths.extend(visualizer.generate_all())

    print(f"\nResults saved to {args.output}/")
    for path in paths:
        print(f"  - {path.split('/')[-1]}")

    return EXIT_SUCCESS


if __name__ == "__main__":
    main()
