"""Benchmark module for batch solving."""

from .benchmark import BatchRunner, BatchResult
from .visualizer import Visualizer

__all__ = ["BatchRunner", "BatchResult", "Visualizer"]
