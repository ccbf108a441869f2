"""Reading puzzles from files and standard input."""

from __future__ import annotations
from typing import Iterator, Optional, Tuple, Union
import sys

from .core.errors import IncompleteGrid
from .core.grid import CELLS

ACCEPTED_CHARS = "0123456789_ "


def filter_puzzle(data: Union[bytes, str]) -> str:
    """
    Drop everything that is not a grid character.

    Digits, ``'_'`` and spaces are kept; line breaks, box separators and
    any other decoration are discarded.
    """
    if isinstance(data, bytes):
        data = data.decode("latin-1")
    return "".join(c for c in data if c in ACCEPTED_CHARS)


def read_puzzle(path: Optional[str] = None) -> str:
    """
    Read one puzzle from ``path``, or from standard input if None.

    Raises:
        IncompleteGrid: fewer or more than 81 grid characters remain after
            filtering.
        OSError: the file cannot be read.
    """
    if path is None:
        data = sys.stdin.buffer.read()
    else:
        with open(path, "rb") as f:
            data = f.read()
    text = filter_puzzle(data)
    if len(text) != CELLS:
        raise IncompleteGrid(len(text))
    return text


def read_puzzles(path: str) -> Iterator[Tuple[int, str]]:
    """
    Read a batch file holding one puzzle per line.

    Blank lines and lines starting with ``#`` are skipped. Lines are read
    as bytes and filtered like single puzzles, so stray non-ASCII bytes
    are dropped. They are not length-checked: one bad line does not stop
    the batch, ``Grid.deserialize`` reports it.

    Yields:
        ``(line_number, puzzle)`` pairs, line numbers starting at 1.
    """
    with open(path, "rb") as f:
        for line_number, line in enumerate(f, 1):
            stripped = line.strip()
            if not stripped or stripped.startswith(b"#"):
                continue
            yield line_number, filter_puzzle(line)
