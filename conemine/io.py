"""Plain-text transaction files and result files.

Data files hold one transaction per line::

    3 1 2 3
    2 1 2

The first token of a line is the number of items on it and is not an item.
Result files hold one itemset per line as ``[i1 i2 ... ik] support``.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable
from pathlib import Path

from ._validation import TransactionInputError
from .results import FrequentItemset


def parse_line(line: str, line_no: int = 0) -> list[int]:
    """Parse one data line, dropping the leading row-length token."""
    tokens = line.split()
    if not tokens:
        return []

    values = []
    for token in tokens:
        try:
            values.append(int(token))
        except ValueError:
            raise TransactionInputError(f"Line {line_no}: {token!r} is not an integer.") from None

    declared, items = values[0], values[1:]
    if any(item < 0 for item in items):
        raise TransactionInputError(f"Line {line_no}: item ids must be non-negative, got {items}.")
    if declared != len(items):
        warnings.warn(
            f"Line {line_no}: row length says {declared} items but {len(items)} were found.",
            stacklevel=3,
        )
    return items


def read_transactions(path: str | Path) -> list[list[int]]:
    """Read a data file into rows of item ids.

    Blank lines become empty transactions so that row ids keep matching line
    numbers.

    Raises
    ------
    TransactionInputError
        If the file holds no lines or a token is not an integer.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        rows = [parse_line(line, line_no) for line_no, line in enumerate(f, start=1)]

    if not rows:
        raise TransactionInputError(f"No transactions found in {path}.")
    return rows


def write_results(path: str | Path, results: Iterable[FrequentItemset]) -> int:
    """Write one ``[i1 ... ik] support`` line per itemset and return the count."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    n = 0
    with open(path, "w", encoding="utf-8") as f:
        for entry in results:
            f.write(FrequentItemset(*entry).format())
            f.write("\n")
            n += 1
    return n
