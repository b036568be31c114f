"""Turn the supported input shapes into rows of items.

Two layouts are understood:

* **long format**: one ``(transaction id, item)`` pair per record, as pandas,
  polars or pyarrow data, or already grouped as a list of lists;
* **one-hot**: a 0/1 or boolean matrix with one column per item.
"""

from __future__ import annotations

import time
from collections import Counter
from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING, Any

from ._compat import to_dataframe

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl
    import pyarrow as pa

    from ._compat import DataFrame


def from_transactions(
    data: DataFrame | Sequence[Sequence[str | int]] | Any,
    transaction_col: Hashable | None = None,
    item_col: Hashable | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> list[list[Any]]:
    """Group long-format records into one list of items per transaction.

    Parameters
    ----------
    data
        A pandas / polars ``DataFrame`` or a ``pyarrow.Table`` holding a
        transaction id column and an item column, or a list of lists that is
        already grouped.
    transaction_col
        Transaction id column.  Defaults to the first column.
    item_col
        Item column.  Defaults to the second column.
    min_item_count
        Drop items seen in fewer transactions than this.
    verbose
        Print progress with timings.

    Returns
    -------
    list[list]
        Transactions in order of first appearance of their id.  Item values
        are left as they are; :func:`encode_items` turns labels into ids.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"order_id": [1, 1, 1, 2, 2, 3], "item": [3, 4, 5, 3, 5, 8]})
    >>> from_transactions(df)
    [[3, 4, 5], [3, 5], [8]]
    """
    data = to_dataframe(data)

    if isinstance(data, (list, tuple)):
        return _group_rows(data, min_item_count, verbose)

    import pandas as pd

    if isinstance(data, pd.DataFrame):
        return _group_frame(data, transaction_col, item_col, min_item_count, verbose)

    raise TypeError(f"Expected a Pandas/Polars DataFrame, PyArrow Table or list of lists, got {type(data)}")


def from_pandas(
    df: pd.DataFrame,
    transaction_col: Hashable | None = None,
    item_col: Hashable | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> list[list[Any]]:
    """:func:`from_transactions` for a pandas frame."""
    return from_transactions(df, transaction_col, item_col, min_item_count, verbose)


def from_polars(
    df: pl.DataFrame,
    transaction_col: Hashable | None = None,
    item_col: Hashable | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> list[list[Any]]:
    """:func:`from_transactions` for a polars frame (needs pyarrow)."""
    return from_transactions(df, transaction_col, item_col, min_item_count, verbose)


def from_arrow(
    table: pa.Table,
    transaction_col: Hashable | None = None,
    item_col: Hashable | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> list[list[Any]]:
    """:func:`from_transactions` for a ``pyarrow.Table``."""
    return from_transactions(table, transaction_col, item_col, min_item_count, verbose)


def from_dense(
    data: pd.DataFrame | np.ndarray | Any,
    item_names: Sequence[Any] | None = None,
) -> tuple[list[list[int]], list[Any] | None]:
    """Read a one-hot matrix as rows of column indices.

    Returns the rows and the column labels: *item_names* when given, else the
    frame's columns, else ``None`` for a bare array.
    """
    import numpy as np

    data = to_dataframe(data)
    if item_names is not None:
        labels = list(item_names)
    elif hasattr(data, "columns"):
        labels = list(data.columns)
    else:
        labels = None

    matrix = np.asarray(data)
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2-D one-hot matrix, got an array with {matrix.ndim} dimension(s).")

    invalid = np.argwhere((matrix != 0) & (matrix != 1))
    if len(invalid):
        row, col = invalid[0]
        raise ValueError(
            f"The allowed values for a one-hot matrix are True, False, 0, 1. Found value {matrix[row, col]}"
        )

    if labels is not None and len(labels) != matrix.shape[1]:
        raise ValueError(f"Got {len(labels)} item names for a matrix with {matrix.shape[1]} columns.")

    return [np.flatnonzero(row).tolist() for row in matrix.astype(bool)], labels


def encode_items(
    transactions: Sequence[Sequence[Any]],
) -> tuple[list[list[int]], list[Any] | None]:
    """Give every distinct item a dense integer id.

    Tables that already hold only non-negative integers come back unchanged,
    with ``None`` labels.  Anything else is relabelled: labels are sorted
    (numbers first, then strings) and id ``i`` stands for ``labels[i]``.
    """
    from ._validation import _is_item_id

    if all(_is_item_id(item) and item >= 0 for txn in transactions for item in txn):
        return [[int(item) for item in txn] for txn in transactions], None

    labels = sorted({item for txn in transactions for item in txn}, key=lambda x: (isinstance(x, str), x))
    ids = {label: i for i, label in enumerate(labels)}
    return [[ids[item] for item in txn] for txn in transactions], labels


def _group_rows(
    transactions: Sequence[Sequence[Any]],
    min_item_count: int,
    verbose: int,
) -> list[list[Any]]:
    t0 = time.perf_counter()
    if verbose:
        print(f"[{time.strftime('%X')}] Reading {len(transactions):,} transactions from list of lists...")

    rows = [list(txn) for txn in transactions]
    if min_item_count > 1:
        seen = Counter(item for row in rows for item in set(row))
        rows = [[item for item in row if seen[item] >= min_item_count] for row in rows]

    if verbose:
        print(f"[{time.strftime('%X')}] Done in {time.perf_counter() - t0:.2f}s.")
    return rows


def _group_frame(
    df: pd.DataFrame,
    transaction_col: Hashable | None,
    item_col: Hashable | None,
    min_item_count: int,
    verbose: int,
) -> list[list[Any]]:
    import pandas as pd

    t0 = time.perf_counter()
    if verbose:
        print(f"[{time.strftime('%X')}] Grouping {len(df):,} (transaction, item) records...")

    cols = list(df.columns)
    if len(cols) < 2:
        raise ValueError(f"DataFrame must have at least 2 columns (transaction id + item), got {len(cols)}: {cols}")

    txn_col = cols[0] if transaction_col is None else transaction_col
    itm_col = cols[1] if item_col is None else item_col
    if txn_col not in cols:
        raise ValueError(f"Transaction column '{txn_col}' not found. Available columns: {cols}")
    if itm_col not in cols:
        raise ValueError(f"Item column '{itm_col}' not found. Available columns: {cols}")

    if min_item_count > 1:
        per_item = df.drop_duplicates([txn_col, itm_col])[itm_col].value_counts()
        df = df[df[itm_col].isin(per_item.index[(per_item >= min_item_count).to_numpy()])]

    codes, uniques = pd.factorize(df[txn_col], sort=False)
    rows: list[list[Any]] = [[] for _ in range(len(uniques))]
    for code, item in zip(codes.tolist(), df[itm_col].tolist()):
        rows[code].append(item)

    if verbose:
        print(f"[{time.strftime('%X')}] Built {len(rows):,} transactions in {time.perf_counter() - t0:.2f}s.")
    return rows
