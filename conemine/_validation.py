"""Input validation utilities for transaction tables and support thresholds."""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from typing import Any


class TransactionInputError(ValueError):
    """Raised when a transaction table is empty or contains malformed rows."""


class ConfigurationError(ValueError):
    """Raised when a mining parameter is outside its allowed range."""


def _is_item_id(token: Any) -> bool:
    # bool is a subclass of int but never a valid item id
    return isinstance(token, numbers.Integral) and not isinstance(token, bool)


def valid_rows_check(rows: Sequence[Sequence[int]] | Any) -> None:
    """Validate a table of transactions before indexing it.

    Parameters
    ----------
    rows:
        Sequence of transactions, each a sequence of non-negative integer
        item ids.  Empty transactions are allowed, an empty table is not.

    Raises
    ------
    TransactionInputError
        If the table has no rows, a row is not a sequence, or a token is not
        a non-negative integer.
    """
    if rows is None:
        raise TransactionInputError("The transaction table is empty: got None.")

    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise TransactionInputError(
            f"Expected a sequence of transactions (list of lists), got {type(rows).__name__}."
        )

    if len(rows) == 0:
        raise TransactionInputError("The transaction table is empty: at least one row is required.")

    for row_id, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not hasattr(row, "__iter__"):
            raise TransactionInputError(
                f"Row {row_id} must be a sequence of item ids, got {type(row).__name__}."
            )
        for token in row:
            if not _is_item_id(token):
                raise TransactionInputError(
                    f"Row {row_id} contains a non-integer item {token!r}. "
                    "Item ids must be non-negative integers."
                )
            if token < 0:
                raise TransactionInputError(
                    f"Row {row_id} contains a negative item {token}. "
                    "Item ids must be non-negative integers."
                )


def valid_min_support_check(min_support: Any) -> int:
    """Validate an absolute support threshold and return it as ``int``.

    A non-positive threshold makes the antimonotone pruning meaningless, so it
    is rejected rather than clamped.
    """
    if not _is_item_id(min_support):
        raise ConfigurationError(
            f"`min_support` must be a positive integer transaction count. Got {min_support!r}."
        )
    if min_support <= 0:
        raise ConfigurationError(f"`min_support` must be a positive integer. Got {min_support}.")
    return int(min_support)


def resolve_min_support(min_support: Any, n_transactions: int) -> int:
    """Turn a count or a fraction of transactions into an absolute threshold.

    Integers are taken as counts.  Floats in ``(0, 1)`` are read as a share of
    *n_transactions* and rounded up, the same way fractional supports are
    turned into ``min_count`` elsewhere in this family of miners.
    """
    import math

    if isinstance(min_support, float):
        if not 0.0 < min_support < 1.0:
            raise ConfigurationError(
                f"`min_support` given as a fraction must lie within the interval `(0, 1)`. Got {min_support}."
            )
        return valid_min_support_check(max(1, math.ceil(min_support * n_transactions)))
    return valid_min_support_check(min_support)
