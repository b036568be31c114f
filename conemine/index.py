"""Inverted index from items to the transactions that contain them."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

import numpy as np

from ._validation import valid_rows_check


class TransactionIndex(Mapping[int, np.ndarray]):
    """Read-only mapping ``item id -> posting list``.

    A posting list is a 1-D ``int64`` array of transaction (row) ids in
    ascending order without duplicates.  Arrays are flagged read-only so a
    traversal can never mutate the index it is reading from.

    Parameters
    ----------
    postings:
        Mapping of item id to ascending transaction ids.
    n_transactions:
        Number of rows the index was built from, including rows without items.
    """

    def __init__(self, postings: Mapping[int, np.ndarray], n_transactions: int) -> None:
        self._postings: dict[int, np.ndarray] = {}
        for item in sorted(postings):
            arr = np.array(postings[item], dtype=np.int64)
            arr.setflags(write=False)
            self._postings[int(item)] = arr
        self.n_transactions = int(n_transactions)

    def __getitem__(self, item: int) -> np.ndarray:
        return self._postings[item]

    def __iter__(self) -> Iterator[int]:
        return iter(self._postings)

    def __len__(self) -> int:
        return len(self._postings)

    def support(self, item: int) -> int:
        """Number of transactions containing *item* (0 for unknown items)."""
        posting = self._postings.get(item)
        return 0 if posting is None else int(posting.shape[0])

    def supports(self) -> dict[int, int]:
        """Support of every indexed item, keyed by item id."""
        return {item: int(posting.shape[0]) for item, posting in self._postings.items()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_items={len(self)}, n_transactions={self.n_transactions})"


def build_index(rows: Sequence[Sequence[int]]) -> TransactionIndex:
    """Build the item → transaction-id index for a table of transactions.

    Runs in time linear in the total number of tokens.  Row ids are the
    positions of the rows in *rows*; an item listed twice in the same row is
    recorded once.

    Parameters
    ----------
    rows:
        Sequence of transactions, each a sequence of non-negative item ids.

    Returns
    -------
    TransactionIndex

    Raises
    ------
    TransactionInputError
        If *rows* is empty or contains anything other than non-negative ints.

    Examples
    --------
    >>> idx = build_index([[1, 2, 3], [1, 2], [2, 3], [1, 3]])
    >>> idx[1].tolist()
    [0, 1, 3]
    """
    valid_rows_check(rows)

    postings: dict[int, list[int]] = {}
    for row_id, row in enumerate(rows):
        for token in row:
            item = int(token)
            posting = postings.setdefault(item, [])
            # rows are visited in order, so a repeat within a row is always the tail
            if not posting or posting[-1] != row_id:
                posting.append(row_id)

    return TransactionIndex(
        {item: np.fromiter(posting, dtype=np.int64, count=len(posting)) for item, posting in postings.items()},
        n_transactions=len(rows),
    )
