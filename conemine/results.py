"""Collection and rendering of frequent itemsets."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    import pandas as pd


class FrequentItemset(NamedTuple):
    """An accepted cone and the number of transactions that contain it."""

    itemset: tuple[int, ...]
    support: int

    def format(self) -> str:
        """Render as ``[i1 i2 ... ik] support``."""
        return f"[{' '.join(str(item) for item in self.itemset)}] {self.support}"


class ResultCollector:
    """Append-only record of accepted itemsets, kept in emission order.

    Nothing is deduplicated or re-sorted: the order in which the traversal
    accepts cones is part of the output.
    """

    def __init__(self) -> None:
        self._entries: list[FrequentItemset] = []

    def emit(self, itemset: Sequence[int], support: int) -> FrequentItemset:
        entry = FrequentItemset(tuple(int(item) for item in itemset), int(support))
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[FrequentItemset, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FrequentItemset]:
        return iter(self._entries)

    def __getitem__(self, pos: int) -> FrequentItemset:
        return self._entries[pos]

    def to_lines(self) -> list[str]:
        return [entry.format() for entry in self._entries]

    def to_frame(
        self,
        item_names: Sequence[Any] | None = None,
        num_transactions: int | None = None,
    ) -> pd.DataFrame:
        """Return the results as a ``support`` / ``itemsets`` DataFrame.

        Parameters
        ----------
        item_names:
            Labels indexed by item id.  When given, itemsets hold labels
            instead of integer ids.
        num_transactions:
            Stored in ``df.attrs["num_itemsets"]`` for downstream consumers.

        Returns
        -------
        pandas.DataFrame
            ``support`` holds absolute transaction counts, ``itemsets`` holds
            tuples in cone order.  Rows follow emission order.
        """
        return itemsets_to_frame(self._entries, item_names, num_transactions)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_itemsets={len(self)})"


def itemsets_to_frame(
    entries: Sequence[FrequentItemset],
    item_names: Sequence[Any] | None = None,
    num_transactions: int | None = None,
) -> pd.DataFrame:
    import pandas as pd

    if len(entries) == 0:
        result = pd.DataFrame({"support": pd.Series(dtype="int64"), "itemsets": pd.Series(dtype=object)})
    else:
        if item_names is not None:
            itemsets = [tuple(item_names[item] for item in entry.itemset) for entry in entries]
        else:
            itemsets = [entry.itemset for entry in entries]
        result = pd.DataFrame(
            {
                "support": pd.Series([entry.support for entry in entries], dtype="int64"),
                "itemsets": pd.Series(itemsets, dtype=object),
            }
        )

    if num_transactions is not None:
        result.attrs["num_itemsets"] = num_transactions
    return result
