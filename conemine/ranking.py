"""Item pruning and ranking."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import overload

import numpy as np

from ._validation import valid_min_support_check
from .support import exceeds


@dataclass(frozen=True)
class RankOrder(Sequence[int]):
    """Surviving items sorted by descending support, ties by ascending id.

    Attributes
    ----------
    items : tuple[int, ...]
        Ranked item ids.  Position 0 holds the most frequent item.
    postings : Mapping[int, numpy.ndarray]
        Posting lists of the ranked items only.
    min_support : int
        Threshold the items were filtered with.
    """

    items: tuple[int, ...] = ()
    postings: Mapping[int, np.ndarray] = field(default_factory=dict, compare=False, repr=False)
    min_support: int = 1
    _positions: dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_positions", {item: pos for pos, item in enumerate(self.items)})

    @overload
    def __getitem__(self, pos: int) -> int: ...

    @overload
    def __getitem__(self, pos: slice) -> tuple[int, ...]: ...

    def __getitem__(self, pos: int | slice) -> int | tuple[int, ...]:
        return self.items[pos]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[int]:
        return iter(self.items)

    def position(self, item: int) -> int:
        """Rank position of *item*; raises ``KeyError`` for pruned items."""
        return self._positions[item]

    @property
    def last(self) -> int | None:
        """Lowest-ranked item, or ``None`` for an empty order."""
        return self.items[-1] if self.items else None

    def supports(self) -> list[int]:
        """Support of each ranked item, in rank order."""
        return [int(self.postings[item].shape[0]) for item in self.items]


def rank_items(index: Mapping[int, np.ndarray], min_support: int) -> RankOrder:
    """Prune infrequent items and order the rest for traversal.

    Only items whose posting list is strictly longer than *min_support* are
    kept.  Reporting later uses an inclusive comparison, so an item seen in
    exactly *min_support* transactions is never ranked even though a cone
    with that support would be reported.

    Parameters
    ----------
    index:
        Item → posting-list mapping, usually a
        :class:`~conemine.index.TransactionIndex`.
    min_support:
        Positive absolute support threshold.

    Returns
    -------
    RankOrder
        Possibly empty; an empty order yields an empty mining run.

    Examples
    --------
    >>> from conemine.index import build_index
    >>> rank_items(build_index([[1, 2, 3], [1, 2], [2, 3], [1, 3]]), 1).items
    (1, 2, 3)
    """
    min_support = valid_min_support_check(min_support)

    counts = {item: int(np.asarray(posting).shape[0]) for item, posting in index.items()}
    survivors = [item for item, count in counts.items() if exceeds(count, min_support)]
    ranked = sorted(survivors, key=lambda item: (-counts[item], item))

    return RankOrder(
        items=tuple(ranked),
        postings={item: index[item] for item in ranked},
        min_support=min_support,
    )
