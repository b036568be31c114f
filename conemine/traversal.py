"""Cone traversal: the state machine that enumerates candidate itemsets.

The search never recurses.  Its position in the itemset lattice is held in
two integers plus the current cone:

* ``cursor`` is the rank position of the item most recently appended to the
  cone, so extending always takes the next ranked item;
* ``skip`` is the distance from the base item to the next sibling tried when
  the current cone has to be abandoned.

Every step counts the cone's support, reports the cone when the support meets
the threshold and then applies exactly one :class:`Transition`.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from ._validation import valid_min_support_check
from .results import FrequentItemset, ResultCollector
from .support import count_support, exceeds, meets


class Transition(enum.Enum):
    """Structural move applied after a cone has been counted."""

    TERMINAL = "terminal"
    EXTEND = "extend"
    RESEED_SIBLING = "reseed_sibling"
    RESEED_BASE = "reseed_base"


@dataclass(frozen=True)
class TraversalStep:
    """What happened during one step of the traversal."""

    itemset: tuple[int, ...]
    support: int
    accepted: bool
    transition: Transition


class Cone:
    """The itemset under test together with its posting-list stack.

    A single instance is owned by a traversal and reset in place; callers
    that need to keep a cone take :meth:`snapshot`.
    """

    __slots__ = ("items", "postings")

    def __init__(self) -> None:
        self.items: list[int] = []
        self.postings: list[np.ndarray] = []

    def reset(self, items: Sequence[int], postings: Sequence[np.ndarray]) -> None:
        self.items.clear()
        self.postings.clear()
        self.items.extend(items)
        self.postings.extend(postings)

    def push(self, item: int, posting: np.ndarray) -> None:
        self.items.append(item)
        self.postings.append(posting)

    @property
    def base(self) -> int:
        return self.items[0]

    @property
    def last(self) -> int:
        return self.items[-1]

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Cone({self.items})"


class ConeTraversal:
    """Walk a rank order, growing and reseeding cones until the last base.

    Parameters
    ----------
    rank_order:
        Ranked item ids, most frequent first.  May be empty, in which case the
        traversal starts finished.
    postings:
        Posting list for every ranked item.
    min_support:
        Positive absolute support threshold.

    Examples
    --------
    >>> from conemine.index import build_index
    >>> from conemine.ranking import rank_items
    >>> index = build_index([[1, 2], [1, 2], [1]])
    >>> traversal = ConeTraversal(rank_items(index, 1), index, 1)
    >>> [(s.itemset, s.support, s.transition.name) for s in traversal]
    [((1,), 3, 'EXTEND'), ((1, 2), 2, 'RESEED_BASE'), ((2,), 2, 'TERMINAL')]
    """

    def __init__(
        self,
        rank_order: Sequence[int],
        postings: Mapping[int, np.ndarray],
        min_support: int,
    ) -> None:
        self.rank_order: tuple[int, ...] = tuple(rank_order)
        self.postings = postings
        self.min_support = valid_min_support_check(min_support)
        self._positions = {item: pos for pos, item in enumerate(self.rank_order)}

        self.cone = Cone()
        self.cursor = 0
        self.skip = 2
        self.steps = 0
        self.done = len(self.rank_order) == 0
        if not self.done:
            self._seed_base(0)

    @property
    def last_item(self) -> int:
        return self.rank_order[-1]

    def _seed_base(self, position: int) -> None:
        item = self.rank_order[position]
        self.cursor = position
        self.skip = 2
        self.cone.reset([item], [self.postings[item]])

    def decide(self, support: int) -> Transition:
        """Pick the transition for the current cone given its *support*.

        Rules are tried in order and the first match wins.  Reporting is
        decided separately and does not affect the choice.
        """
        cone = self.cone
        last = self.last_item
        if cone.base == last:
            return Transition.TERMINAL
        if exceeds(support, self.min_support) and cone.last != last:
            return Transition.EXTEND
        if not exceeds(support, self.min_support) and len(cone) > 1 and cone.items[1] != last:
            return Transition.RESEED_SIBLING
        return Transition.RESEED_BASE

    def apply(self, transition: Transition) -> None:
        """Mutate the traversal state according to *transition*."""
        if transition is Transition.TERMINAL:
            self.done = True
        elif transition is Transition.EXTEND:
            self.cursor += 1
            item = self.rank_order[self.cursor]
            self.cone.push(item, self.postings[item])
        elif transition is Transition.RESEED_SIBLING:
            base = self.cone.base
            position = self._positions[base] + self.skip
            self.skip += 1
            self.cursor = position
            sibling = self.rank_order[position]
            self.cone.reset([base, sibling], [self.postings[base], self.postings[sibling]])
        elif transition is Transition.RESEED_BASE:
            self._seed_base(self._positions[self.cone.base] + 1)
        else:
            raise ValueError(f"Unknown transition: {transition!r}")

    def step(self) -> TraversalStep:
        """Count the current cone, then move to the next one."""
        if self.done:
            raise RuntimeError("The traversal has already reached its last base item.")

        support = count_support(self.cone.postings)
        itemset = self.cone.snapshot()
        transition = self.decide(support)
        self.apply(transition)
        self.steps += 1
        return TraversalStep(
            itemset=itemset,
            support=support,
            accepted=meets(support, self.min_support),
            transition=transition,
        )

    def __iter__(self) -> Iterator[TraversalStep]:
        while not self.done:
            yield self.step()

    def run(self, collector: ResultCollector | None = None) -> ResultCollector:
        """Drive the traversal to completion and collect accepted cones."""
        if collector is None:
            collector = ResultCollector()
        for step in self:
            if step.accepted:
                collector.emit(step.itemset, step.support)
        return collector


def enumerate_frequent_itemsets(
    index: Mapping[int, np.ndarray],
    rank_order: Sequence[int],
    min_support: int,
) -> list[FrequentItemset]:
    """Run the cone traversal and return accepted itemsets in emission order.

    Parameters
    ----------
    index:
        Item → posting-list mapping covering every ranked item.
    rank_order:
        Output of :func:`~conemine.ranking.rank_items` (or any sequence of
        item ids in traversal order).
    min_support:
        Positive absolute support threshold.

    Returns
    -------
    list[FrequentItemset]
        Empty when *rank_order* is empty.
    """
    return list(ConeTraversal(rank_order, index, min_support).run())
