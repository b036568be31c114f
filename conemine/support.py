"""Support counting and the two threshold comparisons used while mining."""

from __future__ import annotations

import operator
from collections.abc import Mapping, Sequence

import numpy as np

#: Strict comparison: decides which items enter the rank order and whether a
#: cone is grown by one more item.
exceeds = operator.gt

#: Inclusive comparison: decides whether a cone is reported as frequent.
meets = operator.ge


def count_support(postings: Sequence[np.ndarray]) -> int:
    """Return the number of transactions shared by every posting list.

    The stack is folded left to right with pairwise intersections and the
    fold stops at the first empty intermediate result.  Nothing is cached
    between calls.

    Parameters
    ----------
    postings:
        Posting lists of the cone's items, in cone order.  Each must be an
        ascending array of unique transaction ids.

    Returns
    -------
    int
        Size of the full intersection.

    Raises
    ------
    ValueError
        If *postings* is empty; every cone holds at least one item.
    """
    if len(postings) == 0:
        raise ValueError("Cannot count support of an empty cone.")

    shared = postings[0]
    for posting in postings[1:]:
        if shared.shape[0] == 0:
            return 0
        shared = np.intersect1d(shared, posting, assume_unique=True)
    return int(shared.shape[0])


def itemset_support(index: Mapping[int, np.ndarray], itemset: Sequence[int]) -> int:
    """Support of *itemset* looked up through a posting-list mapping."""
    return count_support([index[item] for item in itemset])
