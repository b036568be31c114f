from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from .model import Miner

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl

    from .index import TransactionIndex
    from .ranking import RankOrder
    from .results import ResultCollector

logger = logging.getLogger(__name__)


class SimplicialMiner(Miner):
    """Frequent itemset miner driven by the simplicial cone traversal.

    Every transaction is read as a closed simplex over its items.  Items are
    ranked by support, and cones anchored at each base item are grown one
    ranked item at a time while their support stays above the threshold.
    The walk is fast and deterministic but not exhaustive: some frequent
    itemsets that are not reachable by extending or reseeding a cone are
    never visited.
    """

    def __init__(
        self,
        data: list[list[Any]] | pd.DataFrame | pl.DataFrame | np.ndarray | Any,
        item_names: list[Any] | None = None,
        min_support: int | float = 1,
        use_colnames: bool = False,
        verbose: int = 0,
        **kwargs: Any,
    ):
        """Initialize the miner.

        Parameters
        ----------
        data : list of lists, pandas.DataFrame, polars.DataFrame, or numpy.ndarray
            Rows of items, or a one-hot matrix whose columns are items.
        item_names : list | None, default=None
            Labels for the integer item ids, used when `use_colnames=True`.
        min_support : int or float, default=1
            Absolute number of transactions (int >= 1), or a fraction of the
            transactions in `(0, 1)` rounded up to a count.
        use_colnames : bool, default=False
            If True, returns itemsets containing item labels rather than
            integer ids.
        verbose : int, default=0
            If > 0, print progress details to standard output.
        """
        super().__init__(data=data, item_names=item_names, **kwargs)
        self.min_support = min_support
        self.use_colnames = use_colnames
        self.verbose = verbose

        self.index_: TransactionIndex | None = None
        self.rank_order_: RankOrder | None = None
        self.results_: ResultCollector | None = None
        self.n_steps_: int = 0

    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Execute the cone traversal on the stored rows.

        Returns
        -------
        pandas.DataFrame
            DataFrame with two columns, in emission order:
            - `support`: number of transactions containing the itemset.
            - `itemsets`: tuple of item ids (or labels).
        """
        from ._validation import resolve_min_support
        from .index import build_index
        from .ranking import rank_items
        from .traversal import ConeTraversal

        # Merge kwargs over instance attributes
        min_support = kwargs.get("min_support", self.min_support)
        use_colnames = kwargs.get("use_colnames", self.use_colnames)
        verbose = kwargs.get("verbose", self.verbose)

        min_count = resolve_min_support(min_support, len(self.rows))
        if use_colnames and self.item_names is None:
            raise ValueError("`use_colnames=True` requires item names; pass `item_names` or use labelled input.")

        t0 = 0.0
        if verbose:
            print(f"[{time.strftime('%X')}] Indexing {len(self.rows):,} transactions...")
            t0 = time.perf_counter()
        index = build_index(self.rows)

        rank_order = rank_items(index, min_count)
        if verbose:
            t1 = time.perf_counter()
            print(
                f"[{time.strftime('%X')}] Done in {t1 - t0:.2f}s. "
                f"{len(rank_order):,} of {len(index):,} items occur in more than {min_count} transactions."
            )
            t0 = t1

        if len(rank_order) == 0:
            logger.warning(
                "No item occurs in more than %d transactions; nothing to mine.",
                min_count,
            )

        traversal = ConeTraversal(rank_order, index, min_count)
        results = traversal.run()
        if verbose:
            print(
                f"[{time.strftime('%X')}] Traversal finished in {time.perf_counter() - t0:.2f}s: "
                f"{traversal.steps:,} cones counted, {len(results):,} accepted."
            )

        self.index_ = index
        self.rank_order_ = rank_order
        self.results_ = results
        self.n_steps_ = traversal.steps

        names = self.item_names if use_colnames else None
        return self._convert_to_orig_type(results.to_frame(names, num_transactions=index.n_transactions))


def simplicial(
    data: list[list[Any]] | pd.DataFrame | pl.DataFrame | np.ndarray | Any,
    min_support: int | float = 1,
    use_colnames: bool = False,
    verbose: int = 0,
    item_names: list[Any] | None = None,
) -> pd.DataFrame:
    """Find frequent itemsets with the simplicial cone traversal.

    This module-level function relies on the Object-Oriented APIs.
    """
    return SimplicialMiner(
        data=data,
        item_names=item_names,
        min_support=min_support,
        use_colnames=use_colnames,
        verbose=verbose,
    ).mine()
