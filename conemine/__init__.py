"""conemine – frequent itemset mining with the simplicial cone traversal."""

from ._validation import ConfigurationError, TransactionInputError
from .index import TransactionIndex, build_index
from .io import read_transactions, write_results
from .model import BaseModel, Miner
from .ranking import RankOrder, rank_items
from .results import FrequentItemset, ResultCollector
from .simplicial import SimplicialMiner, simplicial
from .support import count_support
from .transactions import encode_items, from_arrow, from_dense, from_pandas, from_polars, from_transactions
from .traversal import ConeTraversal, Transition, TraversalStep, enumerate_frequent_itemsets

__all__ = [
    "build_index",
    "TransactionIndex",
    "rank_items",
    "RankOrder",
    "count_support",
    "enumerate_frequent_itemsets",
    "ConeTraversal",
    "Transition",
    "TraversalStep",
    "FrequentItemset",
    "ResultCollector",
    "simplicial",
    "SimplicialMiner",
    "BaseModel",
    "Miner",
    "from_transactions",
    "from_pandas",
    "from_polars",
    "from_arrow",
    "from_dense",
    "encode_items",
    "read_transactions",
    "write_results",
    "TransactionInputError",
    "ConfigurationError",
]
