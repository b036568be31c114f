from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    from typing_extensions import Self

#: Bumped whenever the pickled layout of a model changes.
_SAVE_FORMAT = 1


class BaseModel(ABC):
    """Common entry points shared by every conemine estimator.

    Subclasses decide how long-format data becomes a model
    (:meth:`from_transactions`); the dataframe shorthands and pickling are
    provided here.
    """

    @classmethod
    @abstractmethod
    def from_transactions(
        cls,
        data: Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Build the model from ``(transaction id, item)`` pairs or from rows of items."""

    @classmethod
    def from_pandas(
        cls,
        df: pd.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Same as :meth:`from_transactions` for a long-format pandas frame."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_polars(
        cls,
        df: pl.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Same as :meth:`from_transactions` for a long-format polars frame."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_arrow(
        cls,
        table: Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Same as :meth:`from_transactions` for a ``pyarrow.Table``."""
        return cls.from_transactions(
            table, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs
        )

    def __dir__(self) -> list[str]:
        return [name for name in super().__dir__() if not name.startswith("_")]

    def save(self, path: str | Path) -> None:
        """Pickle the model, parameters and last result included, to *path*.

        Missing parent directories are created.
        """
        import pickle

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "__conemine_version__": _SAVE_FORMAT,
            "class": type(self).__name__,
            "state": self.__dict__,
        }
        with open(path, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | Path) -> Self:
        """Restore a model written by :meth:`save`.

        Parameters
        ----------
        path : str or Path
            File written by :meth:`save`.

        Returns
        -------
        Self

        Raises
        ------
        TypeError
            If the file holds some other pickled object.
        """
        import pickle

        with open(Path(path), "rb") as f:
            payload = pickle.load(f)  # noqa: S301

        if not isinstance(payload, dict) or "__conemine_version__" not in payload:
            raise TypeError(f"Expected a saved {cls.__name__}, got {type(payload).__name__}")

        saved_as = payload.get("class", "")
        if saved_as != cls.__name__:
            import warnings

            warnings.warn(
                f"{path} holds a {saved_as}, restoring it as {cls.__name__} anyway.",
                stacklevel=2,
            )

        model = cls.__new__(cls)
        model.__dict__.update(payload["state"])
        return model


class Miner(BaseModel):
    """Estimator over a table of transactions.

    The input is normalised once, at construction, into ``rows`` (lists of
    non-negative integer item ids) plus optional ``item_names``.  Results are
    handed back in the frame library the caller started from.

    Parameters
    ----------
    data : list of lists, pandas.DataFrame, polars.DataFrame, pyarrow.Table or numpy.ndarray
        Rows of items, or a one-hot matrix with one column per item.
    item_names : list, optional
        Label for each integer item id.  Taken from the frame's columns, or
        built from non-integer items, when omitted.
    **kwargs
        Parameters of the concrete algorithm.
    """

    def __init__(
        self,
        data: Sequence[Sequence[Any]] | pd.DataFrame | Any,
        item_names: list[Any] | None = None,
        **kwargs: Any,
    ):
        from ._compat import frame_kind

        self.data = data
        self.kwargs = kwargs
        self.rows, labels = _prepare_rows(data, item_names)
        self.item_names = item_names if item_names is not None else labels
        self._output_kind = _output_kind(frame_kind(data))

    @classmethod
    def from_transactions(
        cls,
        data: pd.DataFrame | pl.DataFrame | Sequence[Sequence[str | int]] | Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Group long-format data into transactions and build a miner from them.

        Parameters
        ----------
        data
            A pandas / polars frame or ``pyarrow.Table`` with a transaction id
            column and an item column, or a list of lists of items.
        transaction_col, item_col
            Column names.  Default to the first and second column.
        verbose : int, default=0
            Print progress while grouping and mining.
        **kwargs
            Forwarded to the constructor, e.g. ``min_support``.

        Returns
        -------
        Miner
            Ready to :meth:`mine`; results come back in the type of *data*.
        """
        from ._compat import frame_kind
        from .transactions import from_transactions as _group

        rows = _group(data, transaction_col=transaction_col, item_col=item_col, verbose=verbose)
        miner = cls(rows, verbose=verbose, **kwargs)
        miner._output_kind = _output_kind(frame_kind(data))
        return miner

    @abstractmethod
    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Run the algorithm; keyword arguments override the stored parameters."""

    def fit(self, **kwargs: Any) -> Self:
        """Run :meth:`mine` and keep its result for :meth:`predict`."""
        self._result = self.mine(**kwargs)
        return self

    def predict(self, **kwargs: Any) -> pd.DataFrame:
        """Last mined result, fitting first when there is none."""
        if getattr(self, "_result", None) is None:
            self.fit(**kwargs)
        return self._result

    def _convert_to_orig_type(self, df: pd.DataFrame) -> Any:
        """Hand *df* back as the frame type the miner was built from."""
        if self._output_kind == "pandas":
            return df

        from ._dependencies import import_optional_dependency

        # arrow has no tuple type, itemsets become lists
        df = df.copy()
        df["itemsets"] = [list(itemset) for itemset in df["itemsets"]]

        if self._output_kind == "pyarrow":
            pa = import_optional_dependency("pyarrow")
            return pa.Table.from_pandas(df, preserve_index=False)
        pl = import_optional_dependency("polars")
        return pl.from_pandas(df)


def _output_kind(kind: str) -> str:
    return kind if kind in ("polars", "pyarrow") else "pandas"


def _prepare_rows(data: Any, item_names: list[Any] | None) -> tuple[list[list[int]], list[Any] | None]:
    from ._compat import frame_kind
    from .transactions import encode_items, from_dense

    if isinstance(data, (list, tuple)):
        return encode_items(data)

    if frame_kind(data) != "other" or type(data).__name__ == "ndarray":
        return from_dense(data, item_names)

    raise TypeError(f"Expected a list of transactions, a one-hot DataFrame or a numpy array, got {type(data)}")
