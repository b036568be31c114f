"""Lazy imports for the optional dataframe libraries."""

from __future__ import annotations

import importlib
import importlib.util
import types

#: Optional top-level modules and the conemine extra that installs them.
_EXTRAS = {
    "polars": "polars",
    "pyarrow": "polars",
}


def import_optional_dependency(name: str, extra: str = "") -> types.ModuleType:
    """Import *name*, or fail with an ``ImportError`` naming the extra to install.

    Parameters
    ----------
    name : str
        Module to import, e.g. ``"pyarrow"``.
    extra : str
        Appended to the error message, typically to say why the module is
        needed.

    Returns
    -------
    module
    """
    package = name.partition(".")[0]
    if importlib.util.find_spec(package) is None:
        hint = f"conemine[{_EXTRAS[package]}]" if package in _EXTRAS else package
        msg = f"Missing optional dependency '{package}'. Install it with `pip install {hint}`."
        if extra:
            msg += f" {extra}"
        raise ImportError(msg)
    return importlib.import_module(name)
