"""Evaluate a calculation over every combination of its arguments.

The calculations in :mod:`pyprecisely.precision` take scalars only. To
explore a design space, pass each argument here as a scalar or a sequence
of candidate values; the result is a table with one row per combination.
"""

from __future__ import annotations

import enum
import itertools
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd

from pyprecisely.precision import InvalidParameterError

logger = logging.getLogger(__name__)


def _as_values(name: str, value: Any) -> list[Any]:
    """Wrap scalars in a list; expand sequences. Strings and mappings stay scalar."""
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return [value.item()]
        values = list(value.ravel())
    elif isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
        values = list(value)
    else:
        return [value]
    if not values:
        raise InvalidParameterError(name, value, "must not be an empty sequence")
    return values


def _as_cell(value: Any) -> Any:
    """Table cell for an input echoed by the mapper."""
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (str, bytes, bool, int, float, complex, np.generic)) or value is None:
        return value
    return str(value)


def _as_row(result: Any) -> Mapping[str, Any]:
    if isinstance(result, Mapping):
        return result
    if hasattr(result, "to_dict") and not isinstance(result, pd.DataFrame):
        return result.to_dict()
    raise TypeError(
        f"func must return a result with to_dict() or a mapping, got {type(result).__name__}"
    )


def map_precisely(func: Callable[..., Any], **kwargs: Any) -> pd.DataFrame:
    """Call ``func`` once per combination of keyword values.

    Parameters
    ----------
    func : callable
        A calculation such as :func:`~pyprecisely.precision.n_risk_ratio`.
        It must return an object with ``to_dict()`` or a mapping.
    **kwargs
        Arguments of ``func``. Each is a scalar or a sequence (list, tuple,
        range, numpy array, pandas Series) of candidate values.

    Returns
    -------
    pandas.DataFrame
        One row per combination of the sequence-valued arguments, in
        ``itertools.product`` order (the last keyword varies fastest).

    Raises
    ------
    InvalidParameterError
        If an argument is an empty sequence, or from ``func`` itself. No
        partial table is returned.

    Examples
    --------
    >>> from pyprecisely.precision import n_risk_difference
    >>> df = map_precisely(
    ...     n_risk_difference,
    ...     precision=[0.08, 0.1, 0.12],
    ...     exposed=0.4,
    ...     unexposed=0.3,
    ...     group_ratio=[1, 2, 3],
    ... )
    >>> len(df)
    9
    """
    names = list(kwargs)
    grids = [_as_values(name, kwargs[name]) for name in names]
    n_combos = int(np.prod([len(g) for g in grids])) if grids else 1
    logger.debug("Evaluating %s over %d combination(s)", getattr(func, "__name__", func), n_combos)

    rows = []
    for combo in itertools.product(*grids):
        call = dict(zip(names, combo))
        row = dict(_as_row(func(**call)))
        # inputs the result does not echo still get a column
        for name, value in call.items():
            row.setdefault(name, _as_cell(value))
        rows.append(row)

    return pd.DataFrame.from_records(rows)
