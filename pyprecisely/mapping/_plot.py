"""Line charts of :func:`map_precisely` output.

Each function draws one line per level of ``color`` and returns the
matplotlib ``Axes`` so the caller can restyle or save it.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_AXIS_LABELS = {
    "precision": "Precision",
    "n_total": "Total sample size",
    "n_exposed": "Exposed sample size",
    "n_unexposed": "Unexposed sample size",
    "n_cases": "Cases",
    "n_controls": "Controls",
    "prob": "Probability upper limit is at or below concern",
    "upper_limit": "Upper limit",
    "group_ratio": "Group ratio",
    "ci": "Confidence level",
}


def _check_columns(data: pd.DataFrame, *columns: str | None) -> None:
    for col in columns:
        if col is not None and col not in data.columns:
            raise KeyError(f"column {col!r} not found in data (have {list(data.columns)})")


def _format_level(level) -> str | None:
    if level is None:
        return None
    if isinstance(level, (float, np.floating)):
        return f"{level:g}"
    return str(level)


def _line_plot(
    data: pd.DataFrame,
    x: str,
    y: str,
    color: str | None,
    ax=None,
):
    import matplotlib.pyplot as plt

    if not isinstance(data, pd.DataFrame):
        raise TypeError(f"data must be a pandas DataFrame, got {type(data).__name__}")
    _check_columns(data, x, y, color)

    if ax is None:
        _, ax = plt.subplots()

    if color is None:
        groups = [(None, data)]
    else:
        groups = data.groupby(color, sort=True)

    for level, group in groups:
        group = group.sort_values(x)
        label = _format_level(level)
        ax.plot(group[x].to_numpy(), group[y].to_numpy(), marker="o", markersize=3, label=label)

    logger.debug("Plotted %s vs %s (%d row(s))", y, x, len(data))

    ax.set_xlabel(_AXIS_LABELS.get(x, x))
    ax.set_ylabel(_AXIS_LABELS.get(y, y))
    if color is not None:
        ax.legend(title=_AXIS_LABELS.get(color, color))
    ax.grid(True, alpha=0.3, linestyle="--")
    return ax


def plot_sample_size(
    data: pd.DataFrame,
    color: str | None = None,
    x: str = "precision",
    y: str = "n_total",
    ax=None,
):
    """Sample size against requested precision.

    Parameters
    ----------
    data : pandas.DataFrame
        Output of :func:`map_precisely` over an ``n_*`` function.
    color : str or None
        Column whose levels get separate lines.
    x, y : str
        Columns on the horizontal and vertical axes.
    ax : matplotlib.axes.Axes or None
        Axes to draw on; a new figure is created if ``None``.

    Returns
    -------
    matplotlib.axes.Axes
    """
    return _line_plot(data, x, y, color, ax)


def plot_precision(
    data: pd.DataFrame,
    color: str | None = None,
    x: str = "n_total",
    y: str = "precision",
    ax=None,
):
    """Achieved precision against sample size (``precision_*`` output)."""
    return _line_plot(data, x, y, color, ax)


def plot_probability(
    data: pd.DataFrame,
    color: str | None = None,
    x: str = "n_total",
    y: str = "prob",
    ax=None,
):
    """Probability of the upper limit staying below concern against sample size."""
    return _line_plot(data, x, y, color, ax)
