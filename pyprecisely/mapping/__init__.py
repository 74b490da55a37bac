"""
Parameter sweeps and plots for study size planning.

``map_precisely`` evaluates any calculation from
:mod:`pyprecisely.precision` over a grid of inputs and returns a pandas
DataFrame; the ``plot_*`` functions draw that table with matplotlib.
"""

from pyprecisely.mapping._map import map_precisely
from pyprecisely.mapping._plot import plot_sample_size, plot_precision, plot_probability

__all__ = [
    "map_precisely",
    "plot_sample_size",
    "plot_precision",
    "plot_probability",
]
