"""Tests for the plotting helpers."""

import pandas as pd
import pytest
from matplotlib.axes import Axes
import matplotlib.pyplot as plt

from pyprecisely.mapping import (
    map_precisely,
    plot_precision,
    plot_probability,
    plot_sample_size,
)
from pyprecisely.precision import n_risk_ratio, precision_risk_ratio, upper_rate_ratio


@pytest.fixture
def sample_size_table():
    return map_precisely(
        n_risk_ratio,
        precision=[1.5, 2.0, 2.5, 3.0],
        exposed=0.4,
        unexposed=0.3,
        group_ratio=[1, 2, 3],
    )


class TestPlotSampleSize:
    """Sample size against precision."""

    def test_returns_axes(self, sample_size_table):
        ax = plot_sample_size(sample_size_table)
        assert isinstance(ax, Axes)
        assert len(ax.get_lines()) == 1
        assert ax.get_xlabel() == "Precision"
        assert ax.get_ylabel() == "Total sample size"

    def test_one_line_per_group(self, sample_size_table):
        ax = plot_sample_size(sample_size_table, color="group_ratio")
        lines = ax.get_lines()
        assert len(lines) == 3
        assert [line.get_label() for line in lines] == ["1", "2", "3"]
        assert ax.get_legend() is not None

    def test_lines_sorted_by_x(self, sample_size_table):
        shuffled = sample_size_table.sample(frac=1.0, random_state=0)
        ax = plot_sample_size(shuffled, color="group_ratio")
        for line in ax.get_lines():
            xs = list(line.get_xdata())
            assert xs == sorted(xs)

    def test_uses_given_axes(self, sample_size_table):
        _, ax = plt.subplots()
        assert plot_sample_size(sample_size_table, ax=ax) is ax

    def test_missing_column(self, sample_size_table):
        with pytest.raises(KeyError, match="nope"):
            plot_sample_size(sample_size_table, color="nope")

    def test_requires_dataframe(self):
        with pytest.raises(TypeError, match="DataFrame"):
            plot_sample_size([{"precision": 2, "n_total": 10}])


class TestPlotPrecision:
    """Precision against sample size."""

    def test_defaults(self):
        df = map_precisely(precision_risk_ratio, n_exposed=[50, 100, 200], exposed=0.4,
                           unexposed=0.3, ci=[0.9, 0.95])
        ax = plot_precision(df, color="ci")
        assert len(ax.get_lines()) == 2
        assert ax.get_xlabel() == "Total sample size"
        assert ax.get_ylabel() == "Precision"


class TestPlotProbability:
    """Probability against sample size."""

    def test_defaults(self):
        df = map_precisely(upper_rate_ratio, upper_limit=[1.5, 2.0], prob=[0.8, 0.9],
                           exposed=0.01, unexposed=0.01)
        ax = plot_probability(df, color="upper_limit")
        assert len(ax.get_lines()) == 2
        assert ax.get_ylabel().startswith("Probability")

    def test_custom_columns(self):
        df = pd.DataFrame({"n_total": [10, 20], "prob": [0.8, 0.9]})
        ax = plot_probability(df, x="prob", y="n_total")
        assert ax.get_xlabel() == "Probability upper limit is at or below concern"
