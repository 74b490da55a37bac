"""Tests for the precision_* functions."""

import math

import pytest
from scipy.stats import norm

from pyprecisely.precision import (
    EffectMeasure,
    InvalidParameterError,
    PrecisionResult,
    achieved_precision,
    n_odds_ratio,
    n_rate_difference,
    n_rate_ratio,
    n_risk_difference,
    n_risk_ratio,
    precision_odds_ratio,
    precision_rate_difference,
    precision_rate_ratio,
    precision_risk_difference,
    precision_risk_ratio,
)


class TestPrecisionOddsRatio:
    """Precision of an odds ratio from a case-control study."""

    def test_published_example(self):
        """500 cases, 0.6 vs 0.4 exposed, 2 controls per case -> ~1.55."""
        r = precision_odds_ratio(n_cases=500, exposed_cases=0.6, exposed_controls=0.4, group_ratio=2)
        assert isinstance(r, PrecisionResult)
        assert r.precision == pytest.approx(1.55, abs=0.005)

    def test_formula(self):
        z = norm.ppf(0.975)
        se = math.sqrt(1 / (500 * 0.6 * 0.4) + 1 / (500 * 2 * 0.4 * 0.6))
        r = precision_odds_ratio(500, 0.6, 0.4, 2)
        assert r.precision == pytest.approx(math.exp(2 * z * se), rel=1e-9)

    def test_group_sizes(self):
        r = precision_odds_ratio(500, 0.6, 0.4, 2)
        assert r.n_cases == 500
        assert r.n_controls == 1000
        assert r.n_total == 1500


class TestPrecisionDifferences:
    """Widths for difference measures."""

    def test_risk_difference_formula(self):
        """W = 2 z sqrt(v / n)."""
        z = norm.ppf(0.95)
        v = 0.4 * 0.6 + 0.3 * 0.7 / 3
        r = precision_risk_difference(525, 0.4, 0.3, 3, ci=0.90)
        assert r.precision == pytest.approx(2 * z * math.sqrt(v / 525), rel=1e-9)

    def test_rate_difference_fractional_person_time(self):
        """Person-time need not be whole."""
        r = precision_rate_difference(1234.5, 0.02, 0.01)
        assert r.precision > 0.0
        assert r.n_exposed == 1234.5

    def test_more_subjects_narrower(self):
        ws = [precision_risk_difference(n, 0.4, 0.3).precision for n in (50, 100, 500, 1000)]
        assert all(a > b for a, b in zip(ws, ws[1:]))


class TestPrecisionRatios:
    """Upper/lower ratios for ratio measures."""

    def test_ratio_above_one(self):
        assert precision_risk_ratio(100, 0.4, 0.3).precision > 1.0
        assert precision_rate_ratio(1000, 0.02, 0.01).precision > 1.0

    def test_echoes_effect(self):
        r = precision_rate_ratio(1000, 0.02, 0.01)
        assert r.effect == pytest.approx(2.0)
        assert r.to_dict()["rate_ratio"] == pytest.approx(2.0)

    def test_to_dict_starts_with_precision(self):
        row = precision_risk_ratio(100, 0.4, 0.3).to_dict()
        assert list(row)[:4] == ["precision", "n_exposed", "n_unexposed", "n_total"]


class TestRoundTrip:
    """Precision at the solved sample size is at least as tight as requested."""

    @pytest.mark.parametrize(
        "n_func,p_func,precision,index,comparison",
        [
            (n_risk_difference, precision_risk_difference, 0.08, 0.4, 0.3),
            (n_risk_ratio, precision_risk_ratio, 2.0, 0.4, 0.3),
            (n_rate_difference, precision_rate_difference, 0.01, 0.02, 0.01),
            (n_rate_ratio, precision_rate_ratio, 2.0, 0.02, 0.01),
            (n_odds_ratio, precision_odds_ratio, 1.55, 0.6, 0.4),
        ],
    )
    @pytest.mark.parametrize("group_ratio", [1.0, 3.0])
    def test_roundtrip(self, n_func, p_func, precision, index, comparison, group_ratio):
        r1 = n_func(precision, index, comparison, group_ratio, ci=0.90)
        r2 = p_func(r1.n_index, index, comparison, group_ratio, ci=0.90)
        assert r2.precision <= precision
        assert r2.precision == pytest.approx(precision, rel=0.02)


class TestPrecisionErrors:
    """Invalid inputs."""

    @pytest.mark.parametrize("bad", [0, -10, float("nan")])
    def test_invalid_n(self, bad):
        with pytest.raises(InvalidParameterError, match="n_exposed"):
            precision_risk_ratio(bad, 0.4, 0.3)

    def test_invalid_n_cases(self):
        with pytest.raises(InvalidParameterError, match="n_cases"):
            precision_odds_ratio(0, 0.6, 0.4)

    @pytest.mark.parametrize("measure", list(EffectMeasure))
    def test_boundary_index(self, measure):
        """A zero index-group input fails for every measure."""
        with pytest.raises(InvalidParameterError):
            achieved_precision(measure, 100, 0.0, 0.3)

    def test_summary(self):
        text = precision_odds_ratio(500, 0.6, 0.4, 2).summary()
        assert "odds ratio" in text
        assert "1.55" in text


class TestPrecisionOverflow:
    """Very wide ratio intervals."""

    def test_ratio_overflows_to_inf(self):
        """exp(2h) beyond float range reports an infinite ratio."""
        r = precision_rate_ratio(1, 1e-5, 1e-5)
        assert math.isinf(r.precision)

    def test_difference_stays_finite(self):
        r = precision_rate_difference(1e-5, 1e5, 1e5)
        assert math.isfinite(r.precision)
