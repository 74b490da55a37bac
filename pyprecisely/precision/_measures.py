"""Measures of association: variance models and precision scales.

Each measure is estimated either on a linear scale (differences) or on the
log scale (ratios). A confidence interval is ``est ± z * se`` on that scale,
so its half-width is ``z * sqrt(v / n)`` where ``v`` is the variance of the
estimator for one index-group unit and ``group_ratio`` comparison units.

Variance formulas follow Rothman & Greenland (2018), "Planning Study Size
Based on Precision Rather Than Power", Epidemiology 29(5):599-603.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable
from dataclasses import dataclass

from pyprecisely.precision._common import (
    DomainUndefinedError,
    InvalidParameterError,
    _check_finite,
    _check_open_unit,
    _check_positive,
)


# ---------------------------------------------------------------------------
# Variance models (one index unit, group_ratio comparison units)
# ---------------------------------------------------------------------------

def _var_risk_difference(p1: float, p0: float, g: float) -> float:
    return p1 * (1.0 - p1) + p0 * (1.0 - p0) / g


def _var_risk_ratio(p1: float, p0: float, g: float) -> float:
    return (1.0 - p1) / p1 + (1.0 - p0) / (p0 * g)


def _var_rate_difference(r1: float, r0: float, g: float) -> float:
    # Poisson counts: var(rate) = rate / person-time
    return r1 + r0 / g


def _var_rate_ratio(r1: float, r0: float, g: float) -> float:
    return 1.0 / r1 + 1.0 / (g * r0)


def _var_odds_ratio(p_cases: float, p_controls: float, g: float) -> float:
    """Unconditional log odds ratio variance for a case-control design.

    ``p_cases`` and ``p_controls`` are exposure prevalences. With ``n``
    cases and ``g * n`` controls the variance is
    ``1/(n p1 (1-p1)) + 1/(g n p0 (1-p0))``.
    """
    return 1.0 / (p_cases * (1.0 - p_cases)) + 1.0 / (g * p_controls * (1.0 - p_controls))


# ---------------------------------------------------------------------------
# Point estimates implied by the group inputs
# ---------------------------------------------------------------------------

def _difference(a: float, b: float) -> float:
    return a - b


def _ratio(a: float, b: float) -> float:
    return a / b


def _odds_ratio(p1: float, p0: float) -> float:
    return (p1 / (1.0 - p1)) / (p0 / (1.0 - p0))


@dataclass(frozen=True)
class _MeasureInfo:
    scale: str  # 'linear' or 'log'
    rates: bool  # inputs are rates (> 0) rather than probabilities in (0, 1)
    variance: Callable[[float, float, float], float]
    estimate: Callable[[float, float], float]
    index_label: str
    comparison_label: str
    index_arg: str
    comparison_arg: str


class EffectMeasure(enum.Enum):
    """Measure of association whose confidence interval is being planned."""

    RISK_DIFFERENCE = "risk_difference"
    RISK_RATIO = "risk_ratio"
    RATE_DIFFERENCE = "rate_difference"
    RATE_RATIO = "rate_ratio"
    ODDS_RATIO = "odds_ratio"

    @property
    def _info(self) -> _MeasureInfo:
        return _MEASURE_MAP[self]

    @property
    def scale(self) -> str:
        """``'linear'`` for differences, ``'log'`` for ratios."""
        return self._info.scale

    @property
    def is_ratio(self) -> bool:
        return self._info.scale == "log"

    @property
    def uses_rates(self) -> bool:
        return self._info.rates

    @property
    def null_value(self) -> float:
        return 1.0 if self.is_ratio else 0.0

    @property
    def column(self) -> str:
        return self.value

    @property
    def title(self) -> str:
        return self.value.replace("_", " ")

    @property
    def precision_kind(self) -> str:
        return "upper/lower ratio" if self.is_ratio else "width"

    @property
    def index_label(self) -> str:
        return self._info.index_label

    @property
    def comparison_label(self) -> str:
        return self._info.comparison_label

    @property
    def index_arg(self) -> str:
        return self._info.index_arg

    @property
    def comparison_arg(self) -> str:
        return self._info.comparison_arg


_MEASURE_MAP: dict[EffectMeasure, _MeasureInfo] = {
    EffectMeasure.RISK_DIFFERENCE: _MeasureInfo(
        "linear", False, _var_risk_difference, _difference,
        "exposed", "unexposed", "exposed", "unexposed",
    ),
    EffectMeasure.RISK_RATIO: _MeasureInfo(
        "log", False, _var_risk_ratio, _ratio,
        "exposed", "unexposed", "exposed", "unexposed",
    ),
    EffectMeasure.RATE_DIFFERENCE: _MeasureInfo(
        "linear", True, _var_rate_difference, _difference,
        "exposed", "unexposed", "exposed", "unexposed",
    ),
    EffectMeasure.RATE_RATIO: _MeasureInfo(
        "log", True, _var_rate_ratio, _ratio,
        "exposed", "unexposed", "exposed", "unexposed",
    ),
    EffectMeasure.ODDS_RATIO: _MeasureInfo(
        "log", False, _var_odds_ratio, _odds_ratio,
        "cases", "controls", "exposed_cases", "exposed_controls",
    ),
}


def _as_measure(measure: EffectMeasure | str) -> EffectMeasure:
    """Accept an :class:`EffectMeasure` or its string value."""
    if isinstance(measure, EffectMeasure):
        return measure
    try:
        return EffectMeasure(measure)
    except ValueError:
        valid = tuple(m.value for m in EffectMeasure)
        raise InvalidParameterError(
            "measure", repr(measure), f"must be one of {valid}",
        ) from None


# ---------------------------------------------------------------------------
# Group inputs
# ---------------------------------------------------------------------------

def _check_groups(
    measure: EffectMeasure,
    index: float,
    comparison: float,
) -> tuple[float, float]:
    """Validate the two group inputs against the measure's domain."""
    if measure.uses_rates:
        return (
            _check_positive(measure.index_arg, index),
            _check_positive(measure.comparison_arg, comparison),
        )
    return (
        _check_open_unit(measure.index_arg, index),
        _check_open_unit(measure.comparison_arg, comparison),
    )


def variance_per_unit(
    measure: EffectMeasure | str,
    index: float,
    comparison: float,
    group_ratio: float = 1.0,
) -> float:
    """Large-sample variance of the estimator per index-group unit.

    Parameters
    ----------
    measure : EffectMeasure or str
        Measure of association.
    index : float
        Risk, rate, or exposure prevalence in the exposed group (cases
        for the odds ratio).
    comparison : float
        Same quantity in the unexposed group (controls).
    group_ratio : float
        Size of the comparison group relative to the index group.

    Returns
    -------
    float
        Variance on the estimation scale (log scale for ratios) when the
        index group has one unit. Divide by ``n`` for ``n`` units.

    Raises
    ------
    InvalidParameterError
        If an input is outside its domain.
    DomainUndefinedError
        If the formula does not yield a finite positive variance.
    """
    measure = _as_measure(measure)
    index, comparison = _check_groups(measure, index, comparison)
    group_ratio = _check_positive("group_ratio", group_ratio)

    try:
        v = measure._info.variance(index, comparison, group_ratio)
    except (ZeroDivisionError, OverflowError):
        v = math.inf
    if not math.isfinite(v) or v <= 0.0:
        raise DomainUndefinedError(
            "variance", v,
            f"of the {measure.title} must be finite and > 0 "
            f"({measure.index_arg}={index}, {measure.comparison_arg}={comparison}, "
            f"group_ratio={group_ratio})",
        )
    return v


def point_estimate(
    measure: EffectMeasure | str,
    index: float,
    comparison: float,
) -> float:
    """Value of the measure implied by the two group inputs."""
    measure = _as_measure(measure)
    index, comparison = _check_groups(measure, index, comparison)
    return measure._info.estimate(index, comparison)


# ---------------------------------------------------------------------------
# Precision translator
# ---------------------------------------------------------------------------

def half_width(measure: EffectMeasure | str, precision: float) -> float:
    """Half-width of the interval on the estimation scale.

    ``ln(R) / 2`` for a ratio of upper to lower limit ``R`` (the interval
    ``exp(est ± z se)`` is symmetric on the log scale), ``W / 2`` for a
    width ``W``.
    """
    measure = _as_measure(measure)
    precision = _check_finite("precision", precision)
    if measure.is_ratio:
        if precision <= 1.0:
            raise InvalidParameterError(
                "precision", precision,
                "must be > 1 (ratio of upper to lower confidence limit)",
            )
        return math.log(precision) / 2.0
    if precision <= 0.0:
        raise InvalidParameterError(
            "precision", precision, "must be > 0 (confidence interval width)",
        )
    return precision / 2.0


def precision_from_half_width(measure: EffectMeasure | str, h: float) -> float:
    """Inverse of :func:`half_width`."""
    measure = _as_measure(measure)
    if measure.is_ratio:
        try:
            return math.exp(2.0 * h)
        except OverflowError:
            return math.inf
    return 2.0 * h
