"""Precision achieved by a fixed sample size."""

from __future__ import annotations

import math

from pyprecisely.precision._common import (
    PrecisionResult,
    _check_open_unit,
    _check_positive,
    quantile,
)
from pyprecisely.precision._measures import (
    EffectMeasure,
    _as_measure,
    point_estimate,
    precision_from_half_width,
    variance_per_unit,
)


def achieved_precision(
    measure: EffectMeasure | str,
    n: float,
    index: float,
    comparison: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> PrecisionResult:
    """Precision of the confidence interval for ``n`` index-group units.

    Computes ``h = z * sqrt(v / n)`` and reports ``exp(2h)`` for ratio
    measures or ``2h`` for difference measures. ``n`` need not be a whole
    number (person-time).
    """
    measure = _as_measure(measure)
    n = _check_positive(f"n_{measure.index_label}", n)
    z = quantile(_check_open_unit("ci", ci))
    v = variance_per_unit(measure, index, comparison, group_ratio)

    h = z * math.sqrt(v / n)
    n_comparison = n * float(group_ratio)

    return PrecisionResult(
        measure=measure,
        precision=precision_from_half_width(measure, h),
        n_index=n,
        n_comparison=n_comparison,
        n_total=n + n_comparison,
        effect=point_estimate(measure, index, comparison),
        index=float(index),
        comparison=float(comparison),
        group_ratio=float(group_ratio),
        ci=float(ci),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def precision_risk_difference(
    n_exposed: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> PrecisionResult:
    """Width of the risk difference interval for ``n_exposed`` exposed participants.

    Parameters
    ----------
    n_exposed : float
        Number of exposed participants; the unexposed group has
        ``n_exposed * group_ratio``.
    exposed, unexposed : float
        Risk in the exposed and unexposed groups, in (0, 1).
    group_ratio : float
        Unexposed participants per exposed participant.
    ci : float
        Confidence level (default 0.95).

    Returns
    -------
    PrecisionResult
    """
    return achieved_precision(
        EffectMeasure.RISK_DIFFERENCE, n_exposed, exposed, unexposed, group_ratio, ci,
    )


def precision_risk_ratio(
    n_exposed: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> PrecisionResult:
    """Ratio of upper to lower limit of the risk ratio interval."""
    return achieved_precision(
        EffectMeasure.RISK_RATIO, n_exposed, exposed, unexposed, group_ratio, ci,
    )


def precision_rate_difference(
    n_exposed: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> PrecisionResult:
    """Width of the rate difference interval for ``n_exposed`` units of person-time."""
    return achieved_precision(
        EffectMeasure.RATE_DIFFERENCE, n_exposed, exposed, unexposed, group_ratio, ci,
    )


def precision_rate_ratio(
    n_exposed: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> PrecisionResult:
    """Ratio of upper to lower limit of the rate ratio interval."""
    return achieved_precision(
        EffectMeasure.RATE_RATIO, n_exposed, exposed, unexposed, group_ratio, ci,
    )


def precision_odds_ratio(
    n_cases: float,
    exposed_cases: float,
    exposed_controls: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> PrecisionResult:
    """Ratio of upper to lower limit of the odds ratio interval.

    Examples
    --------
    >>> r = precision_odds_ratio(500, exposed_cases=0.6, exposed_controls=0.4, group_ratio=2)
    >>> round(r.precision, 2)
    1.55
    """
    return achieved_precision(
        EffectMeasure.ODDS_RATIO, n_cases, exposed_cases, exposed_controls, group_ratio, ci,
    )
