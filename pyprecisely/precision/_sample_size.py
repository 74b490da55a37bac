"""Sample size needed to estimate a measure with a target precision.

Solves ``h = z * sqrt(v / n)`` for ``n``, where ``h`` is the half-width
implied by the requested precision and ``v`` the per-unit variance.
"""

from __future__ import annotations

import math

from pyprecisely.precision._common import (
    InvalidParameterError,
    SampleSizeResult,
    _check_open_unit,
    quantile,
)
from pyprecisely.precision._measures import (
    EffectMeasure,
    _as_measure,
    half_width,
    point_estimate,
    variance_per_unit,
)


def _solve_n(
    v: float,
    z: float,
    half: float,
    group_ratio: float,
    parameter: str,
    value: float,
) -> float:
    """``v * (z / half)^2``, rejecting targets too small for a finite sample size."""
    try:
        n = v * (z / half) ** 2
    except OverflowError:
        n = math.inf
    if not (math.isfinite(n) and math.isfinite(n * group_ratio)):
        raise InvalidParameterError(
            parameter, value, "is too small; the required sample size is not finite",
        )
    return n


def _group_sizes(n: float, group_ratio: float) -> tuple[int, int, int]:
    """Round each group up to whole participants."""
    n_index = math.ceil(n)
    n_comparison = math.ceil(n * group_ratio)
    return n_index, n_comparison, n_index + n_comparison


def sample_size(
    measure: EffectMeasure | str,
    precision: float,
    index: float,
    comparison: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> SampleSizeResult:
    """Sample size for a confidence interval of the requested precision.

    Parameters
    ----------
    measure : EffectMeasure or str
        Measure of association.
    precision : float
        Interval width (difference measures, > 0) or ratio of the upper to
        the lower limit (ratio measures, > 1).
    index, comparison : float
        Risks, rates, or exposure prevalences in the index and comparison
        groups.
    group_ratio : float
        Comparison group size relative to the index group.
    ci : float
        Confidence level.

    Returns
    -------
    SampleSizeResult
    """
    measure = _as_measure(measure)
    z = quantile(_check_open_unit("ci", ci))
    h = half_width(measure, precision)
    v = variance_per_unit(measure, index, comparison, group_ratio)

    n = _solve_n(v, z, h, float(group_ratio), "precision", precision)
    n_index, n_comparison, n_total = _group_sizes(n, float(group_ratio))

    return SampleSizeResult(
        measure=measure,
        n_index=n_index,
        n_comparison=n_comparison,
        n_total=n_total,
        effect=point_estimate(measure, index, comparison),
        precision=float(precision),
        index=float(index),
        comparison=float(comparison),
        group_ratio=float(group_ratio),
        ci=float(ci),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def n_risk_difference(
    precision: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> SampleSizeResult:
    """Sample size for a risk difference with a target interval width.

    Parameters
    ----------
    precision : float
        Width of the confidence interval (upper minus lower limit).
    exposed, unexposed : float
        Risk in the exposed and unexposed groups, in (0, 1).
    group_ratio : float
        Unexposed participants per exposed participant.
    ci : float
        Confidence level (default 0.95).

    Returns
    -------
    SampleSizeResult

    Examples
    --------
    >>> r = n_risk_difference(0.08, exposed=0.4, unexposed=0.3, group_ratio=3, ci=0.90)
    >>> r.n_exposed, r.n_unexposed, r.n_total
    (525, 1573, 2098)
    """
    return sample_size(
        EffectMeasure.RISK_DIFFERENCE, precision, exposed, unexposed, group_ratio, ci,
    )


def n_risk_ratio(
    precision: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> SampleSizeResult:
    """Sample size for a risk ratio with a target ratio of upper to lower limit.

    Examples
    --------
    >>> r = n_risk_ratio(2, exposed=0.4, unexposed=0.3, group_ratio=3)
    >>> r.n_exposed, r.n_unexposed, r.n_total
    (73, 219, 292)
    """
    return sample_size(
        EffectMeasure.RISK_RATIO, precision, exposed, unexposed, group_ratio, ci,
    )


def n_rate_difference(
    precision: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> SampleSizeResult:
    """Person-time for a rate difference with a target interval width.

    ``exposed`` and ``unexposed`` are event rates per unit of person-time;
    the returned group sizes are in the same units of person-time.
    """
    return sample_size(
        EffectMeasure.RATE_DIFFERENCE, precision, exposed, unexposed, group_ratio, ci,
    )


def n_rate_ratio(
    precision: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> SampleSizeResult:
    """Person-time for a rate ratio with a target ratio of upper to lower limit."""
    return sample_size(
        EffectMeasure.RATE_RATIO, precision, exposed, unexposed, group_ratio, ci,
    )


def n_odds_ratio(
    precision: float,
    exposed_cases: float,
    exposed_controls: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> SampleSizeResult:
    """Cases and controls for an odds ratio with a target precision.

    Parameters
    ----------
    precision : float
        Ratio of the upper to the lower confidence limit (> 1).
    exposed_cases, exposed_controls : float
        Prevalence of exposure among cases and among controls.
    group_ratio : float
        Controls per case.
    ci : float
        Confidence level (default 0.95).

    Returns
    -------
    SampleSizeResult
        ``n_cases`` and ``n_controls`` alias the two group sizes.
    """
    return sample_size(
        EffectMeasure.ODDS_RATIO, precision, exposed_cases, exposed_controls, group_ratio, ci,
    )
