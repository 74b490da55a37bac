"""Sample size for the upper confidence limit to stay below a level of concern.

The upper limit of a future interval is ``est + z_ci * se``, with ``est``
normally distributed around the true effect with standard error ``se``.
Requiring ``P(upper <= U) >= prob`` gives

    (z_ci + z_prob) * se <= d

where ``d = ln(U) - ln(true)`` on the log scale or ``U - true`` on the
linear scale, and ``z_prob`` is the one-sided quantile of ``prob``.
Substituting ``se = sqrt(v / n)`` gives ``n = v * ((z_ci + z_prob) / d)^2``.
The true effect is the one implied by the group inputs, so equal inputs
plan under the null.
"""

from __future__ import annotations

import math

from pyprecisely.precision._common import (
    InvalidParameterError,
    UpperLimitResult,
    _check_finite,
    _check_open_unit,
    quantile,
)
from pyprecisely.precision._measures import (
    EffectMeasure,
    _as_measure,
    point_estimate,
    variance_per_unit,
)
from pyprecisely.precision._sample_size import _group_sizes, _solve_n


def _distance_to_limit(measure: EffectMeasure, upper_limit: float, effect: float) -> float:
    """Distance from the true effect up to ``upper_limit`` on the estimation scale."""
    if measure.is_ratio:
        if upper_limit <= 0.0:
            raise InvalidParameterError("upper_limit", upper_limit, "must be > 0")
        d = math.log(upper_limit) - math.log(effect)
    else:
        d = upper_limit - effect
    if d <= 0.0:
        raise InvalidParameterError(
            "upper_limit", upper_limit,
            f"must be above the assumed {measure.title} ({effect:.6g}); "
            "no sample size keeps the upper limit below it",
        )
    return d


def upper_limit_sample_size(
    measure: EffectMeasure | str,
    upper_limit: float,
    prob: float,
    index: float,
    comparison: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> UpperLimitResult:
    """Sample size so the upper confidence limit is at most ``upper_limit``.

    Parameters
    ----------
    measure : EffectMeasure or str
        Measure of association.
    upper_limit : float
        Level of concern on the natural scale of the measure.
    prob : float
        Desired probability that the upper limit is at or below
        ``upper_limit``.
    index, comparison : float
        Risks, rates, or exposure prevalences in the index and comparison
        groups; they define the assumed true effect.
    group_ratio : float
        Comparison group size relative to the index group.
    ci : float
        Confidence level of the interval whose upper limit is planned.

    Returns
    -------
    UpperLimitResult

    Raises
    ------
    InvalidParameterError
        If ``upper_limit`` is not above the assumed effect, or ``prob`` is
        so low that any sample size satisfies the requirement.
    """
    measure = _as_measure(measure)
    upper_limit = _check_finite("upper_limit", upper_limit)
    prob = _check_open_unit("prob", prob)
    ci = _check_open_unit("ci", ci)
    z_ci = quantile(ci)
    z_prob = quantile(prob, one_sided=True)
    v = variance_per_unit(measure, index, comparison, group_ratio)
    effect = point_estimate(measure, index, comparison)
    d = _distance_to_limit(measure, upper_limit, effect)

    # z_ci + z_prob > 0  <=>  prob > (1 - ci) / 2
    z = z_ci + z_prob
    if z <= 0.0:
        raise InvalidParameterError(
            "prob", prob, f"must be > {(1.0 - ci) / 2.0:g} at ci={ci:g}",
        )

    n = _solve_n(v, z, d, float(group_ratio), "upper_limit", upper_limit)
    n_index, n_comparison, n_total = _group_sizes(n, float(group_ratio))

    return UpperLimitResult(
        measure=measure,
        n_index=n_index,
        n_comparison=n_comparison,
        n_total=n_total,
        effect=effect,
        upper_limit=upper_limit,
        prob=prob,
        index=float(index),
        comparison=float(comparison),
        group_ratio=float(group_ratio),
        ci=float(ci),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def upper_risk_difference(
    upper_limit: float,
    prob: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> UpperLimitResult:
    """Sample size for the risk difference upper limit to stay at or below ``upper_limit``."""
    return upper_limit_sample_size(
        EffectMeasure.RISK_DIFFERENCE, upper_limit, prob, exposed, unexposed, group_ratio, ci,
    )


def upper_risk_ratio(
    upper_limit: float,
    prob: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> UpperLimitResult:
    """Sample size for the risk ratio upper limit to stay at or below ``upper_limit``."""
    return upper_limit_sample_size(
        EffectMeasure.RISK_RATIO, upper_limit, prob, exposed, unexposed, group_ratio, ci,
    )


def upper_rate_difference(
    upper_limit: float,
    prob: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> UpperLimitResult:
    """Person-time for the rate difference upper limit to stay at or below ``upper_limit``."""
    return upper_limit_sample_size(
        EffectMeasure.RATE_DIFFERENCE, upper_limit, prob, exposed, unexposed, group_ratio, ci,
    )


def upper_rate_ratio(
    upper_limit: float,
    prob: float,
    exposed: float,
    unexposed: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> UpperLimitResult:
    """Person-time for the rate ratio upper limit to stay at or below ``upper_limit``.

    Parameters
    ----------
    upper_limit : float
        Rate ratio the upper confidence limit should not exceed.
    prob : float
        Probability that the upper limit is at or below ``upper_limit``.
    exposed, unexposed : float
        Event rates per unit of person-time (> 0). Equal rates plan under
        the null.
    group_ratio : float
        Unexposed person-time per unit of exposed person-time.
    ci : float
        Confidence level (default 0.95).

    Returns
    -------
    UpperLimitResult

    Examples
    --------
    >>> r = upper_rate_ratio(2, prob=0.90, exposed=0.01, unexposed=0.01)
    >>> r.n_exposed, r.n_unexposed
    (4374, 4374)
    """
    return upper_limit_sample_size(
        EffectMeasure.RATE_RATIO, upper_limit, prob, exposed, unexposed, group_ratio, ci,
    )


def upper_odds_ratio(
    upper_limit: float,
    prob: float,
    exposed_cases: float,
    exposed_controls: float,
    group_ratio: float = 1.0,
    ci: float = 0.95,
) -> UpperLimitResult:
    """Cases and controls for the odds ratio upper limit to stay at or below ``upper_limit``."""
    return upper_limit_sample_size(
        EffectMeasure.ODDS_RATIO, upper_limit, prob, exposed_cases, exposed_controls,
        group_ratio, ci,
    )
