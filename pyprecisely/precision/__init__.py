"""
Study size planning from confidence-interval precision.

Instead of asking how many subjects give a test enough power, these
functions ask how many are needed for an estimate to be precise: a
confidence interval of a given width (differences) or a given ratio of
upper to lower limit (ratios). Three kinds of calculation are provided for
five measures of association:

- ``n_*``: sample size for a target precision;
- ``precision_*``: precision achieved by a given sample size;
- ``upper_*``: sample size so the upper limit stays below a level of
  concern with a given probability.

Validates against: R package precisely; Rothman & Greenland (2018).
"""

from pyprecisely.precision._common import (
    DomainUndefinedError,
    InvalidParameterError,
    PrecisionResult,
    SampleSizeResult,
    UpperLimitResult,
    quantile,
)
from pyprecisely.precision._measures import (
    EffectMeasure,
    half_width,
    point_estimate,
    precision_from_half_width,
    variance_per_unit,
)
from pyprecisely.precision._sample_size import (
    sample_size,
    n_risk_difference,
    n_risk_ratio,
    n_rate_difference,
    n_rate_ratio,
    n_odds_ratio,
)
from pyprecisely.precision._precision import (
    achieved_precision,
    precision_risk_difference,
    precision_risk_ratio,
    precision_rate_difference,
    precision_rate_ratio,
    precision_odds_ratio,
)
from pyprecisely.precision._upper import (
    upper_limit_sample_size,
    upper_risk_difference,
    upper_risk_ratio,
    upper_rate_difference,
    upper_rate_ratio,
    upper_odds_ratio,
)

__all__ = [
    "InvalidParameterError",
    "DomainUndefinedError",
    "SampleSizeResult",
    "PrecisionResult",
    "UpperLimitResult",
    "EffectMeasure",
    "quantile",
    "variance_per_unit",
    "point_estimate",
    "half_width",
    "precision_from_half_width",
    "sample_size",
    "n_risk_difference",
    "n_risk_ratio",
    "n_rate_difference",
    "n_rate_ratio",
    "n_odds_ratio",
    "achieved_precision",
    "precision_risk_difference",
    "precision_risk_ratio",
    "precision_rate_difference",
    "precision_rate_ratio",
    "precision_odds_ratio",
    "upper_limit_sample_size",
    "upper_risk_difference",
    "upper_risk_ratio",
    "upper_rate_difference",
    "upper_rate_ratio",
    "upper_odds_ratio",
]
