"""Shared error types, validation, quantiles and result types."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from scipy.stats import norm

if TYPE_CHECKING:
    from pyprecisely.precision._measures import EffectMeasure


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InvalidParameterError(ValueError):
    """An input lies outside its valid mathematical domain.

    Attributes
    ----------
    parameter : str
        Name of the offending argument.
    value : object
        The value that was passed.
    reason : str
        The violated constraint, e.g. ``"must be in (0, 1)"``.
    """

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"{parameter} {reason}, got {value}")


class DomainUndefinedError(InvalidParameterError):
    """The variance formula is non-finite or non-positive for these inputs."""


# ---------------------------------------------------------------------------
# Shared validation
# ---------------------------------------------------------------------------

def _check_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(name, value, "must be a real number") from None
    if not math.isfinite(value):
        raise InvalidParameterError(name, value, "must be finite")
    return value


def _check_open_unit(name: str, value: float) -> float:
    """Require ``value`` in the open interval (0, 1)."""
    value = _check_finite(name, value)
    if not (0.0 < value < 1.0):
        raise InvalidParameterError(name, value, "must be in (0, 1)")
    return value


def _check_positive(name: str, value: float) -> float:
    """Require a finite ``value`` > 0."""
    value = _check_finite(name, value)
    if value <= 0.0:
        raise InvalidParameterError(name, value, "must be > 0")
    return value


# ---------------------------------------------------------------------------
# Quantile provider
# ---------------------------------------------------------------------------

def quantile(confidence_level: float, one_sided: bool = False) -> float:
    """Standard-normal critical value for a confidence level.

    Parameters
    ----------
    confidence_level : float
        Probability in (0, 1).
    one_sided : bool
        If ``False`` (default), return ``z`` such that the central area
        ``(-z, z)`` equals ``confidence_level``. If ``True``, return ``z``
        such that the area below ``z`` equals ``confidence_level``.

    Returns
    -------
    float

    Examples
    --------
    >>> round(quantile(0.95), 4)
    1.96
    >>> round(quantile(0.95, one_sided=True), 4)
    1.6449
    """
    confidence_level = _check_open_unit("confidence_level", confidence_level)
    if one_sided:
        return float(norm.ppf(confidence_level))
    return float(norm.ppf(1.0 - (1.0 - confidence_level) / 2.0))


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

class _GroupAliases:
    """Exposed/unexposed and cases/controls names for the two group sizes."""

    @property
    def n_exposed(self) -> int | float:
        return self.n_index

    @property
    def n_unexposed(self) -> int | float:
        return self.n_comparison

    @property
    def n_cases(self) -> int | float:
        return self.n_index

    @property
    def n_controls(self) -> int | float:
        return self.n_comparison


@dataclass(frozen=True)
class SampleSizeResult(_GroupAliases):
    """Sample size required to reach a target precision.

    ``n_index`` counts the exposed group (or cases); ``n_comparison`` the
    unexposed group (or controls). For rate measures both count units of
    person-time.
    """

    measure: EffectMeasure
    n_index: int
    n_comparison: int
    n_total: int
    effect: float
    precision: float
    index: float
    comparison: float
    group_ratio: float
    ci: float

    def to_dict(self) -> dict[str, Any]:
        """One flat row with measure-specific column names."""
        m = self.measure
        return {
            f"n_{m.index_label}": self.n_index,
            f"n_{m.comparison_label}": self.n_comparison,
            "n_total": self.n_total,
            m.column: self.effect,
            "precision": self.precision,
            m.index_arg: self.index,
            m.comparison_arg: self.comparison,
            "group_ratio": self.group_ratio,
            "ci": self.ci,
        }

    def summary(self) -> str:
        """Human-readable summary."""
        m = self.measure
        return "\n".join([
            f"Sample size for the precision of a {m.title}",
            "=" * 50,
            f"Precision       : {self.precision:g} ({m.precision_kind})",
            f"{m.title:<16}: {self.effect:.4g}",
            f"{m.index_arg:<16}: {self.index:g}",
            f"{m.comparison_arg:<16}: {self.comparison:g}",
            f"Group ratio     : {self.group_ratio:g}",
            f"Confidence      : {self.ci:.0%}",
            f"n {m.index_label:<14}: {self.n_index}",
            f"n {m.comparison_label:<14}: {self.n_comparison}",
            f"n total         : {self.n_total}",
        ])


@dataclass(frozen=True)
class PrecisionResult(_GroupAliases):
    """Precision achieved by a fixed sample size.

    ``precision`` is a width for difference measures and an upper/lower
    ratio for ratio measures.
    """

    measure: EffectMeasure
    precision: float
    n_index: float
    n_comparison: float
    n_total: float
    effect: float
    index: float
    comparison: float
    group_ratio: float
    ci: float

    def to_dict(self) -> dict[str, Any]:
        """One flat row with measure-specific column names."""
        m = self.measure
        return {
            "precision": self.precision,
            f"n_{m.index_label}": self.n_index,
            f"n_{m.comparison_label}": self.n_comparison,
            "n_total": self.n_total,
            m.column: self.effect,
            m.index_arg: self.index,
            m.comparison_arg: self.comparison,
            "group_ratio": self.group_ratio,
            "ci": self.ci,
        }

    def summary(self) -> str:
        """Human-readable summary."""
        m = self.measure
        return "\n".join([
            f"Precision of a {m.title}",
            "=" * 50,
            f"Precision       : {self.precision:.4f} ({m.precision_kind})",
            f"{m.title:<16}: {self.effect:.4g}",
            f"n {m.index_label:<14}: {self.n_index:g}",
            f"n {m.comparison_label:<14}: {self.n_comparison:g}",
            f"Group ratio     : {self.group_ratio:g}",
            f"Confidence      : {self.ci:.0%}",
        ])


@dataclass(frozen=True)
class UpperLimitResult(_GroupAliases):
    """Sample size for the upper confidence limit to stay below a level.

    With probability ``prob`` the upper limit of the ``ci`` interval falls
    at or below ``upper_limit``, given the effect implied by the inputs.
    """

    measure: EffectMeasure
    n_index: int
    n_comparison: int
    n_total: int
    effect: float
    upper_limit: float
    prob: float
    index: float
    comparison: float
    group_ratio: float
    ci: float

    def to_dict(self) -> dict[str, Any]:
        """One flat row with measure-specific column names."""
        m = self.measure
        return {
            f"n_{m.index_label}": self.n_index,
            f"n_{m.comparison_label}": self.n_comparison,
            "n_total": self.n_total,
            m.column: self.effect,
            "upper_limit": self.upper_limit,
            "prob": self.prob,
            m.index_arg: self.index,
            m.comparison_arg: self.comparison,
            "group_ratio": self.group_ratio,
            "ci": self.ci,
        }

    def summary(self) -> str:
        """Human-readable summary."""
        m = self.measure
        return "\n".join([
            f"Sample size for the upper limit of a {m.title}",
            "=" * 50,
            f"Upper limit     : {self.upper_limit:g}",
            f"Probability     : {self.prob:g}",
            f"{m.title:<16}: {self.effect:.4g}",
            f"Group ratio     : {self.group_ratio:g}",
            f"Confidence      : {self.ci:.0%}",
            f"n {m.index_label:<14}: {self.n_index}",
            f"n {m.comparison_label:<14}: {self.n_comparison}",
            f"n total         : {self.n_total}",
        ])
