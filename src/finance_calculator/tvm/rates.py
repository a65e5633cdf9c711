"""
Rate/period normalization shared by every TVM calculation.

Converts a nominal percentage rate and a compounding frequency into a
per-sub-period decimal rate and a sub-period count:

    [T1] r = (rate / 100) / k
    [T1] n = periods * k

Also hosts input validation and the annuity factors, since every
operation needs the same degenerate-case handling at r = 0.
"""

import math
import numbers
from dataclasses import dataclass

from finance_calculator.config.settings import SETTINGS
from finance_calculator.tvm.errors import DomainError


# =============================================================================
# Input Validation
# =============================================================================

def require_finite(name: str, value: float) -> float:
    """
    Validate that a numeric input is a finite real number.

    Returns
    -------
    float
        The value as a float

    Raises
    ------
    DomainError
        If value is not a real number (booleans included), or is NaN/inf
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DomainError(f"CRITICAL: {name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"CRITICAL: {name} must be finite, got {value}")
    return value


def require_periods(name: str, value: float) -> float:
    """Validate a period count: finite and >= 0."""
    value = require_finite(name, value)
    if value < 0:
        raise DomainError(f"CRITICAL: {name} must be >= 0, got {value}")
    return value


def require_frequency(name: str, value: int) -> int:
    """
    Validate a compounding frequency.

    Integral floats (e.g. 4.0) are accepted; booleans are not.

    Raises
    ------
    DomainError
        If value is not a positive integer
    """
    if isinstance(value, bool):
        raise DomainError(f"CRITICAL: {name} must be a positive integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        frequency = int(value)
    elif (
        isinstance(value, numbers.Real)
        and math.isfinite(value)
        and float(value).is_integer()
    ):
        frequency = int(value)
    else:
        raise DomainError(f"CRITICAL: {name} must be a positive integer, got {value!r}")

    if frequency < 1:
        raise DomainError(f"CRITICAL: {name} must be >= 1, got {frequency}")
    return frequency


# =============================================================================
# Normalization
# =============================================================================

def _power(base: float, exponent: float) -> float:
    """base ** exponent, with overflow surfaced as a DomainError."""
    try:
        value = base ** exponent
    except OverflowError as e:
        raise DomainError(
            f"CRITICAL: {base} ** {exponent} overflows double precision"
        ) from e
    if not math.isfinite(value):
        raise DomainError(f"CRITICAL: {base} ** {exponent} is not finite")
    return value


@dataclass(frozen=True)
class NormalizedRate:
    """
    Per-sub-period rate and sub-period count.

    Attributes
    ----------
    periodic_rate : float
        Decimal growth rate per sub-period (r)
    n_periods : float
        Number of sub-periods (n), may be fractional
    frequency : int
        Compoundings per stated period (k)
    """

    periodic_rate: float
    n_periods: float
    frequency: int

    @property
    def base(self) -> float:
        """Compounding base (1 + r)."""
        return 1.0 + self.periodic_rate

    @property
    def growth_factor(self) -> float:
        """[T1] (1 + r)^n"""
        return _power(self.base, self.n_periods)

    @property
    def discount_factor(self) -> float:
        """[T1] v^n = (1 + r)^-n"""
        return _power(self.base, -self.n_periods)

    def growth_minus_one(self) -> float:
        """
        (1 + r)^n - 1, computed as expm1(n * log1p(r)).

        Stays accurate for rates close to zero where the direct form
        cancels catastrophically.
        """
        if self.n_periods == 0:
            return 0.0
        try:
            return math.expm1(self.n_periods * math.log1p(self.periodic_rate))
        except OverflowError as e:
            raise DomainError(
                f"CRITICAL: growth over {self.n_periods} periods at "
                f"{self.periodic_rate} overflows double precision"
            ) from e


def normalize_rate(
    rate: float,
    periods: float,
    frequency: int | None = None,
) -> NormalizedRate:
    """
    Normalize a percentage rate and period count to sub-period terms.

    Parameters
    ----------
    rate : float
        Nominal rate per period in percent (5 means 5%)
    periods : float
        Number of stated periods, >= 0
    frequency : int, optional
        Compoundings per period. Defaults to
        SETTINGS.rates.default_compounding_frequency.

    Returns
    -------
    NormalizedRate
        r = (rate/100)/k, n = periods*k

    Raises
    ------
    DomainError
        If the frequency is not a positive integer, periods are negative,
        any input is non-finite, or 1 + r <= 0 while n > 0

    Examples
    --------
    >>> norm = normalize_rate(12, 2, 12)
    >>> norm.n_periods
    24.0
    >>> round(norm.periodic_rate, 10)
    0.01
    """
    if frequency is None:
        frequency = SETTINGS.rates.default_compounding_frequency

    rate = require_finite("rate", rate)
    periods = require_periods("periods", periods)
    k = require_frequency("frequency", frequency)

    periodic_rate = rate / SETTINGS.rates.percent_scale / k
    n_periods = periods * k

    if 1.0 + periodic_rate <= 0 and n_periods > 0:
        raise DomainError(
            f"CRITICAL: rate {rate}% compounded {k}x gives a non-positive "
            f"compounding base {1.0 + periodic_rate}"
        )

    return NormalizedRate(periodic_rate=periodic_rate, n_periods=n_periods, frequency=k)


def effective_rate(rate: float, frequency: int | None = None) -> float:
    """
    Effective percentage rate per period for a compounded nominal rate.

    [T1] i_eff = (1 + r/k)^k - 1

    >>> round(effective_rate(12, 12), 6)
    12.682503
    """
    norm = normalize_rate(rate, 1.0, frequency)
    return norm.growth_minus_one() * SETTINGS.rates.percent_scale


# =============================================================================
# Annuity Factors
# =============================================================================

def annuity_factor(norm: NormalizedRate, due: bool = False) -> float:
    """
    Present value of 1 paid each sub-period for n sub-periods.

    [T1] a_n = (1 - v^n) / r        (ordinary, paid at period end)
    [T1] a_n(due) = a_n * (1 + r)   (paid at period start)
    [T1] a_n = n                    at r = 0
    """
    if norm.periodic_rate == 0:
        return norm.n_periods
    if norm.n_periods == 0:
        return 0.0

    try:
        one_minus_v_n = -math.expm1(-norm.n_periods * math.log1p(norm.periodic_rate))
    except OverflowError as e:
        raise DomainError(
            f"CRITICAL: discounting over {norm.n_periods} periods at "
            f"{norm.periodic_rate} overflows double precision"
        ) from e

    factor = one_minus_v_n / norm.periodic_rate
    if due:
        factor *= norm.base
    return factor


def accumulation_factor(norm: NormalizedRate, due: bool = False) -> float:
    """
    Future value of 1 paid each sub-period for n sub-periods.

    [T1] s_n = ((1 + r)^n - 1) / r  (ordinary)
    [T1] s_n(due) = s_n * (1 + r)
    [T1] s_n = n                    at r = 0
    """
    if norm.periodic_rate == 0:
        return norm.n_periods
    if norm.n_periods == 0:
        return 0.0

    factor = norm.growth_minus_one() / norm.periodic_rate
    if due:
        factor *= norm.base
    if not math.isfinite(factor):
        raise DomainError(f"CRITICAL: accumulation factor is not finite ({factor})")
    return factor
