"""
Future value of a present sum plus a stream of periodic deposits.

[T1] FV = pv * (1 + r)^n + d * s_n
where r and n are the sub-period rate and count from tvm.rates.normalize_rate
and s_n is the accumulation factor (times (1 + r) for deposits at the start
of each sub-period).
"""

import math
from dataclasses import dataclass

from finance_calculator.tvm.errors import DomainError
from finance_calculator.tvm.rates import (
    accumulation_factor,
    normalize_rate,
    require_finite,
)


@dataclass(frozen=True)
class FutureValueResult:
    """
    Future value of a lump sum and deposits.

    Attributes
    ----------
    future_value : float
        Lump-sum growth plus deposit growth
    total_interest : float
        future_value - present_value - deposit_amount * n
    """

    future_value: float
    total_interest: float

    def to_dict(self) -> dict[str, float]:
        """Convert to interface field names."""
        return {
            "futureValue": self.future_value,
            "totalInterest": self.total_interest,
        }


def future_value(
    present_value: float,
    num_periods: float,
    interest_rate: float,
    times_compounded_per_period: int | None = None,
    deposit_amount: float = 0.0,
    deposit_at_beginning: bool = False,
) -> FutureValueResult:
    """
    Calculate the future value of money and/or deposits.

    One deposit is made per compounding sub-period, so n = num_periods * k
    deposits in total.

    Parameters
    ----------
    present_value : float
        Sum invested today
    num_periods : float
        Number of periods, >= 0
    interest_rate : float
        Nominal rate per period in percent
    times_compounded_per_period : int, optional
        Compoundings per period (k), default 1
    deposit_amount : float, default 0.0
        Signed amount deposited each sub-period
    deposit_at_beginning : bool, default False
        True if deposits are made at the start of each sub-period

    Returns
    -------
    FutureValueResult
        Future value and total interest

    Raises
    ------
    DomainError
        If k is not a positive integer, num_periods < 0, the rate gives a
        non-positive compounding base, or the result overflows

    Examples
    --------
    >>> result = future_value(1000, 10, 5, 1, 100, False)
    >>> round(result.future_value, 2)
    2886.68
    """
    present_value = require_finite("present_value", present_value)
    deposit_amount = require_finite("deposit_amount", deposit_amount)
    norm = normalize_rate(interest_rate, num_periods, times_compounded_per_period)

    lump_sum = present_value * norm.growth_factor
    deposits = deposit_amount * accumulation_factor(norm, due=bool(deposit_at_beginning))
    total = lump_sum + deposits

    if not math.isfinite(total):
        raise DomainError(f"CRITICAL: future value is not finite ({total})")

    return FutureValueResult(
        future_value=total,
        total_interest=total - present_value - deposit_amount * norm.n_periods,
    )
