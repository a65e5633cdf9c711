"""
Present value of a single future sum and of a stream of equal deposits.

[T1] PV = FV / (1 + r)^n
[T1] PV(deposits) = d * a_n, with a_n from tvm.rates.annuity_factor

Sign convention: amounts are signed values in the caller's frame and are
never flipped. For deposits, total_interest = total_principal - present_value,
the interest the stream earns over its present value.
"""

import math
from dataclasses import dataclass

from finance_calculator.tvm.errors import DomainError
from finance_calculator.tvm.rates import (
    annuity_factor,
    normalize_rate,
    require_finite,
)


@dataclass(frozen=True)
class PresentValueResult:
    """
    Present value of a lump sum.

    Attributes
    ----------
    present_value : float
        Value today of the future sum
    total_interest : float
        future_value - present_value
    """

    present_value: float
    total_interest: float

    def to_dict(self) -> dict[str, float]:
        """Convert to interface field names."""
        return {
            "presentValue": self.present_value,
            "totalInterest": self.total_interest,
        }


@dataclass(frozen=True)
class DepositsPresentValueResult:
    """
    Present value of an annuity of equal deposits.

    Attributes
    ----------
    present_value : float
        Discounted value of all deposits
    total_principal : float
        Undiscounted sum of deposits (d * n)
    total_interest : float
        total_principal - present_value
    """

    present_value: float
    total_principal: float
    total_interest: float

    def to_dict(self) -> dict[str, float]:
        """Convert to interface field names."""
        return {
            "presentValue": self.present_value,
            "totalPrincipal": self.total_principal,
            "totalInterest": self.total_interest,
        }


def present_value_of_future_money(
    future_value: float,
    num_periods: float,
    interest_rate: float,
    times_compounded_per_period: int | None = None,
) -> PresentValueResult:
    """
    Calculate present value of a sum received after num_periods.

    [T1] PV = FV / (1 + r)^n

    Parameters
    ----------
    future_value : float
        Amount received at the end of the horizon
    num_periods : float
        Number of periods, >= 0 (fractional allowed)
    interest_rate : float
        Rate per period in percent
    times_compounded_per_period : int, optional
        Compoundings per period, default 1

    Returns
    -------
    PresentValueResult
        Present value and total interest

    Raises
    ------
    DomainError
        If interest_rate <= -100% with num_periods > 0, or inputs are invalid

    Examples
    --------
    >>> result = present_value_of_future_money(1000, 5, 5)
    >>> round(result.present_value, 2)
    783.53
    """
    future_value = require_finite("future_value", future_value)
    norm = normalize_rate(interest_rate, num_periods, times_compounded_per_period)

    growth = norm.growth_factor
    if growth == 0:
        raise DomainError(
            f"CRITICAL: compounding factor underflows to zero for rate "
            f"{interest_rate}% over {num_periods} periods"
        )
    present_value = future_value / growth
    total_interest = future_value - present_value

    if not (math.isfinite(present_value) and math.isfinite(total_interest)):
        raise DomainError(
            f"CRITICAL: present value of {future_value} over {num_periods} periods "
            f"at {interest_rate}% is not finite ({present_value})"
        )

    return PresentValueResult(
        present_value=present_value,
        total_interest=total_interest,
    )


def present_value_of_deposits(
    num_periods: float,
    interest_rate: float,
    deposit_amount: float,
    deposit_at_beginning: bool = False,
    times_compounded_per_period: int | None = None,
) -> DepositsPresentValueResult:
    """
    Calculate the present value of num_periods equal deposits.

    [T1] PV = d * (1 - (1+r)^-n) / r, times (1 + r) for an annuity-due
    [T1] PV = d * n at r = 0

    Parameters
    ----------
    num_periods : float
        Number of deposits/periods, >= 0
    interest_rate : float
        Rate per period in percent
    deposit_amount : float
        Signed amount of each deposit
    deposit_at_beginning : bool, default False
        True for an annuity-due (deposit at period start)
    times_compounded_per_period : int, optional
        Compoundings (and deposits) per period, default 1

    Returns
    -------
    DepositsPresentValueResult
        Present value, total principal, total interest

    Examples
    --------
    >>> result = present_value_of_deposits(10, 0, 100)
    >>> result.present_value, result.total_interest
    (1000.0, 0.0)
    """
    deposit_amount = require_finite("deposit_amount", deposit_amount)
    norm = normalize_rate(interest_rate, num_periods, times_compounded_per_period)

    present_value = deposit_amount * annuity_factor(norm, due=bool(deposit_at_beginning))
    total_principal = deposit_amount * norm.n_periods
    total_interest = total_principal - present_value

    if not all(math.isfinite(v) for v in (present_value, total_principal, total_interest)):
        raise DomainError(
            f"CRITICAL: present value of deposits is not finite "
            f"(present_value={present_value}, total_principal={total_principal})"
        )

    return DepositsPresentValueResult(
        present_value=present_value,
        total_principal=total_principal,
        total_interest=total_interest,
    )
