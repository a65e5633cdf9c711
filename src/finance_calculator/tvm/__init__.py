"""
Time-value-of-money engine.

[T1] Closed-form present value, future value, and net present value
calculations sharing a single rate/period normalizer.
"""

from .errors import DomainError
from .future_value import FutureValueResult, future_value
from .irr import internal_rate_of_return
from .npv import cash_flow_schedule, discount_cash_flows, net_present_value
from .present_value import (
    DepositsPresentValueResult,
    PresentValueResult,
    present_value_of_deposits,
    present_value_of_future_money,
)
from .rates import (
    NormalizedRate,
    accumulation_factor,
    annuity_factor,
    effective_rate,
    normalize_rate,
)

__all__ = [
    # Errors
    "DomainError",
    # Normalizer
    "NormalizedRate",
    "normalize_rate",
    "effective_rate",
    "annuity_factor",
    "accumulation_factor",
    # Present value
    "PresentValueResult",
    "DepositsPresentValueResult",
    "present_value_of_future_money",
    "present_value_of_deposits",
    # Future value
    "FutureValueResult",
    "future_value",
    # Net present value
    "discount_cash_flows",
    "cash_flow_schedule",
    "net_present_value",
    # Internal rate of return
    "internal_rate_of_return",
]
