"""
Net present value of an irregular cash-flow series.

[T1] NPV = -I + sum_i CF_i * (1 + r)^-(t_i * k)

where t_i = i + 1 for flows at period end and t_i = i for flows at period
start (i is the 0-based position in the series). The initial investment I
sits at period 0 and is never discounted.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from finance_calculator.tvm.errors import DomainError
from finance_calculator.tvm.rates import NormalizedRate, normalize_rate, require_finite


def _as_cash_flow_array(cash_flow: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert a cash-flow series to a finite 1-D float array."""
    try:
        flows = np.asarray(cash_flow, dtype=float)
    except (TypeError, ValueError) as e:
        raise DomainError(f"CRITICAL: cash_flow must contain real numbers: {e}") from e

    if flows.ndim != 1:
        raise DomainError(
            f"CRITICAL: cash_flow must be a 1-D sequence, got shape {flows.shape}"
        )
    if not np.all(np.isfinite(flows)):
        bad = np.flatnonzero(~np.isfinite(flows)).tolist()
        raise DomainError(f"CRITICAL: cash_flow has non-finite values at positions {bad}")
    return flows


def _discount_factors(
    norm: NormalizedRate,
    n_flows: int,
    at_beginning: bool,
) -> np.ndarray:
    """[T1] v^(t*k) for t = 1..N, or t = 0..N-1 when flows are at period start."""
    periods = np.arange(1, n_flows + 1, dtype=float)
    if at_beginning:
        periods -= 1.0
    exponents = periods * norm.frequency

    with np.errstate(over="ignore"):
        factors = np.power(norm.base, -exponents)

    if not np.all(np.isfinite(factors)):
        raise DomainError(
            f"CRITICAL: discount factors overflow double precision for "
            f"periodic rate {norm.periodic_rate}"
        )
    return factors


def discount_cash_flows(
    discount_rate: float,
    times_compounded_per_period: int | None = None,
    cash_flows_at_beginning: bool = False,
    cash_flow: Sequence[float] | np.ndarray = (),
) -> np.ndarray:
    """
    Discount each cash flow in a series back to period 0.

    Parameters
    ----------
    discount_rate : float
        Discount rate per period in percent
    times_compounded_per_period : int, optional
        Compoundings per period (k), default 1
    cash_flows_at_beginning : bool, default False
        If True, each flow occurs at the start of its period
        (exponent reduced by k)
    cash_flow : sequence of float
        Flow for periods 1, 2, ... in order

    Returns
    -------
    np.ndarray
        Discounted value of each flow, same length as cash_flow

    Raises
    ------
    DomainError
        If discount_rate <= -100% for a non-empty series, k is not a
        positive integer, or any flow is non-finite
    """
    flows = _as_cash_flow_array(cash_flow)
    norm = normalize_rate(discount_rate, float(flows.size), times_compounded_per_period)
    factors = _discount_factors(norm, flows.size, cash_flows_at_beginning)

    with np.errstate(over="ignore"):
        discounted = flows * factors

    if not np.all(np.isfinite(discounted)):
        raise DomainError(
            f"CRITICAL: discounted cash flows overflow double precision at {discount_rate}%"
        )
    return discounted


def net_present_value(
    initial_investment: float,
    discount_rate: float,
    times_compounded_per_period: int | None = None,
    cash_flows_at_beginning: bool = False,
    cash_flow: Sequence[float] | np.ndarray = (),
) -> float:
    """
    Calculate net present value.

    Parameters
    ----------
    initial_investment : float
        Amount invested at period 0, subtracted undiscounted
    discount_rate : float
        Discount rate per period in percent
    times_compounded_per_period : int, optional
        Compoundings per period, default 1
    cash_flows_at_beginning : bool, default False
        Whether flows occur at the start of their period
    cash_flow : sequence of float
        Flows for periods 1..N; negative values are outflows

    Returns
    -------
    float
        NPV; -initial_investment for an empty series

    Examples
    --------
    >>> round(net_present_value(1000, 10, 1, False, [300, 300, 300, 300]), 2)
    -49.04
    """
    initial_investment = require_finite("initial_investment", initial_investment)
    discounted = discount_cash_flows(
        discount_rate,
        times_compounded_per_period,
        cash_flows_at_beginning,
        cash_flow,
    )

    with np.errstate(over="ignore"):
        npv = -initial_investment + float(discounted.sum())
    if not np.isfinite(npv):
        raise DomainError(f"CRITICAL: net present value is not finite ({npv})")
    return npv


def cash_flow_schedule(
    discount_rate: float,
    times_compounded_per_period: int | None = None,
    cash_flows_at_beginning: bool = False,
    cash_flow: Sequence[float] | np.ndarray = (),
) -> pd.DataFrame:
    """
    Tabulate the discounting of a cash-flow series.

    Returns
    -------
    pd.DataFrame
        One row per flow with columns:
        period, cash_flow, discount_factor, present_value, cumulative_present_value

    Raises
    ------
    DomainError
        Under the same conditions as discount_cash_flows, or when the
        running total overflows
    """
    flows = _as_cash_flow_array(cash_flow)
    discounted = discount_cash_flows(
        discount_rate, times_compounded_per_period, cash_flows_at_beginning, flows
    )
    norm = normalize_rate(discount_rate, float(flows.size), times_compounded_per_period)
    factors = _discount_factors(norm, flows.size, cash_flows_at_beginning)

    with np.errstate(over="ignore"):
        cumulative = np.cumsum(discounted)
    if not np.all(np.isfinite(cumulative)):
        raise DomainError(
            f"CRITICAL: cumulative present value overflows double precision at {discount_rate}%"
        )

    return pd.DataFrame({
        "period": np.arange(1, flows.size + 1),
        "cash_flow": flows,
        "discount_factor": factors,
        "present_value": discounted,
        "cumulative_present_value": cumulative,
    })
