"""
Internal rate of return: the discount rate at which NPV is zero.

Solved with Brent's method on the same net_present_value used everywhere
else, so flow timing and compounding follow identical conventions.
"""

import logging
import math
from collections.abc import Sequence

import numpy as np
from scipy.optimize import brentq

from finance_calculator.tvm.errors import DomainError
from finance_calculator.tvm.npv import _as_cash_flow_array, net_present_value
from finance_calculator.tvm.rates import require_finite, require_frequency

logger = logging.getLogger(__name__)

#: Default search bracket in percent per period
IRR_BRACKET: tuple[float, float] = (-99.0, 1000.0)

#: Absolute tolerance on the rate, in percent
IRR_XTOL: float = 1e-10

#: Largest log of a discounted term allowed at the low end of the bracket
#: (doubles overflow above e^709.78)
MAX_LOG_DISCOUNTED: float = 700.0


def _lowest_finite_rate(flows: np.ndarray, k: int, at_beginning: bool) -> float:
    """
    Lowest rate (percent per period) at which the discounted series stays finite.

    [T1] S * (1 + r)^-E <= e^L  <=>  r >= expm1(-(L - ln S) / E)

    where E is the largest discount exponent, S = sum |CF| and
    L = MAX_LOG_DISCOUNTED.
    """
    max_exponent = (flows.size - 1 if at_beginning else flows.size) * k
    if max_exponent <= 0:
        return -math.inf
    budget = MAX_LOG_DISCOUNTED - math.log(max(float(np.abs(flows).sum()), 1.0))
    return math.expm1(-budget / max_exponent) * 100.0 * k


def internal_rate_of_return(
    initial_investment: float,
    cash_flow: Sequence[float] | np.ndarray,
    times_compounded_per_period: int = 1,
    cash_flows_at_beginning: bool = False,
    bracket: tuple[float, float] = IRR_BRACKET,
) -> float:
    """
    Calculate the rate (percent per period) that makes NPV zero.

    Parameters
    ----------
    initial_investment : float
        Amount invested at period 0
    cash_flow : sequence of float
        Flows for periods 1..N
    times_compounded_per_period : int, default 1
        Compoundings per period
    cash_flows_at_beginning : bool, default False
        Whether flows occur at the start of their period
    bracket : tuple of float
        (low, high) rates in percent; NPV must change sign across it
        (a low end whose discount factors would overflow is raised to the
        lowest rate that keeps the series finite)

    Returns
    -------
    float
        Internal rate of return in percent per period

    Raises
    ------
    DomainError
        If the bracket is invalid, lies wholly below the lowest finite
        discounting rate, or NPV does not change sign across it

    Examples
    --------
    >>> round(internal_rate_of_return(1000, [1100]), 6)
    10.0
    """
    initial_investment = require_finite("initial_investment", initial_investment)
    k = require_frequency("times_compounded_per_period", times_compounded_per_period)
    low, high = (require_finite("bracket", b) for b in bracket)

    if not low < high:
        raise DomainError(f"CRITICAL: bracket must satisfy low < high, got {bracket}")
    if low <= -100.0 * k:
        raise DomainError(
            f"CRITICAL: bracket low {low}% gives a non-positive compounding base "
            f"at {k} compoundings per period"
        )

    flows = _as_cash_flow_array(cash_flow)
    n_flows = flows.size
    floor = _lowest_finite_rate(flows, k, bool(cash_flows_at_beginning))
    if low < floor:
        logger.debug(
            f"IRR bracket low {low}% raised to {floor:.6f}% so discount factors "
            f"over {n_flows} flows stay finite"
        )
        low = floor
    if not low < high:
        raise DomainError(
            f"CRITICAL: bracket high {high}% is below the lowest rate {floor:.6f}% "
            f"with finite discount factors for {n_flows} flows"
        )

    def npv_at(rate: float) -> float:
        return net_present_value(initial_investment, rate, k, cash_flows_at_beginning, flows)

    npv_low, npv_high = npv_at(low), npv_at(high)
    if npv_low == 0:
        return low
    if npv_high == 0:
        return high
    if np.sign(npv_low) == np.sign(npv_high):
        raise DomainError(
            f"CRITICAL: NPV does not change sign over [{low}%, {high}%] "
            f"(NPV {npv_low:.6g} and {npv_high:.6g}); no IRR in bracket"
        )

    try:
        rate = brentq(npv_at, low, high, xtol=IRR_XTOL)
    except RuntimeError as e:
        raise DomainError(f"CRITICAL: IRR search did not converge: {e}") from e

    logger.debug(f"IRR converged at {rate:.10f}%")
    return float(rate)
