"""
FinanceCalculator - named-method entry point for the TVM engine.

One object exposes the four calculations with the argument order of the
public interface. Every result is run through the validation gates before
it is returned; a HALT surfaces as DomainError.

The calculator holds only immutable configuration, so a single instance can
be shared freely between threads.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any, Optional

import numpy as np

from finance_calculator.tvm.errors import DomainError
from finance_calculator.tvm.future_value import FutureValueResult, future_value
from finance_calculator.tvm.npv import net_present_value
from finance_calculator.tvm.present_value import (
    DepositsPresentValueResult,
    PresentValueResult,
    present_value_of_deposits,
    present_value_of_future_money,
)
from finance_calculator.tvm.rates import normalize_rate
from finance_calculator.validation.gates import AnyTVMResult, ValidationEngine

logger = logging.getLogger(__name__)


class FinanceCalculator:
    """
    A library for performing time-value-of-money calculations.

    Parameters
    ----------
    validation_engine : ValidationEngine, optional
        Gates applied to each result. Uses default gates if None.
    validate : bool, default True
        Whether to run validation gates after each calculation.

    Examples
    --------
    >>> calc = FinanceCalculator()
    >>> result = calc.present_value_of_future_money(1000, 5, 5)
    >>> result.to_dict()["presentValue"]
    783.526...
    """

    def __init__(
        self,
        validation_engine: Optional[ValidationEngine] = None,
        validate: bool = True,
    ):
        self._validation_engine = validation_engine or ValidationEngine()
        self.validate = validate

    def _run(
        self,
        operation: str,
        calculate: Callable[[], AnyTVMResult],
        context: dict[str, Any],
    ) -> AnyTVMResult:
        """
        Run a calculation, validate the result, and log the outcome.

        context holds the call arguments; calculate may add derived
        values to it before the gates run.
        """
        logger.debug(f"{operation} called with {context}")
        try:
            result = calculate()
            if self.validate:
                result = self._validation_engine.validate_and_raise(result, **context)
        except DomainError as e:
            logger.warning(f"{operation} rejected: {e}")
            raise

        logger.debug(f"{operation} -> {result}")
        return result

    def present_value_of_future_money(
        self,
        future_value: float,
        num_periods: float,
        interest_rate: float,
    ) -> PresentValueResult:
        """
        Calculate present value of future money.

        Parameters
        ----------
        future_value : float
            Future Value
        num_periods : float
            Number of Periods
        interest_rate : float
            Interest Rate (percent)

        Returns
        -------
        PresentValueResult
            Present Value and Total Interest
        """
        return self._run(
            "PresentValueOfFutureMoney",
            lambda: present_value_of_future_money(
                future_value, num_periods, interest_rate, times_compounded_per_period=1
            ),
            {
                "future_value": future_value,
                "num_periods": num_periods,
                "interest_rate": interest_rate,
            },
        )

    def present_value_of_deposits(
        self,
        num_periods: float,
        interest_rate: float,
        deposit_amount: float,
        deposit_at_beginning: bool,
    ) -> DepositsPresentValueResult:
        """
        Calculate the present value of future deposits.

        Parameters
        ----------
        num_periods : float
            Number of Periods
        interest_rate : float
            Interest Rate (percent)
        deposit_amount : float
            Periodic Deposit Amount
        deposit_at_beginning : bool
            Periodic Deposits made at beginning of period

        Returns
        -------
        DepositsPresentValueResult
            Present Value, Total Principal, and Total Interest
        """
        return self._run(
            "PresentValueOfDeposits",
            lambda: present_value_of_deposits(
                num_periods, interest_rate, deposit_amount, deposit_at_beginning,
                times_compounded_per_period=1,
            ),
            {
                "num_periods": num_periods,
                "interest_rate": interest_rate,
                "deposit_amount": deposit_amount,
                "deposit_at_beginning": deposit_at_beginning,
            },
        )

    def future_value(
        self,
        present_value: float,
        num_periods: float,
        interest_rate: float,
        times_compounded_per_period: int,
        deposit_amount: float,
        deposit_at_beginning: bool,
    ) -> FutureValueResult:
        """
        Calculate the future value of money and/or deposits.

        Parameters
        ----------
        present_value : float
            Present Value
        num_periods : float
            Number of Periods
        interest_rate : float
            Interest rate as a percentage
        times_compounded_per_period : int
            Times interest is compounded per period
        deposit_amount : float
            Periodic Deposit Amount
        deposit_at_beginning : bool
            Periodic Deposits made at beginning of period

        Returns
        -------
        FutureValueResult
            Future Value and Total Interest
        """

        def calculate() -> FutureValueResult:
            result = future_value(
                present_value,
                num_periods,
                interest_rate,
                times_compounded_per_period,
                deposit_amount,
                deposit_at_beginning,
            )
            n = normalize_rate(interest_rate, num_periods, times_compounded_per_period).n_periods
            context["principal"] = float(deposit_amount) * n
            return result

        context: dict[str, Any] = {
            "present_value": present_value,
            "num_periods": num_periods,
            "interest_rate": interest_rate,
            "times_compounded_per_period": times_compounded_per_period,
            "deposit_amount": deposit_amount,
            "deposit_at_beginning": deposit_at_beginning,
        }
        return self._run("FutureValue", calculate, context)

    def net_present_value(
        self,
        initial_investment: float,
        discount_rate: float,
        times_compounded_per_period: int,
        cash_flows_at_beginning: bool,
        cash_flow: Sequence[float] | np.ndarray,
    ) -> float:
        """
        Calculate net present value.

        Parameters
        ----------
        initial_investment : float
            Initial Investment
        discount_rate : float
            Discount Rate (eg. Interest Rate), percent
        times_compounded_per_period : int
            Times discount/interest is compounded per period
        cash_flows_at_beginning : bool
            Cash flows occur at the beginning of each period
        cash_flow : sequence of float
            List of cash flows per period

        Returns
        -------
        float
            Net Present Value
        """
        return self._run(
            "NetPresentValue",
            lambda: net_present_value(
                initial_investment,
                discount_rate,
                times_compounded_per_period,
                cash_flows_at_beginning,
                cash_flow,
            ),
            {
                "initial_investment": initial_investment,
                "discount_rate": discount_rate,
                "times_compounded_per_period": times_compounded_per_period,
                "cash_flows_at_beginning": cash_flows_at_beginning,
                "cash_flow": cash_flow,
            },
        )
