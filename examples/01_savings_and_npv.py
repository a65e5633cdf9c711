#!/usr/bin/env python3
"""
Savings Plan and Project Appraisal Demo.

This example walks through the four TVM calculations on two everyday
questions:

    "If I save $200 a month at 6%, what will I have in 10 years?"
    "Is a $10,000 project paying $2,800 a year for 5 years worth it at 8%?"

Key Concepts:
- Ordinary annuity vs annuity-due: deposits at period end or start
- Compounding frequency: monthly deposits are compounded at rate/12
- NPV: discounted inflows minus the undiscounted initial investment
- IRR: the discount rate at which NPV is zero

Usage:
    python examples/01_savings_and_npv.py
    python examples/01_savings_and_npv.py --rate 4.5 --deposit 300
"""

import argparse
import sys
from dataclasses import dataclass

# Add src to path if running as script
sys.path.insert(0, "src")

from finance_calculator import (
    FinanceCalculator,
    cash_flow_schedule,
    effective_rate,
    internal_rate_of_return,
)


@dataclass
class SavingsPlanResult:
    """Results from a savings plan projection."""

    rate: float
    years: int
    monthly_deposit: float
    balance_ordinary: float
    balance_due: float
    total_deposited: float
    present_value_of_deposits: float


def project_savings(
    calc: FinanceCalculator,
    rate: float = 6.0,
    years: int = 10,
    monthly_deposit: float = 200.0,
    initial_balance: float = 0.0,
) -> SavingsPlanResult:
    """
    Project a monthly savings plan.

    Parameters
    ----------
    calc : FinanceCalculator
        Calculator to use
    rate : float
        Nominal annual rate in percent
    years : int
        Savings horizon in years
    monthly_deposit : float
        Amount saved each month
    initial_balance : float
        Balance at the start of the plan

    Returns
    -------
    SavingsPlanResult
        Balances under both deposit timings
    """
    ordinary = calc.future_value(initial_balance, years, rate, 12, monthly_deposit, False)
    due = calc.future_value(initial_balance, years, rate, 12, monthly_deposit, True)

    # Present value at the monthly rate: 12 * years deposits at rate / 12
    pv = calc.present_value_of_deposits(years * 12, rate / 12, monthly_deposit, False)

    return SavingsPlanResult(
        rate=rate,
        years=years,
        monthly_deposit=monthly_deposit,
        balance_ordinary=ordinary.future_value,
        balance_due=due.future_value,
        total_deposited=pv.total_principal,
        present_value_of_deposits=pv.present_value,
    )


def print_savings(result: SavingsPlanResult) -> None:
    """Print savings plan results."""
    print("\n" + "=" * 60)
    print("SAVINGS PLAN")
    print("=" * 60)
    print(f"\n  ${result.monthly_deposit:,.2f} a month for {result.years} years "
          f"at {result.rate:.2f}% (effective {effective_rate(result.rate, 12):.3f}%)")
    print(f"\n  Total deposited:             ${result.total_deposited:>12,.2f}")
    print(f"  Balance, end-of-month:       ${result.balance_ordinary:>12,.2f}")
    print(f"  Balance, start-of-month:     ${result.balance_due:>12,.2f}")
    print(f"  Value of the plan today:     ${result.present_value_of_deposits:>12,.2f}")


def appraise_project(
    calc: FinanceCalculator,
    investment: float = 10_000.0,
    annual_flow: float = 2_800.0,
    years: int = 5,
    hurdle_rate: float = 8.0,
) -> None:
    """Print NPV, the discount schedule, and IRR for a level project."""
    flows = [annual_flow] * years
    npv = calc.net_present_value(investment, hurdle_rate, 1, False, flows)
    irr = internal_rate_of_return(investment, flows)
    schedule = cash_flow_schedule(hurdle_rate, 1, False, flows)

    print("\n" + "=" * 60)
    print("PROJECT APPRAISAL")
    print("=" * 60)
    print(f"\n  Invest ${investment:,.0f}, receive ${annual_flow:,.0f} a year "
          f"for {years} years, hurdle {hurdle_rate:.1f}%\n")
    print(schedule.round(4).to_string(index=False))
    print(f"\n  NPV: ${npv:,.2f}")
    print(f"  IRR: {irr:.3f}%")

    verdict = "ACCEPT" if npv > 0 else "REJECT"
    print(f"\n  Decision at {hurdle_rate:.1f}%: {verdict}")


def main() -> None:
    """Run savings and appraisal demo."""
    parser = argparse.ArgumentParser(description="Savings Plan and NPV Demo")
    parser.add_argument("--rate", type=float, default=6.0, help="Annual rate in percent (default: 6)")
    parser.add_argument("--deposit", type=float, default=200.0, help="Monthly deposit (default: 200)")
    parser.add_argument("--years", type=int, default=10, help="Savings horizon (default: 10)")
    args = parser.parse_args()

    calc = FinanceCalculator()

    result = project_savings(calc, rate=args.rate, years=args.years, monthly_deposit=args.deposit)
    print_savings(result)

    appraise_project(calc)

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
