"""
Centralized pytest fixtures for finance-calculator test suite.

This module provides shared fixtures used across all test categories:
- unit/
- properties/
- validation/
- chaos/

Fixture Categories:
1. Tolerances - Tiered tolerance settings
2. Worked Examples - Hand-computed TVM answers for validation
3. Calculator Fixtures - FinanceCalculator instances
"""

from dataclasses import dataclass, field

import pytest

from finance_calculator import FinanceCalculator
from finance_calculator.validation.gates import ValidationEngine

# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    See: finance_calculator/config/tolerances.py
    """

    # Closed-form identities: machine precision
    analytical: float = 1e-10

    # Compound-then-discount chains (relative)
    round_trip: float = 1e-9

    # Worked examples quoted to the cent
    quoted_cent: float = 0.01

    # numpy-financial comparisons
    cross_library: float = 1e-8


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# WORKED EXAMPLES
# =============================================================================

@dataclass(frozen=True)
class WorkedExample:
    """
    Hand-computed TVM example.

    Attributes
    ----------
    name : str
        Short description
    operation : str
        FinanceCalculator method name
    args : tuple
        Ordered arguments as in the public interface
    expected : dict
        Expected result fields (interface names), or {"npv": value}
    """

    name: str
    operation: str
    args: tuple
    expected: dict[str, float] = field(default_factory=dict)


# $1,000 in 5 years at 5%: 1000 / 1.05^5
PV_LUMP_SUM = WorkedExample(
    name="PV of $1,000 in 5 years at 5%",
    operation="present_value_of_future_money",
    args=(1000, 5, 5),
    expected={"presentValue": 783.53, "totalInterest": 216.47},
)

# 10 deposits of $100 at 5%: 100 * (1 - 1.05^-10) / 0.05
PV_ORDINARY_ANNUITY = WorkedExample(
    name="PV of 10 x $100 ordinary annuity at 5%",
    operation="present_value_of_deposits",
    args=(10, 5, 100, False),
    expected={"presentValue": 772.17, "totalPrincipal": 1000.0, "totalInterest": 227.83},
)

# Annuity-due: ordinary x 1.05
PV_ANNUITY_DUE = WorkedExample(
    name="PV of 10 x $100 annuity-due at 5%",
    operation="present_value_of_deposits",
    args=(10, 5, 100, True),
    expected={"presentValue": 810.78, "totalPrincipal": 1000.0, "totalInterest": 189.22},
)

# 1000 * 1.05^10 + 100 * (1.05^10 - 1) / 0.05
FV_LUMP_AND_DEPOSITS = WorkedExample(
    name="FV of $1,000 plus 10 x $100 at 5%",
    operation="future_value",
    args=(1000, 10, 5, 1, 100, False),
    expected={"futureValue": 2886.68, "totalInterest": 886.68},
)

# 100 * ((1.1^5 - 1) / 0.1) * 1.1
FV_ANNUITY_DUE = WorkedExample(
    name="FV of 5 x $100 annuity-due at 10%",
    operation="future_value",
    args=(0, 5, 10, 1, 100, True),
    expected={"futureValue": 671.56, "totalInterest": 171.56},
)

# 1000 * 1.01^12
FV_MONTHLY_COMPOUNDING = WorkedExample(
    name="FV of $1,000 at 12% compounded monthly for 1 year",
    operation="future_value",
    args=(1000, 1, 12, 12, 0, False),
    expected={"futureValue": 1126.83, "totalInterest": 126.83},
)

# -1000 + 300 * sum(1.1^-t, t=1..4)
NPV_FOUR_YEAR = WorkedExample(
    name="NPV of $1,000 for 4 x $300 at 10%",
    operation="net_present_value",
    args=(1000, 10, 1, False, [300, 300, 300, 300]),
    expected={"npv": -49.04},
)

# -1000 + 300 * sum(1.1^-t, t=0..3)
NPV_FOUR_YEAR_AT_BEGINNING = WorkedExample(
    name="NPV of $1,000 for 4 x $300 at 10%, flows at period start",
    operation="net_present_value",
    args=(1000, 10, 1, True, [300, 300, 300, 300]),
    expected={"npv": 46.06},
)

WORKED_EXAMPLES = [
    PV_LUMP_SUM,
    PV_ORDINARY_ANNUITY,
    PV_ANNUITY_DUE,
    FV_LUMP_AND_DEPOSITS,
    FV_ANNUITY_DUE,
    FV_MONTHLY_COMPOUNDING,
    NPV_FOUR_YEAR,
    NPV_FOUR_YEAR_AT_BEGINNING,
]


@pytest.fixture
def worked_examples() -> list[WorkedExample]:
    """All worked examples for batch validation."""
    return WORKED_EXAMPLES


# =============================================================================
# CALCULATOR FIXTURES
# =============================================================================

@pytest.fixture
def calculator() -> FinanceCalculator:
    """FinanceCalculator with default validation gates."""
    return FinanceCalculator()


@pytest.fixture
def unvalidated_calculator() -> FinanceCalculator:
    """FinanceCalculator with gates disabled."""
    return FinanceCalculator(validation_engine=ValidationEngine(gates=[]), validate=False)
