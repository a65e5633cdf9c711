"""
finance-calculator: Time-value-of-money calculations.

Quick Start
-----------
>>> from finance_calculator import FinanceCalculator
>>> calc = FinanceCalculator()
>>> calc.future_value(1000, 10, 5, 1, 100, False).future_value
2886.68...
>>> calc.net_present_value(1000, 10, 1, False, [300, 300, 300, 300])
-49.04...

Rates are percentages per period (5 means 5%). Results carry full
precision; rounding to cents is left to the caller.

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Calculator - Primary API
# =============================================================================
from finance_calculator.calculator import FinanceCalculator

# =============================================================================
# TVM Functions
# =============================================================================
from finance_calculator.tvm import (
    DepositsPresentValueResult,
    DomainError,
    FutureValueResult,
    NormalizedRate,
    PresentValueResult,
    cash_flow_schedule,
    discount_cash_flows,
    effective_rate,
    future_value,
    internal_rate_of_return,
    net_present_value,
    normalize_rate,
    present_value_of_deposits,
    present_value_of_future_money,
)

# =============================================================================
# Validation
# =============================================================================
from finance_calculator.validation import ValidationEngine, ValidationReport

# =============================================================================
# Configuration
# =============================================================================
from finance_calculator.config.settings import SETTINGS

__all__ = [
    # Version
    "__version__",
    # Calculator
    "FinanceCalculator",
    # Errors
    "DomainError",
    # Normalizer
    "NormalizedRate",
    "normalize_rate",
    "effective_rate",
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
    # Validation
    "ValidationEngine",
    "ValidationReport",
    # Config
    "SETTINGS",
]
