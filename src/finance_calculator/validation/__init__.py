"""
Validation framework for TVM results.

Provides HALT/PASS gates for validating calculation outputs:
- FiniteResultGate: No NaN/inf in any result field
- InterestIdentityGate: total_interest consistent with the other fields
"""

from finance_calculator.validation.gates import (
    # Result types
    AnyTVMResult,
    # Specific Gates
    FiniteResultGate,
    GateResult,
    # Enums and Results
    GateStatus,
    InterestIdentityGate,
    # Engine
    ValidationEngine,
    # Base Gate
    ValidationGate,
    ValidationReport,
    ensure_valid,
    # Convenience Functions
    validate_result,
)

__all__ = [
    # Enums and Results
    "GateStatus",
    "GateResult",
    "ValidationReport",
    "AnyTVMResult",
    # Base Gate
    "ValidationGate",
    # Specific Gates
    "FiniteResultGate",
    "InterestIdentityGate",
    # Engine
    "ValidationEngine",
    # Convenience Functions
    "validate_result",
    "ensure_valid",
]
