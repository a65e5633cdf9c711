"""
Validation Gates - HALT/PASS framework for TVM results.

Every result leaving the FinanceCalculator passes through these gates.
Gates can HALT (reject with diagnostics), WARN (log and allow), or PASS.
A HALT is surfaced as a DomainError so callers never receive NaN/inf or
an internally inconsistent record.
"""

import logging
import math
from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from typing import Any, Union

from finance_calculator.config.settings import SETTINGS
from finance_calculator.tvm.errors import DomainError
from finance_calculator.tvm.future_value import FutureValueResult
from finance_calculator.tvm.present_value import (
    DepositsPresentValueResult,
    PresentValueResult,
)

logger = logging.getLogger(__name__)

# Net present value is returned as a bare float
AnyTVMResult = Union[PresentValueResult, DepositsPresentValueResult, FutureValueResult, float]


class GateStatus(Enum):
    """Status of a validation gate."""
    PASS = "pass"
    HALT = "halt"
    WARN = "warn"


@dataclass(frozen=True)
class GateResult:
    """
    Result of a validation gate check.

    Attributes
    ----------
    status : GateStatus
        PASS, HALT, or WARN
    gate_name : str
        Name of the gate that was checked
    message : str
        Explanation of the result
    value : Any, optional
        The value that was checked
    threshold : Any, optional
        The threshold that was applied
    """

    status: GateStatus
    gate_name: str
    message: str
    value: Any | None = None
    threshold: Any | None = None

    @property
    def passed(self) -> bool:
        """Check if gate passed (PASS or WARN)."""
        return self.status != GateStatus.HALT


@dataclass(frozen=True)
class ValidationReport:
    """
    Complete validation report from all gates.

    Attributes
    ----------
    results : tuple[GateResult, ...]
        Results from all gates
    """

    results: tuple[GateResult, ...]

    @property
    def overall_status(self) -> GateStatus:
        """Get worst status across all gates."""
        if any(r.status == GateStatus.HALT for r in self.results):
            return GateStatus.HALT
        elif any(r.status == GateStatus.WARN for r in self.results):
            return GateStatus.WARN
        return GateStatus.PASS

    @property
    def passed(self) -> bool:
        """Check if all gates passed (no HALTs)."""
        return self.overall_status != GateStatus.HALT

    @property
    def halted_gates(self) -> list[GateResult]:
        """Get all gates that halted."""
        return [r for r in self.results if r.status == GateStatus.HALT]

    @property
    def warned_gates(self) -> list[GateResult]:
        """Get all gates that warned."""
        return [r for r in self.results if r.status == GateStatus.WARN]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "overall_status": self.overall_status.value,
            "passed": self.passed,
            "n_halted": len(self.halted_gates),
            "n_warned": len(self.warned_gates),
            "results": [
                {
                    "gate": r.gate_name,
                    "status": r.status.value,
                    "message": r.message,
                    "value": r.value,
                    "threshold": r.threshold,
                }
                for r in self.results
            ],
        }


def _numeric_fields(result: AnyTVMResult) -> dict[str, float]:
    """Flatten a result record into name -> value."""
    if is_dataclass(result):
        return {k: v for k, v in asdict(result).items() if isinstance(v, (int, float))}
    return {"net_present_value": result}


# =============================================================================
# Gate Implementations
# =============================================================================

class ValidationGate:
    """
    Base class for validation gates.

    Subclasses implement check() to validate TVM results.
    """

    name: str = "base_gate"

    def check(self, result: AnyTVMResult, **context: Any) -> GateResult:
        """
        Check the result.

        Parameters
        ----------
        result : AnyTVMResult
            Result record (or NPV float) to validate
        **context : Any
            Inputs of the calculation (present_value, future_value, principal)

        Returns
        -------
        GateResult
            Validation result
        """
        raise NotImplementedError


class FiniteResultGate(ValidationGate):
    """
    Check that every numeric field of a result is finite.

    [T1] The engine signals failure instead of returning NaN/inf.
    """

    name = "finite_result"

    def __init__(self, halt: bool | None = None):
        """
        Parameters
        ----------
        halt : bool, optional
            HALT (True) or WARN (False) on a non-finite field.
            Defaults to SETTINGS.validation.halt_on_non_finite.
        """
        self.halt = SETTINGS.validation.halt_on_non_finite if halt is None else halt

    def check(self, result: AnyTVMResult, **context: Any) -> GateResult:
        bad = {k: v for k, v in _numeric_fields(result).items() if not math.isfinite(v)}

        if bad:
            return GateResult(
                status=GateStatus.HALT if self.halt else GateStatus.WARN,
                gate_name=self.name,
                message=f"Non-finite result fields: {bad}",
                value=bad,
            )

        return GateResult(
            status=GateStatus.PASS,
            gate_name=self.name,
            message="All result fields finite",
        )


class InterestIdentityGate(ValidationGate):
    """
    Check that total_interest agrees with the other fields.

    [T1] Lump sum PV:  total_interest = future_value - present_value
    [T1] Deposits PV:  total_interest = total_principal - present_value
    [T1] Future value: total_interest = future_value - present_value - principal

    Lump-sum and future-value checks need the inputs passed as context;
    without them the gate passes.
    """

    name = "interest_identity"

    def __init__(
        self,
        tolerance: float | None = None,
        halt: bool | None = None,
    ):
        """
        Parameters
        ----------
        tolerance : float, optional
            Relative tolerance, scaled by max(1, |largest term|)
        halt : bool, optional
            HALT (True) or WARN (False) on a violation
        """
        self.tolerance = (
            SETTINGS.validation.identity_tolerance if tolerance is None else tolerance
        )
        self.halt = (
            SETTINGS.validation.halt_on_identity_violation if halt is None else halt
        )

    def _expected_interest(self, result: AnyTVMResult, context: dict) -> tuple[float, float] | None:
        """Return (expected_interest, scale), or None if not checkable."""
        if isinstance(result, DepositsPresentValueResult):
            expected = result.total_principal - result.present_value
            return expected, max(abs(result.total_principal), abs(result.present_value))

        if isinstance(result, PresentValueResult) and "future_value" in context:
            fv = context["future_value"]
            return fv - result.present_value, max(abs(fv), abs(result.present_value))

        if isinstance(result, FutureValueResult) and "present_value" in context:
            pv = context["present_value"]
            principal = context.get("principal", 0.0)
            expected = result.future_value - pv - principal
            return expected, max(abs(result.future_value), abs(pv), abs(principal))

        return None

    def check(self, result: AnyTVMResult, **context: Any) -> GateResult:
        expected = self._expected_interest(result, context)
        if expected is None:
            return GateResult(
                status=GateStatus.PASS,
                gate_name=self.name,
                message="No interest identity to check",
            )

        expected_interest, scale = expected
        threshold = self.tolerance * max(1.0, scale)
        diff = abs(result.total_interest - expected_interest)

        if not diff <= threshold:
            return GateResult(
                status=GateStatus.HALT if self.halt else GateStatus.WARN,
                gate_name=self.name,
                message=f"total_interest {result.total_interest:.6f} differs from "
                        f"expected {expected_interest:.6f} by {diff:.3e}",
                value=diff,
                threshold=threshold,
            )

        return GateResult(
            status=GateStatus.PASS,
            gate_name=self.name,
            message=f"Interest identity holds (diff {diff:.3e})",
            value=diff,
            threshold=threshold,
        )


# =============================================================================
# Validation Engine
# =============================================================================

class ValidationEngine:
    """
    Engine for running validation gates on TVM results.

    Parameters
    ----------
    gates : list[ValidationGate], optional
        Custom gates to use. If None, uses default gates.

    Examples
    --------
    >>> engine = ValidationEngine()
    >>> report = engine.validate(result, future_value=1000.0)
    >>> report.passed
    True
    """

    def __init__(
        self,
        gates: list[ValidationGate] | None = None,
    ):
        if gates is None:
            gates = self._default_gates()
        self.gates = gates

    def _default_gates(self) -> list[ValidationGate]:
        """Create default set of validation gates."""
        return [
            FiniteResultGate(),
            InterestIdentityGate(),
        ]

    def validate(
        self,
        result: AnyTVMResult,
        **context: Any,
    ) -> ValidationReport:
        """
        Run all validation gates on a result.

        Returns
        -------
        ValidationReport
            Complete validation report
        """
        results = []
        for gate in self.gates:
            gate_result = gate.check(result, **context)
            results.append(gate_result)

        return ValidationReport(results=tuple(results))

    def validate_and_raise(
        self,
        result: AnyTVMResult,
        **context: Any,
    ) -> AnyTVMResult:
        """
        Validate and raise on HALT.

        WARN gates are logged and the result is returned.

        Raises
        ------
        DomainError
            If any gate HALTs
        """
        report = self.validate(result, **context)

        for gate in report.warned_gates:
            logger.warning(f"Gate {gate.gate_name} warned: {gate.message}")

        if not report.passed:
            halt_messages = [g.message for g in report.halted_gates]
            raise DomainError(
                "CRITICAL: Validation failed. HALTs:\n" +
                "\n".join(f"  - {m}" for m in halt_messages)
            )

        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def validate_result(
    result: AnyTVMResult,
    **context: Any,
) -> ValidationReport:
    """Quick validation of a TVM result with the default gates."""
    engine = ValidationEngine()
    return engine.validate(result, **context)


def ensure_valid(
    result: AnyTVMResult,
    **context: Any,
) -> AnyTVMResult:
    """
    Validate and raise if invalid.

    Raises
    ------
    DomainError
        If validation fails
    """
    engine = ValidationEngine()
    return engine.validate_and_raise(result, **context)
