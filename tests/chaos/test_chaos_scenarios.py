"""
Chaos testing for the TVM engine.

Tests error handling on hostile inputs, extreme rates and horizons,
numerical stability, and concurrent use of a shared calculator.

Every failure must surface as DomainError; no NaN or inf ever escapes.
"""

import math
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
import pytest

from finance_calculator import FinanceCalculator
from finance_calculator.tvm.errors import DomainError

# =============================================================================
# Constants
# =============================================================================

BENCHMARK_SEED = 42

HOSTILE_NUMBERS = [math.nan, math.inf, -math.inf, "5", None]


# =============================================================================
# Invalid Inputs Raise
# =============================================================================


class TestInvalidInputsRaise:
    """Tests that hostile inputs raise DomainError, never return garbage."""

    @pytest.mark.parametrize("bad", HOSTILE_NUMBERS)
    def test_present_value_bad_amount(self, calculator: FinanceCalculator, bad) -> None:
        with pytest.raises(DomainError):
            calculator.present_value_of_future_money(bad, 5, 5)

    @pytest.mark.parametrize("bad", HOSTILE_NUMBERS)
    def test_deposits_bad_rate(self, calculator: FinanceCalculator, bad) -> None:
        with pytest.raises(DomainError):
            calculator.present_value_of_deposits(10, bad, 100, False)

    @pytest.mark.parametrize("bad", HOSTILE_NUMBERS)
    def test_future_value_bad_periods(self, calculator: FinanceCalculator, bad) -> None:
        with pytest.raises(DomainError):
            calculator.future_value(1000, bad, 5, 1, 0, False)

    @pytest.mark.parametrize("bad", [0, -1, 0.5, math.nan, "12", True])
    def test_future_value_bad_frequency(self, calculator: FinanceCalculator, bad) -> None:
        with pytest.raises(DomainError):
            calculator.future_value(1000, 1, 5, bad, 0, False)

    @pytest.mark.parametrize("bad", HOSTILE_NUMBERS)
    def test_npv_bad_initial(self, calculator: FinanceCalculator, bad) -> None:
        with pytest.raises(DomainError):
            calculator.net_present_value(bad, 10, 1, False, [300])

    def test_npv_ragged_flows(self, calculator: FinanceCalculator) -> None:
        with pytest.raises(DomainError):
            calculator.net_present_value(1000, 10, 1, False, [[1, 2], [3]])

    @pytest.mark.parametrize("rate", [-100, -150, -1e6])
    def test_rate_at_or_below_minus_100(self, calculator: FinanceCalculator, rate: float) -> None:
        with pytest.raises(DomainError, match="non-positive compounding base"):
            calculator.future_value(1000, 1, rate, 1, 0, False)


# =============================================================================
# Extreme Conditions
# =============================================================================


class TestExtremeConditions:
    """Tests behavior at extreme rates, horizons and frequencies."""

    def test_growth_overflow_raises(self, calculator: FinanceCalculator) -> None:
        """1.5^1e6 does not fit a double."""
        with pytest.raises(DomainError, match="overflow"):
            calculator.future_value(1, 1_000_000, 50, 1, 0, False)

    def test_deposit_accumulation_overflow_raises(self, calculator: FinanceCalculator) -> None:
        with pytest.raises(DomainError, match="overflow"):
            calculator.future_value(0, 100_000, 100, 1, 1, True)

    def test_lump_sum_discounting_overflow_raises(self, calculator: FinanceCalculator) -> None:
        with pytest.raises(DomainError, match="not finite"):
            calculator.present_value_of_future_money(1e300, 100, -99)

    @pytest.mark.parametrize("due", [False, True])
    def test_deposit_discounting_overflow_raises(
        self, calculator: FinanceCalculator, due: bool
    ) -> None:
        with pytest.raises(DomainError, match="not finite"):
            calculator.present_value_of_deposits(100, -99, 1e300, due)

    def test_discounting_far_future_is_tiny_not_error(self, calculator: FinanceCalculator) -> None:
        """Deposits beyond the horizon of double precision contribute nothing."""
        result = calculator.present_value_of_deposits(100_000, 10, 100, False)
        assert result.present_value == pytest.approx(1000.0, rel=1e-12)

    def test_continuous_compounding_limit(self, calculator: FinanceCalculator) -> None:
        """[T1] k -> inf: FV -> pv * e^(rate * periods)."""
        result = calculator.future_value(1000, 10, 5, 1_000_000, 0, False)
        assert result.future_value == pytest.approx(1000 * math.exp(0.5), rel=1e-6)

    def test_tiny_rate_keeps_interest_sign(self, calculator: FinanceCalculator) -> None:
        """expm1-based factors resolve interest on a 1e-9% rate."""
        result = calculator.present_value_of_deposits(10, 1e-9, 100, False)

        assert result.total_interest > 0
        assert result.total_interest == pytest.approx(100 * 1e-11 * 55, rel=1e-4)

    def test_huge_rate(self, calculator: FinanceCalculator) -> None:
        """1,000,000% over one period is still finite."""
        result = calculator.present_value_of_future_money(1000, 1, 1e6)
        assert result.present_value == pytest.approx(1000 / 10001)

    def test_negative_rate_environment(self, calculator: FinanceCalculator) -> None:
        """-0.5% rates: deposits are worth more than their sum."""
        result = calculator.present_value_of_deposits(10, -0.5, 100, False)

        assert result.present_value > result.total_principal
        assert result.total_interest < 0


# =============================================================================
# Concurrent Calculation Tests
# =============================================================================


class TestConcurrentCalculation:
    """Tests thread safety of a shared FinanceCalculator."""

    def test_concurrent_mixed_operations(self, calculator: FinanceCalculator) -> None:
        """Results under a thread pool match serial evaluation exactly."""
        rng = np.random.default_rng(BENCHMARK_SEED)

        calls = []
        for i in range(200):
            rate = float(rng.uniform(-20, 30))
            periods = float(rng.integers(0, 40))
            k = int(rng.choice([1, 2, 4, 12]))
            kind = i % 4
            if kind == 0:
                calls.append(("present_value_of_future_money", (1000.0, periods, rate)))
            elif kind == 1:
                calls.append(("present_value_of_deposits", (periods, rate, 50.0, bool(i % 2))))
            elif kind == 2:
                calls.append(("future_value", (500.0, periods, rate, k, 25.0, bool(i % 3))))
            else:
                flows = rng.normal(100, 50, size=int(periods)).tolist()
                calls.append(("net_present_value", (1000.0, rate, k, bool(i % 2), flows)))

        serial = [getattr(calculator, name)(*args) for name, args in calls]

        results = {}
        errors = []

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = {
                executor.submit(getattr(calculator, name), *args): idx
                for idx, (name, args) in enumerate(calls)
            }

            for future in as_completed(futures):
                try:
                    results[futures[future]] = future.result()
                except DomainError as e:
                    errors.append(str(e))

        assert len(errors) == 0, f"Concurrent calculation errors: {errors}"
        assert [results[i] for i in range(len(calls))] == serial

    def test_concurrent_errors_do_not_leak(self, calculator: FinanceCalculator) -> None:
        """Failing calls running alongside good ones do not disturb them."""

        def good() -> float:
            return calculator.net_present_value(1000, 10, 1, False, [300, 300, 300, 300])

        def bad() -> float:
            return calculator.net_present_value(1000, -100, 1, False, [300])

        outcomes = []
        with ThreadPoolExecutor(max_workers=4) as executor:
            futures = [executor.submit(good if i % 2 else bad) for i in range(40)]
            for future in as_completed(futures):
                try:
                    outcomes.append(future.result())
                except DomainError:
                    outcomes.append("error")

        assert outcomes.count("error") == 20
        values = [o for o in outcomes if o != "error"]
        assert len(set(values)) == 1


# =============================================================================
# Large Series Tests
# =============================================================================


class TestLargeSeries:
    """Tests for long cash-flow series."""

    @pytest.mark.slow
    def test_hundred_thousand_flows(self, calculator: FinanceCalculator) -> None:
        """[T1] Long level series converges to the perpetuity value d / r."""
        npv = calculator.net_present_value(0, 1, 1, False, [100.0] * 100_000)
        assert npv == pytest.approx(10_000.0, rel=1e-9)

    def test_numpy_series(self, calculator: FinanceCalculator) -> None:
        flows = np.full(5_000, 10.0)
        npv = calculator.net_present_value(0, 0, 12, True, flows)
        assert npv == pytest.approx(50_000.0)


# =============================================================================
# Numerical Stability Tests
# =============================================================================


class TestNumericalStability:
    """Tests for numerical stability across a grid of inputs."""

    @pytest.mark.parametrize("rate", [-50.0, -1.0, 0.0, 1e-8, 3.0, 25.0, 200.0])
    @pytest.mark.parametrize("periods", [0, 0.25, 1, 30, 120])
    @pytest.mark.parametrize("k", [1, 12, 365])
    def test_no_nan_or_inf(
        self, calculator: FinanceCalculator, rate: float, periods: float, k: int
    ) -> None:
        results = [
            calculator.present_value_of_deposits(periods, rate, 100, True),
            calculator.future_value(1000, periods, rate, k, 100, False),
        ]
        for result in results:
            assert all(np.isfinite(v) for v in result.to_dict().values())

    def test_consistent_across_runs(self, calculator: FinanceCalculator) -> None:
        """Calculations are deterministic."""
        results = [calculator.future_value(1000, 10, 5, 12, 100, True) for _ in range(10)]
        assert all(r == results[0] for r in results)
