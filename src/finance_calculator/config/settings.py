"""
Frozen configuration settings for TVM calculations.

All configuration is immutable (frozen dataclasses) so that every calculation
is reproducible from its arguments alone.
See: config/tolerances.py for numeric tolerances.
"""

from dataclasses import dataclass

from finance_calculator.config.tolerances import INTEREST_IDENTITY_TOLERANCE

# =============================================================================
# Rate Configuration
# =============================================================================

@dataclass(frozen=True)
class RateConfig:
    """
    Immutable rate normalization configuration.

    Attributes
    ----------
    percent_scale : float
        Divisor turning a percentage rate into a decimal (5 -> 0.05)
    default_compounding_frequency : int
        Compoundings per period when the caller does not pass one
    """

    percent_scale: float = 100.0
    default_compounding_frequency: int = 1


# =============================================================================
# Validation Configuration
# =============================================================================

@dataclass(frozen=True)
class ValidationConfig:
    """
    Immutable result validation configuration.

    Attributes
    ----------
    halt_on_non_finite : bool
        Whether a NaN/inf result field HALTs the calculation
    halt_on_identity_violation : bool
        Whether a broken interest identity HALTs (otherwise WARN)
    identity_tolerance : float
        Relative tolerance for interest identity checks
    """

    halt_on_non_finite: bool = True
    halt_on_identity_violation: bool = True
    identity_tolerance: float = INTEREST_IDENTITY_TOLERANCE


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from finance_calculator.config.settings import SETTINGS
    >>> SETTINGS.rates.percent_scale
    100.0
    """

    rates: RateConfig = RateConfig()
    validation: ValidationConfig = ValidationConfig()


# Singleton instance - import this
SETTINGS = Settings()
