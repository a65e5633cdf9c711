"""
Centralized tolerance framework for TVM calculations.

All tolerances are derived from precision requirements, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Analytical): Closed-form results, machine precision achievable
    Tier 2 (Round-Trip): Compound-then-discount chains accumulate error
    Tier 3 (Quoted): Textbook answers published to the cent
    Tier 4 (Cross-Library): External oracle precision bounds

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
"""

from typing import Final

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================
# Derived from: machine_epsilon (~2.2e-16) x safety_factor

#: Closed-form identities such as annuity-due = ordinary x (1+r)
ANALYTICAL_TOLERANCE: Final[float] = 1e-10

#: Relative tolerance for result gates checking interest identities
#: e.g. total_interest == future_value - present_value - principal
INTEREST_IDENTITY_TOLERANCE: Final[float] = 1e-9


# =============================================================================
# Tier 2: Round-Trip Tolerances
# =============================================================================

#: Relative tolerance for PV -> FV round trips.
#: (1+r)^n followed by (1+r)^-n loses a few ulps per multiplication
ROUND_TRIP_RELATIVE_TOLERANCE: Final[float] = 1e-9


# =============================================================================
# Tier 3: Quoted Example Tolerances
# =============================================================================

#: Worked examples are quoted to 2 decimal places; allow one cent
QUOTED_CENT_TOLERANCE: Final[float] = 0.01


# =============================================================================
# Tier 4: Cross-Library Tolerances
# =============================================================================

#: Comparison against numpy-financial, which uses the same closed forms
CROSS_LIBRARY_TOLERANCE: Final[float] = 1e-8


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    # Tier 1: Analytical
    "analytical": ANALYTICAL_TOLERANCE,
    "interest_identity": INTEREST_IDENTITY_TOLERANCE,
    # Tier 2: Round-Trip
    "round_trip": ROUND_TRIP_RELATIVE_TOLERANCE,
    # Tier 3: Quoted
    "quoted_cent": QUOTED_CENT_TOLERANCE,
    # Tier 4: Cross-Library
    "cross_library": CROSS_LIBRARY_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Parameters
    ----------
    name : str
        Tolerance name (see TOLERANCE_REGISTRY keys)

    Returns
    -------
    float
        Tolerance value

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
