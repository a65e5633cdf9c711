"""
Error kinds raised by the TVM engine.

A single kind is used for every violated algebraic precondition.
"""


class DomainError(ValueError):
    """Raised when TVM inputs fall outside the domain of the formulas."""

    pass
