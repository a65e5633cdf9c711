"""
Property-based testing using Hypothesis.

This package contains property tests that verify time-value-of-money
identities hold across randomly generated inputs.

Modules:
    test_tvm_properties: round trips, zero-rate linearity, zero-period
        identities, annuity timing, NPV linearity
"""
