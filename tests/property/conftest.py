"""Hypothesis configuration for property-based testing.

This module configures hypothesis profiles for different environments.
"""

import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    print_blob=True,
)

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=1000,
    print_blob=True,
)

settings.register_profile(
    "debug",
    max_examples=10,
    deadline=None,
    print_blob=True,
    verbosity=2,
)

# Default to dev profile, override with HYPOTHESIS_PROFILE env var
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
