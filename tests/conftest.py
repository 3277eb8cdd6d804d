"""
Pytest configuration and shared fixtures.
"""

import pytest

from gaussdist.core.normal import NormalDistribution


@pytest.fixture
def standard_normal():
    """Standard normal distribution N(0, 1)."""
    return NormalDistribution(0.0, 1.0)


@pytest.fixture
def default_distribution():
    """Non-standard normal distribution used by the R reference tables."""
    return NormalDistribution(2.1, 1.4)


@pytest.fixture
def narrow_distribution():
    """Normal distribution with a small scale."""
    return NormalDistribution(0.0, 0.1)
