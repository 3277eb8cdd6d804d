"""Unit tests for the error function kernel."""

import math
import sys

import numpy as np
import pytest

from gaussdist.core.special import erf, erfc, erfcinv, erfinv
from gaussdist.utils.exceptions import OutOfRangeError


# ===========================
# erf / erfc Tests
# ===========================


def test_erf_known_values():
    """erf(0) = 0, erf(1) ≈ 0.8427007929497149, odd symmetry."""
    assert erf(0.0) == 0.0
    assert abs(erf(1.0) - 0.8427007929497149) < 1e-15
    assert erf(-1.0) == -erf(1.0)


def test_erf_infinite_arguments():
    assert erf(math.inf) == 1.0
    assert erf(-math.inf) == -1.0
    assert math.isnan(erf(math.nan))


def test_erfc_known_values():
    """erfc(0) = 1, erfc(1) ≈ 0.15729920705028513."""
    assert erfc(0.0) == 1.0
    assert abs(erfc(1.0) - 0.15729920705028513) < 1e-15
    assert abs(erfc(-1.0) - (2.0 - 0.15729920705028513)) < 1e-15


def test_erfc_infinite_arguments():
    assert erfc(math.inf) == 0.0
    assert erfc(-math.inf) == 2.0
    assert math.isnan(erfc(math.nan))


def test_erfc_negative_argument_saturates_at_two():
    """For large negative x, erfc(x) = 2 - erfc(|x|) rounds to exactly 2."""
    assert erfc(-10.0) == 2.0
    assert erfc(-1e300) == 2.0


def test_erfc_tail_keeps_relative_precision():
    """erfc(7) ≈ 4.183825607779414e-23, far below what 1 - erf(7) can express."""
    assert abs(erfc(7.0) / 4.183825607779414e-23 - 1.0) < 1e-12
    assert 1.0 - erf(7.0) == 0.0


def test_erfc_continues_into_subnormal_range():
    """Values below the normal range stay nonzero until they underflow the last subnormal."""
    assert erfc(26.5) > 0.0
    assert 0.0 < erfc(27.0) < sys.float_info.min
    assert erfc(27.0) < erfc(26.5)
    assert erfc(28.0) == 0.0


def test_erfc_huge_finite_argument():
    assert erfc(1e200) == 0.0
    assert erfc(1.7976931348623157e308) == 0.0


def test_erfc_monotonic_across_scaled_branch():
    """erfc is non-increasing across the switch to the scaled form."""
    values = [erfc(x) for x in np.linspace(20.0, 28.0, 801)]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_erfc_matches_scaled_form_before_switch():
    """Just before the switch, the direct value agrees with exp(log(erfcx) - x²)."""
    from scipy.special import erfcx

    x = 26.0
    expected = math.exp(math.log(erfcx(x)) - x * x)
    assert abs(erfc(x) / expected - 1.0) < 1e-12


# ===========================
# Inverse Tests
# ===========================


def test_erfinv_boundaries():
    assert erfinv(1.0) == math.inf
    assert erfinv(-1.0) == -math.inf
    assert erfinv(0.0) == 0.0


def test_erfcinv_boundaries():
    assert erfcinv(0.0) == math.inf
    assert erfcinv(2.0) == -math.inf
    assert erfcinv(1.0) == 0.0


@pytest.mark.parametrize("y", [-1.5, 1.0000001, math.nan, math.inf])
def test_erfinv_out_of_range(y):
    with pytest.raises(OutOfRangeError):
        erfinv(y)


@pytest.mark.parametrize("y", [-0.1, 2.5, math.nan, -math.inf])
def test_erfcinv_out_of_range(y):
    with pytest.raises(OutOfRangeError):
        erfcinv(y)


def test_out_of_range_is_value_error():
    """Kernel domain errors remain catchable as ValueError."""
    with pytest.raises(ValueError):
        erfinv(2.0)


@pytest.mark.parametrize("y", [-0.999, -0.5, 0.1, 0.5, 0.9, 0.999999])
def test_erfinv_inverts_erf(y):
    assert abs(erf(erfinv(y)) - y) < 1e-14


@pytest.mark.parametrize("x", [0.5, 2.0, 5.0, 10.0, 20.0, 26.0])
def test_erfcinv_inverts_erfc(x):
    """Round trip through the tail keeps relative accuracy."""
    assert abs(erfcinv(erfc(x)) / x - 1.0) < 1e-10


def test_erfcinv_deep_tail_is_finite():
    assert 26.0 < erfcinv(1e-300) < 27.0
    assert 27.0 < erfcinv(5e-324) < 28.0  # Smallest subnormal
    assert erfcinv(5e-324) > erfcinv(1e-323) > erfcinv(1e-310)


@pytest.mark.parametrize("y", [9e-301, 1e-305, 1e-310])
def test_erfcinv_inverts_erfc_below_normal_range(y):
    assert abs(erfc(erfcinv(y)) / y - 1.0) < 1e-6


def test_erfcinv_continuous_at_log_domain_switch():
    above = erfcinv(1.0000001e-300)
    below = erfcinv(0.9999999e-300)
    assert 0.0 < below - above < 1e-8

