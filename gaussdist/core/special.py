"""
Error function kernel with numerical safeguards.

This module provides the error function, the complementary error function
and their inverses, which express the normal distribution in closed form.
Values come from ``scipy.special``. The complementary error function is
extended into the subnormal range, where SciPy would flush it to zero
early.
"""

import math

from scipy import special

from gaussdist.utils.constants import ERFC_UNDERFLOW_LIMIT, ERFCINV_LOG_DOMAIN_LIMIT, LOG_TWO, SQRT2
from gaussdist.utils.exceptions import OutOfRangeError


def erf(x: float) -> float:
    """
    Error function erf(x) = (2/√π) ∫₀ˣ exp(-t²) dt.

    Args:
        x: Value at which to evaluate the function

    Returns:
        erf(x) in [-1, 1]; NaN for NaN input

    Examples:
        >>> erf(0.0)
        0.0
        >>> erf(float("inf"))
        1.0
    """
    return float(special.erf(x))


def erfc(x: float) -> float:
    """
    Complementary error function erfc(x) = 1 - erf(x).

    For large positive x the result is computed without subtraction, so the
    small tail value keeps full relative precision. When x² exceeds
    ERFC_UNDERFLOW_LIMIT the scaled form

        erfc(x) = exp(log(erfcx(x)) - x²)

    is used, with erfcx(x) = exp(x²)·erfc(x). The result then rounds only
    once and stays nonzero for as long as the true value is a
    representable (possibly subnormal) double.

    Args:
        x: Value at which to evaluate the function

    Returns:
        erfc(x) in [0, 2]; NaN for NaN input

    Examples:
        >>> erfc(0.0)
        1.0
        >>> erfc(27.0) > 0.0  # Subnormal, not flushed
        True
        >>> erfc(28.0)  # Below the smallest subnormal
        0.0
    """
    if x > 0 and math.isfinite(x) and x * x > ERFC_UNDERFLOW_LIMIT:
        return math.exp(math.log(special.erfcx(x)) - x * x)

    return float(special.erfc(x))


def erfinv(y: float) -> float:
    """
    Inverse error function.

    Args:
        y: Value in [-1, 1]

    Returns:
        x such that erf(x) = y; -inf at y = -1 and +inf at y = 1

    Raises:
        OutOfRangeError: If y is outside [-1, 1] or NaN
    """
    if not -1.0 <= y <= 1.0:
        raise OutOfRangeError(f"erfinv argument must be in [-1, 1], got {y}")
    if y == 1.0:
        return math.inf
    if y == -1.0:
        return -math.inf

    return float(special.erfinv(y))


def erfcinv(y: float) -> float:
    """
    Inverse complementary error function.

    Prefer this over erfinv(1 - y) when y is small: the argument is used
    as given, so tiny tail probabilities do not round to 1 first.

    Args:
        y: Value in [0, 2]

    Returns:
        x such that erfc(x) = y; +inf at y = 0 and -inf at y = 2

    Raises:
        OutOfRangeError: If y is outside [0, 2] or NaN

    Examples:
        >>> erfcinv(1.0) == 0.0
        True
        >>> erfcinv(1e-300) < 27.0  # Finite deep in the tail
        True
        >>> erfcinv(5e-324) < 28.0  # Smallest subnormal
        True
    """
    if not 0.0 <= y <= 2.0:
        raise OutOfRangeError(f"erfcinv argument must be in [0, 2], got {y}")
    if y == 0.0:
        return math.inf
    if y == 2.0:
        return -math.inf
    if y < ERFCINV_LOG_DOMAIN_LIMIT:
        # erfcinv(y) = -ndtri(y / 2) / √2, with y / 2 kept in log space
        return -float(special.ndtri_exp(math.log(y) - LOG_TWO)) / SQRT2

    return float(special.erfcinv(y))
