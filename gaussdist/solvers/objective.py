"""
Root-finding objective shared by the quantile solvers.

Inverting a CDF means solving F(x) - p = 0. Near p = 1 this loses all
precision, because F(x) is a value close to 1. When the distribution
offers a survival function, the upper half is solved as (1 - p) - S(x) = 0
instead. Both forms are increasing in x and have the density as their
derivative.
"""

import math
from typing import Callable, Tuple

from gaussdist.utils.constants import QUANTILE_ABSOLUTE_TOLERANCE, QUANTILE_RELATIVE_TOLERANCE
from gaussdist.utils.exceptions import OutOfRangeError
from gaussdist.utils.types import ContinuousDistribution


def validate_probability(p: float) -> None:
    """
    Check that p is a probability.

    Raises:
        OutOfRangeError: If p is outside [0, 1] or NaN
    """
    if not 0.0 <= p <= 1.0:
        raise OutOfRangeError(f"Probability must be in [0, 1], got p={p}")


def tail_objective(
    distribution: ContinuousDistribution,
    p: float,
) -> Tuple[Callable[[float], float], float]:
    """
    Build the increasing objective whose root is the p-quantile.

    Args:
        distribution: Distribution to invert
        p: Probability in the open interval (0, 1)

    Returns:
        (objective, target) where objective(x) is the signed tail error at x
        and target is the smaller tail mass, min(p, 1 - p), that sets the
        tolerance
    """
    survival = getattr(distribution, "survival_probability", None)

    if p > 0.5 and survival is not None:
        target = 1.0 - p

        def objective(x: float) -> float:
            return target - survival(x)

        return objective, target

    def objective(x: float) -> float:
        return distribution.cumulative_probability(x) - p

    return objective, min(p, 1.0 - p)


def is_accurate(
    residual: float,
    target: float,
    relative_tolerance: float = QUANTILE_RELATIVE_TOLERANCE,
    absolute_tolerance: float = QUANTILE_ABSOLUTE_TOLERANCE,
) -> bool:
    """Whether a tail residual is within tolerance of its target probability."""
    return math.isfinite(residual) and abs(residual) <= relative_tolerance * target + absolute_tolerance
