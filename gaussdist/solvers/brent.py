"""
Brent's method for quantile calculation.

This module implements the bracketing fallback for quantile inversion.
A bracket around the root is grown geometrically from the initial guess,
with the extremes of the finite double range as a last resort, and Brent's
method (a hybrid bisection/inverse quadratic interpolation algorithm)
then narrows it down. Every stage has a fixed iteration cap. The solver
reports its best value instead of raising when the cap is hit.
"""

import logging
import sys
from typing import Callable

from scipy.optimize import brentq

from gaussdist.solvers.objective import is_accurate, tail_objective
from gaussdist.utils.constants import (
    BRACKET_INITIAL_STEP,
    BRACKET_MAX_EXPANSIONS,
    BRENT_MAX_ITERATIONS,
    BRENT_RTOL,
    BRENT_XTOL,
    QUANTILE_ABSOLUTE_TOLERANCE,
    QUANTILE_RELATIVE_TOLERANCE,
)
from gaussdist.utils.types import ContinuousDistribution, QuantileResult

LOG = logging.getLogger(__name__)


def expand_bracket_end(
    objective: Callable[[float], float],
    guess: float,
    direction: int,
    initial_step: float = BRACKET_INITIAL_STEP,
    max_expansions: int = BRACKET_MAX_EXPANSIONS,
) -> float:
    """
    Walk away from guess until the objective changes sign.

    Args:
        objective: Increasing function whose root is sought
        guess: Starting point
        direction: -1 to search for a lower end (objective <= 0),
                   +1 to search for an upper end (objective >= 0)
        initial_step: First step size; doubled after every probe
        max_expansions: Number of probes before giving up

    Returns:
        A point on the requested side of the root, or the largest finite
        double in the search direction if no probe reached it
    """
    step = initial_step
    x = guess

    for _ in range(max_expansions):
        value = objective(x)
        if (direction < 0 and value <= 0.0) or (direction > 0 and value >= 0.0):
            return x
        x = guess + direction * step
        step *= 2.0

    return direction * sys.float_info.max


def brent_quantile(
    distribution: ContinuousDistribution,
    p: float,
    initial_guess: float = 0.0,
    xtol: float = BRENT_XTOL,
    rtol: float = BRENT_RTOL,
    max_iterations: int = BRENT_MAX_ITERATIONS,
    relative_tolerance: float = QUANTILE_RELATIVE_TOLERANCE,
    absolute_tolerance: float = QUANTILE_ABSOLUTE_TOLERANCE,
) -> QuantileResult:
    """
    Solve for the p-quantile using Brent's method.

    Brent's method is a root-finding algorithm that combines:
    - Bisection (reliable but slow)
    - Inverse quadratic interpolation (fast when applicable)
    - Secant method (intermediate speed/reliability)

    It's slower than Newton-Raphson but guaranteed to converge once the
    objective has opposite signs at the bracket ends. For a CDF that
    saturates at 0 and 1 such a bracket always exists.

    Args:
        distribution: Distribution to invert
        p: Probability in the open interval (0, 1)
        initial_guess: Point the bracket is grown around
        xtol: Absolute tolerance on x
        rtol: Relative tolerance on x
        max_iterations: Maximum Brent iterations
        relative_tolerance: Round-trip tolerance relative to the tail probability
        absolute_tolerance: Round-trip tolerance floor for subnormal tails

    Returns:
        QuantileResult with value, iterations, method, success flag
    """
    objective, target = tail_objective(distribution, p)

    lower = expand_bracket_end(objective, initial_guess, -1)
    upper = expand_bracket_end(objective, initial_guess, +1)

    try:
        # brentq requires that objective(lower) and objective(upper) have opposite signs
        root, info = brentq(
            objective,
            lower,
            upper,
            xtol=xtol,
            rtol=rtol,
            maxiter=max_iterations,
            full_output=True,
            disp=False,
        )
    except ValueError as e:
        # Only reachable if the objective does not saturate at the range ends
        LOG.debug("Brent bracket [%r, %r] failed for p=%r: %s", lower, upper, p, e)
        return QuantileResult(
            value=initial_guess,
            iterations=0,
            method="brent",
            success=False,
            message=(
                f"Brent method failed: objective doesn't bracket a root. "
                f"obj({lower:.4g}) = {objective(lower):.4g}, "
                f"obj({upper:.4g}) = {objective(upper):.4g}."
            ),
        )

    residual = objective(root)

    if not info.converged:
        LOG.debug("Brent stopped at %d iterations for p=%r (residual %.2e)", info.iterations, p, residual)
        return QuantileResult(
            value=root,
            iterations=info.iterations,
            method="brent",
            success=False,
            message=f"Max iterations ({max_iterations}) reached, residual {residual:.2e}",
        )

    # A converged bracket is as close as floating point allows, even when the
    # tail cannot be evaluated to the round-trip tolerance.
    accurate = is_accurate(residual, target, relative_tolerance, absolute_tolerance)

    return QuantileResult(
        value=root,
        iterations=info.iterations,
        method="brent",
        success=True,
        message=(
            f"Converged with residual {residual:.2e}"
            + ("" if accurate else " (limited by tail precision)")
        ),
    )
