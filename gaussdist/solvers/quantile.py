"""
Quantile solver with automatic method selection.

This module provides a high-level interface for inverting the cumulative
distribution function of any continuous distribution. It accepts a
closed-form estimate when that passes a round-trip check, and otherwise
falls back to Newton-Raphson and then to Brent's method. Every stage is
bounded, so the solver always returns a value for a probability in [0, 1].
"""

import logging
import math
from typing import Optional

from gaussdist.solvers.brent import brent_quantile
from gaussdist.solvers.newton_raphson import newton_raphson_quantile
from gaussdist.solvers.objective import is_accurate, tail_objective, validate_probability
from gaussdist.utils.constants import QUANTILE_ABSOLUTE_TOLERANCE, QUANTILE_RELATIVE_TOLERANCE
from gaussdist.utils.exceptions import DistributionError
from gaussdist.utils.types import ContinuousDistribution, QuantileResult

LOG = logging.getLogger(__name__)


def solve_quantile(
    distribution: ContinuousDistribution,
    p: float,
    initial_guess: Optional[float] = None,
    method: str = "auto",
    relative_tolerance: float = QUANTILE_RELATIVE_TOLERANCE,
    absolute_tolerance: float = QUANTILE_ABSOLUTE_TOLERANCE,
) -> QuantileResult:
    """
    Solve for x such that F(x) = p, with automatic method selection.

    This is the main entry point for quantile calculation.
    It automatically:
    1. Validates that p is a probability
    2. Returns the signed infinities at p = 0 and p = 1 exactly
    3. Accepts the initial guess if it passes the round-trip check
    4. Tries Newton-Raphson from the guess (fast, quadratic convergence)
    5. Falls back to Brent if Newton-Raphson fails (robust, bracketed)

    Args:
        distribution: Any object with density, cumulative_probability and
                      inverse_cumulative_probability
        p: Probability in [0, 1]
        initial_guess: Starting estimate, typically a closed-form quantile
        method: Solver method - "auto" (default), "newton", or "brent"
        relative_tolerance: Round-trip tolerance relative to the tail probability
        absolute_tolerance: Round-trip tolerance floor for subnormal tails

    Returns:
        QuantileResult containing:
            - value: Solved quantile
            - iterations: Number of iterations used
            - method: Method that produced the value
            - success: True if converged, False otherwise
            - message: Detailed information about convergence

    Raises:
        OutOfRangeError: If p is outside [0, 1]
        DistributionError: If method is not recognised

    Notes:
        - Never raises a convergence error; when no stage succeeds, the
          candidate with the smallest residual is returned
    """
    validate_probability(p)
    if method not in ("auto", "newton", "brent"):
        raise DistributionError(f"Unknown quantile method {method!r}, expected 'auto', 'newton' or 'brent'")

    if p == 0.0:
        return QuantileResult(value=-math.inf, iterations=0, method="closed-form", success=True, message="Lower boundary")
    if p == 1.0:
        return QuantileResult(value=math.inf, iterations=0, method="closed-form", success=True, message="Upper boundary")

    objective, target = tail_objective(distribution, p)
    guess = initial_guess if initial_guess is not None and math.isfinite(initial_guess) else 0.0
    candidates = []

    if method == "auto" and initial_guess is not None:
        closed_form = QuantileResult(
            value=guess,
            iterations=0,
            method="closed-form",
            success=is_accurate(objective(guess), target, relative_tolerance, absolute_tolerance),
        )
        if closed_form.success:
            return closed_form

        LOG.debug("Initial guess %r failed round-trip check for p=%r, refining", guess, p)
        closed_form.message = "Failed round-trip check"
        candidates.append(closed_form)

    if method in ("auto", "newton"):
        nr_result = newton_raphson_quantile(
            distribution,
            p,
            guess,
            relative_tolerance=relative_tolerance,
            absolute_tolerance=absolute_tolerance,
        )

        if nr_result.success or method == "newton":
            return nr_result

        LOG.debug("Newton-Raphson failed for p=%r (%s), trying Brent", p, nr_result.message)
        candidates.append(nr_result)

    brent_result = brent_quantile(
        distribution,
        p,
        guess,
        relative_tolerance=relative_tolerance,
        absolute_tolerance=absolute_tolerance,
    )

    if brent_result.success:
        return brent_result

    candidates.append(brent_result)
    return min(candidates, key=lambda result: abs(objective(result.value)))
