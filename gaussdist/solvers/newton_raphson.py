"""
Newton-Raphson method for quantile refinement.

This module implements the Newton-Raphson algorithm for solving
F(x) = p for x, using the density f(x) = F'(x) as the derivative. It is
used to polish an approximate quantile and always stops after a fixed
number of iterations.
"""

import math

from gaussdist.solvers.objective import is_accurate, tail_objective
from gaussdist.utils.constants import (
    QUANTILE_ABSOLUTE_TOLERANCE,
    QUANTILE_MAX_ITERATIONS,
    QUANTILE_MIN_DENSITY,
    QUANTILE_RELATIVE_TOLERANCE,
    QUANTILE_STEP_TOLERANCE,
)
from gaussdist.utils.types import ContinuousDistribution, QuantileResult


def newton_raphson_quantile(
    distribution: ContinuousDistribution,
    p: float,
    initial_guess: float,
    max_iterations: int = QUANTILE_MAX_ITERATIONS,
    relative_tolerance: float = QUANTILE_RELATIVE_TOLERANCE,
    absolute_tolerance: float = QUANTILE_ABSOLUTE_TOLERANCE,
    step_tolerance: float = QUANTILE_STEP_TOLERANCE,
) -> QuantileResult:
    """
    Solve for the p-quantile using Newton-Raphson method.

    The Newton-Raphson update is:
        x_{n+1} = x_n - (F(x_n) - p) / f(x_n)

    This method has quadratic convergence near the solution but can
    diverge from a poor initial guess, and stalls in the far tails where
    the density underflows.

    Args:
        distribution: Distribution to invert
        p: Probability in the open interval (0, 1)
        initial_guess: Starting estimate of the quantile
        max_iterations: Maximum number of iterations
        relative_tolerance: Round-trip tolerance relative to the tail probability
        absolute_tolerance: Round-trip tolerance floor for subnormal tails
        step_tolerance: Convergence tolerance on the relative step size

    Returns:
        QuantileResult with value, iterations, method, success flag

    Notes:
        - Returns success=False if the density drops below QUANTILE_MIN_DENSITY
        - Returns success=False if a step leaves the finite range
        - Never raises for a p in (0, 1); the last iterate is always returned
    """
    objective, target = tail_objective(distribution, p)
    x = initial_guess
    iterations = 0

    for i in range(max_iterations):
        iterations += 1

        residual = objective(x)

        # Check convergence on the tail probability
        if is_accurate(residual, target, relative_tolerance, absolute_tolerance):
            return QuantileResult(
                value=x,
                iterations=iterations,
                method="newton-raphson",
                success=True,
                message=f"Converged in {iterations} iterations (probability tol)",
            )

        density_value = distribution.density(x)

        # Check if density is too small (step would be unbounded)
        if density_value < QUANTILE_MIN_DENSITY:
            return QuantileResult(
                value=x,
                iterations=iterations,
                method="newton-raphson",
                success=False,
                message=f"Density too small ({density_value:.2e}) at iteration {iterations}, need fallback",
            )

        x_new = x - residual / density_value

        if not math.isfinite(x_new):
            return QuantileResult(
                value=x,
                iterations=iterations,
                method="newton-raphson",
                success=False,
                message=f"Stepped out of finite range at iteration {iterations}",
            )

        # Check convergence on step size
        if abs(x_new - x) <= step_tolerance * abs(x_new):
            return QuantileResult(
                value=x_new,
                iterations=iterations,
                method="newton-raphson",
                success=True,
                message=f"Converged in {iterations} iterations (step tol)",
            )

        x = x_new

    return QuantileResult(
        value=x,
        iterations=iterations,
        method="newton-raphson",
        success=False,
        message=f"Max iterations ({max_iterations}) reached without convergence",
    )
