"""
Data types and structures for continuous distributions.

This module defines the dataclasses and protocols used throughout the
package for representing distribution parameters, the capability set a
continuous distribution offers, and quantile solver results.
"""

import math
from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from gaussdist.utils.exceptions import InvalidParameterError

QuantileMethod = Literal["closed-form", "newton-raphson", "brent"]


@runtime_checkable
class ContinuousDistribution(Protocol):
    """
    Capability set shared by continuous univariate distributions.

    Any object providing these three methods can be inverted by the
    generic quantile solvers in ``gaussdist.solvers``. Objects that also
    provide ``survival_probability(x)`` get more accurate upper-tail
    inversion.
    """

    def density(self, x: float) -> float:
        ...

    def cumulative_probability(self, x: float) -> float:
        ...

    def inverse_cumulative_probability(self, p: float) -> float:
        ...


@dataclass(frozen=True)
class NormalParams:
    """
    Immutable container for normal distribution parameters.

    Attributes:
        mean: Location of the distribution
        standard_deviation: Scale of the distribution (must be positive)
    """
    mean: float
    standard_deviation: float

    def __post_init__(self) -> None:
        """Validate parameters are finite and the scale is positive."""
        if not math.isfinite(self.mean):
            raise InvalidParameterError(f"Mean must be finite, got mean={self.mean}")
        if not math.isfinite(self.standard_deviation):
            raise InvalidParameterError(
                f"Standard deviation must be finite, got sd={self.standard_deviation}"
            )
        if self.standard_deviation <= 0:
            raise InvalidParameterError(
                f"Standard deviation must be positive, got sd={self.standard_deviation}"
            )


@dataclass
class QuantileResult:
    """
    Result from a quantile solver.

    Attributes:
        value: Solved quantile x such that F(x) ≈ p
        iterations: Number of iterations used (0 for closed form)
        method: Method that produced the value
        success: Whether the value satisfies the round-trip tolerance
        message: Additional information about convergence
    """
    value: float
    iterations: int
    method: QuantileMethod
    success: bool
    message: str = ""
