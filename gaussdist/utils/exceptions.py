"""
Exception types raised by distribution construction and evaluation.

All errors derive from ValueError: each one reports a caller-supplied
value that violates the contract of the distribution.
"""


class DistributionError(ValueError):
    """Base class for all distribution errors."""


class InvalidParameterError(DistributionError):
    """Raised at construction when a distribution parameter is invalid."""


class OutOfRangeError(DistributionError):
    """Raised when an argument lies outside the domain of an operation."""
