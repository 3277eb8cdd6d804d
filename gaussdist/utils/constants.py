"""
Numerical constants and tolerances for distribution calculations.

This module defines the fixed mathematical constants used by the
evaluators and the convergence criteria of the quantile solvers. Solver
functions take these values as keyword defaults, so they can be
overridden per call.
"""

import math
import sys

# Mathematical constants
SQRT2 = math.sqrt(2.0)
HALF_LOG_TWO_PI = 0.5 * math.log(2.0 * math.pi)  # log(sqrt(2π))
LOG_TWO = math.log(2.0)
LOG_FLOAT_MAX = math.log(sys.float_info.max)  # exp() overflows above this

# Special-function kernel
# Above this value of x², SciPy's erfc(x) is close to flushing to zero even
# though the true value is still representable as a subnormal double.
ERFC_UNDERFLOW_LIMIT = 700.0
# Below this, erfcinv is evaluated from log(y); SciPy's direct inverse
# returns inf for the smallest subnormal arguments.
ERFCINV_LOG_DOMAIN_LIMIT = 1e-300

# Quantile round-trip acceptance: |tail(x) - target| <= rel * target + abs
QUANTILE_RELATIVE_TOLERANCE = 1e-9
QUANTILE_ABSOLUTE_TOLERANCE = 1e-300  # Subnormal tail probabilities carry no relative precision

# Newton-Raphson polish
QUANTILE_MAX_ITERATIONS = 50  # Maximum Newton-Raphson iterations
QUANTILE_MIN_DENSITY = 1e-300  # Below this, switch to Brent method
QUANTILE_STEP_TOLERANCE = 4.0 * sys.float_info.epsilon  # Relative step size convergence

# Brent bracketing search
BRENT_XTOL = 1e-300  # Absolute tolerance on x (relative tolerance dominates)
BRENT_RTOL = 4.0 * sys.float_info.epsilon  # Smallest rtol brentq accepts
BRENT_MAX_ITERATIONS = 500
BRACKET_INITIAL_STEP = 1.0
BRACKET_MAX_EXPANSIONS = 64  # Step doubles each time; then fall back to ±float max
