"""Standard normal distribution: CDF and density for the analytic pricer."""

import math

from .errors import DomainError

_SQRT2 = math.sqrt(2.0)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def norm_cdf(x: float) -> float:
    """Standard normal CDF.

    Uses ``erfc`` rather than ``1 + erf`` so the lower tail keeps its
    precision; saturates to exactly 0.0 / 1.0 far out in the tails.
    """
    if not math.isfinite(x):
        raise DomainError("x", x)
    return 0.5 * math.erfc(-x / _SQRT2)


def norm_pdf(x: float) -> float:
    """Standard normal density; same non-finite rule as ``norm_cdf``."""
    if not math.isfinite(x):
        raise DomainError("x", x)
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)
