"""Closed-form Black-Scholes-Merton pricer for European options."""

from __future__ import annotations

import logging
import math
from math import exp, log, sqrt
from typing import Dict

from .core import CALL, OptionSpec, PricingResult, validate_inputs
from .errors import DomainError
from .normal import norm_cdf, norm_pdf

__all__ = ["price", "greeks"]

logger = logging.getLogger(__name__)


def _exp(field: str, x: float) -> float:
    try:
        return _finite(field, exp(x))
    except OverflowError:
        raise DomainError(field, float("inf")) from None


def _finite(field: str, x: float) -> float:
    if not math.isfinite(x):
        raise DomainError(field, x)
    return x


def _d1_d2(S, K, T, r, q, sigma):
    """None when sigma*sqrt(T) is so small that d1 overflows."""
    srt = _finite("sigma*sqrt(T)", sigma * sqrt(T))
    # log(S) - log(K) stays finite where S / K would underflow to 0
    num = _finite("d1", log(S) - log(K) + (r - q + 0.5 * sigma * sigma) * T)
    d1 = num / srt
    if not math.isfinite(d1):
        return None
    return d1, d1 - srt


def _degenerate(opt: OptionSpec, disc_r: float, disc_q: float,
                with_greeks: bool) -> PricingResult:
    """Zero volatility or zero time: the payoff is known today.

    Greeks are the limits of the closed forms, i.e. those of the
    deterministic forward payoff; gamma and vega vanish.
    """
    S, K, T = opt.spot, opt.strike, opt.time_to_maturity
    r, q = opt.risk_free_rate, opt.dividend_yield
    # At T == 0 both discount factors are 1 and this is plain intrinsic value.
    fwd_value = _finite("forward intrinsic", S * disc_q - K * disc_r)
    if opt.option_type == CALL:
        itm = fwd_value > 0.0
        px = fwd_value if itm else 0.0
        sign = 1.0
    else:
        itm = fwd_value < 0.0
        px = -fwd_value if itm else 0.0
        sign = -1.0
    if not with_greeks:
        return PricingResult(price=px)
    if not itm:
        return PricingResult(price=px, delta=0.0, gamma=0.0, vega=0.0,
                             theta=0.0, rho=0.0)
    return PricingResult(
        price=px,
        delta=sign * disc_q,
        gamma=0.0,
        vega=0.0,
        theta=_finite("theta", sign * (q * S * disc_q - r * K * disc_r)),
        rho=_finite("rho", sign * K * T * disc_r),
    )


def price(opt: OptionSpec, *, with_greeks: bool = True) -> PricingResult:
    """Price a European option and (by default) its Greeks.

    Raises ``ValidationError`` for out-of-domain inputs and ``DomainError``
    when an intermediate overflows; never returns a partial result.
    """
    S, K, T = opt.spot, opt.strike, opt.time_to_maturity
    r, q, sigma = opt.risk_free_rate, opt.dividend_yield, opt.volatility
    validate_inputs(S, K, r, q, sigma, T)

    disc_r = _exp("discount factor", -r * T)
    disc_q = _exp("dividend discount factor", -q * T)

    # Zero vol, zero time, or sigma*sqrt(T) too small for d1 to be finite.
    d = None if sigma * sqrt(T) == 0.0 else _d1_d2(S, K, T, r, q, sigma)
    if d is None:
        logger.debug("degenerate %s: T=%s sigma=%s, pricing intrinsic value",
                     opt.option_type.value, T, sigma)
        return _degenerate(opt, disc_r, disc_q, with_greeks)

    d1, d2 = d
    if opt.option_type == CALL:
        px = disc_q * S * norm_cdf(d1) - disc_r * K * norm_cdf(d2)
    else:
        px = disc_r * K * norm_cdf(-d2) - disc_q * S * norm_cdf(-d1)
    # Cancellation can leave a tiny negative residue deep out of the money.
    px = max(_finite("price", px), 0.0)

    if not with_greeks:
        return PricingResult(price=px)

    n_d1 = norm_pdf(d1)
    sqrt_T = sqrt(T)

    # Common
    gamma = disc_q * n_d1 / S / (sigma * sqrt_T)
    vega  = S * disc_q * n_d1 * sqrt_T
    decay = -S * disc_q * n_d1 * sigma / (2.0 * sqrt_T)

    if opt.option_type == CALL:
        delta = disc_q * norm_cdf(d1)
        theta = (decay
                 - r * K * disc_r * norm_cdf(d2)
                 + q * S * disc_q * norm_cdf(d1))
        rho   = K * T * disc_r * norm_cdf(d2)
    else:
        delta = disc_q * (norm_cdf(d1) - 1.0)
        theta = (decay
                 + r * K * disc_r * norm_cdf(-d2)
                 - q * S * disc_q * norm_cdf(-d1))
        rho   = -K * T * disc_r * norm_cdf(-d2)

    return PricingResult(
        price=px,
        delta=_finite("delta", delta),
        gamma=_finite("gamma", gamma),
        vega=_finite("vega", vega),
        theta=_finite("theta", theta),
        rho=_finite("rho", rho),
    )


def greeks(opt: OptionSpec) -> Dict[str, float]:
    """Greeks as a plain dict: delta, gamma, vega, theta, rho."""
    res = price(opt, with_greeks=True).as_dict()
    res.pop("price")
    return res
