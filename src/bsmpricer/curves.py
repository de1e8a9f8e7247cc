"""Flat market objects and the bridge from dated inputs to an ``OptionSpec``.

A curve is anything with ``discount(t)``; there is no observer wiring. To
reprice after a market move, build a new curve and a new spec.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .core import OptionSpec, OptionType
from .dates import DayCounter, time_to_maturity, year_fraction
from .errors import ValidationError

__all__ = [
    "DiscountCurve", "FlatForward", "BlackConstantVol", "spec_from_market",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class DiscountCurve(Protocol):
    def discount(self, t: float) -> float:
        ...


@dataclass(frozen=True)
class FlatForward:
    """Single continuously-compounded rate for every maturity.

    Parameters
    ----------
    rate : float
        Continuously-compounded annual rate (may be negative).
    reference_date : datetime.date
        Date at which ``discount(0) == 1``.
    day_counter : DayCounter
        Converts dates into the ``t`` accepted by ``discount``.
    """
    rate: float
    reference_date: dt.date
    day_counter: DayCounter = DayCounter.ACTUAL_365_FIXED

    def __post_init__(self):
        if not math.isfinite(self.rate):
            raise ValidationError("rate", self.rate, "finite")
        object.__setattr__(self, "day_counter", DayCounter.parse(self.day_counter))

    def discount(self, t: float) -> float:
        return math.exp(-self.rate * t)

    def discount_date(self, d: dt.date) -> float:
        return self.discount(year_fraction(self.reference_date, d, self.day_counter))

    def zero_rate(self, t: float) -> float:
        return self.rate


@dataclass(frozen=True)
class BlackConstantVol:
    volatility: float
    reference_date: dt.date
    day_counter: DayCounter = DayCounter.ACTUAL_365_FIXED

    def __post_init__(self):
        if not math.isfinite(self.volatility) or self.volatility < 0:
            raise ValidationError("volatility", self.volatility, "non-negative")
        object.__setattr__(self, "day_counter", DayCounter.parse(self.day_counter))

    def black_vol(self, t: float) -> float:
        return self.volatility


def _implied_rate(curve: DiscountCurve, t: float) -> float:
    """Flat continuously-compounded rate reproducing ``curve.discount(t)``."""
    if t == 0.0:
        zero_rate = getattr(curve, "zero_rate", None)
        return zero_rate(0.0) if zero_rate is not None else 0.0
    return -math.log(curve.discount(t)) / t


def spec_from_market(
    option_type,
    spot: float,
    strike: float,
    maturity: dt.date,
    rate_curve: FlatForward,
    dividend_curve: DiscountCurve,
    vol_surface: BlackConstantVol,
    day_counter: DayCounter | None = None,
) -> OptionSpec:
    """Collapse dated market objects into the scalar inputs of the pricer.

    Time to maturity is measured from the rate curve's reference date with
    ``day_counter`` (defaults to the rate curve's). Rates are the flat
    equivalents of the curves' discount factors at that horizon, so
    non-flat ``DiscountCurve`` implementations are priced consistently.
    """
    day_counter = DayCounter.parse(day_counter or rate_curve.day_counter)
    T = time_to_maturity(rate_curve.reference_date, maturity, day_counter)
    if T < 0:
        raise ValidationError("time_to_maturity", T, "non-negative")
    r = _implied_rate(rate_curve, T)
    q = _implied_rate(dividend_curve, T)
    sigma = vol_surface.black_vol(T)
    logger.debug("market -> spec: T=%.6f r=%.6f q=%.6f sigma=%.6f", T, r, q, sigma)
    return OptionSpec(
        option_type=OptionType.parse(option_type),
        spot=spot,
        strike=strike,
        risk_free_rate=r,
        dividend_yield=q,
        volatility=sigma,
        time_to_maturity=T,
    )
