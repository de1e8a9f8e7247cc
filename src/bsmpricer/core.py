from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

from .errors import ValidationError


class OptionType(str, Enum):
    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, text) -> "OptionType":
        """Accept ``call|c|put|p`` in any case, or an existing member."""
        if isinstance(text, cls):
            return text
        s = str(text).strip().lower()
        if s in {"call", "c"}:
            return cls.CALL
        if s in {"put", "p"}:
            return cls.PUT
        raise ValidationError("option_type", text, "'call' or 'put'")

    def __str__(self) -> str:
        return self.value.capitalize()


CALL = OptionType.CALL
PUT  = OptionType.PUT


def validate_inputs(spot, strike, risk_free_rate, dividend_yield,
                    volatility, time_to_maturity) -> None:
    """Raise ``ValidationError`` for the first field outside its domain."""
    for name, value in (("spot", spot), ("strike", strike),
                        ("risk_free_rate", risk_free_rate),
                        ("dividend_yield", dividend_yield),
                        ("volatility", volatility),
                        ("time_to_maturity", time_to_maturity)):
        if not isinstance(value, numbers.Real) or isinstance(value, bool):
            raise ValidationError(name, value, "a real number")
        if not math.isfinite(value):
            raise ValidationError(name, value, "finite")
    if spot <= 0:
        raise ValidationError("spot", spot, "positive")
    if strike <= 0:
        raise ValidationError("strike", strike, "positive")
    if volatility < 0:
        raise ValidationError("volatility", volatility, "non-negative")
    if time_to_maturity < 0:
        raise ValidationError("time_to_maturity", time_to_maturity, "non-negative")


@dataclass(frozen=True)
class OptionSpec:
    """A European option plus the flat market it is priced in.

    Rates and yields are continuously compounded and annualised;
    ``time_to_maturity`` is a year fraction. ``volatility == 0`` and
    ``time_to_maturity == 0`` are allowed and priced as limits.
    """
    option_type: OptionType
    spot: float
    strike: float
    risk_free_rate: float
    dividend_yield: float
    volatility: float
    time_to_maturity: float   # years

    def __post_init__(self):
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))
        validate_inputs(self.spot, self.strike, self.risk_free_rate,
                        self.dividend_yield, self.volatility,
                        self.time_to_maturity)


@dataclass(frozen=True)
class PricingResult:
    """Fair value and, when requested, the standard sensitivities.

    Vega and rho are per unit (not per 1%) of volatility and rate; theta is
    value change per year of calendar time.
    """
    price: float
    delta: Optional[float] = None
    gamma: Optional[float] = None
    vega: Optional[float] = None
    theta: Optional[float] = None
    rho: Optional[float] = None

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)
                if getattr(self, f.name) is not None}
