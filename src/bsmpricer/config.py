# config.py
"""Scenario files for the console demo.

A scenario is a YAML mapping; missing keys fall back to the reference
European put (spot 36, strike 40, r 6%, q 0%, vol 20%, one year).
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from .core import OptionSpec, OptionType
from .curves import BlackConstantVol, FlatForward, spec_from_market
from .dates import DayCounter

__all__ = ["ScenarioConfig", "load_scenario"]


class ScenarioConfig(BaseModel):
    option_type: OptionType = OptionType.PUT
    underlying: float = 36.0
    strike: float = 40.0
    dividend_yield: float = 0.00
    risk_free_rate: float = 0.06
    volatility: float = 0.20
    valuation_date: dt.date = dt.date(1998, 5, 15)
    settlement_date: dt.date = dt.date(1998, 5, 17)
    maturity: dt.date = dt.date(1999, 5, 17)
    day_counter: DayCounter = DayCounter.ACTUAL_365_FIXED

    @field_validator("option_type", mode="before")
    @classmethod
    def _parse_option_type(cls, v):
        return OptionType.parse(v)

    @field_validator("day_counter", mode="before")
    @classmethod
    def _parse_day_counter(cls, v):
        return DayCounter.parse(v)

    @classmethod
    def load(cls, file_path: str | Path) -> "ScenarioConfig":
        with open(file_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_option_spec(self) -> OptionSpec:
        """Flat curves anchored at the settlement date, as in the desk setup."""
        rate_curve = FlatForward(self.risk_free_rate, self.settlement_date, self.day_counter)
        div_curve = FlatForward(self.dividend_yield, self.settlement_date, self.day_counter)
        vol = BlackConstantVol(self.volatility, self.settlement_date, self.day_counter)
        return spec_from_market(
            self.option_type, self.underlying, self.strike, self.maturity,
            rate_curve, div_curve, vol,
        )


def load_scenario(path: str | Path | None = None) -> ScenarioConfig:
    """Load a scenario file, or the reference scenario when ``path`` is None."""
    if path is None:
        return ScenarioConfig()
    return ScenarioConfig.load(path)
