"""Tests for day counts, flat curves and the market -> spec bridge."""

import datetime as dt
import math

import pytest
from bsmpricer import bs_price
from bsmpricer.core import PUT, CALL
from bsmpricer.curves import (
    BlackConstantVol, DiscountCurve, FlatForward, spec_from_market,
)
from bsmpricer.dates import DayCounter, time_to_maturity, year_fraction
from bsmpricer.errors import ValidationError

SETTLE = dt.date(1998, 5, 17)
EXPIRY = dt.date(1999, 5, 17)


class TestDayCounter:
    def test_actual_365_fixed(self):
        assert year_fraction(SETTLE, EXPIRY, DayCounter.ACTUAL_365_FIXED) == 1.0

    def test_actual_360(self):
        assert year_fraction(SETTLE, EXPIRY, DayCounter.ACTUAL_360) == 365 / 360

    def test_thirty_360(self):
        assert year_fraction(SETTLE, EXPIRY, DayCounter.THIRTY_360) == 1.0
        assert year_fraction(dt.date(2021, 1, 31), dt.date(2021, 3, 31),
                             DayCounter.THIRTY_360) == 60 / 360
        assert year_fraction(dt.date(2021, 2, 28), dt.date(2021, 3, 31),
                             DayCounter.THIRTY_360) == 33 / 360

    def test_signed(self):
        assert year_fraction(EXPIRY, SETTLE) == -1.0

    def test_valuation_date_is_explicit(self):
        # valuation two days before settlement, as in the desk demo
        assert time_to_maturity(dt.date(1998, 5, 15), EXPIRY) == pytest.approx(367 / 365)

    def test_parse(self):
        assert DayCounter.parse("Actual/365 (Fixed)") is DayCounter.ACTUAL_365_FIXED
        assert DayCounter.parse("actual_360") is DayCounter.ACTUAL_360
        assert DayCounter.parse(DayCounter.THIRTY_360) is DayCounter.THIRTY_360
        assert str(DayCounter.ACTUAL_365_FIXED) == "Actual/365 (Fixed)"
        with pytest.raises(ValueError):
            DayCounter.parse("Actual/Actual")


class TestFlatForward:
    def test_discount(self):
        curve = FlatForward(0.06, SETTLE)
        assert curve.discount(1.0) == pytest.approx(math.exp(-0.06), rel=1e-15)
        assert curve.discount(0.0) == 1.0
        assert curve.discount_date(EXPIRY) == pytest.approx(math.exp(-0.06), rel=1e-15)
        assert curve.zero_rate(3.0) == 0.06

    def test_is_discount_curve(self):
        assert isinstance(FlatForward(0.01, SETTLE), DiscountCurve)

    def test_bad_vol(self):
        with pytest.raises(ValidationError):
            BlackConstantVol(-0.2, SETTLE)


class TestSpecFromMarket:
    def _market(self, rate=0.06, div=0.0, vol=0.20):
        return (FlatForward(rate, SETTLE), FlatForward(div, SETTLE),
                BlackConstantVol(vol, SETTLE))

    def test_reference_put(self):
        spec = spec_from_market(PUT, 36, 40, EXPIRY, *self._market())
        assert spec.time_to_maturity == 1.0
        assert spec.risk_free_rate == pytest.approx(0.06, abs=1e-14)
        assert spec.dividend_yield == pytest.approx(0.0, abs=1e-14)
        assert spec.volatility == 0.20
        assert abs(bs_price(spec).price - 3.8443) < 1e-3

    def test_day_counter_override(self):
        spec = spec_from_market("call", 100, 100, EXPIRY, *self._market(),
                                day_counter=DayCounter.ACTUAL_360)
        assert spec.option_type is CALL
        assert spec.time_to_maturity == pytest.approx(365 / 360)

    def test_non_flat_curve(self):
        class Quadratic:
            def discount(self, t):
                return math.exp(-(0.03 + 0.01 * t) * t)

        rate, div, vol = self._market()
        spec = spec_from_market(CALL, 100, 100, dt.date(2000, 5, 16),
                                rate, Quadratic(), vol)
        T = spec.time_to_maturity
        assert spec.dividend_yield == pytest.approx(0.03 + 0.01 * T, rel=1e-12)

    def test_expiry_before_reference(self):
        with pytest.raises(ValidationError) as exc:
            spec_from_market(PUT, 36, 40, dt.date(1998, 1, 1), *self._market())
        assert exc.value.field == "time_to_maturity"

    def test_expiry_on_reference_date(self):
        spec = spec_from_market(PUT, 36, 40, SETTLE, *self._market())
        assert spec.time_to_maturity == 0.0
        assert spec.risk_free_rate == 0.06
        assert bs_price(spec).price == 4.0
