"""Tests for the bump-and-reprice risk helpers."""

import numpy as np
import pytest
from dataclasses import replace
from bsmpricer import OptionSpec, CALL, PUT, bs_greeks
from bsmpricer.risk import numerical_greeks, scenario_grid

OPT = OptionSpec(CALL, 100, 100, 0.05, 0.0, 0.2, 1.0)


class TestNumericalGreeks:
    def test_vs_analytical_bs(self):
        ng = numerical_greeks(OPT)
        ag = bs_greeks(OPT)
        assert abs(ng["delta"] - ag["delta"]) < 0.005
        assert abs(ng["gamma"] - ag["gamma"]) < 0.002
        assert abs(ng["vega"] - ag["vega"]) < 0.5
        assert abs(ng["theta"] - ag["theta"]) < 0.05
        assert abs(ng["rho"] - ag["rho"]) < 0.5

    def test_put_with_dividend(self):
        opt = replace(OPT, option_type=PUT, dividend_yield=0.03, strike=110)
        ng = numerical_greeks(opt)
        ag = bs_greeks(opt)
        for key in ("delta", "vega", "theta", "rho"):
            assert ng[key] == pytest.approx(ag[key], rel=0.02), key

    def test_all_keys(self):
        ng = numerical_greeks(OPT)
        assert set(ng.keys()) == {"delta", "gamma", "vega", "theta", "rho"}

    def test_put_delta_negative(self):
        ng = numerical_greeks(replace(OPT, option_type=PUT))
        assert ng["delta"] < 0

    def test_expiry_has_no_theta(self):
        ng = numerical_greeks(replace(OPT, time_to_maturity=0.0))
        assert ng["theta"] == 0.0


class TestScenarioGrid:
    def test_output_shape(self):
        spots = np.array([90.0, 100.0, 110.0])
        vols = np.array([0.15, 0.20, 0.25])
        result = scenario_grid(OPT, spots, vols)
        assert result["prices"].shape == (3, 3)

    def test_call_monotone_in_spot(self):
        spots = np.linspace(80, 120, 5)
        vols = np.array([0.2])
        result = scenario_grid(OPT, spots, vols)
        prices = result["prices"][:, 0]
        assert np.all(np.diff(prices) > 0)

    def test_monotone_in_vol(self):
        vols = np.array([0.0, 0.1, 0.2, 0.4])
        result = scenario_grid(replace(OPT, option_type=PUT), [100.0], vols)
        assert np.all(np.diff(result["prices"][0, :]) >= 0)
