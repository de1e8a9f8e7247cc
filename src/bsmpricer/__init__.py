# bsmpricer: Black-Scholes-Merton European option pricer
# Public API

# Errors
from .errors import PricingError, ValidationError, DomainError

# Data model
from .core import OptionType, OptionSpec, PricingResult, CALL, PUT

# Analytic pricer
from .normal import norm_cdf, norm_pdf
from .black_scholes import price as bs_price, greeks as bs_greeks

# Vectorised pricer
from .black_scholes_vec import bs_price_vec, bs_greeks_vec

# Dates & market objects
from .dates import DayCounter, year_fraction, time_to_maturity
from .curves import DiscountCurve, FlatForward, BlackConstantVol, spec_from_market

# Risk
from .risk import numerical_greeks, scenario_grid

# Scenario config
from .config import ScenarioConfig, load_scenario

__all__ = [
    # Errors
    "PricingError", "ValidationError", "DomainError",
    # Data model
    "OptionType", "OptionSpec", "PricingResult", "CALL", "PUT",
    # Analytic
    "norm_cdf", "norm_pdf", "bs_price", "bs_greeks",
    # Vectorised
    "bs_price_vec", "bs_greeks_vec",
    # Dates & market
    "DayCounter", "year_fraction", "time_to_maturity",
    "DiscountCurve", "FlatForward", "BlackConstantVol", "spec_from_market",
    # Risk
    "numerical_greeks", "scenario_grid",
    # Config
    "ScenarioConfig", "load_scenario",
]

__version__ = "0.1.0"
