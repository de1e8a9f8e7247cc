"""Bump-and-reprice risk helpers.

Central finite differences on the analytic pricer, used to cross-check the
closed-form Greeks, plus a spot x vol scenario grid.
"""

from __future__ import annotations

import numpy as np
from dataclasses import replace

from .black_scholes import price
from .core import OptionSpec

__all__ = [
    "numerical_greeks",
    "scenario_grid",
]


def _px(opt: OptionSpec, **changes) -> float:
    return price(replace(opt, **changes), with_greeks=False).price


# ---------------------------------------------------------------------------
# Numerical Greeks
# ---------------------------------------------------------------------------

def numerical_greeks(
    opt: OptionSpec,
    *,
    bump_pct: float = 0.01,
) -> dict[str, float]:
    """Compute Greeks via central finite differences on the analytic pricer.

    Parameters
    ----------
    opt : OptionSpec
        Option and market to bump.
    bump_pct : float
        Relative bump size for spot and vol; absolute for rate (default 0.01).

    Returns
    -------
    dict[str, float]
        Keys: ``delta``, ``gamma``, ``vega``, ``theta``, ``rho``.  Units and
        signs follow ``black_scholes.price``: theta is value change per year
        as calendar time passes.
    """
    S, T, r, sigma = opt.spot, opt.time_to_maturity, opt.risk_free_rate, opt.volatility
    P0 = _px(opt)

    # --- Delta & Gamma (spot bump) ---
    eps_S = bump_pct * S
    P_up = _px(opt, spot=S + eps_S)
    P_dn = _px(opt, spot=S - eps_S)
    delta = (P_up - P_dn) / (2.0 * eps_S)
    gamma = (P_up - 2.0 * P0 + P_dn) / (eps_S ** 2)

    # --- Vega (vol bump, one-sided near zero vol) ---
    eps_v = max(bump_pct * sigma, 1e-4)
    v_up, v_dn = sigma + eps_v, max(sigma - eps_v, 0.0)
    vega = (_px(opt, volatility=v_up) - _px(opt, volatility=v_dn)) / (v_up - v_dn)

    # --- Theta (time decay, 1-day bump) ---
    dt = min(1.0 / 365.0, T)
    if dt > 0:
        theta_val = (_px(opt, time_to_maturity=T - dt) - P0) / dt
    else:
        theta_val = 0.0

    # --- Rho (rate bump) ---
    eps_r = bump_pct
    P_rup = _px(opt, risk_free_rate=r + eps_r)
    P_rdn = _px(opt, risk_free_rate=r - eps_r)
    rho = (P_rup - P_rdn) / (2.0 * eps_r)

    return {
        "delta": float(delta),
        "gamma": float(gamma),
        "vega": float(vega),
        "theta": float(theta_val),
        "rho": float(rho),
    }


# ---------------------------------------------------------------------------
# Scenario grid
# ---------------------------------------------------------------------------

def scenario_grid(
    opt: OptionSpec,
    spot_range: np.ndarray,
    vol_range: np.ndarray,
) -> dict:
    """Evaluate the option across a 2-D (spot × vol) scenario grid.

    Parameters
    ----------
    spot_range : array, shape (n_spot,)
        Spot values to evaluate.
    vol_range : array, shape (n_vol,)
        Volatility values to evaluate.

    Returns
    -------
    dict
        ``"spot_values"``, ``"vol_values"``, ``"prices"`` (shape n_spot×n_vol).
    """
    spot_range = np.asarray(spot_range, dtype=float)
    vol_range = np.asarray(vol_range, dtype=float)
    prices = np.empty((len(spot_range), len(vol_range)))

    for i, s in enumerate(spot_range):
        for j, v in enumerate(vol_range):
            prices[i, j] = _px(opt, spot=float(s), volatility=float(v))

    return {
        "spot_values": spot_range.copy(),
        "vol_values": vol_range.copy(),
        "prices": prices,
    }
