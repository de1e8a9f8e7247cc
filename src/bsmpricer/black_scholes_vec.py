# black_scholes_vec.py
# Vectorised Black-Scholes-Merton pricing and Greeks.
# All public functions accept scalars *or* NumPy arrays and broadcast.

from __future__ import annotations
import numpy as np
from scipy.stats import norm

from .core import CALL, OptionType
from .errors import DomainError, ValidationError

_N = norm.cdf   # vectorised standard-normal CDF
_n = norm.pdf   # vectorised standard-normal PDF

_FIELDS = ("spot", "strike", "time_to_maturity", "risk_free_rate",
           "dividend_yield", "volatility")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _first_bad(name, arr, mask, constraint):
    if np.any(mask):
        raise ValidationError(name, float(arr[mask].flat[0]), constraint)


def _prepare(S, K, T, r, q, sigma):
    """Broadcast and validate inputs; same domain rules as the scalar pricer."""
    arrs = np.broadcast_arrays(
        *(np.asarray(x, dtype=float) for x in (S, K, T, r, q, sigma))
    )
    for name, a in zip(_FIELDS, arrs):
        _first_bad(name, a, ~np.isfinite(a), "finite")
    S, K, T, r, q, sigma = arrs
    _first_bad("spot", S, S <= 0, "positive")
    _first_bad("strike", K, K <= 0, "positive")
    _first_bad("volatility", sigma, sigma < 0, "non-negative")
    _first_bad("time_to_maturity", T, T < 0, "non-negative")
    return S, K, T, r, q, sigma


def _is_call(kind) -> np.ndarray:
    """Return boolean mask: True where kind is a call."""
    kind = np.asarray(kind, dtype=object)
    if kind.ndim == 0:
        return np.bool_(OptionType.parse(kind.item()) is CALL)
    return np.array([OptionType.parse(k) is CALL for k in kind.flat],
                    dtype=bool).reshape(kind.shape)


def _check_finite(name, arr):
    if not np.all(np.isfinite(arr)):
        raise DomainError(name, float(arr[~np.isfinite(arr)].flat[0]))
    return arr


def _terms(S, K, T, r, q, sigma):
    """Discount factors and the four normal probabilities.

    Where ``sigma * sqrt(T)`` is zero, or so small that d1 overflows, the
    probabilities collapse to the in-the-money indicators of the forward
    payoff, which turns the general formulas into the intrinsic-value limits.
    """
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        disc_r = _check_finite("discount factor", np.exp(-r * T))
        disc_q = _check_finite("dividend discount factor", np.exp(-q * T))
        sqrt_T = np.sqrt(T)
        srt = sigma * sqrt_T
        positive = srt > 0
        # log(S) - log(K) stays finite where S / K would underflow to 0
        num = np.log(S) - np.log(K) + (r - q + 0.5 * sigma * sigma) * T
        num = _check_finite("d1", np.where(positive, num, 0.0))
        raw = num / np.where(positive, srt, 1.0)
        live = positive & np.isfinite(raw)
        safe_srt = np.where(live, srt, 1.0)
        d1 = np.where(live, raw, 0.0)
        d2 = d1 - np.where(live, srt, 0.0)
        fwd = S * disc_q - K * disc_r

    itm_c = (fwd > 0).astype(float)
    itm_p = (fwd < 0).astype(float)
    return {
        "disc_r": disc_r, "disc_q": disc_q, "sqrt_T": sqrt_T,
        "safe_srt": safe_srt, "live": live, "d1": d1,
        "N1": np.where(live, _N(d1), itm_c),
        "N2": np.where(live, _N(d2), itm_c),
        "Nm1": np.where(live, _N(-d1), itm_p),
        "Nm2": np.where(live, _N(-d2), itm_p),
    }


# ---------------------------------------------------------------------------
# Vectorised price
# ---------------------------------------------------------------------------
def bs_price_vec(S, K, T, r, q, sigma, kind) -> np.ndarray:
    """Vectorised Black-Scholes-Merton price.

    Parameters accept scalars or arrays; NumPy broadcasting rules apply.
    Zero volatility / zero maturity entries are priced at their limits.

    Returns
    -------
    np.ndarray
        Option prices (same shape as broadcasted inputs).
    """
    S, K, T, r, q, sigma = _prepare(S, K, T, r, q, sigma)
    t = _terms(S, K, T, r, q, sigma)

    call_px = t["disc_q"] * S * t["N1"] - t["disc_r"] * K * t["N2"]
    put_px  = t["disc_r"] * K * t["Nm2"] - t["disc_q"] * S * t["Nm1"]

    is_call = _is_call(kind)
    px = np.where(is_call, call_px, put_px)
    return np.maximum(_check_finite("price", px), 0.0)


# ---------------------------------------------------------------------------
# Vectorised Greeks
# ---------------------------------------------------------------------------
def bs_greeks_vec(S, K, T, r, q, sigma, kind) -> dict[str, np.ndarray]:
    """Vectorised Black-Scholes-Merton Greeks.

    Returns dict with keys: delta, gamma, vega, theta, rho.
    Vega is dPrice/dSigma (absolute), theta is value change per year of
    calendar time, rho is dPrice/dr (absolute).
    """
    S, K, T, r, q, sigma = _prepare(S, K, T, r, q, sigma)
    t = _terms(S, K, T, r, q, sigma)
    disc_r, disc_q, live = t["disc_r"], t["disc_q"], t["live"]
    n_d1 = np.where(live, _n(t["d1"]), 0.0)
    safe_sqrt_T = np.where(T > 0, t["sqrt_T"], 1.0)
    is_call = _is_call(kind)

    # Common
    gamma = disc_q * n_d1 / S / t["safe_srt"]
    vega  = S * disc_q * n_d1 * t["sqrt_T"]
    decay = -S * disc_q * n_d1 * sigma / (2 * safe_sqrt_T)

    # Call-specific
    delta_c = disc_q * t["N1"]
    theta_c = decay - r * K * disc_r * t["N2"] + q * S * disc_q * t["N1"]
    rho_c   = K * T * disc_r * t["N2"]

    # Put-specific
    delta_p = -disc_q * t["Nm1"]
    theta_p = decay + r * K * disc_r * t["Nm2"] - q * S * disc_q * t["Nm1"]
    rho_p   = -K * T * disc_r * t["Nm2"]

    delta = np.where(is_call, delta_c, delta_p)
    theta = np.where(is_call, theta_c, theta_p)
    rho   = np.where(is_call, rho_c, rho_p)

    out = {"delta": delta, "gamma": gamma, "vega": vega, "theta": theta, "rho": rho}
    return {k: _check_finite(k, v) for k, v in out.items()}
