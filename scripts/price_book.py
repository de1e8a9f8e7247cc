#!/usr/bin/env python3
"""Batch-price a book of European options with the analytic BSM pricer.

Usage
-----
    python scripts/price_book.py --input book.csv --output prices.csv
    python scripts/price_book.py --input book.csv --output prices.json --greeks

Input CSV format
----------------
    id,kind,spot,strike,rate,div,vol,T
    1,put,36,40,0.06,0.0,0.20,1.0
    2,call,100,110,0.05,0.01,0.25,0.5

Output
------
    CSV or JSON with columns: id, price, delta, gamma, vega, theta, rho, error
"""

from __future__ import annotations
import argparse
import csv
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from bsmpricer.black_scholes_vec import bs_price_vec, bs_greeks_vec
from bsmpricer.core import OptionType
from bsmpricer.errors import PricingError

logger = logging.getLogger("price_book")

_COLUMNS = ("spot", "strike", "T", "rate", "div", "vol")


def _price_row(row: dict, compute_greeks: bool) -> dict:
    """Price a single book row and return result dict."""
    rid = row.get("id", "")
    try:
        S, K, T, r, q, sigma = (float(row[c]) for c in _COLUMNS)
    except (KeyError, TypeError, ValueError) as e:
        # short rows come back from DictReader with None for missing columns
        raise PricingError("row", rid, f"bad numeric column: {e}") from e
    kind = OptionType.parse(row.get("kind", ""))

    result = {"id": rid, "price": float(bs_price_vec(S, K, T, r, q, sigma, kind))}
    if compute_greeks:
        g = bs_greeks_vec(S, K, T, r, q, sigma, kind)
        for key in ("delta", "gamma", "vega", "theta", "rho"):
            result[key] = float(g[key])
    return result


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Batch-price a book of European options."
    )
    parser.add_argument("--input", required=True, help="Path to book CSV")
    parser.add_argument("--output", required=True, help="Output path (.csv or .json)")
    parser.add_argument("--greeks", action="store_true", help="Compute Greeks")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    with open(args.input, newline="") as f:
        rows = list(csv.DictReader(f))

    logger.info("Pricing %d positions...", len(rows))

    results = []
    for i, row in enumerate(rows):
        try:
            results.append(_price_row(row, args.greeks))
        except PricingError as e:
            logger.warning("Row %d (id=%s): %s", i, row.get("id", "?"), e)
            results.append({"id": row.get("id", ""), "price": None, "error": str(e)})

    output_path = Path(args.output)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2, default=str)
    else:
        if not results:
            logger.info("No results to write.")
            return 0
        fieldnames = list(results[0].keys())
        for r in results:
            for k in r:
                if k not in fieldnames:
                    fieldnames.append(k)
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(results)

    priced = sum(1 for r in results if r.get("price") is not None)
    logger.info("Results written to %s  |  Priced: %d  |  Failed: %d",
                args.output, priced, len(results) - priced)
    return 0


if __name__ == "__main__":
    sys.exit(main())
