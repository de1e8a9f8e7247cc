import argparse
import datetime as dt
import logging
import sys
import time

import pydantic
import yaml

from .black_scholes import price as bs_price
from .config import load_scenario
from .core import OptionSpec, OptionType
from .dates import DayCounter, time_to_maturity
from .errors import PricingError
from .report import format_elapsed, format_long_date, print_inputs, print_row

logger = logging.getLogger("bsmpricer")


def _kind(s: str):
    try:
        return OptionType.parse(s)
    except ValueError:
        raise argparse.ArgumentTypeError("kind must be 'call' or 'put'") from None

def _date(s: str):
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}") from None

def _day_counter(s: str):
    try:
        return DayCounter.parse(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None

def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--spot", type=float, required=True)
    parser.add_argument("--strike", type=float, required=True)
    parser.add_argument("--rate", type=float, required=True, help="cont. risk-free")
    parser.add_argument("--vol", type=float, required=True)
    parser.add_argument("--div", type=float, default=0.0, help="cont. dividend yield")
    parser.add_argument("--kind", type=_kind, default=OptionType.CALL, help="call|put")
    when = parser.add_mutually_exclusive_group(required=True)
    when.add_argument("--T", type=float, help="years to maturity")
    when.add_argument("--maturity", type=_date, help="expiry date (YYYY-MM-DD)")
    parser.add_argument("--valuation-date", dest="valuation_date", type=_date,
                        default=None, help="defaults to today")
    parser.add_argument("--day-counter", dest="day_counter", type=_day_counter,
                        default=DayCounter.ACTUAL_365_FIXED)

def cmd_demo(args):
    started = time.perf_counter()
    cfg = load_scenario(args.config)
    print()
    print_inputs(cfg)
    print()
    print(f"Today's Date : {format_long_date(cfg.valuation_date)}")
    print()
    print_row("Method", "European")
    spec = cfg.to_option_spec()
    logger.debug("demo spec: %s", spec)
    print_row("Black-Scholes", bs_price(spec, with_greeks=False).price)
    print(f" \n{format_elapsed(time.perf_counter() - started)}\n")

def cmd_price(args):
    if args.T is not None:
        T = args.T
    else:
        valuation = args.valuation_date or dt.date.today()
        T = time_to_maturity(valuation, args.maturity, args.day_counter)
    opt = OptionSpec(args.kind, args.spot, args.strike, args.rate, args.div, args.vol, T)
    res = bs_price(opt, with_greeks=args.greeks)
    print(f"{res.price:.10f}")
    if args.greeks:
        for key in ("delta", "gamma", "vega", "theta", "rho"):
            print(f"{key:<6} {getattr(res, key):.10f}")

def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="bsmpricer",
                                description="Black-Scholes-Merton European option pricer")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Reference demo
    p_demo = sub.add_parser("demo", help="price the reference scenario and time the run")
    p_demo.add_argument("--config", default=None, help="YAML scenario file")
    p_demo.set_defaults(func=cmd_demo)

    # Single option
    p_px = sub.add_parser("price", help="Black-Scholes-Merton price")
    add_common(p_px)
    p_px.add_argument("--greeks", action="store_true")
    p_px.set_defaults(func=cmd_price)

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        args.func(args)
    except PricingError as e:
        logger.debug("pricing failed", exc_info=True)
        print(e)
        return 1
    except (pydantic.ValidationError, yaml.YAMLError, OSError) as e:
        logger.debug("could not load scenario", exc_info=True)
        print(e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
