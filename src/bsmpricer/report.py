"""Console formatting for the demo: inputs block, result rows, run time."""

from __future__ import annotations

import datetime as dt
import sys
from functools import singledispatch
from typing import TextIO

from .config import ScenarioConfig

__all__ = [
    "format_cell", "format_rate", "format_long_date", "format_elapsed",
    "print_inputs", "print_row",
]

COLUMN_WIDTHS = (35, 14)


@singledispatch
def format_cell(value) -> str:
    raise TypeError(f"cannot format {type(value).__name__} cell")


@format_cell.register
def _(value: str) -> str:
    return value


@format_cell.register
def _(value: float) -> str:
    # same default precision as a C++ ostream: 6 significant digits
    return f"{value:g}"


@format_cell.register
def _(value: int) -> str:
    return str(value)


def format_rate(rate: float) -> str:
    return f"{rate * 100:.6f} %"


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}{({1: 'st', 2: 'nd', 3: 'rd'}).get(n % 10, 'th')}"


def format_long_date(d: dt.date) -> str:
    """``May 17th, 1999``"""
    return f"{d.strftime('%B')} {_ordinal(d.day)}, {d.year}"


def format_elapsed(seconds: float) -> str:
    hours = int(seconds / 3600)
    seconds -= hours * 3600
    minutes = int(seconds / 60)
    seconds -= minutes * 60
    parts = []
    if hours > 0:
        parts.append(f"{hours} h")
    if hours > 0 or minutes > 0:
        parts.append(f"{minutes} m")
    parts.append(f"{seconds:.5f} s")
    return "Run completed in " + " ".join(parts)


def print_inputs(cfg: ScenarioConfig, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    lines = [
        f"Option type = {cfg.option_type!s}",
        f"Maturity = {format_long_date(cfg.maturity)}",
        f"Underlying price = {format_cell(cfg.underlying)}",
        f"Strike = {format_cell(cfg.strike)}",
        f"Risk-free interest rate = {format_rate(cfg.risk_free_rate)}",
        f"Dividend yield = {format_rate(cfg.dividend_yield)}",
        f"Volatility = {format_rate(cfg.volatility)}",
        f"Day Counter = {cfg.day_counter!s}",
    ]
    print("\n".join(lines), file=out)
    print(file=out)


def print_row(method: str, value, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    w_method, w_value = COLUMN_WIDTHS
    print(f"{method:<{w_method}}{format_cell(value):<{w_value}}", file=out)
