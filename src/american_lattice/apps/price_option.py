#!/usr/bin/env python
"""Price one American option on a dividend-adjusted binomial lattice."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from american_lattice.apps._cli import (
    add_dry_run_arg,
    add_print_config_arg,
    log_dry_run,
    print_config,
)
from american_lattice.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    collect_logging_overrides,
    setup_logging_from_config,
)
from american_lattice.options import (
    AveragedLatticePricer,
    BinomialLatticePricer,
    Dividend,
    HistoricalDividend,
    LatticeError,
    MalformedInput,
    OptionParameters,
    PriceModel,
    schedule_from_history,
    years_between,
)

EXIT_PRICING_ERROR = 2

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "option": {
        "spot": None,
        "strike": None,
        "time_to_expiry": None,
        "valuation_date": None,
        "expiration": None,
        "volatility": None,
        "rate": 0.012,
        "option_type": "call",
    },
    "lattice": {
        "steps": 11,
        "averaged": False,
        "early_exercise": False,
    },
    "dividends": [],
}


def _parse_dividend(text: str) -> dict[str, float]:
    time_str, sep, amount_str = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(
            f"dividend must look like TIME:AMOUNT, got {text!r}"
        )
    try:
        return {"time": float(time_str), "amount": float(amount_str)}
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"dividend must look like TIME:AMOUNT, got {text!r}"
        ) from exc


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price an American option on a binomial lattice."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument("--spot", type=float, default=None)
    parser.add_argument("--strike", type=float, default=None)
    parser.add_argument(
        "--expiry",
        type=float,
        default=None,
        help="Time to expiry in years.",
    )
    parser.add_argument("--valuation-date", type=str, default=None)
    parser.add_argument("--expiration", type=str, default=None)
    parser.add_argument("--volatility", type=float, default=None)
    parser.add_argument("--rate", type=float, default=None)
    parser.add_argument(
        "--type",
        dest="option_type",
        type=str,
        default=None,
        help="call, put, C or P.",
    )
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument(
        "--averaged",
        dest="averaged",
        action="store_true",
        help="Average the prices at steps and steps + 1.",
    )
    parser.add_argument(
        "--single",
        dest="averaged",
        action="store_false",
        help="Price on a single lattice.",
    )
    parser.set_defaults(averaged=None)
    parser.add_argument(
        "--early-exercise",
        dest="early_exercise",
        action="store_true",
        help="Compare immediate exercise at every interior node.",
    )
    parser.add_argument(
        "--no-early-exercise",
        dest="early_exercise",
        action="store_false",
        help="Exercise only at expiry (reference behaviour).",
    )
    parser.set_defaults(early_exercise=None)
    parser.add_argument(
        "--dividend",
        dest="dividends",
        type=_parse_dividend,
        action="append",
        default=None,
        metavar="TIME:AMOUNT",
        help="Cash dividend paid TIME years from now; repeatable.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    option: dict[str, Any] = {}
    lattice: dict[str, Any] = {}

    for key, value in (
        ("spot", args.spot),
        ("strike", args.strike),
        ("time_to_expiry", args.expiry),
        ("valuation_date", args.valuation_date),
        ("expiration", args.expiration),
        ("volatility", args.volatility),
        ("rate", args.rate),
        ("option_type", args.option_type),
    ):
        if value is not None:
            option[key] = value
    if option:
        overrides["option"] = option

    if args.steps is not None:
        lattice["steps"] = args.steps
    if args.averaged is not None:
        lattice["averaged"] = args.averaged
    if args.early_exercise is not None:
        lattice["early_exercise"] = args.early_exercise
    if lattice:
        overrides["lattice"] = lattice

    if args.dividends is not None:
        overrides["dividends"] = args.dividends

    if args.dry_run:
        overrides["dry_run"] = True

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def _resolve_option(option_cfg: Mapping[str, Any]) -> OptionParameters:
    for key in ("spot", "strike", "volatility"):
        if option_cfg.get(key) is None:
            raise MalformedInput(f"option.{key} must be set")

    time_to_expiry = option_cfg.get("time_to_expiry")
    if time_to_expiry is None:
        start = option_cfg.get("valuation_date")
        end = option_cfg.get("expiration")
        if start is None or end is None:
            raise MalformedInput(
                "Set option.time_to_expiry or both option.valuation_date "
                "and option.expiration"
            )
        time_to_expiry = years_between(start, end)

    return OptionParameters(
        spot=option_cfg["spot"],
        strike=option_cfg["strike"],
        time_to_expiry=time_to_expiry,
        volatility=option_cfg["volatility"],
        rate=option_cfg.get("rate", 0.0),
        option_type=option_cfg.get("option_type", "call"),
    )


def _resolve_dividends(
    entries: Sequence[Mapping[str, Any]] | None,
    valuation_date: Any,
) -> tuple[Dividend, ...]:
    """Accept `{time, amount}` entries and dated `{ex_date, amount}` entries."""
    schedule: list[Dividend] = []
    dated: list[HistoricalDividend] = []
    for entry in entries or ():
        if not isinstance(entry, Mapping) or "amount" not in entry:
            raise MalformedInput(f"Invalid dividend entry: {entry!r}")
        if "time" in entry:
            schedule.append(Dividend(time=entry["time"], amount=entry["amount"]))
        elif "ex_date" in entry:
            dated.append(
                HistoricalDividend(ex_date=entry["ex_date"], amount=entry["amount"])
            )
        else:
            raise MalformedInput(f"Dividend entry needs time or ex_date: {entry!r}")

    if dated:
        if valuation_date is None:
            raise MalformedInput("Dated dividends require option.valuation_date")
        schedule.extend(schedule_from_history(dated, valuation_date))
    return tuple(schedule)


def _build_pricer(lattice_cfg: Mapping[str, Any]) -> PriceModel:
    steps = lattice_cfg.get("steps", 11)
    early_exercise = bool(lattice_cfg.get("early_exercise", False))
    if lattice_cfg.get("averaged", False):
        return AveragedLatticePricer(steps=steps, early_exercise=early_exercise)
    return BinomialLatticePricer(steps=steps, early_exercise=early_exercise)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    option_cfg = config.get("option", {})
    lattice_cfg = config.get("lattice", {})
    dry_run = bool(config.get("dry_run", False))

    try:
        params = _resolve_option(option_cfg)
        dividends = _resolve_dividends(
            config.get("dividends"), option_cfg.get("valuation_date")
        )
        pricer = _build_pricer(lattice_cfg)

        logger.info("Option:     %s", params)
        logger.info("Dividends:  %s", list(dividends))
        logger.info("Pricer:     %s", pricer)

        if dry_run:
            log_dry_run(
                logger,
                {
                    "action": "price_option",
                    "option": option_cfg,
                    "time_to_expiry": params.time_to_expiry,
                    "dividends": [
                        {"time": d.time, "amount": d.amount} for d in dividends
                    ],
                    "lattice": lattice_cfg,
                },
            )
            return

        price = pricer.price(params, dividends)
    except LatticeError as exc:
        logger.error("Pricing failed: %s", exc)
        raise SystemExit(EXIT_PRICING_ERROR) from exc

    logger.info("Price:      %.6f", price)
    print(f"{price:.6f}")


if __name__ == "__main__":
    main()
