"""Batch pricing with per-option failure isolation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import pandas as pd

from american_lattice.options.engines.base import PriceModel
from american_lattice.options.errors import LatticeError
from american_lattice.options.types import Dividend, OptionParameters

logger = logging.getLogger(__name__)

BATCH_COLUMNS = [
    "spot",
    "strike",
    "time_to_expiry",
    "volatility",
    "rate",
    "option_type",
    "price",
    "error",
]


def price_batch(
    pricer: PriceModel,
    options: Iterable[OptionParameters],
    dividends: Sequence[Dividend] = (),
) -> pd.DataFrame:
    """Price options one by one and collect the results in a frame.

    A `LatticeError` raised for one option is recorded in its `error` column
    (with a missing `price`) and does not stop the remaining options.
    """
    schedule = tuple(dividends)
    rows: list[dict[str, Any]] = []
    n_failed = 0
    for params in options:
        row: dict[str, Any] = {
            "spot": params.spot,
            "strike": params.strike,
            "time_to_expiry": params.time_to_expiry,
            "volatility": params.volatility,
            "rate": params.rate,
            "option_type": str(params.option_type),
            "price": None,
            "error": None,
        }
        try:
            row["price"] = pricer.price(params, schedule)
        except LatticeError as exc:
            n_failed += 1
            row["error"] = f"{type(exc).__name__}: {exc}"
            logger.warning(
                "Pricing failed for %s K=%s T=%.6f: %s",
                params.option_type,
                params.strike,
                params.time_to_expiry,
                exc,
            )
        rows.append(row)

    logger.info("Priced %d options (%d failed)", len(rows), n_failed)
    frame = pd.DataFrame(rows, columns=BATCH_COLUMNS)
    frame["price"] = pd.to_numeric(frame["price"], errors="coerce")
    return frame
