"""Calendar helpers turning dated dividends into lattice schedules.

Year fractions use a fixed 364-day year:

    years = (end - start) / 364 days
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TypeAlias

import pandas as pd

from american_lattice.options.errors import MalformedInput
from american_lattice.options.types import Dividend

logger = logging.getLogger(__name__)

YEAR_DAYS = 364

DateInput: TypeAlias = date | datetime | pd.Timestamp | str


def _to_timestamp(value: DateInput) -> pd.Timestamp:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MalformedInput(f"Failed to parse date: {value!r}")
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"Failed to parse date: {value!r}") from exc
    if pd.isna(ts):
        raise MalformedInput(f"Failed to parse date: {value!r}")
    return ts


def years_between(start: DateInput, end: DateInput) -> float:
    """Year fraction between two dates on a 364-day year (negative if end < start)."""
    delta = _to_timestamp(end) - _to_timestamp(start)
    return float(delta / pd.Timedelta(days=YEAR_DAYS))


@dataclass(frozen=True)
class HistoricalDividend:
    """Dividend identified by its ex-dividend date and absolute cash amount."""

    ex_date: DateInput
    amount: float


def schedule_from_history(
    history: Iterable[HistoricalDividend],
    valuation_date: DateInput,
    *,
    horizon: float | None = None,
) -> tuple[Dividend, ...]:
    """Map dated dividends onto year fractions from `valuation_date`.

    Payments dated before the valuation date are dropped, as are payments
    beyond `horizon` years when a horizon is given. The input order is kept.
    """
    schedule: list[Dividend] = []
    skipped = 0
    for item in history:
        t = years_between(valuation_date, item.ex_date)
        if t < 0 or (horizon is not None and t > horizon):
            skipped += 1
            continue
        schedule.append(Dividend(time=t, amount=item.amount))

    logger.debug(
        "Dividend schedule from %s: kept=%d skipped=%d",
        valuation_date,
        len(schedule),
        skipped,
    )
    return tuple(schedule)
