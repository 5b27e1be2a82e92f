"""Shared option-pricing dataclasses and aliases."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal, TypeAlias

from american_lattice.options.errors import MalformedInput


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


# Tolerant input type accepted at system boundaries (vendor data/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels and vendor codes to `OptionType`."""
    if isinstance(option_type, OptionType):
        return option_type
    label = str(option_type).strip()
    if label in ("C", "c"):
        return OptionType.CALL
    if label in ("P", "p"):
        return OptionType.PUT
    try:
        return OptionType(label.lower())
    except ValueError as exc:
        raise MalformedInput(
            f"Unable to parse {option_type!r} into put or call"
        ) from exc


def _require_finite(name: str, value: float) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(out):
        raise MalformedInput(f"{name} must be finite, got {value!r}")
    return out


@dataclass(frozen=True)
class OptionParameters:
    """Contract and market inputs for pricing one vanilla option.

    Units:
    - `time_to_expiry`: years from the valuation date
    - `volatility`: annualized, in decimals
    - `rate`: annualized risk-free rate, in decimals
    """

    spot: float
    strike: float
    time_to_expiry: float
    volatility: float
    rate: float
    option_type: OptionTypeInput

    def __post_init__(self) -> None:
        spot = _require_finite("spot", self.spot)
        strike = _require_finite("strike", self.strike)
        time_to_expiry = _require_finite("time_to_expiry", self.time_to_expiry)
        volatility = _require_finite("volatility", self.volatility)
        rate = _require_finite("rate", self.rate)

        if spot <= 0:
            raise MalformedInput("spot must be > 0")
        if strike <= 0:
            raise MalformedInput("strike must be > 0")
        if time_to_expiry <= 0:
            raise MalformedInput("time_to_expiry must be > 0")
        if volatility < 0:
            raise MalformedInput("volatility must be >= 0")

        object.__setattr__(self, "spot", spot)
        object.__setattr__(self, "strike", strike)
        object.__setattr__(self, "time_to_expiry", time_to_expiry)
        object.__setattr__(self, "volatility", volatility)
        object.__setattr__(self, "rate", rate)
        object.__setattr__(
            self, "option_type", normalize_option_type(self.option_type)
        )


@dataclass(frozen=True)
class Dividend:
    """Discrete cash dividend paid `time` years after the valuation date."""

    time: float
    amount: float

    def __post_init__(self) -> None:
        time = _require_finite("dividend time", self.time)
        amount = _require_finite("dividend amount", self.amount)
        if time < 0:
            raise MalformedInput("dividend time must be >= 0")
        if amount < 0:
            raise MalformedInput("dividend amount must be >= 0")
        object.__setattr__(self, "time", time)
        object.__setattr__(self, "amount", amount)


@dataclass(frozen=True)
class LatticeConfig:
    """Lattice resolution and the dividend schedule applied while building it.

    `dividends` may be given in any order; when several payments fall inside
    one time step only the first one in this order is applied.
    """

    steps: int
    dividends: tuple[Dividend, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        dividends: Iterable[Dividend] = self.dividends or ()
        object.__setattr__(self, "dividends", tuple(dividends))
