"""Interface for option-pricing engines."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from american_lattice.options.types import Dividend, OptionParameters


@runtime_checkable
class PriceModel(Protocol):
    """Minimum pricing capability required by batch and CLI callers."""

    def price(
        self, params: OptionParameters, dividends: Sequence[Dividend] = ()
    ) -> float:
        """Return option value for one contract."""
