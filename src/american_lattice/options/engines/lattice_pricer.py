"""Lattice pricing engines for American options with cash dividends."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from american_lattice.options.models.lattice import validate_steps
from american_lattice.options.models.valuation import american
from american_lattice.options.types import Dividend, LatticeConfig, OptionParameters


@dataclass(frozen=True)
class BinomialLatticePricer:
    """Single-lattice pricer with a fixed step count."""

    steps: int = 11
    early_exercise: bool = False

    def __post_init__(self) -> None:
        validate_steps(self.steps)

    def price(
        self, params: OptionParameters, dividends: Sequence[Dividend] = ()
    ) -> float:
        config = LatticeConfig(steps=self.steps, dividends=tuple(dividends))
        return american(params, config, early_exercise=self.early_exercise)


@dataclass(frozen=True)
class AveragedLatticePricer:
    """Average of the lattice prices at `steps` and `steps + 1`.

    Binomial prices oscillate between odd and even step counts; averaging two
    neighbouring lattices damps the oscillation at little extra cost.
    """

    steps: int = 12
    early_exercise: bool = False

    def __post_init__(self) -> None:
        validate_steps(self.steps)

    def price(
        self, params: OptionParameters, dividends: Sequence[Dividend] = ()
    ) -> float:
        schedule = tuple(dividends)
        first = american(
            params,
            LatticeConfig(steps=self.steps, dividends=schedule),
            early_exercise=self.early_exercise,
        )
        second = american(
            params,
            LatticeConfig(steps=self.steps + 1, dividends=schedule),
            early_exercise=self.early_exercise,
        )
        return (first + second) / 2
