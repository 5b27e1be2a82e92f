"""American option pricing on dividend-adjusted binomial lattices."""

from .batch import price_batch
from .dividends import (
    HistoricalDividend,
    schedule_from_history,
    years_between,
)
from .engines import AveragedLatticePricer, BinomialLatticePricer, PriceModel
from .errors import (
    DegenerateLattice,
    InvalidConfiguration,
    LatticeError,
    MalformedInput,
)
from .models import (
    Lattice,
    LatticeValuation,
    PricingNode,
    american,
    build_lattice,
    evaluate_lattice,
    intrinsic_value,
    price_american,
    round_down_cents,
)
from .types import (
    Dividend,
    LatticeConfig,
    OptionParameters,
    OptionType,
    OptionTypeInput,
    normalize_option_type,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "OptionParameters",
    "Dividend",
    "LatticeConfig",
    "normalize_option_type",
    "LatticeError",
    "InvalidConfiguration",
    "DegenerateLattice",
    "MalformedInput",
    "Lattice",
    "PricingNode",
    "LatticeValuation",
    "build_lattice",
    "round_down_cents",
    "price_american",
    "evaluate_lattice",
    "intrinsic_value",
    "american",
    "PriceModel",
    "BinomialLatticePricer",
    "AveragedLatticePricer",
    "HistoricalDividend",
    "years_between",
    "schedule_from_history",
    "price_batch",
]
