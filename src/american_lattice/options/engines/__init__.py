"""Pricing engines used by batch and CLI callers."""

from .base import PriceModel
from .lattice_pricer import AveragedLatticePricer, BinomialLatticePricer

__all__ = [
    "PriceModel",
    "BinomialLatticePricer",
    "AveragedLatticePricer",
]
