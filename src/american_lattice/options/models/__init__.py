"""Lattice construction and valuation models."""

from .lattice import Lattice, PricingNode, build_lattice, round_down_cents
from .valuation import (
    LatticeValuation,
    american,
    evaluate_lattice,
    intrinsic_value,
    price_american,
)

__all__ = [
    "Lattice",
    "PricingNode",
    "build_lattice",
    "round_down_cents",
    "LatticeValuation",
    "american",
    "evaluate_lattice",
    "intrinsic_value",
    "price_american",
]
