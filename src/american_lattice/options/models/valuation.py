"""Backward induction over a recombining price lattice."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from american_lattice.options.models.lattice import (
    Lattice,
    NodeKey,
    PricingNode,
    build_lattice,
)
from american_lattice.options.types import LatticeConfig, OptionParameters, OptionType

logger = logging.getLogger(__name__)


def intrinsic_value(spot: float, strike: float, option_type: OptionType) -> float:
    if option_type == OptionType.CALL:
        return max(spot - strike, 0.0)
    return max(strike - spot, 0.0)


def _value_nodes(
    lattice: Lattice,
    params: OptionParameters,
    early_exercise: bool,
) -> dict[NodeKey, float]:
    """Value every node reachable from the root, children before parents."""
    p = lattice.p
    pv_factor = lattice.pv_factor
    strike = params.strike
    option_type = params.option_type

    memo: dict[NodeKey, float] = {}
    stack: list[PricingNode] = [lattice.root]
    while stack:
        node = stack[-1]
        if node.key in memo:
            stack.pop()
            continue

        if node.is_leaf:
            memo[node.key] = intrinsic_value(node.spot, strike, option_type)
            stack.pop()
            continue

        up, down = node.up, node.down
        pending = [child for child in (up, down) if child.key not in memo]
        if pending:
            stack.extend(pending)
            continue

        value = (p * memo[up.key] + (1 - p) * memo[down.key]) * pv_factor
        if early_exercise:
            value = max(value, intrinsic_value(node.spot, strike, option_type))
        memo[node.key] = value
        stack.pop()

    return memo


def price_american(
    lattice: Lattice,
    params: OptionParameters,
    *,
    early_exercise: bool = False,
) -> float:
    """Value an option on a built lattice.

    Leaves pay the intrinsic value; interior nodes take the discounted
    one-step risk-neutral expectation of their children. Exercise before
    expiry is only compared at interior nodes when `early_exercise` is True.
    """
    memo = _value_nodes(lattice, params, early_exercise)
    return memo[lattice.root.key]


@dataclass(frozen=True)
class LatticeValuation:
    """Price together with the lattice and per-node values it came from."""

    price: float
    lattice: Lattice
    node_values: dict[NodeKey, float] = field(repr=False)

    def value_at(self, node: PricingNode) -> float:
        return self.node_values[node.key]


def evaluate_lattice(
    params: OptionParameters,
    config: LatticeConfig,
    *,
    early_exercise: bool = False,
) -> LatticeValuation:
    """Build a fresh lattice and return the price with its diagnostics."""
    lattice = build_lattice(params, config)
    node_values = _value_nodes(lattice, params, early_exercise)
    return LatticeValuation(
        price=node_values[lattice.root.key],
        lattice=lattice,
        node_values=node_values,
    )


def american(
    params: OptionParameters,
    config: LatticeConfig,
    *,
    early_exercise: bool = False,
) -> float:
    """Price an American put or call on a dividend-adjusted binomial lattice.

    Args:
        params: Option and market inputs.
        config: Step count and dividend schedule.
        early_exercise: If True, compare continuation against immediate
            exercise at every interior node.

    Returns:
        Present value for one option.

    Raises:
        InvalidConfiguration: If `config.steps < 1`.
        DegenerateLattice: If the lattice collapses (`u == d`).
    """
    lattice = build_lattice(params, config)
    price = price_american(lattice, params, early_exercise=early_exercise)
    logger.debug(
        "Priced %s K=%s T=%.6f steps=%d -> %.6f",
        params.option_type,
        params.strike,
        params.time_to_expiry,
        config.steps,
        price,
    )
    return price
