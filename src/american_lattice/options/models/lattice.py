"""Recombining binomial lattice with discrete cash dividends."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from american_lattice.options.errors import DegenerateLattice, InvalidConfiguration
from american_lattice.options.types import Dividend, LatticeConfig, OptionParameters

logger = logging.getLogger(__name__)

NodeKey = tuple[int, float]


def round_down_cents(x: float) -> float:
    """Truncate a price to cent precision (floor, not round-to-nearest)."""
    return math.floor(x * 100) / 100


@dataclass(eq=False, slots=True)
class PricingNode:
    """One reachable (depth, spot) state of the lattice.

    Nodes are shared by every path that reaches them, so `up`/`down` may be
    referenced by several parents. `time` is measured in years from the
    valuation date.
    """

    spot: float
    depth: int
    time: float
    up: PricingNode | None = None
    down: PricingNode | None = None

    @property
    def key(self) -> NodeKey:
        return (self.depth, self.spot)

    @property
    def is_leaf(self) -> bool:
        return self.up is None


@dataclass(frozen=True)
class Lattice:
    """Built lattice plus the constants needed for backward induction.

    Attributes:
        root: Depth-0 node carrying the unrounded input spot.
        p: Risk-neutral up probability (not clamped).
        depth: Number of steps `n`; leaves sit at this depth.
        pv_factor: One-step discount factor `exp(-r * dt)`.
        dt: Elapsed years per step.
        u: Up factor.
        d: Down factor (`1 / u`).
        levels: Per-depth index `depth -> {spot -> node}` filled while building.
    """

    root: PricingNode
    p: float
    depth: int
    pv_factor: float
    dt: float
    u: float
    d: float
    levels: Mapping[int, Mapping[float, PricingNode]] = field(repr=False)

    def nodes_at(self, depth: int) -> list[PricingNode]:
        """Return the distinct nodes at `depth`, ordered by spot."""
        level = self.levels.get(depth, {})
        return [level[spot] for spot in sorted(level)]

    def level_spots(self, depth: int) -> np.ndarray:
        """Return the sorted spot prices of the nodes at `depth`."""
        return np.array(sorted(self.levels.get(depth, {})), dtype=float)

    @property
    def node_count(self) -> int:
        return sum(len(level) for level in self.levels.values())


def validate_steps(steps: int) -> int:
    """Return `steps` if it is an integer >= 1, else raise `InvalidConfiguration`."""
    if isinstance(steps, bool) or not isinstance(steps, int):
        raise InvalidConfiguration(f"steps must be an integer, got {steps!r}")
    if steps <= 0:
        raise InvalidConfiguration(f"steps must be >= 1 but was {steps}")
    return steps


def _step_dividends(
    dividends: tuple[Dividend, ...], steps: int, dt: float
) -> list[float]:
    """Cash amount paid during each step `(t_k, t_k + dt]`.

    Only the first matching dividend in schedule order is applied per step.
    """
    amounts: list[float] = []
    t_start = 0.0
    for step in range(steps):
        t_end = t_start + dt
        matches = [div for div in dividends if t_start < div.time <= t_end]
        if len(matches) > 1:
            logger.warning(
                "Step %d (%.6f, %.6f] holds %d dividends; applying %s and "
                "dropping %s",
                step,
                t_start,
                t_end,
                len(matches),
                matches[0],
                matches[1:],
            )
        amounts.append(matches[0].amount if matches else 0.0)
        t_start = t_end
    return amounts


def build_lattice(params: OptionParameters, config: LatticeConfig) -> Lattice:
    """Build the recombining price lattice for one pricing call.

    Args:
        params: Option and market inputs.
        config: Step count and dividend schedule.

    Returns:
        A freshly allocated `Lattice`.

    Raises:
        InvalidConfiguration: If `config.steps` is not an integer >= 1.
        DegenerateLattice: If the up and down factors are equal.
    """
    n = validate_steps(config.steps)

    t = params.time_to_expiry
    sigma = params.volatility
    r = params.rate

    u = math.exp(sigma * math.sqrt(t / n))
    d = 1 / u
    if u == d:
        raise DegenerateLattice(
            f"up and down factors coincide (u == d == {u}) for "
            f"volatility={sigma}, time_to_expiry={t}, steps={n}"
        )

    p = (1 + r * t / n - d) / (u - d)
    if not 0.0 <= p <= 1.0:
        logger.warning(
            "Risk-neutral probability p=%.6f lies outside [0, 1] "
            "(rate=%s, volatility=%s, steps=%d)",
            p,
            r,
            sigma,
            n,
        )

    dt = t / n
    pv_factor = math.exp(-r * dt)
    step_dividends = _step_dividends(config.dividends, n, dt)

    levels: dict[int, dict[float, PricingNode]] = {}

    def get_or_create(parent: PricingNode, factor: float) -> PricingNode:
        depth = parent.depth + 1
        dividend = step_dividends[parent.depth]
        spot = round_down_cents((parent.spot - dividend) * factor)
        level = levels.setdefault(depth, {})
        node = level.get(spot)
        if node is None:
            node = PricingNode(spot=spot, depth=depth, time=parent.time + dt)
            level[spot] = node
        return node

    root = PricingNode(spot=params.spot, depth=0, time=0.0)
    levels[0] = {root.spot: root}

    stack = [root]
    while stack:
        head = stack.pop()
        if head.depth >= n or head.up is not None:
            continue
        head.up = get_or_create(head, u)
        head.down = get_or_create(head, d)
        stack.append(head.up)
        stack.append(head.down)

    lattice = Lattice(
        root=root,
        p=p,
        depth=n,
        pv_factor=pv_factor,
        dt=dt,
        u=u,
        d=d,
        levels=MappingProxyType(
            {depth: MappingProxyType(level) for depth, level in levels.items()}
        ),
    )
    logger.debug(
        "Built lattice: steps=%d u=%.6f d=%.6f p=%.6f nodes=%d",
        n,
        u,
        d,
        p,
        lattice.node_count,
    )
    return lattice
