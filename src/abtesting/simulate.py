"""
Synthetic visitor traffic for running experiments.

Stands in for real traffic on the dashboard: each tick adds a batch of
visitors to every variant in proportion to its traffic split, converting
at a randomized 8-14% baseline with a small per-variant jitter.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .schema import Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulatorConfig:
    """Parameters for one simulated traffic tick."""
    min_batch: int = 20
    max_batch: int = 70
    min_base_rate: float = 0.08
    max_base_rate: float = 0.14
    jitter: float = 0.02  # +/- applied to the base rate
    seed: Optional[int] = None

    def __post_init__(self):
        if self.min_batch < 0 or self.max_batch < self.min_batch:
            raise ValueError(
                f"Invalid batch range [{self.min_batch}, {self.max_batch}]"
            )
        if not 0 <= self.min_base_rate <= self.max_base_rate <= 1:
            raise ValueError(
                f"Invalid base rate range [{self.min_base_rate}, {self.max_base_rate}]"
            )


def draw_traffic(
    variant: Variant,
    rng: np.random.Generator,
    config: SimulatorConfig,
) -> Tuple[int, int]:
    """
    Draw one tick of new traffic for a variant.

    Returns:
        Tuple of (new_visitors, new_conversions), both non-negative and
        conversions never exceeding visitors
    """
    batch = rng.uniform(config.min_batch, config.max_batch)
    new_visitors = int(np.floor(variant.traffic_percent / 100 * batch))

    base_rate = rng.uniform(config.min_base_rate, config.max_base_rate)
    rate = np.clip(base_rate + rng.uniform(-config.jitter, config.jitter), 0, 1)
    new_conversions = int(np.floor(new_visitors * rate))

    return max(new_visitors, 0), min(max(new_conversions, 0), max(new_visitors, 0))


def simulate_tick(
    variant: Variant,
    rng: np.random.Generator,
    config: SimulatorConfig,
) -> None:
    """Add one tick of simulated traffic to a variant in place."""
    new_visitors, new_conversions = draw_traffic(variant, rng, config)
    variant.visitors += new_visitors
    variant.conversions += new_conversions
    logger.debug(
        f"Variant {variant.variant_id}: +{new_visitors} visitors, "
        f"+{new_conversions} conversions"
    )
