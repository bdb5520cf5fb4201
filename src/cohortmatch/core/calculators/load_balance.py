"""Teacher load balance scoring."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LoadBalanceConfig:
    """Tiered load scores: the first tier whose bound covers the load wins."""

    tiers: tuple[tuple[int, float], ...] = ((10, 15.0), (20, 10.0), (30, 5.0))
    overflow_score: float = 0.0

    def __post_init__(self) -> None:
        self.tiers = tuple(sorted((int(bound), float(score)) for bound, score in self.tiers))


class LoadBalanceEvaluator:
    """Map a teacher's headcount onto a fixed-tier capacity score."""

    method = "load_balance"

    def __init__(self, *, config: LoadBalanceConfig | None = None) -> None:
        self._config = config or LoadBalanceConfig()

    @property
    def max_score(self) -> float:
        return max([score for _, score in self._config.tiers] + [self._config.overflow_score])

    def score(self, current_load: int) -> float:
        if current_load < 0:
            raise ValueError(f"current_load must be non-negative, got {current_load}")
        for bound, tier_score in self._config.tiers:
            if current_load <= bound:
                return tier_score
        return self._config.overflow_score
