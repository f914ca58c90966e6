"""Counters for offer and chest outcomes, including degraded ones."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from progression.engine.logger import ChannelLogger

_TIERS: tuple[int, ...] = (0, 1, 2)


@dataclass(frozen=True)
class OfferTelemetrySnapshot:
    level_ups: int
    empty_pools: int
    sampling_fallbacks: int
    chests: int
    tier_rolls: Dict[int, int]
    chest_degrades: int
    empty_chests: int

    @property
    def degrade_rate(self) -> float:
        if self.chests <= 0:
            return 0.0
        return self.chest_degrades / self.chests


@dataclass
class OfferTelemetry:
    """Tracks how often offers and chests fall back or come up short."""

    level_ups: int = 0
    empty_pools: int = 0
    sampling_fallbacks: int = 0
    chests: int = 0
    tier_rolls: Dict[int, int] = field(default_factory=lambda: {tier: 0 for tier in _TIERS})
    chest_degrades: int = 0
    empty_chests: int = 0

    def record_level_up(self, offered: int) -> None:
        self.level_ups += 1
        if offered == 0:
            self.empty_pools += 1

    def record_sampling_fallback(self) -> None:
        self.sampling_fallbacks += 1

    def record_chest(self, rolled_tier: int, granted: int, degraded: bool) -> None:
        self.chests += 1
        self.tier_rolls[rolled_tier] = self.tier_rolls.get(rolled_tier, 0) + 1
        if degraded:
            self.chest_degrades += 1
        if granted == 0:
            self.empty_chests += 1

    def reset(self) -> None:
        self.level_ups = 0
        self.empty_pools = 0
        self.sampling_fallbacks = 0
        self.chests = 0
        self.tier_rolls = {tier: 0 for tier in _TIERS}
        self.chest_degrades = 0
        self.empty_chests = 0

    def snapshot(self) -> OfferTelemetrySnapshot:
        return OfferTelemetrySnapshot(
            level_ups=self.level_ups,
            empty_pools=self.empty_pools,
            sampling_fallbacks=self.sampling_fallbacks,
            chests=self.chests,
            tier_rolls=dict(self.tier_rolls),
            chest_degrades=self.chest_degrades,
            empty_chests=self.empty_chests,
        )

    def report(self, logger: ChannelLogger | None = None) -> None:
        if logger and logger.enabled:
            logger.info(
                "Offers: level_ups=%d empty=%d fallbacks=%d chests=%d tiers=%d/%d/%d degraded=%d empty=%d",
                self.level_ups,
                self.empty_pools,
                self.sampling_fallbacks,
                self.chests,
                self.tier_rolls.get(0, 0),
                self.tier_rolls.get(1, 0),
                self.tier_rolls.get(2, 0),
                self.chest_degrades,
                self.empty_chests,
            )


__all__ = ["OfferTelemetry", "OfferTelemetrySnapshot"]
