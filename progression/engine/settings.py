"""Tunables for offer weighting, capacities and chest rolls."""
from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class OfferWeights:
    """Multipliers applied to a candidate's base weight of 1.0."""

    acquired: float = 2.0
    early_active: float = 1.5
    scarcity: float = 1.5
    evolution: float = 3.0
    required_for_evolution: float = 2.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OfferWeights":
        defaults = cls()
        return cls(
            acquired=float(data.get("acquired", defaults.acquired)),
            early_active=float(data.get("earlyActive", defaults.early_active)),
            scarcity=float(data.get("scarcity", defaults.scarcity)),
            evolution=float(data.get("evolution", defaults.evolution)),
            required_for_evolution=float(
                data.get("requiredForEvolution", defaults.required_for_evolution)
            ),
        )


@dataclass(frozen=True)
class ChestGold:
    base: int = 100
    per_tier: int = 50
    random: int = 50

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChestGold":
        defaults = cls()
        return cls(
            base=int(data.get("base", defaults.base)),
            per_tier=int(data.get("perTier", defaults.per_tier)),
            random=int(data.get("random", defaults.random)),
        )

    def roll(self, tier: int, rng: random.Random) -> int:
        bonus = rng.randrange(self.random) if self.random > 0 else 0
        return self.base + max(0, tier) * self.per_tier + bonus


@dataclass(frozen=True)
class ProgressionSettings:
    active_capacity: int = 5
    passive_capacity: int = 5
    chest_chance_tier3: float = 0.3
    chest_chance_tier5: float = 0.1
    weights: OfferWeights = field(default_factory=OfferWeights)
    chest_gold: ChestGold = field(default_factory=ChestGold)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressionSettings":
        defaults = cls()
        return cls(
            active_capacity=int(data.get("activeCapacity", defaults.active_capacity)),
            passive_capacity=int(data.get("passiveCapacity", defaults.passive_capacity)),
            chest_chance_tier3=_chance(data.get("chestChanceTier3", defaults.chest_chance_tier3)),
            chest_chance_tier5=_chance(data.get("chestChanceTier5", defaults.chest_chance_tier5)),
            weights=OfferWeights.from_dict(data.get("offerWeights", {})),
            chest_gold=ChestGold.from_dict(data.get("chestGold", {})),
        )

    @classmethod
    def from_settings(cls, settings_path: Optional[Path] = None) -> "ProgressionSettings":
        return cls.from_dict(read_settings(settings_path))


def read_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the settings.json mapping, or an empty one if it is missing or unreadable."""

    settings_path = settings_path or Path("settings.json")
    if not settings_path.exists():
        return {}
    try:
        data = json.loads(settings_path.read_text())
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def _chance(value: Any) -> float:
    return max(0.0, min(1.0, float(value)))


__all__ = ["ChestGold", "OfferWeights", "ProgressionSettings", "read_settings"]
