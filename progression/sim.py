"""Headless run simulation for balancing offer weights and chest odds."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from progression.abilities.manager import AbilityManager
from progression.engine.logger import ChannelLogger


@dataclass
class RunSummary:
    levels: int = 0
    offers_taken: List[str] = field(default_factory=list)
    chest_tiers: List[int] = field(default_factory=list)
    gold: int = 0
    final_levels: Dict[str, int] = field(default_factory=dict)
    removed: List[str] = field(default_factory=list)


def simulate_run(
    manager: AbilityManager,
    levels: int,
    chest_every: int = 5,
    logger: Optional[ChannelLogger] = None,
) -> RunSummary:
    """Level up ``levels`` times, always taking the first offer.

    A chest is opened every ``chest_every`` levels while anything is still
    available. A pending first-weapon offer is resolved the same way.
    """

    summary = RunSummary()
    if not manager.state.acquired:
        weapons = manager.show_weapon_selection()
        if weapons:
            manager.accept(weapons[0])
            summary.offers_taken.append(weapons[0].id)

    for level in range(1, levels + 1):
        summary.levels = level
        offers = manager.on_level_up(level)
        if offers:
            manager.accept(offers[0])
            summary.offers_taken.append(offers[0].id)
        if chest_every > 0 and level % chest_every == 0 and manager.has_available_abilities():
            result = manager.open_chest()
            summary.chest_tiers.append(result.tier)
            summary.gold += result.gold

    summary.final_levels = {
        ability_id: manager.level_of(ability_id) for ability_id in manager.acquired_ids()
    }
    summary.removed = sorted(manager.state.removed)
    manager.telemetry.report(logger)
    return summary


__all__ = ["RunSummary", "simulate_run"]
