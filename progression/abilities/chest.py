"""Tiered chest rewards weighted by remaining level headroom."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from progression.engine.logger import ChannelLogger

from .acquisition import AcquisitionController
from .catalog import AbilityData
from .state import ProgressionState

TIER_COUNTS: Tuple[int, ...] = (1, 3, 5)


@dataclass
class ChestResult:
    tier: int
    abilities: List[AbilityData]
    rolled_tier: int
    degraded: bool = False
    pool: List[AbilityData] = field(default_factory=list)
    gold: int = 0

    @property
    def count(self) -> int:
        return len(self.abilities)

    @property
    def empty(self) -> bool:
        return not self.abilities


def levels_left(ability: AbilityData, state: ProgressionState) -> int:
    left = ability.levels_count - state.level_of(ability) - 1
    if ability.is_endgame:
        # Endgame upgrades never raise the level, so each still offers one draw.
        return max(left, 1)
    return left


def roll_tier(
    total: int, tier3_chance: float, tier5_chance: float, rng: random.Random
) -> Tuple[int, int]:
    """Return ``(tier, target_count)``, trying the rarest tier first."""

    if total >= TIER_COUNTS[2] and rng.random() < tier5_chance:
        return 2, TIER_COUNTS[2]
    if total >= TIER_COUNTS[1] and rng.random() < tier3_chance:
        return 1, TIER_COUNTS[1]
    return 0, TIER_COUNTS[0]


def _prune_category(
    remaining: Dict[str, int],
    by_id: Dict[str, AbilityData],
    state: ProgressionState,
    selected: List[AbilityData],
    active: bool,
) -> List[str]:
    doomed = [
        ability_id
        for ability_id in remaining
        if by_id[ability_id].is_active == active
        and not state.is_acquired(ability_id)
        and by_id[ability_id] not in selected
    ]
    for ability_id in doomed:
        del remaining[ability_id]
    return doomed


def roll_chest(
    pool: Sequence[AbilityData],
    state: ProgressionState,
    active_count: int,
    passive_count: int,
    active_capacity: int,
    passive_capacity: int,
    tier3_chance: float,
    tier5_chance: float,
    rng: random.Random,
    logger: Optional[ChannelLogger] = None,
) -> ChestResult:
    """Roll a tier and draw its abilities without touching ``state``."""

    by_id: Dict[str, AbilityData] = {}
    remaining: Dict[str, int] = {}
    for ability in pool:
        left = levels_left(ability, state)
        if left > 0 and ability.id not in remaining:
            remaining[ability.id] = left
            by_id[ability.id] = ability

    rolled_tier, target = roll_tier(sum(remaining.values()), tier3_chance, tier5_chance, rng)
    tier = rolled_tier

    selected: List[AbilityData] = []
    while remaining and len(selected) < target:
        keys = list(remaining)
        ability = by_id[rng.choices(keys, weights=[remaining[key] for key in keys], k=1)[0]]

        if ability.is_evolution or ability in selected:
            selected.append(ability)
        else:
            selected.append(ability)
            if not state.is_acquired(ability):
                if ability.is_active:
                    active_count += 1
                    saturated = active_count == active_capacity
                else:
                    passive_count += 1
                    saturated = passive_count == passive_capacity
                if saturated:
                    pruned = _prune_category(remaining, by_id, state, selected, ability.is_active)
                    if pruned and logger and logger.enabled:
                        logger.debug("Capacity reached by %s; pruned %s", ability.id, pruned)

        remaining[ability.id] -= 1
        if remaining[ability.id] <= 0:
            del remaining[ability.id]

    degraded = False
    while len(selected) < target and not remaining and target > 0:
        degraded = True
        target = max(target - 2, 0)
        tier = max(tier - 1, 0)
        del selected[target:]

    if degraded and logger and logger.enabled:
        logger.info(
            "Chest short of tier %d; granted tier %d with %d abilities",
            rolled_tier,
            tier,
            len(selected),
        )
    return ChestResult(
        tier=tier,
        abilities=selected,
        rolled_tier=rolled_tier,
        degraded=degraded,
        pool=list(pool),
    )


def open_chest(
    pool: Sequence[AbilityData],
    controller: AcquisitionController,
    active_count: int,
    passive_count: int,
    active_capacity: int,
    passive_capacity: int,
    tier3_chance: float,
    tier5_chance: float,
    rng: random.Random,
    logger: Optional[ChannelLogger] = None,
) -> ChestResult:
    """Roll a chest from ``pool`` and grant every drawn ability."""

    result = roll_chest(
        pool,
        controller.state,
        active_count,
        passive_count,
        active_capacity,
        passive_capacity,
        tier3_chance,
        tier5_chance,
        rng,
        logger,
    )
    granted = []
    for ability in result.abilities:
        # An evolution drawn earlier in this chest may have consumed it.
        if controller.state.is_removed(ability):
            if logger is not None:
                logger.debug("Chest skipped %s: consumed by an evolution", ability.id)
            continue
        controller.grant(ability)
        granted.append(ability)
    result.abilities = granted
    return result


__all__ = ["ChestResult", "TIER_COUNTS", "levels_left", "open_chest", "roll_chest", "roll_tier"]
