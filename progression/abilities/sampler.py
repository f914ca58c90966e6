"""Weighted level-up offers and the first-weapon pick."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from progression.engine.logger import ChannelLogger
from progression.engine.settings import OfferWeights
from progression.engine.telemetry import OfferTelemetry

from .catalog import AbilityData, AbilityDatabase
from .state import ProgressionState

OFFER_SIZE = 3
EARLY_LEVEL_LIMIT = 10


@dataclass(eq=False)
class Candidate:
    ability: AbilityData
    weight: float


def is_required_for_evolution(
    ability: AbilityData, state: ProgressionState, catalog: AbilityDatabase
) -> bool:
    """True if a held active, non-evolution ability lists ``ability`` as consumed on evolve."""

    for held_id in state.acquired:
        if held_id not in catalog:
            continue
        held = catalog.get(held_id)
        if not held.is_active or held.is_evolution:
            continue
        if ability.id in held.consumed_on_evolve():
            return True
    return False


def candidate_weight(
    ability: AbilityData,
    state: ProgressionState,
    catalog: AbilityDatabase,
    player_level: int,
    active_count: int,
    passive_count: int,
    weights: OfferWeights,
) -> float:
    weight = 1.0
    if state.is_acquired(ability):
        weight *= weights.acquired
    if ability.is_active:
        if player_level < EARLY_LEVEL_LIMIT:
            weight *= weights.early_active
        if passive_count > active_count:
            weight *= weights.scarcity
        if ability.is_evolution:
            weight *= weights.evolution
    else:
        if is_required_for_evolution(ability, state, catalog):
            weight *= weights.required_for_evolution
        if active_count > passive_count:
            weight *= weights.scarcity
    return weight


def weighted_pick(
    candidates: Sequence[Candidate],
    rng: random.Random,
    on_fallback: Optional[Callable[[], None]] = None,
) -> Candidate:
    total = sum(candidate.weight for candidate in candidates)
    if total > 0.0:
        roll = rng.random()
        progress = 0.0
        for candidate in candidates:
            progress += candidate.weight / total
            if roll <= progress:
                return candidate
    # Rounding left the roll unmatched.
    if on_fallback is not None:
        on_fallback()
    return rng.choice(list(candidates))


def sample_offers(
    pool: Sequence[AbilityData],
    state: ProgressionState,
    catalog: AbilityDatabase,
    player_level: int,
    active_count: int,
    passive_count: int,
    weights: OfferWeights,
    rng: random.Random,
    *,
    telemetry: Optional[OfferTelemetry] = None,
    logger: Optional[ChannelLogger] = None,
) -> List[AbilityData]:
    """Draw up to three distinct abilities from ``pool`` without replacement."""

    remaining = [
        Candidate(
            ability,
            candidate_weight(
                ability, state, catalog, player_level, active_count, passive_count, weights
            ),
        )
        for ability in pool
    ]

    def fallback() -> None:
        if telemetry is not None:
            telemetry.record_sampling_fallback()
        if logger and logger.enabled:
            logger.debug("Weighted pick missed; using uniform pick over %d", len(remaining))

    selected: List[AbilityData] = []
    while remaining and len(selected) < OFFER_SIZE:
        picked = weighted_pick(remaining, rng, fallback)
        remaining.remove(picked)
        selected.append(picked.ability)
    return selected


def weapon_selection(
    catalog: AbilityDatabase,
    rng: random.Random,
    character_allows: Callable[[AbilityData], bool],
) -> List[AbilityData]:
    """Up to three distinct starting weapons, uniformly drawn."""

    weapons = [
        ability
        for ability in catalog
        if ability.is_weapon and not ability.is_evolution and character_allows(ability)
    ]
    selected: List[AbilityData] = []
    while weapons and len(selected) < OFFER_SIZE:
        selected.append(weapons.pop(rng.randrange(len(weapons))))
    return selected


__all__ = [
    "Candidate",
    "EARLY_LEVEL_LIMIT",
    "OFFER_SIZE",
    "candidate_weight",
    "is_required_for_evolution",
    "sample_offers",
    "weapon_selection",
    "weighted_pick",
]
