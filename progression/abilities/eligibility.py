"""Which abilities may currently be offered to the player."""
from __future__ import annotations

from typing import Callable, List

from .catalog import AbilityData, AbilityDatabase
from .state import ProgressionState

CharacterFilter = Callable[[AbilityData], bool]


def _allow_all(ability: AbilityData) -> bool:
    return True


def evolution_ready(ability: AbilityData, state: ProgressionState) -> bool:
    """True when every prerequisite is held at or above its required level."""

    for requirement in ability.evolution_requirements:
        if not state.is_acquired(requirement.ability_id):
            return False
        if state.level_of(requirement.ability_id) < requirement.required_level:
            return False
    return True


def is_offerable(
    ability: AbilityData,
    state: ProgressionState,
    active_count: int,
    passive_count: int,
    active_capacity: int,
    passive_capacity: int,
    character_allows: CharacterFilter = _allow_all,
) -> bool:
    if not character_allows(ability):
        return False
    if ability.is_endgame:
        return False
    if state.level_of(ability) >= ability.max_level:
        return False
    if state.is_removed(ability):
        return False

    if ability.is_evolution:
        return evolution_ready(ability, state)

    acquired = state.is_acquired(ability)
    if acquired:
        return True
    # Weapons are only handed out through the first-weapon offer.
    if ability.is_weapon:
        return False
    if ability.is_active:
        return active_count < active_capacity
    return passive_count < passive_capacity


def available_abilities(
    catalog: AbilityDatabase,
    state: ProgressionState,
    active_count: int,
    passive_count: int,
    active_capacity: int,
    passive_capacity: int,
    character_allows: CharacterFilter = _allow_all,
) -> List[AbilityData]:
    """Return the offerable pool in catalog order.

    When nothing qualifies the endgame abilities are returned unfiltered so a
    run that has maxed everything still has something to pick.
    """

    pool = [
        ability
        for ability in catalog
        if is_offerable(
            ability,
            state,
            active_count,
            passive_count,
            active_capacity,
            passive_capacity,
            character_allows,
        )
    ]
    if not pool:
        pool = catalog.endgame()
    return pool


__all__ = ["CharacterFilter", "available_abilities", "evolution_ready", "is_offerable"]
