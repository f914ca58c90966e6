"""Tests for the offerable ability pool."""
from __future__ import annotations

from progression.abilities.catalog import AbilityData, AbilityDatabase, EvolutionRequirement
from progression.abilities.eligibility import available_abilities, evolution_ready
from progression.abilities.state import ProgressionState


def _ability(ability_id: str, **kwargs) -> AbilityData:
    return AbilityData(id=ability_id, name=ability_id, levels_count=kwargs.pop("levels", 5), **kwargs)


def _catalog() -> AbilityDatabase:
    return AbilityDatabase(
        [
            _ability("sword", is_weapon=True),
            _ability("aura"),
            _ability("orb"),
            _ability("might", is_active=False),
            _ability("armor", is_active=False),
            _ability(
                "holy_sword",
                levels=3,
                is_weapon=True,
                is_evolution=True,
                evolution_requirements=(
                    EvolutionRequirement("sword", 4, True),
                    EvolutionRequirement("might", 2, True),
                ),
            ),
            _ability("coins", levels=1, is_active=False, is_endgame=True),
        ]
    )


def _ids(pool) -> list:
    return [ability.id for ability in pool]


def _pool(catalog, state, active=0, passive=0, active_cap=2, passive_cap=2, allows=None):
    if allows is None:
        return available_abilities(catalog, state, active, passive, active_cap, passive_cap)
    return available_abilities(catalog, state, active, passive, active_cap, passive_cap, allows)


def test_unacquired_weapons_and_endgame_are_not_offered() -> None:
    pool = _pool(_catalog(), ProgressionState())
    assert _ids(pool) == ["aura", "orb", "might", "armor"]


def test_acquired_weapon_can_be_upgraded() -> None:
    state = ProgressionState()
    state.acquire("sword", 1)
    assert "sword" in _ids(_pool(_catalog(), state, active=1))


def test_max_level_abilities_are_excluded() -> None:
    state = ProgressionState()
    state.acquire("aura", 4)
    state.acquire("might", 3)
    ids = _ids(_pool(_catalog(), state, active=1, passive=1))
    assert "aura" not in ids
    assert "might" in ids


def test_capacity_blocks_new_abilities_of_full_category() -> None:
    state = ProgressionState()
    state.acquire("sword", 1)
    state.acquire("aura", 0)
    ids = _ids(_pool(_catalog(), state, active=2, passive=0))
    assert "orb" not in ids
    assert {"sword", "aura", "might", "armor"} <= set(ids)

    state.acquire("might", 0)
    ids = _ids(_pool(_catalog(), state, active=2, passive=1, passive_cap=1))
    assert "armor" not in ids
    assert "might" in ids


def test_evolution_requires_every_prerequisite_at_level() -> None:
    catalog = _catalog()
    holy = catalog.get("holy_sword")
    state = ProgressionState()
    state.acquire("sword", 4)
    assert not evolution_ready(holy, state)
    state.acquire("might", 1)
    assert not evolution_ready(holy, state)
    assert "holy_sword" not in _ids(_pool(catalog, state, active=1, passive=1))
    state.set_level("might", 2)
    assert evolution_ready(holy, state)
    assert "holy_sword" in _ids(_pool(catalog, state, active=1, passive=1))


def test_evolution_ignores_capacity() -> None:
    state = ProgressionState()
    state.acquire("sword", 4)
    state.acquire("might", 2)
    ids = _ids(_pool(_catalog(), state, active=2, passive=2))
    assert "holy_sword" in ids


def test_level_without_acquisition_does_not_satisfy_evolution() -> None:
    state = ProgressionState(levels={"sword": 4, "might": 4}, acquired=["might"])
    assert "holy_sword" not in _ids(_pool(_catalog(), state, passive=1))


def test_removed_abilities_never_return() -> None:
    state = ProgressionState()
    state.consume("aura")
    state.consume("might")
    ids = _ids(_pool(_catalog(), state))
    assert "aura" not in ids
    assert "might" not in ids


def test_character_restriction_applies() -> None:
    ids = _ids(_pool(_catalog(), ProgressionState(), allows=lambda ability: ability.id != "orb"))
    assert "orb" not in ids
    assert "aura" in ids


def test_endgame_fallback_when_nothing_else_qualifies() -> None:
    catalog = _catalog()
    state = ProgressionState()
    for ability in catalog:
        if not ability.is_endgame:
            state.acquire(ability, ability.max_level)
    assert _ids(_pool(catalog, state, active=4, passive=2)) == ["coins"]


def test_empty_when_no_endgame_exists() -> None:
    catalog = AbilityDatabase([_ability("aura", levels=1)])
    state = ProgressionState()
    state.acquire("aura", 0)
    assert _pool(catalog, state, active=1) == []
