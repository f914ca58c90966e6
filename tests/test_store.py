"""Tests for progression state persistence."""
from __future__ import annotations

from progression.abilities.state import ProgressionState
from progression.save.store import JsonProgressionStore, MemoryProgressionStore


def test_json_store_round_trip(tmp_path) -> None:
    store = JsonProgressionStore(tmp_path / "saves" / "progression.json")
    assert store.load() == ProgressionState()

    state = ProgressionState()
    state.acquire("bow_shot", 3)
    state.acquire("swiftness", 1)
    state.consume("fire_aura")
    store.save(state)

    loaded = store.load()
    assert loaded.acquired == ["bow_shot", "swiftness"]
    assert loaded.level_of("bow_shot") == 3
    assert loaded.removed == {"fire_aura"}

    store.clear()
    assert not store.path.exists()
    assert store.load() == ProgressionState()


def test_json_store_recovers_from_corrupt_file(tmp_path) -> None:
    path = tmp_path / "progression.json"
    path.write_text("not json at all")
    assert JsonProgressionStore(path).load() == ProgressionState()
    path.write_text("[1, 2, 3]")
    assert JsonProgressionStore(path).load() == ProgressionState()


def test_restored_state_keeps_invariants() -> None:
    state = ProgressionState.from_dict(
        {
            "levels": {"bow_shot": 2, "might": 4},
            "acquired": ["bow_shot", "orphan", "bow_shot", "might"],
            "removed": ["might"],
        }
    )
    assert state.acquired == ["bow_shot"]
    assert state.levels == {"bow_shot": 2}
    assert state.removed == {"might"}


def test_memory_store_counts_flushes() -> None:
    store = MemoryProgressionStore()
    assert store.load() == ProgressionState()
    state = ProgressionState()
    state.acquire("orb", 0)
    store.save(state)
    store.save(state)
    assert store.saves == 2
    assert store.load().acquired == ["orb"]
    store.clear()
    assert store.payload is None
