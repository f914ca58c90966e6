"""Per-run record of ability levels and ownership."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from .catalog import AbilityData

NOT_ACQUIRED = -1


def _ability_id(ability: AbilityData | str) -> str:
    return ability if isinstance(ability, str) else ability.id


@dataclass
class ProgressionState:
    """Levels, held abilities and the ids an evolution consumed this run.

    ``acquired`` keeps acquisition order so restored runs rebuild their
    abilities in the order the player picked them.
    """

    levels: Dict[str, int] = field(default_factory=dict)
    acquired: List[str] = field(default_factory=list)
    removed: Set[str] = field(default_factory=set)

    def level_of(self, ability: AbilityData | str) -> int:
        return self.levels.get(_ability_id(ability), NOT_ACQUIRED)

    def is_acquired(self, ability: AbilityData | str) -> bool:
        return _ability_id(ability) in self.acquired

    def is_removed(self, ability: AbilityData | str) -> bool:
        return _ability_id(ability) in self.removed

    def set_level(self, ability: AbilityData | str, level: int) -> None:
        self.levels[_ability_id(ability)] = level

    def acquire(self, ability: AbilityData | str, level: int) -> None:
        ability_id = _ability_id(ability)
        self.levels[ability_id] = level
        if ability_id not in self.acquired:
            self.acquired.append(ability_id)

    def forget(self, ability: AbilityData | str) -> None:
        ability_id = _ability_id(ability)
        if ability_id in self.acquired:
            self.acquired.remove(ability_id)
        self.levels.pop(ability_id, None)

    def consume(self, ability: AbilityData | str) -> None:
        ability_id = _ability_id(ability)
        self.forget(ability_id)
        self.removed.add(ability_id)

    def clear(self) -> None:
        self.levels.clear()
        self.acquired.clear()
        self.removed.clear()

    def count_acquired(self, abilities: Iterable[AbilityData], *, active: bool) -> int:
        return sum(
            1 for ability in abilities if ability.is_active == active and self.is_acquired(ability)
        )

    def to_dict(self) -> dict:
        return {
            "levels": dict(self.levels),
            "acquired": list(self.acquired),
            "removed": sorted(self.removed),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgressionState":
        levels = {str(key): int(value) for key, value in dict(data.get("levels", {})).items()}
        # Held abilities without a level entry are dropped to keep acquired within levels.
        acquired: List[str] = []
        for ability_id in data.get("acquired", []):
            ability_id = str(ability_id)
            if ability_id in levels and ability_id not in acquired:
                acquired.append(ability_id)
        removed = {str(ability_id) for ability_id in data.get("removed", [])}
        for ability_id in removed:
            levels.pop(ability_id, None)
        acquired = [ability_id for ability_id in acquired if ability_id not in removed]
        return cls(levels=levels, acquired=acquired, removed=removed)


__all__ = ["NOT_ACQUIRED", "ProgressionState"]
