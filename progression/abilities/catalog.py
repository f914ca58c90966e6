"""Ability definitions and the evolution graph between them."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class CatalogError(RuntimeError):
    """Raised when ability data is inconsistent."""


@dataclass(frozen=True)
class EvolutionRequirement:
    """Prerequisite of an evolution and whether the evolution consumes it."""

    ability_id: str
    required_level: int = 0
    remove_after_evolution: bool = False

    @classmethod
    def from_dict(cls, data: Dict) -> "EvolutionRequirement":
        return cls(
            ability_id=data["ability"],
            required_level=int(data.get("level", 0)),
            remove_after_evolution=bool(data.get("removeAfterEvolution", False)),
        )


@dataclass(frozen=True)
class AbilityData:
    id: str
    name: str
    levels_count: int
    is_active: bool = True
    is_weapon: bool = False
    is_evolution: bool = False
    is_endgame: bool = False
    evolution_requirements: Tuple[EvolutionRequirement, ...] = ()
    characters: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict) -> "AbilityData":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            levels_count=int(data.get("levels", 1)),
            is_active=bool(data.get("active", True)),
            is_weapon=bool(data.get("weapon", False)),
            is_evolution=bool(data.get("evolution", False)),
            is_endgame=bool(data.get("endgame", False)),
            evolution_requirements=tuple(
                EvolutionRequirement.from_dict(entry)
                for entry in data.get("evolutionRequirements", [])
            ),
            characters=tuple(data.get("characters", [])),
        )

    @property
    def is_passive(self) -> bool:
        return not self.is_active

    @property
    def max_level(self) -> int:
        return self.levels_count - 1

    def allows_character(self, character: Optional[str]) -> bool:
        if not self.characters:
            return True
        return character is not None and character in self.characters

    def consumed_on_evolve(self) -> Iterator[str]:
        for requirement in self.evolution_requirements:
            if requirement.remove_after_evolution:
                yield requirement.ability_id


class AbilityDatabase:
    """Read-only ability catalog; iteration follows load order."""

    def __init__(self, abilities: Iterable[AbilityData] = ()) -> None:
        self.abilities: Dict[str, AbilityData] = {}
        self._order: List[str] = []
        self._duplicates: List[str] = []
        for ability in abilities:
            self.add(ability)

    def add(self, ability: AbilityData) -> None:
        if ability.id in self.abilities:
            self._duplicates.append(ability.id)
        else:
            self._order.append(ability.id)
        self.abilities[ability.id] = ability

    def load_directory(self, directory: Path) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.json")):
            try:
                data = json.loads(path.read_text())
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                data = [data]
            for entry in data:
                self.add(AbilityData.from_dict(entry))

    def get(self, ability_id: str) -> AbilityData:
        return self.abilities[ability_id]

    def __iter__(self) -> Iterator[AbilityData]:
        for ability_id in self._order:
            yield self.abilities[ability_id]

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, ability_id: object) -> bool:
        return ability_id in self.abilities

    def endgame(self) -> List[AbilityData]:
        return [ability for ability in self if ability.is_endgame]

    def evolution_partner(self, ability_id: str) -> Optional[str]:
        """Return the other requirement of the first evolution using ``ability_id``."""

        for ability in self:
            if not ability.is_evolution:
                continue
            requirement_ids = [req.ability_id for req in ability.evolution_requirements]
            if ability_id not in requirement_ids:
                continue
            for other in requirement_ids:
                if other != ability_id:
                    return other
        return None

    def validate(self) -> None:
        if self._duplicates:
            duplicates = ", ".join(sorted(set(self._duplicates)))
            raise CatalogError(f"Duplicate ability ids: {duplicates}")
        for ability in self:
            if ability.levels_count < 1:
                raise CatalogError(f"Ability '{ability.id}' must have at least one level")
            for requirement in ability.evolution_requirements:
                if requirement.ability_id not in self.abilities:
                    raise CatalogError(
                        f"Ability '{ability.id}' requires unknown ability '{requirement.ability_id}'"
                    )
                if requirement.ability_id == ability.id:
                    raise CatalogError(f"Ability '{ability.id}' cannot require itself")
                prerequisite = self.abilities[requirement.ability_id]
                if requirement.required_level > prerequisite.max_level:
                    raise CatalogError(
                        f"Ability '{ability.id}' requires level {requirement.required_level} "
                        f"of '{prerequisite.id}' which only has {prerequisite.levels_count} levels"
                    )


__all__ = ["AbilityData", "AbilityDatabase", "CatalogError", "EvolutionRequirement"]
