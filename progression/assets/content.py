"""Asset loading entry point."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from progression.abilities.catalog import AbilityDatabase

DEFAULT_ROOT = Path(__file__).resolve().parent


@dataclass
class CharacterData:
    id: str
    name: str
    starting_ability: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "CharacterData":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            starting_ability=data.get("startingAbility"),
        )

    @property
    def has_starting_ability(self) -> bool:
        return bool(self.starting_ability)


class CharacterDatabase:
    def __init__(self) -> None:
        self.characters: Dict[str, CharacterData] = {}

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
                character = CharacterData.from_dict(entry)
                self.characters[character.id] = character

    def get(self, character_id: str) -> CharacterData:
        return self.characters[character_id]


class ContentManager:
    def __init__(self, root: Path = DEFAULT_ROOT) -> None:
        self.root = root
        self.abilities = AbilityDatabase()
        self.characters = CharacterDatabase()

    def load(self) -> None:
        self.abilities.load_directory(self.root / "data" / "abilities")
        self.characters.load_directory(self.root / "data" / "characters")
        self.abilities.validate()


__all__ = ["CharacterData", "CharacterDatabase", "ContentManager"]
