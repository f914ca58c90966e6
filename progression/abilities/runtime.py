"""Hooks through which gameplay owns what holding an ability does."""
from __future__ import annotations

from typing import Any, Protocol

from .catalog import AbilityData


class AbilityRuntime(Protocol):
    def instantiate(self, ability: AbilityData, level: int) -> Any:
        ...

    def upgrade(self, handle: Any, ability: AbilityData, level: int) -> None:
        ...

    def teardown(self, handle: Any, ability: AbilityData) -> None:
        ...


class NullRuntime:
    """Runtime that creates no live effects."""

    def instantiate(self, ability: AbilityData, level: int) -> Any:
        return None

    def upgrade(self, handle: Any, ability: AbilityData, level: int) -> None:
        pass

    def teardown(self, handle: Any, ability: AbilityData) -> None:
        pass


__all__ = ["AbilityRuntime", "NullRuntime"]
