"""Granting, upgrading and evolving abilities."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from progression.engine.logger import ChannelLogger

from .catalog import AbilityData, AbilityDatabase
from .runtime import AbilityRuntime, NullRuntime
from .state import NOT_ACQUIRED, ProgressionState

if TYPE_CHECKING:
    from progression.save.store import ProgressionStore


class AcquisitionController:
    """Sole writer of a run's :class:`ProgressionState`.

    Every mutation is flushed to ``store`` straight away, and the live
    handles returned by the runtime are kept by ability id so upgrades and
    teardowns reach the right instance.
    """

    def __init__(
        self,
        catalog: AbilityDatabase,
        state: ProgressionState,
        runtime: Optional[AbilityRuntime] = None,
        store: Optional["ProgressionStore"] = None,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self.catalog = catalog
        self.state = state
        self.runtime = runtime or NullRuntime()
        self.store = store
        self.logger = logger
        self.handles: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def accept(self, ability: AbilityData, level: int = 0) -> bool:
        """Add ``ability`` at ``level``, consuming prerequisites of an evolution.

        Abilities consumed by an evolution stay gone for the rest of the run;
        accepting one is refused and returns False.
        """

        if self.state.is_removed(ability):
            self._log("Refused %s: consumed by an evolution", ability.id)
            return False
        if ability.is_evolution:
            for consumed_id in ability.consumed_on_evolve():
                if self.state.is_acquired(consumed_id):
                    self._consume(consumed_id)
        self.state.acquire(ability, level)
        self.handles[ability.id] = self.runtime.instantiate(ability, level)
        self._log("Acquired %s at level %d", ability.id, level)
        self.flush()
        return True

    def upgrade(self, ability: AbilityData) -> int:
        level = self.state.level_of(ability)
        # Endgame abilities are re-offered at a constant level.
        if not ability.is_endgame:
            level += 1
        level = max(level, 0)
        self.state.set_level(ability, level)
        self.runtime.upgrade(self.handles.get(ability.id), ability, level)
        self._log("Upgraded %s to level %d", ability.id, level)
        self.flush()
        return level

    def grant(self, ability: AbilityData) -> int:
        if self.state.is_acquired(ability):
            return self.upgrade(ability)
        if not self.accept(ability, 0):
            return NOT_ACQUIRED
        return 0

    # ------------------------------------------------------------------
    # Developer tools
    # ------------------------------------------------------------------
    def set_level(self, ability: AbilityData, level: int) -> bool:
        """Force ``ability`` to ``level`` within its range; False if unchanged."""

        level = max(0, min(level, ability.max_level))
        if self.state.level_of(ability) == level:
            return False
        self.state.set_level(ability, level)
        if self.state.is_acquired(ability):
            self.runtime.upgrade(self.handles.get(ability.id), ability, level)
        self.flush()
        return True

    def remove(self, ability: AbilityData) -> bool:
        if not self.state.is_acquired(ability):
            return False
        self.runtime.teardown(self.handles.pop(ability.id, None), ability)
        self.state.forget(ability)
        self._log("Removed %s", ability.id)
        self.flush()
        return True

    def flush(self) -> None:
        if self.store is not None:
            self.store.save(self.state)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _consume(self, ability_id: str) -> None:
        handle = self.handles.pop(ability_id, None)
        if ability_id in self.catalog:
            self.runtime.teardown(handle, self.catalog.get(ability_id))
        self.state.consume(ability_id)
        self._log("Evolution consumed %s", ability_id)

    def _log(self, msg: str, *args) -> None:
        if self.logger and self.logger.enabled:
            self.logger.info(msg, *args)


__all__ = ["AcquisitionController"]
