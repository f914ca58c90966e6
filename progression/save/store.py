"""Persistence for per-run ability progression."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol

from progression.abilities.state import ProgressionState
from progression.engine.logger import ChannelLogger


class ProgressionStore(Protocol):
    def load(self) -> ProgressionState:
        ...

    def save(self, state: ProgressionState) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryProgressionStore:
    """Keeps the last flushed payload in memory."""

    def __init__(self, payload: Optional[dict] = None) -> None:
        self.payload: Optional[dict] = payload
        self.saves = 0

    def load(self) -> ProgressionState:
        if not self.payload:
            return ProgressionState()
        return ProgressionState.from_dict(self.payload)

    def save(self, state: ProgressionState) -> None:
        self.payload = state.to_dict()
        self.saves += 1

    def clear(self) -> None:
        self.payload = None


class JsonProgressionStore:
    """Stores progression as a JSON document next to the other save data."""

    def __init__(self, path: Path, logger: Optional[ChannelLogger] = None) -> None:
        self.path = Path(path)
        self._logger = logger

    def load(self) -> ProgressionState:
        if not self.path.exists():
            return ProgressionState()
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError:
            self._warn("Progression save %s is corrupt; starting fresh", self.path)
            return ProgressionState()
        if not isinstance(data, dict):
            self._warn("Progression save %s has unexpected shape; starting fresh", self.path)
            return ProgressionState()
        return ProgressionState.from_dict(data)

    def save(self, state: ProgressionState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(state.to_dict(), indent=2, sort_keys=True))
        tmp_path.replace(self.path)
        if self._logger and self._logger.enabled:
            self._logger.debug("Saved progression to %s", self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def _warn(self, msg: str, *args) -> None:
        if self._logger:
            self._logger.warning(msg, *args)


__all__ = ["JsonProgressionStore", "MemoryProgressionStore", "ProgressionStore"]
