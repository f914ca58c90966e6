"""Progression logging split into switchable channels.

Each subsystem writes through its own channel (``offers``, ``chest``,
``acquire``, ``save``). Channels map onto stdlib loggers under the
``progression`` namespace and can be muted from ``settings.json``::

    {"logLevel": "DEBUG", "logChannels": {"save": true, "offers": false}}
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from progression.engine.settings import read_settings

ROOT_NAME = "progression"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULT_CHANNELS = {
    "offers": True,
    "chest": True,
    "acquire": True,
    "save": False,
}


def _default_channels() -> Dict[str, bool]:
    return dict(DEFAULT_CHANNELS)


@dataclass
class LoggerConfig:
    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=_default_channels)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggerConfig":
        level_name = str(data.get("logLevel", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
        channels = _default_channels()
        overrides = data.get("logChannels", {})
        if isinstance(overrides, dict):
            channels.update({str(name): bool(flag) for name, flag in overrides.items()})
        return cls(level=level, channels=channels)

    @classmethod
    def from_settings(cls, settings_path: Optional[Path] = None) -> "LoggerConfig":
        return cls.from_dict(read_settings(settings_path))

    @classmethod
    def quiet(cls) -> "LoggerConfig":
        """Everything muted; used when no logger is injected."""

        return cls(level=logging.CRITICAL, channels=dict.fromkeys(DEFAULT_CHANNELS, False))


class ChannelLogger:
    """A stdlib logger that drops records while its channel is switched off."""

    def __init__(self, name: str, logger: logging.Logger, enabled: bool) -> None:
        self.name = name
        self.enabled = enabled
        self._logger = logger

    def log(self, level: int, msg: str, *args, **kwargs) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)

    def __repr__(self) -> str:
        state = "on" if self.enabled else "off"
        return f"ChannelLogger({self.name!r}, {state})"


class ProgressionLogger:
    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        config = config or LoggerConfig()
        logging.basicConfig(level=config.level, format=LOG_FORMAT, stream=sys.stdout)
        logging.getLogger(ROOT_NAME).setLevel(config.level)
        self._switches = dict(config.channels)
        self._channels: Dict[str, ChannelLogger] = {}

    def channel(self, name: str) -> ChannelLogger:
        channel = self._channels.get(name)
        if channel is None:
            # Channels missing from the config stay muted until switched on.
            enabled = self._switches.get(name, False)
            channel = ChannelLogger(name, logging.getLogger(f"{ROOT_NAME}.{name}"), enabled)
            self._channels[name] = channel
        return channel

    def set_enabled(self, name: str, enabled: bool) -> None:
        self._switches[name] = enabled
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return sorted(set(self._switches) | set(self._channels))


def init_logger(settings_path: Optional[Path] = None) -> ProgressionLogger:
    return ProgressionLogger(LoggerConfig.from_settings(settings_path))


def quiet_logger() -> ProgressionLogger:
    return ProgressionLogger(LoggerConfig.quiet())


__all__ = [
    "ChannelLogger",
    "DEFAULT_CHANNELS",
    "LoggerConfig",
    "ProgressionLogger",
    "init_logger",
    "quiet_logger",
]
