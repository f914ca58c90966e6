"""Tests for settings, channel logging, telemetry and presentation events."""
from __future__ import annotations

import json
import logging
import random

import pytest

from progression.abilities.catalog import AbilityData
from progression.abilities.chest import ChestResult
from progression.engine.events import (
    CHEST_OPENED,
    OFFERS_READY,
    PygameEventPresenter,
)
from progression.engine.logger import DEFAULT_CHANNELS, LoggerConfig, ProgressionLogger
from progression.engine.settings import ChestGold, OfferWeights, ProgressionSettings
from progression.engine.telemetry import OfferTelemetry


def test_settings_default_when_file_missing(tmp_path) -> None:
    settings = ProgressionSettings.from_settings(tmp_path / "settings.json")
    assert settings == ProgressionSettings()
    assert settings.weights == OfferWeights()


def test_settings_read_from_json(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "activeCapacity": 3,
                "passiveCapacity": 4,
                "chestChanceTier3": 0.5,
                "chestChanceTier5": 1.7,
                "offerWeights": {"acquired": 4, "requiredForEvolution": 9},
                "chestGold": {"base": 10, "perTier": 5, "random": 0},
            }
        )
    )
    settings = ProgressionSettings.from_settings(path)
    assert settings.active_capacity == 3
    assert settings.passive_capacity == 4
    assert settings.chest_chance_tier3 == pytest.approx(0.5)
    assert settings.chest_chance_tier5 == pytest.approx(1.0)
    assert settings.weights.acquired == pytest.approx(4.0)
    assert settings.weights.required_for_evolution == pytest.approx(9.0)
    assert settings.weights.scarcity == pytest.approx(OfferWeights().scarcity)
    assert settings.chest_gold == ChestGold(base=10, per_tier=5, random=0)


def test_settings_fall_back_on_malformed_json(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{oops")
    assert ProgressionSettings.from_settings(path) == ProgressionSettings()


def test_chest_gold_roll() -> None:
    assert ChestGold(base=100, per_tier=50, random=0).roll(2, random.Random(1)) == 200
    rolled = ChestGold().roll(1, random.Random(1))
    assert 150 <= rolled < 200


def test_logger_channels_from_settings(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "debug", "logChannels": {"save": True, "offers": False}}))
    config = LoggerConfig.from_settings(path)
    assert config.level == logging.DEBUG
    logger = ProgressionLogger(config)
    assert logger.channel("save").enabled
    assert not logger.channel("offers").enabled
    assert logger.channel("chest").enabled == DEFAULT_CHANNELS["chest"]
    assert not logger.channel("unknown").enabled
    logger.set_enabled("unknown", True)
    assert logger.channel("unknown").enabled


def test_channel_logger_only_emits_when_enabled(caplog) -> None:
    logger = ProgressionLogger(LoggerConfig(level=logging.INFO, channels={"chest": True, "offers": False}))
    with caplog.at_level(logging.INFO, logger="progression"):
        logger.channel("chest").info("chest tier %d", 2)
        logger.channel("offers").info("should not appear")
    messages = [record.getMessage() for record in caplog.records]
    assert "chest tier 2" in messages
    assert "should not appear" not in messages


def test_telemetry_counts_and_snapshot() -> None:
    telemetry = OfferTelemetry()
    telemetry.record_level_up(3)
    telemetry.record_level_up(0)
    telemetry.record_sampling_fallback()
    telemetry.record_chest(2, 3, True)
    telemetry.record_chest(0, 0, True)
    telemetry.record_chest(1, 3, False)
    snapshot = telemetry.snapshot()
    assert snapshot.level_ups == 2
    assert snapshot.empty_pools == 1
    assert snapshot.sampling_fallbacks == 1
    assert snapshot.tier_rolls == {0: 1, 1: 1, 2: 1}
    assert snapshot.chest_degrades == 2
    assert snapshot.empty_chests == 1
    assert snapshot.degrade_rate == pytest.approx(2 / 3)
    telemetry.reset()
    assert telemetry.snapshot().chests == 0


def test_pygame_presenter_posts_events() -> None:
    posted = []
    presenter = PygameEventPresenter(post=posted.append)
    sword = AbilityData(id="sword", name="Sword", levels_count=5, is_weapon=True)
    might = AbilityData(id="might", name="Might", levels_count=5, is_active=False)

    presenter.show_offers([sword, might], True)
    presenter.show_chest(ChestResult(tier=1, abilities=[might, might, sword], rolled_tier=2, degraded=True, gold=180))

    offers, chest = posted
    assert OFFERS_READY != CHEST_OPENED
    assert offers.type == OFFERS_READY
    assert offers.abilities == ["sword", "might"]
    assert offers.upgrades is True
    assert chest.type == CHEST_OPENED
    assert chest.tier == 1
    assert chest.rolled_tier == 2
    assert chest.abilities == ["might", "might", "sword"]
    assert chest.gold == 180
