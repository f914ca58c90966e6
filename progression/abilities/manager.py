"""Run-level ability progression: level-up offers, chests and acquisition."""
from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from progression.engine.events import NullPresenter, OfferPresenter
from progression.engine.logger import ProgressionLogger, quiet_logger
from progression.engine.settings import ProgressionSettings
from progression.engine.telemetry import OfferTelemetry

from .acquisition import AcquisitionController
from .catalog import AbilityData, AbilityDatabase
from .chest import ChestResult, open_chest
from .eligibility import available_abilities
from .runtime import AbilityRuntime
from .sampler import sample_offers, weapon_selection
from .state import ProgressionState

if TYPE_CHECKING:
    from progression.assets.content import CharacterData
    from progression.save.store import ProgressionStore

CharacterRestriction = Callable[[AbilityData, Optional[str]], bool]
PresetEntry = Tuple[str, int]


def default_character_restriction(ability: AbilityData, character: Optional[str]) -> bool:
    return ability.allows_character(character)


class AbilityManager:
    """Owns one run's progression and serializes every change through it.

    Callers must not invoke ``on_level_up``, ``open_chest`` or ``accept``
    concurrently for the same run.
    """

    def __init__(
        self,
        catalog: AbilityDatabase,
        settings: Optional[ProgressionSettings] = None,
        *,
        store: Optional["ProgressionStore"] = None,
        runtime: Optional[AbilityRuntime] = None,
        presenter: Optional[OfferPresenter] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[ProgressionLogger] = None,
        telemetry: Optional[OfferTelemetry] = None,
        character_restriction: CharacterRestriction = default_character_restriction,
    ) -> None:
        self.catalog = catalog
        self.settings = settings or ProgressionSettings()
        self.store = store
        self.presenter = presenter or NullPresenter()
        self.rng = rng or random.Random()
        self.telemetry = telemetry or OfferTelemetry()
        self.character_restriction = character_restriction
        self.character: Optional["CharacterData"] = None

        logger = logger or quiet_logger()
        self._offers_log = logger.channel("offers")
        self._chest_log = logger.channel("chest")
        self._save_log = logger.channel("save")

        self.state = ProgressionState()
        self.controller = AcquisitionController(
            catalog,
            self.state,
            runtime=runtime,
            store=store,
            logger=logger.channel("acquire"),
        )

    # ------------------------------------------------------------------
    # Run setup
    # ------------------------------------------------------------------
    def init_run(
        self,
        character: Optional["CharacterData"] = None,
        *,
        preset: Optional[Sequence[PresetEntry]] = None,
        reset: bool = False,
    ) -> List[AbilityData]:
        """Prepare progression for a new or resumed run.

        Returns the first-weapon offer when one was presented, otherwise an
        empty list.
        """

        self.character = character
        self.state.clear()
        self.controller.handles.clear()
        if reset and self.store is not None:
            self.store.clear()

        if preset is not None:
            for ability_id, level in preset:
                self.controller.accept(self.catalog.get(ability_id), level)
            return []

        if not reset and self.store is not None:
            if self._restore(self.store.load()):
                return []
        return self._start_fresh()

    def _restore(self, saved: ProgressionState) -> bool:
        self.state.levels.update(saved.levels)
        self.state.removed.update(saved.removed)
        restored = 0
        for ability_id in saved.acquired:
            if ability_id not in self.catalog:
                self._save_log.warning("Saved ability '%s' is not in the catalog", ability_id)
                self.state.levels.pop(ability_id, None)
                continue
            self.controller.accept(self.catalog.get(ability_id), saved.level_of(ability_id))
            restored += 1
        if restored and self._save_log.enabled:
            self._save_log.info("Restored %d abilities", restored)
        return restored > 0

    def _start_fresh(self) -> List[AbilityData]:
        character = self.character
        if character is not None and character.has_starting_ability:
            self.controller.accept(self.catalog.get(character.starting_ability), 0)
            return []
        return self.show_weapon_selection()

    def show_weapon_selection(self) -> List[AbilityData]:
        selected = weapon_selection(self.catalog, self.rng, self.character_allows)
        if selected:
            self.presenter.show_offers(selected, False)
        return selected

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def character_id(self) -> Optional[str]:
        return self.character.id if self.character is not None else None

    def character_allows(self, ability: AbilityData) -> bool:
        return self.character_restriction(ability, self.character_id)

    def active_count(self) -> int:
        return self._count(active=True)

    def passive_count(self) -> int:
        return self._count(active=False)

    def _count(self, *, active: bool) -> int:
        return sum(
            1
            for ability_id in self.state.acquired
            if ability_id in self.catalog and self.catalog.get(ability_id).is_active == active
        )

    def available_abilities(self) -> List[AbilityData]:
        return available_abilities(
            self.catalog,
            self.state,
            self.active_count(),
            self.passive_count(),
            self.settings.active_capacity,
            self.settings.passive_capacity,
            self.character_allows,
        )

    def has_available_abilities(self) -> bool:
        return bool(self.available_abilities())

    def is_acquired(self, ability_id: str) -> bool:
        return self.state.is_acquired(ability_id)

    def level_of(self, ability_id: str) -> int:
        return self.state.level_of(ability_id)

    def acquired_ids(self) -> List[str]:
        return list(self.state.acquired)

    def evolution_partner(self, ability_id: str) -> Optional[str]:
        return self.catalog.evolution_partner(ability_id)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------
    def on_level_up(self, level: int) -> List[AbilityData]:
        pool = self.available_abilities()
        offers = sample_offers(
            pool,
            self.state,
            self.catalog,
            level,
            self.active_count(),
            self.passive_count(),
            self.settings.weights,
            self.rng,
            telemetry=self.telemetry,
            logger=self._offers_log,
        )
        self.telemetry.record_level_up(len(offers))
        if not offers:
            self._offers_log.info("No abilities to offer at level %d", level)
            return offers
        if self._offers_log.enabled:
            self._offers_log.debug(
                "Level %d offers %s from pool of %d",
                level,
                [ability.id for ability in offers],
                len(pool),
            )
        self.presenter.show_offers(offers, True)
        return offers

    def accept(self, ability: AbilityData) -> int:
        """Apply a chosen offer; returns the ability's new level."""

        return self.controller.grant(ability)

    def open_chest(self) -> ChestResult:
        result = open_chest(
            self.available_abilities(),
            self.controller,
            self.active_count(),
            self.passive_count(),
            self.settings.active_capacity,
            self.settings.passive_capacity,
            self.settings.chest_chance_tier3,
            self.settings.chest_chance_tier5,
            self.rng,
            self._chest_log,
        )
        result.gold = self.settings.chest_gold.roll(result.tier, self.rng)
        self.telemetry.record_chest(result.rolled_tier, result.count, result.degraded)
        if result.empty:
            self._chest_log.warning("Chest opened with nothing left to grant")
        elif self._chest_log.enabled:
            self._chest_log.info(
                "Chest tier %d granted %s and %d gold",
                result.tier,
                [ability.id for ability in result.abilities],
                result.gold,
            )
        self.presenter.show_chest(result)
        return result

    # ------------------------------------------------------------------
    # Developer tools
    # ------------------------------------------------------------------
    def increase_level(self, ability: AbilityData) -> bool:
        if self.state.level_of(ability) >= ability.max_level:
            return False
        return self.controller.set_level(ability, self.state.level_of(ability) + 1)

    def decrease_level(self, ability: AbilityData) -> bool:
        if self.state.level_of(ability) <= 0:
            return False
        return self.controller.set_level(ability, self.state.level_of(ability) - 1)

    def remove_ability(self, ability: AbilityData) -> bool:
        return self.controller.remove(ability)


__all__ = ["AbilityManager", "CharacterRestriction", "default_character_restriction"]
