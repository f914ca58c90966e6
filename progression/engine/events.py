"""Bridges offer results onto the pygame event queue for the UI scenes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol, Sequence

import pygame

if TYPE_CHECKING:
    from progression.abilities.catalog import AbilityData
    from progression.abilities.chest import ChestResult


OFFERS_READY = pygame.event.custom_type()
CHEST_OPENED = pygame.event.custom_type()


class OfferPresenter(Protocol):
    def show_offers(self, abilities: Sequence["AbilityData"], upgrades: bool) -> None:
        ...

    def show_chest(self, result: "ChestResult") -> None:
        ...


class NullPresenter:
    def show_offers(self, abilities: Sequence["AbilityData"], upgrades: bool) -> None:
        pass

    def show_chest(self, result: "ChestResult") -> None:
        pass


def offers_event(abilities: Sequence["AbilityData"], upgrades: bool) -> pygame.event.Event:
    return pygame.event.Event(
        OFFERS_READY,
        abilities=[ability.id for ability in abilities],
        upgrades=upgrades,
    )


def chest_event(result: "ChestResult") -> pygame.event.Event:
    return pygame.event.Event(
        CHEST_OPENED,
        tier=result.tier,
        rolled_tier=result.rolled_tier,
        abilities=[ability.id for ability in result.abilities],
        pool=[ability.id for ability in result.pool],
        gold=result.gold,
    )


class PygameEventPresenter:
    """Posts offer and chest events; scenes pick them up in ``handle_event``.

    ``upgrades`` is False for the first-weapon offer and True for level-ups.
    """

    def __init__(self, post: Optional[Callable[[pygame.event.Event], object]] = None) -> None:
        self._post = post or pygame.event.post

    def show_offers(self, abilities: Sequence["AbilityData"], upgrades: bool) -> None:
        self._post(offers_event(abilities, upgrades))

    def show_chest(self, result: "ChestResult") -> None:
        self._post(chest_event(result))


__all__ = [
    "CHEST_OPENED",
    "NullPresenter",
    "OFFERS_READY",
    "OfferPresenter",
    "PygameEventPresenter",
    "chest_event",
    "offers_event",
]
