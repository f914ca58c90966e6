"""Ability catalog, eligibility, offer sampling, chests and acquisition."""

from .acquisition import AcquisitionController
from .catalog import AbilityData, AbilityDatabase, CatalogError, EvolutionRequirement
from .chest import ChestResult, open_chest, roll_chest
from .eligibility import available_abilities
from .manager import AbilityManager
from .runtime import AbilityRuntime, NullRuntime
from .sampler import sample_offers, weapon_selection
from .state import ProgressionState

__all__ = [
    "AbilityData",
    "AbilityDatabase",
    "AbilityManager",
    "AbilityRuntime",
    "AcquisitionController",
    "CatalogError",
    "ChestResult",
    "EvolutionRequirement",
    "NullRuntime",
    "ProgressionState",
    "available_abilities",
    "open_chest",
    "roll_chest",
    "sample_offers",
    "weapon_selection",
]
