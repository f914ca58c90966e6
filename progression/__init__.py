"""Ability progression: level-up offers, reward chests and evolutions."""

__version__ = "0.1.0"
