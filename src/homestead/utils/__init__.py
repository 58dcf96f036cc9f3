"""Utility functions for the Homestead core."""

from homestead.utils.rng import MatchRandom, RandomSource, ScriptedRandom

__all__ = [
    "MatchRandom",
    "RandomSource",
    "ScriptedRandom",
]
