"""Homestead: turn-resolution core for a 60-turn economic survival deck game."""

__version__ = "0.1.0"
