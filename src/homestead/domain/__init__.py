"""Domain model for Homestead matches.

This package hosts the turn-resolution core.  It exposes:

* Dataclasses describing the match aggregate and its entities (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* The card, event and rule catalogs (see :mod:`cards`, :mod:`events`).
* Pure rule functions for the population lifecycle, the persistent effect
  ledger, scheduled events and end-of-match evaluation.
* The :class:`~homestead.domain.turn.TurnOrchestrator` that sequences a turn.

Everything here operates purely in-memory on one :class:`MatchState`.
"""

from . import (
    cards,
    decisions,
    endgame,
    enums,
    events,
    ledger,
    lifecycle,
    models,
    notifications,
    rules_config,
    scheduled,
    turn,
)

__all__ = [
    "cards",
    "decisions",
    "endgame",
    "enums",
    "events",
    "ledger",
    "lifecycle",
    "models",
    "notifications",
    "rules_config",
    "scheduled",
    "turn",
]
