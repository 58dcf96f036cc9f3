"""Persistent effect ledger."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .enums import EffectKind
from .models import EffectID, MatchState, PersistentEffect

logger = logging.getLogger(__name__)


def add_effect(
    state: MatchState,
    kind: EffectKind,
    turns: int,
    value: int,
) -> PersistentEffect:
    """Register a new persistent effect.

    Raises:
        ValueError: If ``turns`` is not positive.
    """

    if turns <= 0:
        raise ValueError(f"turns must be positive, got {turns}")
    effect = PersistentEffect(
        id=EffectID(state.allocate_id()),
        kind=kind,
        remaining_turns=turns,
        value=value,
    )
    state.persistent_effects.append(effect)
    logger.info("added %s effect for %s turns (value %s)", kind, turns, value)
    return effect


def settle_effects(
    state: MatchState,
    credit: Callable[[int], object],
    debit: Callable[[int], object],
) -> int:
    """Apply every persistent effect once and age it by one turn.

    Entries are walked from the back so expired ones can be removed in place.
    A delayed payout fires only on the turn its countdown stands at one.

    Returns:
        Net gold change produced by the ledger this turn.
    """

    net = 0
    effects = state.persistent_effects
    for index in range(len(effects) - 1, -1, -1):
        effect = effects[index]
        if effect.kind is EffectKind.GOLD_PER_TURN:
            credit(effect.value)
            net += effect.value
        elif effect.kind is EffectKind.DELAYED_GOLD:
            if effect.remaining_turns == 1:
                credit(effect.value)
                net += effect.value
        elif effect.kind is EffectKind.MAINTENANCE_INCREASE:
            extra = state.maintenance_cost * effect.value // 100
            if extra:
                debit(extra)
                net -= extra

        effect.remaining_turns -= 1
        if effect.remaining_turns <= 0:
            del effects[index]
            logger.debug("effect %s expired", effect.id)
    return net
