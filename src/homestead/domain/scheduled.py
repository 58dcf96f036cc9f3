"""Scheduled event dispatcher: economic validations, raids and the final battle."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .enums import EndState
from .models import MatchState
from .notifications import NotificationBus, ValidationResolved
from .rules_config import DEFAULT_RULES, RulesConfig

if TYPE_CHECKING:
    from homestead.interfaces import ILandService, IRaidService

logger = logging.getLogger(__name__)


def reward_land_name(state: MatchState) -> str:
    return f"Reward land {state.validations_passed}"


def run_scheduled_events(
    state: MatchState,
    bus: NotificationBus,
    *,
    end_match: Callable[[EndState], None],
    lands: ILandService | None = None,
    raids: IRaidService | None = None,
    rules: RulesConfig = DEFAULT_RULES,
    disable_end_checks: bool = False,
) -> None:
    """Fire every event scheduled on ``state.turn``.

    Validation runs first.  A failed validation ends the match and nothing
    else scheduled on the same turn resolves.  A raid follows, then the final
    battle, which always decides the match.
    """

    turn = state.turn

    required = rules.validation.requirement_for(turn)
    if required is not None:
        passed = state.gold >= required
        bus.publish(
            ValidationResolved(turn=turn, required=required, gold=state.gold, passed=passed)
        )
        if passed:
            state.validations_passed += 1
            logger.info("validation on turn %s passed (%s >= %s)", turn, state.gold, required)
            if lands is None:
                logger.warning("no land collaborator; validation reward skipped")
            else:
                lands.acquire_land(reward_land_name(state))
        elif disable_end_checks:
            logger.warning(
                "validation on turn %s failed (%s < %s); end checks disabled",
                turn,
                state.gold,
                required,
            )
        else:
            logger.info("validation on turn %s failed (%s < %s)", turn, state.gold, required)
            end_match(EndState.DEFEAT_VALIDATION)
            return

    if turn in rules.raid.turns:
        if raids is None:
            logger.warning("no raid collaborator; raid on turn %s skipped", turn)
        else:
            raids.process_raid(turn)

    if turn == rules.raid.final_battle_turn and not state.is_over:
        if raids is None:
            logger.warning("no raid collaborator; final battle skipped")
            return
        won = raids.process_final_battle()
        end_match(EndState.VICTORY if won else EndState.DEFEAT_BATTLE)
