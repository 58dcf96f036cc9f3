"""Population lifecycle rules: growth stages, combat power and old-age mortality.

The functions in this module only touch the units they are given.  Anything
that involves another subsystem (moving a grown child to an adult slot,
removing a dead unit, asking the player for a job) is handed back to the
caller as part of the returned report or delegated through a callback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from homestead.utils.rng import RandomSource

from .enums import GrowthStage
from .models import MatchState, Unit, UnitID
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)

NEXT_STAGE: dict[GrowthStage, GrowthStage] = {
    GrowthStage.CHILD: GrowthStage.YOUNG,
    GrowthStage.YOUNG: GrowthStage.MIDDLE,
    GrowthStage.MIDDLE: GrowthStage.OLD,
}


def combat_power(unit: Unit, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Return the combat power a unit contributes to defence."""

    if unit.stage is GrowthStage.CHILD:
        return 0
    combat = rules.combat
    base = combat.job_base_power(unit.job) + unit.promotion_level * combat.promotion_bonus_per_level
    if unit.stage is GrowthStage.OLD:
        return round(base * combat.old_age_multiplier)
    return base


def total_combat_power(state: MatchState, rules: RulesConfig = DEFAULT_RULES) -> int:
    return sum(combat_power(unit, rules) for unit in state.units.values())


@dataclass(slots=True)
class GrowthReport:
    """Outcome of one growth pass."""

    transitions: list[tuple[UnitID, GrowthStage, GrowthStage]] = field(default_factory=list)
    matured: list[UnitID] = field(default_factory=list)
    ran_away: list[UnitID] = field(default_factory=list)


def advance_growth(
    state: MatchState,
    rules: RulesConfig = DEFAULT_RULES,
    *,
    relocate: Callable[[Unit], bool] | None = None,
) -> GrowthReport:
    """Age every unit by one turn.

    Old units only accrue ``old_age_turns``.  Every other unit counts its stage
    down and moves to the next stage when the countdown runs out.  A child
    growing up gets the adult loyalty default and is handed to ``relocate``;
    when that returns ``False`` the unit is listed in ``ran_away`` and left for
    the caller to remove.  Children that did not run away are listed in
    ``matured`` and flagged as awaiting a job.

    Args:
        state: Match to age.
        rules: Rule set providing stage durations and loyalty defaults.
        relocate: Moves a grown child into an adult slot.  ``None`` skips the
            relocation with a warning.
    """

    report = GrowthReport()
    for unit_id in list(state.units):
        unit = state.units.get(unit_id)
        if unit is None:
            continue

        if unit.stage is GrowthStage.OLD:
            unit.old_age_turns += 1
            continue

        unit.stage_remaining_turns -= 1
        if unit.stage_remaining_turns > 0:
            continue

        old_stage = unit.stage
        new_stage = NEXT_STAGE[old_stage]
        unit.stage = new_stage
        unit.stage_remaining_turns = rules.growth.stage_duration(new_stage)
        report.transitions.append((unit.id, old_stage, new_stage))
        logger.debug("unit %s grew from %s to %s", unit.id, old_stage, new_stage)

        if new_stage is GrowthStage.OLD:
            unit.old_age_turns = 0
        elif new_stage is GrowthStage.YOUNG:
            unit.loyalty = rules.loyalty.adult_default
            if relocate is None:
                logger.warning("no household collaborator; unit %s keeps its child slot", unit.id)
            elif not relocate(unit):
                report.ran_away.append(unit.id)
                continue
            unit.awaiting_job = True
            report.matured.append(unit.id)

    return report


def roll_mortality(
    state: MatchState,
    rng: RandomSource,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[UnitID]:
    """Return the old units that die of old age this turn.

    Each old unit with a non-zero chance takes one draw in ``[0, 100)`` and
    dies when the draw is below its chance.
    """

    doomed: list[UnitID] = []
    for unit in list(state.units.values()):
        if unit.stage is not GrowthStage.OLD:
            continue
        chance = rules.growth.death_chance(unit.old_age_turns)
        if chance <= 0:
            continue
        draw = rng.randrange(100)
        logger.debug(
            "mortality roll for unit %s: draw=%s chance=%s", unit.id, draw, chance
        )
        if draw < chance:
            doomed.append(unit.id)
    return doomed
