"""Loyalty Service for Homestead.

Adults lose loyalty every turn the treasury ends in deficit and regain some
when it does not.  An adult whose loyalty reaches zero deserts at the start
of the next turn.  Children are never affected.
"""

import logging

from homestead.domain.enums import DeathCause, GrowthStage
from homestead.domain.models import MatchState, UnitID
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.interfaces import IUnitService

logger = logging.getLogger(__name__)


class LoyaltyService:
    """Service for loyalty changes and desertions."""

    def __init__(
        self,
        state: MatchState,
        units: IUnitService,
        *,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.units = units
        self.rules = rules

    def process_loyalty(self) -> None:
        """Apply the deficit penalty or surplus bonus to every adult."""
        deficit = self.state.gold < 0
        loyalty = self.rules.loyalty
        change = loyalty.deficit_penalty if deficit else loyalty.surplus_bonus
        logger.debug("loyalty pass: gold=%s change=%+d", self.state.gold, change)
        for unit_id in list(self.state.units):
            self.change_loyalty(unit_id, change)

    def process_desertions(self) -> list[UnitID]:
        deserters = [
            unit.id
            for unit in self.state.units.values()
            if unit.stage is not GrowthStage.CHILD and unit.loyalty <= 0
        ]
        for unit_id in deserters:
            logger.info("unit %s deserted", unit_id)
            self.units.kill_unit(unit_id, DeathCause.DESERTION)
        return deserters

    def change_loyalty(self, unit_id: UnitID, amount: int) -> int | None:
        """Shift an adult's loyalty, clamped to ``[0, adult_default]``.

        Returns:
            The new loyalty, or None for unknown units and children
        """
        unit = self.state.units.get(unit_id)
        if unit is None or unit.stage is GrowthStage.CHILD:
            return None
        unit.loyalty = max(0, min(unit.loyalty + amount, self.rules.loyalty.adult_default))
        return unit.loyalty
