"""Land Service for Homestead.

Lands provide houses and, once developed, route-specific bonuses.  Every
land yields one house; Villages add one more per level and Farms one more
from level 2.  Watchtowers add defence power.  The number of households is
kept in step with the total house bonus, up to the configured maximum.
"""

import logging

from homestead.domain.enums import LandType, Phase
from homestead.domain.models import Land, LandID, MatchState
from homestead.domain.notifications import LandAcquired, NotificationBus
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.interfaces import IGoldService
from homestead.services.household_service import HouseholdService

logger = logging.getLogger(__name__)

DEVELOPMENT_ROUTES: tuple[LandType, ...] = (
    LandType.FARM,
    LandType.VILLAGE,
    LandType.WATCHTOWER,
    LandType.CHAPEL,
    LandType.STUDY,
    LandType.SHOP,
)


class LandService:
    """Service for acquiring and developing lands."""

    def __init__(
        self,
        state: MatchState,
        bus: NotificationBus,
        gold: IGoldService,
        *,
        households: HouseholdService | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.bus = bus
        self.gold = gold
        self.households = households
        self.rules = rules

    def acquire_land(self, name: str | None = None, land_type: LandType = LandType.EMPTY) -> Land:
        land_id = LandID(self.state.allocate_id())
        land = Land(
            id=land_id,
            name=name or f"Land {len(self.state.lands) + 1}",
            land_type=land_type,
        )
        self.state.lands[land_id] = land
        logger.info("acquired %s", land.name)
        self.bus.publish(LandAcquired(land_id=land.id, name=land.name))
        self.sync_households()
        return land

    def develop_cost(self, land_id: LandID) -> int | None:
        land = self.state.lands.get(land_id)
        costs = self.rules.land.develop_costs
        if land is None or land.level >= self.rules.land.max_level or not costs:
            return None
        return costs[min(land.level, len(costs) - 1)]

    def develop_land(self, land_id: LandID, land_type: LandType = LandType.EMPTY) -> bool:
        """Raise a land by one level during the purchase phase.

        The first level picks the development route; later levels keep it.

        Args:
            land_id: Land to develop
            land_type: Route chosen when developing from level 0

        Returns:
            True when the land was developed and paid for
        """
        if self.state.phase is not Phase.PURCHASE:
            logger.warning("develop_land rejected in phase %s", self.state.phase)
            return False
        land = self.state.lands.get(land_id)
        cost = self.develop_cost(land_id)
        if land is None or cost is None:
            logger.warning("develop_land rejected: land %s cannot be developed", land_id)
            return False
        if land.level == 0 and land_type not in DEVELOPMENT_ROUTES:
            logger.warning("develop_land rejected: a route is required for %s", land.name)
            return False
        if not self.gold.try_spend(cost):
            logger.warning("develop_land rejected: %s gold needed", cost)
            return False

        if land.level == 0:
            land.land_type = land_type
        land.level += 1
        logger.info("developed %s to %s level %s", land.name, land.land_type, land.level)
        self.sync_households()
        return True

    def house_bonus(self, land: Land) -> int:
        bonus = 1
        if land.land_type is LandType.VILLAGE:
            bonus += land.level
        elif land.land_type is LandType.FARM and land.level >= 2:
            bonus += 1
        return bonus

    def total_house_bonus(self) -> int:
        return sum(self.house_bonus(land) for land in self.state.lands.values())

    def combat_bonus(self) -> int:
        """Return the defence power granted by developed lands."""
        powers = self.rules.land.watchtower_power
        total = 0
        for land in self.state.lands.values():
            if land.land_type is LandType.WATCHTOWER and land.level >= 1 and powers:
                total += powers[min(land.level, len(powers)) - 1]
        return total

    def sync_households(self) -> None:
        """Create households until they match the house bonus (capped)."""
        if self.households is None:
            logger.warning("no household service; house sync skipped")
            return
        target = min(self.total_house_bonus(), self.rules.match.max_houses)
        while len(self.state.households) < target:
            self.households.create_household()
