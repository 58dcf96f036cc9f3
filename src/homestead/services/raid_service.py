"""Raid Service for Homestead.

Raids compare the homestead's defence (unit combat power plus land bonuses)
against an enemy that grows stronger every turn.  A lost raid costs either a
share of the treasury or a kidnapped child.  The final battle is a single
pass/fail check against a fixed requirement.
"""

import logging

from homestead.domain.enums import DeathCause, GrowthStage, RaidDamage
from homestead.domain.lifecycle import total_combat_power
from homestead.domain.models import MatchState
from homestead.domain.notifications import FinalBattleResolved, NotificationBus, RaidResolved
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.interfaces import IGoldService, ILandService, IUnitService
from homestead.utils.rng import RandomSource

logger = logging.getLogger(__name__)


class RaidService:
    """Service for raids and the final battle."""

    def __init__(
        self,
        state: MatchState,
        bus: NotificationBus,
        rng: RandomSource,
        gold: IGoldService,
        units: IUnitService,
        *,
        lands: ILandService | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.bus = bus
        self.rng = rng
        self.gold = gold
        self.units = units
        self.lands = lands
        self.rules = rules

    def defense_power(self) -> int:
        """Unit combat power plus land bonuses."""
        land_power = self.lands.combat_bonus() if self.lands is not None else 0
        return total_combat_power(self.state, self.rules) + land_power

    def process_raid(self, turn: int) -> RaidResolved:
        """Resolve the raid on ``turn``.

        Args:
            turn: Turn the raid happens on; sets the enemy's power

        Returns:
            The published RaidResolved notification
        """
        enemy = self.rules.raid.enemy_power(turn)
        defense = self.defense_power()
        logger.info("raid on turn %s: enemy %s vs defense %s", turn, enemy, defense)
        if defense >= enemy:
            result = RaidResolved(turn=turn, enemy_power=enemy, defense_power=defense, victory=True)
        else:
            result = self._apply_damage(turn, enemy, defense)
        self.bus.publish(result)
        return result

    def process_final_battle(self) -> bool:
        required = self.rules.raid.final_battle_required_power
        defense = self.defense_power()
        victory = defense >= required
        logger.info("final battle: required %s vs defense %s", required, defense)
        self.bus.publish(
            FinalBattleResolved(required_power=required, defense_power=defense, victory=victory)
        )
        return victory

    def _apply_damage(self, turn: int, enemy: int, defense: int) -> RaidResolved:
        children = [unit for unit in self.state.units.values() if unit.stage is GrowthStage.CHILD]
        gold_loss = self.rng.randrange(2) == 0
        if gold_loss or not children:
            raid = self.rules.raid
            loss = max(-(-self.state.gold * raid.gold_loss_percent // 100), raid.min_gold_loss)
            self.gold.subtract_gold(loss)
            logger.info("raiders took %s gold", loss)
            return RaidResolved(
                turn=turn,
                enemy_power=enemy,
                defense_power=defense,
                victory=False,
                damage=RaidDamage.GOLD_LOSS,
                gold_lost=loss,
            )

        child = self.rng.choice(children)
        logger.info("raiders kidnapped %s", child.name)
        self.units.kill_unit(child.id, DeathCause.RAID)
        return RaidResolved(
            turn=turn,
            enemy_power=enemy,
            defense_power=defense,
            victory=False,
            damage=RaidDamage.CHILD_KIDNAPPED,
            kidnapped_unit_id=child.id,
        )
