"""Unit Service for Homestead.

This module creates and removes units, offers and applies jobs to children
that grew up, and handles paid promotions during the purchase phase.
"""

import logging
import math
import string
from collections.abc import Mapping

from homestead.domain.cards import STARTING_CARDS
from homestead.domain.enums import DeathCause, GrowthStage, Job, Phase
from homestead.domain.models import MatchState, Unit, UnitID
from homestead.domain.notifications import NotificationBus, UnitDied
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.interfaces import IDeckService, IGoldService, IHouseholdService
from homestead.utils.rng import RandomSource

logger = logging.getLogger(__name__)

MAX_JOB_REROLLS = 10


class UnitService:
    """Service for the unit roster of a match."""

    def __init__(
        self,
        state: MatchState,
        bus: NotificationBus,
        rng: RandomSource,
        gold: IGoldService,
        *,
        deck: IDeckService | None = None,
        households: IHouseholdService | None = None,
        starting_cards: Mapping[Job, tuple[str, ...]] = STARTING_CARDS,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.bus = bus
        self.rng = rng
        self.gold = gold
        self.deck = deck
        self.households = households
        self.starting_cards = starting_cards
        self.rules = rules

    # --- Roster ----------------------------------------------------------------

    def create_unit(
        self,
        name: str,
        job: Job,
        stage: GrowthStage,
        *,
        grant_starting_cards: bool = True,
    ) -> Unit:
        """Add a new unit to the roster.

        Args:
            name: Display name
            job: Job of the unit
            stage: Initial growth stage
            grant_starting_cards: Add the job's starting cards to the deck

        Returns:
            The created unit, not yet placed in a household
        """
        loyalty = self.rules.loyalty
        unit = Unit(
            id=UnitID(self.state.allocate_id()),
            name=name,
            job=job,
            stage=stage,
            stage_remaining_turns=self.rules.growth.stage_duration(stage),
            loyalty=loyalty.child_default if stage is GrowthStage.CHILD else loyalty.adult_default,
        )
        self.state.units[unit.id] = unit
        if grant_starting_cards:
            self._grant_starting_cards(unit)
        logger.info("created unit %s (%s, %s)", unit.name, job, stage)
        return unit

    def kill_unit(self, unit_id: UnitID, cause: DeathCause) -> bool:
        """Remove a unit, its household slot and every card it owns.

        Args:
            unit_id: Unit to remove
            cause: Reported in the UnitDied notification

        Returns:
            False when the unit does not exist
        """
        unit = self.state.units.get(unit_id)
        if unit is None:
            logger.warning("kill_unit: unknown unit %s", unit_id)
            return False
        if unit.household_id is not None and self.households is not None:
            self.households.remove_unit_from_house(unit_id)
        self.state.remove_unit(unit_id)
        logger.info("unit %s died (%s)", unit.name, cause)
        self.bus.publish(UnitDied(unit_id=unit_id, name=unit.name, cause=cause))
        return True

    def generate_unit_name(self) -> str:
        """Return the next resident name: Resident A..Z, then Resident A2.."""
        count = len(self.state.units)
        letter = string.ascii_uppercase[count % 26]
        number = count // 26
        if number == 0:
            return f"Resident {letter}"
        return f"Resident {letter}{number + 1}"

    # --- Jobs ------------------------------------------------------------------

    def get_job_choices(self, unit_id: UnitID) -> list[Job]:
        """Offer Pawn plus two weighted random jobs that differ from each other."""
        first = self._roll_job()
        second = self._roll_job()
        attempts = 1
        while second == first and attempts < MAX_JOB_REROLLS:
            second = self._roll_job()
            attempts += 1
        choices = [Job.PAWN, first, second]
        logger.debug("job choices for unit %s: %s", unit_id, choices)
        return choices

    def select_job(self, unit_id: UnitID, job: Job) -> bool:
        unit = self.state.units.get(unit_id)
        if unit is None:
            logger.warning("select_job: unknown unit %s", unit_id)
            return False
        if not unit.awaiting_job:
            logger.warning("select_job rejected: unit %s is not awaiting a job", unit.name)
            return False
        if job is Job.NONE:
            logger.warning("select_job rejected: %s is not a job", job)
            return False
        unit.job = job
        unit.awaiting_job = False
        self._grant_starting_cards(unit)
        logger.info("unit %s became a %s", unit.name, job)
        return True

    # --- Promotion -------------------------------------------------------------

    def promotion_cost(self, unit_id: UnitID) -> int | None:
        """Return the discounted cost of the unit's next promotion, if any."""
        unit = self.state.units.get(unit_id)
        if unit is None:
            return None
        costs = self.rules.promotion.costs
        if unit.promotion_level >= len(costs):
            return None
        cost = costs[unit.promotion_level]
        discount = self.state.promotion_discount
        if discount > 0:
            cost = math.ceil(cost * (100 - discount) / 100)
        return cost

    def can_promote(self, unit_id: UnitID) -> bool:
        unit = self.state.units.get(unit_id)
        if unit is None or not unit.can_promote(self.rules.promotion.max_level):
            return False
        cost = self.promotion_cost(unit_id)
        return cost is not None and self.gold.has_enough(cost)

    def promote_unit(self, unit_id: UnitID, card_id: str | None = None) -> bool:
        """Pay for and apply one promotion level.

        Promotions are bought in the purchase phase, at most once per unit per
        turn.  ``card_id`` optionally adds a card owned by the unit.
        """
        if self.state.phase is not Phase.PURCHASE:
            logger.warning("promote_unit rejected in phase %s", self.state.phase)
            return False
        if not self.can_promote(unit_id):
            logger.warning("promote_unit rejected for unit %s", unit_id)
            return False
        cost = self.promotion_cost(unit_id)
        if cost is None or not self.gold.try_spend(cost):
            return False

        unit = self.state.units[unit_id]
        unit.promotion_level += 1
        unit.promoted_this_turn = True
        if card_id is not None:
            if self.deck is None:
                logger.warning("no deck collaborator; promotion card %s skipped", card_id)
            else:
                self.deck.add_card_to_deck(card_id, unit_id)
        logger.info("unit %s promoted to level %s for %s gold", unit.name, unit.promotion_level, cost)
        return True

    def _roll_job(self) -> Job:
        chances = self.rules.job_chances
        roll = self.rng.randrange(100)
        if roll < chances.queen:
            return Job.QUEEN
        if roll < chances.queen + chances.rook:
            return Job.ROOK
        if roll < chances.queen + chances.rook + chances.bishop:
            return Job.BISHOP
        return Job.KNIGHT

    def _grant_starting_cards(self, unit: Unit) -> None:
        card_ids = self.starting_cards.get(unit.job, ())
        if not card_ids:
            return
        if self.deck is None:
            logger.warning("no deck collaborator; starting cards for %s skipped", unit.name)
            return
        for card_id in card_ids:
            self.deck.add_card_to_deck(card_id, unit.id)
