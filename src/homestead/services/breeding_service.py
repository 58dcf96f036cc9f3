"""Breeding Service for Homestead.

Once per turn every household either advances its pregnancy or, when two
fertile adults share it and its child slot is free, rolls for a new one.
The chance grows with each consecutive attempt.  A newborn inherits a copy of
every card its parents own.
"""

import logging

from homestead.domain.enums import GrowthStage, HouseSlot, Job
from homestead.domain.models import Household, MatchState, Unit
from homestead.domain.notifications import ChildBorn, NotificationBus
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.interfaces import IDeckService
from homestead.services.household_service import HouseholdService
from homestead.services.unit_service import UnitService
from homestead.utils.rng import RandomSource

logger = logging.getLogger(__name__)


class BreedingService:
    """Service for fertility rolls, pregnancies and births."""

    def __init__(
        self,
        state: MatchState,
        bus: NotificationBus,
        rng: RandomSource,
        units: UnitService,
        households: HouseholdService,
        *,
        deck: IDeckService | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.bus = bus
        self.rng = rng
        self.units = units
        self.households = households
        self.deck = deck
        self.rules = rules

    def process_breeding(self) -> None:
        for household in list(self.state.households.values()):
            if household.pregnant:
                self._advance_pregnancy(household)
            else:
                self._attempt_conception(household)

    def can_breed(self, household: Household) -> bool:
        """Two fertile adults and a free child slot."""
        if not household.has_two_adults() or not household.has_empty_child_slot():
            return False
        parents = self._parents(household)
        if parents is None:
            return False
        return all(parent.can_breed() for parent in parents)

    def _attempt_conception(self, household: Household) -> None:
        if not self.can_breed(household):
            household.fertility_counter = 0
            return
        household.fertility_counter += 1
        chance = self.rules.breeding.fertility_chance(household.fertility_counter)
        roll = self.rng.randrange(100)
        logger.debug(
            "%s fertility attempt %s: roll=%s chance=%s",
            household.name,
            household.fertility_counter,
            roll,
            chance,
        )
        if roll < chance:
            self.households.start_pregnancy(household.id)

    def _advance_pregnancy(self, household: Household) -> None:
        parents = self._parents(household)
        if parents is None:
            logger.warning("%s lost a parent during pregnancy", household.name)
            self.households.cancel_pregnancy(household.id)
            return
        if any(parent.stage is GrowthStage.OLD for parent in parents):
            self.households.cancel_pregnancy(household.id)
            return

        household.pregnancy_turns += 1
        if household.pregnancy_turns < self.rules.breeding.pregnancy_turns:
            return
        if not household.has_empty_child_slot():
            logger.info("%s child slot is taken; birth postponed", household.name)
            return
        self._give_birth(household, parents)

    def _give_birth(self, household: Household, parents: tuple[Unit, Unit]) -> Unit:
        child = self.units.create_unit(
            self.units.generate_unit_name(),
            Job.PAWN,
            GrowthStage.CHILD,
            grant_starting_cards=False,
        )
        self.households.place_unit(child.id, household.id, HouseSlot.CHILD)
        household.pregnant = False
        household.pregnancy_turns = 0
        household.fertility_counter = 0
        self._inherit_cards(child, parents)
        logger.info("%s was born in %s", child.name, household.name)
        self.bus.publish(ChildBorn(unit_id=child.id, name=child.name))
        return child

    def _inherit_cards(self, child: Unit, parents: tuple[Unit, Unit]) -> None:
        if self.deck is None:
            logger.warning("no deck collaborator; inheritance skipped")
            return
        for parent in parents:
            for card_id in list(parent.owned_card_ids):
                found = self.state.find_card(card_id)
                if found is None:
                    logger.warning("inherited card %s not found", card_id)
                    continue
                self.deck.add_card_to_deck(found[1].card_id, child.id)

    def _parents(self, household: Household) -> tuple[Unit, Unit] | None:
        first = self.state.units.get(household.adult_a) if household.adult_a is not None else None
        second = self.state.units.get(household.adult_b) if household.adult_b is not None else None
        if first is None or second is None:
            return None
        return first, second
