"""Household Service for Homestead.

This module manages houses and their three slots: two adult slots and one
child slot.  It also owns the pregnancy flags the breeding service drives.
"""

import logging

from homestead.domain.enums import GrowthStage, HouseSlot
from homestead.domain.models import Household, HouseholdID, MatchState, Unit, UnitID

logger = logging.getLogger(__name__)

ADULT_SLOTS = (HouseSlot.ADULT_A, HouseSlot.ADULT_B)


class HouseholdService:
    """Service for household slots and pregnancy state."""

    def __init__(self, state: MatchState):
        self.state = state

    def create_household(self, name: str | None = None) -> Household:
        household_id = HouseholdID(self.state.allocate_id())
        household = Household(
            id=household_id,
            name=name or f"House {len(self.state.households) + 1}",
        )
        self.state.households[household_id] = household
        logger.debug("created household %s", household.name)
        return household

    def residents(self, household_id: HouseholdID) -> list[Unit]:
        household = self.state.households.get(household_id)
        if household is None:
            return []
        return [
            self.state.units[unit_id]
            for unit_id in household.resident_ids()
            if unit_id in self.state.units
        ]

    def household_of(self, unit_id: UnitID) -> Household | None:
        """Return the household a unit lives in, clearing dangling references."""
        unit = self.state.units.get(unit_id)
        if unit is None or unit.household_id is None:
            return None
        household = self.state.households.get(unit.household_id)
        if household is None or household.slot_of(unit_id) is None:
            logger.warning("unit %s refers to missing household %s", unit.name, unit.household_id)
            unit.household_id = None
            return None
        return household

    # --- Placement -------------------------------------------------------------

    def place_unit(self, unit_id: UnitID, household_id: HouseholdID, slot: HouseSlot) -> bool:
        """Put a unit into an empty slot that suits its stage.

        Children only fit the child slot; adults only fit adult slots.  A unit
        already housed elsewhere is moved out first.  The fertility counter of
        the receiving household restarts.
        """
        unit = self.state.units.get(unit_id)
        household = self.state.households.get(household_id)
        if unit is None or household is None:
            logger.warning("place_unit: unknown unit %s or household %s", unit_id, household_id)
            return False
        if not self._slot_fits(unit, slot):
            logger.warning("place_unit: %s (%s) cannot use slot %s", unit.name, unit.stage, slot)
            return False
        if household.get_slot(slot) is not None:
            logger.warning("place_unit: %s.%s is occupied", household.name, slot)
            return False

        current = self.household_of(unit_id)
        if current is not None:
            self._clear_slot(current, unit)

        household.set_slot(slot, unit_id)
        unit.household_id = household.id
        household.fertility_counter = 0
        logger.debug("placed %s in %s.%s", unit.name, household.name, slot)
        return True

    def auto_place_unit(self, unit_id: UnitID) -> bool:
        """Place a unit in the first free slot that suits it."""
        unit = self.state.units.get(unit_id)
        if unit is None:
            return False
        slots = (HouseSlot.CHILD,) if unit.stage is GrowthStage.CHILD else ADULT_SLOTS
        for household in self.state.households.values():
            for slot in slots:
                if household.get_slot(slot) is None:
                    return self.place_unit(unit_id, household.id, slot)
        logger.warning("auto_place_unit: no free slot for %s", unit.name)
        return False

    def remove_unit_from_house(self, unit_id: UnitID) -> bool:
        """Clear a unit's slot, cancelling any pregnancy in that household."""
        unit = self.state.units.get(unit_id)
        if unit is None:
            return False
        household = self.household_of(unit_id)
        if household is None:
            return False
        self._clear_slot(household, unit)
        return True

    def relocate_to_adult_slot(self, unit_id: UnitID) -> bool:
        """Move a grown child to the first empty adult slot in any household.

        Returns:
            False when no adult slot is free anywhere; the unit stays where it was
        """
        unit = self.state.units.get(unit_id)
        if unit is None:
            logger.warning("relocate_to_adult_slot: unknown unit %s", unit_id)
            return False
        for household in self.state.households.values():
            for slot in ADULT_SLOTS:
                if household.get_slot(slot) is None:
                    return self.place_unit(unit_id, household.id, slot)
        logger.info("no adult slot free for %s", unit.name)
        return False

    # --- Pregnancy -------------------------------------------------------------

    def start_pregnancy(self, household_id: HouseholdID) -> bool:
        household = self.state.households.get(household_id)
        if household is None or household.pregnant:
            return False
        household.pregnant = True
        household.pregnancy_turns = 0
        logger.info("%s is expecting", household.name)
        return True

    def cancel_pregnancy(self, household_id: HouseholdID) -> bool:
        household = self.state.households.get(household_id)
        if household is None or not household.pregnant:
            return False
        household.pregnant = False
        household.pregnancy_turns = 0
        logger.info("pregnancy in %s cancelled", household.name)
        return True

    def _clear_slot(self, household: Household, unit: Unit) -> None:
        slot = household.slot_of(unit.id)
        if slot is not None:
            household.set_slot(slot, None)
        unit.household_id = None
        if household.pregnant:
            self.cancel_pregnancy(household.id)
        household.fertility_counter = 0

    @staticmethod
    def _slot_fits(unit: Unit, slot: HouseSlot) -> bool:
        if unit.stage is GrowthStage.CHILD:
            return slot is HouseSlot.CHILD
        return slot in ADULT_SLOTS
