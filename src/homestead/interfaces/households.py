"""Household Service Protocol Interface."""

from typing import Protocol

from homestead.domain.enums import HouseSlot
from homestead.domain.models import HouseholdID, UnitID


class IHouseholdService(Protocol):
    """Protocol for placing units in household slots."""

    def place_unit(self, unit_id: UnitID, household_id: HouseholdID, slot: HouseSlot) -> bool:
        """Put a unit in an empty slot that suits its stage."""
        ...

    def remove_unit_from_house(self, unit_id: UnitID) -> bool:
        """Clear the slot a unit occupies.

        Returns:
            ``False`` when the unit is not housed
        """
        ...

    def relocate_to_adult_slot(self, unit_id: UnitID) -> bool:
        """Move a grown child from its child slot to any empty adult slot.

        Returns:
            ``False`` when no adult slot is free anywhere
        """
        ...
