"""Loyalty Service Protocol Interface."""

from typing import Protocol

from homestead.domain.models import UnitID


class ILoyaltyService(Protocol):
    """Protocol for loyalty adjustment and desertion."""

    def process_desertions(self) -> list[UnitID]:
        """Remove every adult whose loyalty has run out.

        Returns:
            Identifiers of the deserters
        """
        ...

    def process_loyalty(self) -> None:
        """Adjust loyalty from the treasury balance at the end of a turn."""
        ...
