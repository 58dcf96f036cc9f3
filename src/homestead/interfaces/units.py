"""Unit Service Protocol Interface."""

from typing import Protocol

from homestead.domain.enums import DeathCause, GrowthStage, Job
from homestead.domain.models import Unit, UnitID


class IUnitService(Protocol):
    """Protocol for creating, removing and advancing units."""

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
            job: Job of the unit (ignored for children until they grow up)
            stage: Initial growth stage
            grant_starting_cards: Add the job's starting cards to the deck

        Returns:
            The created unit, not yet placed in a household
        """
        ...

    def kill_unit(self, unit_id: UnitID, cause: DeathCause) -> bool:
        """Remove a unit, its household slot and its cards.

        Returns:
            ``False`` when the unit does not exist
        """
        ...

    def get_job_choices(self, unit_id: UnitID) -> list[Job]:
        """Return the jobs offered to a unit that just grew up."""
        ...

    def select_job(self, unit_id: UnitID, job: Job) -> bool:
        ...

    def promote_unit(self, unit_id: UnitID) -> bool:
        ...
