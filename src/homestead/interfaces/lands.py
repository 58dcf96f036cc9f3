"""Land Service Protocol Interface."""

from typing import Protocol

from homestead.domain.enums import LandType
from homestead.domain.models import Land, LandID


class ILandService(Protocol):
    """Protocol for land acquisition and development."""

    def acquire_land(self, name: str, land_type: LandType = LandType.EMPTY) -> Land | None:
        """Add a land and sync households with the new house bonus.

        Returns:
            The new land, or ``None`` if it could not be added
        """
        ...

    def develop_land(self, land_id: LandID, land_type: LandType) -> bool:
        ...

    def combat_bonus(self) -> int:
        """Return the defence power granted by developed lands."""
        ...
