"""Protocol-based interfaces for Homestead collaborators.

This module exports every collaborator protocol the turn orchestrator
consumes, providing a clear contract for implementations and enabling
dependency injection and testing.
"""

from homestead.interfaces.breeding import IBreedingService
from homestead.interfaces.deck import IDeckService
from homestead.interfaces.effects import ICardEffectService
from homestead.interfaces.events import IRandomEventService
from homestead.interfaces.gold import IGoldService
from homestead.interfaces.households import IHouseholdService
from homestead.interfaces.lands import ILandService
from homestead.interfaces.loyalty import ILoyaltyService
from homestead.interfaces.raid import IRaidService
from homestead.interfaces.units import IUnitService

__all__ = [
    "IBreedingService",
    "ICardEffectService",
    "IDeckService",
    "IGoldService",
    "IHouseholdService",
    "ILandService",
    "ILoyaltyService",
    "IRaidService",
    "IRandomEventService",
    "IUnitService",
]
