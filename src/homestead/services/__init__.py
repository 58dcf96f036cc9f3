"""Default collaborator services for Homestead matches.

Each service implements one of the protocols in :mod:`homestead.interfaces`
and mutates the shared :class:`~homestead.domain.models.MatchState` it was
built with:

- GoldService: treasury credits, debits and turn-scoped gold modifiers
- DeckService: draw, reshuffle, treasure settlement, cleanup, card lifecycle
- UnitService: unit creation and removal, job offers, promotions
- HouseholdService: household slots, placement, relocation, pregnancy flags
- BreedingService: fertility rolls, births, card inheritance
- LoyaltyService: loyalty drift and desertions
- RaidService: raids and the final battle
- LandService: land acquisition, development and bonuses
- CardEffectService: action card and event effects, with target selections
- RandomEventService: weighted random events at the start of a turn

Production Usage:
    from homestead.factory import create_match
    match = create_match(seed="spring")
    match.orchestrator.start_match()

Testing Usage:
    from homestead.services.gold_service import GoldService

    class RecordingGold:
        def add_gold(self, amount, *, apply_modifiers=False):
            ...

    orchestrator = TurnOrchestrator(state, Collaborators(gold=RecordingGold(), ...), bus, rng)
"""

from homestead.services.breeding_service import BreedingService
from homestead.services.deck_service import DeckService
from homestead.services.effect_service import CardEffectService
from homestead.services.event_service import RandomEventService
from homestead.services.gold_service import GoldService
from homestead.services.household_service import HouseholdService
from homestead.services.land_service import LandService
from homestead.services.loyalty_service import LoyaltyService
from homestead.services.raid_service import RaidService
from homestead.services.unit_service import UnitService

__all__ = [
    "BreedingService",
    "CardEffectService",
    "DeckService",
    "GoldService",
    "HouseholdService",
    "LandService",
    "LoyaltyService",
    "RaidService",
    "RandomEventService",
    "UnitService",
]
