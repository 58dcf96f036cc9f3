"""Composition root for Homestead matches.

This module builds one match with every default collaborator wired by
dependency injection and sets up the starting position.  Use
:func:`create_match` in production code; tests may instead build a
:class:`~homestead.domain.turn.TurnOrchestrator` around protocol-based fakes.

Example:
    # Production usage
    from homestead.factory import create_match
    match = create_match(seed="spring")
    match.orchestrator.start_match()

    # Testing usage
    from homestead.domain.turn import Collaborators, TurnOrchestrator

    class FakeRaids:
        def process_raid(self, turn):
            ...

        def process_final_battle(self):
            return True

    match = create_match(seed="t", raids=FakeRaids())
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from homestead.config import Settings, get_settings
from homestead.domain.cards import DEFAULT_CARDS, CardDefinition
from homestead.domain.enums import GrowthStage, HouseSlot, Job
from homestead.domain.models import MatchState
from homestead.domain.notifications import NotificationBus
from homestead.domain.rules_config import RulesConfig
from homestead.domain.turn import Collaborators, TurnOrchestrator
from homestead.interfaces import ICardEffectService, IRaidService, IRandomEventService
from homestead.rules_loader import load_rules
from homestead.services import (
    BreedingService,
    CardEffectService,
    DeckService,
    GoldService,
    HouseholdService,
    LandService,
    LoyaltyService,
    RaidService,
    RandomEventService,
    UnitService,
)
from homestead.utils.rng import MatchRandom, RandomSource

logger = logging.getLogger(__name__)

STARTING_TREASURE = "copper"


@dataclass(slots=True)
class Match:
    """Everything that makes up one running match."""

    state: MatchState
    bus: NotificationBus
    rng: RandomSource
    rules: RulesConfig
    orchestrator: TurnOrchestrator
    gold: GoldService
    deck: DeckService
    units: UnitService
    households: HouseholdService
    breeding: BreedingService
    loyalty: LoyaltyService
    lands: LandService
    raids: IRaidService
    effects: ICardEffectService
    events: IRandomEventService


def resolve_rules(rules: RulesConfig | None, settings: Settings) -> RulesConfig:
    """Return explicit rules, else the configured rules file, else the defaults."""

    if rules is not None:
        return rules
    if settings.rules_file is not None:
        logger.info("loading rules from %s", settings.rules_file)
        return load_rules(settings.rules_file)
    return RulesConfig()


def create_match(
    *,
    rules: RulesConfig | None = None,
    settings: Settings | None = None,
    seed: str | int | None = None,
    rng: RandomSource | None = None,
    catalog: Mapping[str, CardDefinition] = DEFAULT_CARDS,
    raids: IRaidService | None = None,
    events: IRandomEventService | None = None,
    effects: ICardEffectService | None = None,
) -> Match:
    """Create a match with all dependencies and its starting position.

    Args:
        rules: Rule set; falls back to ``settings.rules_file`` and then defaults
        settings: Runtime settings; defaults to :func:`get_settings`
        seed: Seed for a :class:`MatchRandom`; defaults to ``settings.rng_seed``
        rng: Explicit random source, overriding ``seed``
        catalog: Card definitions available to the deck
        raids: Raid collaborator replacing the default RaidService
        events: Random event collaborator replacing the default RandomEventService
        effects: Card effect collaborator replacing the default CardEffectService

    Returns:
        A fully wired match that has not started yet
    """
    settings = settings or get_settings()
    rules = resolve_rules(rules, settings)
    if rng is None:
        rng = MatchRandom(settings.rng_seed if seed is None else seed)

    state = MatchState()
    bus = NotificationBus()

    gold = GoldService(state, bus)
    deck = DeckService(state, rng, catalog=catalog, rules=rules)
    households = HouseholdService(state)
    units = UnitService(state, bus, rng, gold, deck=deck, households=households, rules=rules)
    breeding = BreedingService(state, bus, rng, units, households, deck=deck, rules=rules)
    loyalty = LoyaltyService(state, units, rules=rules)
    lands = LandService(state, bus, gold, households=households, rules=rules)
    if raids is None:
        raids = RaidService(state, bus, rng, gold, units, lands=lands, rules=rules)
    interpreter = CardEffectService(state, gold, deck)
    if effects is None:
        effects = interpreter
    if events is None:
        events = RandomEventService(state, bus, rng, interpreter, rules=rules)

    collaborators = Collaborators(
        gold=gold,
        units=units,
        deck=deck,
        households=households,
        breeding=breeding,
        loyalty=loyalty,
        raids=raids,
        events=events,
        lands=lands,
        effects=effects,
    )
    orchestrator = TurnOrchestrator(
        state,
        collaborators,
        bus,
        rng,
        rules=rules,
        disable_end_checks=settings.disable_end_checks,
    )

    match = Match(
        state=state,
        bus=bus,
        rng=rng,
        rules=rules,
        orchestrator=orchestrator,
        gold=gold,
        deck=deck,
        units=units,
        households=households,
        breeding=breeding,
        loyalty=loyalty,
        lands=lands,
        raids=raids,
        effects=effects,
        events=events,
    )
    setup_starting_position(match, shuffle=settings.shuffle_starting_deck)
    return match


def setup_starting_position(match: Match, *, shuffle: bool = True) -> None:
    """Starting gold, lands, two Pawns and a Knight, and the treasure deck."""

    state = match.state
    rules = match.rules.match
    state.gold = rules.starting_gold

    for _ in range(rules.starting_lands):
        match.lands.acquire_land()
    homes = list(state.households.values())
    if len(homes) < 2:
        logger.warning("starting position needs two households, found %s", len(homes))

    placements = (
        (Job.PAWN, 0, HouseSlot.ADULT_A),
        (Job.PAWN, 0, HouseSlot.ADULT_B),
        (Job.KNIGHT, 1, HouseSlot.ADULT_A),
    )
    for job, home_index, slot in placements:
        unit = match.units.create_unit(match.units.generate_unit_name(), job, GrowthStage.YOUNG)
        if home_index < len(homes):
            match.households.place_unit(unit.id, homes[home_index].id, slot)
        else:
            match.households.auto_place_unit(unit.id)

    for _ in range(rules.starting_treasures):
        match.deck.add_card_to_deck(STARTING_TREASURE)
    if shuffle:
        match.deck.shuffle_draw_pile()
    state.recalculate_maintenance_cost()
