"""Random Event Service for Homestead.

From turn 2 onwards each turn rolls once against the configured trigger
chance.  On a hit one event is drawn from the catalog by weight and its
effects are applied through the card effect service.
"""

import logging
from collections.abc import Sequence

from homestead.domain.events import DEFAULT_EVENTS, RandomEvent
from homestead.domain.models import MatchState
from homestead.domain.notifications import NotificationBus, RandomEventTriggered
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.services.effect_service import CardEffectService
from homestead.utils.rng import RandomSource

logger = logging.getLogger(__name__)


class RandomEventService:
    """Service that rolls and applies random events."""

    def __init__(
        self,
        state: MatchState,
        bus: NotificationBus,
        rng: RandomSource,
        effects: CardEffectService,
        *,
        events: Sequence[RandomEvent] = DEFAULT_EVENTS,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.bus = bus
        self.rng = rng
        self.effects = effects
        self.events = tuple(events)
        self.rules = rules

    def process_random_event(self, turn: int) -> RandomEvent | None:
        """Roll for an event on ``turn`` and apply it.

        Returns:
            The event that fired, or None
        """
        if turn <= 1:
            return None
        roll = self.rng.randrange(100)
        if roll >= self.rules.events.trigger_chance:
            logger.debug("no random event on turn %s (roll %s)", turn, roll)
            return None

        event = self.pick_event()
        if event is None:
            logger.debug("no eligible random event on turn %s", turn)
            return None
        logger.info("random event %s on turn %s", event.id, turn)
        self.effects.apply_effects(event.effects)
        self.bus.publish(RandomEventTriggered(turn=turn, event_id=event.id, name=event.name))
        return event

    def pick_event(self) -> RandomEvent | None:
        """Draw one eligible event by weight."""
        eligible = [
            event
            for event in self.events
            if event.weight > 0 and (not event.requires_gold or self.state.gold > 0)
        ]
        total = sum(event.weight for event in eligible)
        if total <= 0:
            return None
        roll = self.rng.randrange(total)
        for event in eligible:
            if roll < event.weight:
                return event
            roll -= event.weight
        return eligible[-1]
