"""Random events that may strike at the start of a turn.

Each event is a weighted bundle of :class:`~homestead.domain.cards.CardEffect`
steps, applied by the card effect service.  Effects that would need a card
selection pick the first eligible cards in hand.
"""

from __future__ import annotations

from dataclasses import dataclass

from .cards import CardEffect
from .enums import CardEffectKind


@dataclass(frozen=True, slots=True)
class RandomEvent:
    id: str
    name: str
    effects: tuple[CardEffect, ...]
    weight: int = 1
    requires_gold: bool = False


DEFAULT_EVENTS: tuple[RandomEvent, ...] = (
    RandomEvent(
        "merchant_visit",
        "Merchant Visit",
        (CardEffect(CardEffectKind.PROMOTION_DISCOUNT, value=30),),
    ),
    RandomEvent(
        "bad_harvest",
        "Bad Harvest",
        (CardEffect(CardEffectKind.PERSISTENT_MAINTENANCE, value=50, duration=3),),
    ),
    RandomEvent(
        "hidden_treasure",
        "Hidden Treasure",
        (CardEffect(CardEffectKind.ADD_CARD_TO_DECK, card_id="silver"),),
    ),
    RandomEvent(
        "bandits",
        "Bandits",
        (CardEffect(CardEffectKind.SPEND_GOLD_PERCENT, value=20),),
        requires_gold=True,
    ),
    RandomEvent(
        "bountiful_season",
        "Bountiful Season",
        (CardEffect(CardEffectKind.GOLD_BONUS, value=3),),
        weight=2,
    ),
    RandomEvent(
        "blessing",
        "Blessing",
        (CardEffect(CardEffectKind.IGNORE_POLLUTION),),
    ),
    RandomEvent(
        "curse_spreads",
        "Curse Spreads",
        (CardEffect(CardEffectKind.ADD_CARD_TO_DECK, card_id="curse"),),
    ),
)
