"""Card Effect Service for Homestead.

Action cards and random events carry a tuple of :class:`CardEffect` steps.
This service applies them in order.  Steps that need the player to pick
cards (treasure boosts and destruction) pause the chain on a target
selection; the remaining steps run once the selection is answered.

Effects applied outside a played card, such as those of random events, have
no orchestrator to pause on.  Their selections pick the first eligible cards
in hand instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from homestead.domain import ledger
from homestead.domain.cards import CardEffect
from homestead.domain.enums import CardEffectKind, CardType, EffectKind
from homestead.domain.models import CardInstance, MatchState
from homestead.services.deck_service import DeckService
from homestead.services.gold_service import GoldService

if TYPE_CHECKING:
    from homestead.domain.turn import TurnOrchestrator

logger = logging.getLogger(__name__)

PERSISTENT_KINDS: dict[CardEffectKind, EffectKind] = {
    CardEffectKind.DELAYED_GOLD: EffectKind.DELAYED_GOLD,
    CardEffectKind.PERSISTENT_GOLD: EffectKind.GOLD_PER_TURN,
    CardEffectKind.PERSISTENT_MAINTENANCE: EffectKind.MAINTENANCE_INCREASE,
}

SELECTION_KINDS = frozenset(
    {
        CardEffectKind.BOOST_TREASURE,
        CardEffectKind.DESTROY_CARD,
        CardEffectKind.DESTROY_POLLUTION,
    }
)


class CardEffectService:
    """Service that interprets card and event effects."""

    def __init__(self, state: MatchState, gold: GoldService, deck: DeckService):
        self.state = state
        self.gold = gold
        self.deck = deck

    def resolve(self, card: CardInstance, orchestrator: TurnOrchestrator) -> None:
        """Apply every effect of a played card in order.

        Args:
            card: The card that was just moved to the play area
            orchestrator: The match's orchestrator, used for actions,
                persistent effects and target selections
        """
        effects = card.definition.effects
        if not effects:
            logger.info("card %s has no effects", card.card_id)
            return
        logger.debug("resolving %s effects of %s", len(effects), card.card_id)
        self._apply_from(effects, 0, orchestrator)

    def apply_effects(self, effects: Sequence[CardEffect]) -> None:
        """Apply effects that do not come from a played card."""
        self._apply_from(effects, 0, None)

    def apply_effect(self, effect: CardEffect, orchestrator: TurnOrchestrator | None = None) -> None:
        """Apply one effect that needs no card selection."""
        kind = effect.kind
        if kind is CardEffectKind.DRAW_CARD:
            self.deck.draw_cards(effect.value)
        elif kind is CardEffectKind.ADD_ACTION:
            if orchestrator is None:
                logger.warning("add_action needs a played card; ignored")
            else:
                orchestrator.add_actions(effect.value)
        elif kind is CardEffectKind.ADD_GOLD:
            self.gold.add_gold(effect.value)
        elif kind is CardEffectKind.GOLD_MULTIPLIER:
            self.gold.multiply_multiplier(effect.multiplier)
        elif kind is CardEffectKind.GOLD_BONUS:
            self.gold.add_bonus(effect.value)
        elif kind in PERSISTENT_KINDS:
            self._add_persistent(PERSISTENT_KINDS[kind], effect, orchestrator)
        elif kind is CardEffectKind.IGNORE_POLLUTION:
            self.state.pollution_ignored = True
        elif kind is CardEffectKind.PROMOTION_DISCOUNT:
            self.state.promotion_discount = effect.value
        elif kind is CardEffectKind.ADD_CARD_TO_DECK:
            if effect.card_id is None:
                logger.warning("add_card_to_deck effect names no card")
            else:
                self.deck.add_card_to_deck(effect.card_id)
        elif kind is CardEffectKind.SPEND_GOLD_PERCENT:
            amount = self.gold.percentage_of(self.state.gold, effect.value)
            if amount > 0:
                self.gold.subtract_gold(amount)
        else:
            raise ValueError(f"{kind} requires a card selection")

    # --- Chaining ---------------------------------------------------------------

    def _apply_from(
        self,
        effects: Sequence[CardEffect],
        start: int,
        orchestrator: TurnOrchestrator | None,
    ) -> None:
        for index in range(start, len(effects)):
            effect = effects[index]
            if effect.kind not in SELECTION_KINDS:
                self.apply_effect(effect, orchestrator)
                continue

            def resume(next_index: int = index + 1) -> None:
                self._apply_from(effects, next_index, orchestrator)

            self._select_targets(effect, orchestrator, resume)
            return

    def _select_targets(
        self,
        effect: CardEffect,
        orchestrator: TurnOrchestrator | None,
        resume: Callable[[], None],
    ) -> None:
        if effect.kind is CardEffectKind.BOOST_TREASURE:
            candidates = [card for card in self.state.hand if card.card_type is CardType.TREASURE]
            count = 1
            prompt = "Choose a treasure to boost"
        elif effect.kind is CardEffectKind.DESTROY_POLLUTION:
            candidates = [card for card in self.state.hand if card.card_type is CardType.POLLUTION]
            count = effect.targets
            prompt = f"Choose {effect.targets} pollution card(s) to destroy"
        else:
            candidates = list(self.state.hand)
            count = effect.targets
            prompt = f"Choose {effect.targets} card(s) to destroy"

        def on_selected(picked: list[CardInstance]) -> None:
            for card in picked:
                self._apply_to_card(effect, card)
            resume()

        if orchestrator is None:
            on_selected(candidates[:count])
            return
        orchestrator.request_card_selection(count, prompt, on_selected, candidates=candidates)

    def _apply_to_card(self, effect: CardEffect, card: CardInstance) -> None:
        if effect.kind is CardEffectKind.BOOST_TREASURE:
            grade = self.deck.boost_treasure(card.id, max(1, effect.value))
            logger.info("boosted %s to %s", card.card_id, grade)
        else:
            if self.deck.destroy_card(card.id):
                logger.info("destroyed %s", card.card_id)

    def _add_persistent(
        self,
        kind: EffectKind,
        effect: CardEffect,
        orchestrator: TurnOrchestrator | None,
    ) -> None:
        turns = max(1, effect.duration)
        if orchestrator is None:
            ledger.add_effect(self.state, kind, turns, effect.value)
        else:
            orchestrator.add_persistent_effect(kind, turns, effect.value)
