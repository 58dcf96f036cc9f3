"""Deck Service for Homestead.

This module provides the card mechanics a match needs: drawing with an
automatic reshuffle of the discard pile, treasure settlement, end-of-turn
cleanup, card creation and destruction, and turn-scoped treasure boosts.
"""

import logging
from collections.abc import Mapping

from homestead.domain.cards import DEFAULT_CARDS, CardDefinition, next_grade
from homestead.domain.enums import CardType, PollutionType, TreasureGrade
from homestead.domain.models import CardInstance, CardInstanceID, MatchState, UnitID
from homestead.domain.rules_config import DEFAULT_RULES, RulesConfig
from homestead.utils.rng import RandomSource

logger = logging.getLogger(__name__)


class DeckService:
    """Service for the four card piles of a match."""

    def __init__(
        self,
        state: MatchState,
        rng: RandomSource,
        *,
        catalog: Mapping[str, CardDefinition] = DEFAULT_CARDS,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.state = state
        self.rng = rng
        self.catalog = catalog
        self.rules = rules

    # --- Drawing ---------------------------------------------------------------

    def draw_cards(self, count: int) -> list[CardInstance]:
        """Draw cards from the top of the draw pile into the hand.

        Each Damage card in hand reduces the draw by one.  Drawing stops when
        the hand reaches its maximum size or both the draw and discard piles
        are empty.  An empty draw pile is refilled from the shuffled discard
        pile.

        Args:
            count: Number of cards requested

        Returns:
            The cards actually drawn
        """
        state = self.state
        reduction = self._count_pollution_in_hand(PollutionType.DAMAGE)
        actual = max(0, count - reduction)
        if reduction:
            logger.debug("damage cards reduce draw from %s to %s", count, actual)

        drawn: list[CardInstance] = []
        for _ in range(actual):
            if len(state.hand) >= self.rules.match.max_hand_size:
                logger.debug("hand is full; draw stopped")
                break
            if not state.draw_pile:
                self.shuffle_discard_into_draw_pile()
            if not state.draw_pile:
                logger.debug("draw and discard piles are empty")
                break
            card = state.draw_pile.pop(0)
            state.hand.append(card)
            drawn.append(card)
        return drawn

    def shuffle_draw_pile(self) -> None:
        self.rng.shuffle(self.state.draw_pile)

    def shuffle_discard_into_draw_pile(self) -> None:
        state = self.state
        if not state.discard_pile:
            return
        state.draw_pile.extend(state.discard_pile)
        state.discard_pile.clear()
        self.shuffle_draw_pile()
        logger.debug("reshuffled discard pile into %s draw cards", len(state.draw_pile))

    # --- Settlement and cleanup ------------------------------------------------

    def calculate_treasure_gold(self) -> int:
        """Return the gold value of the treasure cards in hand, boosts included."""
        total = sum(
            card.gold_value for card in self.state.hand if card.card_type is CardType.TREASURE
        )
        logger.debug("treasure in hand is worth %s gold", total)
        return total

    def cleanup_cards(self) -> None:
        """Drop temporary cards, then move hand and play area to the discard pile."""
        state = self.state
        state.hand[:] = [card for card in state.hand if not card.temporary]
        state.play_area[:] = [card for card in state.play_area if not card.temporary]
        state.discard_pile.extend(state.hand)
        state.hand.clear()
        state.discard_pile.extend(state.play_area)
        state.play_area.clear()

    def discard_from_hand(self, card_id: CardInstanceID) -> bool:
        state = self.state
        for index, card in enumerate(state.hand):
            if card.id == card_id:
                state.discard_pile.append(state.hand.pop(index))
                return True
        logger.warning("card %s is not in hand", card_id)
        return False

    # --- Creation and destruction ---------------------------------------------

    def create_card(
        self,
        card_id: str,
        owner_unit_id: UnitID | None = None,
        *,
        temporary: bool = False,
    ) -> CardInstance | None:
        definition = self.catalog.get(card_id)
        if definition is None:
            logger.warning("unknown card id %r", card_id)
            return None
        return CardInstance(
            id=CardInstanceID(self.state.allocate_id()),
            definition=definition,
            owner_unit_id=owner_unit_id,
            temporary=temporary,
        )

    def add_card_to_deck(
        self, card_id: str, owner_unit_id: UnitID | None = None
    ) -> CardInstance | None:
        """Create a card at the bottom of the draw pile.

        Args:
            card_id: Catalog id of the card
            owner_unit_id: Unit whose maintenance the card adds to, if any

        Returns:
            The new card, or None when the id is not in the catalog
        """
        card = self.create_card(card_id, owner_unit_id)
        if card is None:
            return None
        self.state.draw_pile.append(card)
        if owner_unit_id is not None:
            unit = self.state.units.get(owner_unit_id)
            if unit is None:
                logger.warning("card %s assigned to unknown unit %s", card_id, owner_unit_id)
            else:
                unit.owned_card_ids.append(card.id)
            self.state.recalculate_maintenance_cost()
        return card

    def add_card_to_hand(self, card_id: str, *, temporary: bool = False) -> CardInstance | None:
        card = self.create_card(card_id, temporary=temporary)
        if card is None:
            return None
        self.state.hand.append(card)
        return card

    def destroy_card(self, card_id: CardInstanceID) -> bool:
        """Remove a card from whichever pile holds it.

        Returns:
            False when no pile holds the card
        """
        found = self.state.find_card(card_id)
        if found is None:
            logger.warning("card %s not found; nothing destroyed", card_id)
            return False
        pile, card = found
        pile.remove(card)
        if card.owner_unit_id is not None:
            unit = self.state.units.get(card.owner_unit_id)
            if unit is not None and card.id in unit.owned_card_ids:
                unit.owned_card_ids.remove(card.id)
            self.state.recalculate_maintenance_cost()
        return True

    def boost_treasure(self, card_id: CardInstanceID, steps: int = 1) -> TreasureGrade | None:
        """Raise a treasure card's grade for the rest of the turn.

        Returns:
            The boosted grade, or None when the card is not a treasure
        """
        found = self.state.find_card(card_id)
        if found is None:
            return None
        card = found[1]
        grade = card.boosted_grade or card.definition.treasure_grade
        if grade is None:
            return None
        for _ in range(steps):
            upgraded = next_grade(grade)
            if upgraded is None:
                break
            grade = upgraded
        card.boosted_grade = grade
        return grade

    def _count_pollution_in_hand(self, kind: PollutionType) -> int:
        return sum(1 for card in self.state.hand if card.definition.pollution is kind)
