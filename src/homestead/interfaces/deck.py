"""Deck Service Protocol Interface."""

from typing import Protocol

from homestead.domain.models import CardInstance, CardInstanceID, UnitID


class IDeckService(Protocol):
    """Protocol for shuffling, drawing and settling cards."""

    def draw_cards(self, count: int) -> list[CardInstance]:
        """Draw up to ``count`` cards into the hand.

        Returns:
            The cards that were drawn, possibly fewer than requested
        """
        ...

    def calculate_treasure_gold(self) -> int:
        """Return the gold value of every treasure card in the hand."""
        ...

    def cleanup_cards(self) -> None:
        """Move the hand and play area to the discard pile."""
        ...

    def discard_from_hand(self, card_id: CardInstanceID) -> bool:
        ...

    def add_card_to_deck(
        self, card_id: str, owner_unit_id: UnitID | None = None
    ) -> CardInstance | None:
        """Create a catalog card in the discard pile.

        Returns:
            The new card, or ``None`` when ``card_id`` is unknown
        """
        ...

    def destroy_card(self, card_id: CardInstanceID) -> bool:
        ...
