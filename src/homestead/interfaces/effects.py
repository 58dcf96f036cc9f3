"""Card Effect Service Protocol Interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from homestead.domain.models import CardInstance

if TYPE_CHECKING:
    from homestead.domain.turn import TurnOrchestrator


class ICardEffectService(Protocol):
    """Protocol for resolving played action cards.

    The default implementation is
    :class:`~homestead.services.effect_service.CardEffectService`.
    Implementations receive the orchestrator so they can add actions,
    register persistent effects or ask the player to select cards from hand.
    """

    def resolve(self, card: CardInstance, orchestrator: TurnOrchestrator) -> None:
        ...
