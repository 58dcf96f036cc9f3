"""Outbound notifications published by the match core.

Every notification is an immutable dataclass.  Observers subscribe to the
:class:`NotificationBus` either for one notification type or for all of them
and receive the instance synchronously, in publication order.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass

from .decisions import PendingDecision
from .enums import DeathCause, EndState, GrowthStage, Phase, RaidDamage
from .models import CardInstanceID, LandID, UnitID

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnStarted:
    turn: int


@dataclass(frozen=True, slots=True)
class TurnEnded:
    turn: int


@dataclass(frozen=True, slots=True)
class PhaseChanged:
    old: Phase
    new: Phase


@dataclass(frozen=True, slots=True)
class ActionsChanged:
    old: int
    new: int


@dataclass(frozen=True, slots=True)
class GoldChanged:
    old: int
    new: int

    @property
    def delta(self) -> int:
        return self.new - self.old


@dataclass(frozen=True, slots=True)
class MatchEnded:
    end_state: EndState
    turn: int


@dataclass(frozen=True, slots=True)
class JobSelectionRequired:
    decision: PendingDecision


@dataclass(frozen=True, slots=True)
class TargetSelectionRequired:
    decision: PendingDecision


@dataclass(frozen=True, slots=True)
class UnitDied:
    unit_id: UnitID
    name: str
    cause: DeathCause


@dataclass(frozen=True, slots=True)
class UnitGrew:
    unit_id: UnitID
    old: GrowthStage
    new: GrowthStage


@dataclass(frozen=True, slots=True)
class ChildBorn:
    unit_id: UnitID
    name: str


@dataclass(frozen=True, slots=True)
class ValidationResolved:
    turn: int
    required: int
    gold: int
    passed: bool


@dataclass(frozen=True, slots=True)
class RaidResolved:
    turn: int
    enemy_power: int
    defense_power: int
    victory: bool
    damage: RaidDamage = RaidDamage.NONE
    gold_lost: int = 0
    kidnapped_unit_id: UnitID | None = None


@dataclass(frozen=True, slots=True)
class FinalBattleResolved:
    required_power: int
    defense_power: int
    victory: bool


@dataclass(frozen=True, slots=True)
class CardPlayed:
    card_instance_id: CardInstanceID
    card_id: str


@dataclass(frozen=True, slots=True)
class LandAcquired:
    land_id: LandID
    name: str


@dataclass(frozen=True, slots=True)
class RandomEventTriggered:
    turn: int
    event_id: str
    name: str


Notification = (
    TurnStarted
    | TurnEnded
    | PhaseChanged
    | ActionsChanged
    | GoldChanged
    | MatchEnded
    | JobSelectionRequired
    | TargetSelectionRequired
    | UnitDied
    | UnitGrew
    | ChildBorn
    | ValidationResolved
    | RaidResolved
    | FinalBattleResolved
    | CardPlayed
    | LandAcquired
    | RandomEventTriggered
)

Observer = Callable[[Notification], None]


class NotificationBus:
    """Synchronous publish/subscribe channel owned by one match.

    Observer exceptions are not caught; a failing observer surfaces to the
    caller of the operation that published.
    """

    def __init__(self, *, keep_history: bool = False) -> None:
        self._observers: dict[type | None, list[Observer]] = defaultdict(list)
        self.history: list[Notification] = []
        self.keep_history = keep_history

    def subscribe(
        self,
        observer: Observer,
        kind: type | None = None,
    ) -> Callable[[], None]:
        """Register ``observer`` for ``kind`` (or every notification when ``None``).

        Returns:
            A callable that removes the subscription again.
        """

        self._observers[kind].append(observer)

        def unsubscribe() -> None:
            if observer in self._observers[kind]:
                self._observers[kind].remove(observer)

        return unsubscribe

    def publish(self, notification: Notification) -> None:
        logger.debug("publish %s", notification)
        if self.keep_history:
            self.history.append(notification)
        for observer in list(self._observers[type(notification)]):
            observer(notification)
        for observer in list(self._observers[None]):
            observer(notification)
