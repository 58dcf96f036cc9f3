"""Card definitions and the default catalog shipped with the core.

Card content is authored outside this package; the catalog below only covers
what the starting position and the tests need: the treasure ladder, the four
pollution cards, one starting action card per job and a few unassigned action
cards that reward, salvage or polish.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .enums import CardEffectKind, CardType, Job, PollutionType, TreasureGrade

TREASURE_GOLD: Mapping[TreasureGrade, int] = {
    TreasureGrade.COPPER: 1,
    TreasureGrade.SILVER: 2,
    TreasureGrade.GOLD: 4,
    TreasureGrade.EMERALD: 7,
    TreasureGrade.SAPPHIRE: 12,
    TreasureGrade.RUBY: 20,
    TreasureGrade.DIAMOND: 35,
}


def next_grade(grade: TreasureGrade) -> TreasureGrade | None:
    """Return the grade above ``grade`` or ``None`` at the top of the ladder."""

    if grade is TreasureGrade.DIAMOND:
        return None
    return TreasureGrade(grade + 1)


@dataclass(frozen=True, slots=True)
class CardEffect:
    """One step of an action card or a random event.

    ``value`` is the amount for gold, draw and action kinds, the percent for
    discounts and maintenance, and the grade steps for treasure boosts.
    ``duration`` is the turn count of persistent kinds and ``targets`` the
    number of cards a destroy effect takes.  ``card_id`` names the card an
    add-to-deck effect creates.
    """

    kind: CardEffectKind
    value: int = 0
    multiplier: float = 1.0
    duration: int = 1
    targets: int = 1
    card_id: str | None = None


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """Immutable catalog entry."""

    id: str
    name: str
    card_type: CardType
    treasure_grade: TreasureGrade | None = None
    pollution: PollutionType | None = None
    jobs: tuple[Job, ...] = ()
    effects: tuple[CardEffect, ...] = ()

    @property
    def gold_value(self) -> int:
        if self.treasure_grade is None:
            return 0
        return TREASURE_GOLD[self.treasure_grade]


def _treasure(grade: TreasureGrade) -> CardDefinition:
    return CardDefinition(
        id=grade.name.lower(),
        name=grade.name.title(),
        card_type=CardType.TREASURE,
        treasure_grade=grade,
    )


def _pollution(kind: PollutionType) -> CardDefinition:
    return CardDefinition(
        id=kind.value,
        name=kind.value.title(),
        card_type=CardType.POLLUTION,
        pollution=kind,
    )


def _action(card_id: str, name: str, job: Job | None, *effects: CardEffect) -> CardDefinition:
    jobs = () if job is None else (job,)
    return CardDefinition(
        id=card_id,
        name=name,
        card_type=CardType.ACTION,
        jobs=jobs,
        effects=effects,
    )


_E = CardEffectKind


DEFAULT_CARDS: dict[str, CardDefinition] = {
    card.id: card
    for card in (
        *(_treasure(grade) for grade in TreasureGrade),
        *(_pollution(kind) for kind in PollutionType),
        _action("labor", "Labor", Job.PAWN, CardEffect(_E.ADD_GOLD, value=2)),
        _action("scout", "Scout", Job.KNIGHT, CardEffect(_E.DRAW_CARD, value=2)),
        _action(
            "purify",
            "Purify",
            Job.BISHOP,
            CardEffect(_E.DESTROY_POLLUTION, targets=1),
            CardEffect(_E.IGNORE_POLLUTION),
        ),
        _action(
            "fortify",
            "Fortify",
            Job.ROOK,
            CardEffect(_E.GOLD_BONUS, value=2),
            CardEffect(_E.PERSISTENT_GOLD, value=1, duration=3),
        ),
        _action(
            "decree",
            "Decree",
            Job.QUEEN,
            CardEffect(_E.ADD_ACTION, value=1),
            CardEffect(_E.GOLD_MULTIPLIER, multiplier=1.5),
            CardEffect(_E.PROMOTION_DISCOUNT, value=25),
        ),
        _action("polish", "Polish", None, CardEffect(_E.BOOST_TREASURE, value=1)),
        _action("salvage", "Salvage", None, CardEffect(_E.DESTROY_CARD, targets=1)),
        _action("investment", "Investment", None, CardEffect(_E.DELAYED_GOLD, value=8, duration=3)),
        _action(
            "festival",
            "Festival",
            None,
            CardEffect(_E.ADD_GOLD, value=5),
            CardEffect(_E.PERSISTENT_MAINTENANCE, value=50, duration=2),
        ),
    )
}

STARTING_CARDS: Mapping[Job, tuple[str, ...]] = {
    Job.PAWN: ("labor",),
    Job.KNIGHT: ("scout",),
    Job.BISHOP: ("purify",),
    Job.ROOK: ("fortify",),
    Job.QUEEN: ("decree",),
}
