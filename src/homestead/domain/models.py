"""Dataclasses describing the mutable state of a Homestead match.

The match aggregate owns every roster as an id-keyed arena.  Entities refer to
each other by identifier only (a unit knows its household id, a household
knows the unit ids in its slots), so removing an entity never leaves a live
object reference behind.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NewType

from .cards import TREASURE_GOLD, CardDefinition
from .enums import (
    CardType,
    EffectKind,
    EndState,
    GrowthStage,
    HouseSlot,
    Job,
    LandType,
    Phase,
    TreasureGrade,
)

# --- Strongly typed identifiers -------------------------------------------------

UnitID = NewType("UnitID", int)
HouseholdID = NewType("HouseholdID", int)
LandID = NewType("LandID", int)
CardInstanceID = NewType("CardInstanceID", int)
EffectID = NewType("EffectID", int)
DecisionID = NewType("DecisionID", int)


# --- Entities ---------------------------------------------------------------------


@dataclass(slots=True)
class CardInstance:
    """A physical copy of a catalog card sitting in exactly one pile."""

    id: CardInstanceID
    definition: CardDefinition
    owner_unit_id: UnitID | None = None
    temporary: bool = False
    boosted_grade: TreasureGrade | None = None

    @property
    def card_id(self) -> str:
        return self.definition.id

    @property
    def card_type(self) -> CardType:
        return self.definition.card_type

    @property
    def gold_value(self) -> int:
        if self.boosted_grade is not None:
            return TREASURE_GOLD[self.boosted_grade]
        return self.definition.gold_value


@dataclass(slots=True)
class Unit:
    """A resident of the homestead."""

    id: UnitID
    name: str
    job: Job
    stage: GrowthStage
    stage_remaining_turns: int
    loyalty: int
    promotion_level: int = 0
    promoted_this_turn: bool = False
    household_id: HouseholdID | None = None
    owned_card_ids: list[CardInstanceID] = field(default_factory=list)
    has_disease: bool = False
    old_age_turns: int = 0
    awaiting_job: bool = False

    def can_breed(self) -> bool:
        return self.stage in (GrowthStage.YOUNG, GrowthStage.MIDDLE) and not self.awaiting_job

    def can_promote(self, max_level: int) -> bool:
        if self.stage not in (GrowthStage.YOUNG, GrowthStage.MIDDLE):
            return False
        if self.awaiting_job or self.promoted_this_turn or self.has_disease:
            return False
        return self.promotion_level < max_level


@dataclass(slots=True)
class Household:
    """A house with two adult slots and one child slot."""

    id: HouseholdID
    name: str
    adult_a: UnitID | None = None
    adult_b: UnitID | None = None
    child: UnitID | None = None
    pregnant: bool = False
    pregnancy_turns: int = 0
    fertility_counter: int = 0

    def get_slot(self, slot: HouseSlot) -> UnitID | None:
        if slot is HouseSlot.ADULT_A:
            return self.adult_a
        if slot is HouseSlot.ADULT_B:
            return self.adult_b
        return self.child

    def set_slot(self, slot: HouseSlot, unit_id: UnitID | None) -> None:
        if slot is HouseSlot.ADULT_A:
            self.adult_a = unit_id
        elif slot is HouseSlot.ADULT_B:
            self.adult_b = unit_id
        else:
            self.child = unit_id

    def slot_of(self, unit_id: UnitID) -> HouseSlot | None:
        for slot in HouseSlot:
            if self.get_slot(slot) == unit_id:
                return slot
        return None

    def has_empty_adult_slot(self) -> bool:
        return self.adult_a is None or self.adult_b is None

    def has_empty_child_slot(self) -> bool:
        return self.child is None

    def has_two_adults(self) -> bool:
        return self.adult_a is not None and self.adult_b is not None

    def resident_ids(self) -> list[UnitID]:
        return [uid for uid in (self.adult_a, self.adult_b, self.child) if uid is not None]


@dataclass(slots=True)
class Land:
    id: LandID
    name: str
    land_type: LandType = LandType.EMPTY
    level: int = 0


@dataclass(slots=True)
class PersistentEffect:
    """Timed gold or maintenance modifier settled once per turn."""

    id: EffectID
    kind: EffectKind
    remaining_turns: int
    value: int


# --- Aggregate --------------------------------------------------------------------


@dataclass(slots=True)
class MatchState:
    """Root aggregate for one match."""

    turn: int = 0
    phase: Phase = Phase.TURN_START
    actions_remaining: int = 0
    gold: int = 0
    maintenance_cost: int = 0
    draw_pile: list[CardInstance] = field(default_factory=list)
    hand: list[CardInstance] = field(default_factory=list)
    discard_pile: list[CardInstance] = field(default_factory=list)
    play_area: list[CardInstance] = field(default_factory=list)
    units: dict[UnitID, Unit] = field(default_factory=dict)
    households: dict[HouseholdID, Household] = field(default_factory=dict)
    lands: dict[LandID, Land] = field(default_factory=dict)
    persistent_effects: list[PersistentEffect] = field(default_factory=list)
    gold_multiplier: float = 1.0
    gold_bonus: int = 0
    pollution_ignored: bool = False
    promotion_discount: int = 0
    validations_passed: int = 0
    end_state: EndState = EndState.NONE
    next_id: int = 1

    @property
    def is_over(self) -> bool:
        return self.end_state is not EndState.NONE

    def allocate_id(self) -> int:
        """Return a fresh identifier unique within this match."""

        value = self.next_id
        self.next_id += 1
        return value

    def piles(self) -> tuple[list[CardInstance], ...]:
        return (self.draw_pile, self.hand, self.discard_pile, self.play_area)

    def all_cards(self) -> Iterator[CardInstance]:
        for pile in self.piles():
            yield from pile

    def find_card(self, card_id: CardInstanceID) -> tuple[list[CardInstance], CardInstance] | None:
        for pile in self.piles():
            for card in pile:
                if card.id == card_id:
                    return pile, card
        return None

    def reset_turn_modifiers(self) -> None:
        """Return every turn-scoped modifier to its neutral value."""

        self.gold_multiplier = 1.0
        self.gold_bonus = 0
        self.pollution_ignored = False
        self.promotion_discount = 0
        for unit in self.units.values():
            unit.promoted_this_turn = False
        for card in self.all_cards():
            card.boosted_grade = None

    def recalculate_maintenance_cost(self) -> int:
        self.maintenance_cost = sum(len(unit.owned_card_ids) for unit in self.units.values())
        return self.maintenance_cost

    def remove_unit(self, unit_id: UnitID) -> Unit | None:
        """Drop a unit, its household slot and its owned cards from the match."""

        unit = self.units.pop(unit_id, None)
        if unit is None:
            return None
        if unit.household_id is not None:
            household = self.households.get(unit.household_id)
            if household is not None:
                slot = household.slot_of(unit_id)
                if slot is not None:
                    household.set_slot(slot, None)
            unit.household_id = None
        for pile in self.piles():
            pile[:] = [card for card in pile if card.owner_unit_id != unit_id]
        self.recalculate_maintenance_cost()
        return unit
