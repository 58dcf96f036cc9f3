"""Tests for the match aggregate and its entities."""

from __future__ import annotations

from homestead.domain import models as dm
from homestead.domain.cards import DEFAULT_CARDS
from homestead.domain.enums import EndState, GrowthStage, HouseSlot, Job, TreasureGrade


def _unit(state: dm.MatchState, stage: GrowthStage = GrowthStage.YOUNG) -> dm.Unit:
    unit = dm.Unit(
        id=dm.UnitID(state.allocate_id()),
        name="Resident",
        job=Job.PAWN,
        stage=stage,
        stage_remaining_turns=10,
        loyalty=100,
    )
    state.units[unit.id] = unit
    return unit


def _card(state: dm.MatchState, card_id: str, owner: dm.UnitID | None = None) -> dm.CardInstance:
    card = dm.CardInstance(
        id=dm.CardInstanceID(state.allocate_id()),
        definition=DEFAULT_CARDS[card_id],
        owner_unit_id=owner,
    )
    if owner is not None:
        state.units[owner].owned_card_ids.append(card.id)
    return card


def test_allocate_id_is_monotonic():
    state = dm.MatchState()
    assert [state.allocate_id() for _ in range(3)] == [1, 2, 3]


def test_reset_turn_modifiers_returns_to_neutral():
    state = dm.MatchState(
        gold_multiplier=2.0, gold_bonus=4, pollution_ignored=True, promotion_discount=50
    )
    unit = _unit(state)
    unit.promoted_this_turn = True
    card = _card(state, "copper")
    card.boosted_grade = TreasureGrade.SILVER
    state.hand.append(card)

    state.reset_turn_modifiers()

    assert state.gold_multiplier == 1.0
    assert state.gold_bonus == 0
    assert state.pollution_ignored is False
    assert state.promotion_discount == 0
    assert unit.promoted_this_turn is False
    assert card.boosted_grade is None


def test_remove_unit_clears_slot_cards_and_maintenance():
    state = dm.MatchState()
    unit = _unit(state)
    other = _unit(state)
    house = dm.Household(id=dm.HouseholdID(state.allocate_id()), name="House 1")
    state.households[house.id] = house
    house.set_slot(HouseSlot.ADULT_A, unit.id)
    unit.household_id = house.id
    state.draw_pile.append(_card(state, "labor", unit.id))
    state.discard_pile.append(_card(state, "scout", unit.id))
    state.hand.append(_card(state, "labor", other.id))
    state.recalculate_maintenance_cost()
    assert state.maintenance_cost == 3

    removed = state.remove_unit(unit.id)

    assert removed is unit
    assert unit.id not in state.units
    assert house.adult_a is None
    assert state.draw_pile == []
    assert state.discard_pile == []
    assert len(state.hand) == 1
    assert state.maintenance_cost == 1


def test_remove_unknown_unit_is_noop():
    state = dm.MatchState()
    assert state.remove_unit(dm.UnitID(42)) is None


def test_find_card_searches_every_pile():
    state = dm.MatchState()
    card = _card(state, "copper")
    state.play_area.append(card)
    pile, found = state.find_card(card.id)
    assert pile is state.play_area
    assert found is card
    assert state.find_card(dm.CardInstanceID(999)) is None


def test_boosted_treasure_uses_boosted_value():
    state = dm.MatchState()
    card = _card(state, "copper")
    assert card.gold_value == 1
    card.boosted_grade = TreasureGrade.GOLD
    assert card.gold_value == 4


def test_household_slot_helpers():
    house = dm.Household(id=dm.HouseholdID(1), name="House 1")
    assert house.has_empty_adult_slot()
    house.set_slot(HouseSlot.ADULT_A, dm.UnitID(1))
    house.set_slot(HouseSlot.ADULT_B, dm.UnitID(2))
    assert house.has_two_adults()
    assert not house.has_empty_adult_slot()
    assert house.slot_of(dm.UnitID(2)) is HouseSlot.ADULT_B
    assert house.resident_ids() == [1, 2]


def test_unit_awaiting_job_cannot_breed_or_promote():
    state = dm.MatchState()
    unit = _unit(state)
    assert unit.can_breed()
    assert unit.can_promote(3)
    unit.awaiting_job = True
    assert not unit.can_breed()
    assert not unit.can_promote(3)


def test_is_over_tracks_end_state():
    state = dm.MatchState()
    assert not state.is_over
    state.end_state = EndState.VICTORY
    assert state.is_over
