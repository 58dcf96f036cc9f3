"""Tests for the turn orchestrator: phase flow, pause points and end states."""

from homestead.config import Settings
from homestead.domain import models as dm
from homestead.domain.enums import (
    DeathCause,
    DecisionKind,
    EffectKind,
    EndState,
    GrowthStage,
    HouseSlot,
    Job,
    LandType,
    Phase,
)
from homestead.domain.notifications import (
    GoldChanged,
    JobSelectionRequired,
    MatchEnded,
    NotificationBus,
    TurnStarted,
    UnitDied,
)
from homestead.domain.rules_config import MatchRules, RaidRules, RulesConfig, ValidationRules
from homestead.domain.turn import Collaborators, TurnOrchestrator
from homestead.factory import create_match
from homestead.services import GoldService, UnitService
from homestead.utils.rng import ScriptedRandom


def _match(rolls=(), *, rules=None, **settings):
    settings.setdefault("shuffle_starting_deck", False)
    match = create_match(
        rules=rules,
        settings=Settings(**settings),
        rng=ScriptedRandom(rolls, default=99),
    )
    match.bus.keep_history = True
    return match


def _deaths(match):
    return [n for n in match.bus.history if isinstance(n, UnitDied)]


def test_start_match_reaches_deck_phase():
    match = _match()
    assert match.orchestrator.start_match() is True

    state = match.state
    assert state.turn == 1
    assert state.phase is Phase.DECK
    assert len(state.hand) == 5
    assert [card.card_id for card in state.hand] == ["labor", "labor", "scout", "copper", "copper"]
    assert state.actions_remaining == 1
    assert TurnStarted(turn=1) in match.bus.history


def test_start_match_only_works_once():
    match = _match()
    match.orchestrator.start_match()
    assert match.orchestrator.start_match() is False
    assert match.state.turn == 1


def test_end_turn_outside_purchase_is_rejected():
    match = _match()
    match.orchestrator.start_match()
    gold = match.state.gold

    assert match.orchestrator.end_turn() is False
    assert match.state.phase is Phase.DECK
    assert match.state.gold == gold
    assert match.state.turn == 1


def test_full_turn_settles_and_chains_into_next_turn():
    match = _match()
    orch = match.orchestrator
    orch.start_match()

    assert orch.end_deck_phase() is True
    assert match.state.phase is Phase.PURCHASE
    assert match.state.gold == 12

    assert orch.end_turn() is True
    state = match.state
    assert state.turn == 2
    assert state.phase is Phase.DECK
    assert state.gold == 9
    assert [card.card_id for card in state.hand] == ["copper"] * 5
    assert len(state.discard_pile) == 5


def test_treasure_settlement_applies_multiplier_then_bonus():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    match.state.gold_multiplier = 2.0
    match.state.gold_bonus = 3

    orch.end_deck_phase()
    assert match.state.gold == 17


def test_turn_modifiers_reset_each_turn():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    orch.end_deck_phase()
    match.state.gold_multiplier = 3.0
    match.state.gold_bonus = 4
    match.state.pollution_ignored = True
    match.state.promotion_discount = 50

    orch.end_turn()

    state = match.state
    assert state.turn == 2
    assert state.gold_multiplier == 1.0
    assert state.gold_bonus == 0
    assert state.pollution_ignored is False
    assert state.promotion_discount == 0


def test_maintenance_can_drive_gold_negative():
    state = dm.MatchState(turn=2, phase=Phase.PURCHASE, gold=5, maintenance_cost=8)
    bus = NotificationBus(keep_history=True)
    rng = ScriptedRandom(default=99)
    gold = GoldService(state, bus)
    units = UnitService(state, bus, rng, gold)
    units.create_unit("Solo", Job.PAWN, GrowthStage.YOUNG, grant_starting_cards=False)
    orch = TurnOrchestrator(state, Collaborators(gold=gold, units=units), bus, rng)

    assert orch.end_turn() is True

    assert state.gold == -3
    assert GoldChanged(old=5, new=-3) in bus.history
    assert state.turn == 3
    assert state.phase is Phase.DECK
    assert state.end_state is EndState.NONE


def test_curse_in_hand_costs_gold_at_end_of_turn():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    orch.end_deck_phase()
    match.deck.add_card_to_hand("curse")
    gold = match.state.gold

    orch.end_turn()
    assert match.state.gold == gold - 3 - 2


def test_ignored_pollution_skips_curse_penalty():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    orch.end_deck_phase()
    match.deck.add_card_to_hand("curse")
    match.state.pollution_ignored = True
    gold = match.state.gold

    orch.end_turn()
    assert match.state.gold == gold - 3


def test_persistent_effect_settles_at_end_of_turn():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    orch.end_deck_phase()
    assert orch.add_persistent_effect(EffectKind.DELAYED_GOLD, 1, 10) is not None
    gold = match.state.gold

    orch.end_turn()
    assert match.state.gold == gold - 3 + 10
    assert match.state.persistent_effects == []


def test_old_unit_can_die_at_end_of_turn():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    knight = next(unit for unit in match.state.units.values() if unit.job is Job.KNIGHT)
    knight.stage = GrowthStage.OLD
    knight.old_age_turns = 9
    orch.end_deck_phase()
    match.rng.push(0)

    orch.end_turn()

    assert knight.id not in match.state.units
    assert [d.cause for d in _deaths(match)] == [DeathCause.OLD_AGE]
    assert match.state.maintenance_cost == 2


def test_action_budget_is_clamped():
    match = _match()
    orch = match.orchestrator
    orch.start_match()

    orch.set_actions(-3)
    assert match.state.actions_remaining == 0
    assert orch.use_action() is False

    orch.add_actions(2)
    assert orch.use_action() is True
    assert orch.use_action() is True
    assert orch.use_action() is False
    assert match.state.actions_remaining == 0


def test_play_card_spends_an_action():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    labors = [card for card in match.state.hand if card.card_id == "labor"]
    copper = next(card for card in match.state.hand if card.card_id == "copper")

    assert orch.play_card(copper.id) is False
    assert orch.play_card(labors[0].id) is True
    assert match.state.actions_remaining == 0
    assert labors[0] in match.state.play_area
    assert orch.play_card(labors[1].id) is False
    assert labors[1] in match.state.hand


def test_card_selection_pauses_until_resolved():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    hand = list(match.state.hand)
    picked = []

    decision = orch.request_card_selection(2, "Discard two cards", picked.extend)

    assert decision is not None
    assert decision.kind is DecisionKind.TARGET_SELECTION
    assert decision.count == 2
    assert orch.awaiting_decision
    assert orch.end_deck_phase() is False
    assert orch.resolve_decision(decision.id, (hand[0].id,)) is False
    assert orch.resolve_decision(decision.id, (hand[0].id, hand[0].id)) is False

    assert orch.resolve_decision(decision.id, (hand[0].id, hand[1].id)) is True
    assert [card.id for card in picked] == [hand[0].id, hand[1].id]
    assert not orch.awaiting_decision
    assert orch.end_deck_phase() is True


def test_card_selection_with_nothing_to_pick_runs_immediately():
    match = _match()
    orch = match.orchestrator
    orch.start_match()
    calls = []

    assert orch.request_card_selection(0, "Pick none", calls.append) is None
    assert calls == [[]]
    assert not orch.awaiting_decision


def test_grown_child_pauses_turn_for_job_selection():
    match = _match([0, 80])
    home = next(iter(match.state.households.values()))
    child = match.units.create_unit("Kid", Job.PAWN, GrowthStage.CHILD, grant_starting_cards=False)
    match.households.place_unit(child.id, home.id, HouseSlot.CHILD)
    child.stage_remaining_turns = 1
    orch = match.orchestrator

    orch.start_match()

    assert child.stage is GrowthStage.YOUNG
    assert child.awaiting_job
    assert match.state.phase is Phase.TURN_START
    assert match.state.hand == []
    [decision] = orch.pending_decisions
    assert decision.kind is DecisionKind.JOB_SELECTION
    assert decision.subject_id == child.id
    assert decision.options == (Job.PAWN, Job.QUEEN, Job.KNIGHT)
    assert JobSelectionRequired(decision=decision) in match.bus.history

    assert orch.advance_turn() is False
    assert orch.end_deck_phase() is False
    assert orch.end_turn() is False
    assert orch.resolve_decision(decision.id, Job.ROOK) is False
    assert orch.resolve_decision(decision.id + 1000, Job.KNIGHT) is False

    assert orch.resolve_decision(decision.id, Job.KNIGHT) is True
    assert child.job is Job.KNIGHT
    assert not child.awaiting_job
    assert match.state.phase is Phase.DECK
    assert len(match.state.hand) == 5
    assert match.state.maintenance_cost == 4


def test_grown_child_without_adult_slot_runs_away():
    match = _match()
    spare = match.units.create_unit("Spare", Job.PAWN, GrowthStage.YOUNG)
    assert match.households.auto_place_unit(spare.id)
    home = next(iter(match.state.households.values()))
    child = match.units.create_unit("Kid", Job.PAWN, GrowthStage.CHILD, grant_starting_cards=False)
    match.households.place_unit(child.id, home.id, HouseSlot.CHILD)
    child.stage_remaining_turns = 1

    match.orchestrator.start_match()

    assert child.id not in match.state.units
    assert home.child is None
    assert [(d.unit_id, d.cause) for d in _deaths(match)] == [(child.id, DeathCause.RAN_AWAY)]
    assert not match.orchestrator.awaiting_decision
    assert match.state.phase is Phase.DECK


def test_validation_failure_through_turn_flow():
    match = _match()
    match.state.turn = 9
    match.state.phase = Phase.TURN_END
    match.state.gold = 39

    assert match.orchestrator.advance_turn() is True

    state = match.state
    assert state.turn == 10
    assert state.end_state is EndState.DEFEAT_VALIDATION
    assert state.phase is Phase.GAME_OVER
    assert state.hand == []
    assert MatchEnded(end_state=EndState.DEFEAT_VALIDATION, turn=10) in match.bus.history


def test_validation_pass_through_turn_flow_grants_land():
    match = _match()
    match.state.turn = 9
    match.state.phase = Phase.TURN_END
    match.state.gold = 40

    match.orchestrator.advance_turn()

    state = match.state
    assert state.end_state is EndState.NONE
    assert state.validations_passed == 1
    assert len(state.lands) == 3
    assert len(state.households) == 3
    assert state.phase is Phase.DECK


def test_all_dead_ends_match_and_is_terminal():
    match = _match()
    orch = match.orchestrator
    orch.start_match()

    for unit_id in list(match.state.units):
        match.units.kill_unit(unit_id, DeathCause.EFFECT)

    state = match.state
    assert state.end_state is EndState.DEFEAT_ALL_DEAD
    assert state.phase is Phase.GAME_OVER
    assert orch.end_deck_phase() is False
    assert orch.end_turn() is False
    assert orch.advance_turn() is False
    assert orch.set_actions(3) is False
    assert state.end_state is EndState.DEFEAT_ALL_DEAD
    assert state.turn == 1
    ended = [n for n in match.bus.history if isinstance(n, MatchEnded)]
    assert len(ended) == 1


def test_disabled_end_checks_keep_empty_roster_running():
    match = _match(disable_end_checks=True)
    orch = match.orchestrator
    orch.start_match()

    for unit_id in list(match.state.units):
        match.units.kill_unit(unit_id, DeathCause.EFFECT)
    assert match.state.end_state is EndState.NONE

    orch.end_deck_phase()
    orch.end_turn()
    assert match.state.end_state is EndState.NONE
    assert match.state.turn == 2


def test_turn_limit_ends_match_without_final_battle():
    rules = RulesConfig(match=MatchRules(max_turns=2))
    match = _match(rules=rules)
    orch = match.orchestrator
    orch.start_match()
    orch.end_deck_phase()
    orch.end_turn()
    assert match.state.turn == 2

    orch.end_deck_phase()
    assert orch.end_turn() is True

    state = match.state
    assert state.turn == 2
    assert state.end_state is EndState.DEFEAT_BATTLE
    assert state.phase is Phase.GAME_OVER
    assert MatchEnded(end_state=EndState.DEFEAT_BATTLE, turn=2) in match.bus.history
    assert orch.advance_turn() is False


def test_match_without_raid_collaborator_ends_at_turn_limit():
    rules = RulesConfig(
        match=MatchRules(max_turns=3),
        validation=ValidationRules(turns=(), gold_required=()),
        raid=RaidRules(turns=(), final_battle_turn=3),
    )
    state = dm.MatchState()
    bus = NotificationBus(keep_history=True)
    rng = ScriptedRandom(default=99)
    gold = GoldService(state, bus)
    units = UnitService(state, bus, rng, gold, rules=rules)
    units.create_unit("Solo", Job.PAWN, GrowthStage.YOUNG, grant_starting_cards=False)
    orch = TurnOrchestrator(state, Collaborators(gold=gold, units=units), bus, rng, rules=rules)

    orch.start_match()
    for _ in range(10):
        if state.is_over:
            break
        assert orch.end_deck_phase() is True
        assert orch.end_turn() is True

    assert state.turn == 3
    assert state.end_state is EndState.DEFEAT_BATTLE
    assert state.phase is Phase.GAME_OVER


def test_closed_orchestrator_ignores_unit_deaths():
    match = _match()
    orch = match.orchestrator
    orch.start_match()

    orch.close()
    orch.close()
    for unit_id in list(match.state.units):
        match.units.kill_unit(unit_id, DeathCause.EFFECT)

    assert match.state.units == {}
    assert match.state.end_state is EndState.NONE
    assert match.state.phase is Phase.DECK


def test_total_combat_power_matches_raid_defence():
    match = _match()
    land = next(iter(match.state.lands.values()))
    base = match.orchestrator.total_combat_power
    land.land_type = LandType.WATCHTOWER
    land.level = 1

    assert match.orchestrator.total_combat_power == base + 15
    assert match.orchestrator.total_combat_power == match.raids.defense_power()
