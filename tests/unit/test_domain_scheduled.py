"""Tests for scheduled validations, raids and the final battle."""

from homestead.domain import models as dm
from homestead.domain.enums import EndState
from homestead.domain.notifications import NotificationBus, RaidResolved, ValidationResolved
from homestead.domain.scheduled import run_scheduled_events


class _FakeLands:
    def __init__(self):
        self.acquired: list[str] = []

    def acquire_land(self, name=None, land_type=None):
        self.acquired.append(name)


class _FakeRaids:
    def __init__(self, final_victory: bool = True):
        self.raided: list[int] = []
        self.final_battles = 0
        self.final_victory = final_victory

    def process_raid(self, turn):
        self.raided.append(turn)
        return RaidResolved(turn=turn, enemy_power=0, defense_power=0, victory=True)

    def process_final_battle(self):
        self.final_battles += 1
        return self.final_victory


def _run(state, *, lands=None, raids=None, disable_end_checks=False):
    bus = NotificationBus(keep_history=True)
    ended: list[EndState] = []

    def end_match(end_state):
        ended.append(end_state)
        state.end_state = end_state

    run_scheduled_events(
        state,
        bus,
        end_match=end_match,
        lands=lands,
        raids=raids,
        disable_end_checks=disable_end_checks,
    )
    return bus, ended


def test_validation_failure_ends_match():
    state = dm.MatchState(turn=10, gold=39)
    lands = _FakeLands()
    bus, ended = _run(state, lands=lands)

    assert ended == [EndState.DEFEAT_VALIDATION]
    assert lands.acquired == []
    assert bus.history == [ValidationResolved(turn=10, required=40, gold=39, passed=False)]


def test_validation_pass_grants_reward_land():
    state = dm.MatchState(turn=10, gold=40)
    lands = _FakeLands()
    _, ended = _run(state, lands=lands)

    assert ended == []
    assert state.validations_passed == 1
    assert lands.acquired == ["Reward land 1"]


def test_validation_failure_tolerated_when_end_checks_disabled():
    state = dm.MatchState(turn=10, gold=0)
    _, ended = _run(state, lands=_FakeLands(), disable_end_checks=True)
    assert ended == []
    assert state.validations_passed == 0


def test_raid_runs_on_raid_turn_only():
    raids = _FakeRaids()
    _run(dm.MatchState(turn=8), raids=raids)
    _run(dm.MatchState(turn=9), raids=raids)
    assert raids.raided == [8]


def test_failed_validation_skips_coinciding_raid():
    raids = _FakeRaids()
    state = dm.MatchState(turn=40, gold=0)
    _, ended = _run(state, raids=raids)
    assert ended == [EndState.DEFEAT_VALIDATION]
    assert raids.raided == []


def test_passed_validation_runs_coinciding_raid():
    raids = _FakeRaids()
    state = dm.MatchState(turn=40, gold=350)
    _run(state, lands=_FakeLands(), raids=raids)
    assert raids.raided == [40]


def test_final_battle_victory():
    raids = _FakeRaids(final_victory=True)
    _, ended = _run(dm.MatchState(turn=60), raids=raids)
    assert ended == [EndState.VICTORY]


def test_final_battle_defeat():
    raids = _FakeRaids(final_victory=False)
    _, ended = _run(dm.MatchState(turn=60), raids=raids)
    assert ended == [EndState.DEFEAT_BATTLE]


def test_final_battle_decides_even_with_end_checks_disabled():
    raids = _FakeRaids(final_victory=False)
    _, ended = _run(dm.MatchState(turn=60), raids=raids, disable_end_checks=True)
    assert ended == [EndState.DEFEAT_BATTLE]


def test_quiet_turn_does_nothing():
    raids = _FakeRaids()
    bus, ended = _run(dm.MatchState(turn=3), lands=_FakeLands(), raids=raids)
    assert ended == []
    assert bus.history == []
    assert raids.raided == []
