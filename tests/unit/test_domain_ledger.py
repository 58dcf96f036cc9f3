"""Tests for the persistent effect ledger."""

import pytest

from homestead.domain import ledger
from homestead.domain import models as dm
from homestead.domain.enums import EffectKind


class _Wallet:
    def __init__(self, state: dm.MatchState):
        self.state = state
        self.credits: list[int] = []
        self.debits: list[int] = []

    def credit(self, amount: int) -> None:
        self.credits.append(amount)
        self.state.gold += amount

    def debit(self, amount: int) -> None:
        self.debits.append(amount)
        self.state.gold -= amount


def _settle(state: dm.MatchState, wallet: _Wallet) -> int:
    return ledger.settle_effects(state, credit=wallet.credit, debit=wallet.debit)


def test_add_effect_rejects_non_positive_turns():
    state = dm.MatchState()
    with pytest.raises(ValueError, match="turns must be positive"):
        ledger.add_effect(state, EffectKind.GOLD_PER_TURN, 0, 5)
    assert state.persistent_effects == []


def test_delayed_gold_pays_once_when_due():
    state = dm.MatchState()
    wallet = _Wallet(state)
    ledger.add_effect(state, EffectKind.DELAYED_GOLD, 3, 30)

    assert _settle(state, wallet) == 0
    assert _settle(state, wallet) == 0
    assert _settle(state, wallet) == 30
    assert state.persistent_effects == []
    assert _settle(state, wallet) == 0
    assert wallet.credits == [30]


def test_gold_per_turn_pays_every_turn_until_expiry():
    state = dm.MatchState()
    wallet = _Wallet(state)
    ledger.add_effect(state, EffectKind.GOLD_PER_TURN, 2, 4)

    _settle(state, wallet)
    _settle(state, wallet)
    _settle(state, wallet)

    assert wallet.credits == [4, 4]
    assert state.gold == 8


def test_single_turn_effect_fires_once():
    state = dm.MatchState()
    wallet = _Wallet(state)
    ledger.add_effect(state, EffectKind.GOLD_PER_TURN, 1, 7)
    assert _settle(state, wallet) == 7
    assert state.persistent_effects == []


def test_maintenance_increase_charges_percentage():
    state = dm.MatchState(maintenance_cost=10)
    wallet = _Wallet(state)
    ledger.add_effect(state, EffectKind.MAINTENANCE_INCREASE, 2, 50)

    assert _settle(state, wallet) == -5
    assert wallet.debits == [5]
    assert state.gold == -5


def test_maintenance_increase_on_zero_upkeep_charges_nothing():
    state = dm.MatchState(maintenance_cost=0)
    wallet = _Wallet(state)
    ledger.add_effect(state, EffectKind.MAINTENANCE_INCREASE, 1, 50)
    assert _settle(state, wallet) == 0
    assert wallet.debits == []


def test_effects_age_independently():
    state = dm.MatchState()
    wallet = _Wallet(state)
    short = ledger.add_effect(state, EffectKind.GOLD_PER_TURN, 1, 1)
    long = ledger.add_effect(state, EffectKind.GOLD_PER_TURN, 3, 2)

    _settle(state, wallet)

    assert short not in state.persistent_effects
    assert state.persistent_effects == [long]
    assert long.remaining_turns == 2
