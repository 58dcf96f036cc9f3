"""Unit tests for the Card Effect Service.

Every catalog action card is played through the orchestrator so the effects
run the way they do in a match, including the target selection pause.
"""

from homestead.config import Settings
from homestead.domain.cards import CardEffect
from homestead.domain.enums import CardEffectKind, DecisionKind, EffectKind, Phase, TreasureGrade
from homestead.factory import create_match
from homestead.services import CardEffectService
from homestead.utils.rng import ScriptedRandom


class TestCardEffectService:
    """Tests for CardEffectService driven by play_card."""

    def setup_method(self):
        self.match = create_match(
            settings=Settings(shuffle_starting_deck=False),
            rng=ScriptedRandom(default=99),
        )
        self.state = self.match.state
        self.orch = self.match.orchestrator
        self.orch.start_match()

    def _play(self, card_id: str):
        card = self.match.deck.add_card_to_hand(card_id)
        assert self.orch.play_card(card.id) is True
        return card

    def test_default_match_wires_effect_service(self):
        assert isinstance(self.match.effects, CardEffectService)
        assert self.orch.collaborators.effects is self.match.effects

    def test_labor_adds_gold(self):
        assert self.state.gold == 10
        self._play("labor")
        assert self.state.gold == 12

    def test_scout_draws_two_cards(self):
        self._play("scout")
        assert len(self.state.hand) == 7
        assert len(self.state.draw_pile) == 3

    def test_decree_adds_action_multiplier_and_discount(self):
        self._play("decree")

        assert self.state.actions_remaining == 1
        assert self.state.gold_multiplier == 1.5
        assert self.state.promotion_discount == 25

        self.orch.end_deck_phase()
        assert self.state.gold == 13

    def test_gold_multipliers_stack(self):
        self.orch.add_actions(1)
        self._play("decree")
        self._play("decree")
        assert self.state.gold_multiplier == 2.25

    def test_fortify_adds_bonus_and_gold_per_turn(self):
        self._play("fortify")

        assert self.state.gold_bonus == 2
        [effect] = self.state.persistent_effects
        assert effect.kind is EffectKind.GOLD_PER_TURN
        assert effect.value == 1
        assert effect.remaining_turns == 3

    def test_investment_pays_out_after_delay(self):
        self._play("investment")

        [effect] = self.state.persistent_effects
        assert effect.kind is EffectKind.DELAYED_GOLD
        assert effect.value == 8
        assert effect.remaining_turns == 3

    def test_festival_adds_gold_and_maintenance_increase(self):
        self._play("festival")

        assert self.state.gold == 15
        [effect] = self.state.persistent_effects
        assert effect.kind is EffectKind.MAINTENANCE_INCREASE
        assert effect.value == 50
        assert effect.remaining_turns == 2

    def test_purify_pauses_for_pollution_then_ignores_pollution(self):
        curse = self.match.deck.add_card_to_hand("curse")
        self._play("purify")

        [decision] = self.orch.pending_decisions
        assert decision.kind is DecisionKind.TARGET_SELECTION
        assert decision.options == (curse.id,)
        assert self.state.pollution_ignored is False
        assert self.orch.end_deck_phase() is False

        assert self.orch.resolve_decision(decision.id, (curse.id,)) is True
        assert self.state.find_card(curse.id) is None
        assert self.state.pollution_ignored is True
        assert self.orch.end_deck_phase() is True

    def test_purify_without_pollution_does_not_pause(self):
        self._play("purify")
        assert not self.orch.awaiting_decision
        assert self.state.pollution_ignored is True

    def test_polish_boosts_chosen_treasure(self):
        coppers = [card for card in self.state.hand if card.card_id == "copper"]
        self._play("polish")

        [decision] = self.orch.pending_decisions
        assert set(decision.options) == {card.id for card in coppers}
        assert self.orch.resolve_decision(decision.id, (coppers[0].id,)) is True
        assert coppers[0].boosted_grade is TreasureGrade.SILVER

        self.orch.end_deck_phase()
        assert self.state.gold == 13

    def test_salvage_destroys_chosen_card(self):
        labor = next(card for card in self.state.hand if card.card_id == "labor")
        self._play("salvage")

        [decision] = self.orch.pending_decisions
        assert len(decision.options) == 5
        assert self.orch.resolve_decision(decision.id, (labor.id,)) is True
        assert self.state.find_card(labor.id) is None
        assert self.state.maintenance_cost == 2
        assert self.state.phase is Phase.DECK

    def test_effects_without_orchestrator_pick_first_pollution(self):
        curse = self.match.deck.add_card_to_hand("curse")
        gold = self.state.gold
        effects = (
            CardEffect(CardEffectKind.DESTROY_POLLUTION, targets=1),
            CardEffect(CardEffectKind.ADD_GOLD, value=4),
        )
        self.match.effects.apply_effects(effects)

        assert self.state.find_card(curse.id) is None
        assert self.state.gold == gold + 4

    def test_event_effects_apply_without_orchestrator(self):
        self.match.effects.apply_effects(
            (
                CardEffect(CardEffectKind.SPEND_GOLD_PERCENT, value=20),
                CardEffect(CardEffectKind.ADD_CARD_TO_DECK, card_id="silver"),
                CardEffect(CardEffectKind.ADD_ACTION, value=3),
            )
        )

        assert self.state.gold == 8
        assert self.state.draw_pile[-1].card_id == "silver"
        assert self.state.actions_remaining == 1
