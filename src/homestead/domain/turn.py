"""Turn and phase orchestration for Homestead matches.

A turn runs ``TURN_START -> DECK -> PURCHASE -> TURN_END`` and chains straight
into the next turn until the match ends.  The two player-driven phases are
left through :meth:`TurnOrchestrator.end_deck_phase` and
:meth:`TurnOrchestrator.end_turn`.

Start-of-turn work is queued as a list of steps.  A step that needs a player
choice (a grown child picking a job, an effect asking for cards from hand)
registers a :class:`PendingDecision` and the queue halts after that step.
:meth:`TurnOrchestrator.resolve_decision` applies the choice and resumes the
queue exactly where it stopped.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from homestead.utils.rng import RandomSource

from . import endgame, ledger, lifecycle, scheduled
from .decisions import PendingDecision
from .enums import (
    CardType,
    DeathCause,
    DecisionKind,
    EffectKind,
    EndState,
    Job,
    Phase,
    PollutionType,
)
from .models import CardInstance, CardInstanceID, MatchState, PersistentEffect, Unit, UnitID
from .notifications import (
    ActionsChanged,
    CardPlayed,
    JobSelectionRequired,
    MatchEnded,
    NotificationBus,
    PhaseChanged,
    TargetSelectionRequired,
    TurnEnded,
    TurnStarted,
    UnitDied,
    UnitGrew,
)
from .rules_config import DEFAULT_RULES, RulesConfig

if TYPE_CHECKING:
    from homestead.interfaces import (
        IBreedingService,
        ICardEffectService,
        IDeckService,
        IGoldService,
        IHouseholdService,
        ILandService,
        ILoyaltyService,
        IRaidService,
        IRandomEventService,
        IUnitService,
    )

logger = logging.getLogger(__name__)

Step = Callable[[], None]
DecisionHandler = Callable[[Any], None]


@dataclass(slots=True)
class Collaborators:
    """Services the orchestrator drives.

    Gold and units are required.  Every other collaborator is optional; when
    one is missing its sub-step is skipped with a warning.
    """

    gold: IGoldService
    units: IUnitService
    deck: IDeckService | None = None
    households: IHouseholdService | None = None
    breeding: IBreedingService | None = None
    loyalty: ILoyaltyService | None = None
    raids: IRaidService | None = None
    events: IRandomEventService | None = None
    lands: ILandService | None = None
    effects: ICardEffectService | None = None


class TurnOrchestrator:
    """Owns one match state and sequences every turn of it."""

    def __init__(
        self,
        state: MatchState,
        collaborators: Collaborators,
        bus: NotificationBus,
        rng: RandomSource,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        disable_end_checks: bool = False,
    ) -> None:
        self.state = state
        self.collaborators = collaborators
        self.bus = bus
        self.rng = rng
        self.rules = rules
        self.disable_end_checks = disable_end_checks
        self._started = False
        self._pending: dict[int, tuple[PendingDecision, DecisionHandler]] = {}
        self._queued: deque[Step] = deque()
        self._unsubscribe: Callable[[], None] | None = bus.subscribe(self._on_unit_died, UnitDied)

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def pending_decisions(self) -> list[PendingDecision]:
        return [decision for decision, _ in self._pending.values()]

    @property
    def awaiting_decision(self) -> bool:
        return bool(self._pending)

    @property
    def total_combat_power(self) -> int:
        """Unit combat power plus the defence bonus of developed lands."""

        lands = self.collaborators.lands
        land_power = lands.combat_bonus() if lands is not None else 0
        return lifecycle.total_combat_power(self.state, self.rules) + land_power

    def close(self) -> None:
        """Detach from the notification bus.  The match state is left as is."""

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Turn flow
    # ------------------------------------------------------------------

    def start_match(self) -> bool:
        """Enter the first turn.  Only the first call has any effect."""

        if self._started:
            logger.warning("start_match rejected: match already started")
            return False
        if not self._check_running("start_match"):
            return False
        self._started = True
        logger.info("match started")
        return self.advance_turn()

    def advance_turn(self) -> bool:
        """Begin the next turn and run it up to the deck phase.

        Returns:
            ``False`` if the call was rejected without any state change.
        """

        state = self.state
        if not self._check_running("advance_turn") or not self._check_no_pending("advance_turn"):
            return False
        if state.phase not in (Phase.TURN_START, Phase.TURN_END):
            logger.warning("advance_turn rejected in phase %s", state.phase)
            return False
        if state.turn >= self.rules.match.max_turns:
            logger.warning("advance_turn rejected: turn limit %s reached", state.turn)
            return False

        self._started = True
        state.turn += 1
        state.reset_turn_modifiers()
        self._set_phase(Phase.TURN_START)
        logger.info("turn %s started", state.turn)

        self._queued.extend(
            (
                self._step_desertions,
                self._step_growth,
                self._step_breeding,
                self._step_announce_turn,
                self._step_scheduled_events,
                self._step_random_events,
                self._step_enter_deck,
            )
        )
        self._run_queued_steps()
        return True

    def end_deck_phase(self) -> bool:
        """Settle treasure in hand and move on to the purchase phase."""

        state = self.state
        if not self._check_running("end_deck_phase") or not self._check_no_pending("end_deck_phase"):
            return False
        if state.phase is not Phase.DECK:
            logger.warning("end_deck_phase rejected in phase %s", state.phase)
            return False

        deck = self.collaborators.deck
        if deck is None:
            logger.warning("no deck collaborator; treasure settlement skipped")
        else:
            treasure = deck.calculate_treasure_gold()
            self.collaborators.gold.add_gold(treasure, apply_modifiers=True)

        self._set_phase(Phase.PURCHASE)
        return True

    def end_turn(self) -> bool:
        """Settle the turn and chain into the next one.

        Returns:
            ``False`` if the call was rejected without any state change.
        """

        state = self.state
        if not self._check_running("end_turn") or not self._check_no_pending("end_turn"):
            return False
        if state.phase is not Phase.PURCHASE:
            logger.warning("end_turn rejected in phase %s", state.phase)
            return False

        c = self.collaborators
        turn = state.turn
        self._set_phase(Phase.TURN_END)

        self._discard_excess_hand()
        if state.maintenance_cost:
            c.gold.subtract_gold(state.maintenance_cost)
        self._apply_pollution()

        if c.deck is None:
            logger.warning("no deck collaborator; card cleanup skipped")
        else:
            c.deck.cleanup_cards()

        ledger.settle_effects(state, credit=c.gold.add_gold, debit=c.gold.subtract_gold)

        for unit_id in lifecycle.roll_mortality(state, self.rng, self.rules):
            c.units.kill_unit(unit_id, DeathCause.OLD_AGE)

        if c.loyalty is None:
            logger.warning("no loyalty collaborator; loyalty adjustment skipped")
        else:
            c.loyalty.process_loyalty()

        self._check_end_conditions()
        self.bus.publish(TurnEnded(turn=turn))
        logger.info("turn %s ended with %s gold", turn, state.gold)

        if state.is_over:
            return True
        if state.turn >= self.rules.match.max_turns:
            logger.warning(
                "turn limit %s reached without a final battle result", self.rules.match.max_turns
            )
            self._end_match(EndState.DEFEAT_BATTLE)
            return True
        self.advance_turn()
        return True

    # ------------------------------------------------------------------
    # Action budget
    # ------------------------------------------------------------------

    def set_actions(self, count: int) -> bool:
        if not self._check_running("set_actions"):
            return False
        old = self.state.actions_remaining
        new = max(0, count)
        self.state.actions_remaining = new
        if new != old:
            self.bus.publish(ActionsChanged(old=old, new=new))
        return True

    def add_actions(self, count: int) -> bool:
        return self.set_actions(self.state.actions_remaining + count)

    def use_action(self) -> bool:
        if not self._check_running("use_action"):
            return False
        if self.state.actions_remaining <= 0:
            logger.warning("use_action rejected: no actions remaining")
            return False
        return self.set_actions(self.state.actions_remaining - 1)

    # ------------------------------------------------------------------
    # Cards and effects
    # ------------------------------------------------------------------

    def play_card(self, card_id: CardInstanceID) -> bool:
        """Play an action card from hand, spending one action."""

        state = self.state
        if not self._check_running("play_card") or not self._check_no_pending("play_card"):
            return False
        if state.phase is not Phase.DECK:
            logger.warning("play_card rejected in phase %s", state.phase)
            return False
        card = next((card for card in state.hand if card.id == card_id), None)
        if card is None:
            logger.warning("play_card rejected: card %s is not in hand", card_id)
            return False
        if card.card_type is not CardType.ACTION:
            logger.warning("play_card rejected: card %s is a %s card", card_id, card.card_type)
            return False
        if not self.use_action():
            return False

        state.hand.remove(card)
        state.play_area.append(card)
        self.bus.publish(CardPlayed(card_instance_id=card.id, card_id=card.card_id))

        effects = self.collaborators.effects
        if effects is None:
            logger.warning("no card effect collaborator; %s resolved without effect", card.card_id)
        else:
            effects.resolve(card, self)
        return True

    def add_persistent_effect(self, kind: EffectKind, turns: int, value: int) -> PersistentEffect | None:
        if not self._check_running("add_persistent_effect"):
            return None
        return ledger.add_effect(self.state, kind, turns, value)

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def request_card_selection(
        self,
        count: int,
        prompt: str,
        on_selected: Callable[[list[CardInstance]], None],
        *,
        candidates: Iterable[CardInstance] | None = None,
    ) -> PendingDecision | None:
        """Ask the player to pick ``count`` cards from hand.

        The request is capped at the number of cards on offer.  When nothing
        can be picked ``on_selected`` runs immediately with an empty list and
        no decision is raised.

        Args:
            count: Number of cards to pick
            prompt: Text shown to the player
            on_selected: Receives the picked cards once the decision resolves
            candidates: Cards on offer; defaults to the whole hand
        """

        if not self._check_running("request_card_selection"):
            return None
        offered = self.state.hand if candidates is None else candidates
        options = tuple(card.id for card in offered)
        count = min(count, len(options))
        if count <= 0:
            on_selected([])
            return None

        def handle(choice: Any) -> None:
            picked: list[CardInstance] = []
            for card_id in choice:
                found = self.state.find_card(card_id)
                if found is not None:
                    picked.append(found[1])
            on_selected(picked)

        decision = PendingDecision(
            id=self.state.allocate_id(),
            kind=DecisionKind.TARGET_SELECTION,
            prompt=prompt,
            options=options,
            count=count,
        )
        self._pending[decision.id] = (decision, handle)
        self.bus.publish(TargetSelectionRequired(decision=decision))
        return decision

    def resolve_decision(self, decision_id: int, choice: Any) -> bool:
        """Answer a pending decision and resume the step that raised it."""

        if not self._check_running("resolve_decision"):
            return False
        entry = self._pending.get(decision_id)
        if entry is None:
            logger.warning("resolve_decision rejected: no pending decision %s", decision_id)
            return False
        decision, handler = entry
        if not decision.accepts(choice):
            logger.warning("resolve_decision rejected: %r is not a valid answer", choice)
            return False

        del self._pending[decision_id]
        handler(choice)
        if not self._pending:
            self._run_queued_steps()
        return True

    def _request_job_selection(self, unit_id: UnitID) -> None:
        units = self.collaborators.units
        unit = self.state.units[unit_id]
        choices = tuple(units.get_job_choices(unit_id)) or (Job.PAWN,)
        decision = PendingDecision(
            id=self.state.allocate_id(),
            kind=DecisionKind.JOB_SELECTION,
            prompt=f"Choose a job for {unit.name}",
            options=choices,
            subject_id=unit_id,
        )

        def handle(choice: Any) -> None:
            units.select_job(unit_id, Job(choice))

        self._pending[decision.id] = (decision, handle)
        self.bus.publish(JobSelectionRequired(decision=decision))

    # ------------------------------------------------------------------
    # Start-of-turn steps
    # ------------------------------------------------------------------

    def _run_queued_steps(self) -> None:
        while self._queued and not self.state.is_over and not self._pending:
            step = self._queued.popleft()
            step()

    def _step_desertions(self) -> None:
        loyalty = self.collaborators.loyalty
        if loyalty is None:
            logger.warning("no loyalty collaborator; desertions skipped")
            return
        loyalty.process_desertions()

    def _step_growth(self) -> None:
        households = self.collaborators.households
        relocate: Callable[[Unit], bool] | None = None
        if households is not None:

            def relocate(unit: Unit) -> bool:
                return households.relocate_to_adult_slot(unit.id)

        report = lifecycle.advance_growth(self.state, self.rules, relocate=relocate)
        for unit_id, old, new in report.transitions:
            self.bus.publish(UnitGrew(unit_id=unit_id, old=old, new=new))
        for unit_id in report.ran_away:
            logger.info("unit %s found no adult slot and ran away", unit_id)
            self.collaborators.units.kill_unit(unit_id, DeathCause.RAN_AWAY)
        for unit_id in report.matured:
            if unit_id in self.state.units:
                self._request_job_selection(unit_id)

    def _step_breeding(self) -> None:
        breeding = self.collaborators.breeding
        if breeding is None:
            logger.warning("no breeding collaborator; breeding skipped")
            return
        breeding.process_breeding()

    def _step_announce_turn(self) -> None:
        self.bus.publish(TurnStarted(turn=self.state.turn))

    def _step_scheduled_events(self) -> None:
        self._set_phase(Phase.EVENT)
        scheduled.run_scheduled_events(
            self.state,
            self.bus,
            end_match=self._end_match,
            lands=self.collaborators.lands,
            raids=self.collaborators.raids,
            rules=self.rules,
            disable_end_checks=self.disable_end_checks,
        )

    def _step_random_events(self) -> None:
        if self.state.turn <= 1:
            return
        events = self.collaborators.events
        if events is None:
            logger.debug("no random event collaborator; random events skipped")
            return
        self._set_phase(Phase.EVENT)
        events.process_random_event(self.state.turn)

    def _step_enter_deck(self) -> None:
        self._set_phase(Phase.DECK)
        self.set_actions(self.rules.match.starting_actions)
        deck = self.collaborators.deck
        if deck is None:
            logger.warning("no deck collaborator; draw skipped")
            return
        deck.draw_cards(self.rules.match.hand_size)

    # ------------------------------------------------------------------
    # End-of-turn helpers
    # ------------------------------------------------------------------

    def _discard_excess_hand(self) -> None:
        state = self.state
        while len(state.hand) > self.rules.match.max_hand_size:
            card = state.hand.pop(0)
            state.discard_pile.append(card)
            logger.debug("discarded %s from an oversized hand", card.card_id)

    def _apply_pollution(self) -> None:
        state = self.state
        if state.pollution_ignored:
            return
        curses = sum(
            1
            for card in state.hand
            if card.card_type is CardType.POLLUTION and card.definition.pollution is PollutionType.CURSE
        )
        if curses:
            self.collaborators.gold.subtract_gold(curses * self.rules.match.curse_penalty)

    # ------------------------------------------------------------------
    # Match status
    # ------------------------------------------------------------------

    def _on_unit_died(self, notification: UnitDied) -> None:
        self._check_end_conditions()

    def _check_end_conditions(self) -> None:
        if self.state.is_over or self.disable_end_checks:
            return
        outcome = endgame.evaluate_end_state(self.state)
        if outcome is not EndState.NONE:
            self._end_match(outcome)

    def _end_match(self, end_state: EndState) -> None:
        state = self.state
        if state.is_over:
            return
        state.end_state = end_state
        self._pending.clear()
        self._queued.clear()
        self._set_phase(Phase.GAME_OVER)
        logger.info("match ended on turn %s: %s", state.turn, end_state)
        self.bus.publish(MatchEnded(end_state=end_state, turn=state.turn))

    def _set_phase(self, phase: Phase) -> None:
        old = self.state.phase
        if old is phase:
            return
        self.state.phase = phase
        self.bus.publish(PhaseChanged(old=old, new=phase))

    def _check_running(self, operation: str) -> bool:
        if self.state.is_over:
            logger.warning("%s rejected: match is over (%s)", operation, self.state.end_state)
            return False
        return True

    def _check_no_pending(self, operation: str) -> bool:
        if self._pending:
            logger.warning("%s rejected: %s decision(s) pending", operation, len(self._pending))
            return False
        return True
