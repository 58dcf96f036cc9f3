"""Declarative rule configuration for a Homestead match."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import GrowthStage, Job


@dataclass(frozen=True, slots=True)
class MatchRules:
    """Match length, hand and action sizes, starting resources."""

    max_turns: int = 60
    starting_gold: int = 10
    starting_lands: int = 2
    starting_treasures: int = 7
    hand_size: int = 5
    max_hand_size: int = 10
    starting_actions: int = 1
    max_houses: int = 12
    curse_penalty: int = 2


@dataclass(frozen=True, slots=True)
class ValidationRules:
    """Economic audits: ``gold_required[i]`` applies on ``turns[i]``."""

    turns: tuple[int, ...] = (10, 20, 30, 40, 50)
    gold_required: tuple[int, ...] = (40, 100, 200, 350, 500)

    def requirement_for(self, turn: int) -> int | None:
        """Return the gold requirement for ``turn`` or ``None`` if it is not an audit turn."""

        if turn not in self.turns:
            return None
        index = self.turns.index(turn)
        if index >= len(self.gold_required):
            return None
        return self.gold_required[index]


@dataclass(frozen=True, slots=True)
class RaidRules:
    """Raid schedule, enemy scaling and the final battle."""

    turns: tuple[int, ...] = (8, 16, 24, 32, 40, 48, 56)
    enemy_power_base: int = 10
    enemy_power_per_turn: int = 3
    gold_loss_percent: int = 30
    min_gold_loss: int = 10
    final_battle_turn: int = 60
    final_battle_required_power: int = 500

    def enemy_power(self, turn: int) -> int:
        return turn * self.enemy_power_per_turn + self.enemy_power_base


@dataclass(frozen=True, slots=True)
class GrowthRules:
    """Stage durations and the old-age mortality table."""

    child_turns: int = 3
    young_turns: int = 10
    middle_turns: int = 10
    old_turns: int = 5
    old_age_grace_turns: int = 5
    old_age_death_chances: tuple[int, ...] = (20, 40, 60, 80, 100)

    def stage_duration(self, stage: GrowthStage) -> int:
        return {
            GrowthStage.CHILD: self.child_turns,
            GrowthStage.YOUNG: self.young_turns,
            GrowthStage.MIDDLE: self.middle_turns,
            GrowthStage.OLD: self.old_turns,
        }[stage]

    def death_chance(self, old_age_turns: int) -> int:
        """Percent chance of dying after ``old_age_turns`` turns of old age."""

        if old_age_turns <= self.old_age_grace_turns or not self.old_age_death_chances:
            return 0
        index = min(
            old_age_turns - self.old_age_grace_turns - 1,
            len(self.old_age_death_chances) - 1,
        )
        return self.old_age_death_chances[index]


@dataclass(frozen=True, slots=True)
class LoyaltyRules:
    child_default: int = 50
    adult_default: int = 100
    deficit_penalty: int = -20
    surplus_bonus: int = 10


@dataclass(frozen=True, slots=True)
class BreedingRules:
    """Pregnancy length and the escalating fertility chance per attempt."""

    pregnancy_turns: int = 3
    fertility_chances: tuple[int, ...] = (20, 40, 60, 80, 100)

    def fertility_chance(self, attempt: int) -> int:
        if not self.fertility_chances:
            return 0
        index = max(0, min(attempt - 1, len(self.fertility_chances) - 1))
        return self.fertility_chances[index]


@dataclass(frozen=True, slots=True)
class PromotionRules:
    costs: tuple[int, ...] = (10, 25, 50)
    max_level: int = 3


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Per-job base power and modifiers feeding a unit's combat power."""

    pawn_power: int = 10
    knight_power: int = 30
    bishop_power: int = 15
    rook_power: int = 25
    queen_power: int = 35
    promotion_bonus_per_level: int = 10
    old_age_multiplier: float = 0.75

    def job_base_power(self, job: Job) -> int:
        return {
            Job.PAWN: self.pawn_power,
            Job.KNIGHT: self.knight_power,
            Job.BISHOP: self.bishop_power,
            Job.ROOK: self.rook_power,
            Job.QUEEN: self.queen_power,
        }.get(job, 0)


@dataclass(frozen=True, slots=True)
class JobChanceRules:
    """Percent weights for the random job offers (Pawn is always offered)."""

    queen: int = 10
    rook: int = 30
    bishop: int = 30
    knight: int = 30


@dataclass(frozen=True, slots=True)
class LandRules:
    develop_costs: tuple[int, ...] = (15, 30, 60)
    max_level: int = 3
    watchtower_power: tuple[int, ...] = (15, 30, 50)


@dataclass(frozen=True, slots=True)
class EventRules:
    """Percent chance that a random event fires at the start of a turn."""

    trigger_chance: int = 80


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    match: MatchRules = MatchRules()
    validation: ValidationRules = ValidationRules()
    raid: RaidRules = RaidRules()
    growth: GrowthRules = GrowthRules()
    loyalty: LoyaltyRules = LoyaltyRules()
    breeding: BreedingRules = BreedingRules()
    promotion: PromotionRules = PromotionRules()
    combat: CombatRules = CombatRules()
    job_chances: JobChanceRules = JobChanceRules()
    land: LandRules = LandRules()
    events: EventRules = EventRules()


DEFAULT_RULES = RulesConfig()
