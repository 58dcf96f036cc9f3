"""Enumerations used across the Homestead domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Phase(StrEnum):
    """Sub-stages of a single turn."""

    TURN_START = "turn_start"
    EVENT = "event"
    DECK = "deck"
    PURCHASE = "purchase"
    TURN_END = "turn_end"
    GAME_OVER = "game_over"


class EndState(StrEnum):
    """Match outcome; anything other than ``NONE`` is terminal."""

    NONE = "none"
    VICTORY = "victory"
    DEFEAT_BANKRUPT = "defeat_bankrupt"
    DEFEAT_VALIDATION = "defeat_validation"
    DEFEAT_BATTLE = "defeat_battle"
    DEFEAT_ALL_DEAD = "defeat_all_dead"


class GrowthStage(StrEnum):
    """Age categories a unit moves through."""

    CHILD = "child"
    YOUNG = "young"
    MIDDLE = "middle"
    OLD = "old"


class Job(StrEnum):
    """Unit jobs. ``NONE`` is never assigned by the core."""

    NONE = "none"
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"


class CardType(StrEnum):
    TREASURE = "treasure"
    ACTION = "action"
    POLLUTION = "pollution"


class TreasureGrade(IntEnum):
    """Treasure grades in ascending value order."""

    COPPER = 1
    SILVER = 2
    GOLD = 3
    EMERALD = 4
    SAPPHIRE = 5
    RUBY = 6
    DIAMOND = 7


class PollutionType(StrEnum):
    """Pollution cards clog the hand; curses also cost gold at turn end."""

    DEBT = "debt"
    CURSE = "curse"
    DISEASE = "disease"
    DAMAGE = "damage"


class EffectKind(StrEnum):
    """Persistent effect kinds settled by the ledger."""

    DELAYED_GOLD = "delayed_gold"
    GOLD_PER_TURN = "gold_per_turn"
    MAINTENANCE_INCREASE = "maintenance_increase"


class CardEffectKind(StrEnum):
    """Effects an action card or a random event can carry."""

    DRAW_CARD = "draw_card"
    ADD_ACTION = "add_action"
    ADD_GOLD = "add_gold"
    GOLD_MULTIPLIER = "gold_multiplier"
    GOLD_BONUS = "gold_bonus"
    DELAYED_GOLD = "delayed_gold"
    PERSISTENT_GOLD = "persistent_gold"
    PERSISTENT_MAINTENANCE = "persistent_maintenance"
    IGNORE_POLLUTION = "ignore_pollution"
    PROMOTION_DISCOUNT = "promotion_discount"
    BOOST_TREASURE = "boost_treasure"
    DESTROY_CARD = "destroy_card"
    DESTROY_POLLUTION = "destroy_pollution"
    ADD_CARD_TO_DECK = "add_card_to_deck"
    SPEND_GOLD_PERCENT = "spend_gold_percent"


class HouseSlot(StrEnum):
    ADULT_A = "adult_a"
    ADULT_B = "adult_b"
    CHILD = "child"


class LandType(StrEnum):
    """Development routes a land can take."""

    EMPTY = "empty"
    FARM = "farm"
    VILLAGE = "village"
    WATCHTOWER = "watchtower"
    CHAPEL = "chapel"
    STUDY = "study"
    SHOP = "shop"


class DecisionKind(StrEnum):
    """Player decisions that pause the turn."""

    JOB_SELECTION = "job_selection"
    TARGET_SELECTION = "target_selection"


class DeathCause(StrEnum):
    OLD_AGE = "old_age"
    DESERTION = "desertion"
    RAN_AWAY = "ran_away"
    RAID = "raid"
    EFFECT = "effect"


class RaidDamage(StrEnum):
    """What a lost raid cost the player."""

    NONE = "none"
    GOLD_LOSS = "gold_loss"
    CHILD_KIDNAPPED = "child_kidnapped"
