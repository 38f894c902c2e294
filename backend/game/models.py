"""Game-state document schema.

The document is owned by the browser client and travels as camelCase JSON on
every request. These models describe its shape and defaults; the engine itself
works on the plain dict produced by GameState.model_dump(by_alias=True).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .clock import day_key, now_local, to_millis

UNKNOWN_PERSONALITY = "Unknown"


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Stats(_Document):
    """Player attributes, each 0–100."""

    health: int = 100
    energy: int = 100
    focus: int = 50
    discipline: int = 50
    productivity: int = 50
    consistency: int = 50


class Statistics(_Document):
    total_messages: int = 0
    total_xp_earned: int = 0
    average_xp_per_message: int = 0
    highest_single_message_xp: int = 0
    total_high_quality_messages: int = 0
    total_days_active: int = 1
    favorite_question_type: str = "Analytical"
    quests_completed: int = 0
    daily_quests_completed_total: int = 0


class QuestInstance(_Document):
    """A quest template copied into the document with live progress."""

    id: int
    title: str
    target: int
    type: str
    xp: int
    progress: int = 0
    completed: bool = False


class Player(_Document):
    name: str = "Adventurer"
    level: int = 1
    xp: int = 0
    total_xp_earned: int = 0
    title: str = "Curious Beginner"
    title_level: int = 1
    stats: Stats = Field(default_factory=Stats)
    streak: int = 0
    longest_streak: int = 0
    current_day: int
    last_message_day: str
    last_message_time: int
    badges: list[str] = Field(default_factory=list)
    statistics: Statistics = Field(default_factory=Statistics)
    personality_type: str = UNKNOWN_PERSONALITY


class GameState(_Document):
    player: Player
    daily_quests: list[QuestInstance] = Field(default_factory=list)
    weekly_quests: list[QuestInstance] = Field(default_factory=list)
    last_quest_generation_day: str
    last_weekly_quest_gen_date: str
    message_count: int = 0

    @classmethod
    def new(cls, now: datetime | None = None) -> GameState:
        """A fresh document anchored at `now`."""
        now = now or now_local()
        today = day_key(now)
        player = Player(
            current_day=now.day,
            last_message_day=today,
            last_message_time=to_millis(now),
        )
        return cls(
            player=player,
            last_quest_generation_day=today,
            last_weekly_quest_gen_date=today,
        )


def default_game_state(now: datetime | None = None) -> dict:
    return GameState.new(now).model_dump(by_alias=True)


def default_stats() -> dict:
    return Stats().model_dump(by_alias=True)


def default_statistics() -> dict:
    return Statistics().model_dump(by_alias=True)
