"""Daily and weekly quest generation and progress.

Daily quests: 3 templates drawn at random, replaced when the calendar day
changes. Weekly quests: 3 templates, replaced once 7 calendar days have passed
since the last draw.

Progress rules per message (daily):
  messages           +1 when the message earned XP
  long-question      +1 for a question of 10+ words
  focus-maintenance  +1 while focus is 70+
  high-xp-message    +1 when the message earned 50+ XP
  volume             +1 always
  philosophical      +1 for a question longer than 100 characters
  streak             +1 always
  long-message       +1 for 500+ characters

Weekly:
  volume             +1 when the message earned XP
  questions          +1 for a question
  xp-gain            +XP earned
  daily-quests-week  +number of daily quests completed by this message
  focus-week         +1 on the first message of a day while focus is 80+

Progress never exceeds the target and a completed quest never reopens.
"""

import logging
import random
from datetime import datetime
from typing import Any

from .catalog import DAILY_QUEST_TEMPLATES, QUESTS_PER_SET, WEEKLY_QUEST_TEMPLATES, QuestTemplate
from .clock import day_key, days_between, now_local, same_day

logger = logging.getLogger(__name__)

WEEK_DAYS = 7


def _draw(
    templates: tuple[QuestTemplate, ...], rng: random.Random | None
) -> list[dict[str, Any]]:
    picked = (rng or random).sample(templates, QUESTS_PER_SET)
    return [
        {
            "id": i,
            "title": t.title,
            "target": t.target,
            "type": t.type,
            "xp": t.xp,
            "progress": 0,
            "completed": False,
        }
        for i, t in enumerate(picked)
    ]


def generate_daily_quests(
    state: dict, now: datetime | None = None, rng: random.Random | None = None
) -> list[dict[str, Any]]:
    """Return today's daily quests, drawing a new set if the day changed."""
    now = now or now_local()
    quests = state.get("dailyQuests")
    if quests and same_day(state.get("lastQuestGenerationDay"), now):
        return quests
    state["dailyQuests"] = _draw(DAILY_QUEST_TEMPLATES, rng)
    state["lastQuestGenerationDay"] = day_key(now)
    logger.info("generated daily quests: %s", [q["type"] for q in state["dailyQuests"]])
    return state["dailyQuests"]


def generate_weekly_quests(
    state: dict, now: datetime | None = None, rng: random.Random | None = None
) -> list[dict[str, Any]]:
    """Return this week's quests, drawing a new set after 7 days."""
    now = now or now_local()
    quests = state.get("weeklyQuests")
    elapsed = days_between(state.get("lastWeeklyQuestGenDate"), now)
    if quests and elapsed is not None and abs(elapsed) < WEEK_DAYS:
        return quests
    state["weeklyQuests"] = _draw(WEEKLY_QUEST_TEMPLATES, rng)
    state["lastWeeklyQuestGenDate"] = day_key(now)
    logger.info("generated weekly quests: %s", [q["type"] for q in state["weeklyQuests"]])
    return state["weeklyQuests"]


def _advance(quest: dict, amount: int) -> bool:
    """Add progress, clamp to target. Returns True if this completed the quest."""
    if amount <= 0:
        return False
    quest["progress"] = min(quest["target"], quest.get("progress", 0) + amount)
    if quest["progress"] >= quest["target"]:
        quest["completed"] = True
        return True
    return False


def _daily_increment(quest_type: str, message: str, xp: int, player: dict) -> int:
    has_question = "?" in message
    if quest_type == "messages":
        return 1 if xp > 0 else 0
    if quest_type == "long-question":
        return 1 if has_question and len(message.split()) >= 10 else 0
    if quest_type == "focus-maintenance":
        return 1 if player.get("stats", {}).get("focus", 0) >= 70 else 0
    if quest_type == "high-xp-message":
        return 1 if xp >= 50 else 0
    if quest_type in ("volume", "streak"):
        return 1
    if quest_type == "philosophical":
        return 1 if has_question and len(message) > 100 else 0
    if quest_type == "long-message":
        return 1 if len(message) >= 500 else 0
    return 0


def _weekly_increment(
    quest_type: str, message: str, xp: int, player: dict,
    daily_completed: int, new_day: bool,
) -> int:
    if quest_type == "volume":
        return 1 if xp > 0 else 0
    if quest_type == "questions":
        return 1 if "?" in message else 0
    if quest_type == "xp-gain":
        return xp
    if quest_type == "daily-quests-week":
        return daily_completed
    if quest_type == "focus-week":
        return 1 if new_day and player.get("stats", {}).get("focus", 0) >= 80 else 0
    return 0


def update_quest_progress(
    state: dict,
    message: str,
    xp: int,
    now: datetime | None = None,
    new_day: bool = False,
    rng: random.Random | None = None,
) -> dict[str, list[dict]]:
    """Apply one valid message to the active quests.

    Returns {"daily": [...], "weekly": [...]} with the quests completed by
    this message.
    """
    now = now or now_local()
    daily = generate_daily_quests(state, now, rng)
    weekly = generate_weekly_quests(state, now, rng)
    player = state["player"]
    statistics = player["statistics"]

    had_open_daily = any(not q.get("completed") for q in daily)
    completed_daily = []
    for quest in daily:
        if quest.get("completed"):
            continue
        if _advance(quest, _daily_increment(quest["type"], message, xp, player)):
            completed_daily.append(quest)
            statistics["questsCompleted"] = statistics.get("questsCompleted", 0) + 1

    if had_open_daily and all(q.get("completed") for q in daily):
        statistics["dailyQuestsCompletedTotal"] = statistics.get("dailyQuestsCompletedTotal", 0) + 1
        logger.info("all daily quests completed (total %d)", statistics["dailyQuestsCompletedTotal"])

    completed_weekly = []
    for quest in weekly:
        if quest.get("completed"):
            continue
        amount = _weekly_increment(
            quest["type"], message, xp, player, len(completed_daily), new_day
        )
        if _advance(quest, amount):
            completed_weekly.append(quest)

    return {"daily": completed_daily, "weekly": completed_weekly}
