"""Progression engine — turns one chat message into XP, streaks, quests and badges.

award_xp() is the entry point; the other functions are the individual steps
and are usable on their own. Everything mutates the caller's document in place.

Rules:
  validity     trimmed, lower-cased message of 10+ chars that is not a bare
               greeting; anything else changes nothing
  health       -10 per elapsed day once more than a day has passed, floor 0
  streak       +1 on the day after the last message, reset to 1 after a gap,
               unchanged within a day; the first valid message of a new
               document starts it at 1
  multiplier   streak 30+ x5, 14+ x3, 7+ x2, 3+ x1.5, else x1
  base XP      10 (<=50 chars) or 20, +5 if the message asks a question
  levels       every 100 XP rolls over into a level
"""

import logging
import math
from datetime import datetime
from typing import Any

from .catalog import BADGES, title_for_xp
from .clock import day_key, days_between, elapsed_days, now_local, to_millis
from .models import default_statistics, default_stats
from .quests import update_quest_progress

logger = logging.getLogger(__name__)

MIN_MESSAGE_LENGTH = 10
TRIVIAL_MESSAGES = frozenset({"hi", "hello", "ok"})

XP_PER_LEVEL = 100
SHORT_MESSAGE_LENGTH = 50
HIGH_QUALITY_XP = 20
HEALTH_LOSS_PER_DAY = 10

# (min_streak, multiplier), checked top-down
STREAK_MULTIPLIERS = (
    (30, 5.0),
    (14, 3.0),
    (7, 2.0),
    (3, 1.5),
)


def clamp(value: float, low: int = 0, high: int = 100) -> int:
    return int(max(low, min(high, value)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def is_valid_message(message: str) -> bool:
    trimmed = message.strip().lower()
    return len(trimmed) >= MIN_MESSAGE_LENGTH and trimmed not in TRIVIAL_MESSAGES


def update_health(state: dict, now: datetime | None = None) -> int:
    """Apply health decay since the last message and stamp the clock.

    Returns the health lost.
    """
    now = now or now_local()
    player = state["player"]
    if not isinstance(player.get("stats"), dict):
        player["stats"] = default_stats()
    stats = player["stats"]

    days = elapsed_days(player.get("lastMessageTime"), now)
    loss = 0
    if days > 1:
        loss = math.floor(days * HEALTH_LOSS_PER_DAY)
        before = stats.get("health", 100)
        stats["health"] = clamp(before - loss)
        logger.debug("health decay: %.2f days idle, %d -> %d", days, before, stats["health"])
    player["lastMessageTime"] = to_millis(now)
    return loss


def update_streak(state: dict, now: datetime | None = None) -> bool:
    """Advance or reset the streak on the first message of a new day.

    Returns True when this message is the first one counted for its day.
    """
    now = now or now_local()
    player = state["player"]
    today = day_key(now)
    if player.get("lastMessageDay") == today:
        if player.get("streak", 0) < 1:
            # first valid message of a new document
            player["streak"] = 1
            return True
        return False

    gap = days_between(player.get("lastMessageDay"), now)
    if gap == 1:
        player["streak"] = player.get("streak", 0) + 1
    elif gap == 0:
        # same day written in another format
        player["streak"] = max(player.get("streak", 0), 1)
    else:
        if player.get("streak", 0) > 1:
            logger.info("streak broken after %s days (was %d)", gap, player["streak"])
        player["streak"] = 1
    player["currentDay"] = now.day
    player["lastMessageDay"] = today
    return gap != 0


def streak_multiplier(streak: int) -> float:
    for min_streak, multiplier in STREAK_MULTIPLIERS:
        if streak >= min_streak:
            return multiplier
    return 1.0


def get_streak_multiplier(state: dict, now: datetime | None = None) -> float:
    """Update the streak for `now` and return its XP multiplier."""
    update_streak(state, now)
    return streak_multiplier(state["player"].get("streak", 0))


def base_xp(message: str) -> int:
    xp = 10 if len(message) <= SHORT_MESSAGE_LENGTH else 20
    if "?" in message:
        xp += 5
    return xp


def apply_xp(player: dict, xp: int) -> int:
    """Add XP and roll whole hundreds into levels. Returns levels gained."""
    player["xp"] = player.get("xp", 0) + xp
    player["totalXpEarned"] = player.get("totalXpEarned", 0) + xp
    gained = 0
    if player["xp"] >= XP_PER_LEVEL:
        gained = player["xp"] // XP_PER_LEVEL
        player["level"] = player.get("level", 1) + gained
        player["xp"] %= XP_PER_LEVEL
        logger.info("level up: +%d to level %d", gained, player["level"])
    return gained


def update_statistics(state: dict, xp: int) -> dict:
    player = state["player"]
    if not isinstance(player.get("statistics"), dict):
        player["statistics"] = default_statistics()
    stats = player["statistics"]
    streak = player.get("streak", 0)

    stats["totalMessages"] = stats.get("totalMessages", 0) + 1
    stats["totalXpEarned"] = stats.get("totalXpEarned", 0) + xp
    stats["averageXpPerMessage"] = round_half_up(stats["totalXpEarned"] / stats["totalMessages"])
    if xp > stats.get("highestSingleMessageXp", 0):
        stats["highestSingleMessageXp"] = xp
    if xp >= HIGH_QUALITY_XP:
        stats["totalHighQualityMessages"] = stats.get("totalHighQualityMessages", 0) + 1
    if streak > stats.get("totalDaysActive", 0):
        stats["totalDaysActive"] = streak
    if streak > player.get("longestStreak", 0):
        player["longestStreak"] = streak
    return stats


def update_title(state: dict) -> dict[str, Any]:
    """Re-derive the title from total XP. Returns {titleChanged, newTitle}."""
    player = state["player"]
    title = title_for_xp(player.get("totalXpEarned", 0))
    changed = player.get("title") != title.name
    player["title"] = title.name
    player["titleLevel"] = title.level
    if changed:
        logger.info("title changed to %s", title.name)
    return {"titleChanged": changed, "newTitle": title.to_dict()}


def check_badges(state: dict, now: datetime | None = None) -> list[dict[str, str]]:
    """Award every badge whose condition now holds. Returns the new ones."""
    now = now or now_local()
    player = state["player"]
    earned = player.setdefault("badges", [])
    new_badges = []
    for badge in BADGES:
        if badge.key in earned:
            continue
        if badge.condition(player, now):
            earned.append(badge.key)
            new_badges.append(badge.to_dict())
    if new_badges:
        logger.info("badges unlocked: %s", ", ".join(b["key"] for b in new_badges))
    return new_badges


def award_xp(state: dict, message: str, now: datetime | None = None) -> dict[str, Any]:
    """Score one chat message against the game state.

    Returns {xp, multiplier, baseXp, streak, newBadges, titleInfo}. Invalid
    messages return a zero result and leave the document untouched.
    """
    now = now or now_local()
    player = state["player"]

    if not is_valid_message(message):
        logger.debug("message ignored for XP (len=%d)", len(message.strip()))
        return {
            "xp": 0,
            "multiplier": 1.0,
            "baseXp": 0,
            "streak": player.get("streak", 0),
            "newBadges": [],
            "titleInfo": None,
        }

    update_health(state, now)
    new_day = update_streak(state, now)
    multiplier = streak_multiplier(player.get("streak", 0))

    base = base_xp(message)
    xp = math.floor(base * multiplier)
    apply_xp(player, xp)

    update_statistics(state, xp)
    title_info = update_title(state)
    update_quest_progress(state, message, xp, now=now, new_day=new_day)
    new_badges = check_badges(state, now)

    logger.debug(
        "awarded %d XP (base %d x%.1f), streak %d, level %d",
        xp, base, multiplier, player["streak"], player["level"],
    )
    return {
        "xp": xp,
        "multiplier": multiplier,
        "baseXp": base,
        "streak": player["streak"],
        "newBadges": new_badges,
        "titleInfo": title_info,
    }
