"""Read-only panel views over a game-state document."""

import math
from typing import Any

from .catalog import BADGES, BADGES_BY_KEY, TITLES, next_title, title_by_name


def badge_summary(state: dict) -> dict[str, Any]:
    earned_keys = set(state["player"].get("badges", []))
    earned = [BADGES_BY_KEY[k].to_dict() for k in state["player"].get("badges", []) if k in BADGES_BY_KEY]
    locked = [b.to_dict() for b in BADGES if b.key not in earned_keys]
    return {
        "earned": earned,
        "locked": locked,
        "totalEarned": len(earned),
        "totalAvailable": len(BADGES),
    }


def title_summary(player: dict) -> dict[str, Any]:
    total_xp = player.get("totalXpEarned", 0)
    current = title_by_name(player.get("title", "")) or TITLES[0]
    upcoming = next_title(total_xp)
    return {
        "name": current.name,
        "icon": current.icon,
        "nextTitle": upcoming.name if upcoming else "Max",
        "xpToNextTitle": upcoming.min_xp - total_xp if upcoming else 0,
        "minXpForCurrent": current.min_xp,
        "maxXpForCurrent": None if math.isinf(current.max_xp) else current.max_xp,
    }


def stats_summary(state: dict) -> dict[str, Any]:
    player = state["player"]
    return {
        "player": player,
        "stats": player.get("stats", {}),
        "title": title_summary(player),
        "streaks": {
            "current": player.get("streak", 0),
            "longest": player.get("longestStreak", 0),
        },
        "statistics": player.get("statistics", {}),
        "badges": badge_summary(state),
    }


def quest_summary(quests: list[dict]) -> dict[str, Any]:
    return {
        "quests": quests,
        "completedCount": sum(1 for q in quests if q.get("completed")),
        "totalQuests": len(quests),
    }
