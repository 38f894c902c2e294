"""Static game catalog — titles, badges, quest templates.

Titles (min/max total XP, max is inclusive; the top tier is open-ended):
  1 Curious Beginner     0-99
  2 Thoughtful Learner   100-499
  3 Insightful Mind      500-1499
  4 Philosopher          1500-4999
  5 Master of Discourse  5000-9999
  6 Legendary Scholar    10000+

Badges are evaluated in catalog order. Each condition receives the player
dict and the moment of evaluation; time-of-day badges only look at the latter.

Quest templates are copied into quest instances by backend.game.quests; the
catalog itself is never written.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .clock import is_weekend


@dataclass(frozen=True)
class Title:
    level: int
    name: str
    icon: str
    min_xp: int
    max_xp: float
    description: str

    def contains(self, total_xp: int) -> bool:
        return self.min_xp <= total_xp <= self.max_xp

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "name": self.name,
            "icon": self.icon,
            "minXp": self.min_xp,
            "maxXp": None if math.isinf(self.max_xp) else self.max_xp,
            "description": self.description,
        }


@dataclass(frozen=True)
class Badge:
    key: str
    name: str
    description: str
    condition: Callable[[dict, datetime], bool]

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class QuestTemplate:
    title: str
    target: int
    type: str
    xp: int


TITLES: tuple[Title, ...] = (
    Title(1, "Curious Beginner", "🌱", 0, 99, "Your journey begins with the first question"),
    Title(2, "Thoughtful Learner", "📚", 100, 499, "Every conversation deepens your understanding"),
    Title(3, "Insightful Mind", "💭", 500, 1499, "Your questions reveal layers of meaning"),
    Title(4, "Philosopher", "🧠", 1500, 4999, "Wisdom flows through your words"),
    Title(5, "Master of Discourse", "👑", 5000, 9999, "Your insights illuminate the path for others"),
    Title(6, "Legendary Scholar", "⭐", 10000, math.inf, "A seeker of infinite knowledge and understanding"),
)


def _statistic(player: dict, key: str) -> int:
    return (player.get("statistics") or {}).get(key, 0)


def _stat(player: dict, key: str) -> int:
    return (player.get("stats") or {}).get(key, 0)


BADGES: tuple[Badge, ...] = (
    Badge("flame-on", "🔥 Flame On", "Achieve a 7-day streak",
          lambda p, now: p.get("streak", 0) >= 7),
    Badge("big-brain", "🧠 Big Brain", "Earn 50+ XP in a single message",
          lambda p, now: _statistic(p, "highestSingleMessageXp") >= 50),
    Badge("health-guardian", "💚 Health Guardian", "Maintain 80+ health for 7 days",
          lambda p, now: _stat(p, "health") >= 80 and p.get("streak", 0) >= 7),
    Badge("legendary", "🌟 Legendary", "Achieve a 30-day streak",
          lambda p, now: p.get("streak", 0) >= 30),
    Badge("bibliophile", "📚 Bibliophile", "Earn 1,000 total XP",
          lambda p, now: p.get("totalXpEarned", 0) >= 1000),
    Badge("tech-wizard", "🤖 Tech Wizard", "Send 20 technical questions",
          lambda p, now: _statistic(p, "totalHighQualityMessages") >= 20),
    Badge("creative-genius", "🎨 Creative Genius", "Send 20 creative questions",
          lambda p, now: _statistic(p, "totalHighQualityMessages") >= 20),
    Badge("consistent", "🤝 Consistent", "Never break a streak (reach level 10)",
          lambda p, now: p.get("level", 1) >= 10 and p.get("longestStreak", 0) >= 10),
    Badge("master", "👑 Master", "Reach level 50",
          lambda p, now: p.get("level", 1) >= 50),
    Badge("quest-master", "🎯 Quest Master", "Complete all daily quests",
          lambda p, now: _statistic(p, "dailyQuestsCompletedTotal") >= 5),
    Badge("night-owl", "🦉 Night Owl", "Send a message between 11PM and 4AM",
          lambda p, now: now.hour >= 23 or now.hour <= 4),
    Badge("early-bird", "🌅 Early Bird", "Send a message between 5AM and 9AM",
          lambda p, now: 5 <= now.hour <= 9),
    Badge("weekend-warrior", "⚔️ Weekend Warrior", "Active on a weekend",
          lambda p, now: is_weekend(now)),
    Badge("social-butterfly", "🦋 Social Butterfly", "Send 100 total messages",
          lambda p, now: _statistic(p, "totalMessages") >= 100),
    Badge("deep-thinker", "🤔 Deep Thinker", "Average XP per message > 20",
          lambda p, now: _statistic(p, "averageXpPerMessage") >= 20),
)

BADGES_BY_KEY: dict[str, Badge] = {b.key: b for b in BADGES}

DAILY_QUEST_TEMPLATES: tuple[QuestTemplate, ...] = (
    QuestTemplate("Send 3 meaningful messages", 3, "messages", 50),
    QuestTemplate("Ask a question with 10+ words", 1, "long-question", 40),
    QuestTemplate("Maintain 70+ Focus during session", 1, "focus-maintenance", 45),
    QuestTemplate("Earn 50+ XP in one message", 1, "high-xp-message", 60),
    QuestTemplate("Send 5 messages in one day", 5, "volume", 75),
    QuestTemplate("Ask a philosophical question", 1, "philosophical", 35),
    QuestTemplate("Build a 3-message conversation", 3, "streak", 55),
    QuestTemplate("Reach 500+ character question", 1, "long-message", 50),
)

WEEKLY_QUEST_TEMPLATES: tuple[QuestTemplate, ...] = (
    QuestTemplate("Send 50 messages this week", 50, "volume", 300),
    QuestTemplate("Maintain 80+ Focus for 3 days", 3, "focus-week", 250),
    QuestTemplate("Earn 500 XP this week", 500, "xp-gain", 400),
    QuestTemplate("Complete 10 Daily Quests", 10, "daily-quests-week", 350),
    QuestTemplate("Ask 20 questions", 20, "questions", 200),
)

QUESTS_PER_SET = 3


def title_for_xp(total_xp: int) -> Title:
    """First tier whose range holds total_xp; the first tier for anything below 0."""
    for title in TITLES:
        if title.contains(total_xp):
            return title
    return TITLES[0]


def title_by_name(name: str) -> Title | None:
    for title in TITLES:
        if title.name == name:
            return title
    return None


def next_title(total_xp: int) -> Title | None:
    for title in TITLES:
        if title.min_xp > total_xp:
            return title
    return None
