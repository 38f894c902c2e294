"""Gamification engine for chat messages.

All state lives in a caller-owned game-state document (a JSON-shaped dict with
camelCase keys). Every operation takes that document, mutates it in place and
returns a small result; nothing is stored server-side.

  resolve_state()          usable document from whatever the client sent
  award_xp()               score one chat message
  generate_daily_quests()  today's quest set
  generate_weekly_quests() this week's quest set
  score_quiz()             personality quiz answers -> code + trait scores
  merge_profile()          write quiz results into the player once
"""

# Re-export the public engine so `from backend import game` is enough.

from .catalog import (  # noqa: F401
    BADGES,
    DAILY_QUEST_TEMPLATES,
    TITLES,
    WEEKLY_QUEST_TEMPLATES,
)

from .models import (  # noqa: F401
    GameState,
    default_game_state,
)

from .state import resolve_state  # noqa: F401

from .quests import (  # noqa: F401
    generate_daily_quests,
    generate_weekly_quests,
    update_quest_progress,
)

from .progression import (  # noqa: F401
    award_xp,
    check_badges,
    get_streak_multiplier,
    update_health,
    update_title,
)

from .quiz import (  # noqa: F401
    QUIZ_QUESTIONS,
    QuizError,
    has_profile,
    merge_profile,
    score_quiz,
)

from .summary import (  # noqa: F401
    badge_summary,
    quest_summary,
    stats_summary,
)
