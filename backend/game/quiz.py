"""Personality quiz — ten Likert questions mapped to a four-letter code.

Every trait starts at 50. Each answer (1–5) moves its trait by
(answer - 3) * weight points, clamped to 0–100 after each step. All questions
weigh 10, so a full answer swings a trait by 20.

Code letters (a score of exactly 50 takes the second letter):
  energy       > 50 E, else I
  awareness    > 50 S, else N
  kindness     > 50 F, else T
  productivity > 50 J, else P

Creativity is scored and stored with the profile but has no letter.
"""

import logging
from dataclasses import dataclass
from typing import Any

from .models import UNKNOWN_PERSONALITY
from .progression import clamp, round_half_up

logger = logging.getLogger(__name__)

TRAITS = ("creativity", "productivity", "energy", "kindness", "awareness")
NEUTRAL_ANSWER = 3
START_SCORE = 50


class QuizError(ValueError):
    """Raised when quiz answers are missing or out of range."""


@dataclass(frozen=True)
class QuizQuestion:
    id: int
    text: str
    trait: str
    weight: int = 10

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "stat": self.trait, "weight": self.weight}


QUIZ_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(1, "I make friends easily.", "energy"),
    QuizQuestion(2, "I have a vivid imagination.", "creativity"),
    QuizQuestion(3, "I worry about things.", "awareness"),
    QuizQuestion(4, "I trust others.", "kindness"),
    QuizQuestion(5, "I complete tasks successfully.", "productivity"),
    QuizQuestion(6, "I get angry easily.", "awareness"),
    QuizQuestion(7, "I love large parties.", "energy"),
    QuizQuestion(8, "I believe that art is important.", "creativity"),
    QuizQuestion(9, "I use my time wisely.", "productivity"),
    QuizQuestion(10, "I like to make people feel welcome.", "kindness"),
)


def _check_answers(answers: Any) -> list[int]:
    if not isinstance(answers, (list, tuple)) or len(answers) != len(QUIZ_QUESTIONS):
        raise QuizError(f"Expected {len(QUIZ_QUESTIONS)} answers")
    for i, answer in enumerate(answers, start=1):
        if isinstance(answer, bool) or not isinstance(answer, int) or not 1 <= answer <= 5:
            raise QuizError(f"Answer {i} must be an integer from 1 to 5, got {answer!r}")
    return list(answers)


def personality_code(scores: dict[str, int]) -> str:
    letters = [
        "E" if scores.get("energy", START_SCORE) > 50 else "I",
        "S" if scores.get("awareness", START_SCORE) > 50 else "N",
        "F" if scores.get("kindness", START_SCORE) > 50 else "T",
        "J" if scores.get("productivity", START_SCORE) > 50 else "P",
    ]
    return "".join(letters)


def score_quiz(answers: list[int]) -> dict[str, Any]:
    """Score ten answers. Returns {"code": "INTJ", "traitScores": {...}}."""
    answers = _check_answers(answers)
    scores = {trait: START_SCORE for trait in TRAITS}
    for question, answer in zip(QUIZ_QUESTIONS, answers):
        impact = (answer - NEUTRAL_ANSWER) * question.weight
        scores[question.trait] = clamp(scores[question.trait] + impact)
    return {"code": personality_code(scores), "traitScores": scores}


def has_profile(player: dict) -> bool:
    current = player.get("personalityType")
    return bool(current) and current != UNKNOWN_PERSONALITY


def merge_profile(state: dict, trait_scores: dict[str, Any] | None, code: str | None) -> dict:
    """Write quiz results into the player, once.

    A player whose personality is already known keeps it and their stats.
    Without a personality code nothing is written.
    """
    player = state["player"]
    if has_profile(player):
        logger.debug("profile already set (%s), not merging", player["personalityType"])
        return state
    if not code or code == UNKNOWN_PERSONALITY:
        logger.debug("no personality code supplied, not merging")
        return state

    stats = player.setdefault("stats", {})
    for trait in TRAITS:
        value = (trait_scores or {}).get(trait)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            stats[trait] = clamp(round_half_up(value))
    player["personalityType"] = code
    logger.info("personality profile set: %s", code)
    return state
