"""Personality quiz and profile endpoints."""

from fastapi import APIRouter, HTTPException

from backend import game

from .models import InitProfileBody, QuizBody

router = APIRouter()


@router.get("/quiz")
async def quiz_questions():
    """The ten quiz questions in answer order."""
    return [q.to_dict() for q in game.QUIZ_QUESTIONS]


@router.post("/quiz")
async def submit_quiz(body: QuizBody):
    """Score quiz answers and merge the profile into the game state."""
    try:
        result = game.score_quiz(body.answers)
    except game.QuizError as e:
        raise HTTPException(422, str(e))
    state = game.resolve_state(body.game_state)
    was_unknown = not game.has_profile(state["player"])
    game.merge_profile(state, result["traitScores"], result["code"])
    merged = was_unknown and game.has_profile(state["player"])
    return {**result, "merged": merged, "gameState": state}


@router.post("/init-profile")
async def init_profile(body: InitProfileBody):
    """Merge externally computed trait scores and personality code."""
    state = game.resolve_state(body.game_state)
    was_unknown = not game.has_profile(state["player"])
    game.merge_profile(state, body.stats, body.personality_type)
    merged = was_unknown and game.has_profile(state["player"])
    return {"success": True, "merged": merged, "player": state["player"], "gameState": state}
