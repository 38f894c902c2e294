"""Game panel endpoints: stats, badges, quests, default state."""

from fastapi import APIRouter

from backend import game

from .models import StateBody

router = APIRouter()


@router.post("/stats")
async def stats(body: StateBody):
    """Player, title progress, streaks, statistics and badges."""
    return game.stats_summary(game.resolve_state(body.game_state))


@router.post("/badges")
async def badges(body: StateBody):
    """Earned and locked badges."""
    return game.badge_summary(game.resolve_state(body.game_state))


@router.post("/daily-quests")
async def daily_quests(body: StateBody):
    """Today's quests; draws a new set when the day changed."""
    state = game.resolve_state(body.game_state)
    quests = game.generate_daily_quests(state)
    return {**game.quest_summary(quests), "gameState": state}


@router.post("/weekly-quests")
async def weekly_quests(body: StateBody):
    """This week's quests; draws a new set every 7 days."""
    state = game.resolve_state(body.game_state)
    quests = game.generate_weekly_quests(state)
    return {**game.quest_summary(quests), "gameState": state}


@router.get("/game-status")
async def game_status():
    """A fresh default game state for a new client."""
    return game.default_game_state()


@router.post("/game-reset")
async def game_reset():
    """Discard the client's state and start over."""
    return game.default_game_state()
