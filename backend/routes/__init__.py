"""FastAPI API endpoints under /api.

Endpoint groups: health, chat (progression + reply), game panels (stats,
badges, daily/weekly quests, default state), profile (quiz, init-profile).
Every endpoint that reads game state takes it from the request body as
`gameState` and hands the updated document back; nothing is stored.
"""

from fastapi import APIRouter

from .chat import router as chat_router
from .game import router as game_router
from .health import router as health_router
from .profile import router as profile_router

router = APIRouter()
router.include_router(health_router)
router.include_router(chat_router)
router.include_router(game_router)
router.include_router(profile_router)
