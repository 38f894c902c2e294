"""Pydantic request models for API endpoints.

The game-state document itself is passed through untyped; it is the client's
property and is reconciled by backend.game.resolve_state, never rejected here.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StateBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_state: Any = Field(default=None, alias="gameState")


class ChatBody(StateBody):
    message: str = ""


class QuizBody(StateBody):
    answers: list[int]


class InitProfileBody(StateBody):
    stats: dict[str, float] | None = None
    personality_type: str | None = Field(default=None, alias="personalityType")
