"""Chat endpoint: score the message, then ask the assistant for a reply."""

import logging

from fastapi import APIRouter, Request

from backend import game
from backend.llm import LLMError
from backend.prompts import PromptError, build_context, render_prompt

from .models import ChatBody

logger = logging.getLogger(__name__)

router = APIRouter()


def _system_prompt(template: str, state: dict, message: str) -> str:
    try:
        return render_prompt(template, build_context(state, message))
    except PromptError as e:
        logger.error("system prompt failed to render, sending it raw: %s", e)
        return template


@router.post("/chat")
async def chat(body: ChatBody, request: Request):
    """Award XP for a player message and generate the assistant reply.

    Progression is applied before the reply is requested; a failed reply is
    reported in `error` and the updated game state is returned regardless.
    """
    state = game.resolve_state(body.game_state)
    award = game.award_xp(state, body.message)

    reply = None
    error = None
    if body.message.strip():
        llm = request.app.state.llm
        system = _system_prompt(request.app.state.config["system_prompt"], state, body.message)
        try:
            reply = await llm(body.message, system=system)
        except LLMError as e:
            logger.warning("reply generation failed: %s", e)
            error = str(e)
    else:
        error = "Message is empty"

    return {"reply": reply, "award": award, "gameState": state, "error": error}
