"""Handlebars prompt rendering for the assistant's system prompt."""

from collections.abc import Callable
from typing import Any

import pybars


_compiler = pybars.Compiler()
_cache: dict[str, Callable] = {}

DEFAULT_SYSTEM_PROMPT = (
    "You are a RPG guide. "
    "You are talking to {{{player.name}}}, a level {{player.level}} "
    "{{{player.title}}} on a {{player.streak}}-day streak."
    "{{#if player.personality}} Their personality type is "
    "{{player.personality}}; adapt your tone to it.{{/if}}"
    " Answer helpfully and encourage thoughtful questions."
)


class PromptError(Exception):
    """Raised when a Handlebars template fails to compile or render."""


def render_prompt(template_str: str, context: dict[str, Any]) -> str:
    """Compile and render a Handlebars template with the given context.

    Templates are cached by source string to avoid recompilation.
    """
    try:
        compiled = _cache.get(template_str)
        if compiled is None:
            compiled = _compiler.compile(template_str)
            _cache[template_str] = compiled
        return compiled(context)
    except Exception as e:
        raise PromptError(f"Template error: {e}") from e


def build_context(state: dict[str, Any], message: str = "") -> dict[str, Any]:
    """Assemble template variables from the game state.

    An unknown personality is left out so templates can test for it with
    {{#if player.personality}}.
    """
    player = state.get("player", {})
    personality = player.get("personalityType", "")
    return {
        "player": {
            "name": player.get("name", ""),
            "level": player.get("level", 1),
            "title": player.get("title", ""),
            "streak": player.get("streak", 0),
            "personality": "" if personality == "Unknown" else personality,
            "badges": list(player.get("badges", [])),
        },
        "message": message,
    }
