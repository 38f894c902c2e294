"""Reconcile the caller-supplied game-state document.

The client may send nothing, garbage, or a document written by an older
version of the app. resolve_state() never fails: a document without a player
is replaced by the default; anything else is kept as-is with missing keys
filled in from the default, one field at a time. Values the caller sent are
never overwritten, even when they look wrong.
"""

import logging
from datetime import datetime
from typing import Any

from .models import default_game_state

logger = logging.getLogger(__name__)


def _fill_missing(target: dict[str, Any], defaults: dict[str, Any]) -> None:
    for key, default in defaults.items():
        if key not in target or target[key] is None:
            target[key] = default
        elif isinstance(default, dict) and isinstance(target[key], dict):
            _fill_missing(target[key], default)


def resolve_state(candidate: Any, now: datetime | None = None) -> dict[str, Any]:
    """Return a usable game-state document for `candidate`.

    Returns the same object when it has a player; a fresh default otherwise.
    """
    defaults = default_game_state(now)
    if not isinstance(candidate, dict) or not isinstance(candidate.get("player"), dict):
        logger.debug("no usable game state supplied, starting from default")
        return defaults
    _fill_missing(candidate, defaults)
    return candidate
