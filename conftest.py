import random
from datetime import datetime

import pytest

from backend import game

# A Wednesday afternoon: no time-of-day or weekend badge applies
NOW = datetime(2026, 10, 14, 14, 30)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def state():
    """Fresh default game state anchored at NOW."""
    return game.default_game_state(NOW)


@pytest.fixture
def rng():
    return random.Random(1234)
