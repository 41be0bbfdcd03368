import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest

from blast.events.bus import EventBus
from blast.systems.board_controller import BoardController
from blast.world import create_world
from tests.helpers import scripted_random


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def make_controller(bus):
    """Build a controller whose first colors come from ``script`` (x-major, y ascending)."""

    def _make(config, script=(), seed=1234):
        world = create_world(scripted_random(script, seed=seed))
        return BoardController(world, bus, config)

    return _make
