"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from matchmaking.core.models import Player
from matchmaking.lobby.server import GameServer

# Same directory as the demo: (address, max_load), order matters for selection
DEMO_DIRECTORY = [("Server-EU-1", 2), ("Server-US-1", 6), ("Server-AS-1", 4)]


@pytest.fixture
def make_player() -> Callable[[str], Player]:
    """Factory for fresh (unpaired) players."""
    return Player.new


@pytest.fixture
def demo_servers() -> list[GameServer]:
    """Three empty servers, in directory order."""
    return [GameServer(address, max_load) for address, max_load in DEMO_DIRECTORY]


@pytest.fixture
def small_server() -> GameServer:
    """Room for exactly one game."""
    return GameServer("Server-Test", 2)
