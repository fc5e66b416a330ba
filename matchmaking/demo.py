"""
Demo of the matchmaking lobby: a few servers, players arriving in waves, then some moves.

Run with:
    python -m matchmaking.demo
"""

import logging
from typing import Optional

from matchmaking.core.config import MatchmakingSettings
from matchmaking.core.models import Player
from matchmaking.lobby.client import Client
from matchmaking.lobby.server import GameServer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Each wave of players joins one after the other
SCENARIOS: list[tuple[str, list[str]]] = [
    ("First players join (servers empty)", ["Alice", "Bob"]),
    ("More players join (some servers now have good load)", ["Charlie", "Diana"]),
    ("Even more players (smallest server becomes full)", ["Eve", "Frank"]),
]

MOVES: list[tuple[str, str]] = [
    ("Alice", "e4"),
    ("Bob", "e5"),
    ("Alice", "Nf3"),
    ("Bob", "Nc6"),
    ("Charlie", "d4"),
    ("Diana", "d5"),
    ("Charlie", "c4"),
    ("Diana", "e6"),
]


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def run_demo(settings: Optional[MatchmakingSettings] = None) -> dict[str, Client]:
    """Replay the scenarios and return the clients by player name."""
    settings = settings or MatchmakingSettings()

    servers = [GameServer(s.address, s.max_load) for s in settings.servers]
    for server in servers:
        server.start()

    clients: dict[str, Client] = {}
    for title, names in SCENARIOS:
        logger.info("--- %s ---", title)
        for name in names:
            client = Client(Player.new(name), servers, settings.min_desirable_load)
            client.connect_and_play()
            clients[name] = client

    logger.info("--- Players making moves ---")
    for name, move in MOVES:
        clients[name].make_move(move)

    return clients


def main() -> None:
    configure_logging()
    logger.info("=== Chess Online Service Demo ===")
    run_demo(MatchmakingSettings.from_env())
    logger.info("=== Demo Complete ===")


if __name__ == "__main__":
    main()
