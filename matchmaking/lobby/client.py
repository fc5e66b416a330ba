"""A player's view of the lobby: choose a server, join it, relay moves."""

import logging
from typing import Optional, Sequence

from matchmaking.core.config import MIN_DESIRABLE_LOAD
from matchmaking.core.models import GameSession, Player
from matchmaking.lobby.selection import select_server
from matchmaking.lobby.server import GameServer

logger = logging.getLogger(__name__)


class Client:
    """
    Represents one player looking for a game.

    The server and session are recorded at most once per instance (no reconnect / rematch).
    NOTE: a client that ends up queued does not learn about the session formed later by another player's arrival.
    Only the client whose connection triggered the pairing records the session.
    """

    def __init__(
        self,
        player: Player,
        servers: Sequence[GameServer],
        min_desirable_load: int = MIN_DESIRABLE_LOAD,
    ) -> None:
        self._player = player
        self._servers = servers
        self._min_desirable_load = min_desirable_load
        self._session: Optional[GameSession] = None
        self._connected_server: Optional[GameServer] = None

    @property
    def player(self) -> Player:
        return self._player

    @property
    def session(self) -> Optional[GameSession]:
        return self._session

    @property
    def connected_server(self) -> Optional[GameServer]:
        return self._connected_server

    @property
    def is_connected(self) -> bool:
        return self._connected_server is not None

    @property
    def opponent(self) -> Optional[Player]:
        """The other player in our session, None before pairing."""
        if self._session is None:
            return None
        return self._session.game.opponent_of(self._player.id)

    def find_suitable_server(self) -> Optional[GameServer]:
        return select_server(
            self._servers, self._min_desirable_load, requester=self._player.name
        )

    def connect_and_play(self) -> Optional[GameSession]:
        """Select a server and connect to it. Returns the session if our arrival completed a pair."""
        if self.is_connected:
            logger.warning(
                "[Client] %s is already connected to %s",
                self._player.name,
                self._connected_server.address,
            )
            return self._session

        logger.info("[Client] %s is looking for a server...", self._player.name)
        server = self.find_suitable_server()
        if server is None:
            logger.info("[Client] %s could not find any server", self._player.name)
            return None

        self._connected_server = server
        self._session = server.connect_player(self._player)

        if self._session is None:
            logger.info("[Client] %s waiting for opponent...", self._player.name)
        elif (opponent := self.opponent) is not None:
            logger.info(
                "[Client] %s found opponent: %s", self._player.name, opponent.name
            )
        return self._session

    def make_move(self, move: str) -> bool:
        """Relay a move to our server. Does nothing without both a session and a server."""
        if self._session is None or self._connected_server is None:
            return False
        return self._connected_server.record_move(
            self._session.game_id, self._player.name, move
        )
