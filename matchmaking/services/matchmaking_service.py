"""Orchestration of communication from the request/response boundary to the lobby layer (and the reverse direction)."""

import logging
import threading
from typing import Iterable, Optional, Self

from matchmaking.api.models import (
    ConnectRequest,
    ConnectResponse,
    MoveAcknowledgement,
    MoveRequest,
    PlayerResponse,
    ServerInfoRequest,
    ServerInfoResponse,
)
from matchmaking.core.config import MatchmakingSettings
from matchmaking.core.exceptions import UnknownServerError
from matchmaking.core.models import GameSession, Player
from matchmaking.core.shared_types import ConnectStatus
from matchmaking.lobby.selection import select_server
from matchmaking.lobby.server import GameServer

logger = logging.getLogger(__name__)


class MatchmakingService:
    """Orchestration of layers for a directory of game servers."""

    def __init__(
        self,
        servers: Iterable[GameServer],
        min_desirable_load: Optional[int] = None,
    ) -> None:
        # Insertion order is the directory order used by the selection policy
        self.servers: dict[str, GameServer] = {}
        for server in servers:
            if server.address in self.servers:
                raise ValueError(f"Duplicate server address: {server.address!r}")
            self.servers[server.address] = server
        self.min_desirable_load = (
            MatchmakingSettings().min_desirable_load
            if min_desirable_load is None
            else min_desirable_load
        )
        # Held across "is this player anywhere yet?" + admission, which spans several servers
        self._connect_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: MatchmakingSettings) -> Self:
        servers = [GameServer(s.address, s.max_load) for s in settings.servers]
        return cls(servers, min_desirable_load=settings.min_desirable_load)

    @property
    def directory(self) -> list[GameServer]:
        return list(self.servers.values())

    # -- Boundary logic ---
    def server_info(self, request: ServerInfoRequest) -> ServerInfoResponse:
        """Query endpoint for a single server."""
        server = self._fetch_server(request.address)
        return ServerInfoResponse.from_info(server.get_info())

    def list_servers(self) -> list[ServerInfoResponse]:
        return [ServerInfoResponse.from_info(s.get_info()) for s in self.directory]

    def connect(self, request: ConnectRequest) -> ConnectResponse:
        """
        Connect a player, either to the server named in the request or to the one picked by the selection policy.
        ----
        A player id that is already queued or seated on any server of the directory is refused (ALREADY_CONNECTED).
        """
        player = Player(id=request.player_id, name=request.player_name)
        with self._connect_lock:
            return self._connect(player, request.address)

    def submit_move(self, request: MoveRequest) -> MoveAcknowledgement:
        """Forward a move to the server hosting the game. Acknowledgement only, legality is never checked."""
        for server in self.directory:
            if server.find_session(request.game_id) is not None:
                accepted = server.record_move(
                    request.game_id, request.player_name, request.move
                )
                return MoveAcknowledgement(game_id=request.game_id, accepted=accepted)

        logger.debug("Move for unknown game %s ignored", request.game_id)
        return MoveAcknowledgement(game_id=request.game_id, accepted=False)

    # -- Internal helpers --
    def _connect(self, player: Player, address: Optional[str]) -> ConnectResponse:
        requested = self._fetch_server(address) if address is not None else None

        holder = self._holder_of(player)
        if holder is not None:
            logger.info(
                "%s is already queued or playing on %s", player.name, holder.address
            )
            return ConnectResponse(
                status=ConnectStatus.ALREADY_CONNECTED, server_address=holder.address
            )

        if requested is not None:
            server = requested
        else:
            server = select_server(
                self.directory, self.min_desirable_load, requester=player.name
            )
            if server is None:
                logger.info("No server available for %s", player.name)
                return ConnectResponse(status=ConnectStatus.NO_SERVER)

        admitted, session = server.admit(player)
        if session is not None:
            return self._paired_response(player, session)

        status = ConnectStatus.QUEUED if admitted else ConnectStatus.REJECTED
        return ConnectResponse(status=status, server_address=server.address)

    def _holder_of(self, player: Player) -> Optional[GameServer]:
        return next((s for s in self.directory if s.holds_player(player.id)), None)

    def _paired_response(self, player: Player, session: GameSession) -> ConnectResponse:
        game = session.game
        you = next(p for p in game.players if p.id == player.id)
        opponent = game.opponent_of(player.id)
        return ConnectResponse(
            status=ConnectStatus.PAIRED,
            server_address=game.server_address,
            game_id=game.id,
            you=PlayerResponse.from_player(you),
            opponent=PlayerResponse.from_player(opponent) if opponent else None,
        )

    def _fetch_server(self, address: str) -> GameServer:
        """Attempt to find the server in the directory and raise error if it fails."""
        server = self.servers.get(address)
        if server is None:
            raise UnknownServerError(f"Server with {address=} not found.")
        return server
