"""
A single game server: admits players under a capacity ceiling, pairs them into game sessions, and keeps the move logs.

Load is counted in seats: every waiting player takes one, every active session takes two.
Admission (capacity check + enqueue + pairing) is one critical section per server, so concurrent clients can never push the load over max_load
and a player is never left both queued and paired.
"""

import logging
import threading
from collections import deque
from typing import Optional
from uuid import UUID

from matchmaking.core.models import Game, GameSession, Player, ServerInfo

logger = logging.getLogger(__name__)

SEATS_PER_SESSION = 2


class GameServer:
    """Admission control, load reporting and pairing for one address."""

    def __init__(self, address: str, max_load: int) -> None:
        if max_load <= 0:
            raise ValueError(f"max_load must be positive, got {max_load}.")
        self._address = address
        self._max_load = max_load
        self._waiting_players: deque[Player] = deque()
        self._active_sessions: list[GameSession] = []
        # Everyone queued or seated here. Sessions are never removed, so ids are never dropped either
        self._player_ids: set[UUID] = set()
        self._lock = threading.Lock()

    @property
    def address(self) -> str:
        return self._address

    @property
    def max_load(self) -> int:
        return self._max_load

    @property
    def waiting_players(self) -> tuple[Player, ...]:
        """Snapshot of the queue, oldest first."""
        with self._lock:
            return tuple(self._waiting_players)

    @property
    def active_sessions(self) -> tuple[GameSession, ...]:
        with self._lock:
            return tuple(self._active_sessions)

    def start(self) -> None:
        logger.info("[Server %s] Server started (max load: %d)", self._address, self._max_load)

    # --- QUERY ---
    def get_info(self) -> ServerInfo:
        with self._lock:
            return ServerInfo(self._address, self._current_load(), self._max_load)

    # --- ADMISSION / PAIRING ---
    def connect_player(self, player: Player) -> Optional[GameSession]:
        """
        Admit a player and pair the two longest waiting players if possible.

        Returns the session created by this call, or None when the player was rejected or is now waiting.
        A rejected player is not enqueued. Players are rejected when the server is full, or when the same player id
        is already queued or seated here.
        """
        _, session = self.admit(player)
        return session

    def admit(self, player: Player) -> tuple[bool, Optional[GameSession]]:
        """Same as connect_player, but also tells whether the player got in at all: (admitted, session)."""
        with self._lock:
            if player.id in self._player_ids:
                logger.info(
                    "[Server %s] %s is already queued or playing here", self._address, player.name
                )
                return False, None

            if self._current_load() >= self._max_load:
                logger.info(
                    "[Server %s] Server full, cannot accept %s", self._address, player.name
                )
                return False, None

            logger.info("[Server %s] %s connected", self._address, player.name)
            self._waiting_players.append(player)
            self._player_ids.add(player.id)
            return True, self._try_match_players()

    def holds_player(self, player_id: UUID) -> bool:
        """True when the player is waiting in this server's queue or seated in one of its sessions."""
        with self._lock:
            return player_id in self._player_ids

    def _try_match_players(self) -> Optional[GameSession]:
        """Form at most one pair per admission. Any further waiting players stay queued until the next arrival."""
        if len(self._waiting_players) < 2:
            return None

        first = self._waiting_players.popleft()
        second = self._waiting_players.popleft()
        session = GameSession(Game.pair(self._address, first, second))
        self._active_sessions.append(session)

        logger.info(
            "[Server %s] Game started: %s (%s) vs %s (%s)",
            self._address,
            session.game.player1.name,
            session.game.player1.color,
            session.game.player2.name,
            session.game.player2.color,
        )
        return session

    # --- MOVES ---
    def record_move(self, game_id: UUID, player_name: str, move: str) -> bool:
        """
        Append a move to the log of the game with the given id.
        ----
        Move legality is not checked. An unknown game id is ignored (returns False).
        """
        with self._lock:
            session = self._find_session(game_id)
            if session is None:
                logger.debug(
                    "[Server %s] Ignoring move %r from %s: unknown game %s",
                    self._address,
                    move,
                    player_name,
                    game_id,
                )
                return False
            session.record(move)

        logger.info("[Server %s] %s made move: %s", self._address, player_name, move)
        return True

    def find_session(self, game_id: UUID) -> Optional[GameSession]:
        with self._lock:
            return self._find_session(game_id)

    # -- Internal helpers (caller must hold the lock) --
    def _current_load(self) -> int:
        return len(self._waiting_players) + SEATS_PER_SESSION * len(
            self._active_sessions
        )

    def _find_session(self, game_id: UUID) -> Optional[GameSession]:
        return next(
            (s for s in self._active_sessions if s.game_id == game_id), None
        )

    def __repr__(self) -> str:
        return f"GameServer(address={self._address!r}, max_load={self._max_load})"
