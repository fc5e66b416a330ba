"""
Domain value objects shared by the lobby (server/client) and service layers.

ServerInfo, Player and Game are immutable: anything that "changes" them builds a new object instead.
The only mutable piece is the move log of a GameSession, which is owned by the server that created it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional
from uuid import UUID, uuid4

from matchmaking.core.shared_types import Color


@dataclass(frozen=True)
class ServerInfo:
    """Snapshot of a server's advertised occupancy. Produced fresh on every query."""

    address: str
    current_load: int
    max_load: int

    @property
    def is_full(self) -> bool:
        return self.current_load >= self.max_load


@dataclass(frozen=True)
class Player:
    id: UUID
    name: str
    color: Optional[Color] = None

    @classmethod
    def new(cls, name: str) -> Player:
        """Fresh, unpaired player with a newly generated id."""
        return cls(id=uuid4(), name=name)

    def with_color(self, color: Color) -> Player:
        """Copy of this player seated with the given color (self is left untouched)."""
        return replace(self, color=color)


@dataclass(frozen=True)
class Game:
    id: UUID
    server_address: str
    player1: Player
    player2: Player

    @classmethod
    def pair(cls, server_address: str, first: Player, second: Player) -> Game:
        """First in plays White, second in plays Black."""
        return cls(
            id=uuid4(),
            server_address=server_address,
            player1=first.with_color(Color.WHITE),
            player2=second.with_color(Color.BLACK),
        )

    @property
    def players(self) -> tuple[Player, Player]:
        return self.player1, self.player2

    def opponent_of(self, player_id: UUID) -> Optional[Player]:
        """The other seat, or None if player_id is not part of this game."""
        if self.player1.id == player_id:
            return self.player2
        if self.player2.id == player_id:
            return self.player1
        return None


@dataclass
class GameSession:
    """A game in progress together with its (append-only) move log."""

    game: Game
    moves: list[str] = field(default_factory=list)

    @property
    def game_id(self) -> UUID:
        return self.game.id

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self.moves)

    def record(self, move: str) -> None:
        self.moves.append(move)
