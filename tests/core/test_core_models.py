"""Unit tests for matchmaking/core/models.py"""

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from matchmaking.core.models import Game, GameSession, Player, ServerInfo
from matchmaking.core.shared_types import Color


def test_new_player_is_unpaired() -> None:
    player = Player.new("Alice")
    assert player.name == "Alice"
    assert player.color is None


def test_new_players_get_unique_ids() -> None:
    assert Player.new("Alice").id != Player.new("Alice").id


def test_with_color_returns_a_copy() -> None:
    player = Player.new("Alice")
    white = player.with_color(Color.WHITE)

    assert white.color == Color.WHITE
    assert white.id == player.id
    assert white.name == player.name
    assert player.color is None


def test_player_is_immutable() -> None:
    player = Player.new("Alice")
    with pytest.raises(FrozenInstanceError):
        player.color = Color.BLACK  # type: ignore[misc]


def test_server_info_is_value_object() -> None:
    assert ServerInfo("s", 1, 2) == ServerInfo("s", 1, 2)
    assert not ServerInfo("s", 1, 2).is_full
    assert ServerInfo("s", 2, 2).is_full


def test_pair_assigns_colors_in_order() -> None:
    alice = Player.new("Alice")
    bob = Player.new("Bob")
    game = Game.pair("Server-EU-1", alice, bob)

    assert game.server_address == "Server-EU-1"
    assert game.player1 == alice.with_color(Color.WHITE)
    assert game.player2 == bob.with_color(Color.BLACK)
    assert Game.pair("Server-EU-1", alice, bob).id != game.id


def test_opponent_of() -> None:
    alice = Player.new("Alice")
    bob = Player.new("Bob")
    game = Game.pair("Server-EU-1", alice, bob)

    assert game.opponent_of(alice.id) == game.player2
    assert game.opponent_of(bob.id) == game.player1
    assert game.opponent_of(uuid4()) is None


def test_session_move_log() -> None:
    session = GameSession(Game.pair("s", Player.new("a"), Player.new("b")))
    assert session.history == ()
    session.record("e4")
    session.record("e5")
    assert session.history == ("e4", "e5")
    assert session.game_id == session.game.id
