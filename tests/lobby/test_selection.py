"""Unit tests for matchmaking/lobby/selection.py"""

from dataclasses import dataclass

import pytest

from matchmaking.lobby.selection import (
    MIN_DESIRABLE_LOAD,
    ServerInfo,
    badness,
    is_in_desirable_band,
    select_server,
)


@dataclass
class FakeServer:
    """Anything with get_info() can be part of the directory. Counts queries to check selection has no side effects."""

    address: str
    current_load: int
    max_load: int
    queries: int = 0

    def get_info(self) -> ServerInfo:
        self.queries += 1
        return ServerInfo(self.address, self.current_load, self.max_load)


def directory(*loads: tuple[int, int]) -> list[FakeServer]:
    return [FakeServer(f"s{i}", load, max_load) for i, (load, max_load) in enumerate(loads)]


def test_default_threshold() -> None:
    assert MIN_DESIRABLE_LOAD == 2


@pytest.mark.parametrize(
    "load, expected",
    [(0, 2), (1, 1), (2, 0), (5, 3)],
)
def test_badness(load: int, expected: int) -> None:
    assert badness(ServerInfo("s", load, 10)) == expected


@pytest.mark.parametrize(
    "load, max_load, expected",
    [(1, 4, False), (2, 4, True), (3, 4, True), (4, 4, False), (2, 2, False)],
)
def test_desirable_band(load: int, max_load: int, expected: bool) -> None:
    assert is_in_desirable_band(ServerInfo("s", load, max_load)) is expected


def test_empty_directory() -> None:
    assert select_server([]) is None


def test_all_full() -> None:
    servers = directory((2, 2), (6, 6), (4, 4))
    assert select_server(servers) is None


def test_first_in_band_wins() -> None:
    """First match, not best match: s1 (2/6) is chosen although s2 (4/6) is busier."""
    servers = directory((0, 2), (2, 6), (4, 6))
    assert select_server(servers) is servers[1]


def test_stops_at_first_match() -> None:
    servers = directory((3, 6), (2, 6), (0, 6))
    assert select_server(servers) is servers[0]
    assert [s.queries for s in servers] == [1, 0, 0]


def test_in_band_beats_earlier_fallback() -> None:
    servers = directory((1, 4), (0, 4), (3, 4))
    assert select_server(servers) is servers[2]


def test_all_empty_picks_first_seen() -> None:
    """Scenario: three empty servers (2, 6, 4): all tie on score 2, the first one is kept."""
    servers = directory((0, 2), (0, 6), (0, 4))
    assert select_server(servers) is servers[0]


def test_lowest_score_fallback() -> None:
    servers = directory((0, 6), (1, 6), (0, 6))
    assert select_server(servers) is servers[1]


def test_tie_keeps_first_seen_fallback() -> None:
    servers = directory((0, 6), (1, 6), (1, 6))
    assert select_server(servers) is servers[1]


def test_full_then_fallback() -> None:
    """Scenario: s0 is full (2/2), s1 is empty (score 2), s2 has one waiting (score 1)."""
    servers = directory((2, 2), (0, 6), (1, 4))
    assert select_server(servers) is servers[2]


def test_server_with_max_load_one() -> None:
    """A 0/1 server can never reach the band, but is still a valid fallback."""
    servers = directory((0, 1))
    assert select_server(servers) is servers[0]


def test_custom_threshold() -> None:
    servers = directory((2, 6), (3, 6))
    assert select_server(servers, min_desirable_load=3) is servers[1]
    assert select_server(servers, min_desirable_load=0) is servers[0]


def test_selection_does_not_change_loads() -> None:
    servers = directory((0, 2), (1, 6), (0, 4))
    _ = select_server(servers)
    assert [(s.current_load, s.max_load) for s in servers] == [(0, 2), (1, 6), (0, 4)]
