"""
Client side server selection.

Two goals pull in different directions: the server must have room, and it should already have someone there so an opponent shows up soon.
The policy is a greedy walk over the directory, in directory order:
    - full servers are skipped,
    - servers below the desirable load are remembered as a fallback (closest to the threshold wins, first seen wins ties),
    - the first server inside [min_desirable_load, max_load) is selected right away.
If nothing is in the band, the fallback is used (if any).
"""

import logging
from typing import Iterable, Optional, Protocol, TypeVar

from matchmaking.core.config import MIN_DESIRABLE_LOAD
from matchmaking.core.models import ServerInfo

logger = logging.getLogger(__name__)


class ServerDirectoryEntry(Protocol):
    """All the selection policy needs to know about a server."""

    def get_info(self) -> ServerInfo:
        """Current load / capacity snapshot."""
        ...


S = TypeVar("S", bound=ServerDirectoryEntry)


def badness(info: ServerInfo, min_desirable_load: int = MIN_DESIRABLE_LOAD) -> int:
    """Distance to the lower edge of the desirable band (lower is better)."""
    return abs(info.current_load - min_desirable_load)


def is_in_desirable_band(
    info: ServerInfo, min_desirable_load: int = MIN_DESIRABLE_LOAD
) -> bool:
    return min_desirable_load <= info.current_load < info.max_load


def select_server(
    servers: Iterable[S],
    min_desirable_load: int = MIN_DESIRABLE_LOAD,
    requester: str = "",
) -> Optional[S]:
    """
    Pick exactly one server to join, or None when no server has room (including an empty directory).

    `requester` is only used to make the log lines readable.
    """
    who = requester or "client"
    least_bad_server: Optional[S] = None
    least_bad_score: Optional[int] = None

    for server in servers:
        info = server.get_info()
        logger.info(
            "[Client] %s checking %s... (load: %d/%d)",
            who,
            info.address,
            info.current_load,
            info.max_load,
        )

        if info.is_full:
            logger.info("[Client] %s rejected %s: server is full", who, info.address)
            continue

        if is_in_desirable_band(info, min_desirable_load):
            logger.info(
                "[Client] %s selected %s (load: %d/%d)",
                who,
                info.address,
                info.current_load,
                info.max_load,
            )
            return server

        # Not full and not in the band: below min_desirable_load
        score = badness(info, min_desirable_load)
        logger.info(
            "[Client] %s rejected %s: too few players (hard to find opponent, score %d)",
            who,
            info.address,
            score,
        )
        # strict '<': on a tie the server seen first is kept
        if least_bad_score is None or score < least_bad_score:
            least_bad_server = server
            least_bad_score = score

    if least_bad_server is not None:
        logger.info(
            "[Client] %s couldn't find ideal server, connecting to least-bad option: %s",
            who,
            least_bad_server.get_info().address,
        )
    return least_bad_server
