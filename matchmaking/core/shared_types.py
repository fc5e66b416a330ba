"""
Type definitions used across layers
"""

from enum import StrEnum


# --- NOTE an unpaired Player simply has color None. Every Color that appears inside a Game is a real seat.
class Color(StrEnum):
    WHITE = "White"
    BLACK = "Black"


class ConnectStatus(StrEnum):
    PAIRED = "paired"
    QUEUED = "queued"
    REJECTED = "rejected"
    NO_SERVER = "no_server"
    ALREADY_CONNECTED = "already_connected"
