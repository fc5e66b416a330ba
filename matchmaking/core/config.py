"""
Settings for the matchmaking service.

Defaults reproduce the demo directory. Both the threshold and the directory can be overridden from the environment:
    MATCHMAKING_MIN_DESIRABLE_LOAD=3
    MATCHMAKING_SERVERS="Server-EU-1=2,Server-US-1=6"
"""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field, field_validator

from matchmaking.core.exceptions import ConfigurationError

# Below this load a server is considered "too quiet": joining it probably means waiting a long time for an opponent
MIN_DESIRABLE_LOAD = 2

ENV_MIN_DESIRABLE_LOAD = "MATCHMAKING_MIN_DESIRABLE_LOAD"
ENV_SERVERS = "MATCHMAKING_SERVERS"


class ServerSettings(BaseModel):
    address: str
    max_load: int

    @field_validator("max_load")
    @classmethod
    def validate_max_load(cls, value: int) -> int:
        if value <= 0:
            raise ConfigurationError(f"max_load must be positive, got {value}.")
        return value


DEFAULT_SERVERS: list[ServerSettings] = [
    ServerSettings(address="Server-EU-1", max_load=2),
    ServerSettings(address="Server-US-1", max_load=6),
    ServerSettings(address="Server-AS-1", max_load=4),
]


class MatchmakingSettings(BaseModel):
    min_desirable_load: int = MIN_DESIRABLE_LOAD
    servers: list[ServerSettings] = Field(
        default_factory=lambda: [s.model_copy() for s in DEFAULT_SERVERS]
    )

    @field_validator("min_desirable_load")
    @classmethod
    def validate_min_desirable_load(cls, value: int) -> int:
        if value < 0:
            raise ConfigurationError(
                f"min_desirable_load cannot be negative, got {value}."
            )
        return value

    @field_validator("servers")
    @classmethod
    def validate_unique_addresses(
        cls, value: list[ServerSettings]
    ) -> list[ServerSettings]:
        addresses = [server.address for server in value]
        duplicates = {a for a in addresses if addresses.count(a) > 1}
        if duplicates:
            raise ConfigurationError(
                f"Server addresses must be unique. Duplicates: {', '.join(sorted(duplicates))}"
            )
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build settings from environment variables, falling back to the defaults for anything not set."""
        environ = os.environ if environ is None else environ
        overrides: dict = {}

        raw_threshold = environ.get(ENV_MIN_DESIRABLE_LOAD)
        if raw_threshold:
            try:
                overrides["min_desirable_load"] = int(raw_threshold)
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_MIN_DESIRABLE_LOAD} must be an integer, got {raw_threshold!r}."
                ) from None

        raw_servers = environ.get(ENV_SERVERS)
        if raw_servers:
            overrides["servers"] = parse_server_list(raw_servers)

        return cls(**overrides)


def parse_server_list(raw: str) -> list[ServerSettings]:
    """Parse "address=max_load,address=max_load" into ServerSettings (order is kept: it is the directory order)."""
    servers = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        address, sep, max_load = entry.partition("=")
        if not sep or not address.strip() or not max_load.strip().isdecimal():
            raise ConfigurationError(
                f"Cannot interpret {entry!r} as 'address=max_load'."
            )
        servers.append(
            ServerSettings(address=address.strip(), max_load=int(max_load))
        )
    return servers
