"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ValidationInfo, field_validator

from matchmaking.core.exceptions import InvalidRequestError
from matchmaking.core.models import Player, ServerInfo
from matchmaking.core.shared_types import Color, ConnectStatus


def _require_text(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise InvalidRequestError(f"{field_name} cannot be empty.")
    return value


# --- REQUEST MODELS ---
class ServerInfoRequest(BaseModel):
    address: str

    @field_validator("address")
    @classmethod
    def validate_address(cls, value: str) -> str:
        return _require_text(value, "address")


class ConnectRequest(BaseModel):
    player_id: UUID
    player_name: str
    # Leave empty to let the selection policy choose
    address: Optional[str] = None

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _require_text(value, "player_name")

    @field_validator("address")
    @classmethod
    def validate_address(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _require_text(value, "address")


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    move: str

    @field_validator(*["player_name", "move"])
    @classmethod
    def validate_text(cls, value: str, info: ValidationInfo) -> str:
        return _require_text(value, info.field_name)


# --- RESPONSE MODELS ---
class ServerInfoResponse(BaseModel):
    address: str
    current_load: int
    max_load: int

    @classmethod
    def from_info(cls, info: ServerInfo) -> "ServerInfoResponse":
        return cls(
            address=info.address,
            current_load=info.current_load,
            max_load=info.max_load,
        )


class PlayerResponse(BaseModel):
    id: UUID
    name: str
    color: Optional[Color]

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(id=player.id, name=player.name, color=player.color)


class ConnectResponse(BaseModel):
    status: ConnectStatus
    server_address: Optional[str] = None
    game_id: Optional[UUID] = None
    you: Optional[PlayerResponse] = None
    opponent: Optional[PlayerResponse] = None


class MoveAcknowledgement(BaseModel):
    game_id: UUID
    accepted: bool
