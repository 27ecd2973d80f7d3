"""
Wire schemas

WebSocket 事件與 HTTP 回應都用 camelCase（roomCode、cellIndex、gameActive…），
Python 端維持 snake_case，透過 alias 轉換
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, List, Optional

from models import Player, Room, RoomStatus, Symbol


class WireModel(BaseModel):
    # 名稱、訊息不做驗證：數字照樣轉成字串轉發
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


# ============ Envelope ============

class Envelope(BaseModel):
    """每個 WebSocket frame：{"event": "...", "data": ...}"""
    event: str
    data: Any = None


# ============ Inbound ============

class JoinRoomPayload(WireModel):
    room_code: str
    player_name: str


class MakeMovePayload(WireModel):
    room_code: str
    cell_index: Any = None  # 範圍由 RoomManager 檢查，超出範圍視為非法落子


class SendMessagePayload(WireModel):
    message: str


# ============ Outbound ============

class PlayerResponse(WireModel):
    id: str
    name: str
    symbol: Symbol

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(id=player.connection_id, name=player.name, symbol=player.symbol)


class RoomResponse(WireModel):
    code: str
    players: List[PlayerResponse]
    board: List[str]
    current_player: Symbol
    game_active: bool
    winner: Optional[Symbol] = None
    status: RoomStatus
    created_at: datetime

    @classmethod
    def from_room(cls, room: Room) -> "RoomResponse":
        return cls(
            code=room.code,
            players=[PlayerResponse.from_player(p) for p in room.players],
            board=list(room.board),
            current_player=room.current_player,
            game_active=room.game_active,
            winner=room.winner,
            status=room.status,
            created_at=room.created_at,
        )


class GameStartResponse(WireModel):
    room: RoomResponse
    players: List[PlayerResponse]

    @classmethod
    def from_room(cls, room: Room) -> "GameStartResponse":
        snapshot = RoomResponse.from_room(room)
        return cls(room=snapshot, players=snapshot.players)


class GameUpdateResponse(WireModel):
    board: List[str]
    current_player: Symbol
    game_active: bool
    winner: Optional[Symbol] = None

    @classmethod
    def from_room(cls, room: Room) -> "GameUpdateResponse":
        return cls(
            board=list(room.board),
            current_player=room.current_player,
            game_active=room.game_active,
            winner=room.winner,
        )


class ChatMessageResponse(WireModel):
    player: str
    message: str


def dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)
