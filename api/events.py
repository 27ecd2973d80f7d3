"""
Connection Event Router

把 WebSocket 收到的具名事件交給 RoomManager，再把結果廣播給房內玩家

| 收到            | 回應                                    |
|-----------------|-----------------------------------------|
| create-room     | room-created -> 只給建立者              |
| join-room       | game-start -> 全房 / error -> 只給發送者 |
| make-move       | game-update -> 全房（只有合法落子）     |
| send-message    | receive-message -> 全房                 |
| (斷線)          | 無，只做清理                            |
"""
import logging

from pydantic import ValidationError

from core.room_manager import RoomManager
from core.exceptions import RoomCodeUnavailable, RoomFull, RoomNotFound
from api.connections import ConnectionHub
from schemas import (
    ChatMessageResponse,
    GameStartResponse,
    GameUpdateResponse,
    JoinRoomPayload,
    MakeMovePayload,
    SendMessagePayload,
    dump,
)

logger = logging.getLogger(__name__)


class GameEventRouter:
    def __init__(self, manager: RoomManager, hub: ConnectionHub):
        self.manager = manager
        self.hub = hub
        self.handlers = {
            "create-room": self.on_create_room,
            "join-room": self.on_join_room,
            "make-move": self.on_make_move,
            "send-message": self.on_send_message,
        }

    async def dispatch(self, connection_id: str, event: str, data) -> None:
        handler = self.handlers.get(event)
        if handler is None:
            logger.warning(f"Unknown event from {connection_id}: {event}")
            return

        try:
            await handler(connection_id, data)
        except ValidationError as e:
            logger.warning(f"Invalid {event} payload from {connection_id}: {e.errors()}")

    async def on_create_room(self, connection_id: str, data) -> None:
        if isinstance(data, dict):
            data = data.get("playerName")
        player_name = "" if data is None else str(data)

        try:
            room = self.manager.create_room(connection_id, player_name)
        except RoomCodeUnavailable as e:
            logger.error(f"Failed to create room for {connection_id}: {e}")
            await self.hub.send(connection_id, "error", str(e))
            return

        self.hub.join_group(room.code, connection_id)
        await self.hub.send(connection_id, "room-created", room.code)

    async def on_join_room(self, connection_id: str, data) -> None:
        payload = JoinRoomPayload.model_validate(data)

        try:
            room = self.manager.join_room(connection_id, payload.room_code, payload.player_name)
        except (RoomNotFound, RoomFull) as e:
            logger.info(f"Join {payload.room_code} rejected for {connection_id}: {e}")
            await self.hub.send(connection_id, "error", str(e))
            return

        # 在 await 之前先序列化，確保廣播的是這次操作後的狀態
        message = dump(GameStartResponse.from_room(room))
        self.hub.join_group(room.code, connection_id)
        await self.hub.broadcast(room.code, "game-start", message)

    async def on_make_move(self, connection_id: str, data) -> None:
        payload = MakeMovePayload.model_validate(data)

        result = self.manager.make_move(connection_id, payload.room_code, payload.cell_index)
        if not result.accepted:
            logger.debug(
                f"Ignored move from {connection_id} in {payload.room_code}: {result.reason.value}"
            )
            return

        message = dump(GameUpdateResponse.from_room(result.room))
        await self.hub.broadcast(result.room.code, "game-update", message)

    async def on_send_message(self, connection_id: str, data) -> None:
        payload = SendMessagePayload.model_validate(data)

        result = self.manager.chat_sender(connection_id)
        if not result.accepted:
            logger.debug(f"Ignored chat from {connection_id}: {result.reason.value}")
            return

        message = dump(ChatMessageResponse(player=result.player.name, message=payload.message))
        await self.hub.broadcast(result.room.code, "receive-message", message)

    async def on_disconnect(self, connection_id: str) -> None:
        codes = self.manager.disconnect(connection_id)
        self.hub.unregister(connection_id)
        logger.info(f"User disconnected: {connection_id} (rooms: {codes})")
