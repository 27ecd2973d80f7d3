"""
Connection Hub：管理本 process 上的 WebSocket 連線與房間廣播群組

Format:
    _sockets: {connection_id: websocket}
    _groups:  {room_code: {connection_id, ...}}
"""
from typing import Any, Dict, List, Set
import asyncio
import logging

logger = logging.getLogger(__name__)


class ConnectionHub:
    def __init__(self):
        self._sockets: Dict[str, Any] = {}
        self._groups: Dict[str, Set[str]] = {}

    def register(self, connection_id: str, websocket) -> None:
        self._sockets[connection_id] = websocket

    def unregister(self, connection_id: str) -> None:
        """移除連線，並退出它所在的所有群組（空群組一併刪除）"""
        self._sockets.pop(connection_id, None)
        for code in list(self._groups):
            self.leave_group(code, connection_id)

    def join_group(self, code: str, connection_id: str) -> None:
        self._groups.setdefault(code, set()).add(connection_id)

    def leave_group(self, code: str, connection_id: str) -> None:
        members = self._groups.get(code)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._groups[code]

    def members(self, code: str) -> List[str]:
        return sorted(self._groups.get(code, ()))

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self._sockets

    async def send(self, connection_id: str, event: str, data: Any = None) -> None:
        """送給單一連線；送不出去只記 log，不往上丟"""
        websocket = self._sockets.get(connection_id)
        if websocket is None:
            logger.debug(f"Dropping {event} for unknown connection {connection_id}")
            return
        try:
            await websocket.send_json({"event": event, "data": data})
        except Exception as e:
            logger.error(f"Error sending {event} to connection {connection_id}: {e}", exc_info=True)

    async def broadcast(self, code: str, event: str, data: Any = None) -> None:
        """送給房間群組內的所有連線（包含發送者本人）"""
        targets = []
        for connection_id in self.members(code):
            websocket = self._sockets.get(connection_id)
            if websocket is not None:
                targets.append((connection_id, websocket))

        message = {"event": event, "data": data}
        results = await asyncio.gather(
            *(websocket.send_json(message) for _, websocket in targets),
            return_exceptions=True,
        )
        for (connection_id, _), result in zip(targets, results):
            if isinstance(result, Exception):
                logger.warning(f"Error broadcasting {event} to {connection_id} in room {code}: {result}")

        logger.debug(f"Broadcasted {event} to {len(targets)} connections in room {code}")
