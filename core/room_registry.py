"""
Room Registry：房間代碼 -> Room 的記憶體儲存

職責：
1. 建立 Room（產生不重複的代碼）
2. 依代碼查詢 / 刪除 Room
3. 維護 connection -> 房間代碼 的反向索引（聊天、斷線清理都靠它）

不做持久化，process 重啟後全部消失
"""
from typing import Callable, Dict, List, Optional
import logging
import threading

from models import Player, Room, Symbol
from core.exceptions import RoomCodeUnavailable
from core.locks import RoomLocks
from services.naming_service import generate_room_code

logger = logging.getLogger(__name__)


class RoomRegistry:
    """In-memory Room 儲存"""

    def __init__(
        self,
        code_length: int = 6,
        max_code_attempts: int = 10,
        code_factory: Callable[[int], str] = generate_room_code,
    ):
        self.code_length = code_length
        self.max_code_attempts = max_code_attempts
        self._code_factory = code_factory
        self._rooms: Dict[str, Room] = {}
        self._connection_rooms: Dict[str, List[str]] = {}
        self._lock = threading.RLock()
        self.locks = RoomLocks()

    def create(self, connection_id: str, player_name: str) -> Room:
        """
        建立新房間（含建立者，符號 X）

        流程：
        1. 生成代碼，若與現存房間重複就重新生成
        2. 建立 Room 並放入 registry
        3. 記錄 connection -> code

        異常：
            RoomCodeUnavailable: 重試 max_code_attempts 次仍然碰撞
        """
        with self._lock:
            for _ in range(self.max_code_attempts):
                code = self._code_factory(self.code_length)
                if code not in self._rooms:
                    break
                logger.warning(f"Room code collision detected, regenerating: {code}")
            else:
                raise RoomCodeUnavailable(self.max_code_attempts)

            room = Room(code=code)
            room.players.append(
                Player(connection_id=connection_id, name=player_name, symbol=Symbol.X)
            )
            self._rooms[code] = room
            self.bind(connection_id, code)

        logger.info(f"Created room {code} for connection {connection_id}")
        return room

    def get(self, code: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(code)

    def remove(self, code: str) -> Optional[Room]:
        """
        刪除房間，並清掉反向索引裡指向它的項目

        返回：
            被刪除的 Room；不存在則 None
        """
        with self._lock:
            room = self._rooms.pop(code, None)
            for connection_id in list(self._connection_rooms):
                self.unbind(connection_id, code)
        self.locks.discard(code)
        if room is not None:
            logger.info(f"Removed room {code}")
        return room

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    # ============ connection 反向索引 ============

    def bind(self, connection_id: str, code: str) -> None:
        with self._lock:
            codes = self._connection_rooms.setdefault(connection_id, [])
            if code not in codes:
                codes.append(code)

    def unbind(self, connection_id: str, code: str) -> None:
        with self._lock:
            codes = self._connection_rooms.get(connection_id)
            if not codes:
                return
            if code in codes:
                codes.remove(code)
            if not codes:
                del self._connection_rooms[connection_id]

    def forget(self, connection_id: str) -> None:
        with self._lock:
            self._connection_rooms.pop(connection_id, None)

    def codes_for(self, connection_id: str) -> List[str]:
        """connection 所在的所有房間代碼（依加入順序）"""
        with self._lock:
            return list(self._connection_rooms.get(connection_id, []))

    def current_room_code(self, connection_id: str) -> Optional[str]:
        """connection 最早加入、且仍存在的房間代碼"""
        with self._lock:
            for code in self._connection_rooms.get(connection_id, []):
                if code in self._rooms:
                    return code
            return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code) -> bool:
        with self._lock:
            return code in self._rooms
