"""
Room 狀態機：集中管理所有狀態轉換

合法轉換：
    WAITING  -> ACTIVE    （第二位玩家加入）
    ACTIVE   -> FINISHED  （有人連線獲勝，或盤面填滿平手）

FINISHED 不會再轉回其他狀態；房間會一直留著，直到兩位玩家都斷線才被刪除
"""
import logging

from models import Room, RoomStatus
from core.exceptions import InvalidStateTransition

logger = logging.getLogger(__name__)


class RoomStateMachine:
    """Room 狀態轉換器"""

    TRANSITIONS = {
        RoomStatus.WAITING: {RoomStatus.ACTIVE},
        RoomStatus.ACTIVE: {RoomStatus.FINISHED},
        RoomStatus.FINISHED: set(),
    }

    @classmethod
    def can_transition(cls, current: RoomStatus, target: RoomStatus) -> bool:
        return target in cls.TRANSITIONS.get(current, set())

    @classmethod
    def transition(cls, room: Room, target: RoomStatus) -> Room:
        """
        轉換 Room 狀態

        參數：
            room: 要轉換的 Room（呼叫者必須已持有該房間的鎖）
            target: 目標狀態

        返回：
            更新後的 Room

        異常：
            InvalidStateTransition: 轉換不合法
        """
        if not cls.can_transition(room.status, target):
            raise InvalidStateTransition(
                f"Room {room.code} cannot go from {room.status.value} to {target.value}"
            )

        logger.debug(f"Room {room.code}: {room.status.value} -> {target.value}")
        room.status = target
        return room
