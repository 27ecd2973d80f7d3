"""
In-memory 資料模型

Room / Player 只活在 process 記憶體中，不做持久化
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

BOARD_SIZE = 9
EMPTY = ""


class Symbol(str, Enum):
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Symbol":
        return Symbol.O if self is Symbol.X else Symbol.X


class RoomStatus(str, Enum):
    WAITING = "waiting"      # 只有房主一人
    ACTIVE = "active"        # 兩人到齊，遊戲進行中
    FINISHED = "finished"    # 有人獲勝或平手


class Outcome(str, Enum):
    ACCEPTED = "accepted"
    IGNORED = "ignored"


class IgnoreReason(str, Enum):
    ROOM_NOT_FOUND = "room_not_found"
    GAME_INACTIVE = "game_inactive"
    NOT_A_PLAYER = "not_a_player"
    NOT_YOUR_TURN = "not_your_turn"
    CELL_OCCUPIED = "cell_occupied"
    INVALID_CELL = "invalid_cell"
    NOT_IN_ROOM = "not_in_room"


@dataclass
class Player:
    connection_id: str
    name: str
    symbol: Symbol


@dataclass
class Room:
    code: str
    players: List[Player] = field(default_factory=list)
    board: List[str] = field(default_factory=lambda: [EMPTY] * BOARD_SIZE)
    current_player: Symbol = Symbol.X
    status: RoomStatus = RoomStatus.WAITING
    winner: Optional[Symbol] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def game_active(self) -> bool:
        return self.status == RoomStatus.ACTIVE

    @property
    def is_full(self) -> bool:
        return len(self.players) >= 2

    def find_player(self, connection_id: str) -> Optional[Player]:
        for player in self.players:
            if player.connection_id == connection_id:
                return player
        return None


@dataclass
class ActionResult:
    """
    狀態機操作的結果

    非法操作（不是你的回合、格子已被佔用…）不丟例外，
    而是回傳 IGNORED + reason，呼叫端據此決定不廣播
    """
    outcome: Outcome
    room: Optional[Room] = None
    reason: Optional[IgnoreReason] = None
    player: Optional[Player] = None

    @property
    def accepted(self) -> bool:
        return self.outcome == Outcome.ACCEPTED

    @classmethod
    def accept(cls, room: Room, player: Optional[Player] = None) -> "ActionResult":
        return cls(outcome=Outcome.ACCEPTED, room=room, player=player)

    @classmethod
    def ignore(cls, reason: IgnoreReason, room: Optional[Room] = None) -> "ActionResult":
        return cls(outcome=Outcome.IGNORED, room=room, reason=reason)
