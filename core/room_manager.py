"""
Room Manager：管理 Room 的完整生命週期

職責：
1. 建立 Room（含建立者 X）
2. 加入 Room（第二位玩家 O，遊戲開始）
3. 落子（輪流、判斷勝負 / 平手）
4. 斷線清理（空房間立即刪除）
5. 找出聊天訊息的發送者

原則：
- 會回報給玩家的錯誤（房間不存在、房間已滿）丟異常
- 其他非法操作一律回傳 ActionResult(IGNORED)，不改狀態、不廣播
- 所有狀態變更經過 RoomStateMachine，並在該房間的鎖內完成
"""
from typing import List
import logging

from models import ActionResult, BOARD_SIZE, EMPTY, IgnoreReason, Player, Room, RoomStatus, Symbol
from core.room_registry import RoomRegistry
from core.state_machine import RoomStateMachine
from core.exceptions import RoomFull, RoomNotFound
from services.naming_service import is_valid_room_code, normalize_room_code
from services.win_service import check_winner, is_board_full

logger = logging.getLogger(__name__)


def _is_cell_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < BOARD_SIZE


class RoomManager:
    """Room 生命週期管理器"""

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    def create_room(self, connection_id: str, player_name: str) -> Room:
        """
        建立新房間

        返回：
            Room（一位玩家 X、WAITING、空盤面）

        異常：
            RoomCodeUnavailable: 產生不出可用的房間代碼
        """
        return self.registry.create(connection_id, player_name)

    def join_room(self, connection_id: str, code: str, player_name: str) -> Room:
        """
        加入房間

        前置條件：
        1. Room 必須存在
        2. Room 內玩家少於 2 人

        流程：
        1. 正規化代碼並找到 Room
        2. 鎖定 Room，確認未滿
        3. 分配尚未被使用的符號（一般情況下是 O）
        4. WAITING -> ACTIVE

        異常：
            RoomNotFound: Room 不存在
            RoomFull: 已有兩位玩家（Room 不會被修改）
        """
        code = normalize_room_code(code)
        room = self.registry.get(code) if is_valid_room_code(code, self.registry.code_length) else None
        if room is None:
            raise RoomNotFound(code)

        with self.registry.locks.hold(code):
            # 等鎖的期間房間可能已經因為斷線被刪掉
            if self.registry.get(code) is not room:
                raise RoomNotFound(code)
            if room.is_full:
                raise RoomFull(code)

            taken = {player.symbol for player in room.players}
            symbol = Symbol.O if Symbol.X in taken else Symbol.X
            player = Player(connection_id=connection_id, name=player_name, symbol=symbol)
            room.players.append(player)
            self.registry.bind(connection_id, code)

            if room.status == RoomStatus.WAITING:
                RoomStateMachine.transition(room, RoomStatus.ACTIVE)

        logger.info(f"Connection {connection_id} joined room {code} as {symbol.value}")
        return room

    def make_move(self, connection_id: str, code: str, cell_index) -> ActionResult:
        """
        落子

        以下情況回傳 IGNORED（盤面、回合、狀態都不變）：
        - 房間不存在
        - 遊戲不在進行中
        - 發送者不是房內玩家
        - 不是發送者的回合
        - cell_index 不是 0-8 的整數
        - 格子已被佔用

        合法落子後：
        - 有人連線 -> winner，ACTIVE -> FINISHED
        - 盤面填滿 -> 平手，ACTIVE -> FINISHED
        - 否則換對方
        """
        code = normalize_room_code(code)
        room = self.registry.get(code)
        if room is None:
            return ActionResult.ignore(IgnoreReason.ROOM_NOT_FOUND)

        with self.registry.locks.hold(code):
            if not room.game_active:
                return ActionResult.ignore(IgnoreReason.GAME_INACTIVE, room)

            player = room.find_player(connection_id)
            if player is None:
                return ActionResult.ignore(IgnoreReason.NOT_A_PLAYER, room)
            if player.symbol != room.current_player:
                return ActionResult.ignore(IgnoreReason.NOT_YOUR_TURN, room)
            if not _is_cell_index(cell_index):
                return ActionResult.ignore(IgnoreReason.INVALID_CELL, room)
            if room.board[cell_index] != EMPTY:
                return ActionResult.ignore(IgnoreReason.CELL_OCCUPIED, room)

            room.board[cell_index] = player.symbol.value

            winner = check_winner(room.board)
            if winner:
                room.winner = winner
                RoomStateMachine.transition(room, RoomStatus.FINISHED)
                logger.info(f"Room {code}: {winner.value} wins")
            elif is_board_full(room.board):
                RoomStateMachine.transition(room, RoomStatus.FINISHED)
                logger.info(f"Room {code}: draw")
            else:
                room.current_player = room.current_player.opponent

        return ActionResult.accept(room, player)

    def disconnect(self, connection_id: str) -> List[str]:
        """
        斷線清理

        把 connection 從它所在的每個房間移除，沒人的房間立即刪除。
        遊戲中途斷線不會判負、也不通知對手，剩下的玩家留在房內。

        返回：
            受影響的房間代碼
        """
        touched = []
        for code in self.registry.codes_for(connection_id):
            room = self.registry.get(code)
            if room is None:
                continue
            with self.registry.locks.hold(code):
                room.players = [p for p in room.players if p.connection_id != connection_id]
                if not room.players:
                    self.registry.remove(code)
            touched.append(code)

        self.registry.forget(connection_id)
        return touched

    def chat_sender(self, connection_id: str) -> ActionResult:
        """
        找出聊天訊息發送者所在的房間與玩家

        返回：
            ACCEPTED（含 room、player）；不在任何房間內則 IGNORED / NOT_IN_ROOM
        """
        code = self.registry.current_room_code(connection_id)
        room = self.registry.get(code) if code else None
        if room is None:
            return ActionResult.ignore(IgnoreReason.NOT_IN_ROOM)

        player = room.find_player(connection_id)
        if player is None:
            return ActionResult.ignore(IgnoreReason.NOT_IN_ROOM, room)
        return ActionResult.accept(room, player)
