"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理

只有會回報給玩家的錯誤才用異常表示；
非法落子等「靜默忽略」的情況改用 ActionResult(IGNORED)
"""


class TicTacToeException(Exception):
    """所有遊戲異常的基類"""
    pass


# ============ Room 相關異常 ============

class RoomNotFound(TicTacToeException):
    """房間不存在"""
    def __init__(self, code):
        self.code = code
        super().__init__("Room not found")


class RoomFull(TicTacToeException):
    """房間已有兩位玩家"""
    def __init__(self, code):
        self.code = code
        super().__init__("Room is full")


class RoomCodeUnavailable(TicTacToeException):
    """重試多次仍產生不出未被使用的房間代碼"""
    def __init__(self, attempts):
        self.attempts = attempts
        super().__init__("Could not allocate a room code, please try again")


# ============ 狀態轉換異常 ============

class InvalidStateTransition(TicTacToeException):
    """非法的狀態轉換"""
    pass
