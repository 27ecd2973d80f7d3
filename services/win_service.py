"""
勝負判定服務

純計算邏輯：給一個 9 格的盤面，判斷是否有人連成一線
"""
from typing import Optional, Sequence

from models import EMPTY, Symbol

# 順序固定：先橫列、再直行、最後兩條對角線
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def check_winner(board: Sequence[str]) -> Optional[Symbol]:
    """
    檢查盤面是否有贏家

    盤面索引：
        0 | 1 | 2
        3 | 4 | 5
        6 | 7 | 8

    參數：
        board: 長度 9 的序列，每格是 "" / "X" / "O"

    返回：
        第一條三格相同且非空的連線上的 Symbol；沒有則回傳 None

    範例：
        check_winner(["X", "X", "X", "O", "O", "", "", "", ""]) -> Symbol.X
        check_winner([""] * 9) -> None
    """
    for a, b, c in WIN_LINES:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return Symbol(board[a])
    return None


def is_board_full(board: Sequence[str]) -> bool:
    return all(cell != EMPTY for cell in board)
