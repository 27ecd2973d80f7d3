"""
命名服務：生成 Room Code

純計算邏輯，不涉及狀態轉換
"""
import random
import string

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length: int = 6) -> str:
    """
    生成隨機的大寫英數房間代碼

    範例：K3F9QZ, 0ABX72

    注意：
    - 不檢查唯一性（由 RoomRegistry 負責）
    - 36^6 = 2,176,782,336 種可能，碰撞機率極低
    """
    return ''.join(random.choices(ROOM_CODE_ALPHABET, k=length))


def is_valid_room_code(code: str, length: int = 6) -> bool:
    """檢查字串是否符合房間代碼格式（長度正確、只含大寫英數）"""
    return (
        isinstance(code, str)
        and len(code) == length
        and all(ch in ROOM_CODE_ALPHABET for ch in code)
    )


def normalize_room_code(code) -> str:
    """玩家輸入的代碼：去掉空白並轉大寫"""
    if code is None:
        return ""
    return str(code).strip().upper()
