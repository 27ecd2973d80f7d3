"""
並發控制工具

每個 Room 一把獨立的鎖，另外一把鎖保護 code -> Room 的 map 本身

主要目的：
- 同一個房間內的事件依到達順序逐一套用
- 不同房間互不阻塞（不會因為一場遊戲卡住其他遊戲）

使用 threading.Lock 而不是 asyncio.Lock：
鎖內只做同步的狀態修改，不會 await，handler 跑在 worker thread 上也一樣安全
"""
from contextlib import contextmanager
from typing import Dict, Iterator
import threading


class RoomLocks:
    """房間鎖表"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def lock_for(self, code: str) -> threading.Lock:
        """
        取得（必要時建立）某房間的鎖

        參數：
            code: 房間代碼

        返回：
            threading.Lock
        """
        with self._guard:
            lock = self._locks.get(code)
            if lock is None:
                lock = threading.Lock()
                self._locks[code] = lock
            return lock

    def discard(self, code: str) -> None:
        """房間刪除後丟掉它的鎖"""
        with self._guard:
            self._locks.pop(code, None)

    @contextmanager
    def hold(self, code: str) -> Iterator[None]:
        """
        鎖定一個 Room

        範例：
            with locks.hold(code):
                room = registry.get(code)
                room.board[4] = Symbol.X
        """
        lock = self.lock_for(code)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
