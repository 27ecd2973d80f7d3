import threading

from core.locks import RoomLocks


def test_hold_blocks_same_room_only():
    locks = RoomLocks()
    entered = threading.Event()
    release = threading.Event()

    def hold_a():
        with locks.hold("AAAAAA"):
            entered.set()
            release.wait(timeout=5)

    holder = threading.Thread(target=hold_a)
    holder.start()
    try:
        assert entered.wait(timeout=5)

        # 另一個房間不受影響
        lock_b = locks.lock_for("BBBBBB")
        assert lock_b.acquire(timeout=1)
        lock_b.release()

        # 同一個房間要等
        assert not locks.lock_for("AAAAAA").acquire(timeout=0.1)
    finally:
        release.set()
        holder.join(timeout=5)

    lock_a = locks.lock_for("AAAAAA")
    assert lock_a.acquire(timeout=1)
    lock_a.release()


def test_second_hold_waits_for_first():
    locks = RoomLocks()
    order = []
    first_in = threading.Event()

    def first():
        with locks.hold("AAAAAA"):
            first_in.set()
            order.append("first-start")
            threading.Event().wait(0.1)
            order.append("first-end")

    def second():
        first_in.wait(timeout=5)
        with locks.hold("AAAAAA"):
            order.append("second")

    threads = [threading.Thread(target=first), threading.Thread(target=second)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert order == ["first-start", "first-end", "second"]


def test_discard_drops_lock():
    locks = RoomLocks()
    locks.lock_for("AAAAAA")

    locks.discard("AAAAAA")

    assert len(locks) == 0
