import pytest
from fastapi.testclient import TestClient

from config import Settings
from core.room_registry import RoomRegistry
from core.room_manager import RoomManager
from api.connections import ConnectionHub
from api.events import GameEventRouter
from main import create_app


class FakeSocket:
    """記錄所有送出的 frame，代替真正的 WebSocket"""

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)

    def events(self):
        return [frame["event"] for frame in self.sent]


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def manager(registry):
    return RoomManager(registry)


@pytest.fixture
def hub():
    return ConnectionHub()


@pytest.fixture
def event_router(manager, hub):
    return GameEventRouter(manager, hub)


@pytest.fixture
def sockets(hub):
    """sockets("a", "b") -> 註冊並回傳對應的 FakeSocket"""
    created = {}

    def factory(*connection_ids):
        for connection_id in connection_ids:
            created[connection_id] = FakeSocket()
            hub.register(connection_id, created[connection_id])
        return [created[c] for c in connection_ids]

    return factory


@pytest.fixture
def active_room(manager):
    """兩位玩家已就位的房間：a 是 X，b 是 O"""
    room = manager.create_room("a", "Alice")
    manager.join_room("b", room.code, "Bob")
    return room


@pytest.fixture
def app():
    return create_app(Settings(log_level="DEBUG"))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
