"""
FastAPI dependencies：從 app.state 取出共用物件

Registry / Manager / Router 都在 create_app() 內建立，不用 module-level global，
測試時每個 app 各自一份
"""
from starlette.requests import HTTPConnection

from core.room_manager import RoomManager
from api.events import GameEventRouter


def get_room_manager(connection: HTTPConnection) -> RoomManager:
    return connection.app.state.room_manager


def get_event_router(connection: HTTPConnection) -> GameEventRouter:
    return connection.app.state.event_router
