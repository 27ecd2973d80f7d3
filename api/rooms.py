"""
Room API Endpoints

職責：
1. 查詢房間目前的狀態（唯讀，遊戲操作一律走 WebSocket）
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from api.dependencies import get_room_manager
from core.room_manager import RoomManager
from core.exceptions import RoomNotFound
from schemas import RoomResponse
from services.naming_service import normalize_room_code

router = APIRouter(prefix="/api/rooms", tags=["rooms"])
logger = logging.getLogger(__name__)


@router.get("/{code}", response_model=RoomResponse, response_model_by_alias=True)
def get_room(code: str, manager: RoomManager = Depends(get_room_manager)):
    """
    取得房間狀態

    返回：
        - code / players / board
        - currentPlayer / gameActive / winner / status
    """
    try:
        code = normalize_room_code(code)
        room = manager.registry.get(code)
        if room is None:
            raise RoomNotFound(code)

        with manager.registry.locks.hold(code):
            return RoomResponse.from_room(room)

    except RoomNotFound:
        raise HTTPException(status_code=404, detail="Room not found")
