"""
WebSocket Endpoint

每個 frame 都是 JSON：{"event": "<name>", "data": <payload>}
連線建立時分配一個 connection_id（只在這條連線存活期間有效）
"""
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
import logging
import uuid

from api.dependencies import get_event_router
from api.events import GameEventRouter
from schemas import Envelope

router = APIRouter(tags=["websocket"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def game_socket(websocket: WebSocket, events: GameEventRouter = Depends(get_event_router)):
    """
    遊戲連線

    流程：
    1. accept 並分配 connection_id
    2. 逐一處理收到的事件（同一條連線依到達順序）
    3. 斷線時清理房間與廣播群組
    """
    await websocket.accept()
    connection_id = uuid.uuid4().hex
    events.hub.register(connection_id, websocket)
    logger.info(f"User connected: {connection_id}")

    try:
        while True:
            text = await websocket.receive_text()
            try:
                envelope = Envelope.model_validate_json(text)
            except ValidationError as e:
                logger.warning(f"Malformed frame from {connection_id}: {e.errors()}")
                continue

            await events.dispatch(connection_id, envelope.event, envelope.data)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"Error handling connection {connection_id}: {e}", exc_info=True)
    finally:
        await events.on_disconnect(connection_id)
