from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from config import Settings, get_settings, setup_logging
from core.room_registry import RoomRegistry
from core.room_manager import RoomManager
from api import rooms, websocket
from api.connections import ConnectionHub
from api.events import GameEventRouter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Tic Tac Toe server starting")
    yield
    # Shutdown: 房間都在記憶體中，直接丟掉
    logger.info(f"Shutting down with {len(app.state.registry)} live rooms")


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Tic Tac Toe Relay",
        description="Real-time two-player tic-tac-toe rooms with chat",
        version="1.0.0",
        lifespan=lifespan
    )

    # 每個 app 自己擁有一份 registry，不用 process-wide global
    registry = RoomRegistry(
        code_length=settings.room_code_length,
        max_code_attempts=settings.room_code_max_attempts,
    )
    manager = RoomManager(registry)
    app.state.settings = settings
    app.state.registry = registry
    app.state.room_manager = manager
    app.state.event_router = GameEventRouter(manager, ConnectionHub())

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(rooms.router)
    app.include_router(websocket.router)

    @app.get("/")
    def root():
        return {"message": "Tic Tac Toe Relay", "status": "ok"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    logger.info(f"Tic Tac Toe server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
