from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List
import logging


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    room_code_length: int = 6
    room_code_max_attempts: int = 10
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings():
    return Settings()


def setup_logging(log_level: str = "INFO"):
    """
    設定 root logger

    每個模組各自用 logging.getLogger(__name__)，只有這裡決定格式和等級
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
