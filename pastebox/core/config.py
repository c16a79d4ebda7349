from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки приложения из переменных окружения"""

    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3123

    database_url: str = "sqlite+aiosqlite:///./data/app.db"
    database_echo: bool = False

    app_base_url: str = ""

    # Документы
    max_doc_bytes: int = 120_000
    cleanup_interval_minutes: float = 10

    # Ограничение создания документов
    rate_limit_max: int = 30
    rate_limit_window_seconds: float = 60

    # Сессии
    session_ttl_seconds: int = 7 * 24 * 60 * 60
    auth_cookie_name: str = "pb_session"
    auth_secret: Optional[str] = None

    # Параметры argon2
    hash_time_cost: int = 3
    hash_memory_cost: int = 65536
    hash_parallelism: int = 4

    hsts_enabled: bool = False
    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"
    log_format: str = "text"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
