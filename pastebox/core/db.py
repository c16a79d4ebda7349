import logging
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from pastebox.core.config import get_settings
from pastebox.db.base import Base

logger = logging.getLogger(__name__)

settings = get_settings()

# Асинхронный движок
engine = create_async_engine(settings.database_url, future=True, echo=settings.database_echo)

# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


def _ensure_sqlite_directory(database_url) -> None:
    """Создание каталога для файла SQLite"""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def init_models(target: AsyncEngine = engine) -> None:
    """Создание таблиц при старте приложения"""
    import pastebox.db.models  # noqa: F401  регистрирует модели в Base.metadata

    _ensure_sqlite_directory(target.url)
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_database(target: AsyncEngine = engine) -> bool:
    """Проверка доступности БД"""
    try:
        async with target.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:
        logger.error("Database health check failed: %s", exc)
        return False
