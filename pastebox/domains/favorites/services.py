import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.clock import utcnow
from pastebox.core.errors import FavoriteNotFoundError, InvalidInputError
from pastebox.db.repositories.favorite_repository import FavoriteRepository
from pastebox.domains.favorites.entities import (
    DEFAULT_TITLE, Favorite, LocalFavoritesStore, MergeResult, normalize_url
)

logger = logging.getLogger(__name__)


class FavoritesService:
    """Сервис избранного аккаунта"""

    def __init__(self, session: AsyncSession, base_url: str = "", clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.base_url = base_url
        self.clock = clock
        self.favorite_repository = FavoriteRepository(session)

    async def list_favorites(self, user_id: int) -> List[Favorite]:
        return await self.favorite_repository.list_for_user(user_id)

    async def add_favorite(self, user_id: int, url: Optional[str], title: Optional[str]) -> Favorite:
        """Добавление ссылки в избранное"""
        url = (url or "").strip()
        title = (title or "").strip()
        if not url or not title:
            raise InvalidInputError("missing_fields", "Both url and title are required")

        return await self.favorite_repository.create(user_id, url, title, self.clock())

    async def remove_favorite(self, user_id: int, favorite_id: int) -> None:
        if not await self.favorite_repository.delete_for_user(user_id, favorite_id):
            raise FavoriteNotFoundError(favorite_id)

    async def merge_local_favorites(self, user_id: int, local_store: LocalFavoritesStore) -> MergeResult:
        """Перенос анонимного избранного в аккаунт

        Дубликаты (по нормализованной ссылке) пропускаются. Локальное хранилище
        очищается только когда обработан весь пакет: при сбое посередине уже
        созданные записи остаются, и повторный перенос просто пропустит их.
        """
        local_items = local_store.load()
        seen = {
            normalize_url(favorite.url, self.base_url)
            for favorite in await self.favorite_repository.list_for_user(user_id)
        }

        created: List[Favorite] = []
        skipped = 0
        for item in local_items:
            key = normalize_url(item.url, self.base_url)
            if not key or key in seen:
                skipped += 1
                continue
            favorite = await self.favorite_repository.create(
                user_id, key, (item.title or "").strip() or DEFAULT_TITLE, self.clock()
            )
            seen.add(key)
            created.append(favorite)

        local_store.clear()
        logger.info("Merged %d local favorites for user %s (%d skipped)", len(created), user_id, skipped)
        return MergeResult(created=created, skipped=skipped, cleared=True)
