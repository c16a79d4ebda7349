from datetime import datetime
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.db.models.favorite import Favorite as FavoriteModel
from pastebox.domains.favorites.entities import Favorite


class FavoriteRepository:
    """Репозиторий для работы с избранным"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_user(self, user_id: int) -> List[Favorite]:
        """Избранное пользователя, новые сверху"""
        result = await self.session.execute(
            select(FavoriteModel)
            .where(FavoriteModel.user_id == user_id)
            .order_by(FavoriteModel.created_at.desc(), FavoriteModel.id.desc())
        )
        return [self._to_domain(favorite) for favorite in result.scalars().all()]

    async def create(self, user_id: int, url: str, title: str, created_at: datetime) -> Favorite:
        """Создание записи избранного"""
        db_favorite = FavoriteModel(user_id=user_id, url=url, title=title, created_at=created_at)

        self.session.add(db_favorite)
        await self.session.commit()
        await self.session.refresh(db_favorite)
        return self._to_domain(db_favorite)

    async def delete_for_user(self, user_id: int, favorite_id: int) -> bool:
        """Удаление записи, только если она принадлежит пользователю"""
        result = await self.session.execute(
            delete(FavoriteModel).where(
                FavoriteModel.id == favorite_id,
                FavoriteModel.user_id == user_id
            )
        )
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_favorite: FavoriteModel) -> Favorite:
        """Преобразование модели БД в доменную сущность"""
        return Favorite(
            id=db_favorite.id,
            user_id=db_favorite.user_id,
            url=db_favorite.url,
            title=db_favorite.title,
            created_at=db_favorite.created_at
        )
