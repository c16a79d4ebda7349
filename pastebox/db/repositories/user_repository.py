from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.errors import EmailTakenError
from pastebox.db.models.user import User as UserModel
from pastebox.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise EmailTakenError()
        await self.session.refresh(db_user)
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Получение пользователя по id"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по нормализованному email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            id=db_user.id,
            email=db_user.email,
            password_hash=db_user.password_hash,
            created_at=db_user.created_at
        )
