from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.errors import EmailTakenError, InvalidCredentialsError, InvalidInputError
from pastebox.core.security import (
    ACCOUNT_PASSWORD_MIN_LENGTH, CredentialHasher, SessionTokenCodec, ensure_password_length
)
from pastebox.db.repositories.user_repository import UserRepository
from pastebox.domains.identity.entities import User, normalize_email


class IdentityService:
    """Сервис для регистрации, входа и определения пользователя по токену"""

    def __init__(self, session: AsyncSession, hasher: CredentialHasher, codec: SessionTokenCodec):
        self.session = session
        self.hasher = hasher
        self.codec = codec
        self.user_repository = UserRepository(session)

    async def register_user(self, identifier: Optional[str], password: Optional[str]) -> User:
        """Регистрация нового пользователя"""
        if not isinstance(identifier, str) or not normalize_email(identifier):
            raise InvalidInputError("email_required", "Email is required")
        ensure_password_length(password, ACCOUNT_PASSWORD_MIN_LENGTH)

        email = normalize_email(identifier)
        if await self.user_repository.email_exists(email):
            raise EmailTakenError()

        password_hash = await run_in_threadpool(self.hasher.hash, password)
        return await self.user_repository.create(User.create_user(email, password_hash))

    async def authenticate_user(self, identifier: Optional[str], password: Optional[str]) -> User:
        """Аутентификация пользователя по email и паролю"""
        if not isinstance(identifier, str) or not identifier:
            raise InvalidInputError("email_required", "Email is required")
        if not password:
            raise InvalidInputError("missing_password", "Password is required")

        user = await self.user_repository.get_by_email(normalize_email(identifier))
        if not user:
            raise InvalidCredentialsError()

        if not await run_in_threadpool(self.hasher.verify, user.password_hash, password):
            raise InvalidCredentialsError()

        return user

    def issue_token(self, user: User) -> str:
        """Выпуск подписанного токена сессии"""
        return self.codec.issue(user.id)

    async def get_user_from_token(self, token: Optional[str]) -> Optional[User]:
        """Получение пользователя из токена; None для анонимного запроса"""
        identity = self.codec.verify(token)
        if identity is None:
            return None
        return await self.user_repository.get_by_id(identity.user_id)
