from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.config import Settings, get_settings
from pastebox.core.db import get_db
from pastebox.core.errors import NotAuthenticatedError
from pastebox.core.security import (
    CredentialHasher, SessionTokenCodec, extract_token_from_header, resolve_auth_secret
)
from pastebox.domains.identity.entities import User
from pastebox.domains.identity.services import IdentityService


@lru_cache
def get_password_hasher() -> CredentialHasher:
    return CredentialHasher.from_settings(get_settings())


@lru_cache
def get_session_codec() -> SessionTokenCodec:
    """Кодек сессий с секретом, определенным один раз на процесс"""
    settings = get_settings()
    return SessionTokenCodec(resolve_auth_secret(settings), settings.session_ttl_seconds)


def get_token_from_request(request: Request, settings: Settings) -> Optional[str]:
    """Токен из cookie, либо из заголовка Authorization: Bearer"""
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token
    return extract_token_from_header(request.headers.get("authorization"))


async def get_identity_service(
    db: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_password_hasher),
    codec: SessionTokenCodec = Depends(get_session_codec)
) -> IdentityService:
    return IdentityService(db, hasher, codec)


async def get_optional_user(
    request: Request,
    identity_service: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_settings)
) -> Optional[User]:
    """Текущий пользователь или None для анонимного запроса"""
    token = get_token_from_request(request, settings)
    return await identity_service.get_user_from_token(token)


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Зависимость для эндпоинтов, требующих входа"""
    if user is None:
        raise NotAuthenticatedError()
    return user


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
