from typing import Optional

from fastapi import APIRouter, Depends, Response

from pastebox.core.auth import (
    clear_session_cookie, get_identity_service, get_optional_user, set_session_cookie
)
from pastebox.core.config import Settings, get_settings
from pastebox.domains.identity.entities import User
from pastebox.domains.identity.schemas import Credentials, OkResponse, UserEnvelope, UserResponse
from pastebox.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, email=user.email, created_at=user.created_at)


@router.post("/register", response_model=UserEnvelope)
async def register(
    credentials: Credentials,
    response: Response,
    identity_service: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_settings)
):
    """Регистрация нового пользователя и вход в его аккаунт"""
    user = await identity_service.register_user(credentials.identifier, credentials.password)
    set_session_cookie(response, identity_service.issue_token(user), settings)
    return UserEnvelope(user=_user_response(user))


@router.post("/login", response_model=UserEnvelope)
async def login(
    credentials: Credentials,
    response: Response,
    identity_service: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_settings)
):
    """Вход пользователя"""
    user = await identity_service.authenticate_user(credentials.identifier, credentials.password)
    set_session_cookie(response, identity_service.issue_token(user), settings)
    return UserEnvelope(user=_user_response(user))


@router.post("/logout", response_model=OkResponse)
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Выход: сессия хранится только в cookie, достаточно ее удалить"""
    clear_session_cookie(response, settings)
    return OkResponse()


@router.get("/me", response_model=UserEnvelope)
async def me(
    response: Response,
    user: Optional[User] = Depends(get_optional_user),
    settings: Settings = Depends(get_settings)
):
    """Текущий пользователь или null"""
    if user is None:
        clear_session_cookie(response, settings)
        return UserEnvelope(user=None)
    return UserEnvelope(user=_user_response(user))
