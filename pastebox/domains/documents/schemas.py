from datetime import datetime
from typing import Any, Optional

from pastebox.core.schemas import CamelModel


class DocumentCreateResponse(CamelModel):
    """Схема ответа на создание документа"""
    id: str


class DocumentResponse(CamelModel):
    """Схема для ответа с данными документа"""
    id: str
    content: Any
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = None
    has_password: bool


class DocumentUpdate(CamelModel):
    """Схема для обновления содержимого"""
    content: Any = None
    password: Optional[str] = None


class DocumentUpdateResponse(CamelModel):
    ok: bool = True
    updated_at: datetime


class PasswordSet(CamelModel):
    """Схема для установки пароля документа"""
    password: Optional[str] = None


class PasswordSetResponse(CamelModel):
    ok: bool = True
    password_set_at: datetime


class ExpiryUpdate(CamelModel):
    """Схема для установки срока жизни (null снимает срок)"""
    expires_at: Optional[str] = None


class ExpiryUpdateResponse(CamelModel):
    ok: bool = True
    expires_at: Optional[datetime] = None
