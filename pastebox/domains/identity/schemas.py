from datetime import datetime
from typing import Optional

from pastebox.core.schemas import CamelModel


class Credentials(CamelModel):
    """Схема для регистрации и входа (email или username)"""
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def identifier(self) -> Optional[str]:
        return self.email if self.email is not None else self.username


class UserResponse(CamelModel):
    """Схема для ответа с данными пользователя"""
    id: int
    email: str
    created_at: datetime


class UserEnvelope(CamelModel):
    user: Optional[UserResponse] = None


class OkResponse(CamelModel):
    ok: bool = True
