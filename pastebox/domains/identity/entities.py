from datetime import datetime
from typing import Optional

from pastebox.core.clock import utcnow


def normalize_email(value: Optional[str]) -> str:
    """Нормализация email: обрезка пробелов и нижний регистр"""
    return (value or "").strip().lower()


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: Optional[int],
        email: str,
        password_hash: str,
        created_at: Optional[datetime] = None
    ):
        self.id = id
        self.email = email
        self.password_hash = password_hash
        self.created_at = created_at or utcnow()

    @classmethod
    def create_user(cls, email: str, password_hash: str) -> "User":
        """Создание нового пользователя (id присваивает хранилище)"""
        return cls(
            id=None,
            email=normalize_email(email),
            password_hash=password_hash
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email})"
