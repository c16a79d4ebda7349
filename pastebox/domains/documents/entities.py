import enum
import json
import secrets
from datetime import datetime
from typing import Any, Optional

from pastebox.core.clock import utcnow
from pastebox.core.errors import DocumentTooLargeError

ID_ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
ID_LENGTH = 8

EMPTY_CONTENT = {"type": "doc", "content": [{"type": "paragraph"}]}


class AccessState(str, enum.Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"


def generate_document_id(size: int = ID_LENGTH) -> str:
    """Случайный короткий идентификатор для ссылки"""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def serialize_content(content: Any, max_bytes: int) -> str:
    """Сериализация дерева документа с проверкой лимита размера"""
    serialized = json.dumps(content if content is not None else {}, separators=(",", ":"), ensure_ascii=False)
    size = len(serialized.encode("utf-8"))
    if size > max_bytes:
        raise DocumentTooLargeError(size, max_bytes)
    return serialized


class Document:
    """Сущность одноразового документа"""

    def __init__(
        self,
        id: str,
        content: str,
        created_at: datetime,
        updated_at: datetime,
        expires_at: Optional[datetime] = None,
        password_hash: Optional[str] = None,
        password_set_at: Optional[datetime] = None,
        view_count: int = 0,
        last_accessed_at: Optional[datetime] = None
    ):
        self.id = id
        self.content = content
        self.created_at = created_at
        self.updated_at = updated_at
        self.expires_at = expires_at
        self.password_hash = password_hash
        self.password_set_at = password_set_at
        self.view_count = view_count
        self.last_accessed_at = last_accessed_at

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None

    @property
    def access_state(self) -> AccessState:
        return AccessState.LOCKED if self.has_password else AccessState.UNLOCKED

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Истек ли срок жизни документа (граница включительно)"""
        if self.expires_at is None:
            return False
        return self.expires_at <= (now or utcnow())

    def get_content(self) -> Any:
        """Десериализованное содержимое документа"""
        return json.loads(self.content)

    @classmethod
    def create_document(cls, max_bytes: int, now: Optional[datetime] = None) -> "Document":
        """Создание нового пустого документа"""
        now = now or utcnow()
        return cls(
            id=generate_document_id(),
            content=serialize_content(EMPTY_CONTENT, max_bytes),
            created_at=now,
            updated_at=now
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, state={self.access_state.value}, expires_at={self.expires_at})"
