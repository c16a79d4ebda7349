from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Protocol
from urllib.parse import urljoin, urlsplit, urlunsplit

DEFAULT_TITLE = "Untitled"


def normalize_url(value: Optional[str], base_url: str = "") -> str:
    """Каноническая форма ссылки для сравнения избранного

    Схема и хост в нижнем регистре, пустой путь становится "/",
    завершающий слэш убирается, если путь не корневой.
    """
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    if base_url:
        trimmed = urljoin(base_url, trimmed)

    parts = urlsplit(trimmed)
    path = parts.path
    if parts.netloc and not path:
        path = "/"
    # Относительные ссылки канонизируются так же, как абсолютные
    if path not in ("", "/") and path.endswith("/") and not parts.query and not parts.fragment:
        path = path[:-1]
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, parts.fragment))


class Favorite:
    """Сохраненная ссылка, принадлежащая пользователю"""

    def __init__(self, id: int, user_id: int, url: str, title: str, created_at: datetime):
        self.id = id
        self.user_id = user_id
        self.url = url
        self.title = title
        self.created_at = created_at

    def __repr__(self) -> str:
        return f"Favorite(id={self.id}, user_id={self.user_id}, url={self.url})"


@dataclass(frozen=True)
class LocalFavorite:
    """Анонимная запись избранного из локального хранилища клиента"""
    url: str
    title: str = DEFAULT_TITLE


class LocalFavoritesStore(Protocol):
    def load(self) -> List[LocalFavorite]: ...

    def clear(self) -> None: ...


class SubmittedFavorites:
    """Пакет локального избранного, присланный клиентом при входе"""

    def __init__(self, items: List[LocalFavorite]):
        self._items = list(items)
        self.cleared = False

    def load(self) -> List[LocalFavorite]:
        return list(self._items)

    def clear(self) -> None:
        self._items = []
        self.cleared = True


@dataclass
class MergeResult:
    created: List[Favorite]
    skipped: int
    cleared: bool
