from datetime import datetime
from typing import List, Optional

from pydantic import Field

from pastebox.core.schemas import CamelModel


class FavoriteCreate(CamelModel):
    """Схема для добавления в избранное"""
    url: Optional[str] = None
    title: Optional[str] = None


class FavoriteResponse(CamelModel):
    """Схема для ответа с записью избранного"""
    id: int
    url: str
    title: str
    created_at: datetime


class FavoriteEnvelope(CamelModel):
    favorite: FavoriteResponse


class FavoriteListResponse(CamelModel):
    favorites: List[FavoriteResponse]


class LocalFavoriteItem(CamelModel):
    url: str
    title: Optional[str] = None


class FavoriteImportRequest(CamelModel):
    """Схема для переноса локального избранного в аккаунт"""
    items: List[LocalFavoriteItem] = Field(default_factory=list, max_length=500)


class FavoriteImportResponse(CamelModel):
    created: int
    skipped: int
    cleared: bool
    favorites: List[FavoriteResponse]
