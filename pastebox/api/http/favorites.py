from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.auth import get_current_user
from pastebox.core.config import Settings, get_settings
from pastebox.core.db import get_db
from pastebox.core.errors import InvalidInputError
from pastebox.domains.favorites.entities import Favorite, LocalFavorite, SubmittedFavorites
from pastebox.domains.favorites.schemas import (
    FavoriteCreate, FavoriteEnvelope, FavoriteImportRequest, FavoriteImportResponse,
    FavoriteListResponse, FavoriteResponse
)
from pastebox.domains.favorites.services import FavoritesService
from pastebox.domains.identity.entities import User
from pastebox.domains.identity.schemas import OkResponse

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


def _favorite_response(favorite: Favorite) -> FavoriteResponse:
    return FavoriteResponse(
        id=favorite.id,
        url=favorite.url,
        title=favorite.title,
        created_at=favorite.created_at
    )


async def get_favorites_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> FavoritesService:
    return FavoritesService(db, base_url=settings.app_base_url)


@router.get("", response_model=FavoriteListResponse)
async def list_favorites(
    current_user: User = Depends(get_current_user),
    favorites_service: FavoritesService = Depends(get_favorites_service)
):
    """Избранное текущего пользователя, новые сверху"""
    favorites = await favorites_service.list_favorites(current_user.id)
    return FavoriteListResponse(favorites=[_favorite_response(f) for f in favorites])


@router.post("", response_model=FavoriteEnvelope)
async def add_favorite(
    favorite_data: Optional[FavoriteCreate] = None,
    current_user: User = Depends(get_current_user),
    favorites_service: FavoritesService = Depends(get_favorites_service)
):
    """Добавление ссылки в избранное"""
    favorite_data = favorite_data or FavoriteCreate()
    favorite = await favorites_service.add_favorite(current_user.id, favorite_data.url, favorite_data.title)
    return FavoriteEnvelope(favorite=_favorite_response(favorite))


@router.delete("/{favorite_id}", response_model=OkResponse)
async def remove_favorite(
    favorite_id: str,
    current_user: User = Depends(get_current_user),
    favorites_service: FavoritesService = Depends(get_favorites_service)
):
    """Удаление ссылки из избранного"""
    if not favorite_id.isdigit():
        raise InvalidInputError("invalid_id", "Favorite id must be a positive integer")

    await favorites_service.remove_favorite(current_user.id, int(favorite_id))
    return OkResponse()


@router.post("/import", response_model=FavoriteImportResponse)
async def import_favorites(
    import_data: FavoriteImportRequest,
    current_user: User = Depends(get_current_user),
    favorites_service: FavoritesService = Depends(get_favorites_service)
):
    """Перенос анонимного избранного клиента в аккаунт"""
    local_store = SubmittedFavorites([
        LocalFavorite(url=item.url, title=item.title or "") for item in import_data.items
    ])
    result = await favorites_service.merge_local_favorites(current_user.id, local_store)
    favorites = await favorites_service.list_favorites(current_user.id)

    return FavoriteImportResponse(
        created=len(result.created),
        skipped=result.skipped,
        cleared=result.cleared,
        favorites=[_favorite_response(f) for f in favorites]
    )
