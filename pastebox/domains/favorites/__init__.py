from pastebox.domains.favorites.entities import (
    Favorite, LocalFavorite, LocalFavoritesStore, SubmittedFavorites, MergeResult, normalize_url
)
from pastebox.domains.favorites.schemas import (
    FavoriteCreate, FavoriteResponse, FavoriteEnvelope, FavoriteListResponse,
    LocalFavoriteItem, FavoriteImportRequest, FavoriteImportResponse
)

__all__ = [
    "Favorite", "LocalFavorite", "LocalFavoritesStore", "SubmittedFavorites", "MergeResult", "normalize_url",
    "FavoriteCreate", "FavoriteResponse", "FavoriteEnvelope", "FavoriteListResponse",
    "LocalFavoriteItem", "FavoriteImportRequest", "FavoriteImportResponse"
]
