from pastebox.db.repositories.user_repository import UserRepository
from pastebox.db.repositories.document_repository import DocumentRepository, DocumentIdCollisionError
from pastebox.db.repositories.favorite_repository import FavoriteRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
    "DocumentIdCollisionError",
    "FavoriteRepository"
]
