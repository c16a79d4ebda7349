from pastebox.db.models.user import User
from pastebox.db.models.document import Document
from pastebox.db.models.favorite import Favorite

__all__ = [
    "User",
    "Document",
    "Favorite"
]
