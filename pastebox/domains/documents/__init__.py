from pastebox.domains.documents.entities import AccessState, Document
from pastebox.domains.documents.schemas import (
    DocumentCreateResponse, DocumentResponse, DocumentUpdate, DocumentUpdateResponse,
    PasswordSet, PasswordSetResponse, ExpiryUpdate, ExpiryUpdateResponse
)

__all__ = [
    "AccessState", "Document",
    "DocumentCreateResponse", "DocumentResponse", "DocumentUpdate", "DocumentUpdateResponse",
    "PasswordSet", "PasswordSetResponse", "ExpiryUpdate", "ExpiryUpdateResponse"
]
