from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.auth import get_password_hasher
from pastebox.core.config import Settings, get_settings
from pastebox.core.db import get_db
from pastebox.core.rate_limit import enforce_create_rate_limit
from pastebox.core.security import CredentialHasher
from pastebox.domains.documents.schemas import (
    DocumentCreateResponse, DocumentResponse, DocumentUpdate, DocumentUpdateResponse,
    ExpiryUpdate, ExpiryUpdateResponse, PasswordSet, PasswordSetResponse
)
from pastebox.domains.documents.services import DocumentService

router = APIRouter(prefix="/api/docs", tags=["documents"])

PASSWORD_HEADER = "x-doc-password"


def extract_document_password(request: Request, body_password: Optional[str] = None) -> Optional[str]:
    """Пароль документа: заголовок, затем query-параметр, затем тело запроса"""
    header = request.headers.get(PASSWORD_HEADER)
    if header and header.strip():
        return header
    query = request.query_params.get("password")
    if query and query.strip():
        return query
    return body_password


async def get_document_service(
    db: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_settings)
) -> DocumentService:
    return DocumentService(db, hasher, settings)


@router.post(
    "",
    response_model=DocumentCreateResponse,
    dependencies=[Depends(enforce_create_rate_limit)]
)
async def create_document(document_service: DocumentService = Depends(get_document_service)):
    """Создание нового пустого документа"""
    document = await document_service.create_document()
    return DocumentCreateResponse(id=document.id)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    request: Request,
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение документа по идентификатору"""
    password = extract_document_password(request)
    document = await document_service.read_document(document_id, password)

    return DocumentResponse(
        id=document.id,
        content=document.get_content(),
        created_at=document.created_at,
        updated_at=document.updated_at,
        expires_at=document.expires_at,
        has_password=document.has_password
    )


@router.put("/{document_id}", response_model=DocumentUpdateResponse)
async def update_document(
    document_id: str,
    request: Request,
    update_data: Optional[DocumentUpdate] = None,
    document_service: DocumentService = Depends(get_document_service)
):
    """Замена содержимого документа"""
    update_data = update_data or DocumentUpdate()
    password = extract_document_password(request, update_data.password)
    updated_at = await document_service.update_content(document_id, update_data.content, password)
    return DocumentUpdateResponse(updated_at=updated_at)


@router.post("/{document_id}/password", response_model=PasswordSetResponse)
async def set_document_password(
    document_id: str,
    password_data: Optional[PasswordSet] = None,
    document_service: DocumentService = Depends(get_document_service)
):
    """Однократная установка пароля документа"""
    password_data = password_data or PasswordSet()
    password_set_at = await document_service.set_password(document_id, password_data.password)
    return PasswordSetResponse(password_set_at=password_set_at)


@router.post("/{document_id}/expiry", response_model=ExpiryUpdateResponse)
async def set_document_expiry(
    document_id: str,
    expiry_data: Optional[ExpiryUpdate] = None,
    document_service: DocumentService = Depends(get_document_service)
):
    """Установка или снятие срока жизни документа"""
    expiry_data = expiry_data or ExpiryUpdate()
    expires_at = await document_service.set_expiry(
        document_id,
        expiry_data.expires_at,
        provided="expires_at" in expiry_data.model_fields_set
    )
    return ExpiryUpdateResponse(expires_at=expires_at)
