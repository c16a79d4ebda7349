import logging
from datetime import datetime
from typing import Any, Callable, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.core.clock import as_utc, utcnow
from pastebox.core.config import Settings
from pastebox.core.errors import (
    DocumentNotFoundError, InvalidInputError, PasswordAlreadySetError
)
from pastebox.core.security import DOCUMENT_PASSWORD_MIN_LENGTH, CredentialHasher, ensure_password_length
from pastebox.db.repositories.document_repository import DocumentIdCollisionError, DocumentRepository
from pastebox.domains.documents.access import DocumentAccessGuard
from pastebox.domains.documents.entities import Document, serialize_content
from pastebox.domains.documents.expiry import ExpiryEnforcer

logger = logging.getLogger(__name__)

CREATE_ATTEMPTS = 3

_datetime_adapter = TypeAdapter(datetime)


def parse_expires_at(value: Optional[str]) -> Optional[datetime]:
    """Разбор ISO-8601 срока жизни; None означает "бессрочно" """
    if value is None:
        return None
    try:
        return as_utc(_datetime_adapter.validate_python(value))
    except (ValidationError, OverflowError):
        # OverflowError: смещение уводит дату за пределы datetime
        raise InvalidInputError("invalid_expires_at", "expiresAt must be an ISO-8601 timestamp or null")


class DocumentService:
    """Сервис для работы с документами

    Каждая операция заново читает запись: сначала проверка срока жизни,
    затем проверка доступа, затем сама операция.
    """

    def __init__(
        self,
        session: AsyncSession,
        hasher: CredentialHasher,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow
    ):
        self.session = session
        self.settings = settings
        self.clock = clock
        self.hasher = hasher
        self.document_repository = DocumentRepository(session)
        self.expiry = ExpiryEnforcer(self.document_repository, clock)
        self.guard = DocumentAccessGuard(hasher)

    async def _load(self, document_id: str) -> Document:
        """Получение живого документа или исключение not_found / expired"""
        document = await self.document_repository.get(document_id)

        if not document:
            raise DocumentNotFoundError(document_id)

        return await self.expiry.ensure_alive(document)

    async def create_document(self) -> Document:
        """Создание нового пустого документа"""
        for _ in range(CREATE_ATTEMPTS):
            document = Document.create_document(self.settings.max_doc_bytes, now=self.clock())
            try:
                created = await self.document_repository.create(document)
            except DocumentIdCollisionError:
                logger.warning("Document id collision, retrying", extra={"document_id": document.id})
                continue
            logger.info("Document created", extra={"document_id": created.id})
            return created

        raise RuntimeError("Could not allocate a unique document id")

    async def read_document(self, document_id: str, password: Optional[str]) -> Document:
        """Чтение документа с учетом пароля; увеличивает счетчик просмотров"""
        document = await self._load(document_id)
        await self.guard.authorize(document, password)

        try:
            await self.document_repository.increment_view_count(document_id, self.clock())
        except SQLAlchemyError as exc:
            # Счетчик вспомогательный, чтение не должно из-за него падать
            await self.session.rollback()
            logger.warning("Failed to record document view: %s", exc, extra={"document_id": document_id})

        return document

    async def update_content(self, document_id: str, content: Any, password: Optional[str]) -> datetime:
        """Замена содержимого документа"""
        if content is None:
            raise InvalidInputError("missing_content", "Document content is required")

        document = await self._load(document_id)
        await self.guard.authorize(document, password)

        serialized = serialize_content(content, self.settings.max_doc_bytes)
        now = self.clock()
        await self.document_repository.update_content(document_id, serialized, now)
        return now

    async def set_password(self, document_id: str, password: Optional[str]) -> datetime:
        """Однократная установка пароля; повторная попытка отклоняется"""
        ensure_password_length(password, DOCUMENT_PASSWORD_MIN_LENGTH)

        document = await self._load(document_id)
        if document.has_password:
            raise PasswordAlreadySetError()

        password_hash = await run_in_threadpool(self.hasher.hash, password)
        now = self.clock()
        if not await self.document_repository.set_password_hash(document_id, password_hash, now):
            # Либо пароль успели установить параллельно, либо документ удален
            current = await self.document_repository.get(document_id)
            if current is None:
                raise DocumentNotFoundError(document_id)
            raise PasswordAlreadySetError()
        return now

    async def set_expiry(self, document_id: str, expires_at: Optional[str], provided: bool = True) -> Optional[datetime]:
        """Установка, изменение или снятие срока жизни (прошлое время допустимо)

        Пароль документа не проверяется: срок может менять любой, у кого есть ссылка,
        в том числе у запертого документа.
        """
        if not provided:
            raise InvalidInputError("expires_at_required", "expiresAt is required (null clears expiry)")

        await self._load(document_id)
        parsed = parse_expires_at(expires_at)

        if not await self.document_repository.set_expiry(document_id, parsed):
            raise DocumentNotFoundError(document_id)
        return parsed
