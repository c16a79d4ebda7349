from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pastebox.db.models.document import Document as DocumentModel
from pastebox.domains.documents.entities import Document


class DocumentIdCollisionError(Exception):
    """Сгенерированный идентификатор уже занят"""


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        """Создание нового документа"""
        db_document = DocumentModel(
            id=document.id,
            content=document.content,
            created_at=document.created_at,
            updated_at=document.updated_at,
            expires_at=document.expires_at,
            password_hash=document.password_hash,
            password_set_at=document.password_set_at,
            view_count=document.view_count,
            last_accessed_at=document.last_accessed_at
        )

        self.session.add(db_document)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DocumentIdCollisionError(document.id)
        await self.session.refresh(db_document)
        return self._to_domain(db_document)

    async def get(self, document_id: str) -> Optional[Document]:
        """Получение документа по идентификатору"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def update_content(self, document_id: str, content: str, updated_at: datetime) -> bool:
        """Обновление содержимого (последняя запись побеждает)"""
        result = await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(content=content, updated_at=updated_at)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def set_password_hash(self, document_id: str, password_hash: str, set_at: datetime) -> bool:
        """Установка пароля; False, если пароль уже был установлен"""
        # Условие в самом UPDATE: два конкурентных запроса не перезапишут друг друга
        result = await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id, DocumentModel.password_hash.is_(None))
            .values(password_hash=password_hash, password_set_at=set_at)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def set_expiry(self, document_id: str, expires_at: Optional[datetime]) -> bool:
        """Установка или снятие срока жизни"""
        result = await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(expires_at=expires_at)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def increment_view_count(self, document_id: str, accessed_at: datetime) -> None:
        """Атомарное увеличение счетчика просмотров"""
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(view_count=DocumentModel.view_count + 1, last_accessed_at=accessed_at)
        )
        await self.session.commit()

    async def delete(self, document_id: str) -> bool:
        """Удаление документа (повторное удаление не ошибка)"""
        result = await self.session.execute(
            delete(DocumentModel).where(DocumentModel.id == document_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def delete_expired_before(self, now: datetime) -> int:
        """Удаление всех документов со сроком жизни <= now"""
        result = await self.session.execute(
            delete(DocumentModel).where(
                DocumentModel.expires_at.is_not(None),
                DocumentModel.expires_at <= now
            )
        )
        await self.session.commit()
        return result.rowcount or 0

    def _to_domain(self, db_document: DocumentModel) -> Document:
        """Преобразование модели БД в доменную сущность"""
        return Document(
            id=db_document.id,
            content=db_document.content,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at,
            expires_at=db_document.expires_at,
            password_hash=db_document.password_hash,
            password_set_at=db_document.password_set_at,
            view_count=db_document.view_count,
            last_accessed_at=db_document.last_accessed_at
        )
