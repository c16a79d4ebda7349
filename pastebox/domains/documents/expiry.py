import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pastebox.core.clock import utcnow
from pastebox.core.errors import DocumentExpiredError
from pastebox.db.repositories.document_repository import DocumentRepository
from pastebox.domains.documents.entities import Document

logger = logging.getLogger(__name__)


class ExpiryEnforcer:
    """Ленивая проверка срока жизни при обращении к документу"""

    def __init__(self, repository: DocumentRepository, clock: Callable[[], datetime] = utcnow):
        self.repository = repository
        self.clock = clock

    async def ensure_alive(self, document: Document) -> Document:
        """Истекший документ удаляется сразу и сообщается как expired"""
        if not document.is_expired(self.clock()):
            return document

        await self.repository.delete(document.id)
        logger.info("Deleted expired document on access", extra={"document_id": document.id})
        raise DocumentExpiredError(document.id)

    async def sweep(self) -> int:
        """Удаление всех истекших документов"""
        return await self.repository.delete_expired_before(self.clock())


class ExpirySweeper:
    """Периодическое удаление истекших документов, к которым никто не обращается"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        interval_seconds: float,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self.clock = clock
        self._task: Optional[asyncio.Task] = None

    async def run_once(self) -> int:
        """Один проход очистки; ошибки логируются, следующий тик повторит попытку"""
        try:
            async with self.session_factory() as session:
                deleted = await ExpiryEnforcer(DocumentRepository(session), self.clock).sweep()
        except Exception:
            logger.exception("Expired documents sweep failed")
            return 0

        if deleted:
            logger.info("Swept expired documents", extra={"deleted": deleted})
        return deleted

    async def run_forever(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.run_once()

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_forever(), name="expiry-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
