from typing import Optional

from fastapi.concurrency import run_in_threadpool

from pastebox.core.errors import InvalidPasswordError, PasswordRequiredError
from pastebox.core.security import CredentialHasher
from pastebox.domains.documents.entities import AccessState, Document


class DocumentAccessGuard:
    """Решение о доступе к документу на чтение и запись

    Незапертый документ доступен любому, кто знает ссылку.
    Запертый требует пароль, который проверяется по сохраненному хешу при каждом запросе.
    """

    def __init__(self, hasher: CredentialHasher):
        self.hasher = hasher

    async def authorize(self, document: Document, password: Optional[str]) -> None:
        """Проверка доступа; исключение при отсутствии или несовпадении пароля"""
        if document.access_state is AccessState.UNLOCKED:
            return

        if not password:
            raise PasswordRequiredError()

        # argon2 намеренно дорогой: не блокируем event loop
        ok = await run_in_threadpool(self.hasher.verify, document.password_hash, password)
        if not ok:
            raise InvalidPasswordError()
