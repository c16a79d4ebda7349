"""Password gate for reads and writes."""

import pytest

from pastebox.core.clock import utcnow
from pastebox.core.errors import InvalidPasswordError, PasswordRequiredError
from pastebox.domains.documents.access import DocumentAccessGuard
from pastebox.domains.documents.entities import AccessState, Document


def _document(password_hash=None) -> Document:
    now = utcnow()
    return Document(id="abc12345", content="{}", created_at=now, updated_at=now, password_hash=password_hash)


@pytest.fixture
def guard(hasher):
    return DocumentAccessGuard(hasher)


async def test_unlocked_document_needs_no_password(guard):
    document = _document()
    assert document.access_state is AccessState.UNLOCKED
    await guard.authorize(document, None)


async def test_unlocked_document_ignores_supplied_password(guard):
    await guard.authorize(_document(), "whatever")


async def test_locked_document_without_password(guard, hasher):
    document = _document(hasher.hash("abcd"))
    assert document.access_state is AccessState.LOCKED
    with pytest.raises(PasswordRequiredError):
        await guard.authorize(document, None)
    with pytest.raises(PasswordRequiredError):
        await guard.authorize(document, "")


async def test_locked_document_with_wrong_password(guard, hasher):
    with pytest.raises(InvalidPasswordError):
        await guard.authorize(_document(hasher.hash("abcd")), "dcba")


async def test_locked_document_with_correct_password(guard, hasher):
    await guard.authorize(_document(hasher.hash("abcd")), "abcd")


async def test_corrupt_stored_hash_is_invalid_password(guard):
    with pytest.raises(InvalidPasswordError):
        await guard.authorize(_document("corrupt"), "abcd")
