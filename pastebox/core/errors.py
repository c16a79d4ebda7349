from typing import Any, Dict, Optional

from fastapi import status


class PasteboxError(Exception):
    """Базовое исключение приложения, отображаемое в HTTP-ответ"""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.headers = headers

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


# Документы

class DocumentNotFoundError(PasteboxError):
    def __init__(self, document_id: str):
        super().__init__(f"Document '{document_id}' not found", "not_found", status.HTTP_404_NOT_FOUND)
        self.document_id = document_id


class DocumentExpiredError(PasteboxError):
    def __init__(self, document_id: str):
        super().__init__(f"Document '{document_id}' has expired", "expired", status.HTTP_404_NOT_FOUND)
        self.document_id = document_id


class PasswordRequiredError(PasteboxError):
    def __init__(self):
        super().__init__("Document is password protected", "password_required", status.HTTP_401_UNAUTHORIZED)


class InvalidPasswordError(PasteboxError):
    def __init__(self):
        super().__init__("Document password is incorrect", "invalid_password", status.HTTP_401_UNAUTHORIZED)


class PasswordAlreadySetError(PasteboxError):
    def __init__(self):
        super().__init__(
            "Document password is already set and cannot be changed",
            "password_already_set",
            status.HTTP_409_CONFLICT,
        )


class DocumentTooLargeError(PasteboxError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            f"Document is {size} bytes, limit is {limit}",
            "doc_too_large",
            status.HTTP_413_CONTENT_TOO_LARGE,
        )
        self.size = size
        self.limit = limit


# Общие

class InvalidInputError(PasteboxError):
    def __init__(self, code: str, message: Optional[str] = None):
        super().__init__(message or code.replace("_", " "), code, status.HTTP_400_BAD_REQUEST)


class RateLimitedError(PasteboxError):
    def __init__(self, retry_after: int):
        super().__init__(
            "Too many documents created, retry later",
            "rate_limited",
            status.HTTP_429_TOO_MANY_REQUESTS,
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after

    def to_response(self) -> Dict[str, Any]:
        response = super().to_response()
        response["retryAfter"] = self.retry_after
        return response


# Аккаунты и избранное

class NotAuthenticatedError(PasteboxError):
    def __init__(self):
        super().__init__("Authentication required", "unauthorized", status.HTTP_401_UNAUTHORIZED)


class InvalidCredentialsError(PasteboxError):
    def __init__(self):
        super().__init__("Incorrect email or password", "invalid_credentials", status.HTTP_401_UNAUTHORIZED)


class EmailTakenError(PasteboxError):
    def __init__(self):
        super().__init__("Email already registered", "email_taken", status.HTTP_409_CONFLICT)


class FavoriteNotFoundError(PasteboxError):
    def __init__(self, favorite_id: int):
        super().__init__(f"Favorite {favorite_id} not found", "not_found", status.HTTP_404_NOT_FOUND)
        self.favorite_id = favorite_id
