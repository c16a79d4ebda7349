import hmac
import json
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from jose import jwk
from jose.constants import ALGORITHMS
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext

from pastebox.core.config import Settings
from pastebox.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

ACCOUNT_PASSWORD_MIN_LENGTH = 6
DOCUMENT_PASSWORD_MIN_LENGTH = 4


class CredentialHasher:
    """Хеширование паролей (argon2) для аккаунтов и документов"""

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4):
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__time_cost=time_cost,
            argon2__memory_cost=memory_cost,
            argon2__parallelism=parallelism,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialHasher":
        return cls(
            time_cost=settings.hash_time_cost,
            memory_cost=settings.hash_memory_cost,
            parallelism=settings.hash_parallelism,
        )

    def hash(self, plaintext: str) -> str:
        """Хеширование пароля со случайной солью"""
        return self._context.hash(plaintext)

    def verify(self, digest: Optional[str], plaintext: Optional[str]) -> bool:
        """Проверка пароля; испорченный хеш считается несовпадением"""
        if not digest or plaintext is None:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError) as exc:
            logger.warning("Stored password digest could not be verified: %s", exc)
            return False


def ensure_password_length(password: Optional[str], minimum: int) -> str:
    """Проверка минимальной длины пароля до хеширования"""
    if not isinstance(password, str) or len(password) < minimum:
        raise InvalidInputError(
            "password_too_short",
            f"Password must be at least {minimum} characters long",
        )
    return password


@dataclass(frozen=True)
class SessionIdentity:
    """Данные, извлеченные из подписанного токена сессии"""
    user_id: int
    issued_at_ms: int


def _now_ms() -> int:
    return int(time.time() * 1000)


class SessionTokenCodec:
    """Токен сессии вида payload.signature без хранения на сервере

    payload - base64url(JSON {"userId", "iat"}), signature - base64url(HMAC-SHA256(payload)).
    """

    def __init__(self, secret: str, ttl_seconds: int, clock=_now_ms):
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._key = jwk.construct(secret, algorithm=ALGORITHMS.HS256)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_ms(self) -> int:
        return self.ttl_seconds * 1000

    def _sign(self, payload: bytes) -> bytes:
        return base64url_encode(self._key.sign(payload))

    def issue(self, user_id: int, issued_at_ms: Optional[int] = None) -> str:
        """Создание подписанного токена для пользователя"""
        claim = {"userId": user_id, "iat": issued_at_ms if issued_at_ms is not None else self._clock()}
        payload = base64url_encode(json.dumps(claim, separators=(",", ":")).encode("utf-8"))
        return f"{payload.decode('ascii')}.{self._sign(payload).decode('ascii')}"

    def verify(self, token: Optional[str]) -> Optional[SessionIdentity]:
        """Проверка токена; None при любой ошибке подписи, формата или срока"""
        if not token:
            return None

        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return None
        payload, signature = (part.encode("utf-8") for part in parts)

        # Подпись сравнивается до декодирования payload
        if not hmac.compare_digest(self._sign(payload), signature):
            return None

        try:
            claim = json.loads(base64url_decode(payload).decode("utf-8"))
        except (ValueError, UnicodeDecodeError):
            return None
        if not isinstance(claim, dict):
            return None

        user_id = claim.get("userId")
        issued_at = claim.get("iat")
        if not _is_positive_int(user_id) or not _is_positive_int(issued_at):
            return None
        if self._clock() - issued_at > self.ttl_ms:
            return None

        return SessionIdentity(user_id=user_id, issued_at_ms=issued_at)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def resolve_auth_secret(settings: Settings) -> str:
    """Секрет подписи: из настроек или случайный на время жизни процесса"""
    if settings.auth_secret:
        return settings.auth_secret

    if settings.is_production:
        logger.error(
            "AUTH_SECRET is not configured in production; generated a random secret, "
            "all sessions will be invalidated on restart"
        )
    else:
        logger.warning("AUTH_SECRET is not configured; generated a random per-process secret")
    return secrets.token_hex(32)


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Извлечение токена из заголовка Authorization"""
    if not authorization:
        return None

    parts = authorization.split()

    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
