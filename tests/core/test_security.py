"""Credential hasher and session token codec."""

import pytest
from jose.utils import base64url_encode

from pastebox.core.config import Settings
from pastebox.core.errors import InvalidInputError
from pastebox.core.security import (
    SessionTokenCodec, ensure_password_length, extract_token_from_header, resolve_auth_secret
)

DAY_MS = 24 * 60 * 60 * 1000


class FakeClock:
    def __init__(self, now_ms: int):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms


def _flip(char: str) -> str:
    return "B" if char == "A" else "A"


# Хеширование

def test_hash_verifies_with_same_password(hasher):
    digest = hasher.hash("abcd")
    assert hasher.verify(digest, "abcd")


def test_hash_rejects_other_password(hasher):
    digest = hasher.hash("abcd")
    assert not hasher.verify(digest, "abce")


def test_hash_is_salted(hasher):
    assert hasher.hash("abcd") != hasher.hash("abcd")


def test_hash_is_argon2(hasher):
    assert hasher.hash("abcd").startswith("$argon2")


def test_corrupt_digest_is_a_mismatch_not_a_crash(hasher):
    assert not hasher.verify("$argon2id$garbage", "abcd")
    assert not hasher.verify("not-a-hash", "abcd")


def test_missing_digest_or_password_fails(hasher):
    assert not hasher.verify(None, "abcd")
    assert not hasher.verify(hasher.hash("abcd"), None)


def test_password_length_check():
    assert ensure_password_length("abcd", 4) == "abcd"
    with pytest.raises(InvalidInputError) as exc_info:
        ensure_password_length("abc", 4)
    assert exc_info.value.code == "password_too_short"
    with pytest.raises(InvalidInputError):
        ensure_password_length(None, 4)


# Токены сессии

def test_token_round_trip(codec):
    token = codec.issue(42)
    identity = codec.verify(token)
    assert identity is not None
    assert identity.user_id == 42


def test_token_has_payload_and_signature(codec):
    assert len(codec.issue(1).split(".")) == 2


@pytest.mark.parametrize("part", [0, 1])
def test_flipping_any_byte_fails(codec, part):
    token = codec.issue(7)
    pieces = token.split(".")
    target = pieces[part]
    for index in range(len(target)):
        mutated = target[:index] + _flip(target[index]) + target[index + 1:]
        forged = list(pieces)
        forged[part] = mutated
        assert codec.verify(".".join(forged)) is None


def test_token_from_other_secret_fails(codec):
    other = SessionTokenCodec("another-secret", ttl_seconds=codec.ttl_seconds)
    assert codec.verify(other.issue(1)) is None


def test_token_older_than_ttl_fails():
    clock = FakeClock(1_700_000_000_000)
    codec = SessionTokenCodec("test-secret", ttl_seconds=7 * 24 * 60 * 60, clock=clock)
    token = codec.issue(5)

    clock.now_ms += 7 * DAY_MS
    assert codec.verify(token) is not None

    clock.now_ms += 1
    assert codec.verify(token) is None


@pytest.mark.parametrize("token", [None, "", "abc", "a.b.c", ".sig", "payload."])
def test_malformed_tokens_fail(codec, token):
    assert codec.verify(token) is None


@pytest.mark.parametrize("claim", [
    b'{"userId":0,"iat":1700000000000}',
    b'{"userId":-3,"iat":1700000000000}',
    b'{"userId":"1","iat":1700000000000}',
    b'{"userId":true,"iat":1700000000000}',
    b'{"iat":1700000000000}',
    b'{"userId":1}',
    b'[1,2]',
    b'not json',
])
def test_signed_but_invalid_claim_fails(claim):
    codec = SessionTokenCodec("test-secret", ttl_seconds=60, clock=FakeClock(1_700_000_000_000))
    payload = base64url_encode(claim)
    token = f"{payload.decode()}.{codec._sign(payload).decode()}"
    assert codec.verify(token) is None


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        SessionTokenCodec("", ttl_seconds=60)


def test_configured_secret_is_used():
    assert resolve_auth_secret(Settings(auth_secret="configured")) == "configured"


def test_missing_secret_generates_random_one(caplog):
    settings = Settings(auth_secret=None, environment="development")
    first = resolve_auth_secret(settings)
    second = resolve_auth_secret(settings)
    assert len(first) == 64
    assert first != second
    assert "AUTH_SECRET is not configured" in caplog.text


def test_bearer_header_parsing():
    assert extract_token_from_header("Bearer abc.def") == "abc.def"
    assert extract_token_from_header("bearer abc.def") == "abc.def"
    assert extract_token_from_header("Basic abc") is None
    assert extract_token_from_header(None) is None
