from datetime import datetime, timedelta, timezone

from skillconnect.core.security import (
    create_session_token,
    decode_session_token,
    generate_id,
    hash_password,
    verify_password,
)


def test_password_hash_and_verify_roundtrip():
    plain = "StrongPass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed) is True
    assert verify_password("wrong", hashed) is False


def test_long_password_is_not_truncated():
    base = "A1!" + "x" * 80
    hashed = hash_password(base)
    assert verify_password(base + "y", hashed) is False


def test_session_token_carries_role_and_timestamps():
    login = datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)
    token = create_session_token("user-123", "a@b.co", "employer", login_time=login)
    claims = decode_session_token(token)
    assert claims["sub"] == "user-123"
    assert claims["role"] == "employer"
    assert claims["login_time"] == int(login.timestamp())
    assert claims["last_login"] == int(login.timestamp())


def test_session_token_last_login_can_differ():
    login = datetime.now(timezone.utc)
    earlier = login - timedelta(hours=1)
    claims = decode_session_token(create_session_token("u", "u@x.io", "seeker", login_time=login, last_login=earlier))
    assert claims["last_login"] == int(earlier.timestamp())


def test_decode_invalid_token_and_generators():
    assert decode_session_token("not-a-jwt") is None
    token = create_session_token("u", "u@x.io", "seeker")
    header, payload, _ = token.split(".")
    assert decode_session_token(f"{header}.{payload}.{'A' * 43}") is None
    assert len(generate_id()) > 10
