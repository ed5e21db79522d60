import hashlib
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from skillconnect.config import settings


def _prehash(password: str) -> bytes:
    """Pre-hash to avoid bcrypt's 72-byte limit."""
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_prehash(plain), hashed.encode())


def create_session_token(
    user_id: str,
    email: str,
    role: str,
    login_time: datetime | None = None,
    last_login: datetime | None = None,
) -> str:
    """
    Sign a session carrying identity, role and login timestamps.
    Timestamps are epoch seconds so the gate can check staleness without a DB hit.
    """
    now = datetime.now(timezone.utc)
    login_time = login_time or now
    last_login = last_login or login_time
    to_encode = {
        "sub": user_id,
        "email": email,
        "role": role,
        "login_time": int(login_time.timestamp()),
        "last_login": int(last_login.timestamp()),
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_session_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def generate_id() -> str:
    return str(uuid4())
