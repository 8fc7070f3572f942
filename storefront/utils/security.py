# storefront/utils/security.py
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from storefront.utils.settings import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRES_DAYS

_PBKDF2_ROUNDS = 120_000


def hash_password(password: str) -> str:
    """Salted PBKDF2-SHA256, zapisywane jako `salt$hash`."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), _PBKDF2_ROUNDS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        salt, expected = password_hash.split("$", 1)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), _PBKDF2_ROUNDS)
    return hmac.compare_digest(digest.hex(), expected)


def create_token(payload: dict, now: datetime | None = None) -> str:
    issued = now or datetime.now(timezone.utc)
    to_encode = {**payload, "iat": issued, "exp": issued + timedelta(days=JWT_EXPIRES_DAYS)}
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Raises jwt.InvalidTokenError (incl. ExpiredSignatureError)."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
