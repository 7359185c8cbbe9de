# File: projector/core/security.py

"""
Security helpers for the Projector API.

Access tokens are HS256 JWTs whose ``sub`` claim is the user id.
Passwords are stored as salted PBKDF2-SHA256 hashes in the form
``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>``.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from projector.core.config import settings


ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes
SECRET_KEY = settings.secret_key

PBKDF2_ITERATIONS = 260_000


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Build a signed access token for ``subject`` (a user id).
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode: dict[str, Any] = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """
    Return the user id carried by ``token``, or None if the token is
    malformed, badly signed or expired.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None
    return payload.get("sub")


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, hashed_password: str) -> bool:
    # malformed stored hashes never verify
    try:
        scheme, iterations, salt_hex, digest_hex = hashed_password.split("$")
        if scheme != "pbkdf2_sha256":
            return False
        digest = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            bytes.fromhex(salt_hex),
            int(iterations),
        )
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex().encode("ascii"), digest_hex.encode("utf-8"))
