"""
Password hashing, access tokens and credential validation rules.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone

import jwt  # PyJWT
from passlib.context import CryptContext

from thoughttrail.errors import Unauthorized

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^\w+([\.-]?\w+)*@\w+([\.-]?\w+)*(\.\w{2,3})+$")
PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).{6,20}$")

PASSWORD_RULE_MESSAGE = (
    "Password should be 6 to 20 characters long with a numeric, "
    "1 lowercase and 1 uppercase letters"
)

JWT_ALGORITHM = "HS256"

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def is_valid_password(password: str) -> bool:
    return bool(PASSWORD_RE.match(password or ""))


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return _pwd_context.verify(password, password_hash)
    except ValueError:
        # Malformed hash in storage; treat as a mismatch.
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(user_id: str, secret: str, expire_minutes: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expire_minutes)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> str:
    """Return the user id carried by ``token`` or raise ``Unauthorized``."""
    try:
        data = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected access token: %s", exc)
        raise Unauthorized("Access token is invalid") from exc
    user_id = data.get("id")
    if not user_id:
        raise Unauthorized("Access token is invalid")
    return user_id
