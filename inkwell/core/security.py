"""Password hashing and signed session-cookie tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from inkwell.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 2
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Compared against when the email is unknown so both login failure paths pay for one bcrypt check.
_DUMMY_HASH = bcrypt.hashpw(b"inkwell-timing-equalizer", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def burn_password_check(plain_password: str) -> None:
    """Run a bcrypt comparison whose result is discarded (unknown-account path)."""
    bcrypt.checkpw(plain_password.encode("utf-8")[:72], _DUMMY_HASH)


def create_session_token(session_id: str, max_age_seconds: int | None = None) -> str:
    """Sign a session id into the cookie value, with iat and exp."""
    now = datetime.now(UTC)
    ttl = max_age_seconds if max_age_seconds is not None else settings.SESSION_MAX_AGE_SECONDS
    payload: dict[str, Any] = {
        "sid": session_id,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str) -> str:
    """
    Validate a session cookie and return the session id it carries.
    Raises jwt.PyJWTError on a forged, malformed or expired cookie.
    """
    payload = jwt.decode(
        token,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[settings.SESSION_ALGORITHM],
    )
    sid = payload.get("sid")
    if not isinstance(sid, str) or not sid:
        raise jwt.InvalidTokenError("Session token has no sid")
    return sid
