"""Tests for inkwell.core.security: bcrypt helpers and signed session tokens."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from support import DEFAULT_PASSWORD

from inkwell.core.config import settings
from inkwell.core.security import (
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)


class TestPasswords(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password(DEFAULT_PASSWORD)
        self.assertTrue(verify_password(DEFAULT_PASSWORD, hashed))
        self.assertFalse(verify_password("wrong-password", hashed))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password(DEFAULT_PASSWORD, "not-a-bcrypt-hash"))


class TestSessionTokens(unittest.TestCase):
    def test_round_trip(self) -> None:
        token = create_session_token("abc123", max_age_seconds=120)
        self.assertEqual(decode_session_token(token), "abc123")

    def test_tampered_token_rejected(self) -> None:
        forged = jwt.encode(
            {"sid": "abc123"}, "an-attacker-chosen-secret-of-some-length", algorithm="HS256"
        )
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_session_token(forged)

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(jwt.PyJWTError):
            decode_session_token("not.a.token")

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        expired = jwt.encode(
            {"sid": "abc123", "iat": past, "exp": past + timedelta(minutes=1)},
            settings.SESSION_SECRET.get_secret_value(),
            algorithm=settings.SESSION_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_session_token(expired)

    def test_token_without_sid_rejected(self) -> None:
        token = jwt.encode(
            {"user": 1},
            settings.SESSION_SECRET.get_secret_value(),
            algorithm=settings.SESSION_ALGORITHM,
        )
        with self.assertRaises(jwt.InvalidTokenError):
            decode_session_token(token)


if __name__ == "__main__":
    unittest.main()
