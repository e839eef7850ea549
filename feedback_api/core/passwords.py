# feedback_api/core/passwords.py
from __future__ import annotations

import logging
import re

import bcrypt

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only reads the first 72 bytes of the secret
_BCRYPT_MAX_BYTES = 72

EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9_+&*-]+(?:\.[a-zA-Z0-9_+&*-]+)*@(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,7}$"
)


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password: str, hashed: str | None) -> bool:
        """Never raises: a malformed or missing hash simply does not match."""
        if not password or not hashed:
            return False
        try:
            return bcrypt.checkpw(_secret(password), hashed.encode("utf-8"))
        except (ValueError, TypeError) as exc:
            logger.warning("Password verification failed on malformed hash: %s", exc)
            return False


def is_valid_password(password: str | None) -> bool:
    return password is not None and len(password) >= MIN_PASSWORD_LENGTH


def is_valid_email(email: str | None) -> bool:
    if not email or not email.strip():
        return False
    return EMAIL_RE.match(email) is not None
