# feedback_api/core/security.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from feedback_api.core.config import Settings

logger = logging.getLogger(__name__)


class TokenService:
    """
    Issues and validates signed session tokens.
    The secret is read once at construction; rotating it invalidates every
    outstanding token.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 24 * 60,
        leeway_seconds: int = 0,
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.leeway_seconds = leeway_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
            leeway_seconds=settings.JWT_LEEWAY_SECONDS,
        )

    def issue(self, user_id: int, email: str, expires_minutes: int | None = None) -> str:
        """
        Builds a JWT with 'sub' (as str), 'email', 'iat' and 'exp'.
        """
        if expires_minutes is None:
            expires_minutes = self.expire_minutes

        now = datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "iat": int(now.timestamp()),
            "exp": now + timedelta(minutes=expires_minutes),
        }
        token = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        logger.info("Issued token for user %s", user_id)
        return token

    def decode(self, token: str) -> dict[str, Any]:
        """Raises jwt.InvalidTokenError on any signature, expiry or structure problem."""
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self.algorithm],
            options={"require": ["exp", "iat", "sub"], "verify_exp": True},
            leeway=self.leeway_seconds,
        )

    def validate(self, token: Optional[str]) -> Optional[int]:
        """
        Returns the user id carried by a valid token, None otherwise.
        There is no partial validity: expired, tampered, malformed or
        wrongly-signed tokens all come back as None.
        """
        if not token:
            return None
        try:
            payload = self.decode(token)
        except jwt.ExpiredSignatureError:
            logger.info("Rejected token: expired")
            return None
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected token: %s", exc.__class__.__name__)
            return None

        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            logger.info("Rejected token: non-numeric subject")
            return None
