# feedback_api/services/users.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from feedback_api.models.user import User
from feedback_api.services.base import Gateway, utcnow

logger = logging.getLogger(__name__)


class CreateUserStatus(str, Enum):
    CREATED = "created"
    DUPLICATE_EMAIL = "duplicate_email"
    FAILED = "failed"


@dataclass(frozen=True)
class CreateUserResult:
    status: CreateUserStatus
    user: Optional[User] = None


class UserGateway(Gateway):

    def create(self, *, name: str, email: str, password_hash: str, role: str = "user") -> CreateUserResult:
        """
        Inserts a user. The unique index on email decides duplicates, so two
        concurrent signups with one address still produce a single row.
        """
        user = User(
            name=name,
            email=email.strip().lower(),
            password=password_hash,
            role=role,
            created_at=utcnow(),
        )
        try:
            with self._session_factory() as db:
                db.add(user)
                db.commit()
                db.refresh(user)
        except IntegrityError:
            logger.info("Signup rejected, email already registered: %s", user.email)
            return CreateUserResult(CreateUserStatus.DUPLICATE_EMAIL)
        except SQLAlchemyError:
            logger.exception("Error creating user %s", user.email)
            return CreateUserResult(CreateUserStatus.FAILED)

        logger.info("User %s created with id %s", user.email, user.id)
        return CreateUserResult(CreateUserStatus.CREATED, user)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._session("finding user by email") as db:
            return db.scalars(select(User).where(User.email == email.strip().lower())).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._session("finding user by id") as db:
            return db.get(User, user_id)

    def exists(self, email: str) -> bool:
        with self._session("checking user email") as db:
            count = db.scalar(
                select(func.count(User.id)).where(User.email == email.strip().lower())
            )
            return bool(count)
