"""Credential store: user identity records and password verification."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from inkwell.core.database import store_operation
from inkwell.core.errors import DuplicateEmail, DuplicateUsername, InvalidCredentials
from inkwell.core.security import burn_password_check, hash_password, verify_password
from inkwell.models import User, UserRole

logger = logging.getLogger(__name__)
audit = logging.getLogger("inkwell.audit")


class CredentialStore:
    """Lookup, verification and lifecycle of user accounts."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_email(self, email: str) -> User | None:
        """Exact-match lookup by email."""
        with store_operation(self._db, "find_by_email"):
            return self._db.scalar(select(User).where(User.email == email))

    def find_by_username(self, username: str) -> User | None:
        with store_operation(self._db, "find_by_username"):
            return self._db.scalar(select(User).where(User.username == username))

    def find_by_id(self, user_id: int) -> User | None:
        with store_operation(self._db, "find_by_id"):
            return self._db.get(User, user_id)

    def verify_credentials(self, email: str, password: str) -> User:
        """
        Return the user whose email and password match.

        Unknown email, wrong password and inactive account all raise the same
        InvalidCredentials, and each path runs exactly one bcrypt comparison.
        """
        user = self.find_by_email(email)
        if user is None:
            burn_password_check(password)
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        if not user.is_active:
            raise InvalidCredentials()
        return user

    def create(self, username: str, email: str, password: str) -> int:
        """Hash the password and persist a new active user; return its id."""
        if self.find_by_email(email) is not None:
            raise DuplicateEmail(email)
        if self.find_by_username(username) is not None:
            raise DuplicateUsername(username)

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        with store_operation(self._db, "create_user"):
            self._db.add(user)
            try:
                self._db.commit()
            except IntegrityError as e:
                # Lost a race with a concurrent insert; report which field collided.
                self._db.rollback()
                if self.find_by_email(email) is not None:
                    raise DuplicateEmail(email) from e
                raise DuplicateUsername(username) from e
        audit.info("User created id=%s username=%s", user.id, username)
        return user.id

    def update_active_status(self, user_id: int, is_active: bool) -> bool:
        """Activate or deactivate an account. Returns False if the user does not exist."""
        with store_operation(self._db, "update_active_status"):
            user = self._db.get(User, user_id)
            if user is None:
                return False
            user.is_active = is_active
            self._db.commit()
        audit.info("User %s id=%s", "activated" if is_active else "deactivated", user_id)
        return True

    def delete(self, user_id: int) -> bool:
        """Hard-delete a user and their role links. Returns False if the user does not exist."""
        with store_operation(self._db, "delete_user"):
            user = self._db.get(User, user_id)
            if user is None:
                return False
            for link in self._db.scalars(select(UserRole).where(UserRole.user_id == user_id)):
                self._db.delete(link)
            self._db.delete(user)
            self._db.commit()
        audit.info("User deleted id=%s", user_id)
        return True

    def list_users(self) -> list[User]:
        """All users, newest first, with roles loaded."""
        with store_operation(self._db, "list_users"):
            stmt = (
                select(User)
                .options(selectinload(User.roles))
                .order_by(User.created_at.desc(), User.id.desc())
            )
            return list(self._db.scalars(stmt))
