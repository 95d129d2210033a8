"""
Credential storage: username to salted password hash.

Plaintext passwords are accepted as arguments and never persisted; only the
passlib hash reaches the ``users`` table.
"""
import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import Note, User

logger = logging.getLogger(__name__)

# pbkdf2_sha256 has no 72-byte input limit.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class UsernameTaken(Exception):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")


# PUBLIC_INTERFACE
class CredentialStore:
    """
    Users and their password hashes, backed by a SQLAlchemy session.

    Every mutating method commits its own unit of work.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, username: str, password: str) -> User:
        """
        Create a user. Raises UsernameTaken on an exact (case-sensitive) match.
        """
        if self.find_by_username(username) is not None:
            raise UsernameTaken(username)
        user = User(username=username, password_hash=pwd_context.hash(password))
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same name.
            self.session.rollback()
            raise UsernameTaken(username)
        self.session.refresh(user)
        logger.info("Created user id=%s", user.id)
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def verify(self, username: str, password: str) -> Optional[User]:
        """
        Return the user when the password matches, otherwise None.

        Unknown usernames and wrong passwords are indistinguishable: for an
        unknown user a dummy hash verification is still performed.
        """
        user = self.find_by_username(username)
        if user is None:
            pwd_context.dummy_verify()
            return None
        if not pwd_context.verify(password, user.password_hash):
            return None
        return user

    def _verified_by_id(self, user_id: int, password: str) -> Optional[User]:
        user = self.find_by_id(user_id)
        if user is None or not pwd_context.verify(password, user.password_hash):
            return None
        return user

    def update_password(self, user_id: int, old_password: str, new_password: str) -> bool:
        """Replace the hash after re-verifying the old password. False on mismatch."""
        user = self._verified_by_id(user_id, old_password)
        if user is None:
            return False
        user.password_hash = pwd_context.hash(new_password)
        self.session.commit()
        logger.info("Password changed for user id=%s", user_id)
        return True

    def delete_user(self, user_id: int, password: str) -> bool:
        """
        Delete the user and all of their notes after re-verifying the password.

        Notes and user are removed in one transaction, so a failure part-way
        leaves both in place.
        """
        user = self._verified_by_id(user_id, password)
        if user is None:
            return False
        removed_notes = (
            self.session.query(Note)
            .filter(Note.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.delete(user)
        self.session.commit()
        logger.info("Deleted user id=%s with %d note(s)", user_id, removed_notes)
        return True
