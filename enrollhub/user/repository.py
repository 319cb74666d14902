"""Credential store: data access for the users table."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from enrollhub.user.exceptions import EmailExistsError
from enrollhub.user.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Record-oriented access to users; every write is its own transaction."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        return self.session.exec(select(User).where(User.email == email)).first()

    def find_by_reset_token(self, token_digest: str) -> User | None:
        if not token_digest:
            return None
        return self.session.exec(
            select(User).where(User.reset_password_token == token_digest)
        ).first()

    def email_taken_by_other(self, email: str, user_id: int | None) -> bool:
        statement = select(User.id).where(User.email == email)
        if user_id is not None:
            statement = statement.where(User.id != user_id)
        return self.session.exec(statement).first() is not None

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(User)).one()

    def insert(self, user: User) -> User:
        """Persist a new row; the unique email index decides conflicts."""
        return self._commit(user)

    def save(self, user: User) -> User:
        """Persist changes and reload the row from the database."""
        return self._commit(user)

    def _commit(self, user: User) -> User:
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if "email" not in str(e.orig).lower():
                raise
            logger.info("Email uniqueness violated for %s", user.email)
            raise EmailExistsError() from e
        self.session.refresh(user)
        return user
