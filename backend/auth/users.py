"""User account storage."""

import logging

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.db import User, get_db, store_call
from backend.errors import BadRequestError

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"


class UserStore:
    """User lookups and writes for a single database session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> User | None:
        with store_call("get_user"):
            return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        with store_call("get_user_by_email"):
            return self.db.query(User).filter(User.email == email).first()

    def email_taken(self, email: str, exclude_user_id: str | None = None) -> bool:
        with store_call("email_taken"):
            query = self.db.query(User).filter(User.email == email)
            if exclude_user_id:
                query = query.filter(User.id != exclude_user_id)
            return query.first() is not None

    def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        with store_call("create_user"):
            self.db.add(user)
            self._commit()
            self.db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    def update(self, user: User, **fields) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        with store_call("update_user"):
            self._commit()
            self.db.refresh(user)
        return user

    def _commit(self):
        # A concurrent write can still claim the email between check and commit
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequestError(EMAIL_IN_USE) from e


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    """FastAPI dependency for a request-scoped UserStore."""
    return UserStore(db)
