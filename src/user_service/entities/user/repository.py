"""Data-access layer for users.

Every operation is a single fixed, parameterized statement. Nothing is
cached; each call goes straight to the database.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.user_service.core.errors import DatabaseOperationError

from .entity import USER_FIELDS, User, UserPayload

LIST_USERS = text("SELECT * FROM users")

INSERT_USER = text(
    "INSERT INTO users ({columns}) VALUES ({values})".format(
        columns=", ".join(USER_FIELDS),
        values=", ".join(f":{name}" for name in USER_FIELDS),
    )
)

UPDATE_USER = text(
    "UPDATE users SET {assignments} WHERE id = :id".format(
        assignments=", ".join(f"{name}=:{name}" for name in USER_FIELDS),
    )
)

DELETE_USER = text("DELETE FROM users WHERE id = :id")


class UserRepository:
    """Data-access layer for users."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[User]:
        with self._translate_errors("list"):
            rows = self._session.exec(LIST_USERS).mappings().all()
        return [User.model_validate(dict(row)) for row in rows]

    def create(self, payload: UserPayload) -> None:
        """Insert a user. The assigned identifier is not reported back."""
        with self._translate_errors("create"):
            self._session.exec(INSERT_USER, params=payload.to_params())
            self._session.commit()

    def update(self, user_id: Any, payload: UserPayload) -> int:
        """Overwrite all eight fields of a user.

        Returns the affected row count; zero means no row matched.
        """
        params = payload.to_params()
        params["id"] = user_id
        with self._translate_errors("update"):
            affected = self._session.exec(UPDATE_USER, params=params).rowcount
            self._session.commit()
        return affected

    def delete(self, user_id: Any) -> int:
        """Delete a user. Returns the affected row count."""
        with self._translate_errors("delete"):
            affected = self._session.exec(DELETE_USER, params={"id": user_id}).rowcount
            self._session.commit()
        return affected

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.bind(operation=operation, error_type=type(e).__name__).debug(
                "Database operation failed"
            )
            # Driver message only, without the statement or its bound values
            message = str(getattr(e, "orig", None) or e)
            raise DatabaseOperationError(message, operation=operation) from e
