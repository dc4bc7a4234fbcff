"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.core.services import DbSessionService
from src.user_service.entities.user import UserPayload, UserRepository

_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_database_service(request: Request) -> DbSessionService:
    """Get the shared database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Borrow a session from the shared engine for the duration of a request."""
    with database_service.get_session() as session:
        yield session


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


async def get_user_payload(request: Request) -> UserPayload:
    """Read the user fields from a JSON or form-encoded body.

    Bodies of any other content type, empty bodies and JSON documents that
    are not objects all yield a payload with every field absent.
    """
    content_type = request.headers.get("content-type", "").lower()
    data: Any = {}

    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        data = dict(form)
    elif "json" in content_type and await request.body():
        try:
            data = await request.json()
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Malformed JSON body") from e

    if not isinstance(data, dict):
        data = {}
    return UserPayload.model_validate(data)
