"""User API router: list, create, update and delete.

Handlers are plain functions so FastAPI runs them on its threadpool; each
request blocks its worker until the statement completes. Failures surface as
``DatabaseOperationError`` and are turned into responses by the application's
fault handler.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.user_service.api.http.deps import get_user_payload, get_user_repository
from src.user_service.entities.user import User, UserPayload, UserRepository

router = APIRouter(tags=["users"])

USER_ADDED = "User added successfully"
USER_UPDATED = "User updated successfully"
USER_DELETED = "User deleted successfully"


@router.get("/get-users", response_model=list[User])
def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[User]:
    """List all users."""
    return repository.list_all()


@router.post("/add-user", response_class=PlainTextResponse)
def add_user(
    payload: UserPayload = Depends(get_user_payload),
    repository: UserRepository = Depends(get_user_repository),
) -> str:
    """Create a user. The new identifier is not returned."""
    repository.create(payload)
    return USER_ADDED


@router.put("/update-user/{user_id}", response_class=PlainTextResponse)
def update_user(
    user_id: str,
    payload: UserPayload = Depends(get_user_payload),
    repository: UserRepository = Depends(get_user_repository),
) -> str:
    """Overwrite every field of a user."""
    affected = repository.update(user_id, payload)
    # TODO: decide whether an unmatched id should become a 404; clients rely on 200 today
    logger.debug("update-user {} affected {} row(s)", user_id, affected)
    return USER_UPDATED


@router.delete("/delete-user/{user_id}", response_class=PlainTextResponse)
def delete_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> str:
    """Delete a user. Deleting an unknown id still succeeds."""
    affected = repository.delete(user_id)
    logger.debug("delete-user {} affected {} row(s)", user_id, affected)
    return USER_DELETED
