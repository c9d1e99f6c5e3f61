"""
User endpoints.

Provide listing, registration and partial update of users.  Create
and update answer with the stored user (never its password) and a
``Location`` header pointing at the user's URL.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from users_api.app.core.db import Database, get_database
from users_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from users_api.app.services.user_service import UserService

router = APIRouter()


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db)


def user_location(request: Request, user_id: int) -> str:
    """Absolute URL of a user, e.g. ``http://localhost:3000/api/users/132``."""
    return str(request.url_for("update_user", user_id=user_id))


@router.get("", response_model=List[UserRead])
def list_users(service: UserService = Depends(get_user_service)):
    """Return every user row, without passwords."""
    return service.list_users()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Register a new user.

    ``email``, ``password`` (at least 8 characters) and ``name`` (at
    least 2 characters) are required.
    """
    created = service.create_user(user)
    response.headers["Location"] = user_location(request, created["id"])
    return created


# Updates answer 201 like creation does; existing clients rely on it.
@router.put("/{user_id}", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def update_user(
    user_id: int,
    request: Request,
    response: Response,
    changes: Optional[UserUpdate] = None,
    service: UserService = Depends(get_user_service),
):
    """Update any subset of ``email``, ``password`` and ``name``.

    A request without a body is treated like an empty object.
    """
    if changes is None:
        changes = UserUpdate()
    updated = service.update_user(user_id, changes)
    response.headers["Location"] = user_location(request, updated["id"])
    return updated
