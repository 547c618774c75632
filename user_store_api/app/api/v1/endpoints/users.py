"""
User endpoints for API v1.

Expose search, create, get, update and delete over the user
collection.  Routes that address a single user depend on
``resolve_user``, which loads the store and looks the path id up
before the route runs; a missing user stops the request there with
the ``user_not_found`` error.

Every failure is answered with ``400`` and the error envelope, see
``core.errors``.  Handlers are plain functions, so the server runs
each request in its own worker thread.
"""

from typing import Dict

from fastapi import APIRouter, Depends, Request, status

from user_store_api.app.core.store import RecordStore
from user_store_api.app.schemas.user import ErrorResponse, User, UserCreate, UserCreated, UserUpdate
from user_store_api.app.services.user_service import UserService

router = APIRouter(responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}})


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def resolve_user(user_id: str, store: RecordStore = Depends(get_store)) -> User:
    """Look up the user addressed by the path for the current request."""
    return UserService.get_user(store, user_id)


@router.get("/", response_model=Dict[str, User])
def search_users(store: RecordStore = Depends(get_store)) -> Dict[str, User]:
    """Return all users keyed by id."""
    return UserService.search_users(store)


@router.post("/", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, store: RecordStore = Depends(get_store)) -> UserCreated:
    """Create a user and return its new id."""
    user = UserService.create_user(store, data)
    return UserCreated(user_id=user.id)


@router.get("/{user_id}/", response_model=User)
def get_user(user: User = Depends(resolve_user)) -> User:
    return user


@router.patch("/{user_id}/", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    data: UserUpdate,
    user: User = Depends(resolve_user),
    store: RecordStore = Depends(get_store),
) -> None:
    """Change a user's display name.  Other fields are kept as stored."""
    UserService.update_user(store, user, data)
    return None


@router.delete("/{user_id}/", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user: User = Depends(resolve_user),
    store: RecordStore = Depends(get_store),
) -> None:
    UserService.delete_user(store, user)
    return None
