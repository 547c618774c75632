"""
Business logic for users.

``UserService`` implements each user operation as one full cycle
against the record store: load the collection, apply the change,
save the collection.  Errors from the store (``StoreUnavailable``,
``StoreCorrupt``, ``NotFound``) propagate to the API layer unchanged.
"""

import logging
from datetime import datetime, timezone
from typing import Dict

from ..core.store import RecordStore
from ..schemas.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users in a ``RecordStore``."""

    @classmethod
    def search_users(cls, store: RecordStore) -> Dict[str, User]:
        """Return every stored user keyed by id.  There is no filtering."""
        return store.load().users

    @classmethod
    def create_user(cls, store: RecordStore, data: UserCreate) -> User:
        """Allocate the next id and store a new user under it."""
        with store.transaction() as users:
            user_id = users.allocate_id()
            user = User(
                id=user_id,
                created_at=datetime.now(timezone.utc),
                display_name=data.display_name,
                email=data.email,
            )
            users.put(user)
        logger.info("Created user %s", user_id)
        return user

    @classmethod
    def get_user(cls, store: RecordStore, user_id: str) -> User:
        return store.load().lookup(user_id)

    @classmethod
    def update_user(cls, store: RecordStore, user: User, data: UserUpdate) -> User:
        """Change the display name of an already resolved user.

        The resolved record is written back under its id, so only
        ``display_name`` differs from what the caller looked up.
        """
        updated = user.model_copy(update={"display_name": data.display_name})
        with store.transaction() as users:
            users.put(updated)
        logger.info("Updated user %s", updated.id)
        return updated

    @classmethod
    def delete_user(cls, store: RecordStore, user: User) -> None:
        with store.transaction() as users:
            users.delete(user.id)
        logger.info("Deleted user %s", user.id)
