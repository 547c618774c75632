"""
JSON file-backed record store for users.

The whole user collection lives in one JSON document::

    {"increment": 3, "list": {"1": {...}, "3": {...}}}

``increment`` is the identifier counter and ``list`` maps identifiers
to users.  There is no cache: every operation reads the full document,
works on the decoded ``UserStore`` in memory and, for writes, writes
the full document back.  The file is therefore the only source of
truth and the unit of consistency is the whole file.

Saving overwrites the file in place.  A crash in the middle of a write
can leave a truncated file behind, which the next load reports as
``StoreCorrupt``.

Write operations go through ``RecordStore.transaction``.  When locking
is enabled, the load/mutate/save cycle runs under a single
process-wide lock so two writers in this process cannot overwrite each
other's changes.  Without it the last save wins.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Any, Dict, Iterator, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..schemas.user import User
from .errors import NotFound, StoreCorrupt, StoreUnavailable

logger = logging.getLogger(__name__)

# shared by every RecordStore in the process
_write_lock = threading.Lock()


class UserStore(BaseModel):
    """Decoded form of the store document."""

    model_config = ConfigDict(populate_by_name=True)

    increment: int = Field(0, strict=True)
    users: Dict[str, User] = Field(default_factory=dict, alias="list")

    @field_validator("increment", mode="before")
    @classmethod
    def _null_increment(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("users", mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        return {} if v is None else v

    def allocate_id(self) -> str:
        """Advance the counter and return it as the next identifier.

        The caller must insert a user under the returned id before the
        store is saved.  If it does not, the id is simply skipped;
        identifiers are never reused.
        """
        self.increment += 1
        return str(self.increment)

    def lookup(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFound()
        return user

    def put(self, user: User) -> None:
        self.users[user.id] = user

    def delete(self, user_id: str) -> None:
        """Remove ``user_id``; removing an absent id does nothing."""
        self.users.pop(user_id, None)


class RecordStore:
    """Loads and saves a ``UserStore`` at a fixed path."""

    def __init__(self, path: Union[str, Path], locking: bool = True) -> None:
        self.path = Path(path)
        self.locking = locking

    def __repr__(self) -> str:
        return f"RecordStore(path={str(self.path)!r}, locking={self.locking})"

    def initialize(self) -> bool:
        """Create an empty store file if none exists.

        Returns ``True`` when a file was written.  An existing file is
        left untouched, even if its content is invalid.
        """
        if self.path.exists():
            return False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreUnavailable(str(exc)) from exc
        self.save(UserStore())
        logger.info("Initialized empty user store at %s", self.path)
        return True

    def load(self) -> UserStore:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise StoreUnavailable(str(exc)) from exc
        try:
            store = UserStore.model_validate_json(data)
        except ValidationError as exc:
            raise StoreCorrupt(f"{self.path}: {_first_error(exc)}") from exc
        logger.debug("Loaded %d users from %s", len(store.users), self.path)
        return store

    def save(self, store: UserStore) -> None:
        payload = store.model_dump_json(by_alias=True)
        try:
            self.path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise StoreUnavailable(str(exc)) from exc
        logger.debug("Saved %d users to %s", len(store.users), self.path)

    @contextmanager
    def transaction(self) -> Iterator[UserStore]:
        """Yield a freshly loaded store and save it when the block exits.

        Nothing is saved if the block raises.
        """
        with _write_lock if self.locking else nullcontext():
            store = self.load()
            yield store
            self.save(store)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    error = errors[0]
    loc = ".".join(str(p) for p in error.get("loc", ()))
    return f"{loc}: {error['msg']}" if loc else error["msg"]
