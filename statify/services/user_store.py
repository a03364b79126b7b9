"""In-memory storage for Spotify-authenticated users."""

from __future__ import annotations

import itertools
import threading
from typing import Dict, Optional, Tuple

from statify.models import User, UserDraft


class UserStore:
    """
    Process-local user records with a secondary index by Spotify id.

    Records live for the lifetime of the process. Each public method holds the
    store lock for its whole read-modify-write.
    """

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._ids_by_external: Dict[str, int] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_by_external_id(self, external_id: str) -> Optional[User]:
        with self._lock:
            user_id = self._ids_by_external.get(external_id)
            if user_id is None:
                return None
            return self._users.get(user_id)

    def create(self, draft: UserDraft) -> User:
        """
        Store a new record under the next surrogate id.

        The caller is responsible for checking that ``draft.external_id`` is not
        already stored; use :meth:`get_or_create` when that is not known.
        """
        with self._lock:
            return self._insert(draft)

    def get_or_create(self, draft: UserDraft) -> Tuple[User, bool]:
        """Return the record for ``draft.external_id``, inserting it if absent."""
        with self._lock:
            user_id = self._ids_by_external.get(draft.external_id)
            if user_id is not None and user_id in self._users:
                return self._users[user_id], False
            return self._insert(draft), True

    def update_tokens(
        self,
        user_id: int,
        access_token: str,
        refresh_token: str,
        token_expiry: int,
    ) -> Optional[User]:
        """Replace the token fields of a record, leaving the profile untouched."""
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = user.model_copy(
                update={
                    "access_token": access_token,
                    "refresh_token": refresh_token,
                    "token_expiry": token_expiry,
                }
            )
            self._users[user_id] = updated
            return updated

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _insert(self, draft: UserDraft) -> User:
        user = User(id=next(self._counter), **draft.model_dump())
        self._users[user.id] = user
        self._ids_by_external[user.external_id] = user.id
        return user


__all__ = ["UserStore"]
