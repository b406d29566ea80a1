import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from .models import User

# This file holds the in-memory stores. Each app instance owns one of each;
# they live exactly as long as the app does.


class CredentialStore:
    def __init__(self):
        self._users: List[User] = []
        self._lock = threading.RLock()

    def add(self, user: User) -> User:
        # usernames are not checked for uniqueness
        with self._lock:
            self._users.append(user)
        return user

    def find(self, username: Optional[str]) -> Optional[User]:
        with self._lock:
            for u in self._users:
                if u.username == username:
                    return u
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)


class CatalogStore:
    """
    Ordered list of product records.

    New ids are ``len(catalog) + 1``, so once an item has been deleted the next
    created item can reuse an id that is still in the catalog.
    """

    def __init__(self, seed: Iterable[Dict[str, Any]] = ()):
        self._items: List[Dict[str, Any]] = [dict(p) for p in seed]
        self._lock = threading.RLock()

    def snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(p) for p in self._items]

    def create(self, build: Callable[[int], Dict[str, Any]]) -> Dict[str, Any]:
        with self._lock:
            item = build(len(self._items) + 1)
            self._items.append(item)
            return dict(item)

    def _index_of(self, item_id: Optional[int]) -> int:
        if item_id is None:
            return -1
        for i, p in enumerate(self._items):
            pid = p.get("id")
            # only numeric ids match; an id merged to true or "1" never does
            if isinstance(pid, (int, float)) and not isinstance(pid, bool) and pid == item_id:
                return i
        return -1

    def update(self, item_id: Optional[int], fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            idx = self._index_of(item_id)
            if idx == -1:
                return None
            self._items[idx] = {**self._items[idx], **fields}
            return dict(self._items[idx])

    def delete(self, item_id: Optional[int]) -> bool:
        with self._lock:
            idx = self._index_of(item_id)
            if idx == -1:
                return False
            del self._items[idx]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
