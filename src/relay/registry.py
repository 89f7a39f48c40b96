"""Presence registry: which user is reachable on which live connection."""

import threading


class PresenceRegistry:
    """In-memory map of online user ids to connection ids.

    A user has at most one current connection (last registration wins). The
    reverse index keeps every connection a user registered from since it
    came online, so a connection superseded by a reconnect still resolves to
    its user. Unregistering such a stale connection removes the user even if
    a newer connection is live.

    Every operation takes the same lock, so register/unregister/snapshot stay
    atomic when the registry is shared across threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # user_id -> current connection_id, in first-registration order
        self._current: dict[str, str] = {}
        # connection_id -> user ids that registered from it
        self._by_connection: dict[str, set[str]] = {}
        # user_id -> every connection_id it registered from while online
        self._bindings: dict[str, set[str]] = {}

    def register(self, user_id: str, connection_id: str) -> None:
        with self._lock:
            self._current[user_id] = connection_id
            self._by_connection.setdefault(connection_id, set()).add(user_id)
            self._bindings.setdefault(user_id, set()).add(connection_id)

    def unregister(self, connection_id: str) -> list[str]:
        """Drop every user bound to `connection_id`. Returns the removed user ids."""
        with self._lock:
            removed = []
            for user_id in self._by_connection.pop(connection_id, set()):
                if self._current.pop(user_id, None) is not None:
                    removed.append(user_id)
                for other in self._bindings.pop(user_id, set()):
                    if other != connection_id:
                        self._unbind(other, user_id)
            return removed

    def _unbind(self, connection_id: str, user_id: str) -> None:
        users = self._by_connection.get(connection_id)
        if users is None:
            return
        users.discard(user_id)
        if not users:
            del self._by_connection[connection_id]

    def lookup(self, user_id: str) -> str | None:
        with self._lock:
            return self._current.get(user_id)

    def snapshot(self) -> list[str]:
        with self._lock:
            return list(self._current)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._current

    def __len__(self) -> int:
        with self._lock:
            return len(self._current)
