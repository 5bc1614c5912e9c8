"""Server-side session store and the per-request session handle."""

import logging
import secrets
import threading
import time
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# Claim keys written at login and read by guards and the rendering layer.
USER_ID = "user_id"
USERNAME = "username"
EMAIL = "email"
ROLES = "roles"
PRINCIPAL_ROLE = "principal_role"
FLASH_SUCCESS = "flash_success"
FLASH_ERROR = "flash_error"

CLAIM_KEYS = (USER_ID, USERNAME, EMAIL, ROLES, PRINCIPAL_ROLE)
FLASH_KEYS = (FLASH_SUCCESS, FLASH_ERROR)


class SessionStore(Protocol):
    """Keyed storage for session data. Implementations must be thread-safe."""

    def load(self, session_id: str) -> dict[str, Any] | None: ...

    def save(self, session_id: str, data: dict[str, Any]) -> None: ...

    def update(self, session_id: str, data: dict[str, Any]) -> bool: ...

    def delete(self, session_id: str) -> None: ...

    def __len__(self) -> int: ...


class MemorySessionStore:
    """
    Process-local session store with idle expiry.

    Records live as long as the process; a restart forces everyone to log in
    again. Expired records are dropped on access, by purge_expired(), and by a
    sweep that save() runs at most once per max_age.
    """

    def __init__(self, max_age_seconds: int) -> None:
        self._max_age = max_age_seconds
        self._records: dict[str, tuple[float, dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._last_sweep = time.monotonic()

    def load(self, session_id: str) -> dict[str, Any] | None:
        with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return None
            touched_at, data = record
            if time.monotonic() - touched_at > self._max_age:
                del self._records[session_id]
                return None
            return dict(data)

    def save(self, session_id: str, data: dict[str, Any]) -> None:
        now = time.monotonic()
        with self._lock:
            self._records[session_id] = (now, dict(data))
            if now - self._last_sweep >= self._max_age:
                removed = self._purge_locked(now)
                if removed:
                    logger.debug("Swept %d expired sessions", removed)

    def update(self, session_id: str, data: dict[str, Any]) -> bool:
        """Overwrite a live record. Returns False, writing nothing, if it is gone or expired."""
        now = time.monotonic()
        with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return False
            if now - record[0] > self._max_age:
                del self._records[session_id]
                return False
            self._records[session_id] = (now, dict(data))
            return True

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop expired records; return how many were removed."""
        with self._lock:
            return self._purge_locked(time.monotonic())

    def _purge_locked(self, now: float) -> int:
        stale = [sid for sid, (t, _) in self._records.items() if now - t > self._max_age]
        for sid in stale:
            del self._records[sid]
        self._last_sweep = now
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionHandle:
    """
    One client's session for the duration of one request.

    The handle only ever touches its own session id. Writes go straight to the
    store. The transport layer reads ``session_id`` and ``cookie_action`` after
    the request to decide what to send back to the browser.

    A resumed id may be destroyed by a concurrent request (logout elsewhere).
    Writes to a resumed id only update a record that still exists; if it is
    gone the handle is treated as destroyed and its stale claims are dropped.
    """

    def __init__(self, store: SessionStore, session_id: str | None = None) -> None:
        self._store = store
        self._id: str | None = None
        self._data: dict[str, Any] = {}
        self._id_changed = False
        self._invalidated = False
        if session_id:
            data = store.load(session_id)
            if data is not None:
                self._id = session_id
                self._data = data
            else:
                # Expired or unknown id: have the client drop the dead cookie.
                self._invalidated = True

    @property
    def session_id(self) -> str | None:
        return self._id

    @property
    def is_started(self) -> bool:
        return self._id is not None

    @property
    def cookie_action(self) -> str | None:
        """'set' when the client needs a new cookie, 'clear' when it must drop it, else None."""
        if self._id is not None and self._id_changed:
            return "set"
        if self._id is None and self._invalidated:
            return "clear"
        return None

    def create(self) -> None:
        """Start a session for this client if none is live. Idempotent."""
        if self._id is not None:
            return
        self._id = new_session_id()
        self._id_changed = True
        self._store.save(self._id, self._data)

    def set(self, key: str, value: Any) -> None:
        self.create()
        self._data[key] = value
        if not self._persist():
            # The old session ended under us; the value goes into a fresh one.
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has(self, key: str) -> bool:
        return self._data.get(key) is not None

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        del self._data[key]
        if self._id is not None:
            self._persist()

    def pop(self, key: str, default: Any = None) -> Any:
        """Read and remove a key in one step (one-shot flash messages)."""
        value = self.get(key, default)
        self.remove(key)
        return value

    def regenerate(self) -> None:
        """Move the data to a fresh session id and invalidate the old one."""
        old_id = self._id
        if old_id is not None and not self._id_changed and self._store.load(old_id) is None:
            self._reset()
            old_id = None
        self._id = new_session_id()
        self._id_changed = True
        self._store.save(self._id, self._data)
        if old_id is not None:
            self._store.delete(old_id)
            logger.debug("Session id rotated")

    def destroy(self) -> None:
        """
        Clear every claim and invalidate the session id.

        The handle is left as a fresh, empty context: a new id is minted only if
        something is written afterwards. Otherwise the client is told to drop
        its cookie.
        """
        if self._id is not None:
            self._store.delete(self._id)
        self._reset()

    def claims(self) -> dict[str, Any]:
        """Snapshot of the identity claims (read-only view for the rendering layer)."""
        return {key: self._data.get(key) for key in CLAIM_KEYS}

    def _persist(self) -> bool:
        """Write the data back. False if a resumed session no longer exists."""
        if self._id_changed:
            self._store.save(self._id, self._data)
            return True
        if self._store.update(self._id, self._data):
            return True
        logger.info("Session ended by another request; dropping stale claims")
        self._reset()
        return False

    def _reset(self) -> None:
        self._id = None
        self._data = {}
        self._id_changed = False
        self._invalidated = True
