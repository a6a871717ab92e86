# shopfront/api/session.py
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Optional

_log = logging.getLogger(__name__)


class SessionStore:
    """
    Bearer token + signed-in user, persisted as a small JSON file.

    This is the only durable client state. `clear()` wipes both the memory
    copy and the file; expiry listeners are told when the API rejected the
    token so the app can return to the sign-in screen.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else None
        self.token: Optional[str] = None
        self.user: Optional[dict] = None
        self._expiry_listeners: list[Callable[[], None]] = []

    # ---- persistence ---------------------------------------------------

    def load(self) -> bool:
        """Restore a saved session; returns True when a token was found."""
        if self.path is None or not self.path.exists():
            return False
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            _log.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return False
        self.token = data.get("token") or None
        self.user = data.get("user") or None
        return self.is_authenticated

    def save(self, token: str, user: dict | None = None) -> None:
        self.token = token
        self.user = user
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.path is not None and self.path.exists():
            self.path.unlink()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def username(self) -> str:
        u = self.user or {}
        return str(u.get("name") or u.get("username") or "")

    # ---- expiry --------------------------------------------------------

    def add_expiry_listener(self, fn: Callable[[], None]) -> None:
        self._expiry_listeners.append(fn)

    def remove_expiry_listener(self, fn: Callable[[], None]) -> None:
        if fn in self._expiry_listeners:
            self._expiry_listeners.remove(fn)

    def expire(self) -> None:
        """Forced logout: clear everything, then tell listeners."""
        _log.warning("Session expired; clearing stored credentials")
        self.clear()
        for fn in list(self._expiry_listeners):
            fn()
