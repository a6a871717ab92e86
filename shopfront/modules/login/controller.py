from __future__ import annotations

import logging
from typing import Optional

from ...api.client import ApiClient, ApiError
from ...api.repositories.auth_repo import AuthRepo
from ...api.repositories.base import DomainError

_log = logging.getLogger(__name__)


class LoginController:
    """
    Sign-in flow against the API.

    Public attrs (set after each prompt()):
      - last_error_message: str | None
      - last_username: str | None
    """

    def __init__(self, api: ApiClient, parent=None) -> None:
        self.api = api
        self.parent = parent
        self.repo = AuthRepo(api)
        self.user: Optional[dict] = None
        self.last_error_message: Optional[str] = None
        self.last_username: Optional[str] = None

    def attempt(self, username: str, password: str) -> Optional[str]:
        """Returns None on success, otherwise the message to show."""
        self.last_username = username
        try:
            self.user = self.repo.sign_in(username, password)
        except ApiError as e:
            if e.status in (400, 401, 422):
                msg = e.message or "Invalid username or password."
            else:
                msg = str(e)
            self._fail(msg)
            return msg
        except DomainError as e:
            self._fail(str(e))
            return str(e)
        self.last_error_message = None
        _log.info("Signed in as %s", username)
        return None

    def prompt(self) -> Optional[dict]:
        """Show the dialog until sign-in succeeds or the user cancels."""
        from .form import LoginForm  # lazy import to keep UI deps local

        self.user = None
        dlg = LoginForm(self.parent, attempt=self.attempt, username=self.api.store.username or "")
        if not dlg.exec():
            _log.info("Login cancelled by user.")
            return None
        return self.user

    def _fail(self, message: str) -> None:
        self.last_error_message = message
        _log.warning("Sign-in failed for %r: %s", self.last_username, message)
