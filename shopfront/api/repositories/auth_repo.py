# shopfront/api/repositories/auth_repo.py
from __future__ import annotations

from .base import BaseRepo, DomainError


class AuthRepo(BaseRepo):
    """Sign-in is the only call made without a bearer token."""

    def login(self, username: str, password: str) -> tuple[str, dict]:
        body = self.api.post(
            "/auth/login",
            {"username": username, "password": password},
            auth=False,
            error_message="Login failed",
        )
        if not isinstance(body, dict):
            raise DomainError("Unexpected login response.")
        token = body.get("access_token") or body.get("token")
        if not token:
            raise DomainError("Login response did not include a token.")
        user = body.get("user") or {"username": username}
        return str(token), dict(user)

    def sign_in(self, username: str, password: str) -> dict:
        """Login and persist the session; returns the user record."""
        token, user = self.login(username, password)
        self.api.store.save(token, user)
        return user
