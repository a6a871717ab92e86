"""
REST access for the whole app.

`ApiClient` wraps one `requests.Session`:
  - every call except login carries `Authorization: Bearer <token>`
  - a response hook turns HTTP 401 into a forced logout (session cleared,
    expiry listeners notified) before the caller sees `SessionExpired`
  - non-2xx answers raise `ApiError` with the best message the body offers

There is deliberately no retry adapter: a failed request is reported once.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..constants import REQUEST_TIMEOUT_SECONDS
from .session import SessionStore

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """HTTP failure (status > 0) or transport failure (status == 0)."""

    def __init__(self, message: str, status: int = 0, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    def __str__(self) -> str:
        return self.message


class SessionExpired(ApiError):
    """401 from the API; the session has already been cleared."""


def extract_error_message(resp: requests.Response, fallback: str) -> str:
    """Best-effort human message from an error response body."""
    try:
        body = resp.json()
    except ValueError:
        text = (resp.text or "").strip()
        return text or fallback
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            val = body.get(key)
            if isinstance(val, str) and val.strip():
                return val.strip()
            if isinstance(val, list) and val:
                # FastAPI-style validation errors: [{"msg": ...}, ...]
                first = val[0]
                if isinstance(first, dict) and first.get("msg"):
                    return str(first["msg"])
                return str(first)
        errors = body.get("errors")
        if isinstance(errors, dict) and errors:
            first = next(iter(errors.values()))
            if isinstance(first, list) and first:
                return str(first[0])
            return str(first)
    if isinstance(body, str) and body.strip():
        return body.strip()
    return fallback


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session_store: SessionStore,
        *,
        http: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.store = session_store
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update({"Accept": "application/json"})
        self.http.hooks["response"].append(self._on_response)

    # ------------------------------------------------------------------
    # 401 policy (applies to every request issued through self.http)
    # ------------------------------------------------------------------
    def _on_response(self, resp: requests.Response, *args, **kwargs):
        if resp.status_code == 401 and resp.request is not None and resp.request.headers.get("Authorization"):
            logger.warning("401 from %s %s", resp.request.method, resp.url)
            self.store.expire()
        return resp

    # ------------------------------------------------------------------
    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, auth: bool) -> dict[str, str]:
        if not auth:
            return {}
        if not self.store.token:
            raise SessionExpired("Unauthenticated", status=401)
        return {"Authorization": f"Bearer {self.store.token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        auth: bool = True,
        raw: bool = False,
        error_message: str = "Request failed",
    ) -> Any:
        url = self.url(path)
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.http.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(auth),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ApiError(f"{error_message}: could not reach the server.", status=0) from e

        if resp.status_code == 401 and auth:
            raise SessionExpired("Session expired", status=401)
        if not resp.ok:
            msg = extract_error_message(resp, error_message)
            logger.error("%s %s -> %s: %s", method, url, resp.status_code, msg)
            raise ApiError(msg, status=resp.status_code, payload=resp.text)

        if raw:
            return resp
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"{error_message}: invalid JSON response.", status=resp.status_code) from e

    # Convenience wrappers ------------------------------------------------
    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kw) -> Any:
        return self.request("GET", path, params=params, **kw)

    def post(self, path: str, data: Any = None, **kw) -> Any:
        return self.request("POST", path, json=data, **kw)

    def put(self, path: str, data: Any = None, **kw) -> Any:
        return self.request("PUT", path, json=data, **kw)

    def delete(self, path: str, **kw) -> Any:
        return self.request("DELETE", path, **kw)

    def get_bytes(self, path: str, **kw) -> tuple[bytes, str]:
        """Binary GET (invoice/receipt documents); returns (content, content_type)."""
        resp = self.request("GET", path, raw=True, **kw)
        return resp.content, resp.headers.get("Content-Type", "")
