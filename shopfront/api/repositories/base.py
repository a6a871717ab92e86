# shopfront/api/repositories/base.py
from __future__ import annotations

from typing import Any

from ..client import ApiClient


class DomainError(Exception):
    """Domain-level error the controller/UI can surface (unexpected response shape etc.)."""
    pass


def unwrap_list(payload: Any) -> list:
    """
    List endpoints answer with a bare array, {"data": [...]},
    {"data": {"data": [...]}} (paginated) or {"items"|"results": [...]}.
    Any other shape raises DomainError so the screen reports a failure
    instead of showing an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            return data["data"]
        for key in ("items", "results"):
            if isinstance(payload.get(key), list):
                return payload[key]
    raise DomainError(f"Unexpected list response ({type(payload).__name__}).")


def unwrap_object(payload: Any) -> dict:
    """Single-object endpoints may wrap the record in {"data": {...}}."""
    if isinstance(payload, dict):
        inner = payload.get("data")
        if isinstance(inner, dict) and "id" in inner and "id" not in payload:
            return inner
        return payload
    raise DomainError(f"Expected an object, got {type(payload).__name__}.")


class BaseRepo:
    def __init__(self, api: ApiClient):
        self.api = api
