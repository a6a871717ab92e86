"""
API access layer: a single `requests`-based client plus one repository per
resource. Nothing here imports Qt, so it can be used and tested headless.
"""
from .client import ApiClient, ApiError, SessionExpired
from .session import SessionStore

__all__ = ["ApiClient", "ApiError", "SessionExpired", "SessionStore"]
