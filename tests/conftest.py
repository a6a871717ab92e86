# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - pytest-qt owns QApplication (use qapp/qtbot fixtures)
# - No real server: a requests.Session with a FakeAdapter mounted answers
#   from a route table, so session hooks (401 handling) really run
# - Background work runs inline through TaskRunner(synchronous=True)
# - Notifications are captured instead of opening message boxes
# ---------------------------------------------------------------------

from __future__ import annotations

import json
import os
import re
from typing import Any, Optional
from urllib.parse import parse_qs, urlsplit

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
import requests
from PySide6 import QtCore
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from shopfront.api.client import ApiClient
from shopfront.api.session import SessionStore
from shopfront.utils import ui_helpers
from shopfront.utils.tasks import TaskRunner

BASE_URL = "http://api.test/api"


# ---------- Qt: let pytest-qt own the app ----------
@pytest.fixture(scope="session")
def app(qapp):
    return qapp


_BENIGN_QT_PATTERNS = [
    r"^QObject::connect: .* already connected",
    r"^QObject::disconnect: Unexpected null parameter",
    r"^QBasicTimer::stop: Failed\. Platform timer not running\.",
]


@pytest.fixture(autouse=True, scope="session")
def _silence_benign_qt():
    """Filter common harmless Qt messages during tests."""
    original = QtCore.qInstallMessageHandler(None)
    rx = [re.compile(p) for p in _BENIGN_QT_PATTERNS]

    def handler(msg_type, context, message):
        text = str(message)
        if any(r.search(text) for r in rx):
            return
        print(text)

    QtCore.qInstallMessageHandler(handler)
    try:
        yield
    finally:
        QtCore.qInstallMessageHandler(original)


# ---------- HTTP ----------
class FakeAdapter(BaseAdapter):
    """
    Route table keyed by (METHOD, path-below-/api). Each entry is
    (status, body, headers); unmatched requests answer 404.
    """

    def __init__(self):
        super().__init__()
        self.routes: dict[tuple[str, str], tuple[int, bytes, dict]] = {}
        self.calls: list[requests.PreparedRequest] = []
        self.raise_error: Optional[Exception] = None

    def add(self, method: str, path: str, status: int = 200, body: Any = None,
            content: bytes | None = None, headers: dict | None = None) -> None:
        if content is None:
            content = b"" if body is None else json.dumps(body).encode("utf-8")
            hdrs = {"Content-Type": "application/json"}
        else:
            hdrs = {}
        hdrs.update(headers or {})
        self.routes[(method.upper(), path)] = (status, content, hdrs)

    def send(self, request, **kwargs):
        self.calls.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        path = urlsplit(request.url).path
        if path.startswith("/api"):
            path = path[len("/api"):]
        status, content, headers = self.routes.get(
            (request.method, path),
            (404, b'{"message": "Not found"}', {"Content-Type": "application/json"}),
        )
        resp = requests.Response()
        resp.status_code = status
        resp._content = content
        resp.headers = CaseInsensitiveDict(headers)
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        resp.reason = "OK" if status < 400 else "Error"
        return resp

    def close(self):
        pass

    # helpers for asserts
    def last(self) -> requests.PreparedRequest:
        return self.calls[-1]

    def last_json(self) -> Any:
        return json.loads(self.last().body)

    def last_params(self) -> dict:
        return {k: v[0] for k, v in parse_qs(urlsplit(self.last().url).query).items()}


@pytest.fixture()
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture()
def store(tmp_path) -> SessionStore:
    s = SessionStore(tmp_path / "session.json")
    s.save("tok-123", {"id": 1, "name": "Cashier"})
    return s


@pytest.fixture()
def api(adapter, store) -> ApiClient:
    http = requests.Session()
    http.mount("http://", adapter)
    return ApiClient(BASE_URL, store, http=http)


@pytest.fixture()
def runner(qapp) -> TaskRunner:
    return TaskRunner(synchronous=True)


# ---------- notifications ----------
@pytest.fixture(autouse=True)
def notes():
    """Captured (kind, text) notifications for the duration of a test."""
    captured: list[tuple[str, str]] = []
    ui_helpers.set_notification_sink(lambda kind, text: captured.append((kind, text)))
    yield captured
    ui_helpers.set_notification_sink(None)

