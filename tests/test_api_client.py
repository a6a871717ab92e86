# tests/test_api_client.py

import pytest
import requests

from shopfront.api.client import ApiError, SessionExpired


def test_bearer_token_and_json_body(api, adapter):
    adapter.add("GET", "/products", body=[])
    assert api.get("/products") == []
    req = adapter.last()
    assert req.headers["Authorization"] == "Bearer tok-123"
    assert req.headers["Accept"] == "application/json"


def test_unauthenticated_call_sends_no_token(api, adapter):
    adapter.add("POST", "/auth/login", body={"token": "x"})
    api.post("/auth/login", {"username": "a"}, auth=False)
    assert "Authorization" not in adapter.last().headers


def test_error_message_extracted_from_body(api, adapter):
    adapter.add("POST", "/sales", status=422, body={"message": "Insufficient stock for T-Shirt"})
    with pytest.raises(ApiError) as ei:
        api.post("/sales", {})
    assert ei.value.status == 422
    assert str(ei.value) == "Insufficient stock for T-Shirt"


def test_error_message_falls_back_to_detail_and_default(api, adapter):
    adapter.add("GET", "/a", status=400, body={"detail": "Bad filter"})
    adapter.add("GET", "/b", status=500, content=b"")
    with pytest.raises(ApiError, match="Bad filter"):
        api.get("/a")
    with pytest.raises(ApiError, match="Failed to load"):
        api.get("/b", error_message="Failed to load")


def test_401_clears_session_and_notifies(api, adapter, store):
    fired = []
    store.add_expiry_listener(lambda: fired.append(True))
    adapter.add("GET", "/customers", status=401, body={"message": "Unauthenticated."})

    with pytest.raises(SessionExpired):
        api.get("/customers")

    assert fired == [True]
    assert store.token is None
    assert not store.is_authenticated
    assert not store.path.exists()


def test_request_without_token_fails_before_network(api, adapter, store):
    store.clear()
    with pytest.raises(SessionExpired):
        api.get("/products")
    assert adapter.calls == []


def test_transport_failure_is_status_zero(api, adapter):
    adapter.raise_error = requests.ConnectionError("refused")
    with pytest.raises(ApiError) as ei:
        api.get("/products", error_message="Failed to load products")
    assert ei.value.status == 0
    assert "could not reach the server" in str(ei.value)


def test_empty_success_returns_none(api, adapter):
    adapter.add("DELETE", "/products/3", status=204)
    assert api.delete("/products/3") is None


def test_get_bytes_returns_content_and_type(api, adapter):
    adapter.add("GET", "/invoices/5/print", content=b"%PDF-1.4", headers={"Content-Type": "application/pdf"})
    content, ctype = api.get_bytes("/invoices/5/print")
    assert content == b"%PDF-1.4"
    assert ctype == "application/pdf"
