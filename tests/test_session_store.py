# tests/test_session_store.py

from shopfront.api.session import SessionStore


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "session.json"
    SessionStore(path).save("tok", {"name": "Cashier"})
    restored = SessionStore(path)
    assert restored.load() is True
    assert restored.token == "tok"
    assert restored.username == "Cashier"


def test_unreadable_file_is_ignored(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    s = SessionStore(path)
    assert s.load() is False
    assert not s.is_authenticated


def test_expire_clears_and_notifies_listeners(tmp_path):
    s = SessionStore(tmp_path / "session.json")
    s.save("tok", {"username": "ravi"})
    calls = []
    listener = lambda: calls.append(1)
    s.add_expiry_listener(listener)
    s.expire()
    assert calls == [1]
    assert s.token is None and s.user is None
    assert not (tmp_path / "session.json").exists()

    s.remove_expiry_listener(listener)
    s.expire()
    assert calls == [1]
