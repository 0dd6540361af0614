import pytest

from qbank.auth import is_admin, require_admin
from qbank.config import Settings, load_settings


def _settings(tmp_path):
    return Settings(db_path=tmp_path / "q.sqlite3", admin_users=frozenset({"alice"}), page_size=7)


def test_is_admin(tmp_path):
    s = _settings(tmp_path)
    assert is_admin("alice", s)
    assert is_admin(" alice ", s)
    assert not is_admin("bob", s)
    assert not is_admin(None, s)


def test_require_admin(tmp_path):
    s = _settings(tmp_path)
    assert require_admin("alice", s) == "alice"
    with pytest.raises(PermissionError, match="Unauthorized"):
        require_admin("", s)
    with pytest.raises(PermissionError, match="not an admin"):
        require_admin("bob", s)


def test_load_settings_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("QB_DB_PATH", str(tmp_path / "bank.sqlite3"))
    monkeypatch.setenv("QB_ADMIN_USERS", '"alice, bob ,"')
    monkeypatch.setenv("QB_PAGE_SIZE", "500")
    s = load_settings()
    assert s.db_path == (tmp_path / "bank.sqlite3").resolve()
    assert s.admin_users == frozenset({"alice", "bob"})
    assert s.page_size == 100


def test_load_settings_defaults(monkeypatch):
    monkeypatch.delenv("QB_ADMIN_USERS", raising=False)
    monkeypatch.setenv("QB_PAGE_SIZE", "abc")
    s = load_settings()
    assert s.admin_users == frozenset()
    assert s.page_size == 7
