from __future__ import annotations

import json
from pathlib import Path

import pytest

from cookieflow_persist.stores.base_store import (
    StoreCorruptError,
    StoreReadError,
    StoreValidationError,
    StoreWriteError,
)
from cookieflow_persist.stores.cookie_store import (
    CookieStore,
    cookie_healthcheck,
    list_domains,
    load_cookies,
    save_cookies,
)
from cookieflow_persist.utils.paths import sanitize_key


def _cookie(name: str, value: str, domain: str = "whop.com") -> dict[str, object]:
    return {
        "name": name,
        "value": value,
        "domain": domain,
        "path": "/",
        "expires": 1893456000,
        "httpOnly": True,
        "secure": True,
        "sameSite": "Lax",
    }


def test_load_unknown_domain_returns_empty_without_creating_files(cookie_dir: Path) -> None:
    store = CookieStore(cookie_dir)

    assert store.load("never-seen.com") == []
    assert not cookie_dir.exists()


def test_save_writes_pretty_json_array(cookie_dir: Path) -> None:
    store = CookieStore(cookie_dir)
    record = _cookie("sid", "abc")

    written = store.save("whop.com", [record])

    path = cookie_dir / "whop.com.json"
    assert written == 1
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert json.loads(text) == [record]
    assert text.startswith('[\n  {\n    "name": "sid"')

    loaded = store.load("whop.com")
    assert len(loaded) == 1
    assert loaded[0]["name"] == "sid"


def test_save_then_load_preserves_order(cookie_dir: Path) -> None:
    cookies = [_cookie("b", "2"), _cookie("a", "1"), _cookie("c", "3", domain=".whop.com")]

    save_cookies("whop.com", cookies, root=cookie_dir)

    assert load_cookies("whop.com", root=cookie_dir) == cookies


def test_second_save_replaces_instead_of_merging(cookie_dir: Path) -> None:
    store = CookieStore(cookie_dir)
    store.save("x.com", [_cookie("old", "1"), _cookie("older", "0")])
    store.save("x.com", [_cookie("new", "2")])

    assert store.load("x.com") == [_cookie("new", "2")]
    assert not (cookie_dir / "x.com.json.tmp").exists()


def test_save_empty_list_creates_empty_session(cookie_dir: Path) -> None:
    store = CookieStore(cookie_dir)

    assert store.save("all", []) == 0
    assert (cookie_dir / "all.json").read_text(encoding="utf-8") == "[]"
    assert store.load("all") == []


def test_sanitize_replaces_unsafe_characters() -> None:
    assert sanitize_key("whop.com") == "whop.com"
    assert sanitize_key("sub-domain.example.co.uk") == "sub-domain.example.co.uk"
    assert sanitize_key("a/b.com") == "a_b.com"
    assert sanitize_key("https://x.com:8080/") == "https___x.com_8080_"
    assert sanitize_key("../../etc") == ".._.._etc"


def test_colliding_domains_share_one_file_last_write_wins(cookie_dir: Path) -> None:
    store = CookieStore(cookie_dir)
    assert store.path_for("a/b.com") == store.path_for("a_b.com")

    store.save("a/b.com", [_cookie("first", "1")])
    store.save("a_b.com", [_cookie("second", "2")])

    assert store.load("a/b.com") == [_cookie("second", "2")]
    assert store.load("a_b.com") == [_cookie("second", "2")]
    assert store.list_domains() == ["a_b.com"]


def test_malformed_json_fails_fast(cookie_dir: Path) -> None:
    cookie_dir.mkdir(parents=True)
    (cookie_dir / "broken.com.json").write_text("[{\"name\": ", encoding="utf-8")

    with pytest.raises(StoreCorruptError):
        CookieStore(cookie_dir).load("broken.com")


def test_non_array_payload_is_corrupt(cookie_dir: Path) -> None:
    cookie_dir.mkdir(parents=True)
    (cookie_dir / "obj.com.json").write_text('{"name": "sid"}', encoding="utf-8")

    with pytest.raises(StoreCorruptError):
        CookieStore(cookie_dir).load("obj.com")


def test_empty_domain_is_rejected(cookie_dir: Path) -> None:
    with pytest.raises(StoreValidationError):
        CookieStore(cookie_dir).save("", [])


def test_save_fails_when_root_is_a_file(tmp_path: Path) -> None:
    blocker = tmp_path / "cookies"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(StoreWriteError):
        CookieStore(blocker).save("x.com", [_cookie("sid", "1")])


def test_list_domains(cookie_dir: Path) -> None:
    assert list_domains(root=cookie_dir) == []

    store = CookieStore(cookie_dir)
    store.save("whop.com", [_cookie("sid", "1")])
    store.save("all", [])
    (cookie_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    assert list_domains(root=cookie_dir) == ["all", "whop.com"]


def test_healthcheck_reports_corrupt_files(cookie_dir: Path) -> None:
    store = CookieStore(cookie_dir)
    store.save("good.com", [_cookie("sid", "1")])

    assert cookie_healthcheck(cookie_dir).is_healthy()

    (cookie_dir / "bad.com.json").write_text("nope", encoding="utf-8")
    health = store.healthcheck()

    assert not health.is_healthy()
    assert health.corrupt_paths == [str(cookie_dir.resolve() / "bad.com.json")]
    assert health.writable_paths == {str(cookie_dir.resolve()): True}


def test_non_object_cookie_entries_are_corrupt(cookie_dir: Path) -> None:
    cookie_dir.mkdir(parents=True)
    (cookie_dir / "x.com.json").write_text('["sid=abc"]', encoding="utf-8")
    store = CookieStore(cookie_dir)

    with pytest.raises(StoreCorruptError, match="index 0"):
        store.load("x.com")
    assert store.healthcheck().corrupt_paths == [str(cookie_dir.resolve() / "x.com.json")]


def test_unreadable_session_raises_read_error(cookie_dir: Path) -> None:
    (cookie_dir / "x.com.json").mkdir(parents=True)

    with pytest.raises(StoreReadError) as excinfo:
        CookieStore(cookie_dir).load("x.com")

    assert not isinstance(excinfo.value, StoreCorruptError)
