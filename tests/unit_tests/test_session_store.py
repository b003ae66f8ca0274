import json

import httpx

from fynncloud.session_store import load_cookies_from_json, load_session, save_session


def test_save_and_load_session_roundtrip(tmp_path):
    cookies = httpx.Cookies()
    cookies.set("refresh", "r1", domain="fynncloud.test", path="/")
    path = tmp_path / "nested" / "session.json"

    save_session(str(path), cookies, {"token": "t"}, {"id": "u1"})
    session = load_session(str(path))

    assert session["cookies"].get("refresh") == "r1"
    assert session["tokens"] == {"token": "t"}
    assert session["user"] == {"id": "u1"}
    assert oct(path.stat().st_mode & 0o777) == oct(0o600)


def test_load_cookies_accepts_plain_mapping(tmp_path):
    path = tmp_path / "cookies.json"
    path.write_text(json.dumps({"access": "a1", "refresh": {"value": "r1", "path": "/"}}))

    cookies = load_cookies_from_json(str(path))

    assert cookies.get("access") == "a1"
    assert cookies.get("refresh") == "r1"
