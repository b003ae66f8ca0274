import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_SESSION_PATH = ".fynncloud/session.json"


def _cookies_from_list(items: List[Dict[str, Any]], cookies: httpx.Cookies) -> None:
    for item in items:
        name = item.get("name")
        value = item.get("value")
        domain = item.get("domain") or ""
        cookie_path = item.get("path", "/")
        if name and value:
            cookies.set(name, value, domain=domain, path=cookie_path)


def load_cookies_from_json(path: str) -> httpx.Cookies:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    cookies = httpx.Cookies()

    # Common browser export format: list of cookie dicts
    if isinstance(data, list):
        _cookies_from_list(data, cookies)
        return cookies

    # Fallback: dict of name -> value
    if isinstance(data, dict):
        for name, value in data.items():
            if isinstance(value, dict) and "value" in value:
                cookies.set(
                    name,
                    value["value"],
                    domain=value.get("domain") or "",
                    path=value.get("path", "/"),
                )
            else:
                cookies.set(name, value)
        return cookies

    raise ValueError("Unsupported cookies JSON format")


def load_tokens_from_json(path: str) -> Dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Tokens file must be a JSON object")
    return data


def _export_cookies(cookies: httpx.Cookies) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for c in cookies.jar:
        out.append(
            {
                "name": c.name,
                "value": c.value,
                "domain": c.domain,
                "path": c.path,
            }
        )
    return out


def save_session(
    path: str,
    cookies: httpx.Cookies,
    tokens: Dict[str, Any],
    user: Optional[Dict[str, Any]] = None,
) -> None:
    session_path = Path(path)
    session_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"cookies": _export_cookies(cookies), "tokens": tokens, "user": user}
    session_path.write_text(json.dumps(payload, indent=2, ensure_ascii=True) + "\n", encoding="utf-8")
    os.chmod(session_path, 0o600)


def load_session(path: str) -> Dict[str, Any]:
    session_path = Path(path)
    data = json.loads(session_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Session file must be a JSON object")
    cookies = httpx.Cookies()
    _cookies_from_list(data.get("cookies", []), cookies)
    return {"cookies": cookies, "tokens": data.get("tokens", {}), "user": data.get("user")}
