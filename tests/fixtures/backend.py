"""In-memory stand-in for the fynncloud backend."""
import inspect
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

TEST_BASE_URL = "http://fynncloud.test"


def api_file(
    file_id: str,
    filename: str = None,
    content_type: str = "text/plain",
    size: int = 1536,
    is_directory: bool = False,
    parent_id: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    data = {
        "id": file_id,
        "filename": filename or f"{file_id}.txt",
        "contentType": "directory" if is_directory else content_type,
        "size": 0 if is_directory else size,
        "isDirectory": is_directory,
        "owner": {"id": "u1"},
        "parent": {"id": parent_id},
        "lastModified": "2024-05-01T10:00:00Z",
        "createdAt": "2024-05-01T10:00:00Z",
        "updatedAt": "2024-05-02T08:30:00.000Z",
        "deletedAt": None,
        "isFavorite": False,
        "isShared": False,
    }
    data.update(extra)
    return data


def error(status: int, message: Optional[str] = None) -> httpx.Response:
    body = {"message": message} if message else {}
    return httpx.Response(status, json=body)


class FakeBackend:
    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], Any]] = {}
        self.calls: List[Tuple[str, str]] = []
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, handler: Any = None, status: int = 200) -> None:
        if callable(handler):
            self.routes[(method, path)] = handler
        else:
            self.routes[(method, path)] = lambda request: httpx.Response(status, json=handler)

    def count(self, method: str, path: str) -> int:
        return self.calls.count((method, path))

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        key = (request.method, request.url.path)
        self.calls.append(key)
        self.requests.append(request)
        handler = self.routes.get(key)
        if handler is None:
            return error(404, f"no route for {key[0]} {key[1]}")
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))
