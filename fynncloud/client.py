from typing import Any, Dict, Optional
import json
import os

try:
    import httpx
except ModuleNotFoundError as exc:  # pragma: no cover - user environment dependency
    raise ModuleNotFoundError(
        "Missing dependency 'httpx'. Install with: pip install httpx"
    ) from exc

from endpoints import BASE_URL
from .errors import ApiError, error_message
from .utils import append_log_line, get_logger, redact_payload, redacted_headers, truncate_text


def default_base_url() -> str:
    return os.getenv("FYNNCLOUD_API_BASE") or BASE_URL


class CloudClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        cookies: Optional[httpx.Cookies] = None,
        tokens: Optional[Dict[str, Any]] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_log_path: Optional[str] = None,
    ):
        self.base_url = (base_url or default_base_url()).rstrip('/')
        self.tokens = tokens or {}
        self.timeout = timeout
        self.logger = get_logger('fynncloud')
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            cookies=cookies or httpx.Cookies(),
            timeout=self.timeout,
            transport=transport,
        )
        self.http_log_path = http_log_path or os.getenv("FYNNCLOUD_HTTP_LOG") or None

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def _default_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": "application/json"}
        token = self.tokens.get("token")
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _log(self, line: str) -> None:
        if self.http_log_path:
            append_log_line(self.http_log_path, line)

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = path if path.startswith('http') else f"{self.base_url}{path}"
        headers = dict(self._default_headers())
        headers.update(kwargs.get('headers', {}) or {})
        kwargs['headers'] = headers
        if kwargs.get('params') == {}:
            kwargs.pop('params')
        redacted = redacted_headers(headers)
        payload = None
        if "json" in kwargs:
            payload = redact_payload(kwargs.get("json"))
        self.logger.debug('HTTP %s %s headers=%s', method, url, redacted)
        if payload is not None:
            self._log(f"{method} {url} headers={redacted} payload={payload}")
        else:
            self._log(f"{method} {url} headers={redacted}")

        resp = await self._client.request(method, url, **kwargs)

        body: Any = None
        decoded = False
        if resp.content:
            try:
                body = resp.json()
                decoded = True
            except ValueError:
                pass
        logged = redact_payload(body) if decoded else truncate_text(resp.text or "")
        self._log(f"{method} {url} status={resp.status_code} response={json.dumps(logged, ensure_ascii=True)}")
        self.logger.debug('HTTP %s %s -> %s', method, url, resp.status_code)

        if resp.is_error:
            message = error_message(body) or resp.reason_phrase or f"HTTP {resp.status_code}"
            raise ApiError(resp.status_code, message, payload=body, path=path)
        if resp.content and not decoded:
            raise ApiError(resp.status_code, f"Non-JSON response: {truncate_text(resp.text, 200)}", path=path)
        return body

    async def close(self) -> None:
        await self._client.aclose()
