from typing import Any, Optional


class ApiError(RuntimeError):
    """Non-2xx answer from the backend.

    ``message`` is the server-provided ``message`` field when the body has one,
    otherwise a generic description of the status.
    """

    def __init__(self, status_code: int, message: str, payload: Any = None, path: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.status_code} {self.path}: {self.message}"
        return f"{self.status_code}: {self.message}"


def error_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        msg = payload.get("message")
        if isinstance(msg, str) and msg:
            return msg
    return None
