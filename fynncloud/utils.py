import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def debug_enabled() -> bool:
    return os.getenv("FYNNCLOUD_DEBUG", "0") in ("1", "true", "TRUE")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    # Children propagate to the package logger, which owns the handler.
    if "." not in name and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(levelname)s %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    return logger


def redacted_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for k, v in headers.items():
        if k.lower() in ('authorization', 'cookie', 'set-cookie'):
            redacted[k] = '[REDACTED]'
        else:
            redacted[k] = v
    return redacted


def redact_payload(payload: Any) -> Any:
    if not isinstance(payload, (dict, list)):
        return payload
    secret_keys = (
        "password",
        "token",
        "authorization",
        "cookie",
        "secret",
    )
    if isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    redacted: Dict[str, Any] = {}
    for key, value in payload.items():
        key_l = str(key).lower()
        if any(k in key_l for k in secret_keys):
            redacted[key] = "***"
        else:
            redacted[key] = redact_payload(value)
    return redacted


def append_log_line(path: str, line: str) -> None:
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    safe_line = line.rstrip("\n")
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"[{timestamp}] {safe_line}\n")


def truncate_text(text: str, limit: int = 2000) -> str:
    if text is None:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}...[truncated {len(text) - limit} chars]"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string from the API; ``None`` and ``""`` map to ``None``."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


# 1 PiB; quotas at or above this are reported as unlimited.
UNLIMITED_BYTES = 1125899906842624

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]


def format_size(num: int) -> str:
    if num == 0:
        return "0 B"
    if num >= UNLIMITED_BYTES:
        return "Unlimited"
    step = 1024.0
    size = float(num)
    i = 0
    while size >= step and i < len(_SIZE_UNITS) - 1:
        size /= step
        i += 1
    value = round(size, 1)
    if value == int(value):
        return f"{int(value)} {_SIZE_UNITS[i]}"
    return f"{value} {_SIZE_UNITS[i]}"


_DOC_EXT = (".doc", ".docx", ".txt", ".rtf", ".odt")
_SHEET_EXT = (".xls", ".xlsx", ".csv", ".ods")
_SLIDE_EXT = (".ppt", ".pptx", ".odp")
_ARCHIVE_EXT = (".zip", ".rar", ".7z", ".tar", ".gz", ".bz2")
_CODE_EXT = (
    ".js", ".ts", ".vue", ".html", ".css", ".json", ".py", ".java", ".c",
    ".cpp", ".php", ".rb", ".go", ".rs", ".swift", ".sql", ".md",
)


def determine_file_type(content_type: Optional[str], filename: str) -> str:
    """Classify an entry from its MIME type, falling back to the extension."""
    ctype = (content_type or "").lower()
    name = (filename or "").lower()

    if ctype.startswith("directory"):
        return "folder"
    if ctype.startswith("image/"):
        return "image"
    if ctype.startswith("video/"):
        return "video"
    if ctype.startswith("audio/"):
        return "audio"
    if ctype == "application/pdf":
        return "pdf"

    if name.endswith(_DOC_EXT):
        return "doc"
    if name.endswith(_SHEET_EXT):
        return "sheet"
    if name.endswith(_SLIDE_EXT):
        return "slide"
    if name.endswith(_ARCHIVE_EXT):
        return "archive"
    if name.endswith(_CODE_EXT):
        return "code"
    return "file"
