import pytest

from fynncloud.models import FileItem, Quota
from fynncloud.utils import determine_file_type, format_size, parse_timestamp, redact_payload
from tests.fixtures.backend import api_file


@pytest.mark.parametrize(
    "content_type, filename, expected",
    [
        ("directory", "Photos", "folder"),
        ("image/jpeg", "a.jpg", "image"),
        ("video/mp4", "clip.mp4", "video"),
        ("audio/mpeg", "song.mp3", "audio"),
        ("application/pdf", "paper.pdf", "pdf"),
        ("application/octet-stream", "Letter.DOCX", "doc"),
        ("text/plain", "notes.txt", "doc"),
        ("text/csv", "data.csv", "sheet"),
        ("application/octet-stream", "deck.pptx", "slide"),
        ("application/gzip", "backup.tar.gz", "archive"),
        ("text/x-python", "main.py", "code"),
        ("application/json", "package.json", "code"),
        ("application/octet-stream", "blob.bin", "file"),
        (None, "README", "file"),
    ],
)
def test_determine_file_type(content_type, filename, expected):
    assert determine_file_type(content_type, filename) == expected


@pytest.mark.parametrize(
    "num, expected",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (5 * 1024 ** 3, "5 GB"),
        (1125899906842624, "Unlimited"),
    ],
)
def test_format_size(num, expected):
    assert format_size(num) == expected


def test_parse_timestamp_handles_zulu_and_empty():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    dt = parse_timestamp("2024-05-02T08:30:00.000Z")
    assert (dt.year, dt.month, dt.day, dt.hour, dt.minute) == (2024, 5, 2, 8, 30)
    assert dt.utcoffset().total_seconds() == 0


def test_redact_payload_hides_secrets():
    payload = {"name": "x", "refreshToken": "abc", "nested": [{"password": "pw"}]}
    assert redact_payload(payload) == {"name": "x", "refreshToken": "***", "nested": [{"password": "***"}]}


def test_file_item_from_api_trashed_entry():
    item = FileItem.from_api(api_file("t1", deletedAt="2024-06-01T00:00:00Z", isRecent=True))

    assert item.deleted_at is not None
    assert item.is_recent is True
    assert item.parent_id is None
    assert item.to_dict()["deleted_at"].startswith("2024-06-01")


def test_file_item_from_api_without_timestamps():
    data = api_file("n1")
    data.pop("createdAt", None)
    data.pop("updatedAt", None)

    item = FileItem.from_api(data)

    assert item.created_at is None
    assert item.updated_at is None
    assert item.to_dict()["created_at"] is None


def test_quota_properties():
    q = Quota(total_bytes=200, used_bytes=50)
    assert q.free_bytes == 150
    assert q.used_percent == 25.0
    assert not q.unlimited
    assert Quota(total_bytes=0, used_bytes=10).used_percent == 0.0
    assert Quota(total_bytes=1125899906842624, used_bytes=0).unlimited
