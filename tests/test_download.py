"""Tests for downloading CLDR likely subtags."""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest
import requests

from localeid.exceptions import DataError, PathError

LIKELY_DOCUMENT = {
    "supplemental": {
        "version": {"_cldrVersion": "47"},
        "likelySubtags": {"en": "en-Latn-US", "und-TW": "zh-Hant-TW"},
    }
}


class FakeResponse:
    """A streamed response serving a fixed body."""

    def __init__(self, body: bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.headers = {"Content-Length": str(len(body))}

    def iter_content(self, chunk_size: int) -> Iterator[bytes]:
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start : start + chunk_size]


@pytest.fixture  # type: ignore[misc]
def requested_urls(monkeypatch: pytest.MonkeyPatch) -> List[str]:
    """
    Fixture that serves ``LIKELY_DOCUMENT`` for every request and records
    the requested URLs.

    :param monkeypatch: Pytest fixture for replacing ``requests.get``.
    :return: The list the requested URLs are appended to.
    :rtype: List[str]
    """
    from localeid import download_data

    urls: List[str] = []

    def fake_get(url: str, **kwargs: Any) -> FakeResponse:
        urls.append(url)
        return FakeResponse(json.dumps(LIKELY_DOCUMENT).encode("utf-8"))

    monkeypatch.setattr(download_data.requests, "get", fake_get)
    return urls


def _config(tmp_path: Path) -> Any:
    from localeid import LocaleIDConfig

    return LocaleIDConfig(
        {"data_path": tmp_path, "download_host": "https://example.org/cldr-json"}
    )


def test_get_download_url() -> None:
    """
    Test the URLs for a pinned release and for the latest data.

    :raises AssertionError: If a URL differs.
    :raises ValueError: If an invalid version is accepted.
    """
    from localeid.download_data import get_download_url

    suffix = "cldr-json/cldr-core/supplemental/likelySubtags.json"
    host = "https://example.org/cldr-json"
    assert get_download_url("46.0.0", host) == f"{host}/46.0.0/{suffix}"
    assert get_download_url("latest", host + "/") == f"{host}/main/{suffix}"
    with pytest.raises(ValueError):
        get_download_url("forty-six", host)


def test_download_pinned_release(tmp_path: Path, requested_urls: List[str]) -> None:
    """
    Test that a pinned release is stored under its own version and not
    fetched twice.

    :param tmp_path: Pytest fixture for a temporary directory.
    :param requested_urls: Fixture recording the requested URLs.
    :raises AssertionError: If the release is stored wrongly or fetched again.
    """
    from localeid.data import load_json
    from localeid.download_data import download_likely_subtags

    release_dir = download_likely_subtags("46.0.0", _config(tmp_path))
    assert release_dir == tmp_path / "cldr-46.0.0"
    table: Dict[str, str] = load_json(release_dir / "likely_subtags.json")
    assert table == {"en": "en_Latn_US", "und_TW": "zh_Hant_TW"}
    assert len(requested_urls) == 1

    assert download_likely_subtags("46.0.0", _config(tmp_path)) == release_dir
    assert len(requested_urls) == 1


def test_download_latest_uses_document_version(
    tmp_path: Path, requested_urls: List[str]
) -> None:
    """
    Test that the latest data is stored under the version it declares.

    :param tmp_path: Pytest fixture for a temporary directory.
    :param requested_urls: Fixture recording the requested URLs.
    :raises AssertionError: If the release directory is named wrongly.
    """
    from localeid.download_data import download_likely_subtags

    release_dir = download_likely_subtags("latest", _config(tmp_path))
    assert release_dir == tmp_path / "cldr-47"
    assert requested_urls[0].endswith("/main/cldr-json/cldr-core/supplemental/likelySubtags.json")


def test_download_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Test missing releases, timeouts and unexpected documents.

    :param tmp_path: Pytest fixture for a temporary directory.
    :param monkeypatch: Pytest fixture for replacing ``requests.get``.
    :raises AssertionError: If an error is not raised.
    """
    from localeid import download_data

    monkeypatch.setattr(
        download_data.requests, "get", lambda url, **kwargs: FakeResponse(b"", 404)
    )
    with pytest.raises(PathError):
        download_data.download_likely_subtags("1.0.0", _config(tmp_path))

    def timeout(url: str, **kwargs: Any) -> FakeResponse:
        raise requests.exceptions.Timeout()

    monkeypatch.setattr(download_data.requests, "get", timeout)
    with pytest.raises(TimeoutError):
        download_data.download_likely_subtags("46.0.0", _config(tmp_path))

    monkeypatch.setattr(
        download_data.requests, "get", lambda url, **kwargs: FakeResponse(b"[1, 2]")
    )
    with pytest.raises(DataError):
        download_data.download_likely_subtags("46.0.0", _config(tmp_path))
    assert download_data.find_downloaded_releases(tmp_path) == []
