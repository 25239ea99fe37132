"""CLDR likely subtags download module."""

import json
import logging
import tempfile
from pathlib import Path
from typing import IO, Any, Dict, Optional
from urllib.parse import urljoin

import requests
import tqdm
from packaging.version import InvalidVersion, Version

from .config import LocaleIDConfig, get_data_path
from .data import (
    LIKELY_SUBTAGS_RESOURCE,
    RELEASE_DIR_PREFIX,
    convert_cldr_likely_subtags,
    find_downloaded_releases,
    load_json,
)
from .exceptions import DataError, PathError

logger = logging.getLogger(__name__)

CLDR_DOWNLOAD_VERSION = "latest"
CLDR_LATEST_REF = "main"
LIKELY_SUBTAGS_PATH = "cldr-json/cldr-core/supplemental/likelySubtags.json"


def http_get(
    url: str,
    out_file: IO[bytes],
    proxies: Optional[Dict[str, str]] = None,
) -> None:
    """
    Downloads a file from a given URL and writes it to the specified output file.

    :param url: The URL to download the file from.
    :type url: str
    :param out_file: The file object to write the downloaded content to.
    :type out_file: IO[bytes]
    :param proxies: Optional dictionary of proxies to use for the request.
    :type proxies: Optional[Dict[str, str]]
    :raises TimeoutError: If the request times out.
    :raises PathError: If the file could not be found at the given URL (HTTP 404).
    """
    logger.info("Starting download from %s", url)
    try:
        req = requests.get(url, stream=True, proxies=proxies, timeout=60)
    except requests.exceptions.Timeout as e:
        err = f"Request to {url} timed out."
        raise TimeoutError(err) from e
    content_length = req.headers.get("Content-Length")
    total = int(content_length) if content_length is not None else None
    if req.status_code == 404:
        err = f"Could not find at URL {url}. The given CLDR version may not exist."
        raise PathError(err)
    progress = tqdm.tqdm(
        unit="B",
        unit_scale=True,
        total=total,
        desc="Downloading CLDR likely subtags",
    )
    for chunk in req.iter_content(chunk_size=1024):
        if chunk:  # filter out keep-alive new chunks
            progress.update(len(chunk))
            out_file.write(chunk)
    progress.close()


def get_download_url(version: str, host: str) -> str:
    """
    Build the URL of ``likelySubtags.json`` for a CLDR release.

    :param version: A release number such as ``46.0.0``, or ``latest``.
    :type version: str
    :param host: The CLDR JSON repository base URL.
    :type host: str
    :raises ValueError: If the version is neither ``latest`` nor a release number.
    :return: The download URL.
    :rtype: str
    """
    if version == "latest":
        ref = CLDR_LATEST_REF
    else:
        try:
            Version(version)
        except InvalidVersion as e:
            err = (
                f"You can only download a specific CLDR release if it is formatted "
                f"like 'x.y.z' (e.g. '46.0.0'). The version you provided is {version}. "
                f"You can also use 'latest' to download the current data."
            )
            raise ValueError(err) from e
        ref = version
    if not host.endswith("/"):
        host += "/"
    return urljoin(host, f"{ref}/{LIKELY_SUBTAGS_PATH}")


def document_cldr_version(raw: Any, default: str) -> str:
    """
    Read the CLDR release number a likely subtags document declares.

    :param raw: The decoded document.
    :type raw: Any
    :param default: Returned when the document carries no version.
    :type default: str
    :return: The release number.
    :rtype: str
    """
    try:
        return str(raw["supplemental"]["version"]["_cldrVersion"])
    except (KeyError, TypeError):
        logger.debug("Document has no CLDR version, using %s", default)
        return default


def store_release(raw: Any, release_dir: Path) -> Path:
    """
    Convert a likely subtags document and store it in a release directory.

    :param raw: The decoded CLDR document.
    :type raw: Any
    :param release_dir: The ``cldr-<version>`` directory to write to.
    :type release_dir: Path
    :return: The path of the written table.
    :rtype: Path
    """
    table = convert_cldr_likely_subtags(raw)
    release_dir.mkdir(parents=True, exist_ok=True)
    target = release_dir / LIKELY_SUBTAGS_RESOURCE
    with target.open("w", encoding="utf-8") as handle:
        json.dump(table, handle, indent=2, sort_keys=True)
    logger.info("Stored %d likely subtags entries in %s", len(table), target)
    return target


def download_likely_subtags(
    version: str = CLDR_DOWNLOAD_VERSION,
    config: Optional[LocaleIDConfig] = None,
) -> Path:
    """
    Download the CLDR likely subtags table and store it under the data
    directory as ``cldr-<version>/likely_subtags.json``. A release that has
    already been downloaded is not fetched again.

    :param version: A CLDR release number, or ``latest``.
    :type version: str
    :param config: The configuration; defaults to the environment.
    :type config: Optional[LocaleIDConfig]
    :raises PathError: If the data directory is not a directory or the
                       release does not exist.
    :raises ValueError: If the version format is invalid.
    :raises DataError: If the downloaded document has an unexpected structure.
    :return: The release directory.
    :rtype: Path
    """
    config = config or LocaleIDConfig.from_env()
    download_folder = get_data_path(config)
    if not download_folder.is_dir():
        err = f"Download folder {download_folder} is not a directory."
        raise PathError(err)

    url = get_download_url(version, config.download_host)
    if version != "latest":
        release_dir = download_folder / f"{RELEASE_DIR_PREFIX}{version}"
        if release_dir in find_downloaded_releases(download_folder):
            logger.info("CLDR release %s is already present in %s", version, release_dir)
            return release_dir

    with tempfile.NamedTemporaryFile(suffix=".json", delete=False) as downloaded_file:
        temp_name = downloaded_file.name
    try:
        with open(temp_name, "wb") as out_file:
            http_get(url, out_file)
        raw = load_json(Path(temp_name))
        if not isinstance(raw, dict):
            err = f"Unexpected likely subtags document at {url}."
            raise DataError(err)
        release = version if version != "latest" else document_cldr_version(raw, version)
        release_dir = download_folder / f"{RELEASE_DIR_PREFIX}{release}"
        store_release(raw, release_dir)
    finally:
        Path(temp_name).unlink(missing_ok=True)
    return release_dir
