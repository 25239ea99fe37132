"""Data tables behind the ``lookup(key) -> Optional[str]`` contract."""

import importlib.resources
import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from packaging.version import InvalidVersion, Version

from .config import LocaleIDConfig
from .exceptions import DataError, PathError

logger = logging.getLogger(__name__)

Lookup = Callable[[str], Optional[str]]
"""Maps a search key to a string, or None when the table has no entry."""

LIKELY_SUBTAGS_RESOURCE = "likely_subtags.json"
KEY_TYPE_DATA_RESOURCE = "key_type_data.json"
RELEASE_DIR_PREFIX = "cldr-"

# Namespaces of the flattened key/type table.
KEY_MAP = "keyMap"
BCP_KEY_MAP = "bcpKeyMap"
TYPE_MAP = "typeMap"
BCP_TYPE_MAP = "bcpTypeMap"
TYPE_ALIAS = "typeAlias"

_lock = threading.Lock()
_likely_subtags: Optional[Lookup] = None
_key_type_data: Optional[Lookup] = None


def table_key(*parts: str) -> str:
    """
    Build a namespaced lookup key such as ``typeMap/collation/phonebook``.

    :return: The joined key.
    :rtype: str
    """
    return "/".join(parts)


def mapping_lookup(mapping: Mapping[str, str]) -> Lookup:
    """
    Adapt a mapping to the lookup contract.
    The mapping is copied into a read-only view, so later changes to the
    argument do not leak into lookups.

    :param mapping: The table.
    :type mapping: Mapping[str, str]
    :return: A lookup function over a frozen copy of the mapping.
    :rtype: Lookup
    """
    frozen = MappingProxyType(dict(mapping))
    return frozen.get


def load_json(path: Path) -> Any:
    """
    Load a JSON document from disk.

    :param path: The file to read.
    :type path: Path
    :raises DataError: If the file cannot be read or is not valid JSON.
    :return: The decoded document.
    :rtype: Any
    """
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except (OSError, ValueError) as e:
        err = f"could not read data table {path}: {e}"
        raise DataError(err) from e


def _load_resource(name: str) -> Any:
    """
    Load a JSON document shipped in the ``localeid/data`` package directory.

    :param name: The resource file name.
    :type name: str
    :return: The decoded document.
    :rtype: Any
    """
    resource = importlib.resources.files("localeid").joinpath("data", name)
    with importlib.resources.as_file(resource) as path:
        return load_json(Path(path))


def convert_cldr_likely_subtags(raw: Mapping[str, Any]) -> Dict[str, str]:
    """
    Convert a likely subtags document to the underscore-separated table form.
    Both the CLDR JSON layout (``{"supplemental": {"likelySubtags": {...}}}``
    with hyphenated tags) and a flat mapping are accepted.

    :param raw: The decoded document.
    :type raw: Mapping[str, Any]
    :raises DataError: If the document has an unexpected structure.
    :return: Search tag to likely subtags string, e.g. ``{"en": "en_Latn_US"}``.
    :rtype: Dict[str, str]
    """
    table: Any = raw
    if "supplemental" in raw:
        try:
            table = raw["supplemental"]["likelySubtags"]
        except (KeyError, TypeError) as e:
            err = "likely subtags document has no supplemental/likelySubtags table"
            raise DataError(err) from e
    if not isinstance(table, Mapping):
        err = f"likely subtags table must be a mapping, not {type(table).__name__}"
        raise DataError(err)
    return {
        str(key).replace("-", "_"): str(value).replace("-", "_")
        for key, value in table.items()
    }


def flatten_key_type_data(raw: Mapping[str, Any]) -> Dict[str, str]:
    """
    Flatten the nested key/type document into namespaced lookup keys.

    The document holds ``keyMap`` (legacy key to BCP47 key), ``typeMap``
    (per legacy key, legacy type to BCP47 type) and ``typeAlias`` (per
    legacy key, deprecated type to current type). Reverse entries are added
    under ``bcpKeyMap`` and ``bcpTypeMap`` so both directions go through the
    same lookup. A bare ``typeMap/<key>`` entry marks keys that have a type
    table, which gates the alias lookup.

    :param raw: The decoded document.
    :type raw: Mapping[str, Any]
    :raises DataError: If a section is not a mapping.
    :return: The flattened table.
    :rtype: Dict[str, str]
    """
    flat: Dict[str, str] = {}
    try:
        for key, bcp_key in raw.get(KEY_MAP, {}).items():
            key, bcp_key = key.lower(), bcp_key.lower()
            flat[table_key(KEY_MAP, key)] = bcp_key
            flat.setdefault(table_key(BCP_KEY_MAP, bcp_key), key)
        for key, types in raw.get(TYPE_MAP, {}).items():
            key = key.lower()
            flat[table_key(TYPE_MAP, key)] = key
            for legacy_type, bcp_type in types.items():
                bcp_type = bcp_type.lower()
                flat[table_key(TYPE_MAP, key, legacy_type)] = bcp_type
                flat.setdefault(table_key(BCP_TYPE_MAP, key, bcp_type), legacy_type)
        for key, aliases in raw.get(TYPE_ALIAS, {}).items():
            for alias, target in aliases.items():
                flat[table_key(TYPE_ALIAS, key.lower(), alias)] = target
    except AttributeError as e:
        err = "key/type data sections must be mappings"
        raise DataError(err) from e
    return flat


def find_downloaded_releases(data_path: Path) -> List[Path]:
    """
    Find downloaded CLDR releases in the data directory.

    :param data_path: The data directory.
    :type data_path: Path
    :return: Paths of the ``cldr-<version>`` directories.
    :rtype: List[Path]
    """
    if not data_path.is_dir():
        return []
    return [
        path
        for path in data_path.glob(f"{RELEASE_DIR_PREFIX}*")
        if path.is_dir() and (path / LIKELY_SUBTAGS_RESOURCE).is_file()
    ]


def release_version(path: Path) -> Version:
    """
    Extract the CLDR version from a release directory name.

    :param path: A ``cldr-<version>`` directory.
    :type path: Path
    :raises ValueError: If the directory name does not carry a version.
    :return: The parsed version.
    :rtype: Version
    """
    if not path.name.startswith(RELEASE_DIR_PREFIX):
        raise ValueError(f"Invalid CLDR release folder name: {path.name}")
    try:
        return Version(path.name.removeprefix(RELEASE_DIR_PREFIX))
    except InvalidVersion as e:
        raise ValueError(f"Invalid CLDR release folder name: {path.name}") from e


def get_release_directory(data_path: Path, version: str = "latest") -> Path:
    """
    Get the directory of a downloaded CLDR release.

    :param data_path: The data directory.
    :type data_path: Path
    :param version: A release number, or ``latest`` for the newest one found.
    :type version: str
    :raises PathError: If no matching release has been downloaded.
    :return: The release directory.
    :rtype: Path
    """
    releases = []
    for path in find_downloaded_releases(data_path):
        try:
            releases.append((release_version(path), path))
        except ValueError:
            logger.debug("Ignoring unrecognized folder %s", path)
    if version != "latest":
        wanted = Version(version)
        releases = [(v, p) for v, p in releases if v == wanted]
    if not releases:
        err = f"CLDR release {version} not found in {data_path}."
        raise PathError(err)
    latest = max(releases, key=lambda item: item[0])[1]
    logger.debug("Using CLDR release directory: %s", latest)
    return latest


def load_likely_subtags(config: Optional[LocaleIDConfig] = None) -> Dict[str, str]:
    """
    Load the likely subtags table.
    An explicit ``likely_subtags`` file wins; otherwise a pinned
    ``cldr_version`` selects a downloaded release; otherwise the table
    bundled with the package is used.

    :param config: The configuration; defaults to the environment.
    :type config: Optional[LocaleIDConfig]
    :return: The likely subtags table.
    :rtype: Dict[str, str]
    """
    config = config or LocaleIDConfig.from_env()
    if config.likely_subtags is not None:
        logger.debug("Loading likely subtags from %s", config.likely_subtags)
        return convert_cldr_likely_subtags(load_json(config.likely_subtags))
    if config.cldr_version != "latest":
        release = get_release_directory(config.data_path, config.cldr_version)
        return convert_cldr_likely_subtags(load_json(release / LIKELY_SUBTAGS_RESOURCE))
    return convert_cldr_likely_subtags(_load_resource(LIKELY_SUBTAGS_RESOURCE))


def load_key_type_data(config: Optional[LocaleIDConfig] = None) -> Dict[str, str]:
    """
    Load and flatten the key/type mapping table.

    :param config: The configuration; defaults to the environment.
    :type config: Optional[LocaleIDConfig]
    :return: The flattened table.
    :rtype: Dict[str, str]
    """
    config = config or LocaleIDConfig.from_env()
    if config.key_type_data is not None:
        logger.debug("Loading key/type data from %s", config.key_type_data)
        return flatten_key_type_data(load_json(config.key_type_data))
    return flatten_key_type_data(_load_resource(KEY_TYPE_DATA_RESOURCE))


def default_likely_subtags() -> Lookup:
    """
    Return the process-wide likely subtags lookup, loading it on first use.

    :return: The lookup.
    :rtype: Lookup
    """
    global _likely_subtags
    if _likely_subtags is None:
        with _lock:
            if _likely_subtags is None:
                _likely_subtags = mapping_lookup(load_likely_subtags())
    return _likely_subtags


def default_key_type_data() -> Lookup:
    """
    Return the process-wide key/type lookup, loading it on first use.

    :return: The lookup.
    :rtype: Lookup
    """
    global _key_type_data
    if _key_type_data is None:
        with _lock:
            if _key_type_data is None:
                _key_type_data = mapping_lookup(load_key_type_data())
    return _key_type_data


def reset_default_tables() -> None:
    """Forget the loaded tables so the next lookup reloads them."""
    global _likely_subtags, _key_type_data
    with _lock:
        _likely_subtags = None
        _key_type_data = None
