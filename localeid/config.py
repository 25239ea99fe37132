"""Module for configuring localeid data sources and host interop."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from packaging.version import InvalidVersion, Version

from .exceptions import PathError

logger = logging.getLogger(__name__)

DATA_PATH_ENV_VAR = "LOCALEID_DATA_PATH"  # CLDR download directory
LIKELY_SUBTAGS_ENV_VAR = "LOCALEID_LIKELY_SUBTAGS"
KEY_TYPE_DATA_ENV_VAR = "LOCALEID_KEY_TYPE_DATA"
INTEROP_MODE_ENV_VAR = "LOCALEID_INTEROP_MODE"
CLDR_VERSION_ENV_VAR = "LOCALEID_CLDR_VERSION"
DOWNLOAD_HOST_ENV_VAR = "LOCALEID_DOWNLOAD_HOST"

INTEROP_MODES = ("legacy", "modern")


@dataclass(frozen=True)
class OptionSpec:
    """
    Specification for a configuration option.

    This class defines the structure and behavior of a configuration option,
    including its type constraints, decoding mechanism, and optional validation.

    This class is frozen (immutable) to ensure configuration specifications
    remain constant throughout the application lifecycle.
    """

    py_types: Union[type, Tuple[type, ...]]
    """The Python type(s) that this option accepts."""

    decoder: Callable[[Any], Any]
    """A callable that converts the option value to its stored representation."""

    env_var: str
    """The environment variable the option is read from."""

    validator: Optional[Callable[[Any], None]] = None
    """An optional validator function for the option value."""


def _path_validator(v: Any) -> None:
    """
    Validate that a given path exists and is a file.

    :param v: The path to validate, which will be converted to a Path object
    :type v: Any
    :raises PathError: If the path does not exist
    :raises PathError: If the path exists but is not a file
    """
    p = Path(v)
    if not p.exists():
        err = f"path does not exist: {p}"
        raise PathError(err)
    if not p.is_file():
        err = f"path is not a file: {p}"
        raise PathError(err)


def _directory_validator(v: Any) -> None:
    """
    Validate that a given path is a directory, or does not exist yet.

    :param v: The path to validate.
    :type v: Any
    :raises PathError: If the path exists but is not a directory
    """
    p = Path(v)
    if p.exists() and not p.is_dir():
        err = f"path is not a directory: {p}"
        raise PathError(err)


def _interop_mode_validator(v: Any) -> None:
    if str(v).lower() not in INTEROP_MODES:
        err = f"interop mode must be one of {', '.join(INTEROP_MODES)}, not {v!r}"
        raise ValueError(err)


def _cldr_version_validator(v: Any) -> None:
    """
    Validate a CLDR release number such as ``46.0``, or ``latest``.

    :param v: The version string.
    :type v: Any
    :raises ValueError: If the version cannot be parsed.
    """
    if v == "latest":
        return
    try:
        Version(str(v))
    except InvalidVersion as e:
        err = f"invalid CLDR version: {v!r}"
        raise ValueError(err) from e


CONFIG_SCHEMA: Dict[str, OptionSpec] = {
    "data_path": OptionSpec(
        (str, Path), Path, DATA_PATH_ENV_VAR, _directory_validator
    ),
    "likely_subtags": OptionSpec(
        (str, Path), Path, LIKELY_SUBTAGS_ENV_VAR, _path_validator
    ),
    "key_type_data": OptionSpec(
        (str, Path), Path, KEY_TYPE_DATA_ENV_VAR, _path_validator
    ),
    "interop_mode": OptionSpec(
        str, lambda v: v.lower(), INTEROP_MODE_ENV_VAR, _interop_mode_validator
    ),
    "cldr_version": OptionSpec(
        str, str, CLDR_VERSION_ENV_VAR, _cldr_version_validator
    ),
    "download_host": OptionSpec(str, str, DOWNLOAD_HOST_ENV_VAR),
}

DEFAULTS: Dict[str, Any] = {
    "data_path": Path.home() / ".cache" / "localeid",
    "likely_subtags": None,
    "key_type_data": None,
    "interop_mode": "modern",
    "cldr_version": "latest",
    "download_host": "https://raw.githubusercontent.com/unicode-org/cldr-json/",
}


def _decode_config(config: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate configuration values and convert them to their stored form.

    :param config: A dictionary containing configuration keys and values.
    :type config: Mapping[str, Any]
    :return: A dictionary with the same keys and decoded values.
    :rtype: Dict[str, Any]
    :raises ValueError: If a key in the config is not found in the CONFIG_SCHEMA.
    :raises TypeError: If a value's type does not match the expected type(s) defined
                      in the CONFIG_SCHEMA specification.
    """
    logger.debug("Decoding localeid config with keys: %s", list(config.keys()))
    decoded: Dict[str, Any] = {}
    for key, value in config.items():
        spec = CONFIG_SCHEMA.get(key)
        if spec is None:
            err = f"unexpected key in config: {key}"
            raise ValueError(err)

        if not isinstance(value, spec.py_types):
            err = f"invalid type for {key}: {type(value).__name__}"
            raise TypeError(err)
        if spec.validator is not None:
            spec.validator(value)
        decoded[key] = spec.decoder(value)
    return decoded


class LocaleIDConfig:
    """
    Configuration class for localeid.

    :param config: Dictionary containing configuration keys and values.
                   Missing keys take their value from ``DEFAULTS``.
    :type config: Optional[Mapping[str, Any]]
    """

    config: Dict[str, Any]
    """Dictionary containing the decoded configuration values."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        """
        Initialize the LocaleIDConfig object.
        """
        self.config = dict(DEFAULTS)
        self.config.update(_decode_config(config or {}))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LocaleIDConfig":
        """
        Build a configuration from ``LOCALEID_*`` environment variables.

        :param environ: The environment to read; defaults to ``os.environ``.
        :type environ: Optional[Mapping[str, str]]
        :return: The configuration.
        :rtype: LocaleIDConfig
        """
        environ = os.environ if environ is None else environ
        options = {
            key: environ[spec.env_var]
            for key, spec in CONFIG_SCHEMA.items()
            if environ.get(spec.env_var)
        }
        return cls(options)

    @property
    def data_path(self) -> Path:
        """The directory CLDR downloads are stored in."""
        return Path(self.config["data_path"])

    @property
    def likely_subtags(self) -> Optional[Path]:
        return self.config["likely_subtags"]

    @property
    def key_type_data(self) -> Optional[Path]:
        return self.config["key_type_data"]

    @property
    def interop_mode(self) -> str:
        return str(self.config["interop_mode"])

    @property
    def cldr_version(self) -> str:
        return str(self.config["cldr_version"])

    @property
    def download_host(self) -> str:
        return str(self.config["download_host"])

    def __repr__(self) -> str:
        return f"LocaleIDConfig({self.config!r})"


def get_data_path(config: Optional[LocaleIDConfig] = None) -> Path:
    """
    Get the directory CLDR downloads are stored in.
    The directory is taken from ``LOCALEID_DATA_PATH`` and defaults to
    ``~/.cache/localeid``. The function ensures that the directory exists
    before returning it.

    :param config: The configuration to read; defaults to the environment.
    :type config: Optional[LocaleIDConfig]
    :return: The data directory.
    :rtype: Path
    """
    config = config or LocaleIDConfig.from_env()
    path = config.data_path
    path.mkdir(parents=True, exist_ok=True)
    return path
