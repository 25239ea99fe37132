"""Conversion between LocaleID and the host platform's locale names."""

import enum
import locale
import logging
import threading
from typing import NamedTuple, Optional, Tuple, Union

from .bcp47 import from_language_tag, to_language_tag
from .cache import SimpleCache
from .canonicalize import create_canonical
from .config import LocaleIDConfig
from .locale_id import KEYWORD_SEPARATOR, UNDERSCORE, LocaleID
from .parser import CODESET_SEPARATOR, ensure_locale_id, parse

logger = logging.getLogger(__name__)

FAILSAFE_LOCALE = "en"


class InteropMode(enum.Enum):
    """How locale names are exchanged with the host."""

    LEGACY = "legacy"
    """POSIX names such as ``de_DE.UTF-8@euro``."""

    MODERN = "modern"
    """BCP47 language tags such as ``de-DE``."""


class PosixAlias(NamedTuple):
    """A POSIX name that does not follow the positional rules."""

    posix_name: str
    canonical: str


# Scanned in order; the first entry for a canonical name is used when writing.
POSIX_ALIASES: Tuple[PosixAlias, ...] = (
    PosixAlias("C", "en_US_POSIX"),
    PosixAlias("POSIX", "en_US_POSIX"),
    PosixAlias("be_BY@latin", "be_Latn_BY"),
    PosixAlias("ca_ES@valencia", "ca_ES_VALENCIA"),
    PosixAlias("no_NO_NY", "nn_NO"),
    PosixAlias("sr_ME@latin", "sr_Latn_ME"),
    PosixAlias("sr_RS@latin", "sr_Latn_RS"),
    PosixAlias("sr_RS", "sr_Cyrl_RS"),
    PosixAlias("uz_UZ@cyrillic", "uz_Cyrl_UZ"),
    PosixAlias("uz_UZ", "uz_Latn_UZ"),
)

EURO_MODIFIER = "euro"

_mode_lock = threading.Lock()
_mode: Optional[InteropMode] = None
_host_cache: SimpleCache[Tuple[InteropMode, str], LocaleID] = SimpleCache()


def get_interop_mode(config: Optional[LocaleIDConfig] = None) -> InteropMode:
    """
    Return the interop mode, selecting it from the configuration on first use.
    Later calls return the same mode.

    :param config: The configuration; defaults to the environment.
    :type config: Optional[LocaleIDConfig]
    :return: The selected mode.
    :rtype: InteropMode
    """
    global _mode
    if _mode is None:
        with _mode_lock:
            if _mode is None:
                config = config or LocaleIDConfig.from_env()
                _mode = InteropMode(config.interop_mode)
                logger.debug("Selected %s locale interop", _mode.value)
    return _mode


def _split_posix_name(name: str) -> Tuple[str, str]:
    base, _, modifier = name.partition(KEYWORD_SEPARATOR)
    base, _, _ = base.partition(CODESET_SEPARATOR)
    return base, modifier


def _posix_alias_for(name: str) -> Optional[str]:
    base, modifier = _split_posix_name(name)
    key = f"{base}{KEYWORD_SEPARATOR}{modifier}" if modifier else base
    for alias in POSIX_ALIASES:
        if alias.posix_name.lower() == key.lower():
            return alias.canonical
    return None


def _from_posix_name(name: str) -> LocaleID:
    canonical = _posix_alias_for(name)
    if canonical is not None:
        return parse(canonical)
    return create_canonical(name)


def _to_posix_name(loc: LocaleID, codeset: Optional[str]) -> str:
    base = ""
    for alias in POSIX_ALIASES:
        if alias.canonical == loc.base_name:
            base = alias.posix_name
            break
    modifier = ""
    if KEYWORD_SEPARATOR in base:
        base, modifier = base.split(KEYWORD_SEPARATOR, 1)
    if not base:
        base = loc.language or FAILSAFE_LOCALE
        if loc.region:
            base += UNDERSCORE + loc.region
        if loc.variant:
            modifier = loc.variant.lower()
    if not modifier and loc.keyword_value("currency") == "EUR":
        modifier = EURO_MODIFIER
    if codeset:
        base += CODESET_SEPARATOR + codeset
    if modifier:
        base += KEYWORD_SEPARATOR + modifier
    return base


def for_host_locale(name: str, mode: Optional[InteropMode] = None) -> LocaleID:
    """
    Convert a host locale name to a LocaleID. Results are cached.

    In legacy mode the name is a POSIX locale name: the codeset is dropped,
    the ``@euro`` modifier becomes ``currency=EUR`` and the names in
    ``POSIX_ALIASES`` map to their script-bearing forms. In modern mode the
    name is a BCP47 tag.

    :param name: The host locale name.
    :type name: str
    :param mode: The interop mode; defaults to the configured one.
    :type mode: Optional[InteropMode]
    :return: The identifier.
    :rtype: LocaleID
    """
    mode = mode or get_interop_mode()

    def convert(key: Tuple[InteropMode, str]) -> LocaleID:
        if key[0] is InteropMode.LEGACY:
            return _from_posix_name(key[1])
        return from_language_tag(key[1])

    return _host_cache.get_or_compute((mode, name.strip()), convert)


def to_host_locale(
    loc: Union[str, LocaleID],
    mode: Optional[InteropMode] = None,
    codeset: Optional[str] = None,
) -> str:
    """
    Convert a LocaleID to a host locale name.

    :param loc: The identifier.
    :type loc: Union[str, LocaleID]
    :param mode: The interop mode; defaults to the configured one.
    :type mode: Optional[InteropMode]
    :param codeset: A codeset to add to POSIX names, e.g. ``UTF-8``.
    :type codeset: Optional[str]
    :return: A POSIX locale name in legacy mode, a language tag in modern mode.
    :rtype: str
    """
    loc = ensure_locale_id(loc)
    mode = mode or get_interop_mode()
    if mode is InteropMode.LEGACY:
        return _to_posix_name(loc, codeset)
    return to_language_tag(loc)


def default_locale() -> LocaleID:
    """
    Get the locale of the running process from ``locale.getlocale()``.

    :return: The process locale, or ``en`` if none is set.
    :rtype: LocaleID
    """
    name = locale.getlocale()[0] or FAILSAFE_LOCALE
    logger.debug("Host locale: %s", name)
    return for_host_locale(name, InteropMode.LEGACY)


def clear_host_cache() -> None:
    _host_cache.clear()
