"""Locale identifier parsing, canonicalization, BCP47 conversion and negotiation."""

__all__ = [
    "LocaleID",
    "ROOT",
    "ENGLISH",
    "FRENCH",
    "GERMAN",
    "ITALIAN",
    "JAPANESE",
    "KOREAN",
    "CHINESE",
    "SIMPLIFIED_CHINESE",
    "TRADITIONAL_CHINESE",
    "FRANCE",
    "GERMANY",
    "ITALY",
    "JAPAN",
    "KOREA",
    "CHINA",
    "PRC",
    "TAIWAN",
    "UK",
    "US",
    "CANADA",
    "CANADA_FRENCH",
    "LocaleBuilder",
    "AcceptLanguageResult",
    "parse",
    "get_name",
    "get_iso3_language",
    "get_iso3_country",
    "canonicalize",
    "create_canonical",
    "to_language_tag",
    "from_language_tag",
    "add_likely_subtags",
    "minimize_subtags",
    "parse_accept_language",
    "accept_language",
    "for_host_locale",
    "to_host_locale",
    "default_locale",
    "InteropMode",
    "LocaleIDConfig",
    "data",
    "exceptions",
]

import logging

from . import data, exceptions
from .accept_language import AcceptLanguageResult, accept_language, parse_accept_language
from .bcp47 import from_language_tag, to_language_tag
from .builder import LocaleBuilder
from .canonicalize import canonicalize, create_canonical
from .config import LocaleIDConfig
from .interop import InteropMode, default_locale, for_host_locale, to_host_locale
from .likely_subtags import add_likely_subtags, minimize_subtags
from .locale_id import (
    CANADA,
    CANADA_FRENCH,
    CHINA,
    CHINESE,
    ENGLISH,
    FRANCE,
    FRENCH,
    GERMAN,
    GERMANY,
    ITALIAN,
    ITALY,
    JAPAN,
    JAPANESE,
    KOREA,
    KOREAN,
    PRC,
    ROOT,
    SIMPLIFIED_CHINESE,
    TAIWAN,
    TRADITIONAL_CHINESE,
    UK,
    US,
    LocaleID,
)
from .parser import get_iso3_country, get_iso3_language, get_name, parse

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
