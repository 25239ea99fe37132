"""The immutable locale identifier value type."""

import dataclasses
import logging
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Dict, Iterable, Optional, Tuple

from .subtags import SUBTAG_SEPARATORS, UNICODE_LOCALE_EXTENSION

logger = logging.getLogger(__name__)

UNDERSCORE = "_"
KEYWORD_SEPARATOR = "@"
KEYWORD_ITEM_SEPARATOR = ";"
KEYWORD_ASSIGN = "="

ATTRIBUTE_KEY = "attribute"
"""Reserved legacy keyword holding the Unicode locale attributes."""


def join_base_name(language: str, script: str, region: str, variant: str) -> str:
    """
    Join the base fields into a legacy base name.
    When a variant is present without a region, an empty region slot is
    kept so the variant cannot be mistaken for a region (``de__PHONEBOOK``).

    :param language: The language subtag.
    :type language: str
    :param script: The script subtag.
    :type script: str
    :param region: The region subtag.
    :type region: str
    :param variant: The variant subtags joined with underscores.
    :type variant: str
    :return: The legacy base name.
    :rtype: str
    """
    parts = [language or ""]
    if script:
        parts.append(script)
    if region:
        parts.append(region)
    if variant:
        if not region:
            parts.append("")
        parts.append(variant)
    return UNDERSCORE.join(parts)


def format_keywords(keywords: Iterable[Tuple[str, str]]) -> str:
    return KEYWORD_ITEM_SEPARATOR.join(
        f"{key}{KEYWORD_ASSIGN}{value}" for key, value in keywords
    )


@total_ordering
@dataclass(frozen=True)
class LocaleID:
    """
    An immutable locale identifier.

    The legacy serialization (``str(loc)``) is a pure function of the fields:
    ``language_Script_REGION_VARIANT@key=value;key2=value2``. Keywords are
    always held in sorted key order, so the order in which they were supplied
    never shows in the serialized form. Unicode locale attributes live under
    the reserved ``attribute`` keyword, other BCP47 extensions under their
    single-character key.

    :param language: Empty, or a lowercase language code.
    :type language: str
    :param script: Empty, or a title-cased four letter script code.
    :type script: str
    :param region: Empty, an uppercase two letter code or a three digit code.
    :type region: str
    :param variants: Ordered variant subtags.
    :type variants: Tuple[str, ...]
    :param keywords: Keyword pairs; duplicates keep the last value.
    :type keywords: Tuple[Tuple[str, str], ...]
    """

    language: str = ""
    script: str = ""
    region: str = ""
    variants: Tuple[str, ...] = ()
    keywords: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", tuple(v for v in self.variants if v))
        object.__setattr__(
            self,
            "keywords",
            tuple(sorted(dict(self.keywords).items())),
        )

    @property
    def variant(self) -> str:
        """The variant subtags joined with underscores."""
        return UNDERSCORE.join(self.variants)

    @property
    def base_name(self) -> str:
        """The legacy serialization without keywords."""
        return join_base_name(self.language, self.script, self.region, self.variant)

    @property
    def name(self) -> str:
        """The full legacy serialization."""
        if not self.keywords:
            return self.base_name
        return self.base_name + KEYWORD_SEPARATOR + format_keywords(self.keywords)

    @property
    def is_root(self) -> bool:
        """True if language, script, region and variants are all empty."""
        return not (self.language or self.script or self.region or self.variants)

    @property
    def keyword_map(self) -> Dict[str, str]:
        return dict(self.keywords)

    def keyword_value(self, key: str) -> Optional[str]:
        """
        Return the value of a keyword, or None if it is not set.

        :param key: The keyword name. Case insensitive.
        :type key: str
        :return: The keyword value, or None.
        :rtype: Optional[str]
        """
        return self.keyword_map.get(key.strip().lower())

    @property
    def unicode_keywords(self) -> Dict[str, str]:
        """Legacy keywords that correspond to Unicode locale extension keywords."""
        return {
            key: value
            for key, value in self.keywords
            if len(key) >= 2 and key != ATTRIBUTE_KEY
        }

    @property
    def attributes(self) -> Tuple[str, ...]:
        """The Unicode locale attributes, sorted."""
        value = self.keyword_value(ATTRIBUTE_KEY)
        if not value:
            return ()
        return tuple(sorted({a.lower() for a in SUBTAG_SEPARATORS.split(value) if a}))

    @property
    def extensions(self) -> Dict[str, str]:
        """BCP47 extensions other than the Unicode locale extension, keyed by singleton."""
        return {
            key: value
            for key, value in self.keywords
            if len(key) == 1 and key != UNICODE_LOCALE_EXTENSION
        }

    def replace(self, **changes: Any) -> "LocaleID":
        """
        Return a copy with the given fields replaced.

        :return: The new identifier.
        :rtype: LocaleID
        """
        return dataclasses.replace(self, **changes)

    def with_base(self, other: "LocaleID") -> "LocaleID":
        """
        Return a copy that takes language, script, region and variants from
        ``other`` and keeps this identifier's keywords.

        :param other: Supplies the base fields.
        :type other: LocaleID
        :return: The new identifier.
        :rtype: LocaleID
        """
        return self.replace(
            language=other.language,
            script=other.script,
            region=other.region,
            variants=other.variants,
        )

    def with_keyword(self, key: Optional[str], value: Optional[str]) -> "LocaleID":
        """
        Return a copy with a keyword added, replaced or removed.
        A ``key`` of None removes all keywords; a ``value`` of None removes
        that keyword.

        :param key: The keyword name, or None.
        :type key: Optional[str]
        :param value: The keyword value, or None.
        :type value: Optional[str]
        :raises ValueError: If the key or the value is an empty string.
        :return: The new identifier.
        :rtype: LocaleID
        """
        if key is None:
            return self.replace(keywords=())
        key = key.strip().lower()
        if not key:
            err = "keyword must not be empty"
            raise ValueError(err)
        keywords = self.keyword_map
        if value is None:
            keywords.pop(key, None)
        else:
            value = value.strip()
            if not value:
                err = f"value for keyword {key!r} must not be empty"
                raise ValueError(err)
            keywords[key] = value
        return self.replace(keywords=tuple(keywords.items()))

    def with_default_keyword(self, key: str, value: str) -> "LocaleID":
        """
        Return a copy with the keyword set, unless it already has a value.

        :param key: The keyword name.
        :type key: str
        :param value: The default value.
        :type value: str
        :return: The new identifier (or this one if the keyword was present).
        :rtype: LocaleID
        """
        if self.keyword_value(key) is not None:
            return self
        return self.with_keyword(key, value)

    def fallback(self) -> Optional["LocaleID"]:
        """
        Return the parent in the inheritance chain: the most specific base
        subtag is removed and keywords are kept. The root has no parent.

        :return: The parent identifier, or None for the root.
        :rtype: Optional[LocaleID]
        """
        if self.is_root:
            return None
        if self.variants:
            return self.replace(variants=self.variants[:-1])
        if self.region:
            return self.replace(region="")
        if self.script:
            return self.replace(script="")
        return self.replace(language="")

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<LocaleID "{self.name}">'

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, LocaleID):
            return NotImplemented
        return self.name < other.name


ROOT = LocaleID()
"""The root locale."""

ENGLISH = LocaleID("en")
FRENCH = LocaleID("fr")
GERMAN = LocaleID("de")
ITALIAN = LocaleID("it")
JAPANESE = LocaleID("ja")
KOREAN = LocaleID("ko")
CHINESE = LocaleID("zh")
SIMPLIFIED_CHINESE = LocaleID("zh", "Hans")
TRADITIONAL_CHINESE = LocaleID("zh", "Hant")

FRANCE = LocaleID("fr", region="FR")
GERMANY = LocaleID("de", region="DE")
ITALY = LocaleID("it", region="IT")
JAPAN = LocaleID("ja", region="JP")
KOREA = LocaleID("ko", region="KR")
CHINA = LocaleID("zh", "Hans", "CN")
PRC = CHINA
TAIWAN = LocaleID("zh", "Hant", "TW")
UK = LocaleID("en", region="GB")
US = LocaleID("en", region="US")
CANADA = LocaleID("en", region="CA")
CANADA_FRENCH = LocaleID("fr", region="CA")
