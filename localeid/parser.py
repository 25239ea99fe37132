"""Lenient parsing of legacy and BCP47 locale identifier strings."""

import logging
from typing import Dict, List, Optional, Tuple, Union

from .bcp47 import parse_language_tag, tag_to_locale_id
from .cache import SimpleCache
from .iso_codes import ISO3_LANGUAGES, ISO3_REGIONS, SHORT_LANGUAGES, SHORT_REGIONS
from .locale_id import (
    KEYWORD_ASSIGN,
    KEYWORD_ITEM_SEPARATOR,
    KEYWORD_SEPARATOR,
    LocaleID,
)
from .subtags import (
    SEP,
    SUBTAG_SEPARATORS,
    canonicalize_language,
    canonicalize_region,
    canonicalize_script,
    is_alpha,
    is_numeric,
)

logger = logging.getLogger(__name__)

CODESET_SEPARATOR = "."

_name_cache: SimpleCache[str, LocaleID] = SimpleCache()


def _shortest_segment_length(s: str) -> int:
    lengths = [len(segment) for segment in SUBTAG_SEPARATORS.split(s) if segment]
    return min(lengths, default=len(s))


def looks_like_language_tag(s: str) -> bool:
    """
    Decide whether a string should be read as a BCP47 tag rather than a
    legacy identifier. Legacy identifiers never carry single-character
    segments outside the keyword section, while tags with extensions or
    private use subtags always do.

    :param s: The raw identifier.
    :type s: str
    :return: True if the string should be converted as a language tag.
    :rtype: bool
    """
    return (
        KEYWORD_SEPARATOR not in s
        and CODESET_SEPARATOR not in s
        and _shortest_segment_length(s) == 1
    )


def _parse_keywords(section: str) -> Dict[str, str]:
    keywords: Dict[str, str] = {}
    for item in section.split(KEYWORD_ITEM_SEPARATOR):
        key, sep, value = item.partition(KEYWORD_ASSIGN)
        key, value = key.strip().lower(), value.strip()
        if not sep or not key or not value:
            if item.strip():
                logger.debug("Dropping malformed keyword item %r", item)
            continue
        keywords[key] = value
    return keywords


class LocaleIDParser:
    """
    Positional parser for legacy identifiers of the form
    ``language_Script_REGION_VARIANT@key=value;key2=value2``.

    Underscores and hyphens both separate fields. The first field is the
    language. The next field is a script if it has four letters, then a
    region if it has two letters, three letters or three digits (an empty
    field keeps the region slot empty). Everything after that is variants.
    POSIX names are accepted as well: a ``.codeset`` suffix is dropped and an
    ``@modifier`` without ``=`` is split like the base name, each piece
    becoming a variant.

    :param id_: The identifier to parse.
    :type id_: str
    """

    id_: str
    """The raw identifier."""

    def __init__(self, id_: str) -> None:
        self.id_ = id_ or ""

    def _split(self) -> Tuple[str, Optional[str]]:
        base, sep, rest = self.id_.partition(KEYWORD_SEPARATOR)
        base, _, _ = base.partition(CODESET_SEPARATOR)
        return base, (rest if sep else None)

    def parse(self) -> LocaleID:
        """
        Parse the identifier. Never fails.

        :return: The parsed identifier.
        :rtype: LocaleID
        """
        base, section = self._split()
        keywords: Dict[str, str] = {}
        modifiers: List[str] = []
        if section is not None:
            if KEYWORD_ASSIGN in section:
                keywords = _parse_keywords(section)
            else:
                modifier, _, _ = section.partition(CODESET_SEPARATOR)
                modifier = modifier.replace(KEYWORD_SEPARATOR, SEP)
                modifiers = [
                    piece.strip().upper()
                    for piece in SUBTAG_SEPARATORS.split(modifier)
                    if piece.strip()
                ]

        tokens = SUBTAG_SEPARATORS.split(base)
        language = canonicalize_language(tokens.pop(0).strip())
        language = SHORT_LANGUAGES.get(language, language)

        script = ""
        if tokens and len(tokens[0]) == 4 and is_alpha(tokens[0]):
            script = canonicalize_script(tokens.pop(0))

        region = ""
        if tokens:
            token = tokens[0]
            if not token:
                tokens.pop(0)
            elif (len(token) == 2 and is_alpha(token)) or (
                len(token) == 3 and (is_alpha(token) or is_numeric(token))
            ):
                region = canonicalize_region(tokens.pop(0))
                region = SHORT_REGIONS.get(region, region)

        variants: List[str] = [t.upper() for t in tokens if t]
        variants.extend(modifiers)
        return LocaleID(
            language=language,
            script=script,
            region=region,
            variants=tuple(variants),
            keywords=tuple(keywords.items()),
        )


def _parse_as_tag(s: str) -> Optional[LocaleID]:
    parsed = parse_language_tag(s)
    if parsed.well_formed:
        loc = tag_to_locale_id(parsed)
        if loc.name:
            return loc
    return None


def _parse_uncached(s: str) -> LocaleID:
    if looks_like_language_tag(s):
        loc = _parse_as_tag(s)
        if loc is not None:
            return loc
        logger.debug("Reading %r as a legacy identifier", s)
    loc = LocaleIDParser(s).parse()
    # The result must read back the same way its name would.
    name = loc.name
    if name != s and looks_like_language_tag(name):
        retagged = _parse_as_tag(name)
        if retagged is not None:
            logger.debug("Legacy name %r of %r reads as a language tag", name, s)
            return retagged
    return loc


def parse(s: str) -> LocaleID:
    """
    Parse a legacy identifier or BCP47 tag into a LocaleID.
    The string is read as a tag when it has no ``@`` or ``.`` and its
    shortest segment is one character long, and it is a well-formed tag;
    otherwise the legacy positional rules apply. Never fails.

    :param s: The raw identifier.
    :type s: str
    :return: The parsed identifier.
    :rtype: LocaleID
    """
    if not s:
        return LocaleID()
    return _name_cache.get_or_compute(s, _parse_uncached)


def ensure_locale_id(loc: Union[str, LocaleID]) -> LocaleID:
    if isinstance(loc, LocaleID):
        return loc
    return parse(loc)


def get_name(s: str) -> str:
    """
    Get the normalized legacy name of an identifier string.

    :param s: The raw identifier.
    :type s: str
    :return: The normalized name, e.g. ``get_name("EN-us")`` is ``en_US``.
    :rtype: str
    """
    return parse(s).name


def get_language(s: str) -> str:
    return parse(s).language


def get_script(s: str) -> str:
    return parse(s).script


def get_region(s: str) -> str:
    return parse(s).region


def get_variant(s: str) -> str:
    return parse(s).variant


def get_base_name(s: str) -> str:
    return parse(s).base_name


def get_iso3_language(s: str) -> str:
    """
    Get the ISO 639-2 three-letter code of the language of an identifier.

    :param s: The raw identifier.
    :type s: str
    :return: The three-letter code, or the empty string if there is none.
    :rtype: str
    """
    return ISO3_LANGUAGES.get(parse(s).language, "")


def get_iso3_country(s: str) -> str:
    """
    Get the ISO 3166 alpha-3 code of the region of an identifier.

    :param s: The raw identifier.
    :type s: str
    :return: The three-letter code, or the empty string if there is none.
    :rtype: str
    """
    return ISO3_REGIONS.get(parse(s).region, "")


def get_keywords(s: str) -> List[str]:
    """
    Get the keyword names of an identifier in sorted order.

    :param s: The raw identifier.
    :type s: str
    :return: The sorted keyword names.
    :rtype: List[str]
    """
    return [key for key, _ in parse(s).keywords]


def get_keyword_value(s: str, key: str) -> Optional[str]:
    return parse(s).keyword_value(key)


def set_keyword_value(s: str, key: Optional[str], value: Optional[str]) -> str:
    """
    Return the name of an identifier with a keyword added, replaced or
    removed. See :meth:`LocaleID.with_keyword`.

    :param s: The raw identifier.
    :type s: str
    :param key: The keyword name, or None to remove all keywords.
    :type key: Optional[str]
    :param value: The keyword value, or None to remove the keyword.
    :type value: Optional[str]
    :raises ValueError: If the key or value is an empty string.
    :return: The updated name.
    :rtype: str
    """
    return parse(s).with_keyword(key, value).name


def clear_name_cache() -> None:
    _name_cache.clear()
