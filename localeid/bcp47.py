"""Conversion between LocaleID and IETF BCP47 language tags."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .data import Lookup
from .keytype import KeyTypeMapper, get_mapper
from .locale_id import ATTRIBUTE_KEY, LocaleID
from .subtags import (
    PRIVATE_USE,
    SEP,
    SUBTAG_SEPARATORS,
    UNDETERMINED,
    UNICODE_LOCALE_EXTENSION,
    canonicalize_extension,
    canonicalize_language,
    canonicalize_region,
    canonicalize_script,
    canonicalize_variant,
    is_extension_singleton,
    is_extension_subtag,
    is_extlang,
    is_language,
    is_private_use_prefix,
    is_private_use_subtag,
    is_region,
    is_script,
    is_unicode_locale_attribute,
    is_unicode_locale_key,
    is_unicode_locale_type,
    is_variant,
)

logger = logging.getLogger(__name__)

POSIX_VARIANT = "POSIX"
VARIANT_KEY = "va"
POSIX_TYPE = "posix"
TYPELESS_VALUE = "true"
LEGACY_VARIANT_PREFIX = "lvariant"

# Grandfathered and irregular tags, matched case-insensitively on the whole tag.
GRANDFATHERED: Mapping[str, str] = MappingProxyType({
    "art-lojban": "jbo",
    "cel-gaulish": "xtg-x-cel-gaulish",
    "en-gb-oed": "en-GB-x-oed",
    "i-ami": "ami",
    "i-bnn": "bnn",
    "i-default": "en-x-i-default",
    "i-enochian": "und-x-i-enochian",
    "i-hak": "hak",
    "i-klingon": "tlh",
    "i-lux": "lb",
    "i-mingo": "see-x-i-mingo",
    "i-navajo": "nv",
    "i-pwn": "pwn",
    "i-tao": "tao",
    "i-tay": "tay",
    "i-tsu": "tsu",
    "no-bok": "nb",
    "no-nyn": "nn",
    "sgn-be-fr": "sfb",
    "sgn-be-nl": "vgt",
    "sgn-ch-de": "sgg",
    "zh-guoyu": "cmn",
    "zh-hakka": "hak",
    "zh-min": "nan-x-zh-min",
    "zh-min-nan": "nan",
    "zh-xiang": "hsn",
})


@dataclass
class ParsedLanguageTag:
    """
    The subtags of a language tag, as far as it is well-formed.
    Parsing stops at the first ill-formed subtag; ``error_index`` then holds
    its character offset in the (grandfather-mapped) tag.
    """

    tag: str = ""
    language: str = ""
    extlangs: List[str] = field(default_factory=list)
    script: str = ""
    region: str = ""
    variants: List[str] = field(default_factory=list)
    extensions: Dict[str, str] = field(default_factory=dict)
    """Extension values keyed by singleton, subtags joined with ``-``."""
    private_use: str = ""
    error_index: Optional[int] = None
    error_message: str = ""

    @property
    def well_formed(self) -> bool:
        return self.error_index is None

    @property
    def effective_language(self) -> str:
        """The first extended language subtag if there is one, else the language."""
        if self.extlangs:
            return self.extlangs[0]
        return self.language


class _SubtagCursor:
    """Walks the subtags of a tag while tracking character offsets."""

    subtags: List[str]
    offsets: List[int]
    """Character offset of each subtag in the tag."""
    position: int
    """Index of the current subtag."""

    def __init__(self, tag: str) -> None:
        self.subtags = SUBTAG_SEPARATORS.split(tag)
        self.offsets = []
        offset = 0
        for subtag in self.subtags:
            self.offsets.append(offset)
            offset += len(subtag) + 1
        self.position = 0

    @property
    def done(self) -> bool:
        return self.position >= len(self.subtags)

    @property
    def current(self) -> str:
        return "" if self.done else self.subtags[self.position]

    @property
    def offset(self) -> int:
        if self.done:
            return self.offsets[-1] + len(self.subtags[-1])
        return self.offsets[self.position]

    def next(self) -> str:
        subtag = self.current
        self.position += 1
        return subtag


def _fail(parsed: ParsedLanguageTag, index: int, message: str) -> ParsedLanguageTag:
    parsed.error_index = index
    parsed.error_message = message
    return parsed


def parse_language_tag(tag: str) -> ParsedLanguageTag:
    """
    Parse a tag per the BCP47 ``Language-Tag`` production.
    Grandfathered tags are replaced first. Both ``-`` and ``_`` separate
    subtags. The result holds everything up to the first ill-formed subtag.

    :param tag: The language tag.
    :type tag: str
    :return: The parsed subtags, with error details if the tag is ill-formed.
    :rtype: ParsedLanguageTag
    """
    replacement = GRANDFATHERED.get(tag.replace("_", SEP).lower())
    if replacement is not None:
        logger.debug("Replacing grandfathered tag %r with %r", tag, replacement)
        tag = replacement
    parsed = ParsedLanguageTag(tag=tag)
    if not tag:
        return _fail(parsed, 0, "Empty language tag")
    cursor = _SubtagCursor(tag)

    if is_language(cursor.current):
        parsed.language = cursor.next()
        if len(parsed.language) <= 3:
            while len(parsed.extlangs) < 3 and is_extlang(cursor.current):
                parsed.extlangs.append(cursor.next())
        if is_script(cursor.current):
            parsed.script = cursor.next()
        if is_region(cursor.current):
            parsed.region = cursor.next()
        while is_variant(cursor.current):
            parsed.variants.append(cursor.next())

        while is_extension_singleton(cursor.current):
            start = cursor.offset
            singleton = cursor.next().lower()
            if singleton in parsed.extensions:
                return _fail(parsed, start, f"Duplicate extension: {singleton}")
            subtags = []
            while is_extension_subtag(cursor.current):
                subtags.append(cursor.next())
            if not subtags:
                return _fail(parsed, start, f"Incomplete extension: {singleton}")
            parsed.extensions[singleton] = SEP.join(subtags)
    elif not is_private_use_prefix(cursor.current):
        return _fail(parsed, 0, f"Invalid language subtag: {cursor.current}")

    if is_private_use_prefix(cursor.current):
        start = cursor.offset
        cursor.next()
        subtags = []
        while is_private_use_subtag(cursor.current):
            subtags.append(cursor.next())
        if not subtags:
            return _fail(parsed, start, "Incomplete privateuse")
        parsed.private_use = SEP.join(subtags)

    if not cursor.done:
        return _fail(parsed, cursor.offset, f"Invalid subtag: {cursor.current}")
    return parsed


def parse_unicode_extension(value: str) -> Tuple[List[str], Dict[str, str]]:
    """
    Split a Unicode locale extension value into attributes and keywords.
    Attributes come first; each two-character key takes the following
    longer subtags as its type. A repeated key keeps its first type.

    :param value: The extension value, e.g. ``foo-ca-islamic-civil-kn``.
    :type value: str
    :return: The attributes in order of appearance, and the keys mapped to
             their types (empty for typeless keys).
    :rtype: Tuple[List[str], Dict[str, str]]
    """
    attributes: List[str] = []
    keywords: Dict[str, str] = {}
    key: Optional[str] = None
    types: List[str] = []
    for subtag in SUBTAG_SEPARATORS.split(value.lower()):
        if not subtag:
            continue
        if is_unicode_locale_key(subtag):
            if key is not None:
                keywords.setdefault(key, SEP.join(types))
            key, types = subtag, []
        elif key is None:
            if subtag not in attributes:
                attributes.append(subtag)
        else:
            types.append(subtag)
    if key is not None:
        keywords.setdefault(key, SEP.join(types))
    return attributes, keywords


def split_legacy_variants(private_use: str) -> Tuple[str, List[str]]:
    """
    Separate legacy variants carried in private use subtags after
    ``lvariant`` from the rest of the private use value.

    :param private_use: The private use subtags joined with ``-``.
    :type private_use: str
    :return: The remaining private use value and the legacy variants.
    :rtype: Tuple[str, List[str]]
    """
    subtags = [s for s in SUBTAG_SEPARATORS.split(private_use) if s]
    lowered = [s.lower() for s in subtags]
    if LEGACY_VARIANT_PREFIX not in lowered:
        return private_use, []
    index = lowered.index(LEGACY_VARIANT_PREFIX)
    variants = subtags[index + 1:]
    if not variants:
        return private_use, []
    return SEP.join(subtags[:index]), variants


def format_unicode_extension(attributes: Iterable[str], keywords: Mapping[str, str]) -> str:
    """Serialize sorted attributes followed by keys in sorted order."""
    parts = sorted(attributes)
    for key in sorted(keywords):
        parts.append(key)
        if keywords[key]:
            parts.append(keywords[key])
    return SEP.join(parts)


def assemble_locale_id(
    language: str,
    script: str = "",
    region: str = "",
    variants: Sequence[str] = (),
    extensions: Optional[Mapping[str, str]] = None,
    private_use: str = "",
    mapper: Optional[KeyTypeMapper] = None,
) -> LocaleID:
    """
    Build a LocaleID from language tag fields.
    Unicode locale keywords are converted to legacy keywords through the
    key/type mapping, typeless keys become ``true``, attributes are stored
    under the ``attribute`` keyword and other extensions under their
    singleton. Private use subtags after ``lvariant`` are legacy variants.
    ``va-posix`` becomes the ``POSIX`` variant when there is no other variant.

    :param language: The language subtag; ``und`` means no language.
    :type language: str
    :param script: The script subtag.
    :type script: str
    :param region: The region subtag.
    :type region: str
    :param variants: The variant subtags.
    :type variants: Sequence[str]
    :param extensions: Extension values keyed by singleton, ``u`` included.
    :type extensions: Optional[Mapping[str, str]]
    :param private_use: The private use subtags joined with ``-``.
    :type private_use: str
    :param mapper: The key/type mapper; defaults to the bundled table.
    :type mapper: Optional[KeyTypeMapper]
    :return: The identifier.
    :rtype: LocaleID
    """
    mapper = mapper or get_mapper()
    language = canonicalize_language(language)
    if language == UNDETERMINED:
        language = ""
    variant_list = [v.upper() for v in variants if v]
    keywords: Dict[str, str] = {}
    if private_use:
        private_use, legacy_variants = split_legacy_variants(private_use)
        variant_list.extend(v.upper() for v in legacy_variants)

    for singleton, value in sorted((extensions or {}).items()):
        singleton = singleton.lower()
        if singleton != UNICODE_LOCALE_EXTENSION:
            keywords[singleton] = canonicalize_extension(value)
            continue
        attributes, unicode_keywords = parse_unicode_extension(value)
        for bcp_key, bcp_type in unicode_keywords.items():
            key = mapper.bcp47_key_to_ldml(bcp_key)
            type_ = mapper.bcp47_type_to_ldml(key, bcp_type or TYPELESS_VALUE)
            if key == VARIANT_KEY and type_ == POSIX_TYPE and not variant_list:
                variant_list.append(POSIX_VARIANT)
            else:
                keywords[key] = type_
        if attributes:
            keywords[ATTRIBUTE_KEY] = SEP.join(sorted(attributes))

    if private_use:
        keywords[PRIVATE_USE] = canonicalize_extension(private_use)

    return LocaleID(
        language=language,
        script=canonicalize_script(script) if script else "",
        region=canonicalize_region(region),
        variants=tuple(variant_list),
        keywords=tuple(keywords.items()),
    )


def tag_to_locale_id(
    parsed: ParsedLanguageTag, mapper: Optional[KeyTypeMapper] = None
) -> LocaleID:
    return assemble_locale_id(
        parsed.effective_language,
        parsed.script,
        parsed.region,
        parsed.variants,
        parsed.extensions,
        parsed.private_use,
        mapper,
    )


def from_language_tag(tag: str, lookup: Optional[Lookup] = None) -> LocaleID:
    """
    Convert a BCP47 language tag to a LocaleID.
    Ill-formed trailing subtags are dropped; this never fails.

    :param tag: The language tag, e.g. ``de-DE-u-co-phonebk``.
    :type tag: str
    :param lookup: The key/type table; defaults to the bundled one.
    :type lookup: Optional[Lookup]
    :return: The identifier, e.g. ``de_DE@collation=phonebook``.
    :rtype: LocaleID
    """
    parsed = parse_language_tag(tag)
    if not parsed.well_formed:
        logger.debug(
            "Truncating language tag %r at index %d: %s",
            tag,
            parsed.error_index,
            parsed.error_message,
        )
    return tag_to_locale_id(parsed, get_mapper(lookup))


def _valid_prefix(subtags: Iterable[str], predicate) -> List[str]:
    valid = []
    for subtag in subtags:
        if not predicate(subtag):
            break
        valid.append(subtag)
    return valid


def to_language_tag(loc: Union[str, LocaleID], lookup: Optional[Lookup] = None) -> str:
    """
    Convert a LocaleID to a BCP47 language tag.

    An empty or ill-formed language becomes ``und``; an ill-formed script
    or region is left out. Variants from the first ill-formed one on are
    written as private use subtags after ``lvariant``.
    A ``POSIX`` variant is written as the ``va-posix`` Unicode locale keyword.
    Keywords that cannot be expressed in a tag are dropped.

    :param loc: The identifier, or a string to parse leniently.
    :type loc: Union[str, LocaleID]
    :param lookup: The key/type table; defaults to the bundled one.
    :type lookup: Optional[Lookup]
    :return: The language tag, e.g. ``en-US-u-va-posix``.
    :rtype: str
    """
    if isinstance(loc, str):
        from .parser import parse

        loc = parse(loc)
    mapper = get_mapper(lookup)

    variant = loc.variant
    keywords = loc.keyword_map
    if variant.upper() == POSIX_VARIANT:
        variant = ""
        if VARIANT_KEY not in keywords:
            keywords[VARIANT_KEY] = POSIX_TYPE

    parts = [canonicalize_language(loc.language) if is_language(loc.language) else UNDETERMINED]
    if is_script(loc.script):
        parts.append(canonicalize_script(loc.script))
    if is_region(loc.region):
        parts.append(canonicalize_region(loc.region))
    variants = [v for v in SUBTAG_SEPARATORS.split(variant) if v]
    valid_variants = _valid_prefix(variants, is_variant)
    legacy_variants = _valid_prefix(variants[len(valid_variants):], is_private_use_subtag)
    if len(valid_variants) + len(legacy_variants) < len(variants):
        logger.debug("Dropping ill-formed variants of %r", loc.name)
    parts.extend(canonicalize_variant(v) for v in valid_variants)

    attributes: List[str] = []
    unicode_keywords: Dict[str, str] = {}
    extensions: Dict[str, str] = {}
    private_use = ""
    for key, value in keywords.items():
        if key == ATTRIBUTE_KEY:
            attributes = sorted({
                a.lower() for a in SUBTAG_SEPARATORS.split(value)
                if is_unicode_locale_attribute(a)
            })
        elif len(key) >= 2:
            bcp_key = mapper.ldml_key_to_bcp47(key)
            bcp_type = mapper.ldml_type_to_bcp47(key, value)
            if bcp_key is None or bcp_type is None or not is_unicode_locale_type(bcp_type):
                logger.debug("Dropping keyword %s=%s without a tag form", key, value)
                continue
            bcp_type = bcp_type.lower()
            unicode_keywords[bcp_key] = "" if bcp_type == TYPELESS_VALUE else bcp_type
        elif key == PRIVATE_USE:
            private_use = SEP.join(
                _valid_prefix(SUBTAG_SEPARATORS.split(value), is_private_use_subtag)
            ).lower()
        elif is_extension_singleton(key) and key != UNICODE_LOCALE_EXTENSION:
            subtags = _valid_prefix(SUBTAG_SEPARATORS.split(value), is_extension_subtag)
            if subtags:
                extensions[key] = SEP.join(subtags).lower()

    if attributes or unicode_keywords:
        extensions[UNICODE_LOCALE_EXTENSION] = format_unicode_extension(
            attributes, unicode_keywords
        )
    if legacy_variants:
        legacy = [LEGACY_VARIANT_PREFIX] + [v.lower() for v in legacy_variants]
        private_use = SEP.join([private_use] + legacy if private_use else legacy)
    for singleton in sorted(extensions):
        parts.extend((singleton, extensions[singleton]))
    if private_use:
        parts.extend((PRIVATE_USE, private_use))
    return SEP.join(parts)
