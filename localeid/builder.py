"""Strict, field-validating construction of locale identifiers."""

import logging
from typing import Dict, List, Optional, Set

from .bcp47 import (
    TYPELESS_VALUE,
    assemble_locale_id,
    format_unicode_extension,
    parse_language_tag,
    parse_unicode_extension,
)
from .data import Lookup
from .exceptions import IllformedLocaleError
from .keytype import KeyTypeMapper, get_mapper
from .locale_id import ATTRIBUTE_KEY, LocaleID
from .subtags import (
    PRIVATE_USE,
    SUBTAG_SEPARATORS,
    UNDETERMINED,
    UNICODE_LOCALE_EXTENSION,
    canonicalize_language,
    canonicalize_region,
    canonicalize_script,
    is_alphanumeric,
    is_extension_subtag,
    is_language,
    is_private_use_subtag,
    is_region,
    is_script,
    is_unicode_locale_attribute,
    is_unicode_locale_key,
    is_unicode_locale_type,
    is_variant,
)

logger = logging.getLogger(__name__)


def _first_invalid(value: str, predicate) -> Optional[int]:
    """
    Find the first subtag of ``value`` that fails ``predicate``.

    :return: The character offset of the subtag, or None if all pass.
    :rtype: Optional[int]
    """
    offset = 0
    for subtag in SUBTAG_SEPARATORS.split(value):
        if not predicate(subtag):
            return offset
        offset += len(subtag) + 1
    return None


class LocaleBuilder:
    """
    Builds a LocaleID from fields that are checked against the BCP47
    grammar as they are set. Every setter raises
    :class:`IllformedLocaleError` on ill-formed input, leaving the builder
    unchanged, and returns the builder so calls can be chained::

        loc = LocaleBuilder().set_language("de").set_region("at").build()

    Setting a field to None or the empty string removes it.

    :param lookup: The key/type table used to map Unicode locale keywords
                   to legacy keywords; defaults to the bundled one.
    :type lookup: Optional[Lookup]
    """

    _mapper: KeyTypeMapper
    """Maps legacy keywords to Unicode locale keywords and back."""
    _language: str
    """Lowercase language subtag, empty if unset."""
    _script: str
    """Title-cased script subtag, empty if unset."""
    _region: str
    """Uppercase region subtag, empty if unset."""
    _variants: List[str]
    """Uppercase variant subtags in order."""
    _extensions: Dict[str, str]
    """Extension values other than ``u`` and ``x``, keyed by singleton."""
    _private_use: str
    """Private use subtags joined with ``-``, without the ``x`` singleton."""
    _attributes: Set[str]
    """Lowercase Unicode locale attributes."""
    _keywords: Dict[str, str]
    """Unicode locale keywords, BCP47 key to type."""

    def __init__(self, lookup: Optional[Lookup] = None) -> None:
        self._mapper = get_mapper(lookup)
        self.clear()

    def clear(self) -> "LocaleBuilder":
        """Reset the builder to its initial empty state."""
        self._language = ""
        self._script = ""
        self._region = ""
        self._variants = []
        return self.clear_extensions()

    def clear_extensions(self) -> "LocaleBuilder":
        """Remove all extensions, Unicode locale keywords and attributes included."""
        self._extensions = {}
        self._private_use = ""
        self._attributes = set()
        self._keywords = {}
        return self

    def set_locale(self, loc: LocaleID) -> "LocaleBuilder":
        """
        Reset the builder to the fields of an existing identifier.
        Legacy keywords are converted to Unicode locale keywords; those
        without a language tag form are dropped.

        :param loc: The identifier.
        :type loc: LocaleID
        :raises IllformedLocaleError: If a base field of ``loc`` is ill-formed.
        :return: The builder.
        :rtype: LocaleBuilder
        """
        staged = LocaleBuilder()
        staged._mapper = self._mapper
        staged.set_language(loc.language)
        staged.set_script(loc.script)
        staged.set_region(loc.region)
        staged.set_variant(loc.variant)
        for key, value in loc.keywords:
            if key == ATTRIBUTE_KEY:
                for attribute in SUBTAG_SEPARATORS.split(value):
                    if is_unicode_locale_attribute(attribute):
                        staged._attributes.add(attribute.lower())
            elif len(key) >= 2:
                bcp_key = self._mapper.ldml_key_to_bcp47(key)
                bcp_type = self._mapper.ldml_type_to_bcp47(key, value)
                if bcp_key is None or bcp_type is None:
                    logger.debug("Dropping keyword %s=%s without a tag form", key, value)
                    continue
                staged._keywords[bcp_key] = "" if bcp_type == TYPELESS_VALUE else bcp_type.lower()
            elif key != UNICODE_LOCALE_EXTENSION:
                try:
                    staged.set_extension(key, value)
                except IllformedLocaleError as e:
                    logger.debug("Dropping extension %s=%s: %s", key, value, e)
        self.__dict__.update(staged.__dict__)
        return self

    def set_language_tag(self, tag: str) -> "LocaleBuilder":
        """
        Reset the builder to the fields of a BCP47 language tag.

        :param tag: The language tag; None or empty clears the builder.
        :type tag: str
        :raises IllformedLocaleError: If the tag is ill-formed anywhere.
        :return: The builder.
        :rtype: LocaleBuilder
        """
        if not tag:
            return self.clear()
        parsed = parse_language_tag(tag)
        if not parsed.well_formed:
            raise IllformedLocaleError(
                parsed.error_message, "tag", parsed.error_index or 0, tag
            )
        self.clear()
        language = parsed.effective_language
        self._language = "" if language.lower() == UNDETERMINED else canonicalize_language(language)
        self._script = canonicalize_script(parsed.script) if parsed.script else ""
        self._region = canonicalize_region(parsed.region)
        self._variants = [v.upper() for v in parsed.variants]
        for singleton, value in parsed.extensions.items():
            if singleton == UNICODE_LOCALE_EXTENSION:
                self._set_unicode_extension(value)
            else:
                self._extensions[singleton] = value.lower()
        self._private_use = parsed.private_use.lower()
        return self

    def set_language(self, language: Optional[str]) -> "LocaleBuilder":
        """
        :param language: Two to eight letters, or None/empty to remove.
        :type language: Optional[str]
        :raises IllformedLocaleError: If the language is ill-formed.
        """
        if not language:
            self._language = ""
        elif not is_language(language):
            err = f"Ill-formed language: {language}"
            raise IllformedLocaleError(err, "language", 0, language)
        else:
            self._language = canonicalize_language(language)
        return self

    def set_script(self, script: Optional[str]) -> "LocaleBuilder":
        """
        :param script: Four letters, or None/empty to remove.
        :type script: Optional[str]
        :raises IllformedLocaleError: If the script is ill-formed.
        """
        if not script:
            self._script = ""
        elif not is_script(script):
            err = f"Ill-formed script: {script}"
            raise IllformedLocaleError(err, "script", 0, script)
        else:
            self._script = canonicalize_script(script)
        return self

    def set_region(self, region: Optional[str]) -> "LocaleBuilder":
        """
        :param region: Two letters or three digits, or None/empty to remove.
        :type region: Optional[str]
        :raises IllformedLocaleError: If the region is ill-formed.
        """
        if not region:
            self._region = ""
        elif not is_region(region):
            err = f"Ill-formed region: {region}"
            raise IllformedLocaleError(err, "region", 0, region)
        else:
            self._region = canonicalize_region(region)
        return self

    def set_variant(self, variant: Optional[str]) -> "LocaleBuilder":
        """
        Set the variants, separated by ``-`` or ``_``.

        :param variant: The variant subtags, or None/empty to remove them.
        :type variant: Optional[str]
        :raises IllformedLocaleError: If a variant subtag is ill-formed; the
                                      index points at that subtag.
        :return: The builder.
        :rtype: LocaleBuilder
        """
        if not variant:
            self._variants = []
            return self
        index = _first_invalid(variant, is_variant)
        if index is not None:
            err = f"Ill-formed variant: {variant}"
            raise IllformedLocaleError(err, "variant", index, variant)
        self._variants = [v.upper() for v in SUBTAG_SEPARATORS.split(variant)]
        return self

    def _set_unicode_extension(self, value: str) -> None:
        attributes, keywords = parse_unicode_extension(value)
        self._attributes = set(attributes)
        self._keywords = keywords

    def set_extension(self, key: str, value: Optional[str]) -> "LocaleBuilder":
        """
        Set the extension for a singleton. The ``u`` extension replaces all
        Unicode locale keywords and attributes; ``x`` sets the private use
        subtags.

        :param key: The singleton, a single alphanumeric character.
        :type key: str
        :param value: The extension subtags, or None/empty to remove.
        :type value: Optional[str]
        :raises IllformedLocaleError: If the key or a subtag is ill-formed.
        :return: The builder.
        :rtype: LocaleBuilder
        """
        if not key or len(key) != 1 or not is_alphanumeric(key):
            err = f"Ill-formed extension key: {key}"
            raise IllformedLocaleError(err, "extension", 0, key)
        key = key.lower()
        if not value:
            if key == UNICODE_LOCALE_EXTENSION:
                self._attributes = set()
                self._keywords = {}
            elif key == PRIVATE_USE:
                self._private_use = ""
            else:
                self._extensions.pop(key, None)
            return self

        predicate = is_private_use_subtag if key == PRIVATE_USE else is_extension_subtag
        index = _first_invalid(value, predicate)
        if index is not None:
            err = f"Ill-formed extension value: {value}"
            raise IllformedLocaleError(err, "extension", index, value)
        value = "-".join(SUBTAG_SEPARATORS.split(value.lower()))
        if key == UNICODE_LOCALE_EXTENSION:
            self._set_unicode_extension(value)
        elif key == PRIVATE_USE:
            self._private_use = value
        else:
            self._extensions[key] = value
        return self

    def set_unicode_locale_keyword(self, key: str, type_: Optional[str]) -> "LocaleBuilder":
        """
        Set a Unicode locale keyword such as ``co`` / ``phonebk``.

        :param key: The two-character key.
        :type key: str
        :param type_: The type; None removes the keyword and the empty
                      string makes it typeless.
        :type type_: Optional[str]
        :raises IllformedLocaleError: If the key or the type is ill-formed.
        :return: The builder.
        :rtype: LocaleBuilder
        """
        if not key or not is_unicode_locale_key(key):
            err = f"Ill-formed Unicode locale keyword key: {key}"
            raise IllformedLocaleError(err, "keyword", 0, key)
        key = key.lower()
        if type_ is None:
            self._keywords.pop(key, None)
            return self
        if type_:
            index = _first_invalid(type_, is_unicode_locale_type)
            if index is not None:
                err = f"Ill-formed Unicode locale keyword type: {type_}"
                raise IllformedLocaleError(err, "keyword", index, type_)
        self._keywords[key] = "-".join(SUBTAG_SEPARATORS.split(type_.lower())) if type_ else ""
        return self

    def _check_attribute(self, attribute: Optional[str]) -> str:
        if not attribute or not is_unicode_locale_attribute(attribute):
            err = f"Ill-formed Unicode locale attribute: {attribute}"
            raise IllformedLocaleError(err, "attribute", 0, attribute)
        return attribute.lower()

    def add_unicode_locale_attribute(self, attribute: str) -> "LocaleBuilder":
        self._attributes.add(self._check_attribute(attribute))
        return self

    def remove_unicode_locale_attribute(self, attribute: str) -> "LocaleBuilder":
        self._attributes.discard(self._check_attribute(attribute))
        return self

    def build(self) -> LocaleID:
        """
        Assemble the identifier from the fields set so far.

        :return: The identifier.
        :rtype: LocaleID
        """
        extensions = dict(self._extensions)
        if self._attributes or self._keywords:
            extensions[UNICODE_LOCALE_EXTENSION] = format_unicode_extension(
                self._attributes, self._keywords
            )
        return assemble_locale_id(
            self._language,
            self._script,
            self._region,
            self._variants,
            extensions,
            self._private_use,
            self._mapper,
        )
