"""Mapping between legacy keyword keys/types and BCP47 Unicode locale keys/types."""

import logging
from typing import Optional

from .data import (
    BCP_KEY_MAP,
    BCP_TYPE_MAP,
    KEY_MAP,
    TYPE_ALIAS,
    TYPE_MAP,
    Lookup,
    default_key_type_data,
    table_key,
)
from .subtags import is_unicode_locale_key, is_unicode_locale_type

logger = logging.getLogger(__name__)

TIMEZONE_KEY = "timezone"


def _timezone_to_bcp(value: str) -> str:
    return value.replace("/", ":")


def _timezone_from_bcp(value: str) -> str:
    return value.replace(":", "/")


class KeyTypeMapper:
    """
    Converts keyword keys and types between the legacy form
    (``collation=phonebook``) and the Unicode locale extension form
    (``co-phonebk``).

    Keys are case insensitive and normalized to lowercase; legacy types are
    case sensitive. Time zone types need a ``/`` to ``:`` substitution since
    ``/`` cannot be stored in a table key path and ``:`` cannot appear in a
    BCP47 subtag.

    :param lookup: The key/type table; defaults to the bundled one.
    :type lookup: Optional[Lookup]
    """

    _lookup: Optional[Lookup]
    """The explicit lookup, or None to use the process-wide table."""

    def __init__(self, lookup: Optional[Lookup] = None) -> None:
        self._lookup = lookup

    @property
    def lookup(self) -> Lookup:
        if self._lookup is not None:
            return self._lookup
        return default_key_type_data()

    def ldml_key_to_bcp47(self, key: str) -> Optional[str]:
        """
        Map a legacy keyword key to a Unicode locale key.
        Unmapped keys that already have the two-character key shape are
        returned as they are.

        :param key: The legacy key, e.g. ``collation``.
        :type key: str
        :return: The Unicode locale key, e.g. ``co``, or None if the key
                 cannot be expressed in a language tag.
        :rtype: Optional[str]
        """
        key = key.lower()
        bcp_key = self.lookup(table_key(KEY_MAP, key))
        if bcp_key is not None:
            return bcp_key
        if is_unicode_locale_key(key):
            return key
        return None

    def bcp47_key_to_ldml(self, bcp_key: str) -> str:
        """
        Map a Unicode locale key back to its legacy keyword key.

        :param bcp_key: The Unicode locale key, e.g. ``co``.
        :type bcp_key: str
        :return: The legacy key, or the lowercased input when unmapped.
        :rtype: str
        """
        bcp_key = bcp_key.lower()
        key = self.lookup(table_key(BCP_KEY_MAP, bcp_key))
        return bcp_key if key is None else key

    def ldml_type_to_bcp47(self, key: str, type_: str) -> Optional[str]:
        """
        Map a legacy keyword type to a Unicode locale type.
        Deprecated spellings are resolved through the type alias table
        first. Unmapped types that satisfy the 3 to 8 alphanumeric subtag
        shape pass through.

        :param key: The legacy key the type belongs to.
        :type key: str
        :param type_: The legacy type, e.g. ``phonebook``.
        :type type_: str
        :return: The Unicode locale type, or None if it cannot be expressed.
        :rtype: Optional[str]
        """
        key = key.lower()
        search_type = _timezone_to_bcp(type_) if key == TIMEZONE_KEY else type_
        bcp_type = self.lookup(table_key(TYPE_MAP, key, search_type))
        if bcp_type is None and self.lookup(table_key(TYPE_MAP, key)) is not None:
            alias = self.lookup(table_key(TYPE_ALIAS, key, search_type))
            if alias is not None:
                logger.debug("Resolved %s type alias %r to %r", key, type_, alias)
                bcp_type = self.lookup(table_key(TYPE_MAP, key, _timezone_to_bcp(alias)))
        if bcp_type is not None:
            return bcp_type
        if is_unicode_locale_type(type_):
            return type_
        return None

    def bcp47_type_to_ldml(self, key: str, bcp_type: str) -> str:
        """
        Map a Unicode locale type back to the legacy type.

        :param key: The legacy key the type belongs to.
        :type key: str
        :param bcp_type: The Unicode locale type, e.g. ``phonebk``.
        :type bcp_type: str
        :return: The legacy type, or the lowercased input when unmapped.
        :rtype: str
        """
        key = key.lower()
        bcp_type = bcp_type.lower()
        type_ = self.lookup(table_key(BCP_TYPE_MAP, key, bcp_type))
        if type_ is None:
            return bcp_type
        if key == TIMEZONE_KEY:
            return _timezone_from_bcp(type_)
        return type_


_default_mapper = KeyTypeMapper()


def get_mapper(lookup: Optional[Lookup] = None) -> KeyTypeMapper:
    """
    Return a mapper over ``lookup``, or the shared mapper over the default table.

    :param lookup: An explicit key/type table.
    :type lookup: Optional[Lookup]
    :return: The mapper.
    :rtype: KeyTypeMapper
    """
    if lookup is None:
        return _default_mapper
    return KeyTypeMapper(lookup)
