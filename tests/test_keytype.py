"""Tests for the keyword key/type mapping."""

from typing import Optional

import pytest


@pytest.mark.parametrize(  # type: ignore[misc]
    "key, expected",
    [
        ("collation", "co"),
        ("Calendar", "ca"),
        ("colnumeric", "kn"),
        ("xx", "xx"),
        ("foobar", None),
    ],
)
def test_ldml_key_to_bcp47(key: str, expected: Optional[str]) -> None:
    """
    Test mapping legacy keyword keys to Unicode locale keys.

    :param key: The legacy key.
    :param expected: The expected Unicode locale key, or None.
    :raises AssertionError: If the mapping differs.
    """
    from localeid.keytype import get_mapper

    assert get_mapper().ldml_key_to_bcp47(key) == expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "key, type_, expected",
    [
        ("collation", "phonebook", "phonebk"),
        ("calendar", "gregorian", "gregory"),
        ("calendar", "gregory", "gregory"),
        ("colstrength", "primary", "level1"),
        ("timezone", "America/New_York", "usnyc"),
        ("timezone", "UTC", "utc"),
        ("timezone", "Asia/Calcutta", "inccu"),
        ("currency", "EUR", "EUR"),
        ("collation", "not valid", None),
    ],
)
def test_ldml_type_to_bcp47(key: str, type_: str, expected: Optional[str]) -> None:
    """
    Test mapping legacy keyword types, including aliases and pass-through.

    :param key: The legacy key.
    :param type_: The legacy type.
    :param expected: The expected Unicode locale type, or None.
    :raises AssertionError: If the mapping differs.
    """
    from localeid.keytype import get_mapper

    assert get_mapper().ldml_type_to_bcp47(key, type_) == expected


def test_bcp47_to_ldml() -> None:
    """
    Test the reverse direction for keys and types.

    :raises AssertionError: If a reverse mapping differs.
    """
    from localeid.keytype import get_mapper

    mapper = get_mapper()
    assert mapper.bcp47_key_to_ldml("CO") == "collation"
    assert mapper.bcp47_key_to_ldml("zz") == "zz"
    assert mapper.bcp47_type_to_ldml("collation", "PHONEBK") == "phonebook"
    assert mapper.bcp47_type_to_ldml("timezone", "uslax") == "America/Los_Angeles"
    assert mapper.bcp47_type_to_ldml("colnumeric", "true") == "yes"
    assert mapper.bcp47_type_to_ldml("currency", "eur") == "eur"


def test_alias_requires_type_table() -> None:
    """
    Test that type aliases are only consulted for keys that have a type table.

    :raises AssertionError: If an alias is applied to a key without types.
    """
    from localeid.data import flatten_key_type_data, mapping_lookup
    from localeid.keytype import KeyTypeMapper

    mapper = KeyTypeMapper(
        mapping_lookup(
            flatten_key_type_data(
                {
                    "keyMap": {"collation": "co", "numbers": "nu"},
                    "typeMap": {"collation": {"traditional": "trad"}},
                    "typeAlias": {
                        "collation": {"old": "traditional"},
                        "numbers": {"old": "traditional"},
                    },
                }
            )
        )
    )
    assert mapper.ldml_type_to_bcp47("collation", "old") == "trad"
    assert mapper.ldml_type_to_bcp47("numbers", "old") == "old"


def test_shared_default_mapper() -> None:
    from localeid.keytype import get_mapper

    assert get_mapper() is get_mapper()
    assert get_mapper(lambda key: None) is not get_mapper()
