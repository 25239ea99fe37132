"""Tests for lenient identifier parsing."""

from typing import Tuple

import pytest


@pytest.mark.parametrize(  # type: ignore[misc]
    "raw, expected",
    [
        ("en_US", "en_US"),
        ("EN-us", "en_US"),
        ("zh_hant_tw", "zh_Hant_TW"),
        ("de__PHONEBOOK", "de__PHONEBOOK"),
        ("es_419", "es_419"),
        ("eng_USA", "en_US"),
        ("en_US_posix", "en_US_POSIX"),
        ("de_DE.UTF-8@euro", "de_DE_EURO"),
        ("en_US@a-b", "en_US_A_B"),
        ("sr_RS@latin_", "sr_RS_LATIN"),
        ("de_DE@euro.x", "de_DE_EURO"),
        ("ja_JP.eucJP@x@y", "ja_JP@x=y"),
        ("de@collation=phonebook;Currency=EUR", "de@collation=phonebook;currency=EUR"),
        ("de@currency=EUR;collation=phonebook", "de@collation=phonebook;currency=EUR"),
        ("de@collation=phonebook;junk", "de@collation=phonebook"),
        ("en-US-u-co-phonebk", "en_US@collation=phonebook"),
        ("en-US-x-priv", "en_US@x=priv"),
        ("", ""),
    ],
)
def test_get_name(raw: str, expected: str) -> None:
    """
    Test that identifiers are normalized to their legacy name.

    :param raw: The identifier to parse.
    :param expected: The expected legacy name.
    :raises AssertionError: If the normalized name differs.
    """
    from localeid.parser import get_name

    assert get_name(raw) == expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "raw, fields",
    [
        ("sr_Latn_RS_REVISED", ("sr", "Latn", "RS", "REVISED")),
        ("de__PHONEBOOK", ("de", "", "", "PHONEBOOK")),
        ("zh_Hans", ("zh", "Hans", "", "")),
        ("en_US_POSIX_FOO", ("en", "", "US", "POSIX_FOO")),
    ],
)
def test_fields(raw: str, fields: Tuple[str, str, str, str]) -> None:
    """
    Test the field accessors.

    :param raw: The identifier to parse.
    :param fields: Expected language, script, region and variant.
    :raises AssertionError: If a field differs.
    """
    from localeid import parser

    assert (
        parser.get_language(raw),
        parser.get_script(raw),
        parser.get_region(raw),
        parser.get_variant(raw),
    ) == fields


@pytest.mark.parametrize(  # type: ignore[misc]
    "raw",
    ["en_US@a-b", "sr_RS@latin_", "ja_JP@x@y", "de_DE@euro.x", "ca_ES.UTF-8@valencia"],
)
def test_modifier_name_reads_back(raw: str) -> None:
    """
    Test that a name built from a POSIX modifier parses back to the same
    fields.

    :param raw: A POSIX name with a modifier.
    :raises AssertionError: If the name does not reproduce the identifier.
    """
    from localeid.parser import parse

    loc = parse(raw)
    assert parse(loc.name) == loc


def test_looks_like_language_tag() -> None:
    """
    Test the detection of BCP47 tags among legacy identifiers.

    :raises AssertionError: If a string is classified wrongly.
    """
    from localeid.parser import looks_like_language_tag

    assert looks_like_language_tag("en-US-u-co-phonebk")
    assert looks_like_language_tag("de-x-foo")
    assert not looks_like_language_tag("en_US")
    assert not looks_like_language_tag("de@collation=phonebook")
    assert not looks_like_language_tag("de_DE.UTF-8")


def test_ill_formed_tag_is_read_as_legacy() -> None:
    """
    Test that a string with a single-character segment that is not a
    well-formed tag keeps all of its material.

    :raises AssertionError: If trailing material is lost.
    """
    from localeid.parser import get_name

    assert get_name("en-u") == "en__U"


def test_keyword_helpers() -> None:
    """
    Test the keyword helpers that work on raw identifier strings.

    :raises AssertionError: If a helper returns the wrong value.
    """
    from localeid import parser

    raw = "de_DE@currency=EUR;collation=phonebook"
    assert parser.get_keywords(raw) == ["collation", "currency"]
    assert parser.get_keyword_value(raw, "Collation") == "phonebook"
    assert parser.get_keyword_value(raw, "calendar") is None
    assert parser.get_base_name(raw) == "de_DE"
    assert parser.set_keyword_value("de_DE", "currency", "EUR") == "de_DE@currency=EUR"
    assert parser.set_keyword_value(raw, "currency", None) == "de_DE@collation=phonebook"
    assert parser.set_keyword_value(raw, None, None) == "de_DE"


def test_parse_is_cached() -> None:
    """
    Test that parsing the same string twice returns the cached identifier.

    :raises AssertionError: If the second parse builds a new identifier.
    """
    from localeid import parse
    from localeid.parser import clear_name_cache

    first = parse("fr_CA")
    assert parse("fr_CA") is first
    clear_name_cache()
    assert parse("fr_CA") == first


def test_ensure_locale_id() -> None:
    from localeid import LocaleID
    from localeid.parser import ensure_locale_id

    loc = LocaleID("en")
    assert ensure_locale_id(loc) is loc
    assert ensure_locale_id("en") == loc


@pytest.mark.parametrize(  # type: ignore[misc]
    "raw, language, country",
    [
        ("de_DE", "deu", "DEU"),
        ("fr_CA", "fra", "CAN"),
        ("zh_Hant_TW", "zho", "TWN"),
        ("ger_AUT", "deu", "AUT"),
        ("en_001", "eng", ""),
        ("tlh", "", ""),
        ("", "", ""),
    ],
)
def test_iso3_codes(raw: str, language: str, country: str) -> None:
    """
    Test the three-letter codes of the language and region of an identifier.

    :param raw: The identifier.
    :param language: The expected ISO 639-2 code.
    :param country: The expected ISO 3166 alpha-3 code.
    :raises AssertionError: If a code differs.
    """
    from localeid.parser import get_iso3_country, get_iso3_language

    assert get_iso3_language(raw) == language
    assert get_iso3_country(raw) == country


def test_iso_code_lists() -> None:
    """
    Test that every listed two-letter code has a three-letter code that
    folds back to it.

    :raises AssertionError: If a code does not fold back.
    """
    from localeid.parser import get_iso3_country, get_iso3_language, get_name
    from localeid.iso_codes import get_iso_countries, get_iso_languages

    languages = get_iso_languages()
    assert languages == sorted(languages) and "en" in languages
    for language in languages:
        assert get_name(get_iso3_language(language)) == language
    for country in get_iso_countries():
        assert get_name(f"und_{get_iso3_country('und_' + country)}") == f"und_{country}"
