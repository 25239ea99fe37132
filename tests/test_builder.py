"""Tests for the strict locale builder."""

import pytest

from localeid.exceptions import IllformedLocaleError


def test_build_from_fields() -> None:
    """
    Test building an identifier field by field with case normalization.

    :raises AssertionError: If the built identifier differs.
    """
    from localeid import LocaleBuilder

    loc = (
        LocaleBuilder()
        .set_language("SR")
        .set_script("latn")
        .set_region("rs")
        .set_unicode_locale_keyword("ca", "gregory")
        .build()
    )
    assert loc.name == "sr_Latn_RS@calendar=gregorian"


@pytest.mark.parametrize(  # type: ignore[misc]
    "setter, value, field, index",
    [
        ("set_language", "1234", "language", 0),
        ("set_language", "e", "language", 0),
        ("set_script", "Lat", "script", 0),
        ("set_region", "USA", "region", 0),
        ("set_variant", "1901_abc", "variant", 5),
        ("set_variant", "posix-x", "variant", 6),
    ],
)
def test_ill_formed_fields(setter: str, value: str, field: str, index: int) -> None:
    """
    Test that ill-formed fields are rejected with the field name and the
    index of the offending subtag, leaving the builder unchanged.

    :param setter: The builder method to call.
    :param value: The ill-formed value.
    :param field: The expected field name in the error.
    :param index: The expected subtag index in the error.
    :raises AssertionError: If the error details differ or the builder changed.
    """
    from localeid import LocaleBuilder

    builder = LocaleBuilder().set_language("de").set_region("AT")
    with pytest.raises(IllformedLocaleError) as excinfo:
        getattr(builder, setter)(value)
    assert excinfo.value.field == field
    assert excinfo.value.index == index
    assert excinfo.value.value == value
    assert builder.build().name == "de_AT"


def test_set_language_tag() -> None:
    """
    Test resetting the builder from a language tag.

    :raises AssertionError: If the built identifier differs.
    """
    from localeid import LocaleBuilder

    builder = LocaleBuilder().set_region("FR")
    assert builder.set_language_tag("en-US-u-co-phonebk").build().name == (
        "en_US@collation=phonebook"
    )
    assert builder.set_language_tag("und-Latn").build().name == "_Latn"
    assert builder.set_language_tag("en-US-x-lvariant-icu4j").build().name == "en_US_ICU4J"
    assert builder.set_language_tag("").build().name == ""


@pytest.mark.parametrize(  # type: ignore[misc]
    "tag, index",
    [("en-a", 3), ("en-US-abc", 6), ("1234", 0), ("en-a-bcd-a-efg", 9)],
)
def test_set_language_tag_rejects(tag: str, index: int) -> None:
    """
    Test that the strict path rejects any ill-formed tag.

    :param tag: The ill-formed tag.
    :param index: The expected error offset.
    :raises AssertionError: If the error details differ.
    """
    from localeid import LocaleBuilder

    with pytest.raises(IllformedLocaleError) as excinfo:
        LocaleBuilder().set_language_tag(tag)
    assert excinfo.value.field == "tag"
    assert excinfo.value.index == index
    assert f"at index {index}" in str(excinfo.value)


def test_extensions() -> None:
    """
    Test setting and removing extensions, private use and Unicode keywords.

    :raises AssertionError: If the built identifier differs.
    """
    from localeid import LocaleBuilder, to_language_tag

    builder = (
        LocaleBuilder()
        .set_language("th")
        .set_extension("u", "foo-ca-buddhist")
        .set_extension("x", "private")
        .set_extension("a", "bcd")
    )
    loc = builder.build()
    assert loc.name == "th@a=bcd;attribute=foo;calendar=buddhist;x=private"
    assert to_language_tag(loc) == "th-a-bcd-u-foo-ca-buddhist-x-private"

    builder.set_extension("a", None).set_extension("x", "")
    assert builder.build().name == "th@attribute=foo;calendar=buddhist"
    builder.set_unicode_locale_keyword("ca", None).remove_unicode_locale_attribute("foo")
    assert builder.build().name == "th"
    builder.set_unicode_locale_keyword("kn", "")
    assert builder.build().name == "th@colnumeric=yes"
    builder.clear_extensions()
    assert builder.build().name == "th"


def test_ill_formed_extensions() -> None:
    """
    Test that ill-formed extension keys, values, keywords and attributes
    are rejected.

    :raises AssertionError: If an error is not raised for the right field.
    """
    from localeid import LocaleBuilder

    builder = LocaleBuilder()
    with pytest.raises(IllformedLocaleError) as excinfo:
        builder.set_extension("ab", "cde")
    assert excinfo.value.field == "extension"
    with pytest.raises(IllformedLocaleError) as excinfo:
        builder.set_extension("a", "bcd-e")
    assert excinfo.value.index == 4
    with pytest.raises(IllformedLocaleError) as excinfo:
        builder.set_unicode_locale_keyword("cal", "gregory")
    assert excinfo.value.field == "keyword"
    with pytest.raises(IllformedLocaleError):
        builder.set_unicode_locale_keyword("ca", "gr")
    with pytest.raises(IllformedLocaleError) as excinfo:
        builder.add_unicode_locale_attribute("ab")
    assert excinfo.value.field == "attribute"


def test_set_locale() -> None:
    """
    Test resetting the builder from an existing identifier.

    :raises AssertionError: If the fields are not carried over.
    """
    from localeid import LocaleBuilder, parse

    builder = LocaleBuilder().set_language("fr")
    built = builder.set_locale(parse("de_DE@collation=phonebook;foo=bar")).build()
    assert built.name == "de_DE@collation=phonebook"
    assert LocaleBuilder().set_locale(parse("en_US_POSIX")).build().name == "en_US_POSIX"


def test_clear() -> None:
    from localeid import LocaleBuilder

    builder = LocaleBuilder().set_language("de").set_variant("1901")
    assert builder.build().name == "de__1901"
    assert builder.clear().build().name == ""
