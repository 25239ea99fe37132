"""Tests for the subtag grammar predicates and the memoization cache."""

from typing import Callable

import pytest

from localeid import subtags


@pytest.mark.parametrize(  # type: ignore[misc]
    "predicate, accepted, rejected",
    [
        (subtags.is_language, ["en", "yue", "tlhingan"], ["e", "1234", "abcdefghi"]),
        (subtags.is_script, ["Latn", "hant"], ["Lat", "L4tn"]),
        (subtags.is_region, ["US", "419"], ["USA", "41", "U1"]),
        (subtags.is_variant, ["1901", "posix", "rozaj"], ["abcd", "x1", "abcdefghi"]),
        (subtags.is_extension_singleton, ["a", "u", "9"], ["x", "X", "ab"]),
        (subtags.is_unicode_locale_type, ["gregory", "islamic-civil"], ["gr", ""]),
    ],
)
def test_predicates(
    predicate: Callable[[str], bool], accepted: list, rejected: list
) -> None:
    """
    Test the subtag predicates against well-formed and ill-formed subtags.

    :param predicate: The predicate to test.
    :param accepted: Subtags the predicate must accept.
    :param rejected: Subtags the predicate must reject.
    :raises AssertionError: If a subtag is classified wrongly.
    """
    for value in accepted:
        assert predicate(value), value
    for value in rejected:
        assert not predicate(value), value


def test_cache_keeps_first_value() -> None:
    """
    Test that the first value stored for a key wins.

    :raises AssertionError: If a later value replaces the first one.
    """
    from localeid.cache import SimpleCache

    cache: SimpleCache[str, str] = SimpleCache()
    assert cache.put("en", "first") == "first"
    assert cache.put("en", "second") == "first"
    assert cache.get_or_compute("en", lambda key: "third") == "first"
    assert cache.get_or_compute("fr", str.upper) == "FR"
    assert "fr" in cache and len(cache) == 2
    cache.clear()
    assert cache.get("en") is None
