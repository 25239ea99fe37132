"""Tests for loading the likely subtags and key/type tables."""

import json
from pathlib import Path
from typing import Any, Generator

import pytest

from localeid.exceptions import DataError, PathError


def _write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture  # type: ignore[misc]
def reset_tables() -> Generator[None, None, None]:
    """
    Fixture that makes the process-wide tables reload before and after a test.

    :return: None
    :rtype: Generator[None, None, None]
    """
    from localeid.data import reset_default_tables

    reset_default_tables()
    yield
    reset_default_tables()


def test_convert_cldr_likely_subtags() -> None:
    """
    Test conversion of both the CLDR layout and a flat table.

    :raises AssertionError: If the converted table differs.
    :raises DataError: If a malformed document is accepted.
    """
    from localeid.data import convert_cldr_likely_subtags

    cldr = {"supplemental": {"likelySubtags": {"en": "en-Latn-US", "und-TW": "zh-Hant-TW"}}}
    assert convert_cldr_likely_subtags(cldr) == {"en": "en_Latn_US", "und_TW": "zh_Hant_TW"}
    assert convert_cldr_likely_subtags({"de": "de_Latn_DE"}) == {"de": "de_Latn_DE"}
    with pytest.raises(DataError):
        convert_cldr_likely_subtags({"supplemental": {}})
    with pytest.raises(DataError):
        convert_cldr_likely_subtags({"supplemental": {"likelySubtags": ["en"]}})


def test_flatten_key_type_data() -> None:
    """
    Test that the nested key/type document is flattened in both directions.

    :raises AssertionError: If a flattened entry is missing.
    """
    from localeid.data import flatten_key_type_data

    flat = flatten_key_type_data(
        {
            "keyMap": {"Collation": "CO"},
            "typeMap": {"collation": {"phonebook": "PHONEBK"}},
            "typeAlias": {"collation": {"phonebk": "phonebook"}},
        }
    )
    assert flat == {
        "keyMap/collation": "co",
        "bcpKeyMap/co": "collation",
        "typeMap/collation": "collation",
        "typeMap/collation/phonebook": "phonebk",
        "bcpTypeMap/collation/phonebk": "phonebook",
        "typeAlias/collation/phonebk": "phonebook",
    }
    with pytest.raises(DataError):
        flatten_key_type_data({"keyMap": ["collation"]})


def test_mapping_lookup_is_a_snapshot() -> None:
    from localeid.data import mapping_lookup

    table = {"en": "en_Latn_US"}
    lookup = mapping_lookup(table)
    table["fr"] = "fr_Latn_FR"
    assert lookup("en") == "en_Latn_US"
    assert lookup("fr") is None


def test_load_json_errors(tmp_path: Path) -> None:
    """
    Test that unreadable or invalid files raise DataError.

    :param tmp_path: Pytest fixture for a temporary directory.
    :raises AssertionError: If no error is raised.
    """
    from localeid.data import load_json

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataError):
        load_json(broken)
    with pytest.raises(DataError):
        load_json(tmp_path / "missing.json")


def test_get_release_directory(tmp_path: Path) -> None:
    """
    Test selecting downloaded CLDR releases by version.

    :param tmp_path: Pytest fixture for a temporary directory.
    :raises AssertionError: If the wrong release is selected.
    """
    from localeid.data import find_downloaded_releases, get_release_directory

    for name in ("cldr-45.0.0", "cldr-46.0.0", "cldr-foo"):
        _write_json(tmp_path / name / "likely_subtags.json", {})
    (tmp_path / "cldr-47.0.0").mkdir()

    assert len(find_downloaded_releases(tmp_path)) == 3
    assert get_release_directory(tmp_path).name == "cldr-46.0.0"
    assert get_release_directory(tmp_path, "45.0.0").name == "cldr-45.0.0"
    with pytest.raises(PathError):
        get_release_directory(tmp_path, "47.0.0")
    with pytest.raises(PathError):
        get_release_directory(tmp_path / "missing")


def test_load_likely_subtags_sources(tmp_path: Path) -> None:
    """
    Test the order of likely subtags sources: explicit file, pinned
    release, bundled table.

    :param tmp_path: Pytest fixture for a temporary directory.
    :raises AssertionError: If the wrong source is used.
    """
    from localeid import LocaleIDConfig
    from localeid.data import load_likely_subtags

    explicit = _write_json(
        tmp_path / "explicit.json",
        {"supplemental": {"likelySubtags": {"en": "en-Latn-CA"}}},
    )
    _write_json(tmp_path / "cldr-45.0.0" / "likely_subtags.json", {"en": "en_Latn_GB"})

    config = LocaleIDConfig({"likely_subtags": explicit, "data_path": tmp_path})
    assert load_likely_subtags(config) == {"en": "en_Latn_CA"}
    config = LocaleIDConfig({"cldr_version": "45.0.0", "data_path": tmp_path})
    assert load_likely_subtags(config) == {"en": "en_Latn_GB"}
    config = LocaleIDConfig({"data_path": tmp_path})
    assert load_likely_subtags(config)["en"] == "en_Latn_US"


def test_load_key_type_data() -> None:
    from localeid import LocaleIDConfig
    from localeid.data import load_key_type_data

    flat = load_key_type_data(LocaleIDConfig())
    assert flat["keyMap/collation"] == "co"
    assert flat["bcpTypeMap/collation/phonebk"] == "phonebook"


def test_default_tables_follow_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, reset_tables: None
) -> None:
    """
    Test that the process-wide likely subtags table is loaded from the
    file named in the environment, and only once.

    :param tmp_path: Pytest fixture for a temporary directory.
    :param monkeypatch: Pytest fixture for setting environment variables.
    :param reset_tables: Fixture that reloads the process-wide tables.
    :raises AssertionError: If the environment is ignored or the table reloaded.
    """
    from localeid.data import default_likely_subtags

    table = _write_json(tmp_path / "likely.json", {"de": "de_Latn_CH"})
    monkeypatch.setenv("LOCALEID_LIKELY_SUBTAGS", str(table))
    lookup = default_likely_subtags()
    assert lookup("de") == "de_Latn_CH"
    assert lookup("en") is None
    assert default_likely_subtags() is lookup
