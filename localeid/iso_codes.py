"""ISO 639 language and ISO 3166 region code tables."""

from types import MappingProxyType
from typing import List, Mapping

# Two-letter ISO 639-1 codes and their ISO 639-2/T three-letter codes.
ISO3_LANGUAGES: Mapping[str, str] = MappingProxyType({
    "ar": "ara", "bg": "bul", "cs": "ces", "da": "dan", "de": "deu",
    "el": "ell", "en": "eng", "es": "spa", "et": "est", "fa": "fas",
    "fi": "fin", "fr": "fra", "he": "heb", "hi": "hin", "hr": "hrv",
    "hu": "hun", "id": "ind", "is": "isl", "it": "ita", "ja": "jpn",
    "ko": "kor", "lt": "lit", "lv": "lav", "ms": "msa", "nb": "nob",
    "nl": "nld", "nn": "nno", "no": "nor", "pl": "pol", "pt": "por",
    "ro": "ron", "ru": "rus", "sk": "slk", "sl": "slv", "sr": "srp",
    "sv": "swe", "th": "tha", "tr": "tur", "uk": "ukr", "vi": "vie",
    "zh": "zho",
})

# ISO 639-2/B bibliographic codes that differ from the terminology code.
_BIBLIOGRAPHIC_LANGUAGES: Mapping[str, str] = MappingProxyType({
    "chi": "zh", "cze": "cs", "dut": "nl", "fre": "fr", "ger": "de",
    "gre": "el", "per": "fa", "rum": "ro", "slo": "sk",
})

# Two-letter ISO 3166-1 codes and their alpha-3 codes.
ISO3_REGIONS: Mapping[str, str] = MappingProxyType({
    "AR": "ARG", "AT": "AUT", "AU": "AUS", "BE": "BEL", "BR": "BRA",
    "CA": "CAN", "CH": "CHE", "CN": "CHN", "CZ": "CZE", "DE": "DEU",
    "DK": "DNK", "ES": "ESP", "FI": "FIN", "FR": "FRA", "GB": "GBR",
    "GR": "GRC", "HK": "HKG", "IE": "IRL", "IL": "ISR", "IN": "IND",
    "IT": "ITA", "JP": "JPN", "KR": "KOR", "MX": "MEX", "NL": "NLD",
    "NO": "NOR", "NZ": "NZL", "PL": "POL", "PT": "PRT", "RS": "SRB",
    "RU": "RUS", "SE": "SWE", "TH": "THA", "TR": "TUR", "TW": "TWN",
    "UA": "UKR", "US": "USA", "ZA": "ZAF",
})

SHORT_LANGUAGES: Mapping[str, str] = MappingProxyType({
    **{long: short for short, long in ISO3_LANGUAGES.items()},
    **_BIBLIOGRAPHIC_LANGUAGES,
})
"""Three-letter language codes folded to two letters by the parser."""

SHORT_REGIONS: Mapping[str, str] = MappingProxyType(
    {long: short for short, long in ISO3_REGIONS.items()}
)
"""Alpha-3 region codes folded to two letters by the parser."""


def get_iso_languages() -> List[str]:
    """
    Get the two-letter language codes that have a three-letter equivalent.

    :return: The codes in sorted order.
    :rtype: List[str]
    """
    return sorted(ISO3_LANGUAGES)


def get_iso_countries() -> List[str]:
    """
    Get the two-letter region codes that have a three-letter equivalent.

    :return: The codes in sorted order.
    :rtype: List[str]
    """
    return sorted(ISO3_REGIONS)
