"""Canonicalization of deprecated and informal locale identifiers."""

import logging
from typing import NamedTuple, Optional, Tuple

from .locale_id import LocaleID
from .parser import parse

logger = logging.getLogger(__name__)


class VariantRewrite(NamedTuple):
    """A trailing variant that is replaced by a default keyword."""

    variant: str
    key: str
    value: str


class LegacyAlias(NamedTuple):
    """An old base name and its modern replacement."""

    base_name: str
    canonical: str
    key: Optional[str] = None
    value: Optional[str] = None


VARIANT_REWRITES: Tuple[VariantRewrite, ...] = (
    VariantRewrite("EURO", "currency", "EUR"),
    VariantRewrite("PINYIN", "collation", "pinyin"),
    VariantRewrite("STROKE", "collation", "stroke"),
)

# Scanned in order, first match wins. Keys are base names as produced by the parser.
LEGACY_ALIASES: Tuple[LegacyAlias, ...] = (
    LegacyAlias("c", "en_US_POSIX"),
    LegacyAlias("art__LOJBAN", "jbo"),
    LegacyAlias("az_AZ_CYRL", "az_Cyrl_AZ"),
    LegacyAlias("az_AZ_LATN", "az_Latn_AZ"),
    LegacyAlias("ca_ES_PREEURO", "ca_ES", "currency", "ESP"),
    LegacyAlias("de__PHONEBOOK", "de", "collation", "phonebook"),
    LegacyAlias("de_AT_PREEURO", "de_AT", "currency", "ATS"),
    LegacyAlias("de_DE_PREEURO", "de_DE", "currency", "DEM"),
    LegacyAlias("de_LU_PREEURO", "de_LU", "currency", "EUR"),
    LegacyAlias("el_GR_PREEURO", "el_GR", "currency", "GRD"),
    LegacyAlias("en_BE_PREEURO", "en_BE", "currency", "BEF"),
    LegacyAlias("en_IE_PREEURO", "en_IE", "currency", "IEP"),
    LegacyAlias("es__TRADITIONAL", "es", "collation", "traditional"),
    LegacyAlias("es_ES_PREEURO", "es_ES", "currency", "ESP"),
    LegacyAlias("eu_ES_PREEURO", "eu_ES", "currency", "ESP"),
    LegacyAlias("fi_FI_PREEURO", "fi_FI", "currency", "FIM"),
    LegacyAlias("fr_BE_PREEURO", "fr_BE", "currency", "BEF"),
    LegacyAlias("fr_FR_PREEURO", "fr_FR", "currency", "FRF"),
    LegacyAlias("fr_LU_PREEURO", "fr_LU", "currency", "LUF"),
    LegacyAlias("ga_IE_PREEURO", "ga_IE", "currency", "IEP"),
    LegacyAlias("gl_ES_PREEURO", "gl_ES", "currency", "ESP"),
    LegacyAlias("hi__DIRECT", "hi", "collation", "direct"),
    LegacyAlias("it_IT_PREEURO", "it_IT", "currency", "ITL"),
    LegacyAlias("ja_JP_TRADITIONAL", "ja_JP", "calendar", "japanese"),
    LegacyAlias("nl_BE_PREEURO", "nl_BE", "currency", "BEF"),
    LegacyAlias("nl_NL_PREEURO", "nl_NL", "currency", "NLG"),
    LegacyAlias("pt_PT_PREEURO", "pt_PT", "currency", "PTE"),
    LegacyAlias("sr_SP_CYRL", "sr_Cyrl_RS"),
    LegacyAlias("sr_SP_LATN", "sr_Latn_RS"),
    LegacyAlias("sr_YU_CYRILLIC", "sr_Cyrl_RS"),
    LegacyAlias("th_TH_TRADITIONAL", "th_TH", "calendar", "buddhist"),
    LegacyAlias("uz_UZ_CYRILLIC", "uz_Cyrl_UZ"),
    LegacyAlias("uz_UZ_CYRL", "uz_Cyrl_UZ"),
    LegacyAlias("uz_UZ_LATN", "uz_Latn_UZ"),
    LegacyAlias("zh_CHS", "zh_Hans"),
    LegacyAlias("zh_CHT", "zh_Hant"),
    LegacyAlias("zh_GAN", "zh__GAN"),
    LegacyAlias("zh__GUOYU", "zh"),
    LegacyAlias("zh_MIN", "zh__MIN"),
    LegacyAlias("zh_MIN_NAN", "zh__MINNAN"),
    LegacyAlias("zh_WUU", "zh__WUU"),
    LegacyAlias("zh_YUE", "zh__YUE"),
)

NORWEGIAN_BOKMAL = "nb"
NORWEGIAN_NYNORSK = "nn"
NYNORSK_VARIANT = "NY"


def _rewrite_variants(loc: LocaleID) -> LocaleID:
    while loc.variants:
        for rewrite in VARIANT_REWRITES:
            if loc.variants[-1] == rewrite.variant:
                loc = loc.replace(variants=loc.variants[:-1])
                loc = loc.with_default_keyword(rewrite.key, rewrite.value)
                break
        else:
            break
    return loc


def _apply_alias(loc: LocaleID) -> Tuple[LocaleID, bool]:
    base_name = loc.base_name
    for alias in LEGACY_ALIASES:
        if alias.base_name == base_name:
            logger.debug("Replacing legacy base name %s with %s", base_name, alias.canonical)
            loc = loc.with_base(parse(alias.canonical))
            if alias.key is not None and alias.value is not None:
                loc = loc.with_default_keyword(alias.key, alias.value)
            return loc, True
    return loc, False


def create_canonical(s: str) -> LocaleID:
    """
    Parse an identifier and rewrite it to its canonical form.

    Trailing variants listed in ``VARIANT_REWRITES`` are replaced by default
    keywords (``de_DE_EURO`` is ``de_DE@currency=EUR``). The resulting base
    name is then looked up in ``LEGACY_ALIASES``. Finally, if no alias
    matched, Norwegian ``nb`` with variant ``NY`` becomes ``nn``. Keywords
    already present are never overwritten, so the operation is idempotent.

    :param s: The raw identifier.
    :type s: str
    :return: The canonical identifier.
    :rtype: LocaleID
    """
    loc = _rewrite_variants(parse(s))
    loc, found_alias = _apply_alias(loc)
    if not found_alias:
        if loc.language == NORWEGIAN_BOKMAL and loc.variant == NYNORSK_VARIANT:
            loc = loc.replace(language=NORWEGIAN_NYNORSK, variants=())
    return loc


def canonicalize(s: str) -> str:
    """
    Get the canonical name of an identifier.

    :param s: The raw identifier.
    :type s: str
    :return: The canonical name; the empty string stays empty.
    :rtype: str
    """
    if s == "":
        return ""
    return create_canonical(s).name
