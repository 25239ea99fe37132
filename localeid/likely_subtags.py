"""Adding and removing likely subtags (CLDR maximize / minimize)."""

import logging
from typing import NamedTuple, Optional, Union

from .data import Lookup, default_likely_subtags
from .locale_id import UNDERSCORE, LocaleID
from .parser import LocaleIDParser, ensure_locale_id
from .subtags import UNDETERMINED

logger = logging.getLogger(__name__)

UNKNOWN_SCRIPT = "Zzzz"
UNKNOWN_REGION = "ZZ"


class SearchTag(NamedTuple):
    """The language, script and region a likely subtags search starts from."""

    language: str
    script: str
    region: str

    @classmethod
    def from_locale_id(cls, loc: LocaleID) -> "SearchTag":
        return cls(
            loc.language or UNDETERMINED,
            "" if loc.script == UNKNOWN_SCRIPT else loc.script,
            "" if loc.region == UNKNOWN_REGION else loc.region,
        )

    def key(self, script: bool = False, region: bool = False) -> str:
        parts = [self.language]
        if script:
            parts.append(self.script)
        if region:
            parts.append(self.region)
        return UNDERSCORE.join(parts)


def _lookup_likely(tag: SearchTag, lookup: Lookup) -> Optional[LocaleID]:
    """
    Find the likely subtags for a search tag and merge them into it.

    :param tag: The search tag.
    :type tag: SearchTag
    :param lookup: The likely subtags table.
    :type lookup: Lookup
    :return: The maximal language, script and region, or None if no
             search key was found.
    :rtype: Optional[LocaleID]
    """
    candidates = []
    if tag.script and tag.region:
        candidates.append(tag.key(script=True, region=True))
    if tag.script:
        candidates.append(tag.key(script=True))
    if tag.region:
        candidates.append(tag.key(region=True))
    candidates.append(tag.key())

    for candidate in candidates:
        likely = lookup(candidate)
        if likely is None:
            continue
        logger.debug("Likely subtags for %s: %s", candidate, likely)
        found = LocaleIDParser(likely).parse()
        return LocaleID(
            language=found.language,
            script=tag.script or found.script,
            region=tag.region or found.region,
        )
    return None


def _likely_subtags(lookup: Optional[Lookup]) -> Lookup:
    return default_likely_subtags() if lookup is None else lookup


def add_likely_subtags(
    loc: Union[str, LocaleID], lookup: Optional[Lookup] = None
) -> LocaleID:
    """
    Add likely script and region subtags (maximize).

    The search keys language_script_region, language_script,
    language_region and language are tried in that order. The first hit
    supplies the language and fills in the script and region the input
    lacks. Variants and keywords are kept. An empty language searches as
    ``und``; the unknown script ``Zzzz`` and region ``ZZ`` count as absent.

    :param loc: The identifier to maximize.
    :type loc: Union[str, LocaleID]
    :param lookup: The likely subtags table; defaults to the bundled one.
    :type lookup: Optional[Lookup]
    :return: The maximized identifier, or the input unchanged if no search
             key was found.
    :rtype: LocaleID
    """
    loc = ensure_locale_id(loc)
    found = _lookup_likely(SearchTag.from_locale_id(loc), _likely_subtags(lookup))
    if found is None:
        logger.debug("No likely subtags for %s", loc.name)
        return loc
    return found.replace(variants=loc.variants, keywords=loc.keywords)


def minimize_subtags(
    loc: Union[str, LocaleID], lookup: Optional[Lookup] = None
) -> LocaleID:
    """
    Remove subtags that add_likely_subtags would restore (minimize).

    The candidates are tried in order: language alone, then language and
    region, then language and script; the first one that maximizes to the
    same result as the input wins. Region is tried before script, so
    ``zh_Hant_TW`` becomes ``zh_TW`` rather than ``zh_Hant``.

    :param loc: The identifier to minimize.
    :type loc: Union[str, LocaleID]
    :param lookup: The likely subtags table; defaults to the bundled one.
    :type lookup: Optional[Lookup]
    :return: The minimized identifier, or the input unchanged if it cannot
             be maximized.
    :rtype: LocaleID
    """
    loc = ensure_locale_id(loc)
    lookup = _likely_subtags(lookup)
    tag = SearchTag.from_locale_id(loc)
    maximized = _lookup_likely(tag, lookup)
    if maximized is None:
        return loc

    language = "" if tag.language == UNDETERMINED else tag.language
    candidates = [SearchTag(tag.language, "", "")]
    if tag.region:
        candidates.append(SearchTag(tag.language, "", tag.region))
        if tag.script:
            candidates.append(SearchTag(tag.language, tag.script, ""))
    for candidate in candidates:
        if _lookup_likely(candidate, lookup) == maximized:
            return loc.replace(
                language=language, script=candidate.script, region=candidate.region
            )
    return loc
