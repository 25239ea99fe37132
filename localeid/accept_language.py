"""Accept-Language header parsing and locale negotiation."""

import enum
import logging
from typing import List, NamedTuple, Optional, Sequence, Union

from .canonicalize import create_canonical
from .data import Lookup
from .exceptions import AcceptLanguageError
from .likely_subtags import minimize_subtags
from .locale_id import LocaleID
from .parser import ensure_locale_id

logger = logging.getLogger(__name__)

WILDCARD = "*"
_WHITESPACE = " \t"


class _State(enum.Enum):
    ERROR = -1
    BEFORE_RANGE = 0
    IN_RANGE = 1
    WILDCARD = 2
    RANGE_END = 3
    BEFORE_Q = 4
    BEFORE_EQUALS = 5
    BEFORE_Q_VALUE = 6
    Q_VALUE_START = 7
    BEFORE_FRACTION = 8
    IN_FRACTION = 9
    AFTER_Q_VALUE = 10


class LanguageRange(NamedTuple):
    """A parsed language range with its quality value."""

    locale: LocaleID
    quality: float


class AcceptLanguageResult(NamedTuple):
    """The outcome of a negotiation."""

    locale: Optional[LocaleID]
    """The chosen locale, or None if nothing matched."""

    fallback: bool
    """False only if the chosen locale matched a requested range directly."""


def _is_ascii_letter(c: str) -> bool:
    return ("A" <= c <= "Z") or ("a" <= c <= "z")


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


class AcceptLanguageScanner:
    """
    Single-pass scanner for an Accept-Language value such as
    ``da, en-gb;q=0.8, en;q=0.7, *;q=0.1``.

    Digits are accepted in a range only after its first ``-``. A quality
    value is ``0`` or ``1`` with an optional fraction, and a value starting
    with ``1`` must have only zeros in its fraction. In lenient mode ``_``
    also separates subtags and a quality value may start with ``.``.

    :param header: The header value.
    :type header: str
    :param lenient: Whether to accept the lenient extensions.
    :type lenient: bool
    """

    header: str
    """The header value."""
    lenient: bool
    """Whether ``_`` separators and a leading ``.`` in quality values are accepted."""
    ranges: List[LanguageRange]
    """The ranges scanned so far, in header order."""
    _state: _State
    _range: List[str]
    """Characters of the range being scanned."""
    _qvalue: List[str]
    """Characters of the quality value being scanned."""
    _subtag: bool
    """True once the current range has passed its first ``-``."""
    _q1: bool
    """True if the current quality value starts with ``1``."""

    def __init__(self, header: str, lenient: bool = True) -> None:
        self.header = header
        self.lenient = lenient
        self.ranges = []
        self._state = _State.BEFORE_RANGE
        self._range = []
        self._qvalue = []
        self._subtag = False
        self._q1 = False

    def scan(self) -> List[LanguageRange]:
        """
        Scan the header.

        :raises AcceptLanguageError: At the first unexpected character.
        :return: The ranges other than ``*``, ordered by descending quality;
                 ranges of equal quality keep their order in the header.
        :rtype: List[LanguageRange]
        """
        text = self.header + ","
        for index, c in enumerate(text):
            if self._step(c):
                self._flush()
            if self._state is _State.ERROR:
                raise AcceptLanguageError("Invalid Accept-Language", index)
        if self._state is not _State.BEFORE_RANGE:
            raise AcceptLanguageError("Invalid Accept-Language", len(text))
        return sorted(self.ranges, key=lambda r: -r.quality)

    def _error(self) -> bool:
        self._state = _State.ERROR
        return False

    def _step(self, c: str) -> bool:
        """Advance by one character; return True when a range is complete."""
        state = self._state
        if state is _State.BEFORE_RANGE:
            if _is_ascii_letter(c):
                self._range.append(c)
                self._subtag = False
                self._state = _State.IN_RANGE
            elif c == WILDCARD:
                self._range.append(c)
                self._state = _State.WILDCARD
            elif c not in _WHITESPACE:
                return self._error()
        elif state is _State.IN_RANGE:
            if _is_ascii_letter(c):
                self._range.append(c)
            elif c == "-" or (c == "_" and self.lenient):
                self._subtag = True
                self._range.append(c)
            elif _is_digit(c) and self._subtag:
                self._range.append(c)
            else:
                return self._end_range(c)
        elif state in (_State.WILDCARD, _State.RANGE_END):
            return self._end_range(c)
        elif state is _State.BEFORE_Q:
            if c == "q":
                self._state = _State.BEFORE_EQUALS
            elif c not in _WHITESPACE:
                return self._error()
        elif state is _State.BEFORE_EQUALS:
            if c == "=":
                self._state = _State.BEFORE_Q_VALUE
            elif c not in _WHITESPACE:
                return self._error()
        elif state is _State.BEFORE_Q_VALUE:
            if c in "01":
                self._q1 = c == "1"
                self._qvalue.append(c)
                self._state = _State.Q_VALUE_START
            elif c == "." and self.lenient:
                self._q1 = False
                self._qvalue.append("0.")
                self._state = _State.BEFORE_FRACTION
            elif c not in _WHITESPACE:
                return self._error()
        elif state is _State.Q_VALUE_START:
            if c == ".":
                self._qvalue.append(c)
                self._state = _State.BEFORE_FRACTION
            else:
                return self._end_q_value(c)
        elif state is _State.BEFORE_FRACTION:
            if _is_digit(c) and not (self._q1 and c != "0"):
                self._qvalue.append(c)
                self._state = _State.IN_FRACTION
            else:
                return self._error()
        elif state is _State.IN_FRACTION:
            if _is_digit(c):
                if self._q1 and c != "0":
                    return self._error()
                self._qvalue.append(c)
            else:
                return self._end_q_value(c)
        elif state is _State.AFTER_Q_VALUE:
            if c == ",":
                return True
            if c not in _WHITESPACE:
                return self._error()
        return False

    def _end_range(self, c: str) -> bool:
        if c == ",":
            return True
        if c == ";":
            self._state = _State.BEFORE_Q
        elif c in _WHITESPACE:
            self._state = _State.RANGE_END
        else:
            return self._error()
        return False

    def _end_q_value(self, c: str) -> bool:
        if c == ",":
            return True
        if c in _WHITESPACE:
            self._state = _State.AFTER_Q_VALUE
            return False
        return self._error()

    def _flush(self) -> None:
        quality = 1.0
        if self._qvalue:
            quality = min(float("".join(self._qvalue)), 1.0)
        language_range = "".join(self._range)
        if language_range != WILDCARD:
            self.ranges.append(LanguageRange(create_canonical(language_range), quality))
        self._range = []
        self._qvalue = []
        self._state = _State.BEFORE_RANGE


def parse_weighted_ranges(header: str, lenient: bool = True) -> List[LanguageRange]:
    return AcceptLanguageScanner(header, lenient).scan()


def parse_accept_language(header: str, lenient: bool = True) -> List[LocaleID]:
    """
    Parse an Accept-Language value into canonical identifiers in
    preference order. Wildcard ranges are dropped.

    :param header: The header value.
    :type header: str
    :param lenient: Accept ``_`` in ranges and quality values starting with ``.``.
    :type lenient: bool
    :raises AcceptLanguageError: If the value is malformed.
    :return: The ranges, most preferred first.
    :rtype: List[LocaleID]
    """
    return [r.locale for r in parse_weighted_ranges(header, lenient)]


def _scriptless_alias(
    requested: LocaleID, available: LocaleID, likely_subtags: Optional[Lookup]
) -> bool:
    """
    An available locale with a script also stands for the scriptless
    request with the same language, region and variant, provided the script
    is the likely one (``zh_Hant_TW`` serves a request for ``zh_TW``).
    """
    if requested.script or not available.script:
        return False
    if (
        available.language != requested.language
        or available.region != requested.region
        or available.variant != requested.variant
    ):
        return False
    return not minimize_subtags(available, likely_subtags).script


def accept_language(
    ranges: Union[str, Sequence[Union[str, LocaleID]]],
    available: Sequence[Union[str, LocaleID]],
    likely_subtags: Optional[Lookup] = None,
) -> AcceptLanguageResult:
    """
    Choose the available locale that best serves the requested ranges.

    Ranges are tried in preference order. Each range is compared with every
    available locale, then replaced by its parent (see
    :meth:`LocaleID.fallback`) until the root has been tried. An exact match
    returns the available locale. A scriptless alias match returns the
    requested range itself. ``fallback`` is False only when the match was
    made before any parent was taken.

    :param ranges: An Accept-Language value, or identifiers in preference order.
    :type ranges: Union[str, Sequence[Union[str, LocaleID]]]
    :param available: The locales that can be served.
    :type available: Sequence[Union[str, LocaleID]]
    :param likely_subtags: The likely subtags table used for aliases.
    :type likely_subtags: Optional[Lookup]
    :return: The chosen locale (None if nothing matched) and the fallback flag.
    :rtype: AcceptLanguageResult
    """
    if isinstance(ranges, str):
        try:
            requested = parse_accept_language(ranges)
        except AcceptLanguageError as e:
            logger.debug("Ignoring malformed Accept-Language %r: %s", ranges, e)
            return AcceptLanguageResult(None, True)
    else:
        requested = [ensure_locale_id(r) for r in ranges]
    candidates = [ensure_locale_id(a) for a in available]

    for requested_range in requested:
        current: Optional[LocaleID] = requested_range
        first = True
        while current is not None:
            for candidate in candidates:
                if candidate == current:
                    return AcceptLanguageResult(candidate, not first)
                if _scriptless_alias(current, candidate, likely_subtags):
                    return AcceptLanguageResult(current, not first)
            current = current.fallback()
            first = False
    return AcceptLanguageResult(None, True)
