"""BCP47 subtag grammar predicates and casing helpers."""

import re

SEP = "-"
PRIVATE_USE = "x"
UNICODE_LOCALE_EXTENSION = "u"
UNDETERMINED = "und"

_ALPHA_RE = re.compile(r"^[A-Za-z]+$")
_DIGIT_RE = re.compile(r"^[0-9]+$")
_ALNUM_RE = re.compile(r"^[A-Za-z0-9]+$")

SUBTAG_SEPARATORS = re.compile(r"[-_]")


def is_alpha(s: str) -> bool:
    return bool(_ALPHA_RE.match(s))


def is_numeric(s: str) -> bool:
    return bool(_DIGIT_RE.match(s))


def is_alphanumeric(s: str) -> bool:
    return bool(_ALNUM_RE.match(s))


def is_language(s: str) -> bool:
    """
    Check a primary language subtag: 2*3ALPHA (ISO 639, with optional
    extended language subtags following), 4ALPHA (reserved) or 5*8ALPHA
    (registered).

    :param s: The subtag to check.
    :type s: str
    :return: True if the subtag is a well-formed language subtag.
    :rtype: bool
    """
    return 2 <= len(s) <= 8 and is_alpha(s)


def is_extlang(s: str) -> bool:
    return len(s) == 3 and is_alpha(s)


def is_script(s: str) -> bool:
    return len(s) == 4 and is_alpha(s)


def is_region(s: str) -> bool:
    return (len(s) == 2 and is_alpha(s)) or (len(s) == 3 and is_numeric(s))


def is_variant(s: str) -> bool:
    """
    Check a variant subtag: 5*8alphanum, or a digit followed by 3alphanum.

    :param s: The subtag to check.
    :type s: str
    :return: True if the subtag is a well-formed variant subtag.
    :rtype: bool
    """
    if 5 <= len(s) <= 8:
        return is_alphanumeric(s)
    if len(s) == 4:
        return s[0].isdigit() and is_alphanumeric(s)
    return False


def is_extension_singleton(s: str) -> bool:
    return len(s) == 1 and is_alphanumeric(s) and s.lower() != PRIVATE_USE


def is_extension_subtag(s: str) -> bool:
    return 2 <= len(s) <= 8 and is_alphanumeric(s)


def is_private_use_prefix(s: str) -> bool:
    return s.lower() == PRIVATE_USE


def is_private_use_subtag(s: str) -> bool:
    return 1 <= len(s) <= 8 and is_alphanumeric(s)


def is_unicode_locale_key(s: str) -> bool:
    return len(s) == 2 and is_alphanumeric(s)


def is_unicode_locale_type_subtag(s: str) -> bool:
    return 3 <= len(s) <= 8 and is_alphanumeric(s)


def is_unicode_locale_attribute(s: str) -> bool:
    return 3 <= len(s) <= 8 and is_alphanumeric(s)


def is_unicode_locale_type(s: str) -> bool:
    """
    Check a (possibly multi-subtag) Unicode locale type such as ``islamic-civil``.

    :param s: The type value, subtags separated by ``-`` or ``_``.
    :type s: str
    :return: True if every subtag is 3 to 8 alphanumerics.
    :rtype: bool
    """
    return all(is_unicode_locale_type_subtag(t) for t in SUBTAG_SEPARATORS.split(s))


def canonicalize_language(s: str) -> str:
    return s.lower()


def canonicalize_script(s: str) -> str:
    return s[:1].upper() + s[1:].lower()


def canonicalize_region(s: str) -> str:
    return s.upper()


def canonicalize_variant(s: str) -> str:
    return s.lower()


def canonicalize_extension(s: str) -> str:
    return s.lower()
