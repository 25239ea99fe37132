"""Exceptions raised by the localeid library."""

from typing import Optional


class LocaleIDError(Exception):
    """
    Exception raised for errors in the localeid library.
    This is a generic exception that can be used to indicate various types of
    errors encountered while using the localeid library.
    """

    pass


class IllformedLocaleError(LocaleIDError):
    """
    Exception raised by the strict construction path when a field does not
    satisfy the BCP47 subtag grammar.

    :param message: Description of the problem.
    :type message: str
    :param field: Name of the offending field (``language``, ``script``, ``region``,
                  ``variant``, ``extension``, ``keyword``, ``attribute`` or ``tag``).
    :type field: str
    :param index: Index of the offending subtag in the input value.
    :type index: int
    :param value: The rejected input value.
    :type value: Optional[str]
    """

    field: str
    """Name of the offending field."""

    index: int
    """Index of the offending subtag in the input value."""

    value: Optional[str]
    """The rejected input value."""

    def __init__(
        self,
        message: str,
        field: str = "tag",
        index: int = 0,
        value: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.index = index
        self.value = value

    def __str__(self) -> str:
        return f"{self.args[0]} [field={self.field}, at index {self.index}]"


class AcceptLanguageError(LocaleIDError):
    """
    Exception raised when an Accept-Language header cannot be scanned.
    The ``index`` attribute points at the offending character.

    :param message: Description of the problem.
    :type message: str
    :param index: Index of the offending character.
    :type index: int
    """

    index: int
    """Index of the offending character in the header."""

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index

    def __str__(self) -> str:
        return f"{self.args[0]} at index {self.index}"


class DataError(LocaleIDError):
    """
    Exception raised when a data table (likely subtags, key/type data)
    cannot be read or has an unexpected structure.
    """

    pass


class PathError(LocaleIDError):
    """
    Exception raised for errors in the file paths used by localeid.
    This error is raised when a configured data file or data directory does
    not exist, or when a CLDR release could not be found at a download URL.
    """

    pass
