"""
Rivulet Errors - Exception Types Raised or Carried by Streams
=============================================================

User-domain errors travel through streams as opaque payloads inside an
Error event and are never inspected. The classes here cover the conditions
the library itself reports.
"""


class RivuletError(Exception):
    """Base class for errors produced by rivulet itself."""


class SubjectDisposedError(RivuletError):
    """
    Delivered as the only event to an observer that attaches to a subject
    (or relay) after the subject was explicitly disposed.
    """

    def __init__(self, message: str = "Object `Subject` was already disposed.") -> None:
        super().__init__(message)


class ArgumentOutOfRangeError(RivuletError, ValueError):
    """
    Raised eagerly for invalid operator arguments, and delivered as an Error
    event by `element_at` when the source completes before the index.
    """

    def __init__(self, message: str = "Argument out of range.") -> None:
        super().__init__(message)


class SequenceContainsNoElementsError(RivuletError):
    """A `Single` was built from a sequence that completed without elements."""

    def __init__(self, message: str = "Sequence contains no elements.") -> None:
        super().__init__(message)


class SequenceContainsMoreThanOneElementError(RivuletError):
    """A `Single` or `Maybe` was built from a sequence with several elements."""

    def __init__(
        self, message: str = "Sequence contains more than one element."
    ) -> None:
        super().__init__(message)
