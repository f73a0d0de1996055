"""Exception types raised by documents and traits."""

from __future__ import annotations


class TraitsError(Exception):
    """Base class for every error raised by analytics_traits."""


class TypeMismatchError(TraitsError, TypeError):
    """A value does not conform to the type a getter or putter requires."""

    def __init__(self, key: str, expected: str, value: object):
        self.key = key
        self.expected = expected
        self.value = value
        super().__init__(
            f"{key!r}: expected {expected}, got {type(value).__name__} {value!r}"
        )


class MalformedDocumentError(TraitsError, ValueError):
    """Text could not be parsed into a document."""


class InvalidDateError(TraitsError, ValueError):
    """A date value cannot be interpreted as an instant in time."""
