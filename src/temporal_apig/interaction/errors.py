"""Errors raised by the callback-id codec.

Every decode failure is a deterministic parse failure of untrusted input. None of
them are retryable; they mean the identifier is corrupted, foreign, or was
produced by a version this process does not know.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for all decode failures."""

    def __init__(self, message: str, *, encoded: str | None = None) -> None:
        super().__init__(message)
        self.encoded = encoded


class MalformedVersionError(DecodeError):
    """The encoded string has no section delimiter, so no version can be read."""


class UnknownVersionError(DecodeError):
    def __init__(self, version: str, *, encoded: str | None = None) -> None:
        super().__init__(f"Unknown encoder version: {version!r}", encoded=encoded)
        self.version = version


class MalformedPairError(DecodeError):
    def __init__(self, token: str, *, encoded: str | None = None) -> None:
        super().__init__(f"Not a formatted key:value pair: {token!r}", encoded=encoded)
        self.token = token


class UnknownKeyError(DecodeError):
    def __init__(self, key: str, *, encoded: str | None = None) -> None:
        super().__init__(f"Unknown field code: {key!r}", encoded=encoded)
        self.key = key


class MissingEventKindError(DecodeError):
    """No event-kind pair was supplied in the encoded string."""


class UnknownEventKindError(DecodeError):
    def __init__(self, kind: str, *, encoded: str | None = None) -> None:
        super().__init__(f"Unknown interaction event kind: {kind!r}", encoded=encoded)
        self.kind = kind


class MissingRequiredFieldError(DecodeError):
    def __init__(self, field: str, *, encoded: str | None = None) -> None:
        super().__init__(f"Required field {field!r} not supplied in callback id", encoded=encoded)
        self.field = field


class UnsafeValueError(ValueError):
    """A value contains a delimiter character and would corrupt the encoding."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Value for {field!r} contains a reserved delimiter: {value!r}")
        self.field = field
        self.value = value


class UnhandledInteractionError(TypeError):
    """Raised when a dispatch meets an interaction variant it does not know."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unhandled interaction variant: {type(value).__name__}")
        self.value = value
