"""
Exception hierarchy for WidgetForge.

These errors signal mistakes made while assembling or driving a widget tree.
They are raised at the call site and are never caught inside the toolkit.
"""

from __future__ import annotations

from typing import Any


class WidgetForgeError(RuntimeError):
    """
    Base exception for all WidgetForge errors.

    Attributes:
        message: Human-readable error message.
        detail: Additional error details (optional).
    """

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class DuplicateIdError(WidgetForgeError):
    """Raised when an id or key is registered twice in the same scope."""

    def __init__(self, message: str, *, id: str | None = None) -> None:
        super().__init__(message)
        self.id = id


class WidgetNotFoundError(WidgetForgeError):
    """Raised when a widget looked up by id or key does not exist."""

    def __init__(self, message: str, *, id: str | None = None) -> None:
        super().__init__(message)
        self.id = id


class InvalidClassError(WidgetForgeError):
    """Raised when an object of an unsupported kind is used."""

    def __init__(self, message: str, *, value: Any = None) -> None:
        super().__init__(message, detail=f"got {type(value).__name__}")
        self.value = value


class InvalidSerializedDataError(WidgetForgeError):
    """Raised when submitted serialized data does not decode to an expected value."""

    def __init__(self, message: str, *, data: Any = None) -> None:
        super().__init__(message)
        self.data = data


class UndefinedMessageTypeError(WidgetForgeError):
    """Raised when a message type is used that is not defined."""

    def __init__(self, message: str, *, message_type: str | None = None) -> None:
        super().__init__(message)
        self.message_type = message_type


class InvalidCharacterEncodingError(WidgetForgeError):
    """Raised when character data is not valid UTF-8."""


class IntegerOverflowError(OverflowError):
    """
    Raised when an integer does not fit the supported range.

    Attributes:
        sign: 1 for positive overflow, -1 for negative overflow.
    """

    def __init__(self, message: str, *, sign: int = 1) -> None:
        super().__init__(message)
        self.sign = sign
