"""
Custom Exception Hierarchy for collectd_wire

Provides structured exceptions for decode failures and configuration problems.
All custom exceptions inherit from CollectdWireError base class.
"""
from typing import Optional


class CollectdWireError(Exception):
    """
    Base exception for all collectd_wire errors.

    All custom exceptions should inherit from this class to allow
    catching all decoder errors with a single except clause.
    """
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# Configuration Errors

class ConfigurationError(CollectdWireError):
    """
    Invalid configuration or settings.

    Raised when settings validation fails, e.g. a non-positive datagram limit.
    """
    pass


# Decode Errors

class DecodeError(CollectdWireError):
    """
    A datagram could not be decoded.

    Base class for all wire-format failures. Every DecodeError is terminal
    for the packet being decoded: no parts are returned alongside it.
    """
    pass


class ShortBufferError(DecodeError):
    """Fewer bytes remain than a fixed-width field requires."""
    def __init__(self, needed: int, remaining: int, message: Optional[str] = None):
        super().__init__(
            message or f"Need {needed} bytes, only {remaining} remaining",
            {"needed": needed, "remaining": remaining},
        )
        self.needed = needed
        self.remaining = remaining


class InvalidLengthError(DecodeError):
    """
    A part's declared length contradicts its content rules.

    Examples: a header length below 4, an empty text part, numeric content
    that is not exactly 8 bytes, a value list that leaves bytes unread.
    """
    def __init__(
        self,
        message: str,
        type_code: Optional[int] = None,
        length: Optional[int] = None,
        reason: str = "invalid_length",
    ):
        super().__init__(message, {"type_code": type_code, "length": length, "reason": reason})
        self.type_code = type_code
        self.length = length
        self.reason = reason


class UnknownValueKindError(DecodeError):
    """A value-list entry carries a kind tag outside {0, 1, 2, 3}."""
    def __init__(self, kind: int, index: int):
        super().__init__(
            f"Unknown value kind {kind} at value index {index}",
            {"kind": kind, "index": index},
        )
        self.kind = kind
        self.index = index


# Interpretation Errors

class RecordAssemblyError(CollectdWireError):
    """
    Decoded parts cannot be folded into metric records.

    Raised when a value list arrives before the host, plugin or type
    that identifies it.
    """
    pass
