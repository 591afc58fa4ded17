"""
UMDP error types — one per rule a datagram can violate.
"""

from typing import Any, Optional


class UMDPError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class FormatError(UMDPError):
    """Malformed datagram shape or wrong tag."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("format_error", message, details)


class SessionMismatchError(UMDPError):
    def __init__(self, expected: str, got: str):
        super().__init__(
            "session_mismatch",
            f"Invalid datagram: Session ID mismatch. Expected {expected}.",
            {"expected": expected, "got": got},
        )


class TurnOrderError(UMDPError):
    """A party would speak twice in a row."""

    def __init__(self, message: str, sender: str):
        super().__init__("turn_order", message, {"sender": sender})


class ChecksumError(UMDPError):
    def __init__(self, expected: str, got: str):
        super().__init__(
            "checksum_mismatch",
            "Invalid datagram: Data corruption detected (checksum mismatch).",
            {"expected": expected, "got": got},
        )


class SequenceError(UMDPError):
    def __init__(self, expected: int, got: str):
        super().__init__(
            "sequence_error",
            f"Invalid datagram: Sequence error. Expected packet {expected}, got {got or 'nothing'}.",
            {"expected": expected, "got": got},
        )


class DecodeError(UMDPError):
    def __init__(self, message: str = "Invalid Base64 sequence."):
        super().__init__("decode_error", message)


class EncodeError(UMDPError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("encode_error", message, details)
