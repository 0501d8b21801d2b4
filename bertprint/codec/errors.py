"""Exceptions raised while decoding term buffers."""

from __future__ import annotations


class DecodeError(ValueError):
    """Positioned decode failure; ``offset`` is the byte that triggered it."""

    reason = "decode error"

    def __init__(self, offset: int, detail: str | None = None):
        self.offset = offset
        self.detail = detail
        message = f"{self.reason} at offset {offset}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidMagicNumber(DecodeError):
    reason = "invalid magic number"


class InvalidTag(DecodeError):
    reason = "invalid tag"

    def __init__(self, offset: int, tag: int):
        self.tag = tag
        super().__init__(offset, f"{tag}")


class UnexpectedEof(DecodeError):
    reason = "unexpected end of input"


class InvalidFloat(DecodeError):
    reason = "invalid float"


class InvalidLatin1Atom(DecodeError):
    reason = "invalid latin-1 atom"


class InvalidUtf8Atom(DecodeError):
    reason = "invalid UTF-8 atom"


class TrailingData(DecodeError):
    reason = "extra data after term"


class VarintTooLarge(DecodeError):
    reason = "varint too large"


class NestingTooDeep(DecodeError):
    reason = "term nested too deeply"


class SourceError(RuntimeError):
    """Raised when an input file or stream cannot be read."""

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"cannot open {source}"
        if cause is not None and getattr(cause, "strerror", None):
            message = f"{message}: {cause.strerror}"
        super().__init__(message)


__all__ = [
    "DecodeError",
    "InvalidFloat",
    "InvalidLatin1Atom",
    "InvalidMagicNumber",
    "InvalidTag",
    "InvalidUtf8Atom",
    "NestingTooDeep",
    "SourceError",
    "TrailingData",
    "UnexpectedEof",
    "VarintTooLarge",
]
