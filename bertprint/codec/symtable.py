"""Append-only string arena used to intern atom names."""

from __future__ import annotations


class SymbolTable:
    """Text arena handing out ``(offset, length)`` handles.

    ``add`` never deduplicates; every call appends.  Handles stay valid for
    the lifetime of the table because the arena only grows.
    """

    def __init__(self):
        self._chunks: list[str] = []
        self._joined = ""
        self._cursor = 0

    def __len__(self) -> int:
        return self._cursor

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"SymbolTable(len={self._cursor}, entries={len(self._chunks)})"

    def add(self, text: str) -> tuple[int, int]:
        handle = (self._cursor, len(text))
        self._chunks.append(text)
        self._cursor += len(text)
        return handle

    def get(self, offset: int, length: int) -> str:
        if offset < 0 or length < 0 or offset + length > self._cursor:
            raise IndexError(
                f"Symbol handle ({offset}, {length}) outside table of length {self._cursor}"
            )
        if len(self._joined) != self._cursor:
            self._joined = "".join(self._chunks)
        return self._joined[offset : offset + length]


__all__ = ["SymbolTable"]
