"""Decoder for the Erlang External Term Format (BERT and BERT2 framing)."""

from __future__ import annotations

import re
import struct
from typing import Callable, Optional

from ..constants import (
    ATOM_EXT,
    ATOM_UTF8_EXT,
    BINARY_EXT,
    FLOAT_EXT,
    FLOAT_EXT_WIDTH,
    INTEGER_EXT,
    LARGE_BIG_EXT,
    LARGE_TUPLE_EXT,
    LIST_EXT,
    MAGIC_NUMBER,
    MAP_EXT,
    NEW_FLOAT_EXT,
    NIL_EXT,
    SMALL_ATOM_EXT,
    SMALL_ATOM_UTF8_EXT,
    SMALL_BIG_EXT,
    SMALL_INTEGER_EXT,
    SMALL_TUPLE_EXT,
    STRING_EXT,
    VARINT_MAX_BYTES,
)
from .core import NIL, Atom, BigInt, Binary, Float, Int, List, Map, Nil, String, Term, Tuple
from .errors import (
    InvalidFloat,
    InvalidLatin1Atom,
    InvalidMagicNumber,
    InvalidTag,
    InvalidUtf8Atom,
    NestingTooDeep,
    TrailingData,
    UnexpectedEof,
    VarintTooLarge,
)
from .symtable import SymbolTable

_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:\d+(?:\.\d*)?(?:e[+-]?\d+)?|\.\d+(?:e[+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class Parser:
    """Single-use decode session over a fully buffered input.

    Decoding recurses once per nesting level.  Without ``max_depth`` the
    only bound is the interpreter's recursion limit, which surfaces as
    :class:`NestingTooDeep` rather than a bare ``RecursionError``.
    """

    def __init__(
        self,
        data: bytes,
        symtable: Optional[SymbolTable] = None,
        *,
        max_depth: Optional[int] = None,
    ):
        self.data = bytes(data)
        self.pos = 0
        self.symtable = symtable if symtable is not None else SymbolTable()
        self.max_depth = max_depth
        self._end = len(self.data)
        self._depth = 0
        self._dispatch: dict[int, Callable[[], Term]] = {
            SMALL_INTEGER_EXT: self._small_integer,
            INTEGER_EXT: self._integer,
            FLOAT_EXT: self._old_float,
            NEW_FLOAT_EXT: self._new_float,
            ATOM_EXT: lambda: self._atom(self._u16()),
            SMALL_ATOM_EXT: lambda: self._atom(self._u8()),
            ATOM_UTF8_EXT: lambda: self._atom_utf8(self._u16()),
            SMALL_ATOM_UTF8_EXT: lambda: self._atom_utf8(self._u8()),
            SMALL_TUPLE_EXT: lambda: self._tuple(self._u8()),
            LARGE_TUPLE_EXT: lambda: self._tuple(self._u32()),
            NIL_EXT: lambda: NIL,
            STRING_EXT: self._string,
            LIST_EXT: self._list,
            BINARY_EXT: self._binary,
            SMALL_BIG_EXT: lambda: self._bigint(self._u8()),
            LARGE_BIG_EXT: lambda: self._bigint(self._u32()),
            MAP_EXT: self._map,
        }

    def parse(self) -> Term:
        """Decode ``[magic][term]`` and reject anything after the term."""

        self._magic_number()
        term = self._top_term()
        if not self.eof():
            raise TrailingData(self.pos)
        return term

    def parse_sequence(self) -> list[Term]:
        """Decode BERT2 framing: ``[varint length][magic][term]`` repeated."""

        terms: list[Term] = []
        total = len(self.data)
        while not self.eof():
            length = self.parse_varint()
            record_end = self.pos + length
            self._end = min(record_end, total)
            try:
                self._magic_number()
                terms.append(self._top_term())
            finally:
                self._end = total
            if record_end > total:
                raise UnexpectedEof(total, f"record declares {length} bytes")
            if self.pos != record_end:
                raise TrailingData(self.pos)
        return terms

    def parse_varint(self) -> int:
        """Read a little-endian base-128 varint of at most 8 bytes."""

        start = self.pos
        value = 0
        for i in range(VARINT_MAX_BYTES):
            b = self._u8()
            value |= (b & 0x7F) << (7 * i)
            if not b & 0x80:
                return value
        raise VarintTooLarge(start)

    # Structure

    def _magic_number(self) -> None:
        offset = self.pos
        if self._u8() != MAGIC_NUMBER:
            raise InvalidMagicNumber(offset)

    def _top_term(self) -> Term:
        try:
            return self._term()
        except RecursionError as exc:
            raise NestingTooDeep(self.pos, "interpreter recursion limit reached") from exc

    def _term(self) -> Term:
        offset = self.pos
        tag = self._u8()
        handler = self._dispatch.get(tag)
        if handler is None:
            raise InvalidTag(offset, tag)
        self._depth += 1
        try:
            if self.max_depth is not None and self._depth > self.max_depth:
                raise NestingTooDeep(offset, f"limit is {self.max_depth}")
            return handler()
        finally:
            self._depth -= 1

    def _small_integer(self) -> Term:
        return Int(self._u8())

    def _integer(self) -> Term:
        return Int(int.from_bytes(self._take(4), "big", signed=True))

    def _old_float(self) -> Term:
        offset = self.pos
        raw = self._take(FLOAT_EXT_WIDTH).split(b"\x00", 1)[0]
        try:
            text = raw.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidFloat(offset, "non-ASCII float text") from exc
        if not _FLOAT_LITERAL.fullmatch(text):
            raise InvalidFloat(offset, repr(text))
        return Float(float(text))

    def _new_float(self) -> Term:
        return Float(struct.unpack(">d", self._take(8))[0])

    def _atom(self, length: int) -> Term:
        offset = self.pos
        raw = self._take(length)
        if raw.isascii():
            text = raw.decode("ascii")
        else:
            try:
                text = raw.decode("latin-1")
            except UnicodeDecodeError as exc:  # pragma: no cover - latin-1 maps every byte
                raise InvalidLatin1Atom(offset) from exc
        return self._intern(text)

    def _atom_utf8(self, length: int) -> Term:
        offset = self.pos
        raw = self._take(length)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8Atom(offset, exc.reason) from exc
        return self._intern(text)

    def _intern(self, text: str) -> Term:
        offset, length = self.symtable.add(text)
        return Atom(offset, length)

    def _tuple(self, arity: int) -> Term:
        return Tuple([self._term() for _ in range(arity)])

    def _string(self) -> Term:
        return String(self._take(self._u16()))

    def _binary(self) -> Term:
        return Binary(self._take(self._u32()))

    def _list(self) -> Term:
        length = self._u32()
        items = [self._term() for _ in range(length)]
        tail = self._term()
        if not isinstance(tail, Nil):
            items.append(tail)
        return List(items)

    def _bigint(self, digit_count: int) -> Term:
        sign = self._u8()
        magnitude = int.from_bytes(self._take(digit_count), "little")
        return BigInt(-magnitude if sign == 1 else magnitude)

    def _map(self) -> Term:
        pairs = self._u32()
        keys: list[Term] = []
        values: list[Term] = []
        for _ in range(pairs):
            keys.append(self._term())
            values.append(self._term())
        return Map(keys, values)

    # Low-level reads

    def eof(self) -> bool:
        return self.pos >= self._end

    def _take(self, count: int) -> bytes:
        if self.pos + count > self._end:
            raise UnexpectedEof(self._end)
        chunk = self.data[self.pos : self.pos + count]
        self.pos += count
        return chunk

    def _u8(self) -> int:
        return self._take(1)[0]

    def _u16(self) -> int:
        return int.from_bytes(self._take(2), "big")

    def _u32(self) -> int:
        return int.from_bytes(self._take(4), "big")


def decode(data: bytes, *, max_depth: Optional[int] = None) -> tuple[Term, SymbolTable]:
    """Decode a single BERT term and return it with its symbol table."""

    parser = Parser(data, max_depth=max_depth)
    return parser.parse(), parser.symtable


def decode_sequence(
    data: bytes, *, max_depth: Optional[int] = None
) -> tuple[list[Term], SymbolTable]:
    """Decode every BERT2 record in *data*."""

    parser = Parser(data, max_depth=max_depth)
    return parser.parse_sequence(), parser.symtable


__all__ = ["Parser", "decode", "decode_sequence"]
