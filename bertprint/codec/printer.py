"""Indented text rendering of decoded terms."""

from __future__ import annotations

import io
import math
from decimal import Decimal
from typing import Sequence, TextIO

from ..constants import DEFAULT_INDENT_WIDTH, DEFAULT_MAX_TERMS_PER_LINE
from .core import (
    Atom,
    BigInt,
    Binary,
    Float,
    Int,
    List,
    Map,
    Nil,
    String,
    Term,
    Tuple,
    is_basic,
)
from .symtable import SymbolTable


def _is_printable(b: int) -> bool:
    return 0x20 <= b <= 0x7E


def escape_bytes(data: bytes) -> str:
    """Printable ASCII verbatim, everything else as ``\\xHH``."""

    return "".join(chr(b) if _is_printable(b) else f"\\x{b:02x}" for b in data)


def format_float(value: float) -> str:
    """Plain decimal text without an exponent; integral values keep ``.0``."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text


class PrettyPrinter:
    """Render *term* using Erlang-like syntax.

    A collection stays on one line when it holds at most
    ``max_terms_per_line`` elements and none of them is a collection;
    otherwise each element gets its own line, indented ``indent_width``
    spaces per level.  Maps apply the rule to keys and values separately.
    """

    def __init__(
        self,
        term: Term,
        symtable: SymbolTable,
        indent_width: int = DEFAULT_INDENT_WIDTH,
        max_terms_per_line: int = DEFAULT_MAX_TERMS_PER_LINE,
    ):
        if indent_width < 0:
            raise ValueError("indent_width must be non-negative")
        if max_terms_per_line < 0:
            raise ValueError("max_terms_per_line must be non-negative")
        self.term = term
        self.symtable = symtable
        self.indent_width = indent_width
        self.max_terms_per_line = max_terms_per_line

    def __str__(self) -> str:
        return self.render()

    def render(self) -> str:
        buf = io.StringIO()
        self.write(buf)
        return buf.getvalue()

    def write(self, out: TextIO) -> None:
        """Stream the rendering into *out*; write errors propagate."""

        self._write_term(self.term, out, 0)

    def _write_term(self, term: Term, out: TextIO, depth: int) -> None:
        if isinstance(term, Nil):
            out.write("[]")
        elif isinstance(term, (Int, BigInt)):
            out.write(str(term.value))
        elif isinstance(term, Float):
            out.write(format_float(term.value))
        elif isinstance(term, Atom):
            out.write(term.resolve(self.symtable))
        elif isinstance(term, String):
            out.write('"' + escape_bytes(term.data) + '"')
        elif isinstance(term, Binary):
            out.write('<<"' + escape_bytes(term.data) + '">>')
        elif isinstance(term, List):
            self._write_collection(term.items, out, depth, "[", "]")
        elif isinstance(term, Tuple):
            self._write_collection(term.items, out, depth, "{", "}")
        elif isinstance(term, Map):
            self._write_map(term, out, depth)
        else:
            raise TypeError(f"Cannot render {type(term).__name__}")

    def _write_collection(
        self, terms: Sequence[Term], out: TextIO, depth: int, open_: str, close: str
    ) -> None:
        multi_line = not self._is_small_collection(terms)
        prefix = self._indentation(depth + 1) if multi_line else ""
        comma = "," if multi_line else ", "

        out.write(open_)
        for i, term in enumerate(terms):
            if i:
                out.write(comma)
            out.write(prefix)
            self._write_term(term, out, depth + 1)
        if multi_line:
            out.write(self._indentation(depth))
        out.write(close)

    def _write_map(self, term: Map, out: TextIO, depth: int) -> None:
        multi_line = not (
            self._is_small_collection(term.keys)
            and self._is_small_collection(term.values)
        )
        prefix = self._indentation(depth + 1) if multi_line else ""
        comma = "," if multi_line else ", "

        out.write("#{")
        for i, (key, value) in enumerate(zip(term.keys, term.values)):
            if i:
                out.write(comma)
            out.write(prefix)
            self._write_term(key, out, depth + 1)
            out.write(" => ")
            self._write_term(value, out, depth + 1)
        if multi_line:
            out.write(self._indentation(depth))
        out.write("}")

    def _is_small_collection(self, terms: Sequence[Term]) -> bool:
        return len(terms) <= self.max_terms_per_line and all(
            is_basic(t) for t in terms
        )

    def _indentation(self, depth: int) -> str:
        return "\n" + " " * (depth * self.indent_width)


def pretty_print(
    term: Term,
    symtable: SymbolTable,
    indent_width: int = DEFAULT_INDENT_WIDTH,
    max_terms_per_line: int = DEFAULT_MAX_TERMS_PER_LINE,
) -> str:
    """Return the rendering of *term* as a string."""

    return PrettyPrinter(term, symtable, indent_width, max_terms_per_line).render()


__all__ = ["PrettyPrinter", "escape_bytes", "format_float", "pretty_print"]
