"""Core term data structures produced by the decoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable

from ..constants import INT32_MAX, INT32_MIN
from .symtable import SymbolTable


class Term:
    """Base class for every decoded value.

    Subclasses are frozen dataclasses; ``kind`` names the variant and
    ``basic`` says whether the renderer may pack it on a single line.
    """

    kind: ClassVar[str] = "term"
    basic: ClassVar[bool] = True

    def children(self) -> tuple["Term", ...]:
        return ()


@dataclass(frozen=True)
class Nil(Term):
    kind: ClassVar[str] = "nil"


NIL = Nil()


@dataclass(frozen=True)
class Int(Term):
    value: int
    kind: ClassVar[str] = "int"

    def __post_init__(self):
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise ValueError(f"Int out of 32-bit range: {self.value}")


@dataclass(frozen=True)
class BigInt(Term):
    value: int
    kind: ClassVar[str] = "bigint"


@dataclass(frozen=True)
class Float(Term):
    value: float
    kind: ClassVar[str] = "float"


@dataclass(frozen=True)
class Atom(Term):
    """Back-reference into a :class:`SymbolTable`."""

    offset: int
    length: int
    kind: ClassVar[str] = "atom"

    def resolve(self, symtable: SymbolTable) -> str:
        return symtable.get(self.offset, self.length)


def _freeze(items: Iterable[Term]) -> tuple[Term, ...]:
    return tuple(items)


@dataclass(frozen=True)
class Tuple(Term):
    items: tuple[Term, ...] = ()
    kind: ClassVar[str] = "tuple"
    basic: ClassVar[bool] = False

    def __post_init__(self):
        object.__setattr__(self, "items", _freeze(self.items))

    def children(self) -> tuple[Term, ...]:
        return self.items


@dataclass(frozen=True)
class List(Term):
    """Proper or improper list.

    An improper tail is stored as the last element, so ``[a | b]`` and
    ``[a, b]`` decode to the same value.
    """

    items: tuple[Term, ...] = ()
    kind: ClassVar[str] = "list"
    basic: ClassVar[bool] = False

    def __post_init__(self):
        object.__setattr__(self, "items", _freeze(self.items))

    def children(self) -> tuple[Term, ...]:
        return self.items


@dataclass(frozen=True)
class Map(Term):
    keys: tuple[Term, ...] = ()
    values: tuple[Term, ...] = ()
    kind: ClassVar[str] = "map"
    basic: ClassVar[bool] = False

    def __post_init__(self):
        object.__setattr__(self, "keys", _freeze(self.keys))
        object.__setattr__(self, "values", _freeze(self.values))
        if len(self.keys) != len(self.values):
            raise ValueError(
                f"Map has {len(self.keys)} keys but {len(self.values)} values"
            )

    def pairs(self) -> list[tuple[Term, Term]]:
        return list(zip(self.keys, self.values))

    def children(self) -> tuple[Term, ...]:
        out: list[Term] = []
        for key, value in zip(self.keys, self.values):
            out.append(key)
            out.append(value)
        return tuple(out)


@dataclass(frozen=True)
class String(Term):
    """STRING_EXT payload, kept as raw bytes."""

    data: bytes = b""
    kind: ClassVar[str] = "string"


@dataclass(frozen=True)
class Binary(Term):
    data: bytes = b""
    kind: ClassVar[str] = "binary"


def is_basic(term: Term) -> bool:
    """Return True when *term* is not a Tuple, List or Map."""

    return term.basic


__all__ = [
    "Atom",
    "BigInt",
    "Binary",
    "Float",
    "Int",
    "List",
    "Map",
    "NIL",
    "Nil",
    "String",
    "Term",
    "Tuple",
    "is_basic",
]
