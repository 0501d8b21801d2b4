from dataclasses import FrozenInstanceError

import pytest

from bertprint.codec.core import (
    NIL,
    Atom,
    BigInt,
    Binary,
    Float,
    Int,
    List,
    Map,
    Nil,
    String,
    Tuple,
    is_basic,
)
from bertprint.codec.symtable import SymbolTable


@pytest.mark.parametrize(
    "term",
    [NIL, Int(1), BigInt(2**40), Float(1.5), Atom(0, 2), String(b"ab"), Binary(b"\x00")],
)
def test_scalars_are_basic(term):
    assert is_basic(term)
    assert term.children() == ()


@pytest.mark.parametrize("term", [Tuple(), List(), Map()])
def test_collections_are_not_basic(term):
    assert not is_basic(term)


def test_collections_store_tuples():
    lst = List([Int(1), Int(2)])
    assert lst.items == (Int(1), Int(2))
    assert lst == List((Int(1), Int(2)))
    assert hash(lst) == hash(List((Int(1), Int(2))))


def test_terms_are_immutable():
    term = Int(3)
    with pytest.raises(FrozenInstanceError):
        term.value = 4


def test_map_requires_parallel_sequences():
    with pytest.raises(ValueError, match="2 keys but 1 values"):
        Map([Int(1), Int(2)], [Int(3)])


def test_map_pairs_and_children_alternate():
    m = Map([Int(1), Int(2)], [Int(10), Int(20)])

    assert m.pairs() == [(Int(1), Int(10)), (Int(2), Int(20))]
    assert m.children() == (Int(1), Int(10), Int(2), Int(20))


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1])
def test_int_is_limited_to_32_bits(value):
    with pytest.raises(ValueError):
        Int(value)


def test_nil_is_distinct_from_empty_collections():
    assert Nil() == NIL
    assert NIL != List()
    assert NIL != Tuple()


def test_atom_resolves_through_symbol_table():
    table = SymbolTable()
    table.add("ignored")
    atom = Atom(*table.add("ok"))

    assert atom.resolve(table) == "ok"
