import pytest

from funlang.funtypes import (
    FunType,
    IntType,
    RefType,
    TupleType,
    int_type,
    unit_type,
)


def test_int_type_is_shared_and_equal():
    assert int_type() is int_type()
    assert int_type() == IntType()


def test_unit_is_empty_tuple():
    assert unit_type() == TupleType([])
    assert len(unit_type()) == 0
    assert str(unit_type()) == "<>"


def test_structural_equality():
    assert RefType(int_type()) == RefType(IntType())
    assert FunType(int_type(), unit_type()) == FunType(IntType(), TupleType())
    assert FunType(int_type(), unit_type()) != FunType(unit_type(), int_type())
    assert RefType(int_type()) != int_type()


def test_types_hashable_and_usable_as_keys():
    t1 = TupleType([int_type(), RefType(int_type())])
    t2 = TupleType((IntType(), RefType(IntType())))
    assert {t1: 1}[t2] == 1


def test_tuple_indexing():
    ref = RefType(int_type())
    t = TupleType([int_type(), ref])
    assert len(t) == 2
    assert t[0] == int_type()
    assert t[1] == ref
    with pytest.raises(IndexError):
        t[2]


def test_tuple_to_string():
    t = TupleType([int_type(), TupleType([int_type(), int_type()])])
    assert str(t) == "<int, <int, int>>"


def test_nested_string_forms():
    assert str(RefType(int_type())) == "int ref"
    assert str(FunType(int_type(), int_type())) == "int->int"


def test_types_are_immutable():
    t = RefType(int_type())
    with pytest.raises(AttributeError):
        t.base = unit_type()