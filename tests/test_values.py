import pytest

from funlang.values import FunValue, IntValue, RefValue, TupleValue, unit_value


def test_int_values_compare_by_number():
    assert IntValue(5) == IntValue(5)
    assert IntValue(5) != IntValue(6)
    assert str(IntValue(-3)) == "-3"


def test_int_wraps_to_32_bits():
    assert IntValue(2**31).num == -(2**31)
    assert IntValue(2**31 - 1).num == 2**31 - 1
    assert IntValue(-(2**31) - 1).num == 2**31 - 1


def test_each_ref_is_distinct_storage():
    a = RefValue(IntValue(1))
    b = RefValue(IntValue(1))
    assert a != b
    assert a == a


def test_ref_is_mutable():
    r = RefValue(IntValue(1))
    r.base = IntValue(2)
    assert r.base == IntValue(2)


def test_fun_values_compare_by_name():
    assert FunValue("main") == FunValue("main")
    assert FunValue("main") != FunValue("printint")
    assert str(FunValue("main")) == "main"


def test_tuple_value_access_and_string():
    t = TupleValue([IntValue(1), TupleValue([IntValue(2), IntValue(3)])])
    assert len(t) == 2
    assert t[0] == IntValue(1)
    assert str(t) == "<1, <2, 3>>"
    with pytest.raises(IndexError):
        t[5]


def test_tuples_compare_structurally():
    assert TupleValue([IntValue(1), IntValue(2)]) == TupleValue(
        (IntValue(1), IntValue(2))
    )


def test_unit_value():
    assert unit_value() is unit_value()
    assert unit_value() == TupleValue()
    assert str(unit_value()) == "<>"
    assert len(unit_value()) == 0