import io

import pytest

from funlang.environment import FunError
from funlang.interpreter import Interpreter, interpret
from funlang.nodes import (
    BinExp,
    CallExp,
    FunDecl,
    IdExp,
    IfExp,
    IntExp,
    IntTypeNode,
    LetExp,
    Program,
    ProjExp,
    SeqExp,
    TupleExp,
    UnExp,
    WhileExp,
)
from funlang.opinfo import OpKind
from funlang.values import IntValue, RefValue, unit_value


def decl(name, param, body):
    return FunDecl(name, param, IntTypeNode(), IntTypeNode(), body)


def main_program(body, *others):
    return Program([decl("main", "x", body), *others])


def x():
    return IdExp("x")


def test_main_returns_argc():
    assert interpret(main_program(x()), 5) == IntValue(5)


def test_interpreter_class_matches_function():
    program = main_program(BinExp(OpKind.ADD, x(), IntExp(3)))
    assert Interpreter(program).run(4) == interpret(program, 4)


@pytest.mark.parametrize("argc", [0, 3, 17])
def test_add_then_sub_is_identity(argc):
    body = BinExp(OpKind.SUB, BinExp(OpKind.ADD, x(), IntExp(9)), IntExp(9))
    assert interpret(main_program(body), argc) == IntValue(argc)


def test_addition_and_multiplication_commute():
    ab = interpret(main_program(BinExp(OpKind.ADD, x(), IntExp(11))), 6)
    ba = interpret(main_program(BinExp(OpKind.ADD, IntExp(11), x())), 6)
    mab = interpret(main_program(BinExp(OpKind.MUL, x(), IntExp(11))), 6)
    mba = interpret(main_program(BinExp(OpKind.MUL, IntExp(11), x())), 6)
    assert ab == ba
    assert mab == mba


def test_comparisons_yield_zero_or_one():
    lt = BinExp(OpKind.LT, x(), BinExp(OpKind.ADD, x(), IntExp(1)))
    assert interpret(main_program(lt), 2) == IntValue(1)
    assert interpret(main_program(BinExp(OpKind.LT, x(), x())), 2) == IntValue(0)
    assert interpret(main_program(BinExp(OpKind.EQUAL, x(), x())), 2) == IntValue(1)


def test_and_short_circuits():
    unbound_call = CallExp(IdExp("nope"), IntExp(0))
    body = BinExp(OpKind.AND, IntExp(0), unbound_call)
    assert interpret(main_program(body), 1) == IntValue(0)


def test_or_short_circuits():
    unbound_call = CallExp(IdExp("nope"), IntExp(0))
    body = BinExp(OpKind.OR, IntExp(5), unbound_call)
    assert interpret(main_program(body), 1) == IntValue(1)


def test_and_evaluates_rhs_when_needed():
    body = BinExp(OpKind.AND, IntExp(1), IdExp("nope"))
    with pytest.raises(FunError, match="Unbound symbol 'nope' detected"):
        interpret(main_program(body), 1)


def test_printint_writes_line_and_returns_unit():
    buf = io.StringIO()
    body = CallExp(IdExp("printint"), x())
    result = interpret(main_program(body), 42, buf)
    assert buf.getvalue() == "42\n"
    assert result == unit_value()


def test_printint_rejects_non_int():
    body = CallExp(IdExp("printint"), TupleExp())
    with pytest.raises(FunError, match="Argument is not int type"):
        interpret(main_program(body), 1, io.StringIO())


def test_ref_set_and_get():
    body = LetExp(
        "r",
        UnExp(OpKind.REF, IntExp(1)),
        SeqExp(BinExp(OpKind.SET, IdExp("r"), x()), UnExp(OpKind.GET, IdExp("r"))),
    )
    assert interpret(main_program(body), 8) == IntValue(8)


def test_set_returns_unit_and_ref_is_a_cell():
    assert interpret(main_program(UnExp(OpKind.REF, x())), 3) == RefValue(
        IntValue(3)
    ) or isinstance(interpret(main_program(UnExp(OpKind.REF, x())), 3), RefValue)
    body = BinExp(OpKind.SET, UnExp(OpKind.REF, IntExp(1)), x())
    assert interpret(main_program(body), 3) == unit_value()


def test_set_on_non_ref_fails():
    body = BinExp(OpKind.SET, x(), IntExp(1))
    with pytest.raises(FunError, match="Lhs of := operator is not a reference type"):
        interpret(main_program(body), 1)


def test_get_on_non_ref_fails():
    with pytest.raises(FunError, match="Dereference of non-reference type"):
        interpret(main_program(UnExp(OpKind.GET, x())), 1)


@pytest.mark.parametrize("argc", [0, 1, 6])
def test_while_loop_counts_up_to_argc(argc):
    get_i = lambda: UnExp(OpKind.GET, IdExp("i"))  # noqa: E731
    loop = WhileExp(
        BinExp(OpKind.LT, get_i(), x()),
        BinExp(OpKind.SET, IdExp("i"), BinExp(OpKind.ADD, get_i(), IntExp(1))),
    )
    body = LetExp("i", UnExp(OpKind.REF, IntExp(0)), SeqExp(loop, get_i()))
    assert interpret(main_program(body), argc) == IntValue(argc)


def test_while_condition_must_be_int():
    body = WhileExp(TupleExp(), TupleExp())
    with pytest.raises(FunError, match="Condition of while loop is not int type"):
        interpret(main_program(body), 1)


def test_calls_user_function():
    ident = decl("ident", "y", IdExp("y"))
    body = CallExp(IdExp("ident"), x())
    assert interpret(main_program(body, ident), 12) == IntValue(12)


def test_call_of_non_function_fails():
    body = CallExp(IntExp(3), IntExp(1))
    with pytest.raises(FunError, match="is not a function"):
        interpret(main_program(body), 1)


def test_missing_main_fails():
    program = Program([decl("other", "x", x())])
    with pytest.raises(FunError, match="No function main"):
        interpret(program, 1)


def test_function_named_printint_is_rejected():
    program = main_program(x(), decl("printint", "y", IdExp("y")))
    with pytest.raises(FunError, match="Function name printint already exists"):
        interpret(program, 1)


def test_projection():
    body = ProjExp(1, TupleExp([x(), IntExp(7)]))
    assert interpret(main_program(body), 2) == IntValue(7)
    first = ProjExp(0, TupleExp([x(), IntExp(7)]))
    assert interpret(main_program(first), 2) == IntValue(2)


def test_projection_out_of_range():
    body = ProjExp(2, TupleExp([x(), IntExp(7)]))
    with pytest.raises(FunError, match="Tuple size is less than"):
        interpret(main_program(body), 2)


def test_projection_of_non_tuple():
    with pytest.raises(FunError, match="Invalid tuple type for # op"):
        interpret(main_program(ProjExp(0, x())), 2)


def test_if_branches():
    with_else = IfExp(BinExp(OpKind.LT, x(), IntExp(0)), IntExp(1), x())
    assert interpret(main_program(with_else), 9) == IntValue(9)
    without_else = IfExp(x(), x())
    assert interpret(main_program(without_else), 9) == unit_value()
    assert interpret(main_program(without_else), 0) == unit_value()


def test_if_condition_must_be_int():
    with pytest.raises(FunError, match="Condition of if expression is not int type"):
        interpret(main_program(IfExp(TupleExp(), x(), x())), 1)


def test_not_and_unary_minus():
    assert interpret(main_program(UnExp(OpKind.NOT, x())), 0) == IntValue(1)
    assert interpret(main_program(UnExp(OpKind.NOT, x())), 4) == IntValue(0)
    cancel = BinExp(OpKind.ADD, UnExp(OpKind.UMINUS, x()), x())
    assert interpret(main_program(cancel), 4) == IntValue(0)


def test_arithmetic_on_non_int_fails():
    body = BinExp(OpKind.ADD, TupleExp(), x())
    with pytest.raises(FunError, match="Operand is not int type"):
        interpret(main_program(body), 1)


def test_addition_wraps_at_32_bits():
    body = BinExp(OpKind.ADD, IntExp(2147483647), IntExp(1))
    assert interpret(main_program(body), 0) == IntValue(-2147483648)


def test_let_binding_is_scoped():
    inner = LetExp("y", x(), IdExp("y"))
    body = SeqExp(inner, IdExp("y"))
    with pytest.raises(FunError, match="Unbound symbol 'y' detected"):
        interpret(main_program(body), 3)
    assert interpret(main_program(LetExp("y", x(), IdExp("y"))), 3) == IntValue(3)