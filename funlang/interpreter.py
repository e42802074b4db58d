"""Tree-walking interpreter for Fun programs."""

from __future__ import annotations

import sys
from typing import TextIO

from funlang.environment import Environment, FunError
from funlang.nodes import (
    BinExp,
    CallExp,
    ConstrainExp,
    IdExp,
    IfExp,
    IntExp,
    LetExp,
    Program,
    ProjExp,
    SeqExp,
    TupleExp,
    UnExp,
    WhileExp,
)
from funlang.opinfo import OpKind
from funlang.values import (
    FunValue,
    IntValue,
    RefValue,
    TupleValue,
    Value,
    unit_value,
)

_BUILTIN_PRINTINT = "printint"


class Interpreter:
    """Evaluates a program by calling its ``main`` function.

    ``printint`` is predefined and writes its argument on a line of its own
    to ``output`` (standard output when not given).
    """

    def __init__(self, program: Program, output: TextIO | None = None) -> None:
        self.program = program
        self.output = output
        self.ctxt: Environment[Value] = Environment()

    def run(self, argc: int) -> Value:
        """Run ``main`` with ``argc`` bound to its parameter and return its value."""
        self.ctxt = Environment()
        self.program.accept(self)
        main = self.program.get_fun_decl("main")
        self.ctxt.bind(main.param_name, IntValue(argc))
        result = main.body.accept(self)
        self.ctxt.undo_one()
        return result

    @staticmethod
    def _as_int(value: Value, node, message: str = "Operand is not int type") -> int:
        if not isinstance(value, IntValue):
            raise FunError(message, node.loc)
        return value.num

    def visit_program(self, node: Program) -> None:
        self.ctxt.bind(_BUILTIN_PRINTINT, FunValue(_BUILTIN_PRINTINT))
        for decl in node.fun_decls.values():
            if self.ctxt.has(decl.name):
                raise FunError(f"Function name {decl.name} already exists", decl.loc)
            self.ctxt.bind(decl.name, FunValue(decl.name))
        if not self.ctxt.has("main"):
            raise FunError("No function main", node.loc)
        return None

    def visit_bin_exp(self, node: BinExp) -> Value:
        exp1, exp2 = node.exp1, node.exp2
        v1 = exp1.accept(self)

        # Short-circuit conjunction and disjunction.
        if node.op is OpKind.AND:
            num1 = self._as_int(v1, exp1)
            if num1 == 0:
                return IntValue(0)
            num2 = self._as_int(exp2.accept(self), exp1)
            return IntValue(int(bool(num2)))
        if node.op is OpKind.OR:
            num1 = self._as_int(v1, exp1)
            if num1 != 0:
                return IntValue(1)
            num2 = self._as_int(exp2.accept(self), exp1)
            return IntValue(int(bool(num2)))

        v2 = exp2.accept(self)

        if node.op is OpKind.SET:
            if not isinstance(v1, RefValue):
                raise FunError(
                    "Lhs of := operator is not a reference type", exp1.loc
                )
            v1.base = v2
            return unit_value()

        num1 = self._as_int(v1, exp1)
        num2 = self._as_int(v2, exp1)
        if node.op is OpKind.MUL:
            return IntValue(num1 * num2)
        if node.op is OpKind.ADD:
            return IntValue(num1 + num2)
        if node.op is OpKind.SUB:
            return IntValue(num1 - num2)
        if node.op is OpKind.EQUAL:
            return IntValue(int(num1 == num2))
        if node.op is OpKind.LT:
            return IntValue(int(num1 < num2))
        raise FunError(f"Unsupported binary operator {node.op.name}", node.loc)

    def visit_call_exp(self, node: CallExp) -> Value:
        fun_v = node.fun_exp.accept(self)
        arg_v = node.arg_exp.accept(self)

        if not isinstance(fun_v, FunValue):
            raise FunError(f"{fun_v} is not a function", node.fun_exp.loc)

        if fun_v.name == _BUILTIN_PRINTINT:
            num = self._as_int(arg_v, node.arg_exp, "Argument is not int type")
            print(num, file=self.output if self.output is not None else sys.stdout)
            return unit_value()

        decl = self.program.get_fun_decl(fun_v.name)
        self.ctxt.bind(decl.param_name, arg_v)
        result = decl.body.accept(self)
        self.ctxt.undo_one()
        return result

    def visit_constrain_exp(self, node: ConstrainExp) -> Value:
        return node.exp.accept(self)

    def visit_id_exp(self, node: IdExp) -> Value:
        if not self.ctxt.has(node.name):
            raise FunError(f"Unbound symbol '{node.name}' detected", node.loc)
        return self.ctxt.get(node.name)

    def visit_if_exp(self, node: IfExp) -> Value:
        cond = self._as_int(
            node.cond.accept(self),
            node.cond,
            "Condition of if expression is not int type",
        )
        if cond != 0:
            then_v = node.then_exp.accept(self)
            return unit_value() if node.else_exp is None else then_v
        if node.else_exp is None:
            return unit_value()
        return node.else_exp.accept(self)

    def visit_int_exp(self, node: IntExp) -> Value:
        return IntValue(node.num)

    def visit_let_exp(self, node: LetExp) -> Value:
        self.ctxt.bind(node.var_name, node.var_exp.accept(self))
        result = node.body.accept(self)
        self.ctxt.undo_one()
        return result

    def visit_proj_exp(self, node: ProjExp) -> Value:
        target = node.target.accept(self)
        if not isinstance(target, TupleValue):
            raise FunError("Invalid tuple type for # op", node.target.loc)
        if not 0 <= node.index < len(target):
            raise FunError(
                f"Tuple size is less than {node.index + 1}", node.target.loc
            )
        return target[node.index]

    def visit_seq_exp(self, node: SeqExp) -> Value:
        node.exp1.accept(self)
        return node.exp2.accept(self)

    def visit_tuple_exp(self, node: TupleExp) -> Value:
        return TupleValue(exp.accept(self) for exp in node.exps)

    def visit_un_exp(self, node: UnExp) -> Value:
        v1 = node.exp1.accept(self)

        if node.op is OpKind.REF:
            return RefValue(v1)

        if node.op is OpKind.GET:
            if not isinstance(v1, RefValue):
                raise FunError("Dereference of non-reference type", node.exp1.loc)
            return v1.base

        num = self._as_int(v1, node.exp1)
        if node.op is OpKind.UMINUS:
            return IntValue(0 - num)
        if node.op is OpKind.NOT:
            return IntValue(0 if num != 0 else 1)
        raise FunError(f"Unsupported unary operator {node.op.name}", node.loc)

    def visit_while_exp(self, node: WhileExp) -> Value:
        while True:
            cond = self._as_int(
                node.cond.accept(self),
                node.cond,
                "Condition of while loop is not int type",
            )
            if cond == 0:
                return unit_value()
            node.body.accept(self)


def interpret(
    program: Program, argc: int, output: TextIO | None = None
) -> Value:
    """Run ``program`` with ``argc`` and return the value of ``main``."""
    return Interpreter(program, output).run(argc)