"""Pretty printer that turns a syntax tree back into Fun source text."""

from __future__ import annotations

import re

from funlang.nodes import (
    BinExp,
    CallExp,
    ConstrainExp,
    FunDecl,
    FunTypeNode,
    IdExp,
    IfExp,
    IntExp,
    IntTypeNode,
    LetExp,
    Node,
    Program,
    ProjExp,
    RefTypeNode,
    SeqExp,
    TupleExp,
    TupleTypeNode,
    UnExp,
    WhileExp,
)
from funlang.opinfo import OpAssoc, OpKind

_EXTRA_BLANK_LINES = re.compile(r"\n\s*\n\s*\n+")


class CodePrinter:
    """Formats a program with two-space indentation and minimal parentheses.

    With ``all_paren`` set, every operator expression below the top is
    parenthesised.
    """

    def __init__(self, program: Program, all_paren: bool = False) -> None:
        self.program = program
        self.all_paren = all_paren
        self._parts: list[str] = []
        self._indent = 0

    def run(self) -> str:
        """Return the formatted source of the whole program."""
        self._parts = []
        self._indent = 0
        self.program.accept(self)
        code = "".join(self._parts)
        return _EXTRA_BLANK_LINES.sub("\n\n", code)

    # -- output helpers ---------------------------------------------------

    def _write(self, text: str) -> None:
        self._parts.append(text)

    def _nl(self) -> None:
        self._parts.append("\n" + "  " * self._indent)

    def _inc(self) -> None:
        self._indent += 1

    def _dec(self) -> None:
        self._indent -= 1

    def _open(self, node: Node) -> None:
        if self.need_paren(node):
            self._write("(")

    def _close(self, node: Node) -> None:
        if self.need_paren(node):
            self._write(")")

    def _write_list(self, nodes: list) -> None:
        self._write("<")
        for position, item in enumerate(nodes):
            if position:
                self._write(", ")
            item.accept(self)
        self._write(">")

    # -- parenthesisation -------------------------------------------------

    def need_paren(self, node: Node) -> bool:
        """Whether ``node`` must be enclosed in parentheses."""
        if self.all_paren:
            return True

        parent = node.parent
        if parent is None:
            return False

        # Call arguments are already enclosed in parentheses.
        if parent.op is OpKind.CALL and parent.is_right_child(node):
            return False

        # A smaller precedence number binds tighter.
        if node.prec < parent.prec:
            return False
        if node.prec > parent.prec:
            return True

        if node.is_unary_op():
            if parent.is_unary_op():
                return node.assoc is not parent.assoc
            if parent.is_binary_op():
                return (
                    node.assoc is OpAssoc.UNARY_LEFT and parent.is_right_child(node)
                ) or (
                    node.assoc is OpAssoc.UNARY_RIGHT and parent.is_left_child(node)
                )
            return False

        if node.is_binary_op():
            if parent.is_unary_op():
                return True
            if parent.is_binary_op():
                return (
                    (node.assoc is OpAssoc.BINARY_LEFT and parent.is_right_child(node))
                    or (
                        node.assoc is OpAssoc.BINARY_RIGHT
                        and parent.is_left_child(node)
                    )
                    or (
                        node.assoc is OpAssoc.NONE and parent.assoc is OpAssoc.NONE
                    )
                )
            return False

        return False

    # -- visitor methods --------------------------------------------------

    def visit_bin_exp(self, node: BinExp) -> None:
        self._open(node)
        node.exp1.accept(self)
        self._write(f" {node.op_str} ")
        node.exp2.accept(self)
        self._close(node)

    def visit_call_exp(self, node: CallExp) -> None:
        self._open(node)
        node.fun_exp.accept(self)
        self._write("(")
        node.arg_exp.accept(self)
        self._write(")")
        self._close(node)

    def visit_constrain_exp(self, node: ConstrainExp) -> None:
        self._open(node)
        node.exp.accept(self)
        self._write(":")
        node.type_node.accept(self)
        self._close(node)

    def visit_fun_decl(self, node: FunDecl) -> None:
        self._write(f"fun {node.name}({node.param_name}:")
        node.param_type.accept(self)
        self._write("):")
        node.ret_type.accept(self)
        self._write(" =")
        self._inc()
        self._nl()
        node.body.accept(self)
        self._dec()
        self._nl()

    def visit_fun_type(self, node: FunTypeNode) -> None:
        self._open(node)
        node.param_type.accept(self)
        self._write("->")
        node.ret_type.accept(self)
        self._close(node)

    def visit_id_exp(self, node: IdExp) -> None:
        self._write(node.name)

    def visit_if_exp(self, node: IfExp) -> None:
        self._open(node)
        self._write("if ")
        node.cond.accept(self)
        self._write(" then")
        self._inc()
        self._nl()
        node.then_exp.accept(self)
        self._dec()
        if node.else_exp is not None:
            self._nl()
            self._write("else")
            self._inc()
            self._nl()
            node.else_exp.accept(self)
            self._dec()
        self._nl()
        self._close(node)

    def visit_int_exp(self, node: IntExp) -> None:
        self._write(str(node.num))

    def visit_int_type(self, node: IntTypeNode) -> None:
        self._write("int")

    def visit_let_exp(self, node: LetExp) -> None:
        self._open(node)
        self._write(f"let {node.var_name} = ")
        node.var_exp.accept(self)
        self._write(" in")
        # Consecutive lets share one indentation level.
        nested = node.body.op is OpKind.LET
        if not nested:
            self._inc()
        self._nl()
        node.body.accept(self)
        if not nested:
            self._dec()
        self._close(node)

    def visit_program(self, node: Program) -> None:
        for position, decl in enumerate(node.fun_decls.values()):
            if position:
                self._nl()
            decl.accept(self)

    def visit_proj_exp(self, node: ProjExp) -> None:
        self._open(node)
        self._write(f"#{node.index} ")
        node.target.accept(self)
        self._close(node)

    def visit_ref_type(self, node: RefTypeNode) -> None:
        self._open(node)
        node.base.accept(self)
        self._write(" ref")
        self._close(node)

    def visit_seq_exp(self, node: SeqExp) -> None:
        self._open(node)
        node.exp1.accept(self)
        self._write(";")
        self._nl()
        node.exp2.accept(self)
        self._close(node)

    def visit_tuple_exp(self, node: TupleExp) -> None:
        self._write_list(node.exps)

    def visit_tuple_type(self, node: TupleTypeNode) -> None:
        self._write_list(node.types)

    def visit_un_exp(self, node: UnExp) -> None:
        self._open(node)
        if node.assoc is OpAssoc.UNARY_LEFT:
            node.exp1.accept(self)
            self._write(node.op_str)
        elif node.assoc is OpAssoc.UNARY_RIGHT:
            self._write(node.op_str)
            node.exp1.accept(self)
        else:
            raise ValueError(f"{node.op.name} is not a unary operator")
        self._close(node)

    def visit_while_exp(self, node: WhileExp) -> None:
        self._open(node)
        self._write("while ")
        node.cond.accept(self)
        self._write(" do")
        self._inc()
        self._nl()
        node.body.accept(self)
        self._dec()
        self._nl()
        self._close(node)


def format_program(program: Program, all_paren: bool = False) -> str:
    """Return the formatted source text of ``program``."""
    return CodePrinter(program, all_paren).run()