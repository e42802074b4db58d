"""Syntax tree of Fun programs.

Every node knows its operator kind, its source location and its parent.
``accept`` dispatches to the visitor method named after the node class:
``visit_bin_exp``, ``visit_call_exp``, ``visit_constrain_exp``,
``visit_fun_decl``, ``visit_fun_type``, ``visit_id_exp``, ``visit_if_exp``,
``visit_int_exp``, ``visit_int_type``, ``visit_let_exp``, ``visit_program``,
``visit_proj_exp``, ``visit_ref_type``, ``visit_seq_exp``,
``visit_tuple_exp``, ``visit_tuple_type``, ``visit_un_exp`` and
``visit_while_exp``.
"""

from __future__ import annotations

from typing import Any, Iterable

from funlang.environment import SrcLoc
from funlang.funtypes import FunLangType, FunType, RefType, TupleType, int_type
from funlang.opinfo import (
    OpAssoc,
    OpKind,
    is_binary_op,
    is_unary_op,
    op_assoc,
    op_precedence,
    op_str,
)

_BIN_EXP_OPS = frozenset(
    {
        OpKind.MUL,
        OpKind.ADD,
        OpKind.SUB,
        OpKind.EQUAL,
        OpKind.LT,
        OpKind.AND,
        OpKind.OR,
        OpKind.SET,
    }
)

_UN_EXP_OPS = frozenset({OpKind.REF, OpKind.GET, OpKind.UMINUS, OpKind.NOT})


class Node:
    """Base class of all syntax tree nodes."""

    _visit = ""

    def __init__(self, op: OpKind, loc: SrcLoc | None = None) -> None:
        self.op = op
        self.loc = loc if loc is not None else SrcLoc()
        self.parent: Node | None = None

    def _adopt(self, *nodes: Node | None) -> None:
        for node in nodes:
            if node is not None:
                node.parent = self

    def accept(self, visitor: Any) -> Any:
        """Call the visitor method for this kind of node and return its result."""
        return getattr(visitor, self._visit)(self)

    def children(self) -> list[Node]:
        """Return the direct child nodes, left to right."""
        return []

    def is_left_child(self, node: Node) -> bool:
        """Whether ``node`` is the leftmost child of this node."""
        kids = self.children()
        return bool(kids) and kids[0] is node

    def is_right_child(self, node: Node) -> bool:
        """Whether ``node`` is the rightmost child of this node."""
        kids = self.children()
        return bool(kids) and kids[-1] is node

    def is_unary_op(self) -> bool:
        """Whether this node's operator is unary."""
        return is_unary_op(self.op)

    def is_binary_op(self) -> bool:
        """Whether this node's operator is binary."""
        return is_binary_op(self.op)

    @property
    def prec(self) -> int:
        """Precedence level of this node's operator."""
        return op_precedence(self.op)

    @property
    def assoc(self) -> OpAssoc:
        """Associativity of this node's operator."""
        return op_assoc(self.op)

    @property
    def op_str(self) -> str:
        """How this node's operator is written."""
        return op_str(self.op)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.op.name} at {self.loc})"


class ExpNode(Node):
    """Base class of expressions."""


class TypeNode(Node):
    """Base class of written types."""

    def to_type(self) -> FunLangType:
        """Return the language type this node denotes."""
        raise NotImplementedError(f"{type(self).__name__} denotes no type")


class BinExp(ExpNode):
    """A binary operator applied to two expressions."""

    _visit = "visit_bin_exp"

    def __init__(
        self, op: OpKind, exp1: ExpNode, exp2: ExpNode, loc: SrcLoc | None = None
    ) -> None:
        if op not in _BIN_EXP_OPS:
            raise ValueError(f"{op.name} is not a binary expression operator")
        super().__init__(op, loc)
        self.exp1 = exp1
        self.exp2 = exp2
        self._adopt(exp1, exp2)

    def children(self) -> list[Node]:
        return [self.exp1, self.exp2]


class CallExp(ExpNode):
    """A function applied to one argument."""

    _visit = "visit_call_exp"

    def __init__(
        self, fun_exp: ExpNode, arg_exp: ExpNode, loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.CALL, loc)
        self.fun_exp = fun_exp
        self.arg_exp = arg_exp
        self._adopt(fun_exp, arg_exp)

    def children(self) -> list[Node]:
        return [self.fun_exp, self.arg_exp]


class ConstrainExp(ExpNode):
    """An expression constrained to a written type, ``exp : type``."""

    _visit = "visit_constrain_exp"

    def __init__(
        self, exp: ExpNode, type_node: TypeNode, loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.CONSTRAIN, loc)
        self.exp = exp
        self.type_node = type_node
        self._adopt(exp, type_node)

    def children(self) -> list[Node]:
        return [self.exp, self.type_node]


class FunDecl(Node):
    """A function declaration with one parameter."""

    _visit = "visit_fun_decl"

    def __init__(
        self,
        name: str,
        param_name: str,
        param_type: TypeNode,
        ret_type: TypeNode,
        body: ExpNode,
        loc: SrcLoc | None = None,
    ) -> None:
        super().__init__(OpKind.FUN_DECL, loc)
        self.name = name
        self.param_name = param_name
        self.param_type = param_type
        self.ret_type = ret_type
        self.body = body
        self._adopt(param_type, ret_type, body)

    def children(self) -> list[Node]:
        return [self.param_type, self.ret_type, self.body]


class FunTypeNode(TypeNode):
    """A written function type, ``param -> ret``."""

    _visit = "visit_fun_type"

    def __init__(
        self, param_type: TypeNode, ret_type: TypeNode, loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.FUN_TYPE, loc)
        self.param_type = param_type
        self.ret_type = ret_type
        self._adopt(param_type, ret_type)

    def children(self) -> list[Node]:
        return [self.param_type, self.ret_type]

    def to_type(self) -> FunType:
        return FunType(self.param_type.to_type(), self.ret_type.to_type())


class IdExp(ExpNode):
    """A reference to a bound name."""

    _visit = "visit_id_exp"

    def __init__(self, name: str, loc: SrcLoc | None = None) -> None:
        super().__init__(OpKind.ID, loc)
        self.name = name


class IfExp(ExpNode):
    """A conditional, with or without an else branch."""

    _visit = "visit_if_exp"

    def __init__(
        self,
        cond: ExpNode,
        then_exp: ExpNode,
        else_exp: ExpNode | None = None,
        loc: SrcLoc | None = None,
    ) -> None:
        super().__init__(
            OpKind.IF_THEN_ELSE if else_exp is not None else OpKind.IF_THEN, loc
        )
        self.cond = cond
        self.then_exp = then_exp
        self.else_exp = else_exp
        self._adopt(cond, then_exp, else_exp)

    def children(self) -> list[Node]:
        kids: list[Node] = [self.cond, self.then_exp]
        if self.else_exp is not None:
            kids.append(self.else_exp)
        return kids


class IntExp(ExpNode):
    """An integer literal."""

    _visit = "visit_int_exp"

    def __init__(self, num: int, loc: SrcLoc | None = None) -> None:
        super().__init__(OpKind.INT, loc)
        self.num = num


class IntTypeNode(TypeNode):
    """The written type ``int``."""

    _visit = "visit_int_type"

    def __init__(self, loc: SrcLoc | None = None) -> None:
        super().__init__(OpKind.INT_TYPE, loc)

    def to_type(self) -> FunLangType:
        return int_type()


class LetExp(ExpNode):
    """A local binding, ``let name = exp in body``."""

    _visit = "visit_let_exp"

    def __init__(
        self,
        var_name: str,
        var_exp: ExpNode,
        body: ExpNode,
        loc: SrcLoc | None = None,
    ) -> None:
        super().__init__(OpKind.LET, loc)
        self.var_name = var_name
        self.var_exp = var_exp
        self.body = body
        self._adopt(var_exp, body)

    def children(self) -> list[Node]:
        return [self.var_exp, self.body]


class Program(Node):
    """A whole program: function declarations keyed by name."""

    _visit = "visit_program"

    def __init__(
        self, fun_decls: Iterable[FunDecl] = (), loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.PROGRAM, loc)
        self._fun_decls: dict[str, FunDecl] = {}
        for decl in fun_decls:
            self.append(decl)

    def append(self, fun_decl: FunDecl) -> None:
        """Add a declaration; a later one replaces an earlier one of the same name."""
        fun_decl.parent = self
        self._fun_decls[fun_decl.name] = fun_decl

    def get_fun_decl(self, name: str) -> FunDecl:
        """Return the declaration called ``name``."""
        return self._fun_decls[name]

    @property
    def fun_decls(self) -> dict[str, FunDecl]:
        """The declarations, ordered by name."""
        return dict(sorted(self._fun_decls.items()))

    def children(self) -> list[Node]:
        return list(self.fun_decls.values())


class ProjExp(ExpNode):
    """Projection of a tuple element, ``#index exp``."""

    _visit = "visit_proj_exp"

    def __init__(
        self, index: int, target: ExpNode, loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.PROJ, loc)
        self.index = index
        self.target = target
        self._adopt(target)

    def children(self) -> list[Node]:
        return [self.target]


class RefTypeNode(TypeNode):
    """A written reference type, ``base ref``."""

    _visit = "visit_ref_type"

    def __init__(self, base: TypeNode, loc: SrcLoc | None = None) -> None:
        super().__init__(OpKind.REF_TYPE, loc)
        self.base = base
        self._adopt(base)

    def children(self) -> list[Node]:
        return [self.base]

    def to_type(self) -> RefType:
        return RefType(self.base.to_type())


class SeqExp(ExpNode):
    """Two expressions evaluated in order, ``exp1; exp2``."""

    _visit = "visit_seq_exp"

    def __init__(
        self, exp1: ExpNode, exp2: ExpNode, loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.SEQ, loc)
        self.exp1 = exp1
        self.exp2 = exp2
        self._adopt(exp1, exp2)

    def children(self) -> list[Node]:
        return [self.exp1, self.exp2]


class TupleExp(ExpNode):
    """A tuple of expressions; the empty tuple is unit."""

    _visit = "visit_tuple_exp"

    def __init__(
        self, exps: Iterable[ExpNode] = (), loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.TUPLE, loc)
        self.exps = list(exps)
        self._adopt(*self.exps)

    def children(self) -> list[Node]:
        return list(self.exps)


class TupleTypeNode(TypeNode):
    """A written tuple type."""

    _visit = "visit_tuple_type"

    def __init__(
        self, types: Iterable[TypeNode] = (), loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.TUPLE_TYPE, loc)
        self.types = list(types)
        self._adopt(*self.types)

    def children(self) -> list[Node]:
        return list(self.types)

    def to_type(self) -> TupleType:
        return TupleType(t.to_type() for t in self.types)


class UnExp(ExpNode):
    """A unary operator applied to an expression."""

    _visit = "visit_un_exp"

    def __init__(self, op: OpKind, exp1: ExpNode, loc: SrcLoc | None = None) -> None:
        if op not in _UN_EXP_OPS:
            raise ValueError(f"{op.name} is not a unary expression operator")
        super().__init__(op, loc)
        self.exp1 = exp1
        self._adopt(exp1)

    def children(self) -> list[Node]:
        return [self.exp1]


class WhileExp(ExpNode):
    """A loop, ``while cond do body``."""

    _visit = "visit_while_exp"

    def __init__(
        self, cond: ExpNode, body: ExpNode, loc: SrcLoc | None = None
    ) -> None:
        super().__init__(OpKind.WHILE, loc)
        self.cond = cond
        self.body = body
        self._adopt(cond, body)

    def children(self) -> list[Node]:
        return [self.cond, self.body]