"""Static type checker for Fun programs."""

from __future__ import annotations

from dataclasses import dataclass, field

from funlang.environment import Environment, SrcLoc
from funlang.funtypes import (
    FunLangType,
    FunType,
    RefType,
    TupleType,
    int_type,
    unit_type,
)
from funlang.nodes import (
    BinExp,
    CallExp,
    ConstrainExp,
    FunDecl,
    IdExp,
    IfExp,
    IntExp,
    LetExp,
    Node,
    Program,
    ProjExp,
    SeqExp,
    TupleExp,
    UnExp,
    WhileExp,
)
from funlang.opinfo import OpKind


@dataclass(frozen=True)
class TypeDiagnostic:
    """A type error found in a program."""

    message: str
    loc: SrcLoc = field(default_factory=SrcLoc)

    def __str__(self) -> str:
        return f"{self.loc}: {self.message}"


class TypeChecker:
    """Checks the types of every function in a program.

    Errors do not stop the check: each is recorded as a
    :class:`TypeDiagnostic` and checking goes on with a best-guess type
    (usually ``int``).
    """

    def __init__(self, program: Program) -> None:
        self.program = program
        self.ctxt: Environment[FunLangType] = Environment()
        self.diagnostics: list[TypeDiagnostic] = []

    def check(self) -> list[TypeDiagnostic]:
        """Check the whole program and return the errors found, in order."""
        self.ctxt = Environment()
        self.diagnostics = []
        self.program.accept(self)
        return list(self.diagnostics)

    def _report(self, node: Node, message: str) -> None:
        self.diagnostics.append(TypeDiagnostic(message, node.loc))

    def is_subtype(self, t1: FunLangType, t2: FunLangType) -> bool:
        """Whether ``t1`` may be used where ``t2`` is expected; always true."""
        return True

    def join(self, t1: FunLangType, t2: FunLangType) -> FunLangType:
        """Return the common type of two branches; ``t1`` stands in for it."""
        return t1

    # -- visitor methods --------------------------------------------------

    def visit_id_exp(self, node: IdExp) -> FunLangType:
        if not self.ctxt.has(node.name):
            self._report(node, f"IdExp Error: {node.name} is not in env")
            return int_type()
        return self.ctxt.get(node.name)

    def visit_int_exp(self, node: IntExp) -> FunLangType:
        return int_type()

    def visit_seq_exp(self, node: SeqExp) -> FunLangType:
        node.exp1.accept(self)
        return node.exp2.accept(self)

    def visit_un_exp(self, node: UnExp) -> FunLangType:
        exp_ty = node.exp1.accept(self)
        if node.op is OpKind.UMINUS:
            if exp_ty != int_type():
                self._report(node, "UnExp Error: UMinus must be applied to Int")
                return int_type()
            return exp_ty
        if node.op is OpKind.NOT:
            if exp_ty != int_type():
                self._report(node, "UnExp Error: NOT must be applied to Int")
                return int_type()
            return exp_ty
        if node.op is OpKind.REF:
            return RefType(exp_ty)
        if node.op is OpKind.GET:
            if not isinstance(exp_ty, RefType):
                self._report(node, "UnExp Error: GET must be applied to RefType")
                return int_type()
            return exp_ty.base
        self._report(node, "UnExp Error: case does not match")
        return int_type()

    def visit_bin_exp(self, node: BinExp) -> FunLangType:
        left_ty = node.exp1.accept(self)
        right_ty = node.exp2.accept(self)
        if node.op is OpKind.SET:
            if not isinstance(left_ty, RefType):
                self._report(node, "BinExp Error: LeftTy is null")
            elif left_ty.base != right_ty:
                self._report(
                    node,
                    "BinExp Error: SET BaseType of Left must be the same as Right Type",
                )
            return unit_type()
        if left_ty != int_type():
            self._report(node, "BinExp: left must be Int Type")
        if right_ty != int_type():
            self._report(node, "BinExp: right must be Int Type")
        return int_type()

    def visit_tuple_exp(self, node: TupleExp) -> FunLangType:
        return TupleType(exp.accept(self) for exp in node.exps)

    def visit_if_exp(self, node: IfExp) -> FunLangType:
        cond_ty = node.cond.accept(self)
        if cond_ty != int_type():
            self._report(node, "IfExp Error: condTy should be Int")
            return int_type()
        then_ty = node.then_exp.accept(self)
        if node.else_exp is None:
            if then_ty != unit_type():
                self._report(
                    node, "IfExp Error: THEN should have UnitTy (case: no ELSE)"
                )
            return unit_type()
        else_ty = node.else_exp.accept(self)
        return self.join(then_ty, else_ty)

    def visit_proj_exp(self, node: ProjExp) -> FunLangType:
        target_ty = node.target.accept(self)
        if isinstance(target_ty, TupleType):
            if node.index >= len(target_ty):
                self._report(node, "ProjExp Error: Index >= tuple list size")
                return int_type()
            return target_ty[node.index]
        self._report(node, "ProjExp Error: target is not Tuple Type")
        return int_type()

    def visit_call_exp(self, node: CallExp) -> FunLangType:
        fun_ty = node.fun_exp.accept(self)
        arg_ty = node.arg_exp.accept(self)
        if not isinstance(fun_ty, FunType):
            self._report(node, "CallExp Error: exp is not a function type")
            return int_type()
        if not self.is_subtype(arg_ty, fun_ty.param):
            self._report(node, "CallExp Error: argTy and declTy mistmatches")
            return int_type()
        return fun_ty.ret

    def visit_while_exp(self, node: WhileExp) -> FunLangType:
        cond_ty = node.cond.accept(self)
        body_ty = node.body.accept(self)
        if cond_ty != int_type():
            self._report(node, "WhileExp Error: Cond type must be int")
            return int_type()
        if body_ty != unit_type():
            self._report(node, "WhileExp Error: body type must be unit")
            return int_type()
        return unit_type()

    def visit_let_exp(self, node: LetExp) -> FunLangType:
        var_ty = node.var_exp.accept(self)
        mark = self.ctxt.checkpoint()
        self.ctxt.bind(node.var_name, var_ty)
        body_ty = node.body.accept(self)
        self.ctxt.restore(mark)
        return body_ty

    def visit_constrain_exp(self, node: ConstrainExp) -> FunLangType:
        exp_ty = node.exp.accept(self)
        if exp_ty != node.type_node.to_type():
            self._report(node, "ConstrainExp Error: Exp and tp does not match")
            return int_type()
        return exp_ty

    def visit_fun_decl(self, node: FunDecl) -> FunLangType:
        ret_ty = node.ret_type.to_type()
        param_ty = node.param_type.to_type()
        fun_ty = FunType(param_ty, ret_ty)
        self.ctxt.bind(node.name, fun_ty)
        self.ctxt.bind(node.param_name, param_ty)
        body_ty = node.body.accept(self)
        if body_ty != ret_ty:
            self._report(node, "FunDeclExp Error: body vs. ret type mistmatches")
            return int_type()
        self.ctxt.undo_one()
        return fun_ty

    def visit_program(self, node: Program) -> None:
        for decl in node.fun_decls.values():
            decl.accept(self)
        return None


def check_program(program: Program) -> list[TypeDiagnostic]:
    """Type-check ``program`` and return the errors found."""
    return TypeChecker(program).check()