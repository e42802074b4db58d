"""Types of the Fun language.

Types compare structurally, so two equal types built separately are
interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


class FunLangType:
    """Base class of all Fun types."""

    __slots__ = ()


@dataclass(frozen=True)
class IntType(FunLangType):
    """The integer type."""

    def __str__(self) -> str:
        return "int"


@dataclass(frozen=True)
class RefType(FunLangType):
    """A reference to a value of ``base``."""

    base: FunLangType

    def __str__(self) -> str:
        return f"{self.base} ref"


@dataclass(frozen=True)
class FunType(FunLangType):
    """A function from ``param`` to ``ret``."""

    param: FunLangType
    ret: FunLangType

    def __str__(self) -> str:
        return f"{self.param}->{self.ret}"


@dataclass(frozen=True, init=False)
class TupleType(FunLangType):
    """A tuple of element types; the empty tuple is the unit type."""

    types: tuple[FunLangType, ...]

    def __init__(self, types: Iterable[FunLangType] = ()) -> None:
        object.__setattr__(self, "types", tuple(types))

    def __len__(self) -> int:
        return len(self.types)

    def __getitem__(self, index: int) -> FunLangType:
        return self.types[index]

    def __str__(self) -> str:
        return "<" + ", ".join(str(t) for t in self.types) + ">"


_INT = IntType()
_UNIT = TupleType()


def int_type() -> IntType:
    """Return the integer type."""
    return _INT


def unit_type() -> TupleType:
    """Return the unit type, the empty tuple."""
    return _UNIT