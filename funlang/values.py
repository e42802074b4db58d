"""Runtime values of the Fun language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


def _to_int32(num: int) -> int:
    num &= 0xFFFFFFFF
    return num - 0x100000000 if num & 0x80000000 else num


class Value:
    """Base class of all runtime values."""

    __slots__ = ()


@dataclass(frozen=True, init=False)
class IntValue(Value):
    """A signed 32-bit integer; larger results wrap around."""

    num: int

    def __init__(self, num: int) -> None:
        object.__setattr__(self, "num", _to_int32(int(num)))

    def __str__(self) -> str:
        return str(self.num)


@dataclass(eq=False)
class RefValue(Value):
    """A mutable storage cell; every reference is a distinct cell."""

    base: Value

    def __str__(self) -> str:
        return f"ref {self.base}"


@dataclass(frozen=True)
class FunValue(Value):
    """A function, known by its name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, init=False)
class TupleValue(Value):
    """A tuple of values; the empty tuple is the unit value."""

    values: tuple[Value, ...]

    def __init__(self, values: Iterable[Value] = ()) -> None:
        object.__setattr__(self, "values", tuple(values))

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Value:
        return self.values[index]

    def __str__(self) -> str:
        return "<" + ", ".join(str(v) for v in self.values) + ">"


_UNIT = TupleValue()


def unit_value() -> TupleValue:
    """Return the unit value."""
    return _UNIT