"""Scoped name bindings and error reporting shared by the language tools."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SrcLoc:
    """A position in the source text."""

    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class FunError(Exception):
    """An error found while checking or running a Fun program."""

    def __init__(self, message: str, loc: SrcLoc | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc

    def __str__(self) -> str:
        if self.loc is None:
            return self.message
        return f"{self.loc}: {self.message}"


class Environment(Generic[T]):
    """A stack of bindings; the latest binding of a name shadows older ones."""

    def __init__(self) -> None:
        self._bindings: list[tuple[str, T]] = []

    def __len__(self) -> int:
        return len(self._bindings)

    def bind(self, name: str, value: T) -> None:
        """Bind ``name`` to ``value``, shadowing any earlier binding."""
        self._bindings.append((name, value))

    def has(self, name: str) -> bool:
        """Whether ``name`` is bound."""
        return any(bound == name for bound, _ in self._bindings)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def get(self, name: str) -> T:
        """Return the value of the latest binding of ``name``."""
        for bound, value in reversed(self._bindings):
            if bound == name:
                return value
        raise KeyError(name)

    def undo_one(self) -> None:
        """Remove the most recent binding."""
        if not self._bindings:
            raise IndexError("no binding to undo")
        self._bindings.pop()

    def checkpoint(self) -> int:
        """Return a marker of the current state for :meth:`restore`."""
        return len(self._bindings)

    def restore(self, checkpoint: int) -> None:
        """Drop every binding made since ``checkpoint`` was taken."""
        if not 0 <= checkpoint <= len(self._bindings):
            raise ValueError(f"invalid checkpoint {checkpoint}")
        del self._bindings[checkpoint:]