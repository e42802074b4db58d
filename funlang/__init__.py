"""Syntax tree, pretty printer, type checker and interpreter for the Fun language."""

__version__ = "0.1.0"

__all__ = [
    "environment",
    "funtypes",
    "interpreter",
    "nodes",
    "opinfo",
    "printer",
    "typechecker",
    "values",
]