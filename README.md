# funlang

A small toolkit for the Fun language: a syntax tree, a pretty printer, a
static type checker and a tree-walking interpreter.

Fun is an expression language with integers, tuples, references, `let`
bindings, `if`/`while`, sequencing with `;`, and one-argument functions
declared with `fun name(x:type):type = body`. A program is run by calling
its `main` function with an integer argument. The built-in `printint`
writes an integer followed by a newline.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building a program

Programs are built from the node classes in `funlang.nodes`. A `Program`
holds `FunDecl` nodes, added with `Program.append` and looked up with
`Program.get_fun_decl`; `Program.fun_decls` lists them ordered by name.
Each function body is an expression such as `BinExp`, `CallExp`, `IfExp`,
`LetExp`, `WhileExp`, `SeqExp`, `TupleExp`, `ProjExp`, `UnExp`,
`ConstrainExp`, `IdExp` or `IntExp`. Types are written with `IntTypeNode`,
`RefTypeNode`, `FunTypeNode` and `TupleTypeNode`; `TypeNode.to_type()`
turns them into the types of `funlang.funtypes`. Operators are named by
`funlang.opinfo.OpKind`, and `funlang.opinfo` gives each operator's
spelling, precedence and associativity.

```python
from funlang.nodes import Program, FunDecl, IntTypeNode, BinExp, IdExp, IntExp
from funlang.opinfo import OpKind
from funlang.printer import format_program
from funlang.typechecker import check_program
from funlang.interpreter import interpret

body = BinExp(OpKind.ADD, IdExp("argc"), IntExp(1))
program = Program([FunDecl("main", "argc", IntTypeNode(), IntTypeNode(), body)])

print(format_program(program))   # fun main(argc:int):int =
                                 #   argc + 1
print(check_program(program))    # []
print(interpret(program, 41))    # 42
```

## Working with a program

- `funlang.printer.format_program(program, all_paren=False)` renders the
  program as source text with two-space indentation, adding only the
  parentheses that operator precedence and associativity require, or one
  pair around every operator expression when `all_paren` is true. The
  `CodePrinter` class does the work; `CodePrinter.need_paren` tells whether
  a node gets parentheses.
- `funlang.typechecker.check_program(program)` checks every function
  against Fun's typing rules and returns the list of `TypeDiagnostic`
  entries found, each with a message and a `SrcLoc`. Checking does not stop
  at the first error. Subtyping is not modelled: `TypeChecker.is_subtype`
  always answers true and `TypeChecker.join` returns the type of the `then`
  branch.
- `funlang.interpreter.interpret(program, argc, output=None)` evaluates
  `main` with `argc` as its argument, writes whatever `printint` prints to
  `output` (standard output when not given), and returns the resulting
  value. Runtime errors are raised as `funlang.environment.FunError`,
  carrying the source location involved.

Types (`funlang.funtypes`) compare structurally. Values (`funlang.values`)
do too, except references (`RefValue`): each evaluation of `ref` makes a
fresh cell, and a cell is equal only to itself. Integers are signed 32-bit
and wrap around on overflow.

## What it does not do

There is no parser: programs are built as node trees in Python, not read
from source text. There is no command-line tool, and no compilation to
native code; programs are only printed, type-checked and interpreted.