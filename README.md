# calcir

A tiny expression compiler. It reads one arithmetic expression, checks it, and
prints the text of an LLVM IR module whose `main` function computes the value of
the expression.

## The language

```
calc   : ("with" ident ("," ident)* ":")? expr
expr   : term (("+" | "-") term)*
term   : factor (("*" | "/") factor)*
factor : ident | number | "(" expr ")"
ident  : [a-zA-Z]+
number : [0-9]+
```

Every variable used in the expression has to be declared after `with`. A variable
may only be declared once. Arithmetic is on signed 32-bit integers.

## Command line

```
calcir "with a, b: a * (b + 3)"
```

The IR module, named `calc`, is written to standard output and the exit status
is 0. If the input has syntax errors, each message (such as `Unexpected: ;`) is
written to standard error, followed by `Syntax errors occurred`, and the exit
status is 1. Undeclared or twice-declared variables are reported the same way
(`Variable x not declared`, `Variable x already declared`), followed by
`Semantic errors occurred`, with exit status 1.

The generated `main` calls `calc_read` once for each declared variable, passing
the variable's name, and calls `calc_write` with the result. Subexpressions made
only of numbers are folded to constants.

## Library use

```python
from calcir.parser import parse
from calcir.sema import check
from calcir.codegen import compile_to_ir

tree = parse("with x: x * 2 + 1")
check(tree)
print(compile_to_ir(tree))
```

- `calcir.lexer`: `Lexer`, `Token`, `TokenKind` and `tokenize(text)`, which returns
  the tokens of a string without the final end-of-input token.
- `calcir.parser`: `parse(text)` and `Parser`; both raise `CalcSyntaxError`, whose
  `messages` attribute holds the individual error messages.
- `calcir.nodes`: the tree nodes `Factor`, `BinaryOp` and `WithDecl`, the
  `ValueKind` and `Operator` enums, and the `ASTVisitor` base class.
- `calcir.sema`: `check(tree)` raises `SemanticError` (with `messages`) when a
  variable is undeclared or declared twice; `DeclCheck` is the visitor it uses.
- `calcir.codegen`: `compile_to_ir(tree)` and `CodeGen.compile(tree)` return the
  IR text.

## Runtime helpers

`calcir.runtime` holds Python versions of the two functions the generated code
calls:

```python
import io
from calcir.runtime import calc_read, calc_write

value = calc_read("x", io.StringIO("42\n"), io.StringIO())  # prompts "Enter a value for x: "
calc_write(value, io.StringIO())                            # writes "The result is 42"
```

Both default to `sys.stdin` and `sys.stdout`. `calc_read` raises
`InvalidValueError` when the line it reads does not start with an integer.

## What it does not do

calcir only produces IR text. It does not assemble, link or run that IR, and it
does not connect the generated program to the helpers in `calcir.runtime`; an
external LLVM toolchain and a native runtime are needed to turn the output into
a running program.

## Tests

```
pip install -e ".[test]"
pytest
```