"""Generation of textual LLVM IR for calc syntax trees."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Union

from .nodes import ASTVisitor, BinaryOp, Expr, Factor, Node, Operator, ValueKind, WithDecl

_INT_MIN = -(2**31)
_PLAIN_NAME = re.compile(r"[-a-zA-Z$._][-a-zA-Z$._0-9]*")


class _Poison(enum.Enum):
    POISON = "poison"


@dataclass(frozen=True)
class _Register:
    number: int

    def __str__(self) -> str:
        return f"%{self.number}"


_Value = Union[int, _Poison, _Register]

_INSTRUCTIONS = {
    Operator.PLUS: "add nsw",
    Operator.MINUS: "sub nsw",
    Operator.MUL: "mul nsw",
    Operator.DIV: "sdiv",
}


def _wrap(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _sdiv(left: int, right: int) -> int | _Poison:
    if right == 0 or (left == _INT_MIN and right == -1):
        return _Poison.POISON
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _fold(op: Operator, left: int | _Poison, right: int | _Poison) -> int | _Poison:
    if isinstance(left, _Poison) or isinstance(right, _Poison):
        return _Poison.POISON
    if op is Operator.PLUS:
        return _wrap(left + right)
    if op is Operator.MINUS:
        return _wrap(left - right)
    if op is Operator.MUL:
        return _wrap(left * right)
    return _sdiv(left, right)


def _operand(value: _Value) -> str:
    if isinstance(value, _Poison):
        return value.value
    return str(value)


def _global_ref(name: str) -> str:
    if _PLAIN_NAME.fullmatch(name):
        return f"@{name}"
    return f'@"{_escape(name)}"'


def _escape(text: str) -> str:
    return "".join(
        chr(byte) if 0x20 <= byte < 0x7F and byte not in (0x22, 0x5C) else f"\\{byte:02X}"
        for byte in text.encode()
    )


class _ToIRVisitor(ASTVisitor):
    """Emits the body of ``main`` while walking the tree."""

    def __init__(self) -> None:
        self._globals: list[str] = []
        self._global_names: set[str] = set()
        self._last_unique = 0
        self._body: list[str] = []
        self._next_register = 2  # %0 and %1 are main's arguments
        self._names: dict[str, _Value] = {}
        self._uses_read = False

    def run(self, tree: Node) -> str:
        result = tree.accept(self)
        self._body.append(f"  call void @calc_write(i32 {_operand(result)})")
        self._body.append("  ret i32 0")
        return self._module_text()

    def _module_text(self) -> str:
        lines = ["; ModuleID = 'calc'", 'source_filename = "calc"', ""]
        if self._globals:
            lines += [*self._globals, ""]
        lines += ["define i32 @main(i32 %0, ptr %1) {", "entry:", *self._body, "}"]
        if self._uses_read:
            lines += ["", "declare i32 @calc_read(ptr)"]
        lines += ["", "declare void @calc_write(i32)"]
        return "\n".join(lines) + "\n"

    def _new_register(self) -> _Register:
        register = _Register(self._next_register)
        self._next_register += 1
        return register

    def _unique_global_name(self, name: str) -> str:
        candidate = name
        while candidate in self._global_names:
            self._last_unique += 1
            candidate = f"{name}.{self._last_unique}"
        self._global_names.add(candidate)
        return candidate

    def _child(self, child: Expr | None) -> _Value:
        if child is None:
            raise ValueError("cannot generate code for a missing expression")
        return child.accept(self)

    def visit_with_decl(self, node: WithDecl) -> _Value:
        self._uses_read = True
        for var in node:
            name = _global_ref(self._unique_global_name(f"{var}.str"))
            size = len(var.encode()) + 1
            self._globals.append(
                f'{name} = private constant [{size} x i8] c"{_escape(var)}\\00"'
            )
            register = self._new_register()
            self._body.append(f"  {register} = call i32 @calc_read(ptr {name})")
            self._names[var] = register
        return self._child(node.expr)

    def visit_factor(self, node: Factor) -> _Value:
        if node.kind is ValueKind.IDENT:
            try:
                return self._names[node.value]
            except KeyError:
                raise ValueError(f"variable {node.value} is not declared") from None
        return _wrap(int(node.value))

    def visit_binary_op(self, node: BinaryOp) -> _Value:
        left = self._child(node.left)
        right = self._child(node.right)
        if not isinstance(left, _Register) and not isinstance(right, _Register):
            return _fold(node.op, left, right)
        register = self._new_register()
        self._body.append(
            f"  {register} = {_INSTRUCTIONS[node.op]} i32 {_operand(left)}, {_operand(right)}"
        )
        return register


class CodeGen:
    """Compiles a checked syntax tree to an LLVM IR module named ``calc``."""

    def compile(self, tree: Node) -> str:
        """Return the IR text of a module whose ``main`` evaluates ``tree``."""
        if tree is None:
            raise ValueError("cannot generate code for a missing tree")
        return _ToIRVisitor().run(tree)


def compile_to_ir(tree: Node) -> str:
    """Return the LLVM IR text for ``tree``."""
    return CodeGen().compile(tree)