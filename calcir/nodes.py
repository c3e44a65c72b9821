"""Syntax tree nodes for calc expressions and the visitor interface over them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Union


class ValueKind(enum.Enum):
    """What a factor's text denotes."""

    NUMBER = enum.auto()
    IDENT = enum.auto()


class Operator(enum.Enum):
    """Binary arithmetic operators."""

    PLUS = enum.auto()
    MINUS = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()


class ASTVisitor(ABC):
    """Base class for passes over a syntax tree."""

    @abstractmethod
    def visit_factor(self, node: Factor) -> Any:
        """Handle a number or identifier."""

    @abstractmethod
    def visit_binary_op(self, node: BinaryOp) -> Any:
        """Handle a binary operation."""

    @abstractmethod
    def visit_with_decl(self, node: WithDecl) -> Any:
        """Handle a variable declaration wrapping an expression."""


@dataclass(frozen=True)
class Factor:
    """A number literal or a variable reference."""

    kind: ValueKind
    value: str

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_factor(self)


@dataclass(frozen=True)
class BinaryOp:
    """An arithmetic operation on two subexpressions."""

    op: Operator
    left: Expr | None
    right: Expr | None

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)


@dataclass(frozen=True)
class WithDecl:
    """Variables declared with ``with`` and the expression that uses them."""

    variables: tuple[str, ...]
    expr: Expr | None

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_with_decl(self)


Expr = Union[Factor, BinaryOp]
Node = Union[Factor, BinaryOp, WithDecl]