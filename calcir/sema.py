"""Semantic checks on a syntax tree: every variable is declared exactly once."""

from __future__ import annotations

import logging
from typing import Iterable

from .nodes import ASTVisitor, BinaryOp, Expr, Factor, Node, ValueKind, WithDecl

logger = logging.getLogger(__name__)


class SemanticError(ValueError):
    """Raised when a tree uses undeclared variables or declares one twice."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = tuple(messages)
        super().__init__("\n".join(self.messages) or "semantic error")


class DeclCheck(ASTVisitor):
    """Visitor that records declaration errors while walking a tree."""

    def __init__(self) -> None:
        self.scope: set[str] = set()
        self.messages: list[str] = []
        self.has_error = False

    def _error(self, message: str) -> None:
        logger.debug(message)
        self.messages.append(message)
        self.has_error = True

    def _visit_child(self, child: Expr | None) -> None:
        if child is None:
            self.has_error = True
        else:
            child.accept(self)

    def visit_factor(self, node: Factor) -> None:
        if node.kind is ValueKind.IDENT and node.value not in self.scope:
            self._error(f"Variable {node.value} not declared")

    def visit_binary_op(self, node: BinaryOp) -> None:
        self._visit_child(node.left)
        self._visit_child(node.right)

    def visit_with_decl(self, node: WithDecl) -> None:
        for name in node:
            if name in self.scope:
                self._error(f"Variable {name} already declared")
            else:
                self.scope.add(name)
        self._visit_child(node.expr)


def check(tree: Node | None) -> None:
    """Raise SemanticError if ``tree`` has declaration errors; an absent tree passes."""
    if tree is None:
        return
    checker = DeclCheck()
    tree.accept(checker)
    if checker.has_error:
        raise SemanticError(checker.messages)