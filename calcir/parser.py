"""Recursive-descent parser for calc expressions.

Grammar::

    calc   : ("with" ident ("," ident)* ":")? expr
    expr   : term (("+" | "-") term)*
    term   : factor (("*" | "/") factor)*
    factor : ident | number | "(" expr ")"
"""

from __future__ import annotations

import logging
from typing import Iterable

from .lexer import Lexer, Token, TokenKind
from .nodes import BinaryOp, Expr, Factor, Node, Operator, ValueKind, WithDecl

logger = logging.getLogger(__name__)

_FACTOR_FOLLOW = (
    TokenKind.R_PAREN,
    TokenKind.STAR,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.SLASH,
    TokenKind.EOI,
)
_ADDITIVE = {TokenKind.PLUS: Operator.PLUS, TokenKind.MINUS: Operator.MINUS}
_MULTIPLICATIVE = {TokenKind.STAR: Operator.MUL, TokenKind.SLASH: Operator.DIV}


class CalcSyntaxError(ValueError):
    """Raised when the input does not match the grammar."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = tuple(messages)
        super().__init__("\n".join(self.messages) or "syntax error")


class Parser:
    """Builds a syntax tree from the tokens of a lexer."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._errors: list[str] = []
        self._tok: Token = lexer.next()

    def parse(self) -> Node:
        """Parse the whole input, raising CalcSyntaxError if anything was wrong."""
        tree = self._parse_calc()
        self._expect(TokenKind.EOI)
        if self._errors or tree is None:
            raise CalcSyntaxError(self._errors)
        return tree

    def _advance(self) -> None:
        self._tok = self._lexer.next()

    def _error(self) -> None:
        message = f"Unexpected: {self._tok.text}"
        logger.debug(message)
        self._errors.append(message)

    def _expect(self, kind: TokenKind) -> bool:
        if self._tok.kind is kind:
            return True
        logger.debug("err: %s", self._tok.text)
        self._error()
        return False

    def _parse_calc(self) -> Node | None:
        variables: list[str] = []
        if self._tok.kind is TokenKind.KW_WITH:
            self._advance()
            declared = self._parse_variables()
            if declared is None:
                while self._tok.kind is not TokenKind.EOI:
                    self._advance()
                return None
            variables = declared

        expr = self._parse_expr()
        if not variables:
            return expr
        return WithDecl(tuple(variables), expr)

    def _parse_variables(self) -> list[str] | None:
        names: list[str] = []
        while True:
            if not self._expect(TokenKind.IDENT):
                return None
            names.append(self._tok.text)
            self._advance()
            if self._tok.kind is not TokenKind.COMMA:
                break
            self._advance()
        if not self._expect(TokenKind.COLON):
            logger.debug("colon err: %s", self._tok.text)
            return None
        self._advance()
        return names

    def _parse_expr(self) -> Expr | None:
        left = self._parse_term()
        while (op := _ADDITIVE.get(self._tok.kind)) is not None:
            self._advance()
            left = BinaryOp(op, left, self._parse_term())
        return left

    def _parse_term(self) -> Expr | None:
        left = self._parse_factor()
        while (op := _MULTIPLICATIVE.get(self._tok.kind)) is not None:
            self._advance()
            left = BinaryOp(op, left, self._parse_factor())
        return left

    def _parse_factor(self) -> Expr | None:
        tok = self._tok
        result: Expr | None = None
        if tok.kind is TokenKind.NUMBER:
            result = Factor(ValueKind.NUMBER, tok.text)
            self._advance()
        elif tok.kind is TokenKind.IDENT:
            result = Factor(ValueKind.IDENT, tok.text)
            self._advance()
        elif tok.kind is TokenKind.L_PAREN:
            self._advance()
            result = self._parse_expr()
            if self._expect(TokenKind.R_PAREN):
                self._advance()
            elif result is None:
                self._error()
        else:
            self._error()

        while not self._tok.is_one_of(*_FACTOR_FOLLOW):
            self._advance()
        return result


def parse(text: str) -> Node:
    """Parse an expression string into a syntax tree."""
    return Parser(Lexer(text)).parse()