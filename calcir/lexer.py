"""Tokenizer for calc expressions."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)


class TokenKind(enum.Enum):
    """Kinds of token produced by the lexer."""

    EOI = enum.auto()
    UNKNOWN = enum.auto()
    IDENT = enum.auto()
    NUMBER = enum.auto()
    COMMA = enum.auto()
    COLON = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    L_PAREN = enum.auto()
    R_PAREN = enum.auto()
    KW_WITH = enum.auto()


@dataclass(frozen=True)
class Token:
    """A token kind with the source text it was read from."""

    kind: TokenKind
    text: str

    def is_one_of(self, *args: TokenKind) -> bool:
        """Return True if this token's kind is any of the given kinds."""
        return self.kind in args


_WHITESPACE = re.compile(r"[ \t\f\v\r\n]*")
_LEXEME = re.compile(r"(?P<word>[A-Za-z]+)|(?P<number>[0-9]+)|(?P<other>.)", re.DOTALL)
_PUNCTUATION = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "(": TokenKind.L_PAREN,
    ")": TokenKind.R_PAREN,
}


class Lexer:
    """Reads tokens one at a time from an expression string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def next(self) -> Token:
        """Return the next token; at the end of input, an EOI token every time."""
        self._pos = _WHITESPACE.match(self._text, self._pos).end()
        match = _LEXEME.match(self._text, self._pos)
        if match is None:
            return Token(TokenKind.EOI, "")

        text = match.group()
        if match.lastgroup == "word":
            kind = TokenKind.KW_WITH if text == "with" else TokenKind.IDENT
        elif match.lastgroup == "number":
            kind = TokenKind.NUMBER
        else:
            kind = _PUNCTUATION.get(text, TokenKind.UNKNOWN)

        logger.debug("Token: %s", text)
        self._pos = match.end()
        return Token(kind, text)

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, stopping before the EOI token."""
        while (current := self.next()).kind is not TokenKind.EOI:
            yield current


def tokenize(text: str) -> list[Token]:
    """Return all tokens of ``text``, not including the final EOI token."""
    return list(Lexer(text))