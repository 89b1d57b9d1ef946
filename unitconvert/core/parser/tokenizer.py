"""Tokenizer for quantity, unit-expression and definition strings."""

from __future__ import annotations

import re
from enum import Enum, auto
from dataclasses import dataclass

from unitconvert.core.errors import ParseError


class TokenType(Enum):
    NUMBER = auto()    # 2, 3.5, .5, 1e-3 (unsigned; signs are PLUS/MINUS)
    NAME = auto()      # m, ft, football_field, degC
    STAR = auto()      # *
    SLASH = auto()     # /
    CARET = auto()     # ^ or **
    PLUS = auto()      # +
    MINUS = auto()     # -
    LPAREN = auto()    # (
    RPAREN = auto()    # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    EQUALS = auto()    # =
    EOF = auto()


_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NAME_RE = re.compile(r"[^\W\d]\w*")

_PUNCTUATION = {
    "**": TokenType.CARET,
    "^": TokenType.CARET,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "=": TokenType.EQUALS,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    col: int
    spaced: bool = False  # whitespace precedes this token


class TokenizeError(ParseError):
    """Raised on a character that cannot start any token."""


def tokenize(source: str) -> list[Token]:
    """Convert input text into a list of tokens ending with EOF."""
    tokens: list[Token] = []
    pos = 0
    spaced = False

    while pos < len(source):
        ch = source[pos]

        # Skip whitespace
        if ch.isspace():
            spaced = True
            pos += 1
            continue

        # Punctuation, longest first so ** wins over *
        two = source[pos:pos + 2]
        if two in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[two], two, pos, spaced))
            pos += 2
            spaced = False
            continue
        if ch in _PUNCTUATION:
            tokens.append(Token(_PUNCTUATION[ch], ch, pos, spaced))
            pos += 1
            spaced = False
            continue

        m = _NUMBER_RE.match(source, pos)
        if m:
            tokens.append(Token(TokenType.NUMBER, m.group(0), pos, spaced))
            pos = m.end()
            spaced = False
            continue

        m = _NAME_RE.match(source, pos)
        if m:
            tokens.append(Token(TokenType.NAME, m.group(0), pos, spaced))
            pos = m.end()
            spaced = False
            continue

        raise TokenizeError(f"Unexpected character '{ch}'", source, pos)

    tokens.append(Token(TokenType.EOF, "", len(source), spaced))
    return tokens
