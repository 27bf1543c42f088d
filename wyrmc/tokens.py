"""Token kinds and the token record produced by the lexer."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.IntEnum):
    """Every kind of token the lexer can produce."""

    EOF = 0
    UNKNOWN = enum.auto()

    INT = enum.auto()
    FLOAT = enum.auto()
    STRING = enum.auto()
    CHAR = enum.auto()
    IDENT = enum.auto()

    KEYWORD_LET = enum.auto()
    KEYWORD_MUT = enum.auto()
    KEYWORD_CONST = enum.auto()
    KEYWORD_IF = enum.auto()
    KEYWORD_THEN = enum.auto()
    KEYWORD_ELSE = enum.auto()
    KEYWORD_PUB = enum.auto()
    KEYWORD_FUNC = enum.auto()
    KEYWORD_RETURN = enum.auto()
    KEYWORD_BREAK = enum.auto()
    KEYWORD_CONTINUE = enum.auto()
    KEYWORD_STRUCT = enum.auto()
    KEYWORD_TEST = enum.auto()
    KEYWORD_FOR = enum.auto()
    KEYWORD_WHILE = enum.auto()
    KEYWORD_FALSE = enum.auto()
    KEYWORD_TRUE = enum.auto()

    PLUS = enum.auto()
    MINUS = enum.auto()
    ASTERISK = enum.auto()
    SLASH = enum.auto()
    PERCENT = enum.auto()
    BACKSLASH = enum.auto()
    MINUS_RARROW = enum.auto()
    EQ_RARROW = enum.auto()
    EQ = enum.auto()
    EQ_EQ = enum.auto()
    LARROW = enum.auto()
    RARROW = enum.auto()
    LARROW_EQ = enum.auto()
    RARROW_EQ = enum.auto()
    AMP = enum.auto()
    AMP_AMP = enum.auto()
    PIPE = enum.auto()
    PIPE_PIPE = enum.auto()
    COLON = enum.auto()
    COLON_COLON = enum.auto()
    SEMICOLON = enum.auto()
    COMMA = enum.auto()
    DOT = enum.auto()
    DOT_DOT = enum.auto()
    BANG = enum.auto()
    BANG_EQ = enum.auto()
    AT = enum.auto()

    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACK = enum.auto()
    RBRACK = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()


_DESCRIPTIONS = {
    TokenType.EOF: "EOF",
    TokenType.INT: "integer literal",
    TokenType.IDENT: "identifier",
    TokenType.KEYWORD_LET: "keyword 'let'",
    TokenType.KEYWORD_MUT: "keyword 'mut'",
    TokenType.KEYWORD_CONST: "keyword 'const'",
    TokenType.KEYWORD_FUNC: "keyword 'func'",
    TokenType.KEYWORD_STRUCT: "keyword 'struct'",
}


def describe_token_type(token_type: TokenType) -> str:
    """Return a human-readable description of a token kind."""
    return _DESCRIPTIONS.get(token_type, "token")


@dataclass(frozen=True)
class Token:
    """A lexeme with its kind and zero-based position in the source."""

    type: TokenType
    lexeme: str
    line: int
    col: int

    @property
    def length(self) -> int:
        return len(self.lexeme)

    def __str__(self) -> str:
        return self.lexeme