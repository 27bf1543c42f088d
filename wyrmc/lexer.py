"""Hand-written scanner turning source text into tokens."""

from __future__ import annotations

from collections.abc import Iterator

from .diagnostics import Diagnostics
from .tokens import Token, TokenType

_KEYWORDS = {
    "let": TokenType.KEYWORD_LET,
    "mut": TokenType.KEYWORD_MUT,
    "if": TokenType.KEYWORD_IF,
    "else": TokenType.KEYWORD_ELSE,
    "struct": TokenType.KEYWORD_STRUCT,
    "while": TokenType.KEYWORD_WHILE,
    "return": TokenType.KEYWORD_RETURN,
    "break": TokenType.KEYWORD_BREAK,
    "pub": TokenType.KEYWORD_PUB,
    "test": TokenType.KEYWORD_TEST,
    "then": TokenType.KEYWORD_THEN,
    "true": TokenType.KEYWORD_TRUE,
    "const": TokenType.KEYWORD_CONST,
    "continue": TokenType.KEYWORD_CONTINUE,
    "func": TokenType.KEYWORD_FUNC,
    "for": TokenType.KEYWORD_FOR,
    "false": TokenType.KEYWORD_FALSE,
}

_SINGLE = {
    "+": TokenType.PLUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "\\": TokenType.BACKSLASH,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACK,
    "]": TokenType.RBRACK,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "@": TokenType.AT,
}

# first char -> (default kind, ((follow char, combined kind), ...))
_COMPOUND = {
    "-": (TokenType.MINUS, ((">", TokenType.MINUS_RARROW),)),
    ":": (TokenType.COLON, ((":", TokenType.COLON_COLON),)),
    ".": (TokenType.DOT, ((".", TokenType.DOT_DOT),)),
    "<": (TokenType.LARROW, (("=", TokenType.LARROW_EQ),)),
    ">": (TokenType.RARROW, (("=", TokenType.RARROW_EQ),)),
    "=": (TokenType.EQ, (("=", TokenType.EQ_EQ), (">", TokenType.EQ_RARROW))),
}


def _is_digit(c: str) -> bool:
    return len(c) == 1 and "0" <= c <= "9"


def _is_alpha(c: str) -> bool:
    return len(c) == 1 and (("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_")


class Lexer:
    """Produces tokens one at a time; lexical errors go to ``diagnostics``."""

    def __init__(self, source: str, diagnostics: Diagnostics | None = None) -> None:
        # a NUL character terminates the input
        self._source = source.split("\0", 1)[0]
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics(source)
        self._current = 0
        self._start = 0
        self.line = 0
        self.col = 0

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _peek(self, offset: int = 0) -> str:
        index = self._current + offset
        if self._at_end() or index >= len(self._source):
            return ""
        return self._source[index]

    def _advance(self) -> None:
        if self._at_end():
            return
        self._current += 1
        self.col += 1

    def _match(self, expected: str) -> bool:
        if self._at_end() or self._source[self._current] != expected:
            return False
        self._advance()
        return True

    def _skip_whitespace(self) -> None:
        while True:
            c = self._peek()
            if c in (" ", "\t", "\r") and c:
                self._advance()
            elif c == "\n":
                self.line += 1
                self._advance()
                self.col = 0
            elif c == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
            else:
                return

    def _make(self, token_type: TokenType) -> Token:
        lexeme = self._source[self._start:self._current]
        return Token(token_type, lexeme, self.line, self.col - len(lexeme))

    def next_token(self) -> Token:
        """Scan and return the next token; at the end of input returns EOF."""
        self._skip_whitespace()
        self._start = self._current
        if self._at_end():
            return self._make(TokenType.EOF)

        c = self._peek()
        if _is_alpha(c):
            while _is_alpha(self._peek()) or _is_digit(self._peek()):
                self._advance()
            lexeme = self._source[self._start:self._current]
            return self._make(_KEYWORDS.get(lexeme, TokenType.IDENT))

        if _is_digit(c):
            while _is_digit(self._peek()):
                self._advance()
            return self._make(TokenType.INT)

        if c == '"':
            self._advance()
            self._start = self._current
            while not self._at_end() and self._peek() != '"':
                self._advance()
            token = self._make(TokenType.STRING)
            self._advance()
            return token

        self._advance()
        if c in _SINGLE:
            return self._make(_SINGLE[c])
        if c in _COMPOUND:
            default, follows = _COMPOUND[c]
            for follow, kind in follows:
                if self._match(follow):
                    return self._make(kind)
            return self._make(default)

        self.diagnostics.error("Unexpected character", self.line, self.col - 1)
        return self._make(TokenType.UNKNOWN)

    def tokens(self) -> Iterator[Token]:
        """Yield every remaining token, ending with the EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()