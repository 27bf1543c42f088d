"""Recursive-descent and Pratt parser building syntax trees from tokens."""

from __future__ import annotations

from collections import deque
from typing import NamedTuple, Optional

from .ast import (
    BasicType,
    BinaryOp,
    BinOpCategory,
    Block,
    BlockExit,
    BuiltinCall,
    Call,
    FuncDecl,
    Identifier,
    IfExpr,
    Lambda,
    Literal,
    LiteralType,
    Node,
    PointerType,
    TupleExpr,
    UnaryOp,
    VarDecl,
    VarDeclType,
)
from .diagnostics import Diagnostics
from .lexer import Lexer
from .tokens import Token, TokenType, describe_token_type


class _BindingPower(NamedTuple):
    left: int
    right: int


_NO_POWER = _BindingPower(0, 0)

_INFIX = {
    TokenType.EQ: _BindingPower(2, 1),
    TokenType.AMP_AMP: _BindingPower(3, 4),
    TokenType.PIPE_PIPE: _BindingPower(3, 4),
    TokenType.LARROW: _BindingPower(5, 6),
    TokenType.LARROW_EQ: _BindingPower(5, 6),
    TokenType.RARROW: _BindingPower(5, 6),
    TokenType.RARROW_EQ: _BindingPower(5, 6),
    TokenType.EQ_EQ: _BindingPower(5, 6),
    TokenType.BANG_EQ: _BindingPower(5, 6),
    TokenType.PLUS: _BindingPower(7, 8),
    TokenType.MINUS: _BindingPower(7, 8),
    TokenType.ASTERISK: _BindingPower(9, 10),
    TokenType.SLASH: _BindingPower(9, 10),
    TokenType.PERCENT: _BindingPower(9, 10),
    TokenType.AMP: _BindingPower(11, 12),
    TokenType.PIPE: _BindingPower(11, 12),
    TokenType.DOT: _BindingPower(17, 18),
    TokenType.COLON_COLON: _BindingPower(17, 18),
}

_PREFIX = {
    TokenType.BANG: _BindingPower(0, 15),
    TokenType.AMP: _BindingPower(0, 15),
    TokenType.MINUS: _BindingPower(0, 15),
    TokenType.PLUS: _BindingPower(0, 15),
}

_POSTFIX = {
    TokenType.LPAREN: _BindingPower(17, 0),
    TokenType.LBRACK: _BindingPower(17, 0),
}

_CATEGORIES = {
    TokenType.DOT: BinOpCategory.ACCESS,
    TokenType.COLON_COLON: BinOpCategory.ACCESS,
    TokenType.AMP: BinOpCategory.BITWISE,
    TokenType.PIPE: BinOpCategory.BITWISE,
    TokenType.PLUS: BinOpCategory.ARITHMETIC,
    TokenType.MINUS: BinOpCategory.ARITHMETIC,
    TokenType.ASTERISK: BinOpCategory.ARITHMETIC,
    TokenType.SLASH: BinOpCategory.ARITHMETIC,
    TokenType.PERCENT: BinOpCategory.ARITHMETIC,
    TokenType.LARROW: BinOpCategory.COMPARISON,
    TokenType.RARROW: BinOpCategory.COMPARISON,
    TokenType.LARROW_EQ: BinOpCategory.COMPARISON,
    TokenType.RARROW_EQ: BinOpCategory.COMPARISON,
    TokenType.EQ_EQ: BinOpCategory.COMPARISON,
    TokenType.BANG_EQ: BinOpCategory.COMPARISON,
    TokenType.EQ: BinOpCategory.ASSIGNMENT,
}


class Parser:
    """Parses source text; syntax errors are recorded in ``diagnostics``."""

    def __init__(self, source: str, diagnostics: Optional[Diagnostics] = None) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics(source)
        self._lexer = Lexer(source, self.diagnostics)
        self._buffer: deque[Token] = deque()
        self._position = 0

    # token stream

    def lookahead(self, offset: int = 0) -> Token:
        """Return the token ``offset`` places ahead without consuming it."""
        while len(self._buffer) <= offset:
            self._buffer.append(self._lexer.next_token())
        return self._buffer[offset]

    def next(self) -> None:
        """Consume the current token."""
        self.lookahead(0)
        self._buffer.popleft()
        self._position += 1

    def consume(self, token_type: TokenType, message: str) -> None:
        """Consume a token of ``token_type``, or record ``message`` as an error."""
        current = self.lookahead(0)
        if current.type is token_type:
            self.next()
        else:
            self.diagnostics.error_from_cause(message, current)

    def _at(self, *kinds: TokenType) -> bool:
        return self.lookahead(0).type in kinds

    # statements

    def parse_statement(self) -> Optional[Node]:
        kind = self.lookahead(0).type
        if kind in (TokenType.KEYWORD_LET, TokenType.KEYWORD_CONST):
            stmt = self.parse_var_decl()
            self.consume(TokenType.SEMICOLON, "Expected ';'")
            return stmt
        if kind is TokenType.KEYWORD_PUB:
            self.next()
            if self._at(TokenType.KEYWORD_FUNC):
                func = self.parse_func_decl()
                func.is_public = True
                return func
            if self._at(TokenType.KEYWORD_CONST):
                decl = self.parse_var_decl()
                decl.is_public = True
                self.consume(TokenType.SEMICOLON, "Expected ';'")
                return decl
            self.diagnostics.error_from_cause("Expected a declaration", self.lookahead(0))
            self.next()
            return self.parse_func_decl()
        if kind is TokenType.KEYWORD_FUNC:
            return self.parse_func_decl()
        if kind in (TokenType.KEYWORD_BREAK, TokenType.KEYWORD_RETURN):
            start = self.lookahead(0)
            self.next()
            exit_expr = self.parse_expression()
            self.consume(TokenType.SEMICOLON, "Expected ';'")
            return BlockExit(kind is TokenType.KEYWORD_RETURN, exit_expr, token=start)
        expr = self.parse_expression()
        self.consume(TokenType.SEMICOLON, "Expected ';'")
        return expr

    def parse_var_decl(self) -> VarDecl:
        start = self.lookahead(0)
        if start.type is TokenType.KEYWORD_CONST:
            var_type = VarDeclType.CONST
            self.next()
        else:
            self.next()
            if self._at(TokenType.KEYWORD_MUT):
                var_type = VarDeclType.LOCAL_MUT
                self.next()
            else:
                var_type = VarDeclType.LOCAL

        lvalue = self.lookahead(0)
        self.consume(TokenType.IDENT, "Expected an identifier")

        type_node = None
        if self._at(TokenType.COLON):
            self.next()
            type_node = self.parse_type()

        self.consume(TokenType.EQ, "Expected '='")
        initial = self.parse_expression()
        return VarDecl(var_type, lvalue, type_node, initial, token=start)

    def parse_param_list(
        self, end_symbol: TokenType, can_be_auto: bool
    ) -> tuple[list[Token], list[Optional[Node]]]:
        """Parse ``name[: type], ...`` up to ``end_symbol``; returns names and types."""
        names: list[Token] = []
        types: list[Optional[Node]] = []
        while not self._at(end_symbol, TokenType.EOF):
            before = self._position
            names.append(self.lookahead(0))
            self.consume(TokenType.IDENT, "Expected an identifier")
            if not can_be_auto or self._at(TokenType.COLON):
                self.consume(TokenType.COLON, "Expected ':'")
                types.append(self.parse_type())
            else:
                types.append(None)

            if self._at(end_symbol):
                break
            self.consume(TokenType.COMMA, "Expected ','")
            if self._position == before:
                break
        return names, types

    def _statements_until_rbrace(self) -> list[Node]:
        stmts = []
        while not self._at(TokenType.RBRACE, TokenType.EOF):
            stmts.append(self.parse_statement())
        self.consume(TokenType.RBRACE, "Expected '}'")
        return stmts

    def parse_func_decl(self) -> FuncDecl:
        start = self.lookahead(0)
        self.next()

        lvalue = self.lookahead(0)
        self.consume(TokenType.IDENT, "Expected an identifier")
        self.consume(TokenType.LPAREN, "Expected '('")
        names, types = self.parse_param_list(TokenType.RPAREN, False)
        self.consume(TokenType.RPAREN, "Expected ')'")

        return_type = None
        if not self._at(TokenType.LBRACE):
            return_type = self.parse_type()

        self.consume(TokenType.LBRACE, "Expected '{'")
        stmts = self._statements_until_rbrace()
        return FuncDecl(
            lvalue,
            param_names=names,
            param_types=types,
            return_type=return_type,
            stmts=stmts,
            token=start,
        )

    # types

    def parse_type(self) -> Optional[Node]:
        current = self.lookahead(0)
        if current.type is TokenType.IDENT:
            self.next()
            return BasicType(current.lexeme, token=current)
        if current.type is TokenType.ASTERISK:
            self.next()
            return PointerType(self.parse_type(), token=current)
        self.diagnostics.error_from_cause("Unexpected token", current)
        self.next()
        return None

    # expressions

    def parse_expression_list(self, end_symbol: TokenType) -> list[Optional[Node]]:
        """Parse comma-separated expressions up to (not including) ``end_symbol``."""
        exprs = []
        while not self._at(end_symbol, TokenType.EOF):
            exprs.append(self.parse_expression())
            if self._at(end_symbol):
                break
            self.consume(TokenType.COMMA, "Expected ','")
        return exprs

    def parse_expression(self) -> Optional[Node]:
        return self._parse_expr_bp(0)

    def _parse_expr_bp(self, min_bp: int) -> Optional[Node]:
        current = self.lookahead(0)
        prefix = _PREFIX.get(current.type, _NO_POWER)
        if prefix.right != 0:
            self.next()
            lhs = UnaryOp(self._parse_expr_bp(prefix.right), current.type, token=current)
        else:
            lhs = self.parse_atom()

        while True:
            current = self.lookahead(0)
            if current.type is TokenType.EOF:
                break

            postfix = _POSTFIX.get(current.type, _NO_POWER)
            if postfix.left != 0:
                if postfix.left < min_bp:
                    break
                self.next()
                if current.type is TokenType.LPAREN:
                    args = self.parse_expression_list(TokenType.RPAREN)
                    self.consume(TokenType.RPAREN, "Expected matching ')'")
                    lhs = Call(lhs, args, token=current)
                else:
                    lhs = UnaryOp(lhs, current.type, token=current)
                continue

            infix = _INFIX.get(current.type, _NO_POWER)
            if infix == _NO_POWER or infix.left < min_bp:
                break
            self.next()
            rhs = self._parse_expr_bp(infix.right)
            lhs = BinaryOp(
                current.type, lhs, rhs, _CATEGORIES.get(current.type), token=current
            )
        return lhs

    def parse_block(self) -> Block:
        start = self.lookahead(0)
        self.consume(TokenType.LBRACE, "Expected '{'")
        return Block(self._statements_until_rbrace(), token=start)

    def parse_atom(self) -> Optional[Node]:
        current = self.lookahead(0)
        kind = current.type

        if kind is TokenType.LPAREN:
            self.next()
            if self._at(TokenType.RPAREN):
                self.next()
                return TupleExpr([], token=current)
            expr = self.parse_expression()
            if not self._at(TokenType.COMMA):
                self.consume(TokenType.RPAREN, "Expected matching ')'")
                return expr
            self.next()
            fields = [expr, *self.parse_expression_list(TokenType.RPAREN)]
            self.consume(TokenType.RPAREN, "Expected matching ')'")
            return TupleExpr(fields, token=current)

        if kind is TokenType.AT:
            self.next()
            builtin = self.lookahead(0)
            self.consume(TokenType.IDENT, "Expected an identifier")
            self.consume(TokenType.LPAREN, "Expected '('")
            args = self.parse_expression_list(TokenType.RPAREN)
            self.next()
            return BuiltinCall(builtin, args, token=current)

        if kind is TokenType.LBRACE:
            return self.parse_block()

        if kind is TokenType.IDENT:
            self.next()
            return Identifier(current.lexeme, token=current)

        if kind is TokenType.INT:
            self.next()
            return Literal(LiteralType.INT, token=current)

        if kind is TokenType.STRING:
            self.next()
            return Literal(LiteralType.STRING, token=current)

        if kind in (TokenType.KEYWORD_FALSE, TokenType.KEYWORD_TRUE):
            self.next()
            return Literal(LiteralType.BOOL, token=current)

        if kind is TokenType.KEYWORD_IF:
            self.next()
            condition = self.parse_expression()
            if self._at(TokenType.KEYWORD_THEN):
                then_token = self.lookahead(0)
                self.next()
                if self._at(TokenType.LBRACE):
                    self.diagnostics.warn_from_cause("Remove the 'then'", then_token)
                true_branch = self.parse_expression()
            else:
                true_branch = self.parse_block()
            false_branch = None
            if self._at(TokenType.KEYWORD_ELSE):
                self.next()
                false_branch = self.parse_expression()
            return IfExpr(condition, true_branch, false_branch, token=current)

        if kind is TokenType.BACKSLASH:
            self.next()
            names, types = self.parse_param_list(TokenType.MINUS_RARROW, True)
            self.consume(TokenType.MINUS_RARROW, "Expected '->'")
            body = self.parse_expression()
            return Lambda(names, types, body, token=current)

        self.diagnostics.error_from_cause(
            "Unexpected " + describe_token_type(kind), current
        )
        self.next()
        return None