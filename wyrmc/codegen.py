"""Bytecode generation from checked syntax trees."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from .ast import (
    BinaryOp,
    Block,
    BlockExit,
    FuncDecl,
    Identifier,
    IfExpr,
    Literal,
    LiteralType,
    Node,
    Program,
    VarDecl,
)
from .chunk import Chunk, Opcode
from .diagnostics import Diagnostics
from .symtable import Scope
from .tokens import TokenType

_BINARY_OPS = {
    TokenType.PLUS: Opcode.ADD,
    TokenType.MINUS: Opcode.SUBTRACT,
    TokenType.EQ_EQ: Opcode.EQUAL,
    TokenType.LARROW: Opcode.LESS,
    TokenType.LARROW_EQ: Opcode.LESS_EQ,
    TokenType.RARROW: Opcode.GREATER,
    TokenType.RARROW_EQ: Opcode.GREATER_EQ,
}


class CodeGenerator:
    """Emits bytecode for statements and expressions into ``chunk``."""

    def __init__(
        self, chunk: Optional[Chunk] = None, diagnostics: Optional[Diagnostics] = None
    ) -> None:
        self.chunk = chunk if chunk is not None else Chunk()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.main_location = 0

    def _report(self, message: str, node: Optional[Node]) -> None:
        token = node.token if node is not None else None
        if token is None:
            self.diagnostics.error(message, 0, 0)
        else:
            self.diagnostics.error_from_cause(message, token)

    def _emit(self, *values: int) -> None:
        for value in values:
            self.chunk.write(value)

    def _emit_jump(self, instruction: Opcode) -> int:
        self._emit(instruction, 0xFF, 0xFF)
        return len(self.chunk) - 2

    def _patch_jump(self, offset: int, target: int) -> None:
        jump = target - offset - 2
        self.chunk.code[offset] = (jump >> 8) & 0xFF
        self.chunk.code[offset + 1] = jump & 0xFF

    def _gen_stmts(self, stmts: Sequence[Node], scope: Optional[Scope]) -> None:
        for stmt in stmts:
            self.gen_stmt(stmt, scope)
        for _ in scope.symbols if scope is not None else ():
            self._emit(Opcode.POP)

    def gen_stmt(self, stmt: Node, scope: Optional[Scope]) -> None:
        if isinstance(stmt, FuncDecl):
            if stmt.lvalue.lexeme == "main":
                self.main_location = len(self.chunk)
            self._gen_stmts(stmt.stmts, stmt.scope)
            self._emit(Opcode.RETURN)
        elif isinstance(stmt, VarDecl):
            self.gen_expression(stmt.initial, scope)
        elif isinstance(stmt, BlockExit):
            if stmt.is_return:
                self._emit(Opcode.RETURN)
        else:
            self.gen_expression(stmt, scope)
            if getattr(stmt, "unused_result", False):
                self._emit(Opcode.POP)

    def gen_expression(self, expr: Node, scope: Optional[Scope]) -> None:
        if isinstance(expr, Literal):
            if expr.literal_type is LiteralType.INT:
                constant = self.chunk.add_constant(int(expr.token.lexeme))
            elif expr.literal_type is LiteralType.BOOL:
                constant = self.chunk.add_constant(1)
            else:
                self._report("this literal type is not supported yet", expr)
                return
            self._emit(Opcode.CONSTANT, constant)
        elif isinstance(expr, BinaryOp):
            self.gen_expression(expr.rhs, scope)
            self.gen_expression(expr.lhs, scope)
            opcode = _BINARY_OPS.get(expr.op)
            if opcode is None:
                self._report("this operator is not yet supported", expr)
            else:
                self._emit(opcode)
        elif isinstance(expr, Identifier):
            symbol = scope.lookup(expr.name) if scope is not None else None
            if symbol is None:
                raise LookupError(f"unresolved identifier {expr.name!r}")
            self._emit(Opcode.GET_LOCAL, symbol.func_index)
        elif isinstance(expr, Block):
            self._gen_stmts(expr.stmts, expr.scope)
        elif isinstance(expr, IfExpr):
            self.gen_expression(expr.condition, scope)
            else_jump = self._emit_jump(Opcode.JUMP_IF_ZERO)
            self.gen_expression(expr.true_branch, scope)
            out_jump = self._emit_jump(Opcode.JUMP)
            self._patch_jump(else_jump, len(self.chunk))
            if expr.false_branch is not None:
                self.gen_expression(expr.false_branch, scope)
            self._patch_jump(out_jump, len(self.chunk))
        else:
            self._report("Cannot codegen this construct", expr)


def generate_bytecode(ast: Node, scope: Scope, diagnostics: Diagnostics) -> Chunk:
    """Compile a checked program; execution starts with a call into ``main``."""
    if not isinstance(ast, Program):
        diagnostics.error("Argument to bytecode not a program", 0, 0)
        return Chunk()

    generator = CodeGenerator(Chunk(), diagnostics)
    jump = generator._emit_jump(Opcode.CALL)
    for stmt in ast.stmts:
        generator.gen_stmt(stmt, scope)
    generator._patch_jump(jump, generator.main_location)
    return generator.chunk