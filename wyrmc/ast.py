"""Syntax tree node types and a tree-shaped pretty printer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from .tokens import Token, TokenType

if TYPE_CHECKING:
    from .symtable import Scope


class VarDeclType(enum.Enum):
    CONST = enum.auto()
    LOCAL = enum.auto()
    LOCAL_MUT = enum.auto()


class LiteralType(enum.Enum):
    INT = enum.auto()
    STRING = enum.auto()
    BOOL = enum.auto()


class BinOpCategory(enum.Enum):
    ACCESS = enum.auto()
    CAST = enum.auto()
    BITWISE = enum.auto()
    ARITHMETIC = enum.auto()
    COMPARISON = enum.auto()
    LOGICAL = enum.auto()
    ASSIGNMENT = enum.auto()


@dataclass(kw_only=True)
class Node:
    """Base of every tree node; ``token`` is the token the node starts at."""

    token: Optional[Token] = None


@dataclass(kw_only=True)
class Expr(Node):
    """Base of expression nodes."""

    unused_result: bool = False


@dataclass
class Literal(Expr):
    literal_type: LiteralType


@dataclass
class Identifier(Expr):
    name: str


@dataclass
class Block(Expr):
    stmts: list[Node] = field(default_factory=list)
    scope: Optional["Scope"] = field(default=None, repr=False, compare=False)


@dataclass
class TupleExpr(Expr):
    fields: list[Node] = field(default_factory=list)


@dataclass
class Call(Expr):
    func: Node
    args: list[Node] = field(default_factory=list)


@dataclass
class BuiltinCall(Expr):
    builtin: Optional[Token]
    args: list[Node] = field(default_factory=list)


@dataclass
class BinaryOp(Expr):
    op: TokenType
    lhs: Node
    rhs: Node
    category: Optional[BinOpCategory] = None


@dataclass
class UnaryOp(Expr):
    operand: Optional[Node]
    op: Optional[TokenType] = None


@dataclass
class Lambda(Expr):
    param_names: list[Token]
    param_types: list[Optional[Node]]
    body: Node


@dataclass
class IfExpr(Expr):
    condition: Node
    true_branch: Node
    false_branch: Optional[Node] = None


@dataclass
class Program(Node):
    stmts: list[Node] = field(default_factory=list)


@dataclass
class VarDecl(Node):
    var_type: VarDeclType
    lvalue: Token
    type_node: Optional[Node]
    initial: Node
    is_public: bool = False


@dataclass
class FuncDecl(Node):
    lvalue: Token
    param_names: list[Token] = field(default_factory=list)
    param_types: list[Node] = field(default_factory=list)
    return_type: Optional[Node] = None
    stmts: list[Node] = field(default_factory=list)
    scope: Optional["Scope"] = field(default=None, repr=False, compare=False)
    is_public: bool = False


@dataclass
class BlockExit(Node):
    is_return: bool
    exit_expr: Optional[Node] = None


@dataclass
class BasicType(Node):
    name: str


@dataclass
class PointerType(Node):
    pointee: Optional[Node]


@dataclass
class FunctionType(Node):
    param_types: list[Optional[Node]]
    return_type: Optional[Node]


TypeNode = Union[BasicType, PointerType, FunctionType]

_MIDDLE = 1
_LAST = 2


def _indent(indent: int, has_lines: int, indent_type: int) -> str:
    parts = [
        "│  " if (1 << (indent - i)) & has_lines else "   " for i in range(indent)
    ]
    parts.append({_MIDDLE: "├─ ", _LAST: "╰─ "}.get(indent_type, "   "))
    return "".join(parts)


def _lexeme(node: Node) -> str:
    return node.token.lexeme if node.token is not None else ""


def _format_children(children: list, indent: int, has_lines: int, out: list[str]) -> None:
    for position, child in enumerate(children):
        if position == len(children) - 1:
            _format(child, indent + 1, _LAST, has_lines << 1, out)
        else:
            _format(child, indent + 1, _MIDDLE, has_lines << 1 | 1, out)


def _format(node, indent: int, indent_type: int, has_lines: int, out: list[str]) -> None:
    out.append(_indent(indent, has_lines, indent_type))
    out.append("\x1b[36m")

    if node is None:
        out.append("NULL pointer\x1b[0m\n")
        return

    if isinstance(node, Program):
        out.append("Program\x1b[0m:\n")
        _format_children(node.stmts, indent, has_lines, out)
    elif isinstance(node, VarDecl):
        out.append(f"VarDecl\x1b[0m => \x1b[35m'{node.lvalue.lexeme}'\x1b[0m\n")
        if node.type_node is not None:
            _format(node.type_node, indent + 1, _MIDDLE, has_lines << 1, out)
        _format(node.initial, indent + 1, _LAST, has_lines << 1, out)
    elif isinstance(node, FuncDecl):
        out.append(f"FuncDecl\x1b[0m => \x1b[35m'{node.lvalue.lexeme}'\x1b[0m\n")
        _format_children(node.stmts, indent, has_lines, out)
    elif isinstance(node, Identifier):
        out.append(f"Identifier\x1b[0m => \x1b[35m'{_lexeme(node)}'\x1b[0m\n")
    elif isinstance(node, Literal):
        kind = {LiteralType.INT: "i32", LiteralType.BOOL: "bool"}.get(node.literal_type, "")
        out.append(f"Literal\x1b[0m => \x1b[31m{kind}\x1b[0m \x1b[33m'{_lexeme(node)}'\x1b[0m\n")
    elif isinstance(node, BinaryOp):
        out.append(f"BinaryOp\x1b[0m '{_lexeme(node)}'\n")
        _format(node.lhs, indent + 1, _MIDDLE, has_lines << 1 | 1, out)
        _format(node.rhs, indent + 1, _LAST, has_lines << 1, out)
    elif isinstance(node, Call):
        out.append(f"FuncCall\x1b[0m ({len(node.args)} args):\n")
        if node.args:
            _format(node.func, indent + 1, _MIDDLE, has_lines << 1 | 1, out)
        else:
            _format(node.func, indent + 1, _LAST, has_lines << 1, out)
        _format_children(node.args, indent, has_lines, out)
    elif isinstance(node, Block):
        out.append("Block\x1b[0m\n")
        _format_children(node.stmts, indent, has_lines, out)
    elif isinstance(node, IfExpr):
        out.append("IfExpr\x1b[0m:\n")
        _format(node.condition, indent + 1, _MIDDLE, has_lines << 1 | 1, out)
        if node.false_branch is not None:
            _format(node.true_branch, indent + 1, _MIDDLE, has_lines << 1 | 1, out)
            _format(node.false_branch, indent + 1, _LAST, has_lines << 1, out)
        else:
            _format(node.true_branch, indent + 1, _LAST, has_lines << 1, out)
    elif isinstance(node, BasicType):
        out.append(f"BasicType\x1b[0m => '{node.name}'\n")
    elif isinstance(node, FunctionType):
        out.append(f"FuncType\x1b[0m ({len(node.param_types)} args):\n")
        if node.param_types:
            _format(node.return_type, indent + 1, _MIDDLE, has_lines << 1 | 1, out)
        else:
            _format(node.return_type, indent + 1, _LAST, has_lines << 1, out)
        _format_children(node.param_types, indent, has_lines, out)
    else:
        out.append("Unknown ASTNode type...\x1b[0m\n")


def format_ast(node: Optional[Node]) -> str:
    """Render ``node`` and its children as a coloured tree."""
    out: list[str] = []
    _format(node, 0, 0, 0, out)
    return "".join(out)


def print_ast(node: Optional[Node]) -> None:
    print(format_ast(node), end="")