"""Name resolution and type checking of syntax trees."""

from __future__ import annotations

from typing import Optional

from .ast import (
    BasicType,
    BinaryOp,
    BinOpCategory,
    Block,
    BlockExit,
    Call,
    Expr,
    FuncDecl,
    FunctionType,
    Identifier,
    IfExpr,
    Literal,
    LiteralType,
    Node,
    PointerType,
    Program,
    VarDecl,
    VarDeclType,
)
from .diagnostics import Diagnostics
from .symtable import Scope

_LITERAL_TYPES = {
    LiteralType.INT: "i32",
    LiteralType.BOOL: "bool",
    LiteralType.STRING: "str",
}


def _report(diagnostics: Diagnostics, message: str, node: Optional[Node]) -> None:
    token = node.token if node is not None else None
    if token is None:
        diagnostics.error(message, 0, 0)
    else:
        diagnostics.error_from_cause(message, token)


def type_equals(first: Optional[Node], second: Optional[Node]) -> bool:
    """Compare two type nodes; a missing type is compatible with anything."""
    if first is second:
        return True
    if first is None or second is None:
        return True
    if type(first) is not type(second):
        return False
    if isinstance(first, BasicType):
        return first.name == second.name
    if isinstance(first, PointerType):
        return type_equals(first.pointee, second.pointee)
    return False


def _is_bool(type_node: Optional[Node]) -> bool:
    return isinstance(type_node, BasicType) and type_node.name == "bool"


def typecheck_expr(
    ast: Optional[Node], scope: Scope, diagnostics: Diagnostics
) -> Optional[Node]:
    """Check an expression and return its type, or None when it has none."""
    if ast is None:
        return None

    if isinstance(ast, Literal):
        return BasicType(_LITERAL_TYPES[ast.literal_type])

    if isinstance(ast, Identifier):
        symbol = scope.lookup(ast.name)
        if symbol is None:
            _report(diagnostics, "Use of undeclared identifier", ast)
            return None
        return symbol.type_node

    if isinstance(ast, BinaryOp):
        lhs_type = typecheck_expr(ast.lhs, scope, diagnostics)
        rhs_type = typecheck_expr(ast.rhs, scope, diagnostics)
        if ast.category in (BinOpCategory.ACCESS, BinOpCategory.BITWISE):
            return None
        if ast.category is BinOpCategory.ARITHMETIC:
            if not type_equals(lhs_type, rhs_type):
                _report(diagnostics, "Operand types mismatch", ast)
                return None
            return lhs_type
        if ast.category is BinOpCategory.COMPARISON:
            if not type_equals(lhs_type, rhs_type):
                _report(diagnostics, "Operand types mismatch", ast)
                return None
            return BasicType("bool")
        _report(diagnostics, "Unknown binop category", ast)
        return None

    if isinstance(ast, IfExpr):
        cond_type = typecheck_expr(ast.condition, scope, diagnostics)
        if not _is_bool(cond_type):
            cause = ast.condition if ast.condition is not None else ast
            _report(diagnostics, "Not a boolean", cause)
        true_type = typecheck_expr(ast.true_branch, scope, diagnostics)
        if true_type is not None and ast.false_branch is None:
            _report(diagnostics, "If expression must have an else clause", ast)
            return None
        if ast.false_branch is None:
            return None
        false_type = typecheck_expr(ast.false_branch, scope, diagnostics)
        if not type_equals(true_type, false_type):
            _report(
                diagnostics, "Return types of true and false branches do not match", ast
            )
            return None
        return true_type

    if isinstance(ast, Block):
        block_scope = Scope(scope)
        ast.scope = block_scope
        for stmt in ast.stmts:
            typecheck_stmt(stmt, block_scope, diagnostics)
        return None

    if isinstance(ast, Call):
        func_type = typecheck_expr(ast.func, scope, diagnostics)
        if func_type is None:
            return None
        if not isinstance(func_type, FunctionType):
            _report(diagnostics, "Cannot call on a non-function value", ast)
            return None
        if len(func_type.param_types) != len(ast.args):
            _report(diagnostics, "Unexpected number of arguments", ast)
            return None
        for arg, param_type in zip(ast.args, func_type.param_types):
            arg_type = typecheck_expr(arg, scope, diagnostics)
            if not type_equals(arg_type, param_type):
                _report(diagnostics, "Type mismatch", arg)
        return func_type.return_type

    _report(diagnostics, "cannot typecheck", ast)
    return None


def _resolve_node(ast: Optional[Node], scope: Scope, diagnostics: Diagnostics) -> None:
    if isinstance(ast, VarDecl):
        if ast.var_type is not VarDeclType.CONST:
            _report(diagnostics, "Cannot have let bindings at the global scope", ast)
            return
        initial_type = typecheck_expr(ast.initial, scope, diagnostics)
        if ast.type_node is not None and not type_equals(ast.type_node, initial_type):
            diagnostics.error_from_cause(
                "Specified type does not match type of initial", ast.lvalue
            )
        if scope.add_symbol(ast.lvalue.lexeme, VarDeclType.CONST, ast.type_node, None) is None:
            diagnostics.error_from_cause("Redefinition of symbol", ast.lvalue)
        return

    if isinstance(ast, FuncDecl):
        func_type = FunctionType(ast.param_types, ast.return_type)
        if scope.add_symbol(ast.lvalue.lexeme, VarDeclType.CONST, func_type, None) is None:
            diagnostics.error_from_cause("Redefinition of symbol", ast.lvalue)
        return

    _report(diagnostics, "Only declarations are allowed at the global scope", ast)


def resolve_names(ast: Node, scope: Scope, diagnostics: Diagnostics) -> None:
    """Declare every top-level symbol of a program in ``scope``."""
    if not isinstance(ast, Program):
        diagnostics.error("name resolution: Expected a program node", 0, 0)
        return
    for stmt in ast.stmts:
        _resolve_node(stmt, scope, diagnostics)


def _typecheck_var_decl(ast: VarDecl, scope: Scope, diagnostics: Diagnostics) -> None:
    if ast.var_type is VarDeclType.CONST:
        if scope.is_func_scope:
            _report(diagnostics, "Cannot have a const binding in a function body", ast)
        return

    initial_type = typecheck_expr(ast.initial, scope, diagnostics)
    if ast.type_node is not None and not type_equals(ast.type_node, initial_type):
        diagnostics.error_from_cause(
            "Specified type does not match type of initial", ast.lvalue
        )
    added = scope.add_symbol(ast.lvalue.lexeme, VarDeclType.LOCAL, initial_type, None)
    if added is None:
        diagnostics.error_from_cause("Redefinition of variable", ast.lvalue)
        return
    added.func_index = scope.func_index
    scope.func_index += 1


def _typecheck_func_decl(ast: FuncDecl, scope: Scope, diagnostics: Diagnostics) -> None:
    if scope.is_func_scope:
        _report(diagnostics, "Cannot have a func declaration in a function body", ast)
        return

    func_scope = Scope(scope)
    func_scope.is_func_scope = True
    for name, param_type in zip(ast.param_names, ast.param_types):
        func_scope.add_symbol(name.lexeme, VarDeclType.LOCAL, param_type, None)

    ast.scope = func_scope
    for stmt in ast.stmts:
        typecheck_stmt(stmt, func_scope, diagnostics)


def typecheck_stmt(ast: Optional[Node], scope: Scope, diagnostics: Diagnostics) -> None:
    """Check one statement, declaring locals and flagging unused results."""
    if ast is None:
        return
    if isinstance(ast, VarDecl):
        _typecheck_var_decl(ast, scope, diagnostics)
    elif isinstance(ast, FuncDecl):
        _typecheck_func_decl(ast, scope, diagnostics)
    elif isinstance(ast, BlockExit):
        if ast.exit_expr is not None:
            typecheck_expr(ast.exit_expr, scope, diagnostics)
    else:
        result_type = typecheck_expr(ast, scope, diagnostics)
        if isinstance(ast, Expr):
            ast.unused_result = False
        if result_type is not None:
            line, col = (ast.token.line, ast.token.col) if ast.token is not None else (0, 0)
            diagnostics.warn("Unused result of expression", line, col)
            if isinstance(ast, Expr):
                ast.unused_result = True


def type_check(ast: Node, scope: Scope, diagnostics: Diagnostics) -> None:
    """Type-check every statement of a program."""
    if not isinstance(ast, Program):
        diagnostics.error("Type Checker: Expected a program node", 0, 0)
        return
    for stmt in ast.stmts:
        typecheck_stmt(stmt, scope, diagnostics)