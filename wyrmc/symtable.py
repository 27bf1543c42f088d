"""Lexical scopes and the symbols declared in them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .ast import Node, VarDeclType


@dataclass
class Symbol:
    """A named declaration with its type and stack slot within a function."""

    name: str
    type_node: Optional[Node]
    const_value: Optional[Node]
    var_type: VarDeclType
    func_index: int = 0


@dataclass(eq=False)
class Scope:
    """A scope holding symbols; child scopes register with their parent."""

    parent: Optional["Scope"] = None
    depth: int = field(init=False, default=0)
    symbols: list[Symbol] = field(init=False, default_factory=list)
    children: list["Scope"] = field(init=False, default_factory=list, repr=False)
    is_func_scope: bool = field(init=False, default=False)
    func_index: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.parent is not None:
            self.depth = self.parent.depth + 1
            self.func_index = self.parent.func_index
            self.parent.children.append(self)

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find ``name`` in this scope or the nearest enclosing one."""
        scope: Optional[Scope] = self
        while scope is not None:
            symbol = scope.lookup_current(name)
            if symbol is not None:
                return symbol
            scope = scope.parent
        return None

    def lookup_current(self, name: str) -> Optional[Symbol]:
        """Find ``name`` in this scope only."""
        return next((s for s in self.symbols if s.name == name), None)

    def add_symbol(
        self,
        name: str,
        var_type: VarDeclType,
        type_node: Optional[Node],
        const_value: Optional[Node],
    ) -> Optional[Symbol]:
        """Declare ``name`` here; returns None if it is already declared in this scope."""
        if self.lookup_current(name) is not None:
            return None
        symbol = Symbol(name, type_node, const_value, var_type)
        self.symbols.append(symbol)
        return symbol