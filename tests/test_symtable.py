from wyrmc.ast import BasicType, VarDeclType
from wyrmc.symtable import Scope


def test_add_and_lookup_current():
    scope = Scope()
    symbol = scope.add_symbol("x", VarDeclType.LOCAL, BasicType("i32"), None)
    assert scope.lookup_current("x") is symbol
    assert symbol.type_node == BasicType("i32")
    assert symbol.var_type is VarDeclType.LOCAL


def test_duplicate_in_same_scope_returns_none():
    scope = Scope()
    first = scope.add_symbol("x", VarDeclType.CONST, None, None)
    assert scope.add_symbol("x", VarDeclType.LOCAL, None, None) is None
    assert scope.symbols == [first]


def test_missing_lookup_is_none():
    scope = Scope()
    assert scope.lookup("nothing") is None
    assert scope.lookup_current("nothing") is None


def test_lookup_walks_parents():
    top = Scope()
    symbol = top.add_symbol("g", VarDeclType.CONST, None, None)
    child = Scope(top)
    grandchild = Scope(child)
    assert grandchild.lookup("g") is symbol
    assert grandchild.lookup_current("g") is None


def test_shadowing_prefers_inner():
    top = Scope()
    top.add_symbol("x", VarDeclType.CONST, None, None)
    child = Scope(top)
    inner = child.add_symbol("x", VarDeclType.LOCAL, None, None)
    assert inner is not None
    assert child.lookup("x") is inner
    assert top.lookup("x") is not inner


def test_depth_and_children_registration():
    top = Scope()
    child = Scope(top)
    grandchild = Scope(child)
    assert (top.depth, child.depth, grandchild.depth) == (0, 1, 2)
    assert top.children == [child]
    assert child.children == [grandchild]
    assert grandchild.parent is child


def test_func_index_inherited_from_parent():
    top = Scope()
    top.func_index = 3
    child = Scope(top)
    assert child.func_index == top.func_index
    assert child.is_func_scope is False


def test_symbol_func_index_defaults_to_zero():
    scope = Scope()
    symbol = scope.add_symbol("y", VarDeclType.LOCAL, None, None)
    assert symbol.func_index == 0
    symbol.func_index = 2
    assert scope.lookup("y").func_index == 2