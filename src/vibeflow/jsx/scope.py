"""Name binding analysis over parsed component modules."""

from __future__ import annotations

from typing import Iterable

from vibeflow.jsx import ast as js

# Ambient names a generated component may reference without receiving them.
GLOBALS = frozenset({
    "undefined", "NaN", "Infinity", "Math", "JSON", "console", "window",
    "document", "Number", "String", "Boolean", "Object", "Array", "Date",
})


def jsx_tag_root(name: str) -> str | None:
    """The binding a JSX tag name refers to, or None for intrinsic elements."""
    if ":" in name:
        return None
    root = name.split(".", 1)[0]
    if "." in name or root[:1].isupper() or root[:1] in ("_", "$"):
        return root
    return None


def pattern_names(pattern: js.Node | None) -> list[str]:
    """Names bound by a binding pattern."""
    if pattern is None:
        return []
    if isinstance(pattern, js.Identifier):
        return [pattern.name]
    if isinstance(pattern, js.ObjectPattern):
        names: list[str] = []
        for prop in pattern.properties:
            if isinstance(prop, js.Property):
                names.extend(pattern_names(prop.value))
            else:
                names.extend(pattern_names(prop))
        return names
    if isinstance(pattern, js.ArrayPattern):
        return [n for element in pattern.elements for n in pattern_names(element)]
    if isinstance(pattern, js.AssignmentPattern):
        return pattern_names(pattern.left)
    if isinstance(pattern, js.RestElement):
        return pattern_names(pattern.argument)
    return []


def declared_names(node: js.Node) -> set[str]:
    """Names declared in *node*'s scope, without entering nested functions.

    For a function node the parameters (and a function expression's own
    name) are included along with the declarations of its body.
    """
    names: set[str] = set()
    if isinstance(node, js.Function):
        for param in node.params:
            names.update(pattern_names(param))
        if isinstance(node, js.FunctionExpression) and node.id is not None:
            names.add(node.id.name)
        stack = [node.body]
    else:
        stack = list(js.iter_children(node))

    while stack:
        current = stack.pop()
        if isinstance(current, js.VariableDeclarator):
            names.update(pattern_names(current.id))
        elif isinstance(current, (js.FunctionDeclaration, js.ClassDeclaration)):
            if current.id is not None:
                names.add(current.id.name)
            continue
        elif isinstance(current, js.ImportDeclaration):
            names.update(spec.name for spec in current.specifiers)
            continue
        elif isinstance(current, js.TypeDeclaration):
            names.add(current.id.name)
            continue
        elif isinstance(current, (js.Function, js.ClassExpression)):
            continue
        stack.extend(js.iter_children(current))
    return names


def collect_references(node: js.Node, exclude: Iterable[str] = ()) -> list[str]:
    """Free variable names referenced within *node*, in first-use order.

    Member property names, object keys and JSX attribute names are not
    references. Names bound inside *node* (callback parameters, local
    declarations) and well-known globals are left out.
    """
    found: dict[str, None] = {}
    _References(found).visit(node, frozenset())
    skip = set(exclude) | GLOBALS
    return [name for name in found if name not in skip]


class _References:
    def __init__(self, found: dict[str, None]) -> None:
        self.found = found

    def visit(self, node: js.Node | None, bound: frozenset[str]) -> None:
        if node is None:
            return
        method = getattr(self, f"visit_{node.type}", None)
        if method is not None:
            method(node, bound)
            return
        if isinstance(node, js.Function):
            self.visit_function(node, bound)
            return
        for child in js.iter_children(node):
            self.visit(child, bound)

    def add(self, name: str, bound: frozenset[str]) -> None:
        if name not in bound:
            self.found.setdefault(name, None)

    def visit_Identifier(self, node: js.Identifier, bound: frozenset[str]) -> None:
        self.add(node.name, bound)

    def visit_MemberExpression(self, node: js.MemberExpression, bound: frozenset[str]) -> None:
        self.visit(node.object, bound)
        if node.computed:
            self.visit(node.property, bound)

    def visit_Property(self, node: js.Property, bound: frozenset[str]) -> None:
        if node.computed:
            self.visit(node.key, bound)
        self.visit(node.value, bound)

    def visit_ClassMember(self, node: js.ClassMember, bound: frozenset[str]) -> None:
        if node.computed:
            self.visit(node.key, bound)
        self.visit(node.value, bound)

    def visit_JSXElement(self, node: js.JSXElement, bound: frozenset[str]) -> None:
        root = jsx_tag_root(node.name)
        if root is not None:
            self.add(root, bound)
        for child in [*node.attributes, *node.children]:
            self.visit(child, bound)

    def visit_JSXAttribute(self, node: js.JSXAttribute, bound: frozenset[str]) -> None:
        self.visit(node.value, bound)

    def visit_BlockStatement(self, node: js.BlockStatement, bound: frozenset[str]) -> None:
        inner = bound | declared_names(node)
        for child in node.body:
            self.visit(child, inner)

    def visit_CatchClause(self, node: js.CatchClause, bound: frozenset[str]) -> None:
        inner = bound | set(pattern_names(node.param))
        self.visit_pattern(node.param, inner)
        self.visit(node.body, inner)

    def visit_ForInOfStatement(self, node: js.ForInOfStatement, bound: frozenset[str]) -> None:
        inner = bound | declared_names(node.left) if isinstance(node.left, js.VariableDeclaration) else bound
        self.visit(node.left, inner)
        self.visit(node.right, bound)
        self.visit(node.body, inner)

    def visit_ForStatement(self, node: js.ForStatement, bound: frozenset[str]) -> None:
        inner = bound | declared_names(node.init) if isinstance(node.init, js.VariableDeclaration) else bound
        for child in (node.init, node.test, node.update, node.body):
            self.visit(child, inner)

    def visit_VariableDeclarator(self, node: js.VariableDeclarator, bound: frozenset[str]) -> None:
        self.visit_pattern(node.id, bound)
        self.visit(node.init, bound)

    def visit_function(self, node: js.Function, bound: frozenset[str]) -> None:
        inner = bound | declared_names(node)
        for param in node.params:
            self.visit_pattern(param, inner)
        if isinstance(node.body, js.BlockStatement):
            for child in node.body.body:
                self.visit(child, inner)
        else:
            self.visit(node.body, inner)

    def visit_ClassDeclaration(self, node: js.Class, bound: frozenset[str]) -> None:
        self.visit(node.superclass, bound)
        for member in node.members:
            self.visit(member, bound)

    visit_ClassExpression = visit_ClassDeclaration

    def visit_pattern(self, node: js.Node | None, bound: frozenset[str]) -> None:
        """Visit the expressions inside a binding pattern (defaults, computed keys)."""
        if isinstance(node, js.AssignmentPattern):
            self.visit_pattern(node.left, bound)
            self.visit(node.right, bound)
        elif isinstance(node, js.ObjectPattern):
            for prop in node.properties:
                if isinstance(prop, js.Property):
                    if prop.computed:
                        self.visit(prop.key, bound)
                    self.visit_pattern(prop.value, bound)
                else:
                    self.visit_pattern(prop, bound)
        elif isinstance(node, js.ArrayPattern):
            for element in node.elements:
                self.visit_pattern(element, bound)
        elif isinstance(node, js.RestElement):
            self.visit_pattern(node.argument, bound)

    def _skip(self, node: js.Node, bound: frozenset[str]) -> None:
        pass

    visit_ImportDeclaration = _skip
    visit_TypeDeclaration = _skip
    visit_BreakStatement = _skip
    visit_ContinueStatement = _skip


def collect_names(program: js.Node) -> set[str]:
    """Every identifier and JSX tag binding mentioned anywhere in *program*."""
    names: set[str] = set()
    for node in js.walk(program):
        if isinstance(node, js.Identifier):
            names.add(node.name)
        elif isinstance(node, js.JSXElement):
            root = jsx_tag_root(node.name)
            if root is not None:
                names.add(root)
    return names
