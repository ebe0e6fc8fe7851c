"""Syntax tree for the JavaScript/JSX component-module subset.

Node class names follow the ESTree/Babel vocabulary so that expression kinds
read the same in structural signatures (``CallExpression``,
``MemberExpression``...). Every node records ``start``/``end`` offsets into
the source it was parsed from; rewrites are expressed as edits over those
spans rather than by re-printing the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Iterator, Optional, Union


@dataclass(eq=False)
class Node:
    start: int = field(default=0, kw_only=True)
    end: int = field(default=0, kw_only=True)

    @property
    def type(self) -> str:
        return type(self).__name__


def iter_children(node: Node) -> Iterator[Node]:
    """Yield direct child nodes in source order."""
    for f in fields(node):
        if f.name in ("start", "end"):
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal of *node* and all its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Identifier(Node):
    name: str


@dataclass(eq=False)
class Literal(Node):
    raw: str


@dataclass(eq=False)
class StringLiteral(Literal):
    value: str


@dataclass(eq=False)
class NumericLiteral(Literal):
    value: float


@dataclass(eq=False)
class BooleanLiteral(Literal):
    value: bool


@dataclass(eq=False)
class NullLiteral(Literal):
    pass


@dataclass(eq=False)
class RegExpLiteral(Literal):
    pass


@dataclass(eq=False)
class TemplateLiteral(Node):
    quasis: list[str]
    expressions: list[Node]


@dataclass(eq=False)
class TaggedTemplateExpression(Node):
    tag: Node
    quasi: TemplateLiteral


@dataclass(eq=False)
class ThisExpression(Node):
    pass


@dataclass(eq=False)
class Super(Node):
    pass


@dataclass(eq=False)
class SpreadElement(Node):
    argument: Node


@dataclass(eq=False)
class ArrayExpression(Node):
    elements: list[Optional[Node]]


@dataclass(eq=False)
class Property(Node):
    key: Node
    value: Node
    computed: bool = False
    shorthand: bool = False
    method: bool = False


@dataclass(eq=False)
class ObjectExpression(Node):
    properties: list[Node]  # Property | SpreadElement


@dataclass(eq=False)
class UnaryExpression(Node):
    operator: str
    argument: Node


@dataclass(eq=False)
class AwaitExpression(Node):
    argument: Node


@dataclass(eq=False)
class YieldExpression(Node):
    argument: Optional[Node]
    delegate: bool = False  # yield*


@dataclass(eq=False)
class UpdateExpression(Node):
    operator: str
    argument: Node
    prefix: bool


@dataclass(eq=False)
class BinaryExpression(Node):
    operator: str
    left: Node
    right: Node


@dataclass(eq=False)
class LogicalExpression(Node):
    operator: str
    left: Node
    right: Node


@dataclass(eq=False)
class ConditionalExpression(Node):
    test: Node
    consequent: Node
    alternate: Node


@dataclass(eq=False)
class AssignmentExpression(Node):
    operator: str
    left: Node
    right: Node


@dataclass(eq=False)
class SequenceExpression(Node):
    expressions: list[Node]


@dataclass(eq=False)
class MemberExpression(Node):
    object: Node
    property: Node
    computed: bool = False
    optional: bool = False


@dataclass(eq=False)
class CallExpression(Node):
    callee: Node
    arguments: list[Node]
    optional: bool = False


@dataclass(eq=False)
class NewExpression(Node):
    callee: Node
    arguments: list[Node]


@dataclass(eq=False)
class TSAsExpression(Node):
    expression: Node


@dataclass(eq=False)
class TSNonNullExpression(Node):
    expression: Node


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class ObjectPattern(Node):
    properties: list[Node]  # Property (value is a pattern) | RestElement


@dataclass(eq=False)
class ArrayPattern(Node):
    elements: list[Optional[Node]]


@dataclass(eq=False)
class AssignmentPattern(Node):
    left: Node
    right: Node


@dataclass(eq=False)
class RestElement(Node):
    argument: Node


# ---------------------------------------------------------------------------
# Functions and classes
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Function(Node):
    id: Optional[Identifier]
    params: list[Node]
    body: Node  # BlockStatement, or an expression for concise arrows
    is_async: bool = False
    is_generator: bool = False


@dataclass(eq=False)
class FunctionDeclaration(Function):
    pass


@dataclass(eq=False)
class FunctionExpression(Function):
    pass


@dataclass(eq=False)
class ArrowFunctionExpression(Function):
    pass


@dataclass(eq=False)
class ClassMember(Node):
    key: Node
    value: Optional[Node]
    computed: bool = False
    static: bool = False


@dataclass(eq=False)
class Class(Node):
    id: Optional[Identifier]
    superclass: Optional[Node]
    members: list[ClassMember]


@dataclass(eq=False)
class ClassDeclaration(Class):
    pass


@dataclass(eq=False)
class ClassExpression(Class):
    pass


# ---------------------------------------------------------------------------
# JSX
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class JSXText(Node):
    raw: str
    value: str  # cooked per React whitespace rules, entities decoded


@dataclass(eq=False)
class JSXEmptyExpression(Node):
    pass


@dataclass(eq=False)
class JSXExpressionContainer(Node):
    expression: Node  # JSXEmptyExpression for comment-only containers


@dataclass(eq=False)
class JSXSpreadChild(Node):
    expression: Node


@dataclass(eq=False)
class JSXAttribute(Node):
    name: str
    value: Optional[Node]  # StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment


@dataclass(eq=False)
class JSXSpreadAttribute(Node):
    argument: Node


@dataclass(eq=False)
class JSXElement(Node):
    name: str  # "div", "Foo.Bar", "svg:rect"
    attributes: list[Node]
    children: list[Node]
    self_closing: bool = False


@dataclass(eq=False)
class JSXFragment(Node):
    children: list[Node]


JSXChild = Union[JSXText, JSXExpressionContainer, JSXSpreadChild, JSXElement, JSXFragment]


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Program(Node):
    body: list[Node]


@dataclass(eq=False)
class ImportDeclaration(Node):
    specifiers: list[Identifier]  # local bindings
    source: str


@dataclass(eq=False)
class ExportDeclaration(Node):
    declaration: Optional[Node]
    specifiers: list[Identifier] = field(default_factory=list)  # local names exported
    default: bool = False


@dataclass(eq=False)
class VariableDeclarator(Node):
    id: Node
    init: Optional[Node]


@dataclass(eq=False)
class VariableDeclaration(Node):
    kind: str
    declarations: list[VariableDeclarator]


@dataclass(eq=False)
class TypeDeclaration(Node):
    """``type X = ...`` or ``interface X {...}``; the body is not modelled."""

    id: Identifier


@dataclass(eq=False)
class BlockStatement(Node):
    body: list[Node]


@dataclass(eq=False)
class EmptyStatement(Node):
    pass


@dataclass(eq=False)
class ExpressionStatement(Node):
    expression: Node


@dataclass(eq=False)
class ReturnStatement(Node):
    argument: Optional[Node]


@dataclass(eq=False)
class ThrowStatement(Node):
    argument: Node


@dataclass(eq=False)
class IfStatement(Node):
    test: Node
    consequent: Node
    alternate: Optional[Node]


@dataclass(eq=False)
class ForStatement(Node):
    init: Optional[Node]
    test: Optional[Node]
    update: Optional[Node]
    body: Node


@dataclass(eq=False)
class ForInOfStatement(Node):
    left: Node
    right: Node
    body: Node
    of: bool = True


@dataclass(eq=False)
class WhileStatement(Node):
    test: Node
    body: Node


@dataclass(eq=False)
class DoWhileStatement(Node):
    body: Node
    test: Node


@dataclass(eq=False)
class BreakStatement(Node):
    label: Optional[Identifier] = None


@dataclass(eq=False)
class ContinueStatement(Node):
    label: Optional[Identifier] = None


@dataclass(eq=False)
class CatchClause(Node):
    param: Optional[Node]
    body: BlockStatement


@dataclass(eq=False)
class TryStatement(Node):
    block: BlockStatement
    handler: Optional[CatchClause]
    finalizer: Optional[BlockStatement]


@dataclass(eq=False)
class SwitchCase(Node):
    test: Optional[Node]
    consequent: list[Node]


@dataclass(eq=False)
class SwitchStatement(Node):
    discriminant: Node
    cases: list[SwitchCase]
