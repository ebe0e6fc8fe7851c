"""Shape-only fingerprints of JSX elements."""

from __future__ import annotations

from vibeflow.jsx import ast as js

# Vector and graphics primitives are never wrapped into components.
SKIP_TAGS = frozenset({
    "svg", "clippath", "defs", "ellipse", "g", "lineargradient", "mask",
    "path", "pattern", "polygon", "polyline", "radialgradient", "rect", "stop",
    "circle", "image", "line", "text", "tspan", "use", "foreignobject",
})

_LITERAL_TYPES = (js.StringLiteral, js.NumericLiteral, js.BooleanLiteral, js.NullLiteral)


def is_literal_like(node: js.Node | None) -> bool:
    return isinstance(node, _LITERAL_TYPES)


def is_skipped_tag(name: str) -> bool:
    return name.lower() in SKIP_TAGS


def attribute_signature(attr: js.Node) -> str:
    if isinstance(attr, js.JSXSpreadAttribute):
        return "{...}"
    assert isinstance(attr, js.JSXAttribute)
    value = attr.value
    if value is None:
        return f"{attr.name}=true"
    if isinstance(value, js.StringLiteral):
        return f"{attr.name}=str"
    if isinstance(value, js.JSXExpressionContainer):
        expr = value.expression
        return f"{attr.name}=lit" if is_literal_like(expr) else f"{attr.name}={expr.type}"
    return f"{attr.name}=elem"


def child_signature(child: js.Node) -> str:
    if isinstance(child, js.JSXText):
        return "txt" if child.value.strip() else "ws"
    if isinstance(child, js.JSXExpressionContainer):
        return "lit" if is_literal_like(child.expression) else child.expression.type
    if isinstance(child, js.JSXElement):
        return signature(child)
    if isinstance(child, js.JSXFragment):
        return "<>"
    return "{...}"


def signature(element: js.JSXElement) -> str:
    """``tag[attr kinds](child kinds)``; equal signatures mean equal shape."""
    attrs = "|".join(attribute_signature(a) for a in element.attributes)
    kids = ",".join(child_signature(c) for c in element.children)
    return f"{element.name}[{attrs}]({kids})"
