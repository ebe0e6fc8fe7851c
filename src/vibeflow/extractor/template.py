"""Rendering of generated components, instances and data tables."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from vibeflow.errors import ParseError
from vibeflow.extractor.diff import SiteMatch, SiteValue
from vibeflow.jsx import ast as js
from vibeflow.jsx.parser import parse_module
from vibeflow.jsx.scope import collect_references
from vibeflow.jsx.text import js_string, jsx_attribute_value

INDENT = "  "

_LEADING_WS_RE = re.compile(r"[ \t]*")


def node_source(node: js.Node, source: str) -> str:
    if node.end > node.start:
        return source[node.start : node.end]
    return getattr(node, "raw", "")


def _placeholder(node: js.Node, key: str) -> str:
    if not isinstance(node, js.JSXText):
        return "{" + key + "}"
    raw = node.raw
    stripped = raw.strip()
    lead = raw[: len(raw) - len(raw.lstrip())] if stripped else ""
    trail = raw[len(raw.rstrip()) :] if stripped else ""
    return (lead if "\n" in lead else "") + "{" + key + "}" + (trail if "\n" in trail else "")


def template_body(source: str, root: js.JSXElement, replacements: Iterable[tuple[js.Node, str]]) -> str:
    """The text of *root* with each replaced node swapped for a prop reference."""
    out: list[str] = []
    pos = root.start
    for node, key in sorted(replacements, key=lambda r: r[0].start):
        out.append(source[pos : node.start])
        out.append(_placeholder(node, key))
        pos = node.end
    out.append(source[pos : root.end])
    return "".join(out)


def can_reindent(root: js.Node) -> bool:
    """Whether lines of *root* may be re-indented without changing any value."""
    for node in js.walk(root):
        if isinstance(node, js.TemplateLiteral):
            return False
        if isinstance(node, js.StringLiteral) and "\n" in node.raw:
            return False
    return True


def reindent(text: str, source: str, start: int, indent: str) -> str:
    line_start = source.rfind("\n", 0, start) + 1
    base = _LEADING_WS_RE.match(source, line_start).group()
    lines = text.split("\n")
    out = [lines[0]]
    for line in lines[1:]:
        if line.startswith(base):
            line = line[len(base) :]
        out.append(indent + line if line.strip() else "")
    return "\n".join(out)


def render_declaration(name: str, params: Sequence[str], body: str, typed: bool = True) -> str:
    annotation = ": any" if typed else ""
    pattern = "{ " + ", ".join(params) + " }"
    return (
        f"function {name}({pattern}{annotation}) {{\n"
        f"{INDENT}return (\n"
        f"{INDENT * 2}{body}\n"
        f"{INDENT});\n"
        f"}}"
    )


def render_prop(value: SiteValue, source: str) -> str:
    if value.node is None:
        return jsx_attribute_value(value.text or "")
    return "{" + node_source(value.node, source) + "}"


def render_instance(
    name: str, sites: Sequence[SiteMatch], index: int, passthrough: Sequence[str], source: str
) -> str:
    attrs = [f"{site.prop_key}={render_prop(site.values[index], source)}" for site in sites]
    attrs.extend(f"{ref}={{{ref}}}" for ref in passthrough)
    return f"<{name} {' '.join(attrs)} />"


def data_literal(value: SiteValue, source: str) -> str:
    if value.node is None:
        return js_string(value.text or "")
    return node_source(value.node, source)


def render_data_table(name: str, sites: Sequence[SiteMatch], count: int, source: str) -> str:
    rows = []
    for index in range(count):
        fields = ", ".join(f"{s.prop_key}: {data_literal(s.values[index], source)}" for s in sites)
        rows.append(f"{INDENT}{{ {fields} }},")
    return f"const {name} = [\n" + "\n".join(rows) + "\n];"


def render_iteration(
    data_name: str, name: str, item: str, index: str, passthrough: Sequence[str]
) -> str:
    attrs = [f"{{...{item}}}"]
    attrs.extend(f"{ref}={{{ref}}}" for ref in passthrough)
    attrs.append(f"key={{{index}}}")
    return f"{{{data_name}.map(({item}, {index}) => <{name} {' '.join(attrs)} />)}}"


def verify_declaration(declaration: str, module_names: set[str]) -> bool:
    """Parse a generated component and check it references only module bindings."""
    try:
        program = parse_module(declaration)
    except ParseError:
        return False
    if len(program.body) != 1:
        return False
    fn = program.body[0]
    if any(isinstance(node, (js.ThisExpression, js.AwaitExpression)) for node in js.walk(fn)):
        return False
    return all(name in module_names for name in collect_references(fn))
