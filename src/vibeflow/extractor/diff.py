"""Variable-site discovery across structurally identical elements."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from vibeflow.extractor.signature import is_literal_like
from vibeflow.jsx import ast as js
from vibeflow.jsx.parser import RESERVED_WORDS

# Props React consumes itself; a component never receives them.
RESERVED_PROPS = frozenset({"key", "ref"})

_CAMEL_RE = re.compile(r"[-:]+(\w)")


@dataclass(frozen=True)
class VariableSite:
    """A position whose value differs between occurrences.

    ``path`` holds child indices from the occurrence root down to the
    element owning the attribute (``kind == "attr"``), or down to the child
    itself (``kind == "text"``).
    """

    kind: str
    prop_key: str
    path: tuple[int, ...]
    attr_name: Optional[str] = None


@dataclass(frozen=True)
class SiteValue:
    """One occurrence's value at a site: a plain string or an expression node."""

    text: Optional[str] = None
    node: Optional[js.Node] = None

    @property
    def is_static(self) -> bool:
        return self.node is None or is_literal_like(self.node)


@dataclass
class SiteMatch:
    """A site before key assignment, with its span in every occurrence."""

    kind: str
    base_key: str
    path: tuple[int, ...]
    attr_name: Optional[str]
    spans: list[js.Node]  # the replaced node in each occurrence
    values: list[SiteValue]
    prop_key: str = ""

    def site(self) -> VariableSite:
        return VariableSite(self.kind, self.prop_key, self.path, self.attr_name)


def to_camel_case(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def _attr_value(attr: js.JSXAttribute) -> SiteValue:
    value = attr.value
    if value is None:
        return SiteValue(node=js.BooleanLiteral(raw="true", value=True))
    if isinstance(value, js.StringLiteral):
        return SiteValue(text=value.value)
    if isinstance(value, js.JSXExpressionContainer):
        return SiteValue(node=value.expression)
    return SiteValue(node=value)


def _child_value(child: js.Node) -> SiteValue:
    if isinstance(child, js.JSXText):
        return SiteValue(text=child.value)
    if isinstance(child, js.JSXExpressionContainer):
        return SiteValue(node=child.expression)
    return SiteValue(node=child)


def _comparable(value: SiteValue, source: str) -> tuple:
    if value.node is None:
        return ("str", value.text)
    node = value.node
    if isinstance(node, js.JSXEmptyExpression):
        return ("empty",)
    if is_literal_like(node):
        return ("lit", node.type, getattr(node, "value", None))
    return ("expr", source[node.start : node.end])


def find_variable_sites(members: Sequence[js.JSXElement], source: str) -> list[SiteMatch] | None:
    """Diff every member against the first, position by position.

    Members must share one structural signature. Returns None when the
    occurrences cannot be parameterised (differing spread arguments).
    """
    sites: list[SiteMatch] = []

    def differs(values: list[SiteValue]) -> bool:
        first = _comparable(values[0], source)
        return any(_comparable(v, source) != first for v in values[1:])

    def walk(elements: Sequence[js.JSXElement], path: tuple[int, ...]) -> bool:
        for attrs in zip(*(e.attributes for e in elements)):
            head = attrs[0]
            if isinstance(head, js.JSXSpreadAttribute):
                texts = {source[a.argument.start : a.argument.end] for a in attrs}
                if len(texts) > 1:
                    return False
                continue
            values = [_attr_value(a) for a in attrs]
            if differs(values):
                sites.append(SiteMatch(
                    kind="attr", base_key=to_camel_case(head.name), path=path, attr_name=head.name,
                    spans=[a.value for a in attrs], values=values,
                ))

        for index, kids in enumerate(zip(*(e.children for e in elements))):
            child_path = (*path, index)
            head = kids[0]
            if isinstance(head, js.JSXElement):
                if not walk(kids, child_path):
                    return False
                continue
            if isinstance(head, js.JSXSpreadChild):
                texts = {source[k.start : k.end] for k in kids}
                if len(texts) > 1:
                    return False
                continue
            values = [_child_value(k) for k in kids]
            if differs(values):
                sites.append(SiteMatch(
                    kind="text", base_key="text" + "".join(str(i) for i in child_path),
                    path=child_path, attr_name=None, spans=list(kids), values=values,
                ))
        return True

    if not walk(members, ()):
        return None
    return sites


def assign_keys(sites: Iterable[SiteMatch], taken: Iterable[str]) -> None:
    """Give every site a unique prop key clear of *taken* names.

    Collisions get numeric suffixes starting at 2; names that are reserved
    words or props React consumes get a ``Value`` suffix first.
    """
    used = set(taken)
    for site in sites:
        base = site.base_key
        if base in RESERVED_WORDS or base in RESERVED_PROPS:
            base = f"{base}Value"
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}{suffix}"
            suffix += 1
        used.add(candidate)
        site.prop_key = candidate
