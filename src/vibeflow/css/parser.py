"""Lark Transformer that converts a CSS parse tree into a Stylesheet model."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from vibeflow.css.model import AtRule, Declaration, GroupRule, Item, Rule, Stylesheet
from vibeflow.errors import ParseError

__all__ = ["parse_css", "parse_declarations", "serialize"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def _split_important(raw: str) -> tuple[str, bool]:
    """Strip a trailing ``!important`` flag from a declaration value."""
    match = _IMPORTANT_RE.search(raw)
    if match:
        return raw[: match.start()].strip(), True
    return raw.strip(), False


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into CSS model objects."""

    def declaration(self, items: list[Token]) -> Declaration:
        prop = str(items[0])
        if not prop.startswith("--"):
            # Custom property names are case-sensitive; everything else is not.
            prop = prop.lower()
        value, important = _split_important(str(items[1]))
        return Declaration(property=prop, value=value, important=important)

    def declarations(self, items: list[Declaration]) -> tuple[Declaration, ...]:
        return tuple(items)

    def rule(self, items: list[object]) -> Rule:
        selector = " ".join(_COMMENT_RE.sub(" ", str(items[0])).split())
        return Rule(selector=selector, declarations=items[1])  # type: ignore[arg-type]

    def group_rule(self, items: list[object]) -> GroupRule:
        keyword = str(items[0])[1:]
        prelude = " ".join(_COMMENT_RE.sub(" ", str(items[1])).split())
        rules = tuple(items[2:])
        return GroupRule(keyword=keyword, prelude=prelude, rules=rules)

    def at_block(self, items: list[object]) -> AtRule:
        keyword = str(items[0])[1:]
        prelude = ""
        if isinstance(items[1], Token):
            prelude = " ".join(str(items[1]).split())
        return AtRule(keyword=keyword, prelude=prelude, declarations=items[-1])  # type: ignore[arg-type]

    def at_statement(self, items: list[Token]) -> AtRule:
        keyword = str(items[0])[1:]
        prelude = " ".join(str(items[1]).split()) if len(items) > 1 else ""
        return AtRule(keyword=keyword, prelude=prelude, declarations=None)

    def start(self, items: list[Item]) -> Stylesheet:
        return Stylesheet(items=tuple(items))


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def parse_css(source: str) -> Stylesheet:
    """Parse CSS source into a Stylesheet.

    Raises :class:`ParseError` for malformed input; a partial stylesheet is
    never returned.
    """
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        if line is not None and line < 0:
            line, column = None, None
        raise ParseError(str(e), line=line, column=column) from e
    return CssTransformer().transform(tree)


def parse_declarations(body: str) -> tuple[Declaration, ...]:
    """Parse a bare declaration list such as an inline ``style`` attribute."""
    sheet = parse_css(f"_ {{{body}}}")
    return sheet.items[0].declarations  # type: ignore[union-attr,return-value]


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------


def _declaration_block(declarations: Iterable[Declaration], indent: str) -> str:
    return "".join(f"{indent}  {decl};\n" for decl in declarations)


def _serialize_item(item: Item, indent: str = "") -> str:
    if isinstance(item, Rule):
        body = _declaration_block(item.declarations, indent)
        return f"{indent}{item.selector} {{\n{body}{indent}}}\n"
    if isinstance(item, GroupRule):
        inner = "".join(_serialize_item(rule, indent + "  ") for rule in item.rules)
        return f"{indent}@{item.keyword} {item.prelude} {{\n{inner}{indent}}}\n"
    head = f"@{item.keyword} {item.prelude}".rstrip()
    if item.declarations is None:
        return f"{indent}{head};\n"
    body = _declaration_block(item.declarations, indent)
    return f"{indent}{head} {{\n{body}{indent}}}\n"


def serialize(items: Iterable[Item]) -> str:
    """Render model items back to CSS text."""
    return "".join(_serialize_item(item) for item in items)
