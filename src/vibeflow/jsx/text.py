"""JSX text semantics and string rendering helpers."""

from __future__ import annotations

import html
import json
import re

_LINE_SPLIT_RE = re.compile(r"\r\n|\n|\r")


def jsx_text_value(raw: str) -> str:
    """The string React renders for a raw JSX text child.

    Lines are trimmed where they meet a line break, whitespace-only lines
    disappear and the remaining lines are joined with a single space.
    HTML entities are decoded afterwards.
    """
    lines = _LINE_SPLIT_RE.split(raw)
    last_non_empty = 0
    for i, line in enumerate(lines):
        if line.strip(" \t"):
            last_non_empty = i

    out: list[str] = []
    for i, line in enumerate(lines):
        trimmed = line.replace("\t", " ")
        if i != 0:
            trimmed = trimmed.lstrip(" ")
        if i != len(lines) - 1:
            trimmed = trimmed.rstrip(" ")
        if trimmed:
            if i != last_non_empty:
                trimmed += " "
            out.append(trimmed)
    return html.unescape("".join(out))


def js_string(value: str) -> str:
    """Render *value* as a double-quoted JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def jsx_attribute_value(value: str) -> str:
    """Render a string as a JSX attribute value, quoting directly when safe."""
    if '"' in value or "&" in value or "\n" in value or "\r" in value:
        return "{" + js_string(value) + "}"
    return f'"{value}"'


def is_identifier(name: str) -> bool:
    return bool(re.fullmatch(r"(?:[^\W\d]|\$)[\w$]*", name))
