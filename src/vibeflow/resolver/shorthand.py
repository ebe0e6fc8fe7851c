"""Shorthand expansion into longhand declarations.

Each longhand produced here carries ``origin=`` pointing at the shorthand
it came from, so later passes can re-merge or re-emit the shorthand.
"""

from __future__ import annotations

from typing import Callable, Optional

from vibeflow.css.model import Declaration
from vibeflow.units import normalize_color, normalize_length

__all__ = ["expand_shorthand", "split_value", "SIDES", "CORNERS"]

SIDES = ("top", "right", "bottom", "left")
CORNERS = ("top-left", "top-right", "bottom-right", "bottom-left")

BORDER_STYLES = frozenset({
    "none", "hidden", "dotted", "dashed", "solid", "double",
    "groove", "ridge", "inset", "outset",
})
BORDER_WIDTH_KEYWORDS = frozenset({"thin", "medium", "thick"})
DECORATION_LINES = frozenset({"none", "underline", "overline", "line-through"})

Expansion = Optional[list[tuple[str, str]]]


class _Initial(str):
    """A value the shorthand left out, filled in with its initial value."""


def split_value(value: str) -> list[str]:
    """Split a declaration value on top-level whitespace.

    Parentheses and quoted strings are kept intact, so
    ``"1px solid rgb(0, 0, 0)"`` yields three parts.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote = ""
    for ch in value.strip():
        if quote:
            current.append(ch)
            if ch == quote:
                quote = ""
            continue
        if ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        elif ch.isspace() and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
            continue
        current.append(ch)
    if current:
        parts.append("".join(current))
    return parts


def _separated(part: str) -> bool:
    # elliptical radii ("10px / 20px") and value lists cannot be split per side
    return "(" not in part and ("/" in part or "," in part)


def _four_way(props: tuple[str, ...]) -> Callable[[list[str]], Expansion]:
    def expand(parts: list[str]) -> Expansion:
        if not 1 <= len(parts) <= 4 or any(_separated(p) for p in parts):
            return None
        top = parts[0]
        right = parts[1] if len(parts) > 1 else top
        bottom = parts[2] if len(parts) > 2 else top
        left = parts[3] if len(parts) > 3 else right
        return list(zip(props, (top, right, bottom, left)))

    return expand


def _two_way(first: str, second: str) -> Callable[[list[str]], Expansion]:
    def expand(parts: list[str]) -> Expansion:
        if not 1 <= len(parts) <= 2:
            return None
        return [(first, parts[0]), (second, parts[-1])]

    return expand


def _border_parts(parts: list[str]) -> tuple[str, str, str] | None:
    """Classify ``border`` tokens into (width, style, colour), filling initial values."""
    width = style = color = None
    for part in parts:
        lowered = part.lower()
        if style is None and lowered in BORDER_STYLES:
            style = lowered
        elif width is None and (lowered in BORDER_WIDTH_KEYWORDS or normalize_length(part) is not None):
            width = part
        elif color is None and normalize_color(part) is not None:
            color = part
        else:
            return None
    return width or _Initial("medium"), style or _Initial("none"), color or _Initial("currentcolor")


def _border(parts: list[str]) -> Expansion:
    if not 1 <= len(parts) <= 3:
        return None
    classified = _border_parts(parts)
    if classified is None:
        return None
    expanded: list[tuple[str, str]] = []
    for aspect, value in zip(("width", "style", "color"), classified):
        expanded.extend((f"border-{side}-{aspect}", value) for side in SIDES)
    return expanded


def _border_side(side: str) -> Callable[[list[str]], Expansion]:
    def expand(parts: list[str]) -> Expansion:
        if not 1 <= len(parts) <= 3:
            return None
        classified = _border_parts(parts)
        if classified is None:
            return None
        return [
            (f"border-{side}-{aspect}", value)
            for aspect, value in zip(("width", "style", "color"), classified)
        ]

    return expand


_FLEX_KEYWORDS = {
    "auto": ("1", "1", "auto"),
    "none": ("0", "0", "auto"),
    "initial": ("0", "1", "auto"),
}


def _is_number(part: str) -> bool:
    try:
        float(part)
    except ValueError:
        return False
    return True


def _flex(parts: list[str]) -> Expansion:
    props = ("flex-grow", "flex-shrink", "flex-basis")
    if len(parts) == 1 and parts[0].lower() in _FLEX_KEYWORDS:
        return list(zip(props, _FLEX_KEYWORDS[parts[0].lower()]))
    if not 1 <= len(parts) <= 3 or not _is_number(parts[0]):
        return None
    grow, shrink, basis = parts[0], "1", "0%"
    rest = parts[1:]
    if rest and _is_number(rest[0]):
        shrink = rest.pop(0)
    if rest:
        basis = rest.pop(0)
    if rest:
        return None
    return list(zip(props, (grow, shrink, basis)))


def _background(parts: list[str]) -> Expansion:
    if len(parts) != 1 or normalize_color(parts[0]) is None:
        return None
    return [("background-color", parts[0])]


def _text_decoration(parts: list[str]) -> Expansion:
    if len(parts) != 1 or parts[0].lower() not in DECORATION_LINES:
        return None
    return [("text-decoration-line", parts[0])]


_EXPANDERS: dict[str, Callable[[list[str]], Expansion]] = {
    "margin": _four_way(tuple(f"margin-{s}" for s in SIDES)),
    "padding": _four_way(tuple(f"padding-{s}" for s in SIDES)),
    "inset": _four_way(SIDES),
    "border-width": _four_way(tuple(f"border-{s}-width" for s in SIDES)),
    "border-style": _four_way(tuple(f"border-{s}-style" for s in SIDES)),
    "border-color": _four_way(tuple(f"border-{s}-color" for s in SIDES)),
    "border-radius": _four_way(tuple(f"border-{c}-radius" for c in CORNERS)),
    "gap": _two_way("row-gap", "column-gap"),
    "overflow": _two_way("overflow-x", "overflow-y"),
    "border": _border,
    "flex": _flex,
    "background": _background,
    "text-decoration": _text_decoration,
    **{f"border-{side}": _border_side(side) for side in SIDES},
}


def expand_shorthand(decl: Declaration) -> list[Declaration]:
    """Expand *decl* into longhands, or return ``[decl]`` when it is not expandable.

    Values containing ``var()`` are never expanded because a custom property
    may stand for any number of components.
    """
    expander = _EXPANDERS.get(decl.property)
    if expander is None or "var(" in decl.value.lower():
        return [decl]
    expanded = expander(split_value(decl.value))
    if expanded is None:
        return [decl]
    return [
        Declaration(
            property=prop,
            value=str(value),
            important=decl.important,
            origin=decl,
            implied=isinstance(value, _Initial),
        )
        for prop, value in expanded
    ]
