"""Longhand property table and shorthand consolidation families."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from vibeflow.theme.table import (
    BORDER_RADIUS,
    BORDER_WIDTH,
    COLOR,
    DEFAULT_TOKEN,
    FONT_SIZE,
    FONT_WEIGHT,
    LETTER_SPACING,
    LINE_HEIGHT,
    OPACITY,
    SPACING,
    Z_INDEX,
)

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class PropertySpec:
    """How one longhand maps onto utilities.

    ``keywords`` maps a lowercased value to a utility suffix and is tried
    before the theme category. Properties without a category only resolve
    through keywords unless ``arbitrary`` is set. ``standalone=False``
    marks longhands that only resolve when consolidated with their siblings.
    """

    prefix: str
    category: str | None = None
    keywords: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    negative: bool = False
    arbitrary: bool = True
    standalone: bool = True


def _kw(**pairs: str) -> Mapping[str, str]:
    return MappingProxyType({k.replace("_", "-"): v for k, v in pairs.items()})


def _same(*values: str) -> Mapping[str, str]:
    return MappingProxyType({v: v for v in values})


_SIZING_KEYWORDS = {
    "auto": "auto", "100%": "full", "min-content": "min", "max-content": "max",
    "fit-content": "fit", "50%": "1/2", "33.3333%": "1/3", "66.6667%": "2/3",
    "25%": "1/4", "75%": "3/4",
}

_SIDE_PREFIX = {"top": "t", "right": "r", "bottom": "b", "left": "l"}
_CORNER_PREFIX = {"top-left": "tl", "top-right": "tr", "bottom-right": "br", "bottom-left": "bl"}

_BORDER_STYLE_KEYWORDS = _same("solid", "dashed", "dotted", "double", "hidden", "none")

_FLEX_ALIGN = {"flex-start": "start", "flex-end": "end", "start": "start", "end": "end", "center": "center"}

PROPERTIES: Mapping[str, PropertySpec] = MappingProxyType({
    # spacing
    **{f"margin-{s}": PropertySpec(f"m{p}", SPACING, _kw(auto="auto"), negative=True)
       for s, p in _SIDE_PREFIX.items()},
    **{f"padding-{s}": PropertySpec(f"p{p}", SPACING) for s, p in _SIDE_PREFIX.items()},
    **{s: PropertySpec(s, SPACING, MappingProxyType({"auto": "auto", "100%": "full"}), negative=True)
       for s in _SIDE_PREFIX},
    "row-gap": PropertySpec("gap-y", SPACING),
    "column-gap": PropertySpec("gap-x", SPACING),
    "width": PropertySpec("w", SPACING, MappingProxyType({**_SIZING_KEYWORDS, "100vw": "screen"})),
    "height": PropertySpec("h", SPACING, MappingProxyType({**_SIZING_KEYWORDS, "100vh": "screen"})),
    "min-width": PropertySpec("min-w", SPACING, MappingProxyType(_SIZING_KEYWORDS)),
    "min-height": PropertySpec("min-h", SPACING, MappingProxyType({**_SIZING_KEYWORDS, "100vh": "screen"})),
    "max-width": PropertySpec("max-w", SPACING, MappingProxyType({**_SIZING_KEYWORDS, "none": "none"})),
    "max-height": PropertySpec("max-h", SPACING, MappingProxyType({**_SIZING_KEYWORDS, "none": "none"})),
    "flex-basis": PropertySpec("basis", SPACING, MappingProxyType(_SIZING_KEYWORDS)),
    # colour
    "color": PropertySpec("text", COLOR),
    "background-color": PropertySpec("bg", COLOR),
    **{f"border-{s}-color": PropertySpec(f"border-{p}", COLOR) for s, p in _SIDE_PREFIX.items()},
    "outline-color": PropertySpec("outline", COLOR),
    "text-decoration-color": PropertySpec("decoration", COLOR),
    "caret-color": PropertySpec("caret", COLOR),
    "accent-color": PropertySpec("accent", COLOR),
    "fill": PropertySpec("fill", COLOR, _kw(none="none")),
    "stroke": PropertySpec("stroke", COLOR, _kw(none="none")),
    # borders
    **{f"border-{s}-width": PropertySpec(f"border-{p}", BORDER_WIDTH) for s, p in _SIDE_PREFIX.items()},
    **{f"border-{s}-style": PropertySpec("border", None, _BORDER_STYLE_KEYWORDS, arbitrary=False,
                                         standalone=False)
       for s in _SIDE_PREFIX},
    **{f"border-{c}-radius": PropertySpec(f"rounded-{p}", BORDER_RADIUS) for c, p in _CORNER_PREFIX.items()},
    # typography
    "font-size": PropertySpec("text", FONT_SIZE),
    "font-weight": PropertySpec("font", FONT_WEIGHT, _kw(bold="bold", normal="normal")),
    "line-height": PropertySpec("leading", LINE_HEIGHT),
    "letter-spacing": PropertySpec("tracking", LETTER_SPACING),
    "text-align": PropertySpec("text", keywords=_same("left", "center", "right", "justify", "start", "end"),
                               arbitrary=False),
    "font-style": PropertySpec("", keywords=_kw(italic="italic", normal="not-italic"), arbitrary=False),
    "text-transform": PropertySpec("", keywords=_kw(uppercase="uppercase", lowercase="lowercase",
                                                    capitalize="capitalize", none="normal-case"),
                                   arbitrary=False),
    "text-decoration-line": PropertySpec("", keywords=_kw(underline="underline", overline="overline",
                                                          line_through="line-through", none="no-underline"),
                                         arbitrary=False),
    "text-overflow": PropertySpec("text", keywords=_same("ellipsis", "clip"), arbitrary=False),
    "white-space": PropertySpec("whitespace", keywords=_same("normal", "nowrap", "pre", "pre-line",
                                                              "pre-wrap", "break-spaces"),
                                arbitrary=False),
    # layout
    "display": PropertySpec("", keywords=_kw(block="block", inline_block="inline-block", inline="inline",
                                             flex="flex", inline_flex="inline-flex", grid="grid",
                                             inline_grid="inline-grid", contents="contents",
                                             table="table", flow_root="flow-root",
                                             list_item="list-item", none="hidden"),
                            arbitrary=False),
    "position": PropertySpec("", keywords=_same("static", "fixed", "absolute", "relative", "sticky"),
                             arbitrary=False),
    "flex-direction": PropertySpec("flex", keywords=_kw(row="row", row_reverse="row-reverse",
                                                        column="col", column_reverse="col-reverse"),
                                   arbitrary=False),
    "flex-wrap": PropertySpec("flex", keywords=_same("wrap", "nowrap", "wrap-reverse"), arbitrary=False),
    "flex-grow": PropertySpec("grow", keywords=MappingProxyType({"1": DEFAULT_TOKEN, "0": "0"})),
    "flex-shrink": PropertySpec("shrink", keywords=MappingProxyType({"1": DEFAULT_TOKEN, "0": "0"})),
    "justify-content": PropertySpec("justify", keywords=MappingProxyType({
        **_FLEX_ALIGN, "space-between": "between", "space-around": "around",
        "space-evenly": "evenly", "normal": "normal", "stretch": "stretch",
    }), arbitrary=False),
    "align-items": PropertySpec("items", keywords=MappingProxyType({
        **_FLEX_ALIGN, "baseline": "baseline", "stretch": "stretch",
    }), arbitrary=False),
    "align-self": PropertySpec("self", keywords=MappingProxyType({
        **_FLEX_ALIGN, "auto": "auto", "baseline": "baseline", "stretch": "stretch",
    }), arbitrary=False),
    "align-content": PropertySpec("content", keywords=MappingProxyType({
        **_FLEX_ALIGN, "space-between": "between", "space-around": "around",
        "space-evenly": "evenly", "baseline": "baseline", "stretch": "stretch",
    }), arbitrary=False),
    "overflow-x": PropertySpec("overflow-x", keywords=_same("auto", "hidden", "clip", "visible", "scroll"),
                               arbitrary=False),
    "overflow-y": PropertySpec("overflow-y", keywords=_same("auto", "hidden", "clip", "visible", "scroll"),
                               arbitrary=False),
    "box-sizing": PropertySpec("box", keywords=_kw(border_box="border", content_box="content"),
                               arbitrary=False),
    "visibility": PropertySpec("", keywords=_kw(visible="visible", hidden="invisible", collapse="collapse"),
                               arbitrary=False),
    "object-fit": PropertySpec("object", keywords=_same("contain", "cover", "fill", "none", "scale-down"),
                               arbitrary=False),
    "pointer-events": PropertySpec("pointer-events", keywords=_same("none", "auto"), arbitrary=False),
    "user-select": PropertySpec("select", keywords=_same("none", "text", "all", "auto"), arbitrary=False),
    "cursor": PropertySpec("cursor", keywords=_same("auto", "default", "pointer", "wait", "text", "move",
                                                    "help", "not-allowed", "none", "grab", "grabbing")),
    # effects
    "opacity": PropertySpec("opacity", OPACITY),
    "z-index": PropertySpec("z", Z_INDEX, negative=True),
})


@dataclass(frozen=True)
class Family:
    """Longhands that consolidate back into one shorthand utility.

    ``members`` lists the longhands in expansion order. ``axes`` pairs two
    member indexes with an axis prefix, used when the members differ.
    """

    members: tuple[str, ...]
    prefix: str
    axes: tuple[tuple[int, int, str], ...] = ()


FAMILIES: tuple[Family, ...] = (
    Family(tuple(f"margin-{s}" for s in _SIDE_PREFIX), "m", ((0, 2, "my"), (1, 3, "mx"))),
    Family(tuple(f"padding-{s}" for s in _SIDE_PREFIX), "p", ((0, 2, "py"), (1, 3, "px"))),
    Family(tuple(_SIDE_PREFIX), "inset", ((0, 2, "inset-y"), (1, 3, "inset-x"))),
    Family(tuple(f"border-{s}-width" for s in _SIDE_PREFIX), "border"),
    Family(tuple(f"border-{s}-style" for s in _SIDE_PREFIX), "border"),
    Family(tuple(f"border-{s}-color" for s in _SIDE_PREFIX), "border"),
    Family(tuple(f"border-{c}-radius" for c in _CORNER_PREFIX), "rounded"),
    Family(("row-gap", "column-gap"), "gap"),
    Family(("overflow-x", "overflow-y"), "overflow"),
)

FAMILY_BY_MEMBER: Mapping[str, Family] = MappingProxyType(
    {member: family for family in FAMILIES for member in family.members}
)

# (grow, shrink, basis) -> flex utility
FLEX_COMBINATIONS: Mapping[tuple[str, str, str], str] = MappingProxyType({
    ("1", "1", "0%"): "flex-1",
    ("1", "1", "auto"): "flex-auto",
    ("0", "1", "auto"): "flex-initial",
    ("0", "0", "auto"): "flex-none",
})
