"""Value normalisation shared by the theme table and the resolver.

Every theme scale value and every declaration value goes through the same
functions, so a lookup is a plain dictionary hit on the canonical form:

    normalize_length("1rem")              -> "16px"
    normalize_length("16.000001px")       -> "16px"
    normalize_color("#FFF")               -> "#ffffff"
    normalize_color("rgba(0, 0, 0, 1)")   -> "#000000"
    normalize_color("rgba(0,0,0,.5)")     -> "rgba(0,0,0,0.5)"
"""

from __future__ import annotations

import re

# Decimal places kept after rounding; enough to absorb float noise from
# design tools without merging genuinely different values.
PRECISION = 4

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
_LENGTH_RE = re.compile(rf"^({_NUMBER})([a-z%]*)$", re.IGNORECASE)
_NUMBER_RE = re.compile(rf"^{_NUMBER}$", re.IGNORECASE)
_DECIMAL_RE = re.compile(r"(?<![\w#.])(-?\d*\.\d+)")
_HEX_RE = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_RGB_RE = re.compile(r"^rgba?\((.*)\)$")
_COLOR_FUNCTIONS = ("hsl(", "hsla(", "hwb(", "lab(", "lch(", "oklab(", "oklch(", "color(")

LENGTH_UNITS = frozenset({
    "px", "rem", "em", "%", "vh", "vw", "vmin", "vmax", "dvh", "svh", "lvh",
    "ch", "ex", "pt", "pc", "cm", "mm", "in", "fr",
})

NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "orange": "#ffa500",
    "purple": "#800080",
    "gray": "#808080",
    "grey": "#808080",
    "silver": "#c0c0c0",
    "maroon": "#800000",
    "navy": "#000080",
    "teal": "#008080",
    "olive": "#808000",
    "lime": "#00ff00",
    "aqua": "#00ffff",
    "cyan": "#00ffff",
    "fuchsia": "#ff00ff",
    "magenta": "#ff00ff",
    "pink": "#ffc0cb",
    "brown": "#a52a2a",
    "gold": "#ffd700",
    "indigo": "#4b0082",
    "violet": "#ee82ee",
    "coral": "#ff7f50",
    "crimson": "#dc143c",
    "darkgray": "#a9a9a9",
    "lightgray": "#d3d3d3",
    "whitesmoke": "#f5f5f5",
    "rebeccapurple": "#663399",
    "transparent": "rgba(0,0,0,0)",
}

COLOR_KEYWORDS = frozenset({"currentcolor", "inherit"})


def format_number(value: float) -> str:
    """Round to PRECISION places and drop trailing zeros (``-0`` becomes ``0``)."""
    rounded = round(value, PRECISION)
    if rounded == 0:
        return "0"
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{PRECISION}f}".rstrip("0").rstrip(".")


def clean_literal(value: str) -> str:
    """Round float noise inside an arbitrary CSS value, leaving everything else."""
    return _DECIMAL_RE.sub(lambda m: format_number(float(m.group(1))), value.strip())


def parse_length(value: str) -> tuple[float, str] | None:
    """Split ``"12.5px"`` into ``(12.5, "px")``; None when not a number+unit."""
    match = _LENGTH_RE.match(value.strip())
    if not match:
        return None
    unit = match.group(2).lower()
    if unit and unit not in LENGTH_UNITS:
        return None
    return float(match.group(1)), unit


def normalize_length(value: str, rem_in_px: float = 16) -> str | None:
    """Canonical form of a length for lookup: px basis for px/rem, unit kept otherwise."""
    parsed = parse_length(value)
    if parsed is None:
        return None
    number, unit = parsed
    if unit == "":
        if number != 0:
            return None
        return "0px"
    if number == 0 and unit != "%":
        return "0px"
    if unit == "rem":
        return f"{format_number(number * rem_in_px)}px"
    return f"{format_number(number)}{unit}"


def normalize_number(value: str) -> str | None:
    """Canonical form of a unitless number, or a percentage as a fraction."""
    raw = value.strip()
    if raw.endswith("%") and _NUMBER_RE.match(raw[:-1]):
        return format_number(float(raw[:-1]) / 100)
    if _NUMBER_RE.match(raw):
        return format_number(float(raw))
    return None


def normalize_line_height(value: str, rem_in_px: float = 16) -> str | None:
    """Line heights are either unitless multipliers or lengths."""
    raw = value.strip()
    if _NUMBER_RE.match(raw):
        return format_number(float(raw))
    return normalize_length(raw, rem_in_px)


def _channel(raw: str) -> float | None:
    raw = raw.strip()
    try:
        if raw.endswith("%"):
            return float(raw[:-1]) * 255 / 100
        return float(raw)
    except ValueError:
        return None


def _alpha(raw: str) -> float | None:
    raw = raw.strip()
    try:
        if raw.endswith("%"):
            return float(raw[:-1]) / 100
        return float(raw)
    except ValueError:
        return None


def _normalize_rgb(body: str) -> str | None:
    if "/" in body:
        channels_part, alpha_part = body.split("/", 1)
        parts = channels_part.replace(",", " ").split() + [alpha_part]
    else:
        parts = [p for p in re.split(r"[,\s]+", body.strip()) if p]
    if len(parts) not in (3, 4):
        return None
    channels = [_channel(p) for p in parts[:3]]
    if any(c is None for c in channels):
        return None
    alpha = _alpha(parts[3]) if len(parts) == 4 else 1.0
    if alpha is None:
        return None
    if all(c == int(c) and 0 <= c <= 255 for c in channels) and alpha == 1:  # type: ignore[operator]
        r, g, b = (int(c) for c in channels)  # type: ignore[arg-type]
        return f"#{r:02x}{g:02x}{b:02x}"
    parts_out = ",".join(format_number(c) for c in channels)  # type: ignore[arg-type]
    return f"rgba({parts_out},{format_number(alpha)})"


def normalize_color(value: str) -> str | None:
    """Canonical colour form, or None when *value* is not a colour literal."""
    raw = value.strip().lower()
    if raw in NAMED_COLORS:
        return NAMED_COLORS[raw]
    if raw in COLOR_KEYWORDS:
        return raw
    if _HEX_RE.match(raw):
        digits = raw[1:]
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) == 8 and digits.endswith("ff"):
            digits = digits[:6]
        return f"#{digits}"
    match = _RGB_RE.match(raw)
    if match:
        return _normalize_rgb(match.group(1))
    if raw.startswith(_COLOR_FUNCTIONS) and raw.endswith(")"):
        return clean_literal(re.sub(r"\s*,\s*", ",", raw))
    return None


def split_alpha(canonical: str) -> tuple[str, str] | None:
    """Split ``rgba(r,g,b,a)`` into an opaque hex colour and the alpha string."""
    if not canonical.startswith("rgba("):
        return None
    parts = canonical[5:-1].split(",")
    try:
        r, g, b = (float(p) for p in parts[:3])
    except ValueError:
        return None
    if not all(c == int(c) for c in (r, g, b)):
        return None
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}", parts[3]
