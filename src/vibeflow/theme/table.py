"""Theme configuration and the immutable value table built from it."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable

from vibeflow.errors import ConfigError
from vibeflow.theme import defaults
from vibeflow.units import (
    normalize_color,
    normalize_length,
    normalize_line_height,
    normalize_number,
)

logger = logging.getLogger(__name__)

COLOR = "color"
SPACING = "spacing"
SCREEN = "screen"
FONT_SIZE = "font-size"
BORDER_RADIUS = "border-radius"
BORDER_WIDTH = "border-width"
FONT_WEIGHT = "font-weight"
LINE_HEIGHT = "line-height"
LETTER_SPACING = "letter-spacing"
OPACITY = "opacity"
Z_INDEX = "z-index"

# Scale token that renders as the bare utility prefix (``rounded``, ``border``).
DEFAULT_TOKEN = "DEFAULT"


def _z_index(value: str, rem_in_px: float) -> str | None:
    if value.strip() == "auto":
        return "auto"
    return normalize_number(value)


_NORMALIZERS: dict[str, Callable[[str, float], str | None]] = {
    COLOR: lambda value, rem: normalize_color(value),
    SPACING: normalize_length,
    SCREEN: normalize_length,
    FONT_SIZE: normalize_length,
    BORDER_RADIUS: normalize_length,
    BORDER_WIDTH: normalize_length,
    LETTER_SPACING: normalize_length,
    LINE_HEIGHT: normalize_line_height,
    FONT_WEIGHT: lambda value, rem: normalize_number(value),
    OPACITY: lambda value, rem: normalize_number(value),
    Z_INDEX: _z_index,
}

# wire key -> (field name, category)
_SCALE_KEYS: dict[str, tuple[str, str]] = {
    "colorPalette": ("color_palette", COLOR),
    "spacingScale": ("spacing_scale", SPACING),
    "screens": ("screens", SCREEN),
    "fontSizeScale": ("font_size_scale", FONT_SIZE),
    "borderRadiusScale": ("border_radius_scale", BORDER_RADIUS),
    "borderWidthScale": ("border_width_scale", BORDER_WIDTH),
    "fontWeightScale": ("font_weight_scale", FONT_WEIGHT),
    "lineHeightScale": ("line_height_scale", LINE_HEIGHT),
    "letterSpacingScale": ("letter_spacing_scale", LETTER_SPACING),
    "opacityScale": ("opacity_scale", OPACITY),
    "zIndexScale": ("z_index_scale", Z_INDEX),
}

_OPTION_KEYS: dict[str, str] = {
    "remInPx": "rem_in_px",
    "arbitraryValuesEnabled": "arbitrary_values_enabled",
}


def _default(scale: Mapping[str, Any]) -> Any:
    return field(default_factory=lambda: dict(scale))


@dataclass(frozen=True)
class ThemeConfig:
    """User-facing theme options.

    Every scale defaults to the built-in Tailwind v3 scale. Supplying a scale
    replaces it wholesale; the ``extend`` key of :meth:`from_dict` merges
    into the defaults instead.
    """

    color_palette: Mapping[str, Any] = _default(defaults.DEFAULT_COLORS)
    spacing_scale: Mapping[str, Any] = _default(defaults.DEFAULT_SPACING)
    screens: Mapping[str, Any] = _default(defaults.DEFAULT_SCREENS)
    font_size_scale: Mapping[str, Any] = _default(defaults.DEFAULT_FONT_SIZES)
    border_radius_scale: Mapping[str, Any] = _default(defaults.DEFAULT_BORDER_RADIUS)
    border_width_scale: Mapping[str, Any] = _default(defaults.DEFAULT_BORDER_WIDTH)
    font_weight_scale: Mapping[str, Any] = _default(defaults.DEFAULT_FONT_WEIGHTS)
    line_height_scale: Mapping[str, Any] = _default(defaults.DEFAULT_LINE_HEIGHTS)
    letter_spacing_scale: Mapping[str, Any] = _default(defaults.DEFAULT_LETTER_SPACING)
    opacity_scale: Mapping[str, Any] = _default(defaults.DEFAULT_OPACITY)
    z_index_scale: Mapping[str, Any] = _default(defaults.DEFAULT_Z_INDEX)
    rem_in_px: float = 16
    arbitrary_values_enabled: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.rem_in_px, bool) or not isinstance(self.rem_in_px, (int, float)):
            raise ConfigError(f"remInPx must be a number, got {self.rem_in_px!r}")
        if self.rem_in_px <= 0:
            raise ConfigError(f"remInPx must be positive, got {self.rem_in_px}")
        if not isinstance(self.arbitrary_values_enabled, bool):
            raise ConfigError("arbitraryValuesEnabled must be a boolean")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThemeConfig:
        """Build a config from camelCase keys, as found in a theme JSON file."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"theme configuration must be an object, got {type(data).__name__}")
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key == "extend":
                continue
            if key in _SCALE_KEYS:
                kwargs[_SCALE_KEYS[key][0]] = _check_scale(key, value)
            elif key in _OPTION_KEYS:
                kwargs[_OPTION_KEYS[key]] = value
            else:
                raise ConfigError(f"unknown theme key: {key!r}")
        config = cls(**kwargs)

        extend = data.get("extend")
        if extend is None:
            return config
        if not isinstance(extend, Mapping):
            raise ConfigError("theme 'extend' must be an object")
        merged: dict[str, Any] = {}
        for key, value in extend.items():
            if key not in _SCALE_KEYS:
                raise ConfigError(f"unknown theme key in extend: {key!r}")
            name = _SCALE_KEYS[key][0]
            merged[name] = {**getattr(config, name), **_check_scale(key, value)}
        return replace(config, **merged)

    @classmethod
    def from_file(cls, path: str | Path) -> ThemeConfig:
        """Load a theme from a JSON file."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"cannot read theme file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON in theme file {path}: {e}") from e
        return cls.from_dict(data)


def _check_scale(key: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"theme key {key!r} must map names to values")
    return dict(value)


def _scale_value(key: str, raw: Any) -> str:
    # fontSize entries may be ["1rem", {"lineHeight": ...}]
    if isinstance(raw, (list, tuple)) and raw:
        raw = raw[0]
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise ConfigError(f"theme value for {key!r} must be a string or number, got {raw!r}")
    return str(raw)


def _flatten(scale: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(token, value)`` pairs, flattening nested palettes to ``blue-500``."""
    for key, value in scale.items():
        key = str(key)
        if isinstance(value, Mapping):
            yield from _flatten(value, f"{prefix}-{key}" if prefix else key)
        elif key == DEFAULT_TOKEN:
            yield (prefix or DEFAULT_TOKEN), value
        else:
            yield (f"{prefix}-{key}" if prefix else key), value


@dataclass(frozen=True)
class ThemeTable:
    """Read-only value table: category -> canonical value -> scale tokens.

    Tokens for one canonical value keep configuration order and the first
    one wins on lookup.
    """

    categories: Mapping[str, Mapping[str, tuple[str, ...]]]
    rem_in_px: float = 16
    arbitrary_values_enabled: bool = True

    def normalize(self, category: str, value: str) -> str | None:
        """Canonical form of *value* as understood by *category*."""
        return _NORMALIZERS[category](value, self.rem_in_px)

    def tokens(self, category: str, canonical: str) -> tuple[str, ...]:
        return self.categories.get(category, {}).get(canonical, ())

    def lookup(self, category: str, canonical: str) -> str | None:
        """First scale token whose value is *canonical*, or None."""
        tokens = self.tokens(category, canonical)
        return tokens[0] if tokens else None

    def screen_for(self, min_width: str) -> str | None:
        """Screen token whose breakpoint equals *min_width* exactly."""
        canonical = normalize_length(min_width, self.rem_in_px)
        if canonical is None:
            return None
        return self.lookup(SCREEN, canonical)


def build_theme_table(config: ThemeConfig | None = None) -> ThemeTable:
    """Normalise every configured scale value into a :class:`ThemeTable`."""
    config = config or ThemeConfig()
    categories: dict[str, Mapping[str, tuple[str, ...]]] = {}
    for key, (name, category) in _SCALE_KEYS.items():
        entries: dict[str, list[str]] = {}
        for token, raw in _flatten(getattr(config, name)):
            value = _scale_value(key, raw)
            canonical = _NORMALIZERS[category](value, config.rem_in_px)
            if canonical is None:
                logger.debug("Ignoring %s value %r for token %r", key, value, token)
                continue
            entries.setdefault(canonical, []).append(token)
        categories[category] = MappingProxyType({k: tuple(v) for k, v in entries.items()})
    return ThemeTable(
        categories=MappingProxyType(categories),
        rem_in_px=config.rem_in_px,
        arbitrary_values_enabled=config.arbitrary_values_enabled,
    )
