"""Tests for ThemeConfig loading and the ThemeTable lookups."""

import json

import pytest

from vibeflow.errors import ConfigError
from vibeflow.theme import DEFAULT_TOKEN, ThemeConfig, build_theme_table
from vibeflow.theme.table import BORDER_RADIUS, COLOR, OPACITY, SPACING


# ---------------------------------------------------------------------------
# Default table
# ---------------------------------------------------------------------------


class TestDefaultTable:
    def setup_method(self):
        self.table = build_theme_table()

    def test_spacing_lookup(self):
        assert self.table.lookup(SPACING, "16px") == "4"
        assert self.table.lookup(SPACING, "1px") == "px"

    def test_nested_palette_flattened(self):
        assert self.table.lookup(COLOR, "#3b82f6") == "blue-500"
        assert self.table.lookup(COLOR, "#ffffff") == "white"

    def test_default_token(self):
        assert self.table.lookup(BORDER_RADIUS, "4px") == DEFAULT_TOKEN

    def test_opacity_scale(self):
        assert self.table.lookup(OPACITY, "0.5") == "50"

    def test_missing_value(self):
        assert self.table.lookup(COLOR, "#123456") is None

    def test_normalize_uses_category(self):
        assert self.table.normalize(SPACING, "1rem") == "16px"
        assert self.table.normalize(COLOR, "#FFF") == "#ffffff"

    def test_screen_for(self):
        assert self.table.screen_for("768px") == "md"
        assert self.table.screen_for("48rem") == "md"
        assert self.table.screen_for("700px") is None


# ---------------------------------------------------------------------------
# ThemeConfig.from_dict
# ---------------------------------------------------------------------------


class TestThemeConfigFromDict:
    def test_scale_replaces_defaults(self):
        config = ThemeConfig.from_dict({"spacingScale": {"gutter": "18px"}})
        table = build_theme_table(config)
        assert table.lookup(SPACING, "18px") == "gutter"
        assert table.lookup(SPACING, "16px") is None

    def test_extend_merges(self):
        config = ThemeConfig.from_dict({"extend": {"colorPalette": {"brand": {"DEFAULT": "#123456"}}}})
        table = build_theme_table(config)
        assert table.lookup(COLOR, "#123456") == "brand"
        assert table.lookup(COLOR, "#3b82f6") == "blue-500"

    def test_first_token_wins(self):
        config = ThemeConfig.from_dict({"spacingScale": {"a": "8px", "b": "0.5rem"}})
        table = build_theme_table(config)
        assert table.tokens(SPACING, "8px") == ("a", "b")
        assert table.lookup(SPACING, "8px") == "a"

    def test_rem_in_px(self):
        table = build_theme_table(ThemeConfig.from_dict({"remInPx": 10}))
        assert table.lookup(SPACING, "10px") == "4"

    def test_font_size_tuple_entries(self):
        config = ThemeConfig.from_dict({"fontSizeScale": {"huge": ["5rem", {"lineHeight": "1"}]}})
        table = build_theme_table(config)
        assert table.lookup("font-size", "80px") == "huge"

    def test_unparseable_scale_value_ignored(self):
        table = build_theme_table(ThemeConfig.from_dict({"spacingScale": {"odd": "clamp(1px, 2px, 3px)"}}))
        assert not table.categories[SPACING]

    @pytest.mark.parametrize("data", [
        {"spacing": {}},
        {"spacingScale": "16px"},
        {"remInPx": 0},
        {"remInPx": "16"},
        {"arbitraryValuesEnabled": "yes"},
        {"extend": {"unknown": {}}},
        {"spacingScale": {"a": None}},
    ])
    def test_invalid(self, data):
        with pytest.raises(ConfigError):
            build_theme_table(ThemeConfig.from_dict(data))

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            ThemeConfig.from_dict(["spacingScale"])


# ---------------------------------------------------------------------------
# ThemeConfig.from_file
# ---------------------------------------------------------------------------


class TestThemeConfigFromFile:
    def test_load(self, tmp_path):
        path = tmp_path / "theme.json"
        path.write_text(json.dumps({"arbitraryValuesEnabled": False}))
        config = ThemeConfig.from_file(path)
        assert config.arbitrary_values_enabled is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            ThemeConfig.from_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "theme.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="invalid JSON"):
            ThemeConfig.from_file(path)
