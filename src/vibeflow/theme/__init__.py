from vibeflow.theme.table import (
    DEFAULT_TOKEN,
    ThemeConfig,
    ThemeTable,
    build_theme_table,
)

__all__ = ["DEFAULT_TOKEN", "ThemeConfig", "ThemeTable", "build_theme_table"]
