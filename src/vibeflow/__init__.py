"""vibeflow: utility-class resolution and repetition extraction for generated UI code."""

__version__ = "0.1.0"

from vibeflow.errors import ConfigError, ParseError, VibeflowError  # noqa: E402
from vibeflow.extractor import ExtractionResult, ExtractorOptions, extract_repetitions  # noqa: E402
from vibeflow.pipeline import OptimizeOptions, OptimizeResult, optimize  # noqa: E402
from vibeflow.resolver import ResolverResult, UtilityResolver  # noqa: E402
from vibeflow.theme import ThemeConfig, build_theme_table  # noqa: E402

__all__ = [
    "__version__",
    "ConfigError",
    "ExtractionResult",
    "ExtractorOptions",
    "OptimizeOptions",
    "OptimizeResult",
    "ParseError",
    "ResolverResult",
    "ThemeConfig",
    "UtilityResolver",
    "VibeflowError",
    "build_theme_table",
    "extract_repetitions",
    "optimize",
]
