"""Orchestration of both engines with graceful degradation.

Engine failures never cross this boundary: a CSS conversion that fails keeps
the original CSS, an extraction that fails keeps the pre-transform markup.
Both cases are logged at WARNING and reported in ``OptimizeResult.warnings``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from vibeflow.config import VibeflowConfig
from vibeflow.errors import ParseError
from vibeflow.extractor import ExtractorOptions, extract_repetitions
from vibeflow.markup import apply_class_mapping, class_name_from_selector
from vibeflow.resolver import UtilityResolver
from vibeflow.theme import ThemeConfig

logger = logging.getLogger(__name__)

# Only plain class rules map onto markup; everything else keeps its CSS.
_SINGLE_CLASS_RE = re.compile(r"^\.-?[A-Za-z_][\w-]*$")
_CLASS_REF_RE = re.compile(r"\.(-?[A-Za-z_][\w-]*)")


@dataclass(frozen=True)
class OptimizeOptions:
    theme: Optional[ThemeConfig] = None
    extractor: ExtractorOptions = field(default_factory=ExtractorOptions)
    extract: bool = True

    @classmethod
    def from_config(cls, config: VibeflowConfig, theme: ThemeConfig | None = None) -> "OptimizeOptions":
        if theme is None and config.theme_path:
            theme = ThemeConfig.from_file(config.theme_path)
        return cls(
            theme=theme,
            extractor=ExtractorOptions(
                generated_name_prefix=config.generated_name_prefix,
                prefer_collapsed_iteration=config.prefer_collapsed_iteration,
                minimum_repeat_count=config.minimum_repeat_count,
            ),
        )


@dataclass
class OptimizeResult:
    markup: str
    css: str
    classes: dict[str, list[str]] = field(default_factory=dict)
    changed: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "markup": self.markup,
            "css": self.css,
            "classes": {k: list(v) for k, v in self.classes.items()},
            "changed": self.changed,
            "warnings": list(self.warnings),
        }


def optimize(markup: str, css: str, options: OptimizeOptions | None = None) -> OptimizeResult:
    """Swap generated classes for utilities, then fold repeated markup.

    *markup* is component source whose ``className`` attributes reference the
    rules in *css*.
    """
    options = options or OptimizeOptions()
    warnings: list[str] = []
    out_markup, out_css = markup, css
    classes: dict[str, list[str]] = {}

    passthrough: list[str] = []

    def convertible(selector: str) -> bool:
        if _SINGLE_CLASS_RE.match(selector):
            return True
        passthrough.append(selector)
        return False

    try:
        result = UtilityResolver(options.theme).resolve(css, convertible)
    except ParseError as exc:
        logger.warning("CSS conversion failed, keeping original CSS: %s", exc)
        warnings.append(f"CSS conversion failed: {exc}")
    else:
        for selector, utilities in result.per_selector_classes.items():
            if utilities:
                classes.setdefault(class_name_from_selector(selector), []).extend(utilities)
        keep = {class_name_from_selector(node.selector) for node in result.nodes if node.unresolved}
        # classes named by rules kept whole must stay on the markup
        keep.update(name for selector in passthrough for name in _CLASS_REF_RE.findall(selector))
        out_markup = apply_class_mapping(markup, classes, keep)
        out_css = result.fallback_css

    if options.extract:
        try:
            extraction = extract_repetitions(out_markup, options.extractor)
        except ParseError as exc:
            logger.warning("Repetition extraction failed, keeping markup unchanged: %s", exc)
            warnings.append(f"Repetition extraction failed: {exc}")
        else:
            out_markup = extraction.transformed_source

    return OptimizeResult(
        markup=out_markup,
        css=out_css,
        classes=classes,
        changed=out_markup != markup or out_css != css,
        warnings=warnings,
    )
