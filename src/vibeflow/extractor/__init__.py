from vibeflow.extractor.diff import VariableSite, find_variable_sites
from vibeflow.extractor.extractor import (
    ExtractionResult,
    ExtractorOptions,
    GeneratedTemplate,
    extract_repetitions,
    has_meaningful_content,
)
from vibeflow.extractor.signature import SKIP_TAGS, signature

__all__ = [
    "SKIP_TAGS",
    "ExtractionResult",
    "ExtractorOptions",
    "GeneratedTemplate",
    "VariableSite",
    "extract_repetitions",
    "find_variable_sites",
    "has_meaningful_content",
    "signature",
]
