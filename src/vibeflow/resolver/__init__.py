from vibeflow.resolver.resolver import (
    FALLBACK_HEADER,
    ConvertedNode,
    ResolverResult,
    UtilityResolver,
    split_variant,
)
from vibeflow.resolver.shorthand import expand_shorthand, split_value
from vibeflow.units import normalize_color, normalize_length, normalize_number

__all__ = [
    "FALLBACK_HEADER",
    "ConvertedNode",
    "ResolverResult",
    "UtilityResolver",
    "expand_shorthand",
    "normalize_color",
    "normalize_length",
    "normalize_number",
    "split_value",
    "split_variant",
]
