from vibeflow.jsx.editor import SourceEditor
from vibeflow.jsx.parser import RESERVED_WORDS, parse_module
from vibeflow.jsx.scope import GLOBALS, collect_names, collect_references, declared_names

__all__ = [
    "GLOBALS",
    "RESERVED_WORDS",
    "SourceEditor",
    "collect_names",
    "collect_references",
    "declared_names",
    "parse_module",
]
