"""Helpers that join resolver output back onto rendered markup."""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Sequence

_CLASS_ATTR_RE = re.compile(r"""\b(class|className)=(["'])(.*?)\2""", re.DOTALL)
_DATA_URL_RE = re.compile(r"^data:image/\w+;base64,")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_LEADING_NON_ALPHA_RE = re.compile(r"^[^a-zA-Z]+")


def class_name_from_selector(selector: str) -> str:
    """``.card`` -> ``card``; for descendant selectors the last class wins."""
    if selector.startswith(".") and " " not in selector.strip():
        return selector.strip()[1:]
    last = selector.split()[-1] if selector.split() else selector
    if last.startswith("."):
        return last[1:]
    return selector


def merge_classes(*class_lists: str | Sequence[str] | None) -> str:
    """Join class lists, dropping duplicates while keeping first-seen order."""
    seen: dict[str, None] = {}
    for item in class_lists:
        if not item:
            continue
        names = item.split() if isinstance(item, str) else item
        for name in names:
            if name:
                seen.setdefault(name, None)
    return " ".join(seen)


def apply_class_mapping(
    markup: str, mapping: Mapping[str, Sequence[str]], keep: Iterable[str] = ()
) -> str:
    """Replace generated class names in ``class``/``className`` attributes.

    Each class found in *mapping* is swapped for its utility classes. Names in
    *keep* stay next to their utilities (they still carry fallback CSS).
    """
    retained = set(keep)

    def substitute(match: re.Match[str]) -> str:
        attr, quote, value = match.groups()
        out: list[str] = []
        for name in value.split():
            utilities = mapping.get(name)
            if not utilities:
                out.append(name)
                continue
            if name in retained:
                out.append(name)
            out.extend(utilities)
        return f"{attr}={quote}{merge_classes(out)}{quote}"

    if not mapping:
        return markup
    return _CLASS_ATTR_RE.sub(substitute, markup)


def generate_component_name(name: str) -> str:
    """A design node name as a PascalCase identifier ending in ``Component``."""
    cleaned = _LEADING_NON_ALPHA_RE.sub("", _NON_ALNUM_RE.sub("", name))
    if not cleaned:
        cleaned = "Default"
    cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned if cleaned.endswith("Component") else f"{cleaned}Component"


def replace_data_urls_with_prefix(assets: Mapping[str, str]) -> dict[str, str]:
    """Shorten ``data:image/png;base64,...`` asset values to ``base64:...``."""
    return {key: _DATA_URL_RE.sub("base64:", value) for key, value in assets.items()}
