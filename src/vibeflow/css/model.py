"""CSS model: Declaration, Rule, GroupRule, AtRule and Stylesheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair.

    ``origin`` points back at the shorthand declaration this longhand was
    expanded from. It is a lookup association only and takes no part in
    equality. ``implied`` marks a longhand whose value the shorthand left
    out and expansion filled in.
    """

    property: str
    value: str
    important: bool = False
    origin: Declaration | None = field(default=None, compare=False, repr=False)
    implied: bool = field(default=False, compare=False, repr=False)

    def __str__(self) -> str:
        suffix = " !important" if self.important else ""
        return f"{self.property}: {self.value}{suffix}"


@dataclass(frozen=True)
class Rule:
    """A qualified rule: selector text plus its declarations."""

    selector: str
    declarations: tuple[Declaration, ...]


@dataclass(frozen=True)
class GroupRule:
    """A conditional group at-rule (``@media``, ``@supports``...) holding rules.

    ``rules`` may hold nested group and plain at-rules as well as rules.
    """

    keyword: str  # "media", "supports", "keyframes", ...
    prelude: str
    rules: tuple[Item, ...]


@dataclass(frozen=True)
class AtRule:
    """Any other at-rule. ``declarations`` is None for statement at-rules."""

    keyword: str
    prelude: str
    declarations: tuple[Declaration, ...] | None = None


Item = Union[Rule, GroupRule, AtRule]


@dataclass(frozen=True)
class Stylesheet:
    """Top-level items in source order."""

    items: tuple[Item, ...]

    @property
    def rules(self) -> list[Rule]:
        """Top-level qualified rules, ignoring at-rules."""
        return [item for item in self.items if isinstance(item, Rule)]
