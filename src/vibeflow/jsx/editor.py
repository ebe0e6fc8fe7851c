"""Span-based rewriting of source text."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edit:
    start: int
    end: int
    text: str
    seq: int = 0


@dataclass
class SourceEditor:
    """Collects replacements and insertions against the original text.

    Text outside the edited spans is carried over unchanged. Replacements
    must not overlap; insertions at the same offset keep the order in which
    they were added.
    """

    source: str
    edits: list[Edit] = field(default_factory=list)

    def replace(self, start: int, end: int, text: str) -> None:
        if not 0 <= start <= end <= len(self.source):
            raise ValueError(f"Edit span {start}:{end} is outside the source")
        for edit in self.edits:
            if edit.start < end and start < edit.end:
                raise ValueError(f"Edit span {start}:{end} overlaps {edit.start}:{edit.end}")
        self.edits.append(Edit(start, end, text, len(self.edits)))

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    @property
    def changed(self) -> bool:
        return bool(self.edits)

    def apply(self) -> str:
        out: list[str] = []
        pos = 0
        for edit in sorted(self.edits, key=lambda e: (e.start, e.end, e.seq)):
            out.append(self.source[pos : edit.start])
            out.append(edit.text)
            pos = edit.end
        out.append(self.source[pos:])
        return "".join(out)
