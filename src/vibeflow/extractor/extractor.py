"""Repetition extractor: folds repeated sibling JSX into generated components.

The pass walks the module outermost-first. At every element or fragment it
groups the direct element children by structural signature, diffs the
largest group and, when the occurrences differ only in literal or expression
positions, emits a function component for the first occurrence with those
positions turned into props. Each occurrence is then replaced by an instance
of the component, or the whole run is replaced by one ``.map`` over a
module-level data table.

All rewrites are span edits on the original text: when nothing is
extracted the source comes back byte-for-byte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from vibeflow.errors import ConfigError, ParseError
from vibeflow.extractor.diff import RESERVED_PROPS, SiteMatch, VariableSite, assign_keys, find_variable_sites
from vibeflow.extractor.signature import is_skipped_tag, signature
from vibeflow.extractor.template import (
    INDENT,
    can_reindent,
    reindent,
    render_data_table,
    render_declaration,
    render_instance,
    render_iteration,
    template_body,
    verify_declaration,
)
from vibeflow.jsx import ast as js
from vibeflow.jsx.editor import SourceEditor
from vibeflow.jsx.parser import parse_module
from vibeflow.jsx.scope import collect_names, collect_references, declared_names, pattern_names
from vibeflow.jsx.text import is_identifier

logger = logging.getLogger(__name__)

_PLACEHOLDER = "$$vibeflowSite{}"

_OPTION_KEYS = {
    "generatedNamePrefix": "generated_name_prefix",
    "preferCollapsedIteration": "prefer_collapsed_iteration",
    "minimumRepeatCount": "minimum_repeat_count",
    "typedParameters": "typed_parameters",
}


@dataclass(frozen=True)
class ExtractorOptions:
    generated_name_prefix: str = "ExtractedItem"
    prefer_collapsed_iteration: bool = False
    minimum_repeat_count: int = 2
    typed_parameters: bool = True

    def __post_init__(self) -> None:
        prefix = self.generated_name_prefix
        if not isinstance(prefix, str) or not is_identifier(prefix) or not prefix[0].isupper():
            raise ConfigError(f"generatedNamePrefix must be a capitalised identifier, got {prefix!r}")
        count = self.minimum_repeat_count
        if isinstance(count, bool) or not isinstance(count, int) or count < 2:
            raise ConfigError(f"minimumRepeatCount must be an integer >= 2, got {count!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractorOptions":
        """Build options from the camelCase mapping used on the wire."""
        unknown = sorted(set(data) - set(_OPTION_KEYS))
        if unknown:
            raise ConfigError(f"Unknown extractor option(s): {', '.join(unknown)}")
        return cls(**{_OPTION_KEYS[k]: v for k, v in data.items()})


@dataclass(frozen=True)
class GeneratedTemplate:
    name: str
    params: tuple[str, ...]
    sites: tuple[VariableSite, ...]
    occurrences: int
    data_table: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "params": list(self.params),
            "sites": [
                {"kind": s.kind, "propKey": s.prop_key, "path": list(s.path), "attrName": s.attr_name}
                for s in self.sites
            ],
            "occurrences": self.occurrences,
            "dataTable": self.data_table,
        }


@dataclass(frozen=True)
class ExtractionResult:
    transformed_source: str
    changed: bool
    templates: tuple[GeneratedTemplate, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        return {
            "transformedSource": self.transformed_source,
            "changed": self.changed,
            "templates": [t.to_dict() for t in self.templates],
        }


def extract_repetitions(source: str, options: ExtractorOptions | None = None) -> ExtractionResult:
    """Rewrite repeated sibling markup in *source* into generated components.

    Raises :class:`~vibeflow.errors.ParseError` when *source* cannot be
    parsed; every other "nothing to do" outcome is ``changed=False``.
    """
    return _ExtractionPass(source, options or ExtractorOptions()).run()


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _meaningful_children(element: js.JSXElement) -> list[js.Node]:
    kept = []
    for child in element.children:
        if isinstance(child, js.JSXText):
            if child.value.strip():
                kept.append(child)
        elif isinstance(child, js.JSXExpressionContainer):
            if not isinstance(child.expression, js.JSXEmptyExpression):
                kept.append(child)
        elif isinstance(child, (js.JSXElement, js.JSXFragment)):
            kept.append(child)
    return kept


def _contains_literal_text(element: js.JSXElement) -> bool:
    for node in js.walk(element):
        if isinstance(node, js.JSXText) and node.value.strip():
            return True
        if isinstance(node, js.JSXExpressionContainer) and isinstance(
            node.expression, (js.StringLiteral, js.NumericLiteral)
        ):
            return True
    return False


def has_meaningful_content(element: js.JSXElement) -> bool:
    """Rejects thin wrappers: one child, few attributes and no literal text."""
    return (
        len(_meaningful_children(element)) > 1
        or len(element.attributes) > 3
        or _contains_literal_text(element)
    )


def is_component_passthrough(element: js.JSXElement) -> bool:
    """True for a wrapper whose only content is one component instance."""
    kids = _meaningful_children(element)
    return len(kids) == 1 and isinstance(kids[0], js.JSXElement) and kids[0].name[:1].isupper()


class _ExtractionPass:
    def __init__(self, source: str, options: ExtractorOptions) -> None:
        self.source = source
        self.options = options
        self.program = parse_module(source)
        self.module_names = declared_names(self.program)
        self.used_names = collect_names(self.program)
        self.components: set[str] = set()
        self.editor = SourceEditor(source)
        self.declarations: list[str] = []
        self.templates: list[GeneratedTemplate] = []

    def run(self) -> ExtractionResult:
        self._visit(self.program, frozenset())
        if not self.templates:
            return ExtractionResult(self.source, False)
        self._insert_declarations()
        return ExtractionResult(self.editor.apply(), True, tuple(self.templates))

    # -- traversal -------------------------------------------------------------------

    def _visit(self, node: js.Node, enclosing: frozenset[str]) -> None:
        if isinstance(node, js.Function):
            enclosing = enclosing | declared_names(node)
        elif isinstance(node, js.CatchClause):
            enclosing = enclosing | set(pattern_names(node.param))

        converted: list[js.JSXElement] = []
        if isinstance(node, (js.JSXElement, js.JSXFragment)):
            converted = self._process(node, enclosing) or []
        skip = {id(member) for member in converted}
        for child in js.iter_children(node):
            if id(child) not in skip:
                self._visit(child, enclosing)

    def _unique(self, base: str) -> str:
        candidate = base
        suffix = 2
        while candidate in self.used_names:
            candidate = f"{base}{suffix}"
            suffix += 1
        self.used_names.add(candidate)
        return candidate

    # -- one container ---------------------------------------------------------------

    def _process(self, container: js.JSXElement | js.JSXFragment, enclosing: frozenset[str]) -> list[js.JSXElement] | None:
        label = container.name if isinstance(container, js.JSXElement) else "<>"
        if isinstance(container, js.JSXElement) and (
            is_skipped_tag(container.name) or container.name in self.components
        ):
            return None

        minimum = self.options.minimum_repeat_count
        groups: dict[str, list[tuple[int, js.JSXElement]]] = {}
        for index, child in enumerate(container.children):
            if isinstance(child, js.JSXElement):
                groups.setdefault(signature(child), []).append((index, child))
        best: list[tuple[int, js.JSXElement]] | None = None
        for group in groups.values():
            if len(group) >= minimum and (best is None or len(group) > len(best)):
                best = group
        if best is None:
            return None

        indices = [index for index, _ in best]
        members = [element for _, element in best]
        first, second = members[0], members[1]

        if first.name[:1].isupper() or "." in first.name or first.name in self.components:
            logger.debug("Skipping <%s> in <%s>: occurrences are already component instances", first.name, label)
            return None
        if is_skipped_tag(first.name):
            logger.debug("Skipping <%s> in <%s>: graphics primitive", first.name, label)
            return None
        if is_component_passthrough(first):
            logger.debug("Skipping <%s> in <%s>: wraps a single component", first.name, label)
            return None
        if not (has_meaningful_content(first) and has_meaningful_content(second)):
            logger.debug("Skipping <%s> in <%s>: not enough content to extract", first.name, label)
            return None

        matches = find_variable_sites(members, self.source)
        if matches is None:
            logger.debug("Skipping <%s> in <%s>: spread arguments differ", first.name, label)
            return None
        if not matches:
            logger.debug("Skipping <%s> in <%s>: occurrences are identical", first.name, label)
            return None

        refs = self._template_references(first, matches)
        if refs is None or any(ref in self.components for ref in refs):
            logger.debug("Skipping <%s> in <%s>: template would reference generated code", first.name, label)
            return None
        passthrough = [ref for ref in refs if ref in enclosing or ref not in self.module_names]
        if any(ref in RESERVED_PROPS for ref in passthrough):
            logger.debug("Skipping <%s> in <%s>: cannot pass %s through as a prop", first.name, label,
                         ", ".join(r for r in passthrough if r in RESERVED_PROPS))
            return None
        assign_keys(matches, refs)

        name = self._unique(self.options.generated_name_prefix)
        body = template_body(self.source, first, [(m.spans[0], m.prop_key) for m in matches])
        if can_reindent(first):
            body = reindent(body, self.source, first.start, INDENT * 2)
        params = [m.prop_key for m in matches] + passthrough
        declaration = render_declaration(name, params, body, self.options.typed_parameters)
        if not verify_declaration(declaration, self.module_names):
            logger.debug("Skipping <%s> in <%s>: generated component does not verify", first.name, label)
            self.used_names.discard(name)
            return None

        self.components.add(name)
        data_table = None
        if (
            self.options.prefer_collapsed_iteration
            and self._contiguous(container, indices)
            and all(value.is_static for m in matches for value in m.values)
        ):
            data_name = self._unique(f"{lower_first(name)}Data")
            avoid = set(passthrough) | {name, data_name}
            item = self._fresh("item", avoid)
            index = self._fresh("index", avoid | {item})
            data_table = render_data_table(data_name, matches, len(members), self.source)
            self.editor.replace(
                members[0].start, members[-1].end,
                render_iteration(data_name, name, item, index, passthrough),
            )
            self.declarations.append(f"{declaration}\n\n{data_table}")
        else:
            for position, member in enumerate(members):
                self.editor.replace(
                    member.start, member.end,
                    render_instance(name, matches, position, passthrough, self.source),
                )
            self.declarations.append(declaration)

        logger.debug("Extracted %d <%s> occurrences in <%s> into %s (%d props, %d passed through)",
                     len(members), first.name, label, name, len(matches), len(passthrough))
        self.templates.append(GeneratedTemplate(
            name=name,
            params=tuple(params),
            sites=tuple(m.site() for m in matches),
            occurrences=len(members),
            data_table=data_table,
        ))
        return members

    def _template_references(self, first: js.JSXElement, matches: list[SiteMatch]) -> list[str] | None:
        """Free names of *first* once every site is replaced."""
        placeholders = [_PLACEHOLDER.format(n) for n in range(len(matches))]
        body = template_body(self.source, first, [(m.spans[0], ph) for m, ph in zip(matches, placeholders)])
        try:
            program = parse_module(body)
        except ParseError:
            return None
        return collect_references(program, exclude=placeholders)

    def _fresh(self, base: str, avoid: set[str]) -> str:
        candidate = base
        suffix = 2
        while candidate in self.used_names or candidate in avoid:
            candidate = f"{base}{suffix}"
            suffix += 1
        return candidate

    def _contiguous(self, container: js.JSXElement | js.JSXFragment, indices: list[int]) -> bool:
        """Occurrences separated only by line-break whitespace."""
        members = set(indices)
        for i in range(indices[0], indices[-1] + 1):
            if i in members:
                continue
            child = container.children[i]
            if not (isinstance(child, js.JSXText) and child.value == ""):
                return False
        return True

    # -- output ----------------------------------------------------------------------

    def _insert_declarations(self) -> None:
        block = "\n\n".join(self.declarations)
        anchor = None
        for statement in self.program.body:
            if isinstance(statement, js.ImportDeclaration):
                anchor = statement.end
        if anchor is None:
            for statement in self.program.body:
                if isinstance(statement, js.ExpressionStatement) and isinstance(
                    statement.expression, js.StringLiteral
                ):
                    anchor = statement.end
                else:
                    break
        if anchor is not None:
            rest = self.source[anchor:]
            breaks = rest[: len(rest) - len(rest.lstrip())].count("\n")
            # keep one blank line before the code that follows
            trailer = "\n" * (2 - breaks) if rest.strip() and breaks < 2 else ""
            self.editor.insert(anchor, f"\n\n{block}{trailer}")
            return
        offset = 0
        if self.source.startswith("#!"):
            newline = self.source.find("\n")
            offset = len(self.source) if newline < 0 else newline + 1
        self.editor.insert(offset, f"{block}\n\n")
