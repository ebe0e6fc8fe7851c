"""Utility-class resolver: CSS rules in, utility class lists plus fallback CSS out."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from vibeflow.css import AtRule, Declaration, GroupRule, Item, Rule, parse_css, parse_declarations, serialize
from vibeflow.resolver.properties import FAMILY_BY_MEMBER, FLEX_COMBINATIONS, PROPERTIES, Family, PropertySpec
from vibeflow.resolver.shorthand import expand_shorthand
from vibeflow.theme import DEFAULT_TOKEN, ThemeConfig, ThemeTable, build_theme_table
from vibeflow.theme.table import COLOR, OPACITY
from vibeflow.units import clean_literal, normalize_number, split_alpha

logger = logging.getLogger(__name__)

FALLBACK_HEADER = "/* Fallback styles for Tailwind-unsupported properties */"

PSEUDO_VARIANTS = {
    ":hover": "hover",
    ":focus": "focus",
    ":active": "active",
    ":visited": "visited",
    ":disabled": "disabled",
    ":focus-within": "focus-within",
    ":focus-visible": "focus-visible",
    ":first-child": "first",
    ":last-child": "last",
    ":nth-child(odd)": "odd",
    ":nth-child(even)": "even",
}

_VARIANT_SELECTOR_RE = re.compile(r"^(?P<base>[^\s,>+~:]+)(?P<pseudos>(?::[a-z-]+(?:\([a-z]+\))?)+)$")
_PSEUDO_RE = re.compile(r":[a-z-]+(?:\([a-z]+\))?")
_MIN_WIDTH_RE = re.compile(r"^\(\s*min-width\s*:\s*([^()]+?)\s*\)$", re.IGNORECASE)


@dataclass(frozen=True)
class ConvertedNode:
    """Conversion outcome for one CSS rule.

    ``selector`` is the selector the classes attach to (pseudo-class suffix
    removed); ``source_selector`` is the selector as written. ``unresolved``
    holds the declarations emitted verbatim to fallback CSS.
    """

    selector: str
    utility_classes: tuple[str, ...]
    unresolved: tuple[Declaration, ...]
    source_selector: str = ""
    media: str = ""


@dataclass
class ResolverResult:
    per_selector_classes: dict[str, list[str]] = field(default_factory=dict)
    fallback_css: str = ""
    nodes: list[ConvertedNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "perSelectorClasses": {k: list(v) for k, v in self.per_selector_classes.items()},
            "fallbackCss": self.fallback_css,
        }


@dataclass(frozen=True)
class _Utility:
    prefix: str
    suffix: str
    negative: bool = False

    def same_value(self, other: _Utility | None) -> bool:
        return other is not None and (self.suffix, self.negative) == (other.suffix, other.negative)

    def render(self, variant: str = "", important: bool = False) -> str:
        if self.suffix == DEFAULT_TOKEN:
            name = self.prefix
        elif not self.prefix:
            name = self.suffix
        else:
            name = f"{self.prefix}-{self.suffix}"
        if self.negative:
            name = f"-{name}"
        if important:
            name = f"!{name}"
        return f"{variant}{name}"


def split_variant(selector: str) -> tuple[str, str]:
    """Split ``.card:hover`` into ``(".card", "hover:")``.

    Selectors with unsupported pseudo-classes, pseudo-elements or
    combinators are returned unchanged with no variant.
    """
    match = _VARIANT_SELECTOR_RE.match(selector)
    if not match:
        return selector, ""
    variants: list[str] = []
    for pseudo in _PSEUDO_RE.findall(match.group("pseudos")):
        variant = PSEUDO_VARIANTS.get(pseudo)
        if variant is None:
            return selector, ""
        variants.append(variant)
    return match.group("base"), "".join(f"{v}:" for v in variants)


class UtilityResolver:
    """Map CSS declarations onto utility classes from a theme table.

    Every declaration either becomes an exactly equivalent utility (scale
    token, keyword or arbitrary ``prefix-[value]``) or is kept verbatim in
    fallback CSS. Values are never approximated to a nearby scale entry.
    """

    def __init__(self, theme: ThemeTable | ThemeConfig | None = None) -> None:
        if not isinstance(theme, ThemeTable):
            theme = build_theme_table(theme)
        self.theme = theme

    # -- public API ----------------------------------------------------------

    def resolve(self, css: str, convertible: Callable[[str], bool] | None = None) -> ResolverResult:
        """Resolve every rule in *css*. Raises ParseError on malformed input.

        When *convertible* is given, rules whose base selector it rejects are
        not converted; they pass through to fallback CSS whole.
        """
        sheet = parse_css(css)
        result = ResolverResult()
        fallback: list[Item] = []

        for item in sheet.items:
            if isinstance(item, Rule):
                leftover = self._resolve_rule(result, item, convertible)
                if leftover is not None:
                    fallback.append(leftover)
                continue

            screen = self._screen_for_group(item)
            if screen is None:
                # other group rules and at-rules pass through untouched
                logger.debug("Passing @%s %s through to fallback CSS", item.keyword, item.prelude)
                fallback.append(item)
                continue

            assert isinstance(item, GroupRule)
            leftovers: list[Item] = []
            for inner in item.rules:
                if not isinstance(inner, Rule):
                    # nested at-rules stay inside their media query as written
                    leftovers.append(inner)
                    continue
                leftover = self._resolve_rule(result, inner, convertible, f"{screen}:", item.prelude)
                if leftover is not None:
                    leftovers.append(leftover)
            if leftovers:
                fallback.append(GroupRule(keyword=item.keyword, prelude=item.prelude, rules=tuple(leftovers)))

        if fallback:
            result.fallback_css = f"{FALLBACK_HEADER}\n{serialize(fallback)}"
        return result

    def resolve_inline(self, style: str) -> ConvertedNode:
        """Resolve an inline ``style`` attribute body (no selector)."""
        node, _ = self._convert("", parse_declarations(style))
        return node

    # -- rules -----------------------------------------------------------------

    def _resolve_rule(
        self,
        result: ResolverResult,
        rule: Rule,
        convertible: Callable[[str], bool] | None,
        screen_variant: str = "",
        media: str = "",
    ) -> Rule | None:
        if convertible is not None and not convertible(split_variant(rule.selector)[0]):
            logger.debug("Keeping %r whole in fallback CSS", rule.selector)
            return rule
        node, leftover = self._convert(rule.selector, rule.declarations, screen_variant, media)
        self._record(result, node)
        return leftover

    def _screen_for_group(self, item: GroupRule | AtRule) -> str | None:
        if not isinstance(item, GroupRule) or item.keyword != "media":
            return None
        match = _MIN_WIDTH_RE.match(item.prelude)
        if not match:
            return None
        return self.theme.screen_for(match.group(1))

    @staticmethod
    def _record(result: ResolverResult, node: ConvertedNode) -> None:
        result.nodes.append(node)
        if node.selector:
            result.per_selector_classes.setdefault(node.selector, []).extend(node.utility_classes)

    def _convert(
        self,
        selector: str,
        declarations: Sequence[Declaration],
        screen_variant: str = "",
        media: str = "",
    ) -> tuple[ConvertedNode, Rule | None]:
        base, pseudo_variant = split_variant(selector)
        variant = screen_variant + pseudo_variant

        longhands = [lh for decl in declarations for lh in expand_shorthand(decl)]
        utilities = [self._resolve_longhand(decl) for decl in longhands]
        classes, unresolved_idx = self._consolidate(longhands, utilities, variant)
        leftover = _fallback_declarations(longhands, unresolved_idx)

        logger.debug(
            "Resolved %r: %d classes, %d fallback declarations",
            selector, len(classes), len(leftover),
        )
        node = ConvertedNode(
            selector=base,
            utility_classes=tuple(classes),
            unresolved=tuple(leftover),
            source_selector=selector,
            media=media,
        )
        rule = Rule(selector=selector, declarations=tuple(leftover)) if leftover else None
        return node, rule

    # -- single longhand ---------------------------------------------------------

    def _resolve_longhand(self, decl: Declaration) -> _Utility | None:
        value = decl.value.strip()
        if decl.property.startswith("--") or "var(" in value.lower():
            return None
        spec = PROPERTIES.get(decl.property)
        if spec is None:
            return None

        canonical = self.theme.normalize(spec.category, value) if spec.category else None
        for key in (value.lower(), canonical):
            if key is not None and key in spec.keywords:
                return _Utility(spec.prefix, spec.keywords[key])

        if canonical is not None:
            scaled = self._scale_utility(spec, canonical)
            if scaled is not None:
                return scaled

        if not spec.arbitrary or not self.theme.arbitrary_values_enabled:
            return None
        literal = _arbitrary_literal(spec, value, canonical)
        if literal is None:
            return None
        return _Utility(spec.prefix, f"[{literal}]")

    def _scale_utility(self, spec: PropertySpec, canonical: str) -> _Utility | None:
        assert spec.category is not None
        token = self.theme.lookup(spec.category, canonical)
        if token is not None:
            return _Utility(spec.prefix, token)
        if spec.negative and canonical.startswith("-"):
            token = self.theme.lookup(spec.category, canonical[1:])
            if token is not None:
                return _Utility(spec.prefix, token, negative=True)
        if spec.category == COLOR:
            split = split_alpha(canonical)
            if split is not None:
                color_token = self.theme.lookup(COLOR, split[0])
                alpha = normalize_number(split[1])
                opacity_token = self.theme.lookup(OPACITY, alpha) if alpha is not None else None
                if color_token is not None and opacity_token is not None:
                    return _Utility(spec.prefix, f"{color_token}/{opacity_token}")
        return None

    # -- consolidation ---------------------------------------------------------------

    def _consolidate(
        self,
        longhands: list[Declaration],
        utilities: list[_Utility | None],
        variant: str,
    ) -> tuple[list[str], list[int]]:
        """Merge complete shorthand families, then render classes in declaration order.

        Returns the class list and the indexes of longhands left unresolved.
        """
        replaced: dict[int, list[_Utility]] = {}
        consumed: set[int] = set()

        for family, indexes in _families(longhands):
            members = [utilities[i] for i in indexes]
            first = members[0]
            if first is None or any(m is None for m in members):
                continue  # partial resolution never consolidates
            if all(first.same_value(m) for m in members):
                replaced[indexes[0]] = [_Utility(family.prefix, first.suffix, first.negative)]
                consumed.update(indexes)
                continue
            for a, b, axis_prefix in family.axes:
                left, right = members[a], members[b]
                assert left is not None
                if left.same_value(right):
                    replaced.setdefault(indexes[a], []).append(_Utility(axis_prefix, left.suffix, left.negative))
                    consumed.update((indexes[a], indexes[b]))

        for indexes in _flex_groups(longhands):
            combination = tuple(longhands[i].value.strip().lower() for i in indexes)
            utility = FLEX_COMBINATIONS.get(combination)  # type: ignore[call-overload]
            if utility is not None:
                replaced[indexes[0]] = [_Utility("", utility)]
                consumed.update(indexes)

        classes: list[str] = []
        unresolved: list[int] = []
        for i, (decl, utility) in enumerate(zip(longhands, utilities)):
            if i in replaced:
                classes.extend(u.render(variant, decl.important) for u in replaced[i])
            if i in consumed:
                continue
            spec = PROPERTIES.get(decl.property)
            if utility is None or spec is None or not spec.standalone:
                unresolved.append(i)
            else:
                classes.append(utility.render(variant, decl.important))
        return classes, unresolved


def _families(longhands: list[Declaration]) -> Iterable[tuple[Family, list[int]]]:
    """Yield complete shorthand families (same origin, every member present)."""
    groups: dict[tuple[int, Family], dict[str, int]] = {}
    for i, decl in enumerate(longhands):
        family = FAMILY_BY_MEMBER.get(decl.property)
        if decl.origin is None or family is None:
            continue
        groups.setdefault((id(decl.origin), family), {}).setdefault(decl.property, i)
    for (_, family), positions in groups.items():
        if len(positions) == len(family.members):
            yield family, [positions[m] for m in family.members]


def _flex_groups(longhands: list[Declaration]) -> Iterable[list[int]]:
    props = ("flex-grow", "flex-shrink", "flex-basis")
    groups: dict[int, dict[str, int]] = {}
    for i, decl in enumerate(longhands):
        if decl.origin is not None and decl.origin.property == "flex" and decl.property in props:
            groups.setdefault(id(decl.origin), {})[decl.property] = i
    for positions in groups.values():
        if len(positions) == len(props):
            yield [positions[p] for p in props]


def _arbitrary_literal(spec: PropertySpec, value: str, canonical: str | None) -> str | None:
    if spec.category == COLOR:
        if canonical is None:
            return None
        literal = canonical
    elif spec.category is not None and canonical is None and "(" not in value:
        return None  # not a value of this category, e.g. "inherit"
    else:
        literal = clean_literal(value)
    if "[" in literal or "]" in literal:
        return None
    return "_".join(literal.split())


def _fallback_declarations(longhands: list[Declaration], unresolved_idx: list[int]) -> list[Declaration]:
    """Unresolved declarations as they should appear in fallback CSS.

    A shorthand none of whose longhands resolved is emitted once, verbatim;
    otherwise only the unresolved longhands it spelled out are emitted.
    """
    unresolved = set(unresolved_idx)
    resolved_origins = {
        id(decl.origin)
        for i, decl in enumerate(longhands)
        if i not in unresolved and decl.origin is not None
    }
    emitted: list[Declaration] = []
    seen: set[int] = set()
    for i in unresolved_idx:
        decl = longhands[i]
        origin = decl.origin
        if origin is not None and id(origin) not in resolved_origins:
            if id(origin) not in seen:
                seen.add(id(origin))
                emitted.append(origin)
        elif not decl.implied:
            emitted.append(decl)
    return emitted
