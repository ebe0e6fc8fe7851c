"""Tests for the CSS parser and serializer."""

import pytest

from vibeflow.css import AtRule, Declaration, GroupRule, Rule, parse_css, parse_declarations, serialize
from vibeflow.errors import ParseError


# ---------------------------------------------------------------------------
# Rules and declarations
# ---------------------------------------------------------------------------


class TestRules:
    def test_single_rule(self):
        sheet = parse_css(".card { color: red; margin: 0 }")
        assert sheet.rules == [
            Rule(".card", (Declaration("color", "red"), Declaration("margin", "0"))),
        ]

    def test_empty_stylesheet(self):
        assert parse_css("").items == ()
        assert parse_css("  /* nothing */  ").items == ()

    def test_selector_whitespace_collapsed(self):
        sheet = parse_css(".a   >\n  .b { color: red; }")
        assert sheet.rules[0].selector == ".a > .b"

    def test_property_lowercased(self):
        sheet = parse_css(".a { COLOR: red; }")
        assert sheet.rules[0].declarations[0].property == "color"

    def test_custom_property_case_kept(self):
        sheet = parse_css(":root { --Brand-Color: #fff; }")
        assert sheet.rules[0].declarations[0].property == "--Brand-Color"

    def test_important_flag(self):
        decl = parse_css(".a { color: red !important; }").rules[0].declarations[0]
        assert decl.value == "red"
        assert decl.important is True

    def test_value_with_parentheses_and_strings(self):
        css = '.a { background-image: url("a;b.png"); font-family: "A; B", serif; }'
        decls = parse_css(css).rules[0].declarations
        assert decls[0].value == 'url("a;b.png")'
        assert decls[1].value == '"A; B", serif'

    def test_stray_semicolons(self):
        decls = parse_css(".a { ; color: red;; }").rules[0].declarations
        assert decls == (Declaration("color", "red"),)

    def test_comments_ignored(self):
        sheet = parse_css("/* head */ .a { /* inner */ color: red; }")
        assert sheet.rules[0].declarations == (Declaration("color", "red"),)

    def test_comment_inside_selector_dropped(self):
        sheet = parse_css(".a /* card */ { color: red; } .b /* x */ .c { color: blue; }")
        assert [rule.selector for rule in sheet.rules] == [".a", ".b .c"]


# ---------------------------------------------------------------------------
# At-rules
# ---------------------------------------------------------------------------


class TestAtRules:
    def test_media_group(self):
        sheet = parse_css("@media (min-width: 768px) { .a { color: red; } }")
        group = sheet.items[0]
        assert isinstance(group, GroupRule)
        assert group.keyword == "media"
        assert group.prelude == "(min-width: 768px)"
        assert group.rules[0].selector == ".a"

    def test_font_face_block(self):
        sheet = parse_css("@font-face { font-family: Inter; src: url(a.woff2); }")
        item = sheet.items[0]
        assert isinstance(item, AtRule)
        assert item.keyword == "font-face"
        assert item.declarations[0] == Declaration("font-family", "Inter")

    def test_statement_at_rule(self):
        sheet = parse_css('@import url("base.css");\n.a { color: red; }')
        assert sheet.items[0] == AtRule("import", 'url("base.css")', None)
        assert len(sheet.rules) == 1

    def test_group_nested_in_group(self):
        css = "@supports (display:grid) { @media (min-width: 768px) { .a { color: red; } } .b { color: blue; } }"
        outer = parse_css(css).items[0]
        assert isinstance(outer, GroupRule)
        inner = outer.rules[0]
        assert isinstance(inner, GroupRule)
        assert (inner.keyword, inner.prelude) == ("media", "(min-width: 768px)")
        assert inner.rules == (Rule(".a", (Declaration("color", "red"),)),)
        assert outer.rules[1] == Rule(".b", (Declaration("color", "blue"),))

    def test_at_rules_inside_group(self):
        sheet = parse_css('@media print { @font-face { font-family: Inter; } @import url("p.css"); .a { color: red; } }')
        group = sheet.items[0]
        assert group.rules[0] == AtRule("font-face", "", (Declaration("font-family", "Inter"),))
        assert group.rules[1] == AtRule("import", 'url("p.css")', None)
        assert isinstance(group.rules[2], Rule)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    def test_unclosed_block(self):
        with pytest.raises(ParseError):
            parse_css(".a { color: red;")

    def test_missing_colon(self):
        with pytest.raises(ParseError):
            parse_css(".a { color red; }")

    def test_error_carries_position(self):
        with pytest.raises(ParseError) as info:
            parse_css(".a { color: red; }\n}")
        assert info.value.line == 2


# ---------------------------------------------------------------------------
# Inline declarations and serialization
# ---------------------------------------------------------------------------


class TestDeclarationsAndSerialize:
    def test_parse_declarations(self):
        decls = parse_declarations("color: red; padding: 4px")
        assert decls == (Declaration("color", "red"), Declaration("padding", "4px"))

    def test_serialize_rule(self):
        text = serialize([Rule(".a", (Declaration("color", "red", important=True),))])
        assert text == ".a {\n  color: red !important;\n}\n"

    def test_serialize_group(self):
        group = GroupRule("media", "(max-width: 600px)", (Rule(".a", (Declaration("color", "red"),)),))
        assert serialize([group]) == "@media (max-width: 600px) {\n  .a {\n    color: red;\n  }\n}\n"

    def test_serialize_reparses_to_same_model(self):
        sheet = parse_css("@supports (display: grid) { .a { display: grid; } } .b { margin: 0 auto; }")
        assert parse_css(serialize(sheet.items)) == sheet

    def test_serialize_nested_group(self):
        sheet = parse_css("@supports (display: grid) { @media print { .a { color: red; } } }")
        assert serialize(sheet.items) == (
            "@supports (display: grid) {\n"
            "  @media print {\n"
            "    .a {\n"
            "      color: red;\n"
            "    }\n"
            "  }\n"
            "}\n"
        )
        assert parse_css(serialize(sheet.items)) == sheet
