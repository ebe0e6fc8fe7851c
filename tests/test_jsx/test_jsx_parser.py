"""Tests for the JavaScript/JSX module parser."""

import pytest

from vibeflow.errors import ParseError
from vibeflow.jsx import ast as js
from vibeflow.jsx import parse_module


def first_jsx(source: str) -> js.Node:
    """The outermost JSX node in *source*."""
    for node in js.walk(parse_module(source)):
        if isinstance(node, (js.JSXElement, js.JSXFragment)):
            return node
    raise AssertionError("no JSX in source")


# ---------------------------------------------------------------------------
# Module structure
# ---------------------------------------------------------------------------


class TestModules:
    def test_imports(self):
        program = parse_module(
            'import React, { useState as useLocal, type FC } from "react";\n'
            'import * as styles from "./styles";\n'
            'import "./global.css";\n'
        )
        first, second, third = program.body
        assert [s.name for s in first.specifiers] == ["React", "useLocal", "FC"]
        assert first.source == "react"
        assert [s.name for s in second.specifiers] == ["styles"]
        assert third.specifiers == []

    def test_export_default_function(self):
        program = parse_module("export default function App() { return null; }")
        export = program.body[0]
        assert isinstance(export, js.ExportDeclaration)
        assert export.default is True
        assert isinstance(export.declaration, js.FunctionDeclaration)
        assert export.declaration.id.name == "App"

    def test_spans_cover_source(self):
        source = "const a = 1;\nlet b = a + 2;"
        program = parse_module(source)
        assert [source[s.start : s.end] for s in program.body] == ["const a = 1;", "let b = a + 2;"]

    def test_asi(self):
        program = parse_module("const a = 1\nconst b = 2\nfoo()\n")
        assert len(program.body) == 3

    def test_shebang_and_directive(self):
        program = parse_module('#!/usr/bin/env node\n"use client";\nexport {};\n')
        assert isinstance(program.body[0], js.ExpressionStatement)
        assert isinstance(program.body[0].expression, js.StringLiteral)

    def test_control_flow(self):
        source = """
        outer: for (const item of items) {
          if (!item) continue outer;
          for (let i = 0; i < 3; i++) { total += i; }
        }
        while (x) { x--; }
        do { y++; } while (y < 10);
        try { risky(); } catch ({ message }) { log(message); } finally { done(); }
        switch (kind) { case "a": break; default: other(); }
        for (const key in obj) delete obj[key];
        """
        program = parse_module(source)
        assert [type(s).__name__ for s in program.body] == [
            "ForInOfStatement", "WhileStatement", "DoWhileStatement",
            "TryStatement", "SwitchStatement", "ForInOfStatement",
        ]


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


class TestExpressions:
    def expression(self, source: str) -> js.Node:
        return parse_module(source).body[0].expression

    def test_precedence(self):
        expr = self.expression("a + b * c;")
        assert isinstance(expr, js.BinaryExpression)
        assert expr.operator == "+"
        assert expr.right.operator == "*"

    def test_logical_and_conditional(self):
        expr = self.expression("a ?? b ? c : d;")
        assert isinstance(expr, js.ConditionalExpression)
        assert isinstance(expr.test, js.LogicalExpression)

    def test_arrow_functions(self):
        expr = self.expression("(a, { b = 1, ...rest }) => a + b;")
        assert isinstance(expr, js.ArrowFunctionExpression)
        assert len(expr.params) == 2

    def test_async_arrow(self):
        expr = self.expression("async x => await x;")
        assert isinstance(expr, js.ArrowFunctionExpression)
        assert expr.is_async is True

    def test_parenthesised_expression_is_not_arrow(self):
        expr = self.expression("(a, b);")
        assert isinstance(expr, js.SequenceExpression)

    def test_optional_chaining(self):
        expr = self.expression("user?.profile?.[key]?.();")
        assert isinstance(expr, js.CallExpression)
        assert expr.optional is True

    def test_template_literal(self):
        expr = self.expression("`a ${b + `c ${d}`} e`;")
        assert isinstance(expr, js.TemplateLiteral)
        assert expr.quasis == ["a ", " e"]
        assert isinstance(expr.expressions[0], js.BinaryExpression)

    def test_regex_literal(self):
        expr = self.expression("value.replace(/[}{]+/g, '');")
        assert isinstance(expr.arguments[0], js.RegExpLiteral)
        assert expr.arguments[0].raw == "/[}{]+/g"

    def test_division_is_not_regex(self):
        expr = self.expression("a / b / c;")
        assert isinstance(expr, js.BinaryExpression)

    def test_string_escapes(self):
        expr = self.expression(r"'it\'s A';")
        assert expr.value == "it's A"

    def test_object_literal(self):
        expr = self.expression("({ a, b: 2, [c]: 3, ...d, e() { return 1; } });")
        assert isinstance(expr, js.ObjectExpression)
        assert len(expr.properties) == 5
        assert expr.properties[0].shorthand is True

    def test_class_expression(self):
        program = parse_module("class Store extends Base { static count = 0; #secret; get size() { return 1; } }")
        cls = program.body[0]
        assert isinstance(cls, js.ClassDeclaration)
        assert len(cls.members) == 3


class TestGenerators:
    def yields(self, node: js.Node) -> list[js.YieldExpression]:
        return [n for n in js.walk(node) if isinstance(n, js.YieldExpression)]

    def test_generator_function(self):
        fn = parse_module("function* g() { yield 1; yield* other(); }").body[0]
        assert isinstance(fn, js.FunctionDeclaration)
        assert fn.is_generator is True
        assert [y.delegate for y in self.yields(fn)] == [False, True]
        assert isinstance(self.yields(fn)[1].argument, js.CallExpression)

    def test_generator_methods(self):
        cls = parse_module("class C { *g() { yield 1; } async *h() { yield; } }").body[0]
        first, second = (member.value for member in cls.members)
        assert (first.is_generator, first.is_async) == (True, False)
        assert (second.is_generator, second.is_async) == (True, True)
        assert self.yields(second)[0].argument is None

    def test_async_generator_object_method(self):
        expr = parse_module("({ async *gen() { yield 1; } });").body[0].expression
        method = expr.properties[0].value
        assert method.is_async is True
        assert method.is_generator is True
        assert len(self.yields(method)) == 1

    def test_bare_yield_ends_at_newline(self):
        fn = parse_module("function* g() {\n  yield\n  next;\n}").body[0]
        assert self.yields(fn)[0].argument is None
        assert len(fn.body.body) == 2

    def test_yield_jsx(self):
        fn = parse_module("function* rows() { yield <li>One</li>; }").body[0]
        assert isinstance(self.yields(fn)[0].argument, js.JSXElement)

    def test_yield_is_a_name_outside_generators(self):
        fn = parse_module("function* g() { const f = () => yield; }").body[0]
        assert self.yields(fn) == []
        assert any(isinstance(n, js.Identifier) and n.name == "yield" for n in js.walk(fn))


# ---------------------------------------------------------------------------
# TypeScript annotations
# ---------------------------------------------------------------------------


class TestTypeScript:
    def test_annotations_skipped(self):
        program = parse_module(
            "type Props = { title: string; items?: Array<{ id: number }> };\n"
            "interface State { open: boolean }\n"
            "export function Card({ title }: Props): JSX.Element { return <h1>{title}</h1>; }\n"
        )
        assert isinstance(program.body[0], js.TypeDeclaration)
        assert program.body[0].id.name == "Props"
        assert program.body[1].id.name == "State"

    def test_as_and_non_null(self):
        expr = parse_module("(value as string)!.length;").body[0].expression
        assert isinstance(expr, js.MemberExpression)
        assert isinstance(expr.object, js.TSNonNullExpression)

    def test_call_type_arguments(self):
        expr = parse_module("const [s, set] = useState<number | null>(null);").body[0].declarations[0].init
        assert isinstance(expr, js.CallExpression)
        assert isinstance(expr.arguments[0], js.NullLiteral)

    def test_less_than_is_comparison(self):
        expr = parse_module("a < b;").body[0].expression
        assert isinstance(expr, js.BinaryExpression)
        assert expr.operator == "<"


# ---------------------------------------------------------------------------
# JSX
# ---------------------------------------------------------------------------


class TestJsx:
    def test_element_with_attributes(self):
        el = first_jsx('<a href="/x" data-id={id} disabled {...rest}>Go</a>;')
        assert el.name == "a"
        names = [getattr(a, "name", None) for a in el.attributes]
        assert names == ["href", "data-id", "disabled", None]
        assert el.attributes[0].value.value == "/x"
        assert el.attributes[2].value is None
        assert isinstance(el.attributes[3], js.JSXSpreadAttribute)

    def test_member_and_namespaced_names(self):
        assert first_jsx("<Menu.Item />;").name == "Menu.Item"
        assert first_jsx("<svg:rect />;").name == "svg:rect"

    def test_fragment(self):
        frag = first_jsx("<><b>x</b></>;")
        assert isinstance(frag, js.JSXFragment)
        assert frag.children[0].name == "b"

    def test_text_whitespace_rules(self):
        el = first_jsx("<p>\n  Hello\n  world &amp; all\n</p>;")
        assert el.children[0].value == "Hello world & all"

    def test_attribute_entities_decoded(self):
        el = first_jsx('<p title="a &amp; b" />;')
        assert el.attributes[0].value.value == "a & b"
        assert el.attributes[0].value.raw == '"a &amp; b"'

    def test_children_kinds(self):
        el = first_jsx("<ul>{/* note */}{items.map((i) => <li key={i}>{i}</li>)}{...more}</ul>;")
        kinds = [type(c).__name__ for c in el.children]
        assert kinds == ["JSXExpressionContainer", "JSXExpressionContainer", "JSXSpreadChild"]
        assert isinstance(el.children[0].expression, js.JSXEmptyExpression)

    def test_nested_jsx_in_attribute(self):
        el = first_jsx("<Tooltip content={<b>hi</b>} icon=<Icon /> />;")
        assert isinstance(el.attributes[0].value.expression, js.JSXElement)
        assert isinstance(el.attributes[1].value, js.JSXElement)

    def test_element_span(self):
        source = "const x = (\n  <div className=\"c\">\n    <span>hi</span>\n  </div>\n);"
        el = first_jsx(source)
        assert source[el.start : el.end] == '<div className="c">\n    <span>hi</span>\n  </div>'

    def test_greater_than_after_jsx(self):
        program = parse_module("const ok = <br /> > 1;")
        assert isinstance(program.body[0].declarations[0].init, js.BinaryExpression)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestParseErrors:
    @pytest.mark.parametrize("source", [
        "<div>",
        "<div></span>;",
        "const = 1;",
        "<div>}</div>;",
        "<a b=c />;",
        "f(;",
        "`unterminated",
        "const x = <div attr={} />;",
    ])
    def test_malformed(self, source):
        with pytest.raises(ParseError):
            parse_module(source)

    def test_location_reported(self):
        with pytest.raises(ParseError) as info:
            parse_module("const a = 1;\nconst b = <div></span>;")
        assert info.value.line == 2
        assert "(2:" in str(info.value)

    def test_deep_nesting(self):
        with pytest.raises(ParseError):
            parse_module("(" * 5000 + "1" + ")" * 5000)
