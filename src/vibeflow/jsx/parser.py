"""Hand-written scanner and recursive-descent parser for component modules.

Scanning is driven by the parser: the scanner produces plain JavaScript
tokens, and the parser switches to character-level scanning where the
grammar is context dependent (JSX after a ``<`` in expression position,
regular expressions after a ``/`` in expression position, template
literals). TypeScript annotations are recognised and skipped.

Syntax example::

    import React from "react";

    export default function Card({ items }: Props) {
      return (
        <ul className="list">
          {items.map((item) => <li key={item.id}>{item.label}</li>)}
        </ul>
      );
    }
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Callable, Optional

from vibeflow.errors import ParseError
from vibeflow.jsx import ast as js
from vibeflow.jsx.text import jsx_text_value

__all__ = ["parse_module", "RESERVED_WORDS"]

RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with",
})

_PUNCTUATORS = (
    ">>>=", "...", "===", "!==", "**=", "<<=", ">>=", ">>>", "&&=", "||=", "??=",
    "=>", "==", "!=", "<=", ">=", "&&", "||", "??", "?.", "++", "--",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "**", "<<", ">>",
)
_SINGLE_PUNCTUATORS = frozenset("{}()[];,<>+-*/%&|^!~?:=.@#`")

_ASSIGN_OPS = frozenset({
    "=", "+=", "-=", "*=", "/=", "%=", "**=", "<<=", ">>=", ">>>=",
    "&=", "|=", "^=", "&&=", "||=", "??=",
})

_BINARY_PRECEDENCE = {
    "??": 1, "||": 2, "&&": 3, "|": 4, "^": 5, "&": 6,
    "==": 7, "!=": 7, "===": 7, "!==": 7,
    "<": 8, ">": 8, "<=": 8, ">=": 8, "instanceof": 8, "in": 8,
    "<<": 9, ">>": 9, ">>>": 9,
    "+": 10, "-": 10,
    "*": 11, "/": 11, "%": 11,
    "**": 12,
}
_LOGICAL_OPS = frozenset({"&&", "||", "??"})

_CLASS_MODIFIERS = frozenset({
    "static", "public", "private", "protected", "readonly", "async",
    "get", "set", "abstract", "override", "declare",
})

_NAME_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*")
_JSX_NAME_RE = re.compile(r"(?:[^\W\d]|\$)[\w$-]*")
_NUMBER_RE = re.compile(
    r"0[xX][0-9a-fA-F_]+n?|0[oO][0-7_]+n?|0[bB][01_]+n?"
    r"|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d+)?n?"
)
_STRING_RE = re.compile(r""""(?:[^"\\\n\r]|\\[\s\S])*"|'(?:[^'\\\n\r]|\\[\s\S])*'""")
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_REGEX_FLAGS_RE = re.compile(r"[a-z]*")

_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
    "\n": "", "\r": "", "\r\n": "", "\u2028": "", "\u2029": "",
}


def _cook_escape(match: re.Match[str]) -> str:
    seq = match.group(1)
    if seq in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[seq]
    if seq.startswith("u{"):
        return chr(int(seq[2:-1], 16))
    if seq[0] in "ux" and len(seq) > 1:
        return chr(int(seq[1:], 16))
    return seq


def _number_value(raw: str) -> float:
    text = raw.replace("_", "").rstrip("n")
    if text[:2].lower() in ("0x", "0o", "0b"):
        return float(int(text, 0))
    return float(text)


def _location(source: str, offset: int) -> tuple[int, int]:
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def syntax_error(source: str, message: str, offset: int) -> ParseError:
    line, column = _location(source, offset)
    return ParseError(f"{message} ({line}:{column})", line=line, column=column)


def skip_trivia(source: str, pos: int) -> tuple[int, bool]:
    """Skip whitespace and comments; report whether a line break was crossed."""
    newline = False
    n = len(source)
    while pos < n:
        ch = source[pos]
        if ch in "\n\r\u2028\u2029":
            newline = True
            pos += 1
        elif ch.isspace() or ch == "\ufeff":
            pos += 1
        elif source.startswith("//", pos):
            end = source.find("\n", pos)
            pos = n if end < 0 else end
        elif source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            if end < 0:
                raise syntax_error(source, "Unterminated comment", pos)
            if "\n" in source[pos:end]:
                newline = True
            pos = end + 2
        else:
            break
    return pos, newline


@dataclass(frozen=True)
class Token:
    kind: str  # "name" | "num" | "string" | "punct" | "eof"
    value: str
    start: int
    end: int
    newline_before: bool = False


class Lexer:
    """Produces one JavaScript token at a time from ``pos``."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 2 if source.startswith("#!") else 0
        if self.pos:
            end = source.find("\n")
            self.pos = len(source) if end < 0 else end

    def next(self) -> Token:
        src = self.source
        pos, newline = skip_trivia(src, self.pos)
        if pos >= len(src):
            self.pos = pos
            return Token("eof", "", pos, pos, newline)

        ch = src[pos]
        match = _NAME_RE.match(src, pos)
        if match:
            kind = "name"
        elif ch.isdigit() or (ch == "." and src[pos + 1 : pos + 2].isdigit()):
            match = _NUMBER_RE.match(src, pos)
            kind = "num"
        elif ch in "\"'":
            match = _STRING_RE.match(src, pos)
            if match is None:
                raise syntax_error(src, "Unterminated string constant", pos)
            kind = "string"
        else:
            match = None
            kind = "punct"

        if match is not None:
            end = match.end()
        else:
            end = pos + 1
            for punct in _PUNCTUATORS:
                if src.startswith(punct, pos):
                    if punct == "?." and src[pos + 2 : pos + 3].isdigit():
                        continue
                    end = pos + len(punct)
                    break
            else:
                if ch not in _SINGLE_PUNCTUATORS:
                    raise syntax_error(src, f"Unexpected character {ch!r}", pos)
        self.pos = end
        return Token(kind, src[pos:end], pos, end, newline)


class Parser:
    """Recursive-descent parser producing :mod:`vibeflow.jsx.ast` nodes."""

    def __init__(self, source: str) -> None:
        self.src = source
        self.lexer = Lexer(source)
        self.prev_end = 0
        self.tok = self.lexer.next()
        self._handlers = self._statement_handlers()
        self._in_generator = False

    # -- token helpers -----------------------------------------------------------

    def _advance(self) -> Token:
        prev = self.tok
        self.prev_end = prev.end
        self.tok = self.lexer.next()
        return prev

    def _reset(self, pos: int) -> None:
        """Resume token scanning at *pos* (after a character-level scan)."""
        self.lexer.pos = pos
        self.prev_end = pos
        self.tok = self.lexer.next()

    def _snapshot(self) -> tuple[int, Token, int]:
        return self.lexer.pos, self.tok, self.prev_end

    def _restore(self, state: tuple[int, Token, int]) -> None:
        self.lexer.pos, self.tok, self.prev_end = state

    def _peek(self) -> Token:
        saved = self.lexer.pos
        token = self.lexer.next()
        self.lexer.pos = saved
        return token

    def _is(self, value: str) -> bool:
        return self.tok.kind == "punct" and self.tok.value == value

    def _is_name(self, value: str | None = None) -> bool:
        return self.tok.kind == "name" and (value is None or self.tok.value == value)

    def _eat(self, value: str) -> bool:
        if self._is(value):
            self._advance()
            return True
        return False

    def _expect(self, value: str) -> Token:
        if not self._is(value):
            raise self._error(f"Expected {value!r}")
        return self._advance()

    def _expect_name(self, value: str | None = None) -> Token:
        if not self._is_name(value):
            raise self._error(f"Expected {value!r}" if value else "Expected identifier")
        return self._advance()

    def _error(self, message: str, offset: int | None = None) -> ParseError:
        if offset is None:
            offset = self.tok.start
            if self.tok.kind == "eof":
                message = f"{message}, found end of input"
            else:
                message = f"{message}, found {self.tok.value!r}"
        return syntax_error(self.src, message, offset)

    def _semicolon(self) -> None:
        if self._eat(";"):
            return
        if self._is("}") or self.tok.kind == "eof" or self.tok.newline_before:
            return
        raise self._error("Missing semicolon")

    def _identifier(self) -> js.Identifier:
        tok = self.tok
        if tok.kind != "name" or tok.value in RESERVED_WORDS:
            raise self._error("Expected identifier")
        self._advance()
        return js.Identifier(name=tok.value, start=tok.start, end=tok.end)

    # -- program and statements -----------------------------------------------------

    def parse_program(self) -> js.Program:
        body: list[js.Node] = []
        while self.tok.kind != "eof":
            body.append(self._statement())
        return js.Program(body=body, start=0, end=len(self.src))

    def _statement(self) -> js.Node:
        tok = self.tok
        if tok.kind == "punct":
            if tok.value == "{":
                return self._block()
            if tok.value == ";":
                self._advance()
                return js.EmptyStatement(start=tok.start, end=tok.end)
        elif tok.kind == "name":
            handler = self._handlers.get(tok.value)
            if handler is not None:
                node = handler()
                if node is not None:
                    return node
            if tok.value not in RESERVED_WORDS:
                nxt = self._peek()
                if nxt.kind == "punct" and nxt.value == ":":
                    self._advance()
                    self._advance()
                    return self._statement()  # labelled statement; label dropped
        expr = self._expression()
        self._semicolon()
        return js.ExpressionStatement(expression=expr, start=tok.start, end=self.prev_end)

    def _statement_handlers(self) -> dict[str, Callable[[], Optional[js.Node]]]:
        return {
            "import": self._import_statement,
            "export": self._export_statement,
            "var": self._variable_statement,
            "const": self._variable_statement,
            "let": self._let_statement,
            "function": lambda: self._function(declaration=True),
            "async": self._async_statement,
            "class": lambda: self._class(declaration=True),
            "if": self._if_statement,
            "for": self._for_statement,
            "while": self._while_statement,
            "do": self._do_statement,
            "return": self._return_statement,
            "throw": self._throw_statement,
            "try": self._try_statement,
            "switch": self._switch_statement,
            "break": lambda: self._jump_statement(js.BreakStatement),
            "continue": lambda: self._jump_statement(js.ContinueStatement),
            "type": self._type_statement,
            "interface": self._type_statement,
        }

    def _block(self) -> js.BlockStatement:
        start = self._expect("{").start
        body: list[js.Node] = []
        while not self._is("}"):
            if self.tok.kind == "eof":
                raise self._error("Expected '}'")
            body.append(self._statement())
        end = self._advance().end
        return js.BlockStatement(body=body, start=start, end=end)

    def _import_statement(self) -> js.Node | None:
        nxt = self._peek()
        if nxt.kind == "punct" and nxt.value in ("(", "."):
            return None  # dynamic import() or import.meta expression
        start = self._advance().start
        specifiers: list[js.Identifier] = []
        if self.tok.kind != "string":
            if self._is_name("type") and not (self._peek().kind == "name" and self._peek().value == "from"):
                self._advance()
            if self._is_name() and not self._is_name("from"):
                specifiers.append(self._identifier())
                self._eat(",")
            if self._eat("*"):
                self._expect_name("as")
                specifiers.append(self._identifier())
            if self._eat("{"):
                while not self._is("}"):
                    if self._is_name("type") and self._peek().kind == "name":
                        self._advance()
                    imported = self._advance()
                    if imported.kind not in ("name", "string"):
                        raise self._error("Expected import specifier", imported.start)
                    if self._is_name("as"):
                        self._advance()
                        specifiers.append(self._identifier())
                    else:
                        specifiers.append(js.Identifier(name=imported.value, start=imported.start, end=imported.end))
                    if not self._eat(","):
                        break
                self._expect("}")
            self._expect_name("from")
        if self.tok.kind != "string":
            raise self._error("Expected module source string")
        source = self._advance()
        if self._is_name("with") or self._is_name("assert"):
            self._advance()
            self._skip_balanced()
        self._semicolon()
        return js.ImportDeclaration(
            specifiers=specifiers, source=source.value[1:-1], start=start, end=self.prev_end
        )

    def _export_statement(self) -> js.Node:
        start = self._advance().start
        if self._is_name("default"):
            self._advance()
            if self._is_name("function") or self._is_name("class") or (
                self._is_name("async") and self._peek().value == "function"
            ):
                decl = self._statement()
            else:
                decl = self._assign()
                self._semicolon()
            return js.ExportDeclaration(declaration=decl, default=True, start=start, end=self.prev_end)
        if self._eat("*"):
            if self._is_name("as"):
                self._advance()
                self._advance()
            self._expect_name("from")
            self._advance()
            self._semicolon()
            return js.ExportDeclaration(declaration=None, start=start, end=self.prev_end)
        if self._is_name("type") and self._peek().value == "{":
            self._advance()
        if self._is("{"):
            self._advance()
            locals_: list[js.Identifier] = []
            while not self._is("}"):
                local = self._advance()
                locals_.append(js.Identifier(name=local.value, start=local.start, end=local.end))
                if self._is_name("as"):
                    self._advance()
                    self._advance()
                if not self._eat(","):
                    break
            self._expect("}")
            if self._is_name("from"):
                self._advance()
                self._advance()
                locals_ = []  # re-export: names refer to the other module
            self._semicolon()
            return js.ExportDeclaration(declaration=None, specifiers=locals_, start=start, end=self.prev_end)
        decl = self._statement()
        return js.ExportDeclaration(declaration=decl, start=start, end=self.prev_end)

    def _variable_statement(self) -> js.Node:
        decl = self._variable_declaration()
        self._semicolon()
        decl.end = self.prev_end
        return decl

    def _let_statement(self) -> js.Node | None:
        nxt = self._peek()
        if nxt.kind == "name" or (nxt.kind == "punct" and nxt.value in ("{", "[")):
            return self._variable_statement()
        return None

    def _variable_declaration(self) -> js.VariableDeclaration:
        kind = self._advance()
        declarations: list[js.VariableDeclarator] = []
        while True:
            target = self._binding_target()
            self._eat("!")
            self._skip_annotation()
            init = self._assign() if self._eat("=") else None
            declarations.append(
                js.VariableDeclarator(id=target, init=init, start=target.start, end=self.prev_end)
            )
            if not self._eat(","):
                break
        return js.VariableDeclaration(
            kind=kind.value, declarations=declarations, start=kind.start, end=self.prev_end
        )

    def _async_statement(self) -> js.Node | None:
        nxt = self._peek()
        if nxt.kind == "name" and nxt.value == "function" and not nxt.newline_before:
            start = self._advance().start
            return self._function(declaration=True, is_async=True, start=start)
        return None

    def _if_statement(self) -> js.Node:
        start = self._advance().start
        self._expect("(")
        test = self._expression()
        self._expect(")")
        consequent = self._statement()
        alternate = None
        if self._is_name("else"):
            self._advance()
            alternate = self._statement()
        return js.IfStatement(test=test, consequent=consequent, alternate=alternate, start=start, end=self.prev_end)

    def _for_statement(self) -> js.Node:
        start = self._advance().start
        if self._is_name("await"):
            self._advance()
        self._expect("(")
        init: js.Node | None = None
        if self._is(";"):
            pass
        elif self._is_name("var") or self._is_name("const") or (
            self._is_name("let") and self._peek().kind in ("name", "punct") and self._peek().value not in ("in", "of", "=")
        ):
            init = self._variable_declaration()
        else:
            init = self._expression()

        if self._is_name("of") or self._is_name("in"):
            of = self._advance().value == "of"
            right = self._assign() if of else self._expression()
            self._expect(")")
            body = self._statement()
            assert init is not None
            return js.ForInOfStatement(left=init, right=right, body=body, of=of, start=start, end=self.prev_end)
        if isinstance(init, js.BinaryExpression) and init.operator == "in" and self._is(")"):
            self._advance()
            body = self._statement()
            return js.ForInOfStatement(
                left=init.left, right=init.right, body=body, of=False, start=start, end=self.prev_end
            )

        self._expect(";")
        test = None if self._is(";") else self._expression()
        self._expect(";")
        update = None if self._is(")") else self._expression()
        self._expect(")")
        body = self._statement()
        return js.ForStatement(init=init, test=test, update=update, body=body, start=start, end=self.prev_end)

    def _while_statement(self) -> js.Node:
        start = self._advance().start
        self._expect("(")
        test = self._expression()
        self._expect(")")
        body = self._statement()
        return js.WhileStatement(test=test, body=body, start=start, end=self.prev_end)

    def _do_statement(self) -> js.Node:
        start = self._advance().start
        body = self._statement()
        self._expect_name("while")
        self._expect("(")
        test = self._expression()
        self._expect(")")
        self._eat(";")
        return js.DoWhileStatement(body=body, test=test, start=start, end=self.prev_end)

    def _return_statement(self) -> js.Node:
        start = self._advance().start
        argument = None
        if not (self._is(";") or self._is("}") or self.tok.kind == "eof" or self.tok.newline_before):
            argument = self._expression()
        self._semicolon()
        return js.ReturnStatement(argument=argument, start=start, end=self.prev_end)

    def _throw_statement(self) -> js.Node:
        start = self._advance().start
        argument = self._expression()
        self._semicolon()
        return js.ThrowStatement(argument=argument, start=start, end=self.prev_end)

    def _try_statement(self) -> js.Node:
        start = self._advance().start
        block = self._block()
        handler = None
        finalizer = None
        if self._is_name("catch"):
            catch_start = self._advance().start
            param = None
            if self._eat("("):
                param = self._binding_target()
                self._skip_annotation()
                self._expect(")")
            body = self._block()
            handler = js.CatchClause(param=param, body=body, start=catch_start, end=self.prev_end)
        if self._is_name("finally"):
            self._advance()
            finalizer = self._block()
        if handler is None and finalizer is None:
            raise self._error("Missing catch or finally clause")
        return js.TryStatement(block=block, handler=handler, finalizer=finalizer, start=start, end=self.prev_end)

    def _switch_statement(self) -> js.Node:
        start = self._advance().start
        self._expect("(")
        discriminant = self._expression()
        self._expect(")")
        self._expect("{")
        cases: list[js.SwitchCase] = []
        while not self._eat("}"):
            case_start = self.tok.start
            if self._is_name("case"):
                self._advance()
                test: js.Node | None = self._expression()
            elif self._is_name("default"):
                self._advance()
                test = None
            else:
                raise self._error("Expected 'case' or 'default'")
            self._expect(":")
            consequent: list[js.Node] = []
            while not (self._is("}") or self._is_name("case") or self._is_name("default")):
                if self.tok.kind == "eof":
                    raise self._error("Expected '}'")
                consequent.append(self._statement())
            cases.append(js.SwitchCase(test=test, consequent=consequent, start=case_start, end=self.prev_end))
        return js.SwitchStatement(discriminant=discriminant, cases=cases, start=start, end=self.prev_end)

    def _jump_statement(self, cls: type[js.BreakStatement] | type[js.ContinueStatement]) -> js.Node:
        start = self._advance().start
        label = None
        if self._is_name() and not self.tok.newline_before and self.tok.value not in RESERVED_WORDS:
            label = self._identifier()
        self._semicolon()
        return cls(label=label, start=start, end=self.prev_end)

    def _type_statement(self) -> js.Node | None:
        nxt = self._peek()
        if nxt.kind != "name" or nxt.newline_before:
            return None
        keyword = self._advance()
        ident = self._identifier()
        if self._is("<"):
            self._skip_generic()
        if keyword.value == "type":
            self._expect("=")
            self._skip_type()
            self._semicolon()
        else:
            if self._is_name("extends"):
                self._advance()
                while not self._is("{"):
                    self._skip_type()
                    if not self._eat(","):
                        break
            self._skip_balanced()
        return js.TypeDeclaration(id=ident, start=keyword.start, end=self.prev_end)

    # -- TypeScript annotations (skipped) --------------------------------------------

    def _skip_annotation(self) -> None:
        if self._eat(":"):
            self._skip_type()

    def _skip_type(self) -> None:
        if self._is("|") or self._is("&"):
            self._advance()
        self._skip_primary_type()
        while self._is("|") or self._is("&"):
            self._advance()
            self._skip_primary_type()
        if self._is_name("extends") and not self.tok.newline_before:
            self._advance()
            self._skip_type()
            self._expect("?")
            self._skip_type()
            self._expect(":")
            self._skip_type()

    def _skip_primary_type(self) -> None:
        tok = self.tok
        if tok.kind == "name" and tok.value in ("typeof", "keyof", "unique", "readonly", "infer", "new"):
            self._advance()
            self._skip_primary_type()
            return
        if self._is("<"):
            self._skip_generic()
            self._skip_primary_type()
            return
        if self._is("("):
            self._skip_balanced()
            if self._eat("=>"):
                self._skip_type()
                return
        elif self._is("{") or self._is("["):
            self._skip_balanced()
        elif tok.kind in ("string", "num"):
            self._advance()
        elif self._is("-"):
            self._advance()
            self._advance()
        elif self._is("`"):
            self._template()
        elif tok.kind == "name":
            self._advance()
            while self._eat("."):
                self._advance()
            if self._is("<") and not self.tok.newline_before:
                self._skip_generic()
            if tok.value == "asserts" and self._is_name():
                self._advance()
            if self._is_name("is") and not self.tok.newline_before:
                self._advance()
                self._skip_type()
        else:
            raise self._error("Expected type")
        while self._is("[") and not self.tok.newline_before:
            self._skip_balanced()

    def _skip_balanced(self) -> None:
        """Skip a bracketed token group starting at the current token."""
        depth = 0
        while True:
            tok = self.tok
            if tok.kind == "eof":
                raise self._error("Unbalanced brackets")
            if tok.kind == "punct" and tok.value in ("(", "[", "{"):
                depth += 1
            elif tok.kind == "punct" and tok.value in (")", "]", "}"):
                depth -= 1
            if self._is("`"):
                self._template()
            else:
                self._advance()
            if depth == 0:
                return

    def _skip_generic(self) -> None:
        self._expect("<")
        depth = 1
        while depth > 0:
            tok = self.tok
            if tok.kind == "eof" or (tok.kind == "punct" and tok.value in (";", ")", "]", "}")):
                raise self._error("Unterminated type parameters")
            if tok.kind == "punct" and tok.value in ("(", "[", "{"):
                self._skip_balanced()
                continue
            if tok.kind == "punct":
                if tok.value == "<":
                    depth += 1
                elif tok.value in (">", ">>", ">>>"):
                    depth -= len(tok.value)
            self._advance()

    # -- patterns ----------------------------------------------------------------------

    def _binding_target(self) -> js.Node:
        if self._is("{"):
            return self._object_pattern()
        if self._is("["):
            return self._array_pattern()
        return self._identifier()

    def _binding_element(self) -> js.Node:
        target = self._binding_target()
        if self._eat("="):
            right = self._assign()
            return js.AssignmentPattern(left=target, right=right, start=target.start, end=right.end)
        return target

    def _object_pattern(self) -> js.ObjectPattern:
        start = self._expect("{").start
        properties: list[js.Node] = []
        while not self._is("}"):
            prop_start = self.tok.start
            if self._eat("..."):
                argument = self._binding_target()
                properties.append(js.RestElement(argument=argument, start=prop_start, end=argument.end))
            else:
                key, computed = self._property_key()
                if self._eat(":"):
                    value = self._binding_element()
                    properties.append(js.Property(key=key, value=value, computed=computed,
                                                  start=prop_start, end=value.end))
                else:
                    if not isinstance(key, js.Identifier) or computed:
                        raise self._error("Expected ':'")
                    value = js.Identifier(name=key.name, start=key.start, end=key.end)
                    if self._eat("="):
                        right = self._assign()
                        value = js.AssignmentPattern(left=value, right=right, start=key.start, end=right.end)
                    properties.append(js.Property(key=key, value=value, shorthand=True,
                                                  start=prop_start, end=self.prev_end))
            if not self._eat(","):
                break
        end = self._expect("}").end
        return js.ObjectPattern(properties=properties, start=start, end=end)

    def _array_pattern(self) -> js.ArrayPattern:
        start = self._expect("[").start
        elements: list[js.Node | None] = []
        while not self._is("]"):
            if self._is(","):
                self._advance()
                elements.append(None)
                continue
            if self._is("..."):
                rest_start = self._advance().start
                argument = self._binding_target()
                elements.append(js.RestElement(argument=argument, start=rest_start, end=argument.end))
            else:
                elements.append(self._binding_element())
            if not self._eat(","):
                break
        end = self._expect("]").end
        return js.ArrayPattern(elements=elements, start=start, end=end)

    def _params(self) -> list[js.Node]:
        self._expect("(")
        params: list[js.Node] = []
        while not self._is(")"):
            while self._is_name() and self.tok.value in ("public", "private", "protected", "readonly") \
                    and self._peek().kind == "name":
                self._advance()
            if self._is("..."):
                rest_start = self._advance().start
                argument = self._binding_target()
                self._skip_annotation()
                params.append(js.RestElement(argument=argument, start=rest_start, end=argument.end))
            else:
                target = self._binding_target()
                self._eat("?")
                self._skip_annotation()
                if self._eat("="):
                    right = self._assign()
                    target = js.AssignmentPattern(left=target, right=right, start=target.start, end=right.end)
                params.append(target)
            if not self._eat(","):
                break
        self._expect(")")
        return params

    # -- functions and classes -----------------------------------------------------------

    def _function(self, declaration: bool, is_async: bool = False, start: int | None = None) -> js.Function:
        keyword = self._expect_name("function")
        start = keyword.start if start is None else start
        generator = self._eat("*")
        ident = None
        if self._is_name():
            ident = self._identifier()
        if self._is("<"):
            self._skip_generic()
        params = self._params()
        self._skip_annotation()
        body = self._function_body(generator)
        cls = js.FunctionDeclaration if declaration else js.FunctionExpression
        return cls(id=ident, params=params, body=body, is_async=is_async, is_generator=generator,
                   start=start, end=body.end)

    def _function_body(self, generator: bool) -> js.BlockStatement:
        """Parse a function body; ``yield`` is an operator only inside generators."""
        outer, self._in_generator = self._in_generator, generator
        try:
            return self._block()
        finally:
            self._in_generator = outer

    def _arrow_body(self) -> js.Node:
        if self._is("{"):
            return self._function_body(generator=False)
        outer, self._in_generator = self._in_generator, False
        try:
            return self._assign()
        finally:
            self._in_generator = outer

    def _try_arrow(self) -> js.ArrowFunctionExpression | None:
        start = self.tok.start
        is_async = False
        if self._is_name("async"):
            nxt = self._peek()
            if not nxt.newline_before and (
                (nxt.kind == "name" and nxt.value not in RESERVED_WORDS) or nxt.value in ("(", "<")
            ):
                state = self._snapshot()
                self._advance()
                arrow = self._try_arrow()
                if arrow is not None:
                    arrow.is_async = True
                    arrow.start = start
                    return arrow
                self._restore(state)
            return None

        if self.tok.kind == "name" and self.tok.value not in RESERVED_WORDS:
            nxt = self._peek()
            if nxt.kind == "punct" and nxt.value == "=>" and not nxt.newline_before:
                param = self._identifier()
                self._advance()
                body = self._arrow_body()
                return js.ArrowFunctionExpression(
                    id=None, params=[param], body=body, is_async=is_async, start=start, end=body.end
                )
            return None

        if not (self._is("(") or self._is("<")):
            return None
        state = self._snapshot()
        try:
            if self._is("<"):
                self._skip_generic()
            params = self._params()
            self._skip_annotation()
            if not self._is("=>") or self.tok.newline_before:
                raise self._error("Expected '=>'")
            self._advance()
        except ParseError:
            self._restore(state)
            return None
        body = self._arrow_body()
        return js.ArrowFunctionExpression(id=None, params=params, body=body, is_async=is_async,
                                          start=start, end=body.end)

    def _class(self, declaration: bool) -> js.Class:
        start = self._expect_name("class").start
        ident = None
        if self._is_name() and self.tok.value not in ("extends", "implements"):
            ident = self._identifier()
        if self._is("<"):
            self._skip_generic()
        superclass = None
        if self._is_name("extends"):
            self._advance()
            superclass = self._call_member(allow_call=True)
            if self._is("<"):
                self._skip_generic()
        if self._is_name("implements"):
            self._advance()
            while not self._is("{"):
                self._skip_type()
                if not self._eat(","):
                    break
        self._expect("{")
        members: list[js.ClassMember] = []
        while not self._is("}"):
            if self.tok.kind == "eof":
                raise self._error("Expected '}'")
            if self._eat(";"):
                continue
            members.append(self._class_member())
        end = self._advance().end
        cls = js.ClassDeclaration if declaration else js.ClassExpression
        return cls(id=ident, superclass=superclass, members=members, start=start, end=end)

    def _class_member(self) -> js.ClassMember:
        start = self.tok.start
        static = is_async = False
        while self._is_name() and self.tok.value in _CLASS_MODIFIERS:
            nxt = self._peek()
            if nxt.kind == "punct" and nxt.value in ("(", "=", ";", ":", "}", "?", "!", "<"):
                break
            modifier = self._advance().value
            static = static or modifier == "static"
            is_async = is_async or modifier == "async"
        generator = self._eat("*")
        key, computed = self._property_key()
        self._eat("?")
        self._eat("!")
        value: js.Node | None = None
        if self._is("(") or self._is("<"):
            fn_start = self.tok.start
            if self._is("<"):
                self._skip_generic()
            params = self._params()
            self._skip_annotation()
            body = self._function_body(generator)
            value = js.FunctionExpression(id=None, params=params, body=body, is_async=is_async,
                                          is_generator=generator, start=fn_start, end=body.end)
        else:
            self._skip_annotation()
            if self._eat("="):
                value = self._assign()
            self._semicolon()
        return js.ClassMember(key=key, value=value, computed=computed, static=static,
                              start=start, end=self.prev_end)

    # -- expressions ----------------------------------------------------------------------

    def _expression(self) -> js.Node:
        start = self.tok.start
        expr = self._assign()
        if not self._is(","):
            return expr
        expressions = [expr]
        while self._eat(","):
            expressions.append(self._assign())
        return js.SequenceExpression(expressions=expressions, start=start, end=self.prev_end)

    def _assign(self) -> js.Node:
        if self._in_generator and self._is_name("yield"):
            return self._yield()
        arrow = self._try_arrow()
        if arrow is not None:
            return arrow
        left = self._conditional()
        if self.tok.kind == "punct" and self.tok.value in _ASSIGN_OPS:
            operator = self._advance().value
            right = self._assign()
            return js.AssignmentExpression(operator=operator, left=left, right=right,
                                           start=left.start, end=right.end)
        return left

    def _yield(self) -> js.YieldExpression:
        tok = self._advance()
        nxt = self.tok
        if nxt.kind == "eof" or nxt.newline_before or (
            nxt.kind == "punct" and nxt.value in (")", "]", "}", ",", ";", ":")
        ):
            return js.YieldExpression(argument=None, start=tok.start, end=tok.end)
        delegate = self._eat("*")
        argument = self._assign()
        return js.YieldExpression(argument=argument, delegate=delegate, start=tok.start, end=argument.end)

    def _conditional(self) -> js.Node:
        test = self._binary(1)
        if not self._eat("?"):
            return test
        consequent = self._assign()
        self._expect(":")
        alternate = self._assign()
        return js.ConditionalExpression(test=test, consequent=consequent, alternate=alternate,
                                        start=test.start, end=alternate.end)

    def _binary(self, min_precedence: int) -> js.Node:
        left = self._unary()
        while True:
            tok = self.tok
            if tok.kind == "name" and tok.value in ("as", "satisfies") and not tok.newline_before:
                self._advance()
                if self._is_name("const"):
                    self._advance()
                else:
                    self._skip_type()
                left = js.TSAsExpression(expression=left, start=left.start, end=self.prev_end)
                continue
            operator = tok.value if tok.kind == "punct" or tok.value in ("in", "instanceof") else None
            precedence = _BINARY_PRECEDENCE.get(operator) if operator else None
            if precedence is None or precedence < min_precedence:
                return left
            self._advance()
            right = self._binary(precedence if operator == "**" else precedence + 1)
            cls = js.LogicalExpression if operator in _LOGICAL_OPS else js.BinaryExpression
            left = cls(operator=operator, left=left, right=right, start=left.start, end=right.end)

    def _unary(self) -> js.Node:
        tok = self.tok
        if tok.kind == "punct" and tok.value in ("!", "~", "+", "-"):
            self._advance()
            argument = self._unary()
            return js.UnaryExpression(operator=tok.value, argument=argument, start=tok.start, end=argument.end)
        if tok.kind == "punct" and tok.value in ("++", "--"):
            self._advance()
            argument = self._unary()
            return js.UpdateExpression(operator=tok.value, argument=argument, prefix=True,
                                       start=tok.start, end=argument.end)
        if tok.kind == "name" and tok.value in ("typeof", "void", "delete"):
            self._advance()
            argument = self._unary()
            return js.UnaryExpression(operator=tok.value, argument=argument, start=tok.start, end=argument.end)
        if tok.kind == "name" and tok.value == "await":
            nxt = self._peek()
            if not (nxt.kind == "punct" and nxt.value in (")", "]", "}", ",", ";", ":", "=", ".", "=>")):
                self._advance()
                argument = self._unary()
                return js.AwaitExpression(argument=argument, start=tok.start, end=argument.end)
        expr = self._call_member(allow_call=True)
        if self.tok.kind == "punct" and self.tok.value in ("++", "--") and not self.tok.newline_before:
            operator = self._advance().value
            return js.UpdateExpression(operator=operator, argument=expr, prefix=False,
                                       start=expr.start, end=self.prev_end)
        return expr

    def _call_member(self, allow_call: bool) -> js.Node:
        start = self.tok.start
        expr = self._new_expression() if self._is_name("new") else self._primary()
        while True:
            if self._eat("."):
                prop = self._member_name()
                expr = js.MemberExpression(object=expr, property=prop, start=start, end=prop.end)
            elif self._is("?.") and allow_call:
                self._advance()
                if self._is("("):
                    args = self._arguments()
                    expr = js.CallExpression(callee=expr, arguments=args, optional=True,
                                             start=start, end=self.prev_end)
                elif self._eat("["):
                    prop = self._expression()
                    self._expect("]")
                    expr = js.MemberExpression(object=expr, property=prop, computed=True, optional=True,
                                               start=start, end=self.prev_end)
                else:
                    prop = self._member_name()
                    expr = js.MemberExpression(object=expr, property=prop, optional=True,
                                               start=start, end=prop.end)
            elif self._is("["):
                self._advance()
                prop = self._expression()
                self._expect("]")
                expr = js.MemberExpression(object=expr, property=prop, computed=True,
                                           start=start, end=self.prev_end)
            elif self._is("(") and allow_call:
                args = self._arguments()
                expr = js.CallExpression(callee=expr, arguments=args, start=start, end=self.prev_end)
            elif self._is("<") and allow_call and self._type_arguments():
                continue
            elif self._is("`"):
                quasi = self._template()
                expr = js.TaggedTemplateExpression(tag=expr, quasi=quasi, start=start, end=quasi.end)
            elif self._is("!") and not self.tok.newline_before:
                self._advance()
                expr = js.TSNonNullExpression(expression=expr, start=start, end=self.prev_end)
            else:
                return expr

    def _type_arguments(self) -> bool:
        """Skip ``<...>`` when it is a call's type argument list, e.g. ``useState<string[]>(...)``."""
        state = self._snapshot()
        try:
            self._skip_generic()
        except ParseError:
            self._restore(state)
            return False
        if (self._is("(") or self._is("`")) and not self.tok.newline_before:
            return True
        self._restore(state)
        return False

    def _member_name(self) -> js.Identifier:
        tok = self.tok
        if self._eat("#"):
            name = self._expect_name()
            return js.Identifier(name=f"#{name.value}", start=tok.start, end=name.end)
        if tok.kind != "name":
            raise self._error("Expected property name")
        self._advance()
        return js.Identifier(name=tok.value, start=tok.start, end=tok.end)

    def _new_expression(self) -> js.Node:
        start = self._advance().start
        if self._eat("."):
            prop = self._member_name()  # new.target
            return js.MemberExpression(object=js.Identifier(name="new", start=start, end=start + 3),
                                       property=prop, start=start, end=prop.end)
        callee = self._call_member(allow_call=False)
        if self._is("<"):
            self._skip_generic()
        args = self._arguments() if self._is("(") else []
        return js.NewExpression(callee=callee, arguments=args, start=start, end=self.prev_end)

    def _arguments(self) -> list[js.Node]:
        self._expect("(")
        args: list[js.Node] = []
        while not self._is(")"):
            if self._is("..."):
                spread_start = self._advance().start
                argument = self._assign()
                args.append(js.SpreadElement(argument=argument, start=spread_start, end=argument.end))
            else:
                args.append(self._assign())
            if not self._eat(","):
                break
        self._expect(")")
        return args

    def _primary(self) -> js.Node:
        tok = self.tok
        if tok.kind == "name":
            return self._primary_name(tok)
        if tok.kind == "num":
            self._advance()
            return js.NumericLiteral(raw=tok.value, value=_number_value(tok.value), start=tok.start, end=tok.end)
        if tok.kind == "string":
            self._advance()
            value = _ESCAPE_RE.sub(_cook_escape, tok.value[1:-1])
            return js.StringLiteral(raw=tok.value, value=value, start=tok.start, end=tok.end)
        if tok.kind == "punct":
            if tok.value == "(":
                self._advance()
                expr = self._expression()
                self._expect(")")
                return expr
            if tok.value == "[":
                return self._array()
            if tok.value == "{":
                return self._object()
            if tok.value == "`":
                return self._template()
            if tok.value in ("/", "/="):
                return self._regex(tok.start)
            if tok.value == "<":
                node, end = self._jsx_element(tok.start)
                self._reset(end)
                return node
        raise self._error("Unexpected token")

    def _primary_name(self, tok: Token) -> js.Node:
        value = tok.value
        if value == "function":
            return self._function(declaration=False)
        if value == "async" and self._peek().value == "function" and not self._peek().newline_before:
            self._advance()
            return self._function(declaration=False, is_async=True, start=tok.start)
        if value == "class":
            return self._class(declaration=False)
        self._advance()
        if value == "this":
            return js.ThisExpression(start=tok.start, end=tok.end)
        if value == "super":
            return js.Super(start=tok.start, end=tok.end)
        if value == "null":
            return js.NullLiteral(raw=value, start=tok.start, end=tok.end)
        if value in ("true", "false"):
            return js.BooleanLiteral(raw=value, value=value == "true", start=tok.start, end=tok.end)
        if value in RESERVED_WORDS and value != "import":
            raise self._error(f"Unexpected keyword {value!r}", tok.start)
        return js.Identifier(name=value, start=tok.start, end=tok.end)

    def _array(self) -> js.ArrayExpression:
        start = self._advance().start
        elements: list[js.Node | None] = []
        while not self._is("]"):
            if self._is(","):
                self._advance()
                elements.append(None)
                continue
            if self._is("..."):
                spread_start = self._advance().start
                argument = self._assign()
                elements.append(js.SpreadElement(argument=argument, start=spread_start, end=argument.end))
            else:
                elements.append(self._assign())
            if not self._eat(","):
                break
        end = self._expect("]").end
        return js.ArrayExpression(elements=elements, start=start, end=end)

    def _object(self) -> js.ObjectExpression:
        start = self._advance().start
        properties: list[js.Node] = []
        while not self._is("}"):
            if self._is("..."):
                spread_start = self._advance().start
                argument = self._assign()
                properties.append(js.SpreadElement(argument=argument, start=spread_start, end=argument.end))
            else:
                properties.append(self._object_member())
            if not self._eat(","):
                break
        end = self._expect("}").end
        return js.ObjectExpression(properties=properties, start=start, end=end)

    def _object_member(self) -> js.Property:
        start = self.tok.start
        is_async = False
        if self._is_name() and self.tok.value in ("get", "set", "async"):
            nxt = self._peek()
            if not (nxt.kind == "punct" and nxt.value in (",", ":", "(", "}", "=")):
                is_async = self._advance().value == "async"
        generator = self._eat("*")
        key, computed = self._property_key()
        if self._is("(") or self._is("<"):
            fn_start = self.tok.start
            if self._is("<"):
                self._skip_generic()
            params = self._params()
            self._skip_annotation()
            body = self._function_body(generator)
            value: js.Node = js.FunctionExpression(id=None, params=params, body=body, is_async=is_async,
                                                   is_generator=generator, start=fn_start, end=body.end)
            return js.Property(key=key, value=value, computed=computed, method=True, start=start, end=body.end)
        if self._eat(":"):
            value = self._assign()
            return js.Property(key=key, value=value, computed=computed, start=start, end=value.end)
        if not isinstance(key, js.Identifier) or computed:
            raise self._error("Expected ':'")
        value = js.Identifier(name=key.name, start=key.start, end=key.end)
        if self._eat("="):
            right = self._assign()
            value = js.AssignmentPattern(left=value, right=right, start=key.start, end=right.end)
        return js.Property(key=key, value=value, shorthand=True, start=start, end=self.prev_end)

    def _property_key(self) -> tuple[js.Node, bool]:
        tok = self.tok
        if self._eat("["):
            key = self._assign()
            self._expect("]")
            return key, True
        if tok.kind == "name":
            self._advance()
            return js.Identifier(name=tok.value, start=tok.start, end=tok.end), False
        if tok.kind == "string":
            self._advance()
            value = _ESCAPE_RE.sub(_cook_escape, tok.value[1:-1])
            return js.StringLiteral(raw=tok.value, value=value, start=tok.start, end=tok.end), False
        if tok.kind == "num":
            self._advance()
            return js.NumericLiteral(raw=tok.value, value=_number_value(tok.value),
                                     start=tok.start, end=tok.end), False
        if self._is("#"):
            return self._member_name(), False
        raise self._error("Expected property name")

    def _template(self) -> js.TemplateLiteral:
        src = self.src
        start = self.tok.start
        pos = start + 1
        chunk_start = pos
        quasis: list[str] = []
        expressions: list[js.Node] = []
        while True:
            if pos >= len(src):
                raise syntax_error(src, "Unterminated template", start)
            ch = src[pos]
            if ch == "\\":
                pos += 2
            elif ch == "`":
                quasis.append(src[chunk_start:pos])
                break
            elif ch == "$" and src.startswith("${", pos):
                quasis.append(src[chunk_start:pos])
                self._reset(pos + 2)
                expressions.append(self._expression())
                if not self._is("}"):
                    raise self._error("Expected '}' in template")
                pos = chunk_start = self.tok.end
            else:
                pos += 1
        end = pos + 1
        self._reset(end)
        return js.TemplateLiteral(quasis=quasis, expressions=expressions, start=start, end=end)

    def _regex(self, start: int) -> js.RegExpLiteral:
        src = self.src
        pos = start + 1
        in_class = False
        while True:
            if pos >= len(src) or src[pos] in "\r\n":
                raise syntax_error(src, "Unterminated regular expression", start)
            ch = src[pos]
            if ch == "\\":
                pos += 2
                continue
            if ch == "[":
                in_class = True
            elif ch == "]":
                in_class = False
            elif ch == "/" and not in_class:
                break
            pos += 1
        match = _REGEX_FLAGS_RE.match(src, pos + 1)
        assert match is not None
        end = match.end()
        self._reset(end)
        return js.RegExpLiteral(raw=src[start:end], start=start, end=end)

    # -- JSX (character level) -----------------------------------------------------------

    def _jsx_skip(self, pos: int) -> int:
        return skip_trivia(self.src, pos)[0]

    def _jsx_char(self, pos: int) -> str:
        return self.src[pos] if pos < len(self.src) else ""

    def _jsx_name(self, pos: int, what: str = "JSX tag name") -> tuple[str, int]:
        match = _JSX_NAME_RE.match(self.src, pos)
        if not match:
            raise syntax_error(self.src, f"Expected {what}", pos)
        name, pos = match.group(), match.end()
        if self._jsx_char(pos) == ":":
            part = _JSX_NAME_RE.match(self.src, pos + 1)
            if not part:
                raise syntax_error(self.src, f"Expected {what}", pos + 1)
            return f"{name}:{part.group()}", part.end()
        while self._jsx_char(pos) == "." and what == "JSX tag name":
            part = _NAME_RE.match(self.src, pos + 1)
            if not part:
                raise syntax_error(self.src, f"Expected {what}", pos + 1)
            name, pos = f"{name}.{part.group()}", part.end()
        return name, pos

    def _jsx_element(self, start: int) -> tuple[js.Node, int]:
        pos = self._jsx_skip(start + 1)
        if self._jsx_char(pos) == ">":
            children, end = self._jsx_children(pos + 1, None, start)
            return js.JSXFragment(children=children, start=start, end=end), end

        name, pos = self._jsx_name(pos)
        attributes: list[js.Node] = []
        while True:
            pos = self._jsx_skip(pos)
            ch = self._jsx_char(pos)
            if ch == "/":
                pos = self._jsx_skip(pos + 1)
                if self._jsx_char(pos) != ">":
                    raise syntax_error(self.src, "Expected '>'", pos)
                end = pos + 1
                return js.JSXElement(name=name, attributes=attributes, children=[], self_closing=True,
                                     start=start, end=end), end
            if ch == ">":
                children, end = self._jsx_children(pos + 1, name, start)
                return js.JSXElement(name=name, attributes=attributes, children=children,
                                     start=start, end=end), end
            if ch == "{":
                attribute, pos = self._jsx_spread_attribute(pos)
            elif ch and _JSX_NAME_RE.match(self.src, pos):
                attribute, pos = self._jsx_attribute(pos)
            elif not ch:
                raise syntax_error(self.src, f"Unterminated JSX tag <{name}>", start)
            else:
                raise syntax_error(self.src, f"Unexpected character {ch!r} in JSX tag", pos)
            attributes.append(attribute)

    def _jsx_attribute(self, start: int) -> tuple[js.JSXAttribute, int]:
        name, name_end = self._jsx_name(start, "JSX attribute name")
        pos = self._jsx_skip(name_end)
        if self._jsx_char(pos) != "=":
            return js.JSXAttribute(name=name, value=None, start=start, end=name_end), name_end
        pos = self._jsx_skip(pos + 1)
        ch = self._jsx_char(pos)
        value: js.Node
        if ch in ("\"", "'"):
            close = self.src.find(ch, pos + 1)
            if close < 0:
                raise syntax_error(self.src, "Unterminated string constant", pos)
            end = close + 1
            value = js.StringLiteral(raw=self.src[pos:end], value=html.unescape(self.src[pos + 1 : close]),
                                     start=pos, end=end)
        elif ch == "{":
            value, end = self._jsx_container(pos, child=False)
        elif ch == "<":
            value, end = self._jsx_element(pos)
        else:
            raise syntax_error(self.src, "JSX value should be either an expression or a quoted JSX text", pos)
        return js.JSXAttribute(name=name, value=value, start=start, end=end), end

    def _jsx_spread_attribute(self, start: int) -> tuple[js.JSXSpreadAttribute, int]:
        self._reset(start + 1)
        self._expect("...")
        argument = self._assign()
        if not self._is("}"):
            raise self._error("Expected '}'")
        end = self.tok.end
        return js.JSXSpreadAttribute(argument=argument, start=start, end=end), end

    def _jsx_container(self, start: int, child: bool) -> tuple[js.Node, int]:
        inner = self._jsx_skip(start + 1)
        if self._jsx_char(inner) == "}":
            if not child:
                raise syntax_error(self.src, "JSX attributes must only be assigned a non-empty expression", start)
            empty = js.JSXEmptyExpression(start=start + 1, end=inner)
            return js.JSXExpressionContainer(expression=empty, start=start, end=inner + 1), inner + 1
        self._reset(start + 1)
        spread = child and self._eat("...")
        expression = self._expression()
        if not self._is("}"):
            raise self._error("Expected '}'")
        end = self.tok.end
        if spread:
            return js.JSXSpreadChild(expression=expression, start=start, end=end), end
        return js.JSXExpressionContainer(expression=expression, start=start, end=end), end

    def _jsx_children(self, pos: int, closing: str | None, opening_start: int) -> tuple[list[js.Node], int]:
        src = self.src
        children: list[js.Node] = []
        text_start = pos
        while True:
            if pos >= len(src):
                tag = f"<{closing}>" if closing else "<>"
                raise syntax_error(src, f"Unterminated JSX contents for {tag}", opening_start)
            ch = src[pos]
            if ch not in "<{>}":
                pos += 1
                continue
            if ch in ">}":
                raise syntax_error(src, f"Unexpected token {ch!r} in JSX text", pos)
            if pos > text_start:
                raw = src[text_start:pos]
                children.append(js.JSXText(raw=raw, value=jsx_text_value(raw), start=text_start, end=pos))
            if ch == "{":
                node, pos = self._jsx_container(pos, child=True)
                children.append(node)
            else:
                after = self._jsx_skip(pos + 1)
                if self._jsx_char(after) == "/":
                    return children, self._jsx_closing(after + 1, closing)
                node, pos = self._jsx_element(pos)
                children.append(node)
            text_start = pos

    def _jsx_closing(self, pos: int, expected: str | None) -> int:
        pos = self._jsx_skip(pos)
        if expected is None:
            name = None
        else:
            name, pos = self._jsx_name(pos)
        if name != expected:
            wanted = f"</{expected}>" if expected else "</>"
            raise syntax_error(self.src, f"Expected corresponding JSX closing tag {wanted}", pos)
        pos = self._jsx_skip(pos)
        if self._jsx_char(pos) != ">":
            raise syntax_error(self.src, "Expected '>'", pos)
        return pos + 1


def parse_module(source: str) -> js.Program:
    """Parse a component module. Raises :class:`ParseError` on malformed input."""
    try:
        return Parser(source).parse_program()
    except RecursionError:
        raise ParseError("Source is nested too deeply to parse") from None
