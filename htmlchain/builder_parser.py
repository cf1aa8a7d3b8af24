"""Render builder code back into HTML without executing it.

Only the expression subset produced by the HTML converter (plus a few common
hand-written forms) is understood::

    var n = h.Div(h.H1("Title").Class("title"), h.Text("body")).Id("main")
    n.Children(h.P(h.Text("more")))

Statements may assign to variables (``var x = ...``, ``x := ...``); the value
of ``n`` is rendered when assigned, otherwise the last expression.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Union

from .dom_model import DomNode, dom_to_html, element
from .errors import ConversionError, ErrorKind
from .naming import tag_name

Value = Union[DomNode, str, int, float, bool]

RESULT_VARIABLE = "n"

TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<comment>//[^\n]*|/\*.*?\*/)
    |(?P<string>"(?:[^"\\\n]|\\.)*")
    |(?P<raw>`[^`]*`)
    |(?P<number>\d+(?:\.\d+)?)
    |(?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<op>:=|[.(),=;])
    """,
    re.VERBOSE | re.DOTALL,
)
PACKAGE_RE = re.compile(r"^\s*package\s+\w+\s*$", re.MULTILINE)
IMPORT_BLOCK_RE = re.compile(r"^\s*import\s*\(.*?\)", re.MULTILINE | re.DOTALL)
IMPORT_LINE_RE = re.compile(r"^\s*import\s+[^\n]*$", re.MULTILINE)
ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[0-7]{3}|.)", re.DOTALL)

SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
    "'": "'",
}
CHILD_METHODS = {"Children", "AppendChildren"}


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    pos: int


def _syntax_error(message: str, pos: int | None = None) -> ConversionError:
    if pos is not None:
        message = f"{message} at offset {pos}"
    return ConversionError(ErrorKind.SYNTAX_ERROR, message)


def _unescape(body: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape[0] in "xuU":
            return chr(int(escape[1:], 16))
        if escape[0] in "01234567" and len(escape) == 3:
            return chr(int(escape, 8))
        if escape in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[escape]
        raise _syntax_error(f"unknown escape sequence \\{escape}")

    return ESCAPE_RE.sub(_replace, body)


def tokenize(code: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(code):
        match = TOKEN_RE.match(code, pos)
        if match is None:
            raise _syntax_error(f"unexpected character {code[pos]!r}", pos)
        kind = match.lastgroup or ""
        value = match.group(0)
        if kind == "string":
            tokens.append(Token("string", _unescape(value[1:-1]), pos))
        elif kind == "raw":
            tokens.append(Token("string", value[1:-1], pos))
        elif kind in ("number", "ident", "op"):
            tokens.append(Token(kind, value, pos))
        pos = match.end()
    return tokens


def strip_preamble(code: str) -> str:
    """Drop ``package`` and ``import`` declarations."""

    code = PACKAGE_RE.sub("", code)
    code = IMPORT_BLOCK_RE.sub("", code)
    return IMPORT_LINE_RE.sub("", code)


class BuilderParser:
    """Recursive-descent evaluator building :class:`DomNode` trees."""

    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.variables: Dict[str, Value] = {}

    def _peek(self, offset: int = 0) -> Token | None:
        position = self.index + offset
        if position < len(self.tokens):
            return self.tokens[position]
        return None

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise _syntax_error("unexpected end of code")
        self.index += 1
        return token

    def _expect(self, value: str) -> Token:
        token = self._next()
        if token.value != value or token.kind not in ("op", "ident"):
            raise _syntax_error(f"expected {value!r}, found {token.value!r}", token.pos)
        return token

    def _at(self, value: str, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.kind in ("op", "ident") and token.value == value

    def parse_program(self) -> Value:
        result: Value | None = None
        while self._peek() is not None:
            if self._at(";"):
                self._next()
                continue
            name, value = self._statement()
            if name is None:
                result = value
            else:
                self.variables[name] = value
        if RESULT_VARIABLE in self.variables:
            return self.variables[RESULT_VARIABLE]
        if result is None:
            raise _syntax_error(f"variable '{RESULT_VARIABLE}' is not defined")
        return result

    def _statement(self) -> tuple[str | None, Value]:
        if self._at("var"):
            self._next()
            name = self._identifier()
            self._expect("=")
            return name, self._expression()
        token = self._peek()
        if token is not None and token.kind == "ident" and (self._at(":=", 1) or self._at("=", 1)):
            self.index += 2
            return token.value, self._expression()
        return None, self._expression()

    def _identifier(self) -> str:
        token = self._next()
        if token.kind != "ident":
            raise _syntax_error(f"expected identifier, found {token.value!r}", token.pos)
        return token.value

    def _arguments(self) -> List[Value]:
        self._expect("(")
        args: List[Value] = []
        while not self._at(")"):
            args.append(self._expression())
            if self._at(","):
                self._next()
            elif not self._at(")"):
                token = self._next()
                raise _syntax_error(f"expected ',' or ')', found {token.value!r}", token.pos)
        self._expect(")")
        return args

    def _expression(self) -> Value:
        value = self._primary()
        while self._at("."):
            self._next()
            method = self._identifier()
            value = self._call_method(value, method, self._arguments())
        return value

    def _primary(self) -> Value:
        token = self._next()
        if token.kind == "string":
            return token.value
        if token.kind == "number":
            return float(token.value) if "." in token.value else int(token.value)
        if token.kind != "ident":
            raise _syntax_error(f"unexpected {token.value!r}", token.pos)
        if token.value in ("true", "false"):
            return token.value == "true"
        if token.value in self.variables:
            return self.variables[token.value]
        if self._at("("):
            return self._call_function(token.value, self._arguments())
        if self._at(".") and self._at("(", 2):
            # package qualifier such as h. or htmlgo.
            self._next()
            return self._call_function(self._identifier(), self._arguments())
        raise _syntax_error(f"undefined: {token.value}", token.pos)

    def _call_function(self, name: str, args: List[Value]) -> Value:
        if name == "Text":
            return "".join(_text(arg) for arg in args)
        if name == "RawHTML":
            return DomNode(tag="", raw_html="".join(_text(arg) for arg in args))
        if name in ("Components", "HTMLComponents"):
            return DomNode(tag="", children=[_child(arg) for arg in args])
        if name == "Tag":
            if not args or not isinstance(args[0], str):
                raise _syntax_error("Tag requires a tag name")
            return element(args[0])
        node = element(tag_name(name))
        if node.tag == "input":
            if args and isinstance(args[0], str):
                if args[0]:
                    node.attrs["name"] = args[0]
                args = args[1:]
        node.children.extend(_child(arg) for arg in args if arg != "")
        return node

    def _call_method(self, target: Value, method: str, args: List[Value]) -> Value:
        if not isinstance(target, DomNode):
            raise _syntax_error(f"cannot call {method} on {type(target).__name__}")
        if method in CHILD_METHODS:
            target.children.extend(_child(arg) for arg in args)
        elif method == "PrependChildren":
            target.children[:0] = [_child(arg) for arg in args]
        elif method == "Text":
            target.children.append("".join(_text(arg) for arg in args))
        elif method in ("Attr", "SetAttr"):
            if len(args) % 2:
                raise _syntax_error("Attr expects name/value pairs")
            for name, value in zip(args[::2], args[1::2]):
                _set_attribute(target, _text(name), value)
        elif method == "Class":
            classes = " ".join(_text(arg) for arg in args if _text(arg))
            existing = target.attrs.get("class")
            target.attrs["class"] = f"{existing} {classes}" if existing else classes
        else:
            _set_attribute(target, method.lower(), args[0] if args else True)
        return target


def _text(value: Value) -> str:
    if isinstance(value, DomNode):
        raise _syntax_error(f"expected a string, found <{value.tag or 'fragment'}>")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _child(value: Value) -> DomNode | str:
    if isinstance(value, DomNode):
        return value
    return _text(value)


def _set_attribute(node: DomNode, name: str, value: Value) -> None:
    if value is True:
        node.attrs[name] = None
    elif value is False:
        node.attrs.pop(name, None)
    else:
        node.attrs[name] = _text(value)


def render_builder_code(code: str) -> str:
    """Render builder code as HTML.

    Raises :class:`ConversionError` with kind ``SyntaxError`` when the code is
    empty or outside the supported subset.
    """

    source = strip_preamble(code)
    if not source.strip():
        raise _syntax_error("builder code cannot be empty")
    value = BuilderParser(tokenize(source)).parse_program()
    if isinstance(value, DomNode):
        return dom_to_html([value])
    return dom_to_html([DomNode(tag="", text=_text(value))])


__all__ = ["BuilderParser", "Token", "render_builder_code", "strip_preamble", "tokenize"]
