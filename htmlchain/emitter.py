"""Emit builder code for a parsed HTML node.

An element becomes ``PREFIX.Name(children...)`` followed by chained setters.
Setters are ordered as follows:

1. ``Type``, ``Id``, ``Class``, ``Style``;
2. plain attributes, in document order;
3. directives (templated markup only): ``v-if``/``v-for``/``v-model``, then
   bindings, then event handlers, then the collected interpolation text as
   ``v-text``;
4. the boolean attributes ``checked``, ``disabled`` and ``required``.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Tuple

from bs4 import Tag
from bs4.element import PageElement

from .directives import (
    MARKER_ATTR,
    MARKER_TAG,
    STRUCTURAL,
    TEXT_DIRECTIVE,
    Directive,
    classify_attribute,
    encoded_captures,
)
from .errors import ConversionError, ErrorKind
from .naming import component_name
from .walker import is_element, is_text, node_ref

logger = logging.getLogger(__name__)

PLACEHOLDER = "htmlgo"

PRIMARY_SETTERS: Tuple[Tuple[str, str], ...] = (
    ("type", "Type"),
    ("id", "Id"),
    ("class", "Class"),
    ("style", "Style"),
)
BOOLEAN_ATTRIBUTES: Tuple[str, ...] = ("checked", "disabled", "required")
BIND_ORDER: Tuple[str, ...] = ("key", "src", "alt", "placeholder", "class", "style")
EVENT_ORDER: Tuple[str, ...] = ("click", "input", "event")
INTERPOLATION_JOINER = " - "
ENCODED_PREFIX = f"{MARKER_ATTR}="


def quote(value: str) -> str:
    """Render ``value`` as a double-quoted string literal."""

    return json.dumps(value, ensure_ascii=False)


def is_marker(node: PageElement) -> bool:
    """True for the ``<span data-v-text>`` elements standing in for ``{{ }}``."""

    return is_element(node) and node.name == MARKER_TAG and node.has_attr(MARKER_ATTR)


def _directive_rank(directive: Directive) -> Tuple[int, int]:
    if directive.group == "structural":
        return 0, STRUCTURAL.index(directive.name)
    order = BIND_ORDER if directive.group == "bind" else EVENT_ORDER
    group_rank = 1 if directive.group == "bind" else 2
    if directive.name in order:
        return group_rank, order.index(directive.name)
    return group_rank, len(order)


def _attr_call(name: str, value: str) -> str:
    return f".Attr({quote(name)}, {quote(value)})"


def _plain_call(name: str, value: str) -> str:
    if name.startswith("data-"):
        return _attr_call(name, value)
    if not value or value == name:
        return _attr_call(name, name)
    return _attr_call(name, value)


class CodeEmitter:
    """Recursive HTML node to builder code converter.

    ``templated`` enables directive handling; ``prefix`` is the package
    qualifier written before every element and text call.
    """

    def __init__(self, templated: bool = False, prefix: str = PLACEHOLDER) -> None:
        self.templated = templated
        self.prefix = prefix

    def emit(self, node: PageElement) -> str:
        if not (is_element(node) or is_text(node)):
            raise ConversionError(
                ErrorKind.UNKNOWN_NODE_TYPE,
                f"unknown node type: {type(node).__name__}",
                node_ref(node),
            )
        buffer: List[str] = []
        self._emit_node(node, buffer)
        return "".join(buffer)

    def _emit_node(self, node: PageElement, buffer: List[str]) -> None:
        if is_text(node):
            self._emit_text(str(node), buffer)
        elif is_marker(node):
            buffer.append(_attr_call(TEXT_DIRECTIVE, node[MARKER_ATTR]))
        else:
            self._emit_element(node, buffer)

    def _is_encoded_marker(self, text: str) -> bool:
        return self.templated and text.startswith(ENCODED_PREFIX)

    def _emit_text(self, raw: str, buffer: List[str]) -> None:
        text = raw.strip()
        if not text or self._is_encoded_marker(text):
            return
        buffer.append(f"{self.prefix}.Text({quote(text)})")

    def _emit_element(self, element: Tag, buffer: List[str]) -> None:
        logger.debug("emitting element <%s>", element.name)
        children = list(element.children)
        buffer.append(f"{self.prefix}.{component_name(element.name)}(")

        if not any(is_marker(child) for child in children):
            arguments = [
                child
                for child in children
                if is_element(child) or (is_text(child) and str(child).strip())
            ]
            for index, child in enumerate(arguments):
                if index:
                    buffer.append(", ")
                self._emit_node(child, buffer)
        if element.name == "input" and not children:
            buffer.append('""')
        buffer.append(")")

        self._emit_attributes(element, children, buffer)

    def _interpolation_text(self, children: List[PageElement]) -> str:
        captures: List[str] = []
        for child in children:
            if is_marker(child):
                captures.append(child[MARKER_ATTR])
            elif is_text(child):
                text = str(child).strip()
                if text == "-" and captures:
                    continue
                if self._is_encoded_marker(text):
                    captures.extend(encoded_captures(text))
        return INTERPOLATION_JOINER.join(captures)

    def _emit_attributes(self, element: Tag, children: List[PageElement], buffer: List[str]) -> None:
        attrs: Dict[str, str] = {name: value or "" for name, value in element.attrs.items()}
        emitted: set[str] = set()

        def append(name: str, call: str) -> None:
            if name in emitted:
                return
            emitted.add(name)
            buffer.append(call)

        for name, setter in PRIMARY_SETTERS:
            if name in attrs:
                append(name, f".{setter}({quote(attrs.pop(name))})")

        directives: List[Tuple[Directive, str]] = []
        booleans: set[str] = set()
        for name, value in attrs.items():
            directive = classify_attribute(name) if self.templated else None
            if directive is not None:
                directives.append((directive, value))
            elif name in BOOLEAN_ATTRIBUTES:
                booleans.add(name)
            else:
                append(name, _plain_call(name, value))

        if self.templated:
            directives.sort(key=lambda item: _directive_rank(item[0]))
            for directive, value in directives:
                append(directive.display, _attr_call(directive.display, value))
            interpolation = self._interpolation_text(children)
            if interpolation:
                append(TEXT_DIRECTIVE, _attr_call(TEXT_DIRECTIVE, interpolation))

        for name in BOOLEAN_ATTRIBUTES:
            if name in booleans:
                append(name, _attr_call(name, name))


__all__ = [
    "BOOLEAN_ATTRIBUTES",
    "CodeEmitter",
    "PLACEHOLDER",
    "PRIMARY_SETTERS",
    "is_marker",
    "quote",
]
