"""Locate the node code emission starts from."""

from __future__ import annotations

from typing import Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from .errors import ConversionError, ErrorKind, NodeRef

Node = Union[Tag, NavigableString]


def is_element(node: PageElement | None) -> bool:
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def is_text(node: PageElement | None) -> bool:
    """True for character data only; comments and doctypes are excluded."""

    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def node_ref(node: PageElement) -> NodeRef:
    """Build a detached handle for ``node`` usable after the tree is gone."""

    path: list[int] = []
    current = node
    while current.parent is not None:
        siblings = current.parent.contents
        path.append(next(index for index, sibling in enumerate(siblings) if sibling is current))
        current = current.parent
    if isinstance(node, Tag):
        name = node.name
    else:
        name = f"#{type(node).__name__.lower()}"
    return NodeRef(name=name, path=tuple(reversed(path)))


def _first_body_element(html_node: Tag) -> Tag:
    body = next(
        (child for child in html_node.children if is_element(child) and child.name == "body"),
        None,
    )
    if body is None:
        raise ConversionError(ErrorKind.NO_BODY, "html tag has no body tag", node_ref(html_node))
    element = next((child for child in body.children if is_element(child)), None)
    if element is None:
        raise ConversionError(ErrorKind.EMPTY_BODY, "body tag has no valid content", node_ref(body))
    return element


def find_content_root(node: PageElement | None) -> Node:
    """Return the first meaningful element or text node below ``node``.

    Documents with an ``html`` wrapper resolve to the first element inside
    ``body``; bare fragments resolve to their first element or non-blank text.
    """

    if node is None:
        raise ConversionError(ErrorKind.EMPTY_NODE, "node is nil")
    if is_element(node):
        if node.name == "html":
            return _first_body_element(node)
        return node
    if is_text(node) and str(node).strip():
        return node
    for child in getattr(node, "contents", ()):
        try:
            return find_content_root(child)
        except ConversionError as exc:
            # html wrappers without a usable body are definitive
            if exc.kind is not ErrorKind.NO_CONTENT:
                raise
    label = node.name if isinstance(node, Tag) else type(node).__name__
    raise ConversionError(
        ErrorKind.NO_CONTENT,
        f"no valid content found in node {label!r}",
        node_ref(node),
    )


__all__ = ["find_content_root", "is_element", "is_text", "node_ref"]
