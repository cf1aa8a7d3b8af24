"""Simple DOM model for HTML serialization."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)
HTML_ELEMENTS = VOID_ELEMENTS | frozenset(
    {
        "a", "abbr", "address", "article", "aside", "audio", "b", "bdi", "bdo",
        "blockquote", "body", "button", "canvas", "caption", "cite", "code",
        "colgroup", "data", "datalist", "dd", "del", "details", "dfn", "dialog",
        "div", "dl", "dt", "em", "fieldset", "figcaption", "figure", "footer",
        "form", "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hgroup",
        "html", "i", "iframe", "ins", "kbd", "label", "legend", "li", "main",
        "map", "mark", "menu", "meter", "nav", "noscript", "object", "ol",
        "optgroup", "option", "output", "p", "picture", "pre", "progress", "q",
        "rp", "rt", "ruby", "s", "samp", "script", "search", "section",
        "select", "slot", "small", "span", "strong", "style", "sub", "summary",
        "sup", "svg", "table", "tbody", "td", "template", "textarea", "tfoot",
        "th", "thead", "time", "title", "tr", "u", "ul", "var", "video",
    }
)


@dataclass
class DomNode:
    """Element (or, with an empty tag, a fragment) to serialize.

    Attribute values of ``None`` render as bare boolean attributes.
    """

    tag: str
    attrs: Dict[str, Optional[str]] = field(default_factory=dict)
    children: List["DomContent"] = field(default_factory=list)
    text: str | None = None
    raw_html: str | None = None
    self_closing: bool = False

    @property
    def is_fragment(self) -> bool:
        return not self.tag


DomContent = DomNode | str


def element(tag: str) -> DomNode:
    return DomNode(tag=tag, self_closing=tag in VOID_ELEMENTS)


def _render_attrs(attrs: Dict[str, Optional[str]]) -> str:
    if not attrs:
        return ""
    parts = [
        name if value is None else f'{name}="{html.escape(value, quote=True)}"'
        for name, value in attrs.items()
    ]
    return " " + " ".join(parts)


def _render_children(children: Sequence[DomContent]) -> str:
    html_parts: List[str] = []
    for child in children:
        if isinstance(child, DomNode):
            html_parts.append(dom_to_html([child]))
        else:
            html_parts.append(html.escape(str(child), quote=False))
    return "".join(html_parts)


def _render_body(node: DomNode) -> str:
    parts: List[str] = []
    if node.raw_html is not None:
        # Raw HTML insertion assumes content is trusted.
        parts.append(node.raw_html)
    elif node.text is not None:
        parts.append(html.escape(node.text, quote=False))
    if node.children:
        parts.append(_render_children(node.children))
    return "".join(parts)


def dom_to_html(dom: List[DomNode]) -> str:
    parts: List[str] = []
    for node in dom:
        if node.is_fragment:
            parts.append(_render_body(node))
            continue
        attrs = _render_attrs(node.attrs)
        if node.self_closing:
            parts.append(f"<{node.tag}{attrs}/>")
            continue
        parts.append(f"<{node.tag}{attrs}>")
        parts.append(_render_body(node))
        parts.append(f"</{node.tag}>")
    return "".join(parts)


__all__ = ["DomContent", "DomNode", "HTML_ELEMENTS", "VOID_ELEMENTS", "dom_to_html", "element"]
