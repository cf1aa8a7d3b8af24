"""HTML to builder code entry points."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser

from bs4 import BeautifulSoup, FeatureNotFound, ParserRejectedMarkup

from .directives import preprocess
from .dom_model import HTML_ELEMENTS, VOID_ELEMENTS
from .emitter import PLACEHOLDER, CodeEmitter, quote
from .errors import ConversionError, ErrorKind
from .walker import find_content_root

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"
EMPTY_SENTINEL = f"{PLACEHOLDER}."

_QUALIFIER_RE = re.compile(rf'"(?:[^"\\]|\\.)*"|`[^`]*`|\b{re.escape(PLACEHOLDER)}\.')


class _DanglingTagLint(HTMLParser):
    """Remember the last start tag that was never followed by anything."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.dangling: str | None = None

    def handle_starttag(self, tag, attrs):
        self.dangling = None if tag in VOID_ELEMENTS else tag

    def handle_startendtag(self, tag, attrs):
        self.dangling = None

    def handle_endtag(self, tag):
        self.dangling = None

    def handle_data(self, data):
        if data.strip():
            self.dangling = None

    def handle_comment(self, data):
        self.dangling = None


def _is_known_tag(tag: str) -> bool:
    return tag in HTML_ELEMENTS or "-" in tag


def check_markup(markup: str) -> None:
    """Reject markup that ends on an empty start tag of an unknown element.

    Truncated but valid markup such as ``<div>`` or ``<ul><li>`` is left for
    the parser to close; ``<div><unclosed>`` is rejected. Custom elements
    (names with a hyphen) count as known.
    """

    lint = _DanglingTagLint()
    lint.feed(markup)
    lint.close()
    if lint.dangling is not None and not _is_known_tag(lint.dangling):
        raise ConversionError(
            ErrorKind.INVALID_HTML,
            f"unclosed tag detected: <{lint.dangling}>",
        )


def parse_html(markup: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse markup keeping attribute values as raw strings."""

    options = {"on_duplicate_attribute": "ignore"} if parser == "html.parser" else {}
    try:
        return BeautifulSoup(markup, parser, multi_valued_attributes=None, **options)
    except FeatureNotFound as exc:
        raise ConversionError(ErrorKind.PARSE_ERROR, f"parser {parser!r} is not available") from exc
    except ParserRejectedMarkup as exc:
        raise ConversionError(ErrorKind.PARSE_ERROR, str(exc)) from exc


def convert_html_to_code(markup: str, *, parser: str = DEFAULT_PARSER) -> str:
    """Convert HTML into builder code qualified with the placeholder prefix.

    Raises :class:`ConversionError` when the markup is rejected or has no
    content to convert.
    """

    if not markup.strip():
        return EMPTY_SENTINEL
    if "<" not in markup:
        return f"{PLACEHOLDER}.Text({quote(markup.strip())})"

    check_markup(markup)
    templated, prepared = preprocess(markup)
    if templated:
        logger.debug("template syntax detected")

    document = parse_html(prepared, parser)
    content = find_content_root(document)
    logger.debug("content root: %s", getattr(content, "name", None) or "#text")
    return CodeEmitter(templated=templated).emit(content)


def apply_package_prefix(code: str, prefix: str) -> str:
    """Replace the placeholder qualifier with ``prefix`` (or drop it when empty).

    String literals are left untouched.
    """

    replacement = f"{prefix}." if prefix else ""

    def _swap(match: re.Match[str]) -> str:
        token = match.group(0)
        if token[0] in "\"`":
            return token
        return replacement

    return _QUALIFIER_RE.sub(_swap, code)


__all__ = [
    "DEFAULT_PARSER",
    "EMPTY_SENTINEL",
    "apply_package_prefix",
    "check_markup",
    "convert_html_to_code",
    "parse_html",
]
