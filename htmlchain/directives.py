"""Template directive detection, interpolation rewriting and attribute classification.

Interpolation spans (``{{ expr }}``) live in text content, so they are the only
construct rewritten before parsing: each one becomes a marker element
``<span data-v-text="expr"></span>``. Directive attributes (``v-if``,
``:src``, ``@click``, ``v-bind:x``, ``v-on:x`` ...) are left for the parser to
delimit and are classified afterwards from their attribute names.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Literal, Tuple

TRIGGERS: Tuple[str, ...] = (
    "v-if",
    "v-for",
    "v-model",
    "v-bind",
    "v-on",
    ":",
    "@",
    "{{",
    "}}",
)

MARKER_TAG = "span"
MARKER_ATTR = "data-v-text"
TEXT_DIRECTIVE = "v-text"

INTERPOLATION_RE = re.compile(r"{{([^}]*)}}")
ENCODED_MARKER_RE = re.compile(r'data-v-text="([^"]*)"')

STRUCTURAL = ("v-if", "v-for", "v-model")

DirectiveGroup = Literal["structural", "bind", "on"]


@dataclass(frozen=True)
class Directive:
    """A directive attribute reduced to one canonical spelling."""

    group: DirectiveGroup
    name: str

    @property
    def display(self) -> str:
        """Spelling used in generated code, e.g. ``:src`` or ``@click``."""

        if self.group == "bind":
            return f":{self.name}"
        if self.group == "on":
            return f"@{self.name}"
        return self.name


def is_templated(markup: str) -> bool:
    return any(trigger in markup for trigger in TRIGGERS)


def _marker(match: re.Match[str]) -> str:
    expression = html.escape(match.group(1), quote=True)
    return f'<{MARKER_TAG} {MARKER_ATTR}="{expression}"></{MARKER_TAG}>'


def preprocess(markup: str) -> Tuple[bool, str]:
    """Return ``(templated, markup)`` with interpolation spans rewritten.

    Markup without any trigger substring is returned unchanged.
    """

    if not is_templated(markup):
        return False, markup
    return True, INTERPOLATION_RE.sub(_marker, markup)


def classify_attribute(name: str) -> Directive | None:
    """Map any directive spelling to a :class:`Directive`, or ``None``."""

    if name in STRUCTURAL:
        return Directive("structural", name)
    if name.startswith("data-v-"):
        rest = name[len("data-"):]
        if rest in STRUCTURAL:
            return Directive("structural", rest)
        for group in ("bind", "on"):
            prefix = f"v-{group}-"
            if rest.startswith(prefix) and len(rest) > len(prefix):
                return Directive(group, rest[len(prefix):])
        return None
    for prefix, group in (("v-bind:", "bind"), ("v-on:", "on"), (":", "bind"), ("@", "on")):
        if name.startswith(prefix) and len(name) > len(prefix):
            return Directive(group, name[len(prefix):])
    return None


def encoded_captures(text: str) -> list[str]:
    """Expressions of marker elements that ended up as raw text."""

    return [html.unescape(value) for value in ENCODED_MARKER_RE.findall(text)]


__all__ = [
    "Directive",
    "MARKER_ATTR",
    "MARKER_TAG",
    "TEXT_DIRECTIVE",
    "TRIGGERS",
    "classify_attribute",
    "encoded_captures",
    "is_templated",
    "preprocess",
]
