"""Tag name <-> builder function name conversion."""

from __future__ import annotations

import re

_UPPER_RE = re.compile(r"(?<!^)(?=[A-Z])")


def component_name(tag: str) -> str:
    """Return the builder function name for an HTML tag.

    Hyphenated custom elements become PascalCase (``my-component`` ->
    ``MyComponent``); other names only get their first letter uppercased.
    """

    if "-" in tag:
        return "".join(part[:1].upper() + part[1:] for part in tag.split("-") if part)
    return tag[:1].upper() + tag[1:]


def tag_name(function_name: str) -> str:
    """Best-effort inverse of :func:`component_name`.

    ``Div`` -> ``div``, ``H1`` -> ``h1``, ``MyComponent`` -> ``my-component``.
    """

    return _UPPER_RE.sub("-", function_name).lower()


__all__ = ["component_name", "tag_name"]
