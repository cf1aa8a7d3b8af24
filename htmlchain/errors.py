"""Typed conversion errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ErrorKind(str, Enum):
    """Failure categories surfaced by the converters."""

    INVALID_HTML = "InvalidHTML"
    PARSE_ERROR = "ParseError"
    EMPTY_NODE = "EmptyNode"
    EMPTY_BODY = "EmptyBody"
    NO_BODY = "NoBody"
    NO_CONTENT = "NoContent"
    UNKNOWN_NODE_TYPE = "UnknownNodeType"
    SYNTAX_ERROR = "SyntaxError"

    @property
    def http_status(self) -> int:
        """Status code the web service answers with for this kind."""

        if self in (ErrorKind.EMPTY_NODE, ErrorKind.EMPTY_BODY):
            return 400
        return 500


@dataclass(frozen=True)
class NodeRef:
    """Handle to a parsed node: its name and child-index path from the root."""

    name: str
    path: Tuple[int, ...] = ()

    def __str__(self) -> str:
        if not self.path:
            return self.name
        return f"{self.name}@{'/'.join(str(index) for index in self.path)}"


class ConversionError(Exception):
    """Raised when markup or builder code cannot be converted.

    Attributes:
        kind: Stable category for programmatic handling.
        message: Human-readable description.
        node: Optional handle to the node that caused the failure.
    """

    def __init__(self, kind: ErrorKind, message: str, node: NodeRef | None = None) -> None:
        self.kind: ErrorKind = kind
        self.message: str = message
        self.node: NodeRef | None = node
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


__all__ = ["ConversionError", "ErrorKind", "NodeRef"]
