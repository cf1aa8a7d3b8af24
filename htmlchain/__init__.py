"""Convert between HTML markup and fluent builder-style code."""

from .builder_parser import render_builder_code
from .converter import EMPTY_SENTINEL, apply_package_prefix, convert_html_to_code
from .errors import ConversionError, ErrorKind, NodeRef

__all__ = [
    "ConversionError",
    "EMPTY_SENTINEL",
    "ErrorKind",
    "NodeRef",
    "apply_package_prefix",
    "convert_html_to_code",
    "render_builder_code",
]
