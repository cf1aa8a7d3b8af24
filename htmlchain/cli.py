"""Command-line interface for htmlchain."""

import argparse
from pathlib import Path
from typing import Iterable, Optional

from .builder_parser import render_builder_code
from .config import load_config
from .converter import DEFAULT_PARSER, apply_package_prefix, convert_html_to_code
from .errors import ConversionError
from .io_utils import read_input, stable_json_dumps, warn, write_output


def _emit(output: str, out_path: Optional[str]) -> None:
    write_output(output, Path(out_path) if out_path else None)


def _handle_convert(args: argparse.Namespace) -> None:
    markup = read_input(Path(args.input) if args.input else None)
    try:
        code = convert_html_to_code(markup, parser=args.parser)
    except ConversionError as exc:
        warn(str(exc))
        raise SystemExit(1) from exc

    code = apply_package_prefix(code, args.prefix)
    if args.json:
        _emit(stable_json_dumps({"code": code}).rstrip("\n"), args.output)
    else:
        _emit(code, args.output)


def _handle_render(args: argparse.Namespace) -> None:
    code = read_input(Path(args.input) if args.input else None)
    try:
        html = render_builder_code(code)
    except ConversionError as exc:
        warn(str(exc))
        raise SystemExit(1) from exc
    _emit(html, args.output)


def _handle_serve(args: argparse.Namespace) -> None:
    from .server import serve

    config = load_config(Path(args.config) if args.config else None)
    overrides = {key: value for key, value in (("host", args.host), ("port", args.port)) if value}
    if overrides:
        config = config.model_copy(update=overrides)
    serve(config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htmlchain",
        description="Convert between HTML and builder-style code.",
    )
    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert HTML to builder code.",
        description="Read HTML from a file (or stdin) and print builder code.",
    )
    convert_parser.add_argument("input", nargs="?", help="HTML file; stdin when omitted or '-'.")
    convert_parser.add_argument(
        "--prefix",
        default="h",
        help="Package qualifier for generated calls ('' removes it).",
    )
    convert_parser.add_argument(
        "--parser",
        default=DEFAULT_PARSER,
        help="BeautifulSoup tree builder to parse with.",
    )
    convert_parser.add_argument("--out", dest="output", help="Write the result to this file.")
    convert_parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON object instead of bare code.",
    )
    convert_parser.set_defaults(func=_handle_convert)

    render_parser = subparsers.add_parser(
        "render",
        help="Render builder code as HTML.",
        description="Read builder code from a file (or stdin) and print HTML.",
    )
    render_parser.add_argument("input", nargs="?", help="Code file; stdin when omitted or '-'.")
    render_parser.add_argument("--out", dest="output", help="Write the result to this file.")
    render_parser.set_defaults(func=_handle_render)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the conversion web service.",
        description="Serve the /convert endpoint and the front-end page.",
    )
    serve_parser.add_argument("--config", help="Path to a YAML service config.")
    serve_parser.add_argument("--host", help="Interface to bind (overrides config).")
    serve_parser.add_argument("--port", type=int, help="Port to listen on (overrides config).")
    serve_parser.set_defaults(func=_handle_serve)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]
