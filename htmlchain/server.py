"""Flask application exposing the converters over HTTP."""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request
from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape
from pydantic import ValidationError

from .builder_parser import render_builder_code
from .converter import apply_package_prefix, convert_html_to_code
from .emitter import PLACEHOLDER
from .errors import ConversionError, ErrorKind
from .models import ConvertRequest, ConvertResponse, ErrorResponse, ServiceConfig


def page_environment() -> Environment:
    """Jinja environment for the front-end page."""

    return Environment(
        loader=PackageLoader("htmlchain", "templates"),
        autoescape=select_autoescape(["html", "jinja"]),
        undefined=StrictUndefined,
    )


def _error(status: int, message: str, error_type: str, kind: ErrorKind | None = None):
    payload = ErrorResponse(error=message, type=error_type, kind=kind.value if kind else None)
    return jsonify(payload.model_dump(exclude_none=True)), status


def create_app(config: Optional[ServiceConfig] = None) -> Flask:
    """Build the application; ``flask --app htmlchain.server:create_app run`` works too."""

    config = config or ServiceConfig()
    app = Flask(__name__, static_folder="static", static_url_path="/static")
    app.config["HTMLCHAIN"] = config
    pages = page_environment()

    @app.get("/")
    def index():
        template = pages.get_template("index.html.jinja")
        return template.render(default_prefix=config.package_prefix, placeholder=PLACEHOLDER)

    @app.post("/convert")
    def convert():
        payload = request.get_json(silent=True)
        if payload is None:
            return _error(400, "Failed to parse request: body must be JSON", "request_error")
        try:
            body = ConvertRequest.model_validate(payload)
        except ValidationError as exc:
            return _error(400, f"Failed to parse request: {exc}", "request_error")

        if body.direction == "go2html":
            return _render(body)
        return _convert(body)

    def _render(body: ConvertRequest):
        if not body.go_code.strip():
            return _error(400, "Go code cannot be empty", "go_error")
        try:
            html = render_builder_code(body.go_code)
        except ConversionError as exc:
            # the page shows the message in place of the rendered markup
            app.logger.warning("builder code rendering failed: %s", exc)
            response = ConvertResponse(html=f"<!-- {exc} -->", error=str(exc))
            return jsonify(response.model_dump())
        return jsonify(ConvertResponse(html=html).model_dump())

    def _convert(body: ConvertRequest):
        if not body.html.strip():
            return _error(400, "HTML content cannot be empty", "html_error")
        try:
            code = convert_html_to_code(body.html, parser=config.parser)
        except ConversionError as exc:
            app.logger.warning("HTML conversion failed: %s", exc)
            return _error(exc.kind.http_status, str(exc), "html_error", exc.kind)
        prefix = config.package_prefix if body.package_prefix is None else body.package_prefix
        return jsonify(ConvertResponse(code=apply_package_prefix(code, prefix)).model_dump())

    return app


def serve(config: ServiceConfig) -> None:
    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=config.debug)


__all__ = ["create_app", "page_environment", "serve"]
