"""Pydantic models for the conversion service."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConvertRequest(BaseModel):
    """Body accepted by ``POST /convert``."""

    html: str = Field("", description="HTML markup to convert (html2go).")
    go_code: str = Field(
        "", alias="goCode", description="Builder code to render (go2html)."
    )
    package_prefix: Optional[str] = Field(
        None,
        alias="packagePrefix",
        pattern=r"^([A-Za-z_][A-Za-z0-9_]*)?$",
        description=(
            "Package qualifier for generated calls. Omit to use the configured "
            "default; an empty string removes the qualifier."
        ),
    )
    direction: Literal["html2go", "go2html"] = Field(
        "html2go", description="Conversion direction."
    )

    model_config = ConfigDict(populate_by_name=True)


class ConvertResponse(BaseModel):
    """Successful conversion payload."""

    code: str = Field("", description="Generated builder code.")
    html: str = Field("", description="Rendered HTML.")
    error: Optional[str] = Field(None, description="Non-fatal error message.")


class ErrorResponse(BaseModel):
    """Payload returned with every non-2xx status."""

    error: str = Field(..., description="Human-readable error message.")
    type: str = Field(..., description="Error family (request_error, html_error, go_error).")
    kind: Optional[str] = Field(
        None, description="Conversion error kind when one is available."
    )


class ServiceConfig(BaseModel):
    """Settings for the web service (config YAML plus environment)."""

    host: str = Field("127.0.0.1", description="Interface to bind.")
    port: int = Field(8080, ge=1, le=65535, description="TCP port to listen on.")
    package_prefix: str = Field(
        "h",
        alias="packagePrefix",
        pattern=r"^([A-Za-z_][A-Za-z0-9_]*)?$",
        description="Default package qualifier when a request omits one.",
    )
    parser: str = Field(
        "html.parser",
        description="BeautifulSoup tree builder (html.parser, lxml, html5lib).",
    )
    debug: bool = Field(False, description="Run Flask in debug mode.")

    model_config = ConfigDict(populate_by_name=True)


__all__ = ["ConvertRequest", "ConvertResponse", "ErrorResponse", "ServiceConfig"]
