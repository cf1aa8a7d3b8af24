"""Service configuration loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from .models import ServiceConfig

CONFIG_ENV = "HTMLCHAIN_CONFIG"
PORT_ENV = "PORT"


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ServiceConfig:
    """Load settings from YAML, then apply environment overrides.

    The file is ``path`` or, when omitted, the one named by ``HTMLCHAIN_CONFIG``;
    without either the defaults apply. ``PORT`` overrides the configured port.
    """

    environ = os.environ if environ is None else environ
    if path is None and environ.get(CONFIG_ENV):
        path = Path(environ[CONFIG_ENV])

    data: Any = {}
    if path is not None:
        if not path.exists():
            raise SystemExit(f"Config file not found: {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise SystemExit(f"{path} must contain a mapping of settings.")

    if environ.get(PORT_ENV):
        data = {**data, "port": environ[PORT_ENV]}

    try:
        return ServiceConfig.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid service config in {path or 'environment'}: {exc}") from exc


__all__ = ["CONFIG_ENV", "PORT_ENV", "load_config"]
