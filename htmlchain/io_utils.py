"""CLI input/output helpers."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional


def stable_json_dumps(obj: object) -> str:
    """Serialize JSON in a stable, human-readable way with a trailing newline."""
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def read_input(path: Optional[Path]) -> str:
    """Read a file, or standard input when ``path`` is ``None`` or ``-``."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8")


def write_output(text: str, path: Optional[Path] = None) -> None:
    """Print ``text``, or write it newline-terminated to ``path``."""
    if path is None:
        print(text)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
