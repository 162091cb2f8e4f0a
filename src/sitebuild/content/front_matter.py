"""YAML front matter splitting for Markdown documents."""

from __future__ import annotations

import re
from typing import Any

import yaml

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE)


class FrontMatterError(ValueError):
    """Raised when a front matter block exists but cannot be parsed."""


def split_front_matter(source_text: str) -> tuple[dict[str, Any], str]:
    """Return (front_matter, body). Documents without a header yield an empty mapping."""

    text = source_text.lstrip("\ufeff")
    match = _FRONT_MATTER_RE.match(text)
    if match is None:
        return {}, text

    try:
        parsed = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML front matter: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise FrontMatterError("Front matter must be a mapping")

    return {str(key): value for key, value in parsed.items()}, text[match.end() :]
