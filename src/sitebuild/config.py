"""Runtime configuration for site builds."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from sitebuild.devserver.tunnel import DEFAULT_DEV_PORT, DEFAULT_TUNNEL_COMMAND
from sitebuild.index.repository import DEFAULT_QUERY_LIMIT
from sitebuild.pages.registry import DEFAULT_TEMPLATE_SUFFIX
from sitebuild.search.dataset import DEFAULT_BOOKS_URL, DEFAULT_FETCH_TIMEOUT_SECONDS


DEFAULT_CONTENT_DIR = "content"
DEFAULT_TEMPLATES_DIR = "src/templates"
DEFAULT_OUTPUT_DIR = "public"
DEFAULT_DB_PATH = ".sitebuild-content.db"


def _parse_int(*, name: str, raw_value: str, minimum: int = 1, maximum: int | None = None) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be <= {maximum}")
    return value


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.001) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _required(source: Mapping[str, str], name: str, default: str) -> str:
    value = source.get(name, default).strip()
    if not value:
        raise ValueError(f"{name} cannot be empty")
    return value


@dataclass(frozen=True, slots=True)
class BuildSettings:
    """Validated site build settings."""

    content_dir: Path = Path(DEFAULT_CONTENT_DIR)
    templates_dir: Path = Path(DEFAULT_TEMPLATES_DIR)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    db_path: Path = Path(DEFAULT_DB_PATH)
    template_suffix: str = DEFAULT_TEMPLATE_SUFFIX
    page_limit: int = DEFAULT_QUERY_LIMIT
    books_url: str | None = DEFAULT_BOOKS_URL
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    dev_port: int = DEFAULT_DEV_PORT
    tunnel_command: str = DEFAULT_TUNNEL_COMMAND

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BuildSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        content_dir = _required(source, "SITEBUILD_CONTENT_DIR", DEFAULT_CONTENT_DIR)
        templates_dir = _required(source, "SITEBUILD_TEMPLATES_DIR", DEFAULT_TEMPLATES_DIR)
        output_dir = _required(source, "SITEBUILD_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)
        db_path = _required(source, "SITEBUILD_DB_PATH", DEFAULT_DB_PATH)
        tunnel_command = _required(source, "SITEBUILD_TUNNEL_COMMAND", DEFAULT_TUNNEL_COMMAND)

        template_suffix = _required(source, "SITEBUILD_TEMPLATE_SUFFIX", DEFAULT_TEMPLATE_SUFFIX)
        if not template_suffix.startswith("."):
            raise ValueError("SITEBUILD_TEMPLATE_SUFFIX must start with '.'")

        page_limit = _parse_int(
            name="SITEBUILD_PAGE_LIMIT",
            raw_value=_required(source, "SITEBUILD_PAGE_LIMIT", str(DEFAULT_QUERY_LIMIT)),
            minimum=1,
        )
        fetch_timeout_seconds = _parse_positive_float(
            name="SITEBUILD_FETCH_TIMEOUT_SECONDS",
            raw_value=_required(source, "SITEBUILD_FETCH_TIMEOUT_SECONDS", str(DEFAULT_FETCH_TIMEOUT_SECONDS)),
            minimum=0.1,
        )
        dev_port = _parse_int(
            name="SITEBUILD_DEV_PORT",
            raw_value=_required(source, "SITEBUILD_DEV_PORT", str(DEFAULT_DEV_PORT)),
            minimum=1,
            maximum=65535,
        )

        # An explicitly empty URL disables the search page.
        books_url: str | None = source.get("SITEBUILD_BOOKS_URL", DEFAULT_BOOKS_URL).strip()
        if not books_url:
            books_url = None
        elif not books_url.startswith(("http://", "https://")):
            raise ValueError("SITEBUILD_BOOKS_URL must start with http:// or https://")

        return cls(
            content_dir=Path(content_dir),
            templates_dir=Path(templates_dir),
            output_dir=Path(output_dir),
            db_path=Path(db_path),
            template_suffix=template_suffix,
            page_limit=page_limit,
            books_url=books_url,
            fetch_timeout_seconds=fetch_timeout_seconds,
            dev_port=dev_port,
            tunnel_command=tunnel_command,
        )
