"""CLI entrypoint for building the page manifest from Markdown content."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from sitebuild.build.pipeline import BUILD_STAGE, SiteBuilder
from sitebuild.config import BuildSettings
from sitebuild.content.models import ContentError
from sitebuild.pages.materializer import PageQueryError
from sitebuild.pages.registry import DuplicatePageError, TemplateNotFoundError
from sitebuild.search.dataset import DatasetFetchError


load_dotenv()

LOGGER = logging.getLogger(__name__)

_BUILD_ERRORS = (
    ContentError,
    PageQueryError,
    DuplicatePageError,
    TemplateNotFoundError,
    DatasetFetchError,
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Derive slugs and layouts and register site pages")
    parser.add_argument("--content-dir", default=None, help="Directory containing Markdown content")
    parser.add_argument("--templates-dir", default=None, help="Directory containing page templates")
    parser.add_argument("--output-dir", default=None, help="Directory for the pages.json manifest")
    parser.add_argument("--db-path", default=None, help="SQLite content index path")
    parser.add_argument("--stage", default=BUILD_STAGE, help="Build stage name")
    parser.add_argument("--skip-search", action="store_true", help="Do not fetch the book dataset")
    parser.add_argument("--show-pages", action="store_true", help="Include page descriptors in output")
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> BuildSettings:
    settings = BuildSettings.from_env()
    overrides = {
        "content_dir": args.content_dir,
        "templates_dir": args.templates_dir,
        "output_dir": args.output_dir,
        "db_path": args.db_path,
    }
    return replace(settings, **{name: Path(value) for name, value in overrides.items() if value})


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ValueError as error:
        LOGGER.error("Configuration error: %s", error)
        print(json.dumps({"error": str(error), "stage": "config"}, ensure_ascii=True, indent=2))
        return 2

    try:
        with SiteBuilder.from_settings(settings, include_search=not args.skip_search) as builder:
            result = builder.build(args.stage)
    except _BUILD_ERRORS as error:
        LOGGER.error("Build failed: %s", error)
        print(json.dumps({"error": str(error), "stage": args.stage}, ensure_ascii=True, indent=2))
        return 1

    print(json.dumps(result.to_dict(include_pages=args.show_pages), ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
