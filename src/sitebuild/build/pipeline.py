"""Build orchestrator: discovery, field derivation, page materialization."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
import time
from typing import Any

from sitebuild.config import BuildSettings
from sitebuild.content.deriver import on_create_node
from sitebuild.content.discovery import discover_content
from sitebuild.content.models import ContentKind
from sitebuild.index.repository import ContentIndex
from sitebuild.pages.materializer import materialize_pages
from sitebuild.pages.registry import PageRegistry, TemplateResolver
from sitebuild.search.dataset import BookDatasetClient, register_search_page


LOGGER = logging.getLogger(__name__)

BUILD_STAGE = "build"
MANIFEST_FILENAME = "pages.json"


@dataclass(slots=True)
class BuildResult:
    stage: str
    nodes: int = 0
    content_pages: int = 0
    search_page: bool = False
    duration_ms: int = 0
    manifest_path: str | None = None
    pages: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self, *, include_pages: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "stage": self.stage,
            "nodes": self.nodes,
            "content_pages": self.content_pages,
            "search_page": self.search_page,
            "duration_ms": self.duration_ms,
            "manifest_path": self.manifest_path,
        }
        if include_pages:
            payload["pages"] = self.pages
        return payload


class SiteBuilder:
    """Runs one build: every node is visited once, then pages are materialized once."""

    def __init__(
        self,
        settings: BuildSettings,
        index: ContentIndex,
        *,
        dataset: BookDatasetClient | None = None,
    ) -> None:
        self._settings = settings
        self._index = index
        self._dataset = dataset

    @classmethod
    def from_settings(cls, settings: BuildSettings, *, include_search: bool = True) -> "SiteBuilder":
        dataset = None
        if include_search and settings.books_url:
            dataset = BookDatasetClient(settings.books_url, timeout_seconds=settings.fetch_timeout_seconds)
        return cls(settings=settings, index=ContentIndex(settings.db_path), dataset=dataset)

    def close(self) -> None:
        self._index.close()

    def __enter__(self) -> "SiteBuilder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def build(self, stage: str = BUILD_STAGE, *, write_manifest: bool = True) -> BuildResult:
        started = time.perf_counter()
        result = BuildResult(stage=stage)

        self._index.reset()
        nodes = discover_content(self._settings.content_dir)
        for node in nodes:
            self._index.create_node(node)
        for node in nodes:
            on_create_node(node, self._index, self._index.get_node)
        result.nodes = sum(1 for node in nodes if node.kind is ContentKind.MARKDOWN)
        LOGGER.info("Processed %d content node(s) from %s", result.nodes, self._settings.content_dir)

        registry = PageRegistry(
            TemplateResolver(self._settings.templates_dir, suffix=self._settings.template_suffix)
        )
        descriptors = materialize_pages(self._index, registry, limit=self._settings.page_limit)
        result.content_pages = len(descriptors)

        if self._dataset is not None:
            register_search_page(registry, self._dataset)
            result.search_page = True

        registry.resolve_templates()
        result.pages = registry.to_manifest()

        if write_manifest:
            result.manifest_path = str(self._write_manifest(result.pages))

        result.duration_ms = int((time.perf_counter() - started) * 1000)
        return result

    def _write_manifest(self, pages: list[dict[str, Any]]) -> Path:
        output_dir = self._settings.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        manifest_path = output_dir / MANIFEST_FILENAME
        manifest_path.write_text(json.dumps(pages, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Wrote %d page(s) to %s", len(pages), manifest_path)
        return manifest_path
