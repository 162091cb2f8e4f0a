from __future__ import annotations

from pathlib import Path

import pytest

from sitebuild.content.models import PageDescriptor
from sitebuild.pages.registry import (
    DuplicatePageError,
    PageRegistry,
    TemplateNotFoundError,
    TemplateResolver,
)


def _templates(tmp_path: Path, *names: str) -> Path:
    templates_dir = tmp_path / "templates"
    templates_dir.mkdir()
    for name in names:
        (templates_dir / f"{name}.html").write_text("<main></main>", encoding="utf-8")
    return templates_dir


def test_registry_records_component_candidate(tmp_path: Path) -> None:
    templates_dir = _templates(tmp_path, "doc")
    registry = PageRegistry(TemplateResolver(templates_dir))

    registry.create_page(PageDescriptor(path="/docs/", template_key="doc", context={"slug": "/docs/"}))

    assert "/docs/" in registry
    assert registry.pages[0].component == str((templates_dir / "doc.html").resolve())


def test_duplicate_path_raises_and_keeps_first(tmp_path: Path) -> None:
    registry = PageRegistry()
    registry.create_page(PageDescriptor(path="/a/", template_key="blog"))

    with pytest.raises(DuplicatePageError):
        registry.create_page(PageDescriptor(path="/a/", template_key="doc"))

    assert [page.template_key for page in registry.pages] == ["blog"]


def test_empty_path_is_rejected() -> None:
    with pytest.raises(ValueError, match="empty"):
        PageRegistry().create_page(PageDescriptor(path="", template_key="blog"))


def test_resolve_templates_fails_on_missing_layout(tmp_path: Path) -> None:
    registry = PageRegistry(TemplateResolver(_templates(tmp_path, "doc")))
    registry.create_page(PageDescriptor(path="/docs/", template_key="doc"))
    registry.create_page(PageDescriptor(path="/blog/x/", template_key="blog"))

    with pytest.raises(TemplateNotFoundError, match="blog"):
        registry.resolve_templates()


def test_resolver_rejects_path_like_keys(tmp_path: Path) -> None:
    resolver = TemplateResolver(_templates(tmp_path, "doc"))

    with pytest.raises(TemplateNotFoundError):
        resolver.resolve("../templates/doc")


def test_resolver_validates_suffix(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="suffix"):
        TemplateResolver(tmp_path, suffix="tsx")


def test_manifest_is_json_ready_in_registration_order() -> None:
    registry = PageRegistry()
    registry.create_page(PageDescriptor(path="/b/", template_key="blog", context={"slug": "/b/"}))
    registry.create_page(PageDescriptor(path="/a/", template_key="doc", context={"slug": "/a/"}))

    assert registry.to_manifest() == [
        {"path": "/b/", "template_key": "blog", "component": None, "context": {"slug": "/b/"}},
        {"path": "/a/", "template_key": "doc", "component": None, "context": {"slug": "/a/"}},
    ]
