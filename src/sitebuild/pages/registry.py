"""Page registration with duplicate detection and template resolution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sitebuild.content.models import PageDescriptor


DEFAULT_TEMPLATE_SUFFIX = ".html"


@dataclass(slots=True)
class DuplicatePageError(ValueError):
    path: str

    def __str__(self) -> str:
        return f"Page path already registered: {self.path}"


@dataclass(slots=True)
class TemplateNotFoundError(LookupError):
    template_key: str
    path: str

    def __str__(self) -> str:
        return f"No template for layout '{self.template_key}' (expected {self.path})"


class TemplateResolver:
    """Map a template key to ``<templates_dir>/<key><suffix>``."""

    def __init__(self, templates_dir: str | Path, *, suffix: str = DEFAULT_TEMPLATE_SUFFIX) -> None:
        if not suffix.startswith("."):
            raise ValueError("template suffix must start with '.'")
        self._templates_dir = Path(templates_dir)
        self._suffix = suffix

    def candidate(self, template_key: str) -> Path:
        return (self._templates_dir / f"{template_key}{self._suffix}").resolve()

    def resolve(self, template_key: str) -> Path:
        path = self.candidate(template_key)
        if not template_key or "/" in template_key or "\\" in template_key or not path.is_file():
            raise TemplateNotFoundError(template_key=template_key, path=str(path))
        return path


class PageRegistry:
    """Collect page descriptors for one build, rejecting duplicate paths."""

    def __init__(self, resolver: TemplateResolver | None = None) -> None:
        self._resolver = resolver
        self._pages: dict[str, PageDescriptor] = {}

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, path: object) -> bool:
        return path in self._pages

    @property
    def pages(self) -> list[PageDescriptor]:
        return list(self._pages.values())

    def create_page(self, descriptor: PageDescriptor) -> None:
        if not descriptor.path:
            raise ValueError("Page path cannot be empty")
        if descriptor.path in self._pages:
            raise DuplicatePageError(path=descriptor.path)
        if self._resolver is not None and descriptor.component is None:
            descriptor.component = str(self._resolver.candidate(descriptor.template_key))
        self._pages[descriptor.path] = descriptor

    def resolve_templates(self) -> None:
        """Fail on the first page whose template does not exist on disk."""

        if self._resolver is None:
            return
        for page in self._pages.values():
            page.component = str(self._resolver.resolve(page.template_key))

    def to_manifest(self) -> list[dict[str, Any]]:
        return [page.to_dict() for page in self._pages.values()]
