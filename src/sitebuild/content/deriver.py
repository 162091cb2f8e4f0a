"""Slug and layout derivation for managed Markdown content nodes.

Every managed node receives both ``slug`` and ``layout`` fields, even when a
value would otherwise be missing, so that downstream queries see a consistent
field shape across the whole node set.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Protocol

from sitebuild.content.models import ContentKind, ContentNode, DerivedFields, SourcePath


LOGGER = logging.getLogger(__name__)

DOCS_SEGMENT = "/docs/"
DOCS_PREFIX = "/docs/"
BLOG_PREFIX = "/blog/"
DEFAULT_DOC_LAYOUT = "doc"
DEFAULT_BLOG_LAYOUT = "blog"
INDEX_DOCUMENT = "index.md"
MARKDOWN_SUFFIX = ".md"

PERMALINK_KEY = "permalink"
LAYOUT_KEY = "configuredLayout"


class FieldRegistrar(Protocol):
    """Narrow capability: attach a named derived field to a node."""

    def create_node_field(self, node: ContentNode, name: str, value: str) -> None:
        ...


NodeLookup = Callable[[str], ContentNode | None]


def _optional_text(front_matter: Mapping[str, Any], key: str) -> str | None:
    value = front_matter.get(key)
    if value is None or value is False:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text != "" else None


def _require_path(value: str | None, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    return value


def derive_fields(front_matter: Mapping[str, Any], source: SourcePath) -> DerivedFields:
    """Compute the canonical slug and layout for one Markdown document."""

    absolute_path = _require_path(source.absolute_path, "absolute_path").replace("\\", "/")
    relative_path = _require_path(source.relative_path, "relative_path").replace("\\", "/")
    configured_layout = _optional_text(front_matter, LAYOUT_KEY)

    if DOCS_SEGMENT in absolute_path:
        if relative_path.endswith(INDEX_DOCUMENT):
            slug = DOCS_PREFIX
        else:
            slug = f"{DOCS_PREFIX}{relative_path}"
        layout = configured_layout or DEFAULT_DOC_LAYOUT
    else:
        slug = f"{BLOG_PREFIX}{relative_path}"
        layout = configured_layout or DEFAULT_BLOG_LAYOUT

    permalink = _optional_text(front_matter, PERMALINK_KEY)
    if permalink is not None:
        return DerivedFields(slug=permalink, layout=layout)

    if slug.endswith(MARKDOWN_SUFFIX):
        slug = slug[: -len(MARKDOWN_SUFFIX)] + "/"
    return DerivedFields(slug=slug, layout=layout)


def _on_markdown_node(node: ContentNode, registrar: FieldRegistrar, get_node: NodeLookup) -> None:
    if node.parent_id is None:
        raise ValueError(f"Markdown node {node.id} has no parent file node")
    parent = get_node(node.parent_id)
    if parent is None or parent.source is None:
        raise ValueError(f"Parent file node {node.parent_id} has no source path")

    derived = derive_fields(node.front_matter, parent.source)
    # Used to generate the URL for this content.
    registrar.create_node_field(node, "slug", derived.slug)
    # Used to select the page template.
    registrar.create_node_field(node, "layout", derived.layout)
    LOGGER.debug("Derived fields for %s: slug=%s layout=%s", node.id, derived.slug, derived.layout)


def _pass_through(node: ContentNode, registrar: FieldRegistrar, get_node: NodeLookup) -> None:
    return None


_NODE_HANDLERS: dict[ContentKind, Callable[[ContentNode, FieldRegistrar, NodeLookup], None]] = {
    ContentKind.MARKDOWN: _on_markdown_node,
    ContentKind.FILE: _pass_through,
    ContentKind.OTHER: _pass_through,
}


def on_create_node(node: ContentNode, registrar: FieldRegistrar, get_node: NodeLookup) -> None:
    """Node-creation hook: attach derived fields to managed nodes, ignore the rest."""

    handler = _NODE_HANDLERS[node.kind]
    handler(node, registrar, get_node)
