"""Canonical data structures shared by discovery, derivation, and page registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ContentKind(Enum):
    MARKDOWN = "MarkdownRemark"  # managed content type
    FILE = "File"                # source file record, parent of a markdown node
    OTHER = "Other"

    @classmethod
    def from_tag(cls, tag: str) -> "ContentKind":
        for kind in cls:
            if kind.value == tag:
                return kind
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class SourcePath:
    """Location of a content document relative to the content root."""

    relative_path: str
    absolute_path: str


@dataclass(frozen=True, slots=True)
class DerivedFields:
    slug: str
    layout: str


@dataclass(slots=True)
class ContentNode:
    """One indexed record: a source file or a parsed content document."""

    id: str
    kind: ContentKind
    front_matter: dict[str, Any] = field(default_factory=dict)
    parent_id: str | None = None
    source: SourcePath | None = None
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class PageDescriptor:
    """A request to materialize one page at a path using a named template."""

    path: str
    template_key: str
    context: dict[str, Any] = field(default_factory=dict)
    component: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "template_key": self.template_key,
            "component": self.component,
            "context": self.context,
        }


@dataclass(slots=True)
class ContentError(Exception):
    """Domain error for unreadable or malformed content documents."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"
