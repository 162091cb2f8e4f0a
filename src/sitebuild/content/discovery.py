"""Content discovery: turn Markdown files under a root into content nodes."""

from __future__ import annotations

import hashlib
from pathlib import Path

from sitebuild.content.front_matter import FrontMatterError, split_front_matter
from sitebuild.content.models import ContentError, ContentKind, ContentNode, SourcePath

_SUPPORTED_SUFFIXES = {".md", ".markdown"}


def _is_supported(path: Path) -> bool:
    return path.suffix.lower() in _SUPPORTED_SUFFIXES and not path.name.startswith(".")


def collect_markdown_files(content_root: Path) -> list[Path]:
    if content_root.is_file():
        return [content_root] if _is_supported(content_root) else []
    if content_root.is_dir():
        return sorted(path for path in content_root.rglob("*") if path.is_file() and _is_supported(path))
    return []


def _node_id(prefix: str, relative_path: str) -> str:
    digest = hashlib.sha1(relative_path.encode("utf-8")).hexdigest()[:16]
    return f"{prefix}-{digest}"


def _source_path(file_path: Path, content_root: Path) -> SourcePath:
    # Symlinks are addressed by their own location under the root, not their target.
    base = content_root.parent if content_root.is_file() else content_root
    relative = file_path.relative_to(base)
    return SourcePath(relative_path=relative.as_posix(), absolute_path=file_path.absolute().as_posix())


def read_markdown_nodes(file_path: Path, content_root: Path) -> tuple[ContentNode, ContentNode]:
    """Return the (file node, markdown node) pair for one document."""

    source = _source_path(file_path, content_root)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentError(source.absolute_path, f"Failed to read content file: {exc}") from exc

    try:
        front_matter, _ = split_front_matter(text)
    except FrontMatterError as exc:
        raise ContentError(source.absolute_path, str(exc)) from exc

    file_node = ContentNode(
        id=_node_id("file", source.relative_path),
        kind=ContentKind.FILE,
        source=source,
    )
    markdown_node = ContentNode(
        id=_node_id("markdown", source.relative_path),
        kind=ContentKind.MARKDOWN,
        front_matter=front_matter,
        parent_id=file_node.id,
    )
    return file_node, markdown_node


def discover_content(content_root: str | Path) -> list[ContentNode]:
    """Discover documents in deterministic path order, parents before children."""

    root = Path(content_root)
    nodes: list[ContentNode] = []
    for file_path in collect_markdown_files(root):
        nodes.extend(read_markdown_nodes(file_path, root))
    return nodes
