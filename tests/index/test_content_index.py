from __future__ import annotations

from pathlib import Path

from sitebuild.content.models import ContentKind, ContentNode, SourcePath
from sitebuild.index.repository import ContentIndex


def _markdown_pair(index: ContentIndex, number: int) -> ContentNode:
    relative = f"posts/post-{number:04d}.md"
    parent = ContentNode(
        id=f"file-{number}",
        kind=ContentKind.FILE,
        source=SourcePath(relative_path=relative, absolute_path=f"/site/{relative}"),
    )
    node = ContentNode(id=f"md-{number}", kind=ContentKind.MARKDOWN, parent_id=parent.id)
    index.create_node(parent)
    index.create_node(node)
    return node


def test_get_node_round_trips_source_and_front_matter(tmp_path: Path) -> None:
    with ContentIndex(tmp_path / "content.db") as index:
        parent = ContentNode(
            id="file-1",
            kind=ContentKind.FILE,
            source=SourcePath(relative_path="docs/index.md", absolute_path="/site/docs/index.md"),
        )
        child = ContentNode(
            id="md-1",
            kind=ContentKind.MARKDOWN,
            parent_id="file-1",
            front_matter={"permalink": "/start/", "tags": ["a", "b"]},
        )
        index.create_node(parent)
        index.create_node(child)

        loaded_parent = index.get_node("file-1")
        loaded_child = index.get_node("md-1")

    assert loaded_parent is not None
    assert loaded_parent.source == parent.source
    assert loaded_child is not None
    assert loaded_child.kind is ContentKind.MARKDOWN
    assert loaded_child.front_matter == {"permalink": "/start/", "tags": ["a", "b"]}
    assert loaded_child.source is None


def test_get_node_returns_none_for_unknown_id() -> None:
    with ContentIndex() as index:
        assert index.get_node("nope") is None


def test_create_node_field_is_idempotent_for_same_name() -> None:
    with ContentIndex() as index:
        node = _markdown_pair(index, 1)
        index.create_node_field(node, "slug", "/blog/a/")
        index.create_node_field(node, "slug", "/blog/a/")

        stored = index.get_node(node.id)
        row = index.connection.execute("SELECT COUNT(*) AS c FROM node_fields").fetchone()

    assert stored is not None
    assert stored.fields == {"slug": "/blog/a/"}
    assert int(row["c"]) == 1
    assert node.fields == {"slug": "/blog/a/"}


def test_query_projects_fields_in_index_order() -> None:
    with ContentIndex() as index:
        for number in range(3):
            node = _markdown_pair(index, number)
            index.create_node_field(node, "slug", f"/blog/{number}/")
            index.create_node_field(node, "layout", "blog")

        result = index.query_page_fields()

    assert result.ok
    assert result.errors is None
    assert result.total_count == 3
    assert result.data is not None
    assert [row.slug for row in result.data] == ["/blog/0/", "/blog/1/", "/blog/2/"]
    assert {row.layout for row in result.data} == {"blog"}


def test_query_reports_nodes_missing_derived_fields() -> None:
    with ContentIndex() as index:
        complete = _markdown_pair(index, 1)
        index.create_node_field(complete, "slug", "/blog/1/")
        index.create_node_field(complete, "layout", "blog")
        partial = _markdown_pair(index, 2)
        index.create_node_field(partial, "slug", "/blog/2/")

        result = index.query_page_fields()

    assert result.data is None
    assert result.errors == ["Node md-2 is missing derived field(s): layout"]


def test_query_caps_rows_at_limit_and_reports_total() -> None:
    with ContentIndex() as index:
        for number in range(1001):
            node = _markdown_pair(index, number)
            index.create_node_field(node, "slug", f"/blog/{number}/")
            index.create_node_field(node, "layout", "blog")

        result = index.query_page_fields()

    assert result.data is not None
    assert len(result.data) == 1000
    assert result.total_count == 1001
    assert result.data[-1].slug == "/blog/999/"


def test_query_with_non_positive_limit_returns_errors() -> None:
    with ContentIndex() as index:
        result = index.query_page_fields(limit=0)

    assert result.data is None
    assert result.errors == ["limit must be positive"]


def test_reset_clears_nodes_and_fields() -> None:
    with ContentIndex() as index:
        node = _markdown_pair(index, 1)
        index.create_node_field(node, "slug", "/blog/1/")
        index.reset()

        assert index.count_nodes() == 0
        assert index.get_node(node.id) is None
