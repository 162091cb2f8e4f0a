"""Content index over SQLite: node storage, derived fields, and page queries."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
import sqlite3

from sitebuild.content.models import ContentKind, ContentNode, SourcePath
from sitebuild.index.schema import apply_runtime_pragmas, ensure_schema, reset_schema


DEFAULT_QUERY_LIMIT = 1000


@dataclass(frozen=True, slots=True)
class PageFieldsRow:
    node_id: str
    slug: str
    layout: str


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Either ``data`` with ``errors=None`` or ``data=None`` with a non-empty ``errors``."""

    data: list[PageFieldsRow] | None
    errors: list[str] | None = None
    total_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


class ContentIndex:
    """Thin transactional layer over the content index schema."""

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self._db_path = str(db_path)
        self._connection = sqlite3.connect(self._db_path)
        self._connection.row_factory = sqlite3.Row
        apply_runtime_pragmas(self._connection)
        ensure_schema(self._connection)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "ContentIndex":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def reset(self) -> None:
        reset_schema(self._connection)

    def create_node(self, node: ContentNode) -> None:
        source = node.source
        with self._connection:
            self._connection.execute(
                """
                INSERT INTO nodes(id, kind, parent_id, relative_path, absolute_path, front_matter)
                VALUES(?, ?, ?, ?, ?, ?)
                """,
                (
                    node.id,
                    node.kind.value,
                    node.parent_id,
                    source.relative_path if source is not None else None,
                    source.absolute_path if source is not None else None,
                    json.dumps(node.front_matter, ensure_ascii=False, default=str),
                ),
            )

    def get_node(self, node_id: str) -> ContentNode | None:
        row = self._connection.execute(
            """
            SELECT id, kind, parent_id, relative_path, absolute_path, front_matter
            FROM nodes
            WHERE id = ?
            """,
            (node_id,),
        ).fetchone()
        if row is None:
            return None

        source = None
        if row["relative_path"] is not None and row["absolute_path"] is not None:
            source = SourcePath(relative_path=row["relative_path"], absolute_path=row["absolute_path"])

        fields = {
            field_row["name"]: field_row["value"]
            for field_row in self._connection.execute(
                "SELECT name, value FROM node_fields WHERE node_id = ?",
                (node_id,),
            ).fetchall()
        }
        return ContentNode(
            id=row["id"],
            kind=ContentKind.from_tag(row["kind"]),
            front_matter=json.loads(row["front_matter"]),
            parent_id=row["parent_id"],
            source=source,
            fields=fields,
        )

    def create_node_field(self, node: ContentNode, name: str, value: str) -> None:
        """Attach ``value`` under ``name``; repeating the call overwrites in place."""

        if not name:
            raise ValueError("Field name cannot be empty")
        if value is None:
            raise ValueError(f"Field {name} cannot be null")

        with self._connection:
            self._connection.execute(
                """
                INSERT INTO node_fields(node_id, name, value)
                VALUES(?, ?, ?)
                ON CONFLICT(node_id, name) DO UPDATE SET value=excluded.value
                """,
                (node.id, name, value),
            )
        node.fields[name] = value

    def count_nodes(self, kind: ContentKind = ContentKind.MARKDOWN) -> int:
        row = self._connection.execute(
            "SELECT COUNT(*) AS c FROM nodes WHERE kind = ?",
            (kind.value,),
        ).fetchone()
        return int(row["c"]) if row is not None else 0

    def query_page_fields(self, *, limit: int = DEFAULT_QUERY_LIMIT) -> QueryResult:
        """Project ``slug`` and ``layout`` for up to ``limit`` managed nodes in index order."""

        if limit <= 0:
            return QueryResult(data=None, errors=["limit must be positive"])

        try:
            total_count = self.count_nodes(ContentKind.MARKDOWN)
            rows = self._connection.execute(
                """
                SELECT
                    n.id AS node_id,
                    s.value AS slug,
                    l.value AS layout
                FROM nodes n
                LEFT JOIN node_fields s ON s.node_id = n.id AND s.name = 'slug'
                LEFT JOIN node_fields l ON l.node_id = n.id AND l.name = 'layout'
                WHERE n.kind = ?
                ORDER BY n.seq ASC
                LIMIT ?
                """,
                (ContentKind.MARKDOWN.value, limit),
            ).fetchall()
        except sqlite3.Error as exc:
            return QueryResult(data=None, errors=[f"Content query failed: {exc}"])

        errors: list[str] = []
        data: list[PageFieldsRow] = []
        for row in rows:
            missing = [name for name in ("slug", "layout") if row[name] is None]
            if missing:
                errors.append(f"Node {row['node_id']} is missing derived field(s): {', '.join(missing)}")
                continue
            data.append(PageFieldsRow(node_id=row["node_id"], slug=row["slug"], layout=row["layout"]))

        if errors:
            return QueryResult(data=None, errors=errors, total_count=total_count)
        return QueryResult(data=data, errors=None, total_count=total_count)
