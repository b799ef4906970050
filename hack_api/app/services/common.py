"""
Query and document helpers shared by the collection services.

Every collection table is named after its resource type and keyed in
URLs by the external key column listed in ``RESOURCE_TYPES``.
"""

import re
import sqlite3
from typing import Dict, Iterable, List, Optional, Sequence

from slugify import slugify

from ..core.db import is_unique_violation
from ..core.errors import BadRequestError, ConflictError, NotFoundError
from .relationships import RELATIONSHIPS, RelationshipResolver
from .serializer import RESOURCE_TYPES, TopLevelDocument, external_id, resource_link, serialize_top_level


def make_slug(name: str) -> str:
    """Derive a resource id from its name: ``"Best Hack"`` becomes ``"best-hack"``."""
    slug = slugify(name)
    if not slug:
        raise BadRequestError("The name must contain at least one letter or digit.")
    return slug


def select_all(conn: sqlite3.Connection, resource_type: str, name_filter: Optional[str] = None) -> List[sqlite3.Row]:
    """Return every row of ``resource_type`` ordered by external id.

    ``name_filter`` is matched as a case-insensitive substring of ``name``;
    it is never interpreted as a pattern.
    """
    key = RESOURCE_TYPES[resource_type].key
    sql = f"SELECT * FROM {resource_type}"
    params: list = []
    if name_filter:
        sql += " WHERE name REGEXP ?"
        params.append(re.escape(name_filter))
    sql += f" ORDER BY {key}"
    return conn.execute(sql, params).fetchall()


def select_one(conn: sqlite3.Connection, resource_type: str, resource_id: str) -> Optional[sqlite3.Row]:
    key = RESOURCE_TYPES[resource_type].key
    return conn.execute(f"SELECT * FROM {resource_type} WHERE {key} = ?", (resource_id,)).fetchone()


def require_one(conn: sqlite3.Connection, resource_type: str, resource_id: str) -> sqlite3.Row:
    row = select_one(conn, resource_type, resource_id)
    if row is None:
        raise NotFoundError()
    return row


def select_many(conn: sqlite3.Connection, resource_type: str, resource_ids: Sequence[str]) -> Dict[str, sqlite3.Row]:
    """Map each existing external id in ``resource_ids`` to its row."""
    if not resource_ids:
        return {}
    key = RESOURCE_TYPES[resource_type].key
    placeholders = ", ".join("?" for _ in resource_ids)
    rows = conn.execute(
        f"SELECT * FROM {resource_type} WHERE {key} IN ({placeholders})", list(resource_ids)
    ).fetchall()
    return {row[key]: row for row in rows}


def insert(conn: sqlite3.Connection, sql: str, params: Iterable) -> int:
    """Execute an INSERT and return the new row id; duplicate keys are a 409."""
    try:
        return conn.execute(sql, tuple(params)).lastrowid
    except sqlite3.IntegrityError as exc:
        if is_unique_violation(exc):
            raise ConflictError() from exc
        raise


def require_distinct(resource_ids: Sequence[str]) -> None:
    if len(set(resource_ids)) != len(resource_ids):
        raise BadRequestError("The same resource is listed more than once.")


def collection_document(
    conn: sqlite3.Connection,
    resource_type: str,
    rows: Sequence[sqlite3.Row],
    include: Sequence[str] = (),
) -> TopLevelDocument:
    data, included = RelationshipResolver(conn).compose(resource_type, rows, include)
    return serialize_top_level(data, f"/{resource_type}", included if include else None)


def resource_document(
    conn: sqlite3.Connection,
    resource_type: str,
    row: sqlite3.Row,
    include: Sequence[str] = (),
) -> TopLevelDocument:
    data, included = RelationshipResolver(conn).compose(resource_type, [row], include)
    return serialize_top_level(
        data[0],
        resource_link(resource_type, external_id(row, resource_type)),
        included if include else None,
    )


def relationship_document(
    conn: sqlite3.Connection,
    resource_type: str,
    row: sqlite3.Row,
    name: str,
) -> TopLevelDocument:
    """Linkage of one relationship with the related resources in ``included``."""
    linkage, related = RelationshipResolver(conn).compose_relationship(resource_type, row, name)
    link = resource_link(
        resource_type,
        external_id(row, resource_type),
        RELATIONSHIPS[resource_type][name].link_suffix,
    )
    return serialize_top_level(linkage, link, related)
