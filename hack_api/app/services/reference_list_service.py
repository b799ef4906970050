"""
Ordered reference lists owned by a document.

A team owns its list of members (users) and its list of entries (hacks);
a hack owns its list of challenges.  Each list lives in its own table of
``(owner, target, position)`` rows.  ``ReferenceListService`` holds the
add/remove logic common to all three; subclasses only declare the tables,
the types involved and the event names.

Adding validates the whole batch before writing anything:

1. no target may already be in this owner's list;
2. every target must exist;
3. for exclusive lists, no target may be in any owner's list.

Each check failing is a 400 with a detail naming the problem.  On success
the targets are appended in request order and one event is emitted per
target.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import Database
from ..core.errors import BadRequestError
from ..schemas.jsonapi import RelationshipDocument, identifiers_of_type, parse_document
from .common import require_distinct, require_one, select_many
from .serializer import RESOURCE_TYPES


logger = logging.getLogger(__name__)


class ReferenceListService:
    owner_type: str = ""
    target_type: str = ""
    table: str = ""
    owner_column: str = ""
    target_column: str = ""
    # When True a target may appear in a single owner's list only.
    exclusive: bool = False
    event_prefix: str = ""
    event_item: str = ""

    already_listed_detail = "One or more of the specified resources are already listed."
    not_found_detail = "One or more of the specified resources could not be found."
    taken_detail = "One or more of the specified resources are already taken."

    @classmethod
    def current_targets(cls, conn: sqlite3.Connection, owner_id: int) -> List[sqlite3.Row]:
        """Targets currently listed by ``owner_id`` that still exist, in order."""
        return conn.execute(
            f"SELECT t.* FROM {cls.table} r JOIN {cls.target_type} t ON t.id = r.{cls.target_column} "
            f"WHERE r.{cls.owner_column} = ? ORDER BY r.position",
            (owner_id,),
        ).fetchall()

    @classmethod
    def validate_new(
        cls,
        conn: sqlite3.Connection,
        owner_id: Optional[int],
        target_ids: List[str],
    ) -> List[sqlite3.Row]:
        """Check ``target_ids`` may be appended and return their rows in request order.

        ``owner_id`` is None while the owner itself is still being created.
        """
        require_distinct(target_ids)
        key = RESOURCE_TYPES[cls.target_type].key

        if owner_id is not None:
            listed = {row[key] for row in cls.current_targets(conn, owner_id)}
            if any(target_id in listed for target_id in target_ids):
                raise BadRequestError(cls.already_listed_detail)

        found = select_many(conn, cls.target_type, target_ids)
        if len(found) != len(target_ids):
            raise BadRequestError(cls.not_found_detail)
        targets = [found[target_id] for target_id in target_ids]

        if cls.exclusive and targets:
            placeholders = ", ".join("?" for _ in targets)
            taken = conn.execute(
                f"SELECT 1 FROM {cls.table} WHERE {cls.target_column} IN ({placeholders}) LIMIT 1",
                [row["id"] for row in targets],
            ).fetchone()
            if taken is not None:
                raise BadRequestError(cls.taken_detail)
        return targets

    @classmethod
    def append(cls, conn: sqlite3.Connection, owner_id: int, targets: List[sqlite3.Row]) -> None:
        row = conn.execute(
            f"SELECT COALESCE(MAX(position), -1) AS last FROM {cls.table} WHERE {cls.owner_column} = ?",
            (owner_id,),
        ).fetchone()
        position = row["last"] + 1
        for offset, target in enumerate(targets):
            conn.execute(
                f"INSERT INTO {cls.table} ({cls.owner_column}, {cls.target_column}, position) VALUES (?, ?, ?)",
                (owner_id, target["id"], position + offset),
            )

    @classmethod
    def event_payload(cls, owner: sqlite3.Row, target: sqlite3.Row) -> Dict[str, Any]:
        owner_key = RESOURCE_TYPES[cls.owner_type].key
        target_key = RESOURCE_TYPES[cls.target_type].key
        return {
            owner_key: owner[owner_key],
            "name": owner["name"],
            cls.event_item: {target_key: target[target_key], "name": target["name"]},
        }

    @classmethod
    def _parse_targets(cls, payload: Any) -> List[str]:
        doc = parse_document(RelationshipDocument, payload)
        return identifiers_of_type(doc.data, cls.target_type)

    @classmethod
    async def add(cls, db: Database, broadcaster, owner_key: str, payload: Any) -> None:
        target_ids = cls._parse_targets(payload)
        conn = db.get_connection()
        try:
            owner = require_one(conn, cls.owner_type, owner_key)
            targets = cls.validate_new(conn, owner["id"], target_ids)
            cls.append(conn, owner["id"], targets)
            conn.commit()
        finally:
            conn.close()

        logger.info("%s %s: added %s", cls.owner_type, owner_key, [t[RESOURCE_TYPES[cls.target_type].key] for t in targets])
        for target in targets:
            broadcaster.trigger(f"{cls.event_prefix}_add", cls.event_payload(owner, target))

    @classmethod
    async def remove(cls, db: Database, broadcaster, owner_key: str, payload: Any) -> None:
        """Remove targets from the list; every target must currently be listed."""
        target_ids = cls._parse_targets(payload)
        require_distinct(target_ids)
        key = RESOURCE_TYPES[cls.target_type].key
        conn = db.get_connection()
        try:
            owner = require_one(conn, cls.owner_type, owner_key)
            listed = {row[key]: row for row in cls.current_targets(conn, owner["id"])}
            if any(target_id not in listed for target_id in target_ids):
                raise BadRequestError("One or more of the specified resources are not listed.")
            targets = [listed[target_id] for target_id in target_ids]
            for target in targets:
                conn.execute(
                    f"DELETE FROM {cls.table} WHERE {cls.owner_column} = ? AND {cls.target_column} = ?",
                    (owner["id"], target["id"]),
                )
            conn.commit()
        finally:
            conn.close()

        logger.info("%s %s: removed %s", cls.owner_type, owner_key, target_ids)
        for target in targets:
            broadcaster.trigger(f"{cls.event_prefix}_delete", cls.event_payload(owner, target))
