"""
Hacks: the projects teams build.

The hack ID is the slug of its name, so a hack has no mutable
attributes; a PATCH is validated and otherwise changes nothing.  The
team a hack belongs to is found by reverse lookup over team entries.
"""

import logging
from typing import Any, Optional

from ..core.db import Database
from ..schemas.hack import HackCreateDocument, HackUpdateDocument
from ..schemas.jsonapi import parse_document, relationship_ids, require_id, require_no_id, require_type
from .common import (
    collection_document,
    insert,
    make_slug,
    relationship_document,
    require_one,
    resource_document,
    select_all,
)
from .hack_challenge_service import HackChallengeService


logger = logging.getLogger(__name__)

INCLUDE = ("team", "challenges")


class HackService:
    """Service for the hacks collection."""

    @classmethod
    async def list_hacks(cls, db: Database, name_filter: Optional[str] = None) -> dict:
        conn = db.get_connection()
        try:
            return collection_document(conn, "hacks", select_all(conn, "hacks", name_filter), INCLUDE)
        finally:
            conn.close()

    @classmethod
    async def get_hack(cls, db: Database, hackid: str) -> dict:
        conn = db.get_connection()
        try:
            return resource_document(conn, "hacks", require_one(conn, "hacks", hackid), INCLUDE)
        finally:
            conn.close()

    @classmethod
    async def get_hack_relationship(cls, db: Database, hackid: str, name: str) -> dict:
        """Relationship document for ``team`` or ``challenges``."""
        conn = db.get_connection()
        try:
            return relationship_document(conn, "hacks", require_one(conn, "hacks", hackid), name)
        finally:
            conn.close()

    @classmethod
    async def create_hack(cls, db: Database, broadcaster, payload: Any) -> dict:
        doc = parse_document(HackCreateDocument, payload)
        require_type(doc.data, "hacks")
        require_no_id(doc.data)
        name = doc.data.attributes.name
        hackid = make_slug(name)
        challenge_ids = relationship_ids(doc.data.relationships, "challenges", "challenges")

        conn = db.get_connection()
        try:
            challenges = HackChallengeService.validate_new(conn, None, challenge_ids)
            hack_id = insert(conn, "INSERT INTO hacks (hackid, name) VALUES (?, ?)", (hackid, name))
            HackChallengeService.append(conn, hack_id, challenges)
            conn.commit()
            document = resource_document(conn, "hacks", require_one(conn, "hacks", hackid))
        finally:
            conn.close()

        logger.info('Created hack "%s"', hackid)
        broadcaster.trigger("hacks_add", {"hackid": hackid, "name": name})
        return document

    @classmethod
    async def update_hack(cls, db: Database, broadcaster, hackid: str, payload: Any) -> None:
        doc = parse_document(HackUpdateDocument, payload)
        require_type(doc.data, "hacks")
        require_id(doc.data, hackid)
        conn = db.get_connection()
        try:
            require_one(conn, "hacks", hackid)
        finally:
            conn.close()

    @classmethod
    async def delete_hack(cls, db: Database, broadcaster, hackid: str) -> None:
        conn = db.get_connection()
        try:
            hack = require_one(conn, "hacks", hackid)
            conn.execute("DELETE FROM hack_challenges WHERE hack_id = ?", (hack["id"],))
            conn.execute("DELETE FROM hacks WHERE id = ?", (hack["id"],))
            conn.commit()
        finally:
            conn.close()

        logger.info('Deleted hack "%s"', hackid)
        broadcaster.trigger("hacks_delete", {"hackid": hackid, "name": hack["name"]})
