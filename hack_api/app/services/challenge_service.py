"""Challenges: the prize categories hacks compete in.  Managed by admins."""

import logging
from typing import Any, Optional

from ..core.db import Database
from ..schemas.challenge import ChallengeCreateDocument, ChallengeUpdateDocument
from ..schemas.jsonapi import parse_document, require_id, require_no_id, require_type
from .common import collection_document, insert, make_slug, require_one, resource_document, select_all


logger = logging.getLogger(__name__)


class ChallengeService:

    @classmethod
    async def list_challenges(cls, db: Database, name_filter: Optional[str] = None) -> dict:
        conn = db.get_connection()
        try:
            return collection_document(conn, "challenges", select_all(conn, "challenges", name_filter))
        finally:
            conn.close()

    @classmethod
    async def get_challenge(cls, db: Database, challengeid: str) -> dict:
        conn = db.get_connection()
        try:
            return resource_document(conn, "challenges", require_one(conn, "challenges", challengeid))
        finally:
            conn.close()

    @classmethod
    async def create_challenge(cls, db: Database, broadcaster, payload: Any) -> dict:
        doc = parse_document(ChallengeCreateDocument, payload)
        require_type(doc.data, "challenges")
        require_no_id(doc.data)
        name = doc.data.attributes.name
        challengeid = make_slug(name)

        conn = db.get_connection()
        try:
            insert(conn, "INSERT INTO challenges (challengeid, name) VALUES (?, ?)", (challengeid, name))
            conn.commit()
            document = resource_document(conn, "challenges", require_one(conn, "challenges", challengeid))
        finally:
            conn.close()

        logger.info('Created challenge "%s"', challengeid)
        broadcaster.trigger("challenges_add", {"challengeid": challengeid, "name": name})
        return document

    @classmethod
    async def update_challenge(cls, db: Database, broadcaster, challengeid: str, payload: Any) -> None:
        # The name is the source of the ID and cannot change.
        doc = parse_document(ChallengeUpdateDocument, payload)
        require_type(doc.data, "challenges")
        require_id(doc.data, challengeid)
        conn = db.get_connection()
        try:
            require_one(conn, "challenges", challengeid)
        finally:
            conn.close()

    @classmethod
    async def delete_challenge(cls, db: Database, broadcaster, challengeid: str) -> None:
        conn = db.get_connection()
        try:
            challenge = require_one(conn, "challenges", challengeid)
            conn.execute("DELETE FROM challenges WHERE id = ?", (challenge["id"],))
            conn.commit()
        finally:
            conn.close()

        logger.info('Deleted challenge "%s"', challengeid)
        broadcaster.trigger("challenges_delete", {"challengeid": challengeid, "name": challenge["name"]})
