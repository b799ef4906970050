"""
Attendees: people registered for the event.

An attendee record ties a registration email (the attendee ID) to the
Slack account the person uses, so it doubles as the allow-list consulted
by the authorization gate.  Only admins may read or change attendees.
"""

import logging
import sqlite3
from typing import Any

from ..core.db import Database
from ..schemas.attendee import AttendeeCreateDocument
from ..schemas.jsonapi import parse_document, require_id, require_type
from .common import collection_document, insert, require_one, resource_document, select_all


logger = logging.getLogger(__name__)


class AttendeeService:
    """Service for managing attendees and their Slack links."""

    @classmethod
    async def exists(cls, db: Database, attendeeid: str) -> bool:
        conn = db.get_connection()
        try:
            row = conn.execute("SELECT 1 FROM attendees WHERE attendeeid = ?", (attendeeid,)).fetchone()
            return row is not None
        finally:
            conn.close()

    @classmethod
    async def exists_by_slackid(cls, db: Database, slackid: str) -> bool:
        conn = db.get_connection()
        try:
            row = conn.execute("SELECT 1 FROM attendees WHERE slackid = ?", (slackid,)).fetchone()
            return row is not None
        finally:
            conn.close()

    @classmethod
    async def link_slackid(cls, db: Database, attendeeid: str, slackid: str) -> bool:
        """Bind ``slackid`` to the attendee ``attendeeid`` if it has no Slack ID yet.

        Returns False when there is no such unlinked attendee or when the
        Slack ID already belongs to another attendee.  An existing link is
        never overwritten.
        """
        conn = db.get_connection()
        try:
            try:
                cursor = conn.execute(
                    "UPDATE attendees SET slackid = ? WHERE attendeeid = ? AND slackid IS NULL",
                    (slackid, attendeeid),
                )
            except sqlite3.IntegrityError:
                logger.warning('Slack ID "%s" is already linked to another attendee', slackid)
                return False
            conn.commit()
            if cursor.rowcount != 1:
                return False
            logger.info('Linked attendee "%s" to Slack ID "%s"', attendeeid, slackid)
            return True
        finally:
            conn.close()

    @classmethod
    async def list_attendees(cls, db: Database) -> dict:
        conn = db.get_connection()
        try:
            return collection_document(conn, "attendees", select_all(conn, "attendees"))
        finally:
            conn.close()

    @classmethod
    async def get_attendee(cls, db: Database, attendeeid: str) -> dict:
        conn = db.get_connection()
        try:
            return resource_document(conn, "attendees", require_one(conn, "attendees", attendeeid))
        finally:
            conn.close()

    @classmethod
    async def create_attendee(cls, db: Database, broadcaster, payload: Any) -> dict:
        """Register an attendee.  The client supplies the attendee ID."""
        doc = parse_document(AttendeeCreateDocument, payload)
        require_type(doc.data, "attendees")
        attendeeid = require_id(doc.data)
        slackid = doc.data.attributes.slackid

        conn = db.get_connection()
        try:
            insert(
                conn,
                "INSERT INTO attendees (attendeeid, slackid) VALUES (?, ?)",
                (attendeeid, slackid),
            )
            conn.commit()
            document = resource_document(conn, "attendees", require_one(conn, "attendees", attendeeid))
        finally:
            conn.close()

        logger.info('Created attendee "%s"', attendeeid)
        broadcaster.trigger("attendees_add", {"attendeeid": attendeeid})
        return document

    @classmethod
    async def delete_attendee(cls, db: Database, broadcaster, attendeeid: str) -> None:
        conn = db.get_connection()
        try:
            row = require_one(conn, "attendees", attendeeid)
            conn.execute("DELETE FROM attendees WHERE id = ?", (row["id"],))
            conn.commit()
        finally:
            conn.close()

        logger.info('Deleted attendee "%s"', attendeeid)
        broadcaster.trigger("attendees_delete", {"attendeeid": attendeeid})
