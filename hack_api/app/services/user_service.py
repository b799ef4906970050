"""
Users: participants as known to Hackbot.

A user's ID is supplied by the client (normally the Slack user ID) and
is independent of the attendee records.  The only mutable attribute is
``name``.  Deleting a user leaves any team membership row behind; it is
skipped when teams are read back.
"""

import logging
from typing import Any, Optional

from ..core.db import Database
from ..core.errors import BadRequestError
from ..schemas.jsonapi import parse_document, require_id, require_type
from ..schemas.user import UserCreateDocument, UserUpdateDocument
from .common import (
    collection_document,
    insert,
    relationship_document,
    require_one,
    resource_document,
    select_all,
)


logger = logging.getLogger(__name__)

INCLUDE = ("team", "team.members")


class UserService:
    """Service for the users collection."""

    @classmethod
    async def list_users(cls, db: Database, name_filter: Optional[str] = None) -> dict:
        conn = db.get_connection()
        try:
            return collection_document(conn, "users", select_all(conn, "users", name_filter), INCLUDE)
        finally:
            conn.close()

    @classmethod
    async def get_user(cls, db: Database, userid: str) -> dict:
        conn = db.get_connection()
        try:
            return resource_document(conn, "users", require_one(conn, "users", userid), INCLUDE)
        finally:
            conn.close()

    @classmethod
    async def get_user_team(cls, db: Database, userid: str) -> dict:
        conn = db.get_connection()
        try:
            return relationship_document(conn, "users", require_one(conn, "users", userid), "team")
        finally:
            conn.close()

    @classmethod
    async def create_user(cls, db: Database, broadcaster, payload: Any) -> dict:
        doc = parse_document(UserCreateDocument, payload)
        require_type(doc.data, "users")
        userid = require_id(doc.data)
        name = doc.data.attributes.name

        conn = db.get_connection()
        try:
            insert(conn, "INSERT INTO users (userid, name) VALUES (?, ?)", (userid, name))
            conn.commit()
            document = resource_document(conn, "users", require_one(conn, "users", userid))
        finally:
            conn.close()

        logger.info('Created user "%s"', userid)
        broadcaster.trigger("users_add", {"userid": userid, "name": name})
        return document

    @classmethod
    async def update_user(cls, db: Database, broadcaster, userid: str, payload: Any) -> None:
        """Rename a user.  A document without a name changes nothing."""
        doc = parse_document(UserUpdateDocument, payload)
        require_type(doc.data, "users")
        require_id(doc.data, userid)
        attributes = doc.data.attributes
        name = attributes.name
        if "name" in attributes.model_fields_set and (name is None or not name.strip()):
            raise BadRequestError()

        conn = db.get_connection()
        try:
            user = require_one(conn, "users", userid)
            if name is None or name == user["name"]:
                return
            conn.execute("UPDATE users SET name = ? WHERE id = ?", (name, user["id"]))
            conn.commit()
        finally:
            conn.close()

        logger.info('Renamed user "%s"', userid)
        broadcaster.trigger("users_update", {"userid": userid, "name": name})

    @classmethod
    async def delete_user(cls, db: Database, broadcaster, userid: str) -> None:
        conn = db.get_connection()
        try:
            user = require_one(conn, "users", userid)
            conn.execute("DELETE FROM users WHERE id = ?", (user["id"],))
            conn.commit()
        finally:
            conn.close()

        logger.info('Deleted user "%s"', userid)
        broadcaster.trigger("users_delete", {"userid": userid, "name": user["name"]})
