"""
Teams: a named group of users entering hacks.

The team ID is the slug of its name and never changes, so ``name`` is
fixed at creation; only ``motto`` may be updated.  A team may be created
with its initial members and entries, which are validated with the same
rules as ``POST /teams/:id/members`` and ``POST /teams/:id/entries``
before anything is written.  Deleting a team removes its member and entry
lists, which frees those users and hacks for other teams.
"""

import logging
from typing import Any, Optional

from ..core.db import Database
from ..schemas.jsonapi import parse_document, relationship_ids, require_id, require_no_id, require_type
from ..schemas.team import TeamCreateDocument, TeamUpdateDocument
from .common import (
    collection_document,
    insert,
    make_slug,
    relationship_document,
    require_one,
    resource_document,
    select_all,
)
from .team_entry_service import TeamEntryService
from .team_member_service import TeamMemberService


logger = logging.getLogger(__name__)

INCLUDE = ("members", "entries")


class TeamService:
    """Service for the teams collection."""

    @classmethod
    async def list_teams(cls, db: Database, name_filter: Optional[str] = None) -> dict:
        conn = db.get_connection()
        try:
            return collection_document(conn, "teams", select_all(conn, "teams", name_filter), INCLUDE)
        finally:
            conn.close()

    @classmethod
    async def get_team(cls, db: Database, teamid: str) -> dict:
        conn = db.get_connection()
        try:
            return resource_document(conn, "teams", require_one(conn, "teams", teamid), INCLUDE)
        finally:
            conn.close()

    @classmethod
    async def get_team_relationship(cls, db: Database, teamid: str, name: str) -> dict:
        """Relationship document for ``members`` or ``entries``."""
        conn = db.get_connection()
        try:
            return relationship_document(conn, "teams", require_one(conn, "teams", teamid), name)
        finally:
            conn.close()

    @classmethod
    async def create_team(cls, db: Database, broadcaster, payload: Any) -> dict:
        doc = parse_document(TeamCreateDocument, payload)
        require_type(doc.data, "teams")
        require_no_id(doc.data)
        name = doc.data.attributes.name
        motto = doc.data.attributes.motto
        teamid = make_slug(name)
        member_ids = relationship_ids(doc.data.relationships, "members", "users")
        entry_ids = relationship_ids(doc.data.relationships, "entries", "hacks")

        conn = db.get_connection()
        try:
            members = TeamMemberService.validate_new(conn, None, member_ids)
            entries = TeamEntryService.validate_new(conn, None, entry_ids)
            team_id = insert(
                conn,
                "INSERT INTO teams (teamid, name, motto) VALUES (?, ?, ?)",
                (teamid, name, motto),
            )
            TeamMemberService.append(conn, team_id, members)
            TeamEntryService.append(conn, team_id, entries)
            conn.commit()
            document = resource_document(conn, "teams", require_one(conn, "teams", teamid))
        finally:
            conn.close()

        logger.info('Created team "%s" with %d members', teamid, len(members))
        broadcaster.trigger(
            "teams_add",
            {
                "teamid": teamid,
                "name": name,
                "motto": motto,
                "members": [{"userid": m["userid"], "name": m["name"]} for m in members],
                "entries": [{"hackid": e["hackid"], "name": e["name"]} for e in entries],
            },
        )
        return document

    @classmethod
    async def update_team(cls, db: Database, broadcaster, teamid: str, payload: Any) -> None:
        """Change the motto.  A ``name`` in the document is ignored."""
        doc = parse_document(TeamUpdateDocument, payload)
        require_type(doc.data, "teams")
        require_id(doc.data, teamid)
        attributes = doc.data.attributes

        conn = db.get_connection()
        try:
            team = require_one(conn, "teams", teamid)
            if "motto" not in attributes.model_fields_set or attributes.motto == team["motto"]:
                return
            conn.execute("UPDATE teams SET motto = ? WHERE id = ?", (attributes.motto, team["id"]))
            conn.commit()
        finally:
            conn.close()

        logger.info('Updated motto of team "%s"', teamid)
        broadcaster.trigger("teams_update", {"teamid": teamid, "name": team["name"], "motto": attributes.motto})

    @classmethod
    async def delete_team(cls, db: Database, broadcaster, teamid: str) -> None:
        conn = db.get_connection()
        try:
            team = require_one(conn, "teams", teamid)
            conn.execute("DELETE FROM team_members WHERE team_id = ?", (team["id"],))
            conn.execute("DELETE FROM team_entries WHERE team_id = ?", (team["id"],))
            conn.execute("DELETE FROM teams WHERE id = ?", (team["id"],))
            conn.commit()
        finally:
            conn.close()

        logger.info('Deleted team "%s"', teamid)
        broadcaster.trigger("teams_delete", {"teamid": teamid, "name": team["name"]})
