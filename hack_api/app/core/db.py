"""
SQLite database integration and simple migration system.

This module provides the ``Database`` handle used by every service:
``get_connection`` opens a connection, ``get_cursor`` wraps one in a
context manager and ``init_db`` applies migrations on application
start.

Each resource collection is a table with an opaque ``id`` (never
exposed, never reused thanks to ``AUTOINCREMENT``) and a unique
external key used in URLs.  The ordered lists a document owns (team
members, team entries, hack challenges) live in their own tables with a
``position`` column.  They deliberately carry no foreign keys: a
reference to a deleted user, hack or challenge is left in place and
skipped when read back.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import functools
import os
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS attendees (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            attendeeid TEXT NOT NULL UNIQUE,
            slackid TEXT UNIQUE
        );

        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            userid TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS teams (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            teamid TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            motto TEXT
        );

        CREATE TABLE IF NOT EXISTS hacks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            hackid TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS challenges (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            challengeid TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS team_members (
            team_id INTEGER NOT NULL,
            user_id INTEGER NOT NULL,
            position INTEGER NOT NULL,
            PRIMARY KEY (team_id, user_id)
        );

        CREATE TABLE IF NOT EXISTS team_entries (
            team_id INTEGER NOT NULL,
            hack_id INTEGER NOT NULL,
            position INTEGER NOT NULL,
            PRIMARY KEY (team_id, hack_id)
        );

        CREATE TABLE IF NOT EXISTS hack_challenges (
            hack_id INTEGER NOT NULL,
            challenge_id INTEGER NOT NULL,
            position INTEGER NOT NULL,
            PRIMARY KEY (hack_id, challenge_id)
        );
        """,
    ),
    # Migration 2: reverse lookups (which team holds this user / hack)
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_team_members_user_id ON team_members(user_id);
        CREATE INDEX IF NOT EXISTS idx_team_entries_hack_id ON team_entries(hack_id);
        """,
    ),
]


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> "re.Pattern[str]":
    return re.compile(pattern, re.IGNORECASE)


def _regexp(pattern: Optional[str], value: Optional[str]) -> bool:
    """Implementation of SQLite's ``X REGEXP Y`` operator (called as ``regexp(Y, X)``)."""
    if pattern is None or value is None:
        return False
    return _compile(pattern).search(value) is not None


def is_unique_violation(exc: Exception) -> bool:
    """Return True when ``exc`` is the store's duplicate-key error."""
    return isinstance(exc, sqlite3.IntegrityError) and "UNIQUE" in str(exc)


class Database:
    """Handle on the SQLite database file named by ``database_url``."""

    def __init__(self, database_url: str) -> None:
        self.path = self.resolve_path(database_url)

    @staticmethod
    def resolve_path(database_url: str) -> str:
        """Compute the path to the SQLite database file.

        If ``database_url`` is an absolute path, use it directly.
        Otherwise resolve it relative to the project root.
        """
        if os.path.isabs(database_url):
            return database_url
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return str((base_dir / database_url).resolve())

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        The connection uses a row factory to access columns by name and
        registers a case-insensitive ``REGEXP`` function for attribute
        filters.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.create_function("REGEXP", 2, _regexp, deterministic=True)
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Context manager that yields a cursor and closes the connection on exit."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init_db(self) -> None:
        """Initialise the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any new migrations defined in
        ``MIGRATIONS``.  If you add a new migration, append it with an
        incremented version number.
        """
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
