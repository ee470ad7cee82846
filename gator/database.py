"""Storage of users and feeds in an SQLite database."""

from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        name TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS feeds (
        id TEXT PRIMARY KEY,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        name TEXT NOT NULL,
        url TEXT NOT NULL UNIQUE,
        user_id TEXT NOT NULL REFERENCES users (id) ON DELETE CASCADE
    )
    """,
)

_USER_COLUMNS = "id, created_at, updated_at, name"
_FEED_COLUMNS = "id, created_at, updated_at, name, url, user_id"


@dataclass(frozen=True)
class User:
    """A registered user."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    name: str


@dataclass(frozen=True)
class Feed:
    """A feed added by a user."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    name: str
    url: str
    user_id: uuid.UUID


@dataclass(frozen=True)
class FeedRow:
    """A feed together with the name of the user who added it."""

    name: str
    url: str
    user_name: str


class NotFoundError(LookupError):
    """Raised when a requested row does not exist."""


def connect(db_url):
    """Open an SQLite connection for ``db_url`` (a path or a ``sqlite://`` URL)."""
    if not db_url:
        raise ValueError("a database URL is required")
    if db_url.startswith("sqlite://"):
        target = db_url[len("sqlite://"):]
        if target.startswith("/"):
            target = target[1:]
        target = target or ":memory:"
    elif "://" in db_url:
        raise ValueError(f"unsupported database URL: {db_url}")
    else:
        target = db_url
    conn = sqlite3.connect(target, isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def _user(row):
    return User(
        id=uuid.UUID(row[0]),
        created_at=datetime.fromisoformat(row[1]),
        updated_at=datetime.fromisoformat(row[2]),
        name=row[3],
    )


def _feed(row):
    return Feed(
        id=uuid.UUID(row[0]),
        created_at=datetime.fromisoformat(row[1]),
        updated_at=datetime.fromisoformat(row[2]),
        name=row[3],
        url=row[4],
        user_id=uuid.UUID(row[5]),
    )


class Queries:
    """The queries the application runs against its database."""

    def __init__(self, conn):
        self._conn = conn
        self._depth = 0

    def _settle(self):
        if self._depth == 0 and self._conn.in_transaction:
            self._conn.commit()

    def _write(self, sql, params=()):
        try:
            self._conn.execute(sql, params)
        except sqlite3.Error:
            if self._depth == 0 and self._conn.in_transaction:
                self._conn.rollback()
            raise
        self._settle()

    def create_schema(self):
        """Create the users and feeds tables if they are missing."""
        for statement in _SCHEMA:
            self._write(statement)

    @contextmanager
    def transaction(self):
        """Run the enclosed queries atomically; roll back if an exception escapes."""
        name = f"gator_tx_{self._depth}"
        self._conn.execute(f"SAVEPOINT {name}")
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            self._conn.execute(f"ROLLBACK TO SAVEPOINT {name}")
            self._conn.execute(f"RELEASE SAVEPOINT {name}")
            raise
        self._depth -= 1
        self._conn.execute(f"RELEASE SAVEPOINT {name}")
        self._settle()

    def create_user(self, user):
        """Insert ``user`` and return the stored row."""
        self._write(
            "INSERT INTO users (id, created_at, updated_at, name) VALUES (?, ?, ?, ?)",
            (str(user.id), user.created_at.isoformat(), user.updated_at.isoformat(), user.name),
        )
        row = self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (str(user.id),)
        ).fetchone()
        return _user(row)

    def get_user(self, name):
        """Return the user called ``name``; raise NotFoundError if there is none."""
        row = self._conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE name = ?", (name,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"no user named {name!r}")
        return _user(row)

    def get_users(self):
        """Return the names of all users."""
        rows = self._conn.execute("SELECT name FROM users ORDER BY rowid")
        return [name for (name,) in rows]

    def delete_all(self):
        """Delete every user, and with them their feeds."""
        self._write("DELETE FROM users")

    def create_feed(self, feed):
        """Insert ``feed`` and return the stored row."""
        self._write(
            "INSERT INTO feeds (id, created_at, updated_at, name, url, user_id) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                str(feed.id),
                feed.created_at.isoformat(),
                feed.updated_at.isoformat(),
                feed.name,
                feed.url,
                str(feed.user_id),
            ),
        )
        row = self._conn.execute(
            f"SELECT {_FEED_COLUMNS} FROM feeds WHERE id = ?", (str(feed.id),)
        ).fetchone()
        return _feed(row)

    def get_all_feeds(self):
        """Return every feed."""
        rows = self._conn.execute(f"SELECT {_FEED_COLUMNS} FROM feeds ORDER BY rowid")
        return [_feed(row) for row in rows]

    def get_feeds(self):
        """Return every feed with the name of the user who added it."""
        rows = self._conn.execute(
            "SELECT feeds.name, feeds.url, users.name FROM feeds "
            "INNER JOIN users ON feeds.user_id = users.id "
            "ORDER BY feeds.rowid"
        )
        return [FeedRow(name=name, url=url, user_name=user_name) for name, url, user_name in rows]