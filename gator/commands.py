"""Command registry and the handlers behind each gator command."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, TextIO

from gator.config import Config
from gator.database import Feed, NotFoundError, Queries, User
from gator.rss import RSSFeed, fetch_feed

AGG_FEED_URL = "https://www.wagslane.dev/index.xml"


class CommandError(Exception):
    """Raised when a command is unknown, misused or cannot complete."""


@dataclass
class State:
    """What every handler works with: the database, the configuration and output."""

    db: Queries
    config: Config
    config_path: Optional[Path] = None
    fetcher: Callable[[str], RSSFeed] = fetch_feed
    out: Optional[TextIO] = None


@dataclass(frozen=True)
class Command:
    """A command name and the arguments given after it."""

    name: str
    arguments: tuple[str, ...] = ()


Handler = Callable[[State, Command], None]


def _say(state, *values, end="\n"):
    print(*values, end=end, file=state.out)


def create_user(state, name):
    """Store a new user called ``name``; raise CommandError if it already exists."""
    try:
        state.db.get_user(name)
    except NotFoundError:
        pass
    else:
        raise CommandError(f"{name} already exists.")

    now = datetime.now()
    user = User(id=uuid.uuid4(), created_at=now, updated_at=now, name=name)
    try:
        return state.db.create_user(user)
    except Exception as exc:
        raise CommandError("error when creating user") from exc


def create_feed(state, name, url):
    """Store a feed owned by the current user and return it."""
    owner = state.db.get_user(state.config.current_user_name)
    now = datetime.now()
    feed = Feed(
        id=uuid.uuid4(),
        created_at=now,
        updated_at=now,
        name=name,
        url=url,
        user_id=owner.id,
    )
    return state.db.create_feed(feed)


def handler_login(state, cmd):
    """Switch the current user to an existing one."""
    if not cmd.arguments:
        raise CommandError("a username is required")
    if len(cmd.arguments) > 1:
        raise CommandError("login command takes only one argument")
    name = cmd.arguments[0]
    try:
        state.db.get_user(name)
    except NotFoundError as exc:
        raise CommandError(f"{name} does not exist.") from exc
    state.config.set_user(name, state.config_path)
    _say(state, f"\n{name} has logged in.")


def handler_register(state, cmd):
    """Create a user and make it the current one."""
    if not cmd.arguments:
        raise CommandError("a username is required")
    if len(cmd.arguments) > 1:
        raise CommandError("register command takes only one argument")
    name = cmd.arguments[0]
    create_user(state, name)
    state.config.set_user(name, state.config_path)
    _say(state, name, "has been registered as a user.")


def handler_reset(state, cmd):
    """Delete every user and feed."""
    if cmd.arguments:
        raise CommandError("reset command does not take any arguments")
    state.db.delete_all()
    _say(state, "All data has been wiped.")


def handler_users(state, cmd):
    """List all users, marking the current one."""
    if cmd.arguments:
        raise CommandError("users command does not take any arguments")
    for name in state.db.get_users():
        marker = " (current)" if name == state.config.current_user_name else ""
        _say(state, f"\n* {name}{marker}", end="")


def handler_agg(state, cmd):
    """Fetch the aggregation feed and print it."""
    if cmd.arguments:
        raise CommandError("agg command does not take any arguments")
    feed = state.fetcher(AGG_FEED_URL)
    _say(state, feed)


def handler_add_feed(state, cmd):
    """Add a feed for the current user: ``addfeed <name> <url>``."""
    if len(cmd.arguments) != 2:
        raise CommandError("addFeed command takes 2 arguments: name url")
    name, url = cmd.arguments
    feed = create_feed(state, name, url)
    _say(state, feed.id, feed.name, feed.created_at, feed.updated_at, feed.url, feed.user_id)


def handler_feeds(state, cmd):
    """List every feed with the user who added it."""
    if cmd.arguments:
        raise CommandError("feeds command does not take any arguments.")
    for number, row in enumerate(state.db.get_feeds(), start=1):
        _say(state, f"\n{number}. {row.name}, {row.user_name}", end="")


@dataclass
class Commands:
    """A table of named command handlers."""

    handlers: dict[str, Handler] = field(default_factory=dict)

    def register(self, name, handler):
        """Add ``handler`` under ``name``; raise ValueError if the name is taken."""
        if name in self.handlers:
            raise ValueError("command already exists")
        self.handlers[name] = handler

    def run(self, state, cmd):
        """Run the handler registered for ``cmd.name``."""
        try:
            handler = self.handlers[cmd.name]
        except KeyError:
            raise CommandError("command function not found") from None
        handler(state, cmd)