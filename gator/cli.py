"""Command-line entry point for gator."""

from __future__ import annotations

import sqlite3
import sys
from contextlib import closing

from gator import config
from gator.commands import (
    Command,
    CommandError,
    Commands,
    State,
    handler_add_feed,
    handler_agg,
    handler_feeds,
    handler_login,
    handler_register,
    handler_reset,
    handler_users,
)
from gator.config import Config, ConfigError
from gator.database import Queries, connect

_FAILURES = (CommandError, ConfigError, LookupError, ValueError, OSError, sqlite3.Error)


def build_commands():
    """Return the registry holding every gator command."""
    cmds = Commands()
    cmds.register("login", handler_login)
    cmds.register("register", handler_register)
    cmds.register("reset", handler_reset)
    cmds.register("users", handler_users)
    cmds.register("agg", handler_agg)
    cmds.register("addfeed", handler_add_feed)
    cmds.register("feeds", handler_feeds)
    return cmds


def main(argv=None):
    """Run one gator command and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("missing arguments")
        return 1

    cmd = Command(name=args[0], arguments=tuple(args[1:]))

    try:
        cfg = config.read()
    except ConfigError:
        print("error Read function")
        cfg = Config()

    try:
        conn = connect(cfg.db_url)
    except (ValueError, sqlite3.Error) as exc:
        print("Error while opening database: ", exc)
        return 1

    with closing(conn):
        queries = Queries(conn)
        try:
            queries.create_schema()
            build_commands().run(State(db=queries, config=cfg), cmd)
        except _FAILURES as exc:
            print(exc)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())