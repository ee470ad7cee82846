# gator

`gator` is a small command-line RSS aggregator. It keeps users and the feeds
they have added in an SQLite database, remembers who is logged in, and can
fetch an RSS feed and print what it parsed.

## Installation

```
pip install .
```

This installs the `gator` command. It needs nothing beyond the Python
standard library.

## Configuration

`gator` reads its settings from `.gatorconfig.json` in your home directory:

```json
{
  "db_url": "gator.db",
  "current_user_name": ""
}
```

- `db_url` names the SQLite database: either a file path such as `gator.db`,
  or a `sqlite://` URL (`sqlite:///gator.db`; a bare `sqlite://` opens an
  in-memory database). Any other URL scheme is refused.
- `current_user_name` is the logged-in user. The `register` and `login`
  commands update it and rewrite the file as indented JSON.

The file has to exist. If it cannot be read, `gator` prints
`error Read function` and carries on with an empty configuration, which then
fails with `Error while opening database: a database URL is required`.

The `users` and `feeds` tables are created in the database on first use.

## Usage

```
gator <command> [arguments...]
```

| Command                | What it does                                                   |
|------------------------|----------------------------------------------------------------|
| `register <name>`      | Creates a new user and logs in as that user.                   |
| `login <name>`         | Logs in as an existing user.                                   |
| `users`                | Lists all users and marks the current one with `(current)`.    |
| `addfeed <name> <url>` | Adds a feed owned by the current user and prints its record.   |
| `feeds`                | Lists every feed with the name of the user who added it.       |
| `agg`                  | Fetches `https://www.wagslane.dev/index.xml` and prints it.    |
| `reset`                | Deletes all users, and with them their feeds.                  |

An example session:

```
gator register alice
gator addfeed "Example Blog" https://example.com/index.xml
gator feeds
gator users
```

`register` refuses a name that already exists, `login` refuses a name that
does not, and `addfeed` refuses a URL that has already been added. A command
given the wrong number of arguments, or an unknown command, prints an error.
Whenever a command fails, the message is printed and `gator` exits with
status 1; on success it exits with 0.

## What it does not do

- `agg` always fetches the one built-in feed; it does not fetch the feeds
  added with `addfeed`, and nothing it fetches is stored.
- Only SQLite databases are supported.
- There is no command to follow or unfollow feeds, or to browse posts.

## Using it as a library

The pieces behind the command can be used on their own:

- `gator.config` — `Config` (with `db_url` and `current_user_name`),
  `read(path=None)`, `write(cfg, path=None)`, `Config.set_user(username,
  path=None)` and `get_config_file_path()`. Failures raise `ConfigError`.
- `gator.database` — `connect(db_url)` opens an SQLite connection, and
  `Queries` wraps it with `create_schema()`, `create_user()`, `get_user()`,
  `get_users()`, `delete_all()`, `create_feed()`, `get_all_feeds()`,
  `get_feeds()` and a `transaction()` context manager. Rows come back as the
  `User`, `Feed` and `FeedRow` dataclasses; `get_user()` raises
  `NotFoundError` for an unknown name.
- `gator.rss` — `parse_feed(data)` turns RSS XML (bytes or text) into an
  `RSSFeed` with `title`, `link`, `description` and a list of `RSSItem`
  entries; it raises `ValueError` for text that is not XML.
  `fetch_feed(feed_url, timeout=None)` downloads a feed with the user agent
  `gator` and parses it.
- `gator.commands` — `Commands`, `Command`, `State` and the `handler_*`
  functions behind each command; `gator.cli.build_commands()` returns the
  full registry and `gator.cli.main(argv=None)` runs one command.

```python
from gator.rss import parse_feed

feed = parse_feed(xml_bytes)
print(feed.title)
for item in feed.items:
    print(item.title, item.link, item.pub_date)
```

```python
from gator.database import Queries, connect

queries = Queries(connect("gator.db"))
queries.create_schema()
for row in queries.get_feeds():
    print(row.name, row.url, row.user_name)
```

## Running the tests

```
pip install ".[test]"
pytest
```