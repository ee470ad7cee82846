"""A command-line RSS aggregator: users and feeds in SQLite, a JSON config, RSS parsing."""

__version__ = "0.1.0"