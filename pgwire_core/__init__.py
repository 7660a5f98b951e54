"""Building blocks for an asynchronous PostgreSQL client: errors, rows, statements, sockets and transactions."""

__version__ = "0.1.0"

__all__ = ["errors", "statement", "row", "net", "messages", "transaction"]