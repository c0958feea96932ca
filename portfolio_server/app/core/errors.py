"""
Error types raised by the portfolio store.

Every store operation wraps the underlying ``sqlite3``/``OSError``
failure in one of these classes (chained with ``raise ... from``) so
the API layer can map them to HTTP status codes without knowing about
SQLite.
"""


class StoreError(Exception):
    """Base class for all store failures."""


class InitializationError(StoreError):
    """The database file could not be opened or the schema created."""


class SourceReadError(StoreError):
    """The seed document could not be read."""


class SourceParseError(StoreError):
    """The seed document is not a JSON array of objects."""


class SeedImportError(StoreError):
    """Inserting the seed records failed; nothing was committed."""


class QueryError(StoreError):
    """Reading from the database failed."""


class InsertError(StoreError):
    """Writing a new record failed."""
