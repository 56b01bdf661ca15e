"""Chirpy record store - a single JSON document on disk.

The document is read and written in full on every operation. A
``ReadWriteLock`` owned by the ``Database`` instance guards the file:
``load()`` reads under the shared side, ``save()`` writes under the
exclusive side, and ``transaction()`` keeps the exclusive side for a whole
load-mutate-save so concurrent writers cannot lose each other's updates.

The store never logs; every failure is raised to the caller as a
``DatabaseError`` subclass with the underlying cause chained.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from chirpy.core.config import settings
from chirpy.core.locks import ReadWriteLock
from chirpy.models.document import Document

# Minimum JSON that parses into an empty document
EMPTY_DOCUMENT = "{}"


class DatabaseError(Exception):
    """Base record store error."""

    pass


class DatabaseIOError(DatabaseError):
    """The backing file could not be created, read or written."""

    pass


class DatabaseSerializationError(DatabaseError):
    """The backing file holds malformed content, or the document cannot be encoded."""

    pass


class Database:
    """File-backed JSON document store for a single process."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)
        self.lock = ReadWriteLock()

    def ensure(self) -> None:
        """Create the backing file holding an empty document if it is missing."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DatabaseIOError(f"Unable to create directory for {self.path}: {e}") from e
        try:
            with open(self.path, "x", encoding="utf-8") as f:
                f.write(EMPTY_DOCUMENT)
        except FileExistsError:
            return
        except OSError as e:
            raise DatabaseIOError(f"Unable to create database file {self.path}: {e}") from e

    def load(self) -> Document:
        """Read and decode the full document."""
        self.ensure()
        with self.lock.read_locked():
            return self._read()

    def save(self, document: Document) -> None:
        """Encode and write the full document, replacing what is on disk."""
        self.ensure()
        data = self._encode(document)
        with self.lock.write_locked():
            self._write(data)

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """Hold the write lock across load, mutate and save.

        The yielded document is saved when the block exits normally and has
        changed it; an unchanged document is not rewritten. If the block
        raises, nothing is written and the exception propagates.
        """
        self.ensure()
        with self.lock.write_locked():
            document = self._read()
            before = document.model_dump()
            yield document
            if document.model_dump() != before:
                self._write(self._encode(document))

    def reset(self) -> None:
        """Delete the backing file. The next operation recreates it empty."""
        with self.lock.write_locked():
            try:
                self.path.unlink(missing_ok=True)
            except OSError as e:
                raise DatabaseIOError(f"Unable to delete database file {self.path}: {e}") from e

    def _read(self) -> Document:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise DatabaseIOError(f"Unable to read database file {self.path}: {e}") from e
        try:
            return Document.model_validate_json(raw)
        except ValidationError as e:
            raise DatabaseSerializationError(f"Malformed database file {self.path}: {e}") from e

    @staticmethod
    def _encode(document: Document) -> str:
        try:
            return document.model_dump_json(indent=2)
        except (ValueError, TypeError) as e:
            raise DatabaseSerializationError(f"Unable to encode database document: {e}") from e

    def _write(self, data: str) -> None:
        # Write beside the target and swap it in, so readers and crashes
        # never observe a half-written document
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            raise DatabaseIOError(f"Unable to write database file {self.path}: {e}") from e


_database: Database | None = None


def get_database() -> Database:
    """Process-wide store for the configured path."""
    global _database
    if _database is None:
        _database = Database(settings.database_path)
    return _database


def get_db() -> Iterator[Database]:
    """Dependency to get the record store."""
    yield get_database()


def check_db_connection(db: Database | None = None) -> bool:
    """Check that the document can be read."""
    try:
        (db or get_database()).load()
        return True
    except DatabaseError as e:
        from chirpy.core.logging import get_logger

        get_logger("database").warning(f"Database check failed: {e}")
        return False
