"""Abstract Backend interface and the profile-keyed factory."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

from dbconn import errors
from dbconn.profiles import BackendKind, ConnectionProfile
from dbconn.sql import QMARK, count_placeholders, to_paramstyle
from dbconn.types import BindParam, Row


@dataclass
class StatementResult:
    """Rows produced by a statement and its non-negative row count."""

    rows: list[Row] = field(default_factory=list)
    rowcount: int = 0


class Backend(ABC):
    """Adapter over one native driver connection.

    Adapters own exactly one connection, run in autocommit mode and translate
    driver exceptions into dbconn.errors types.
    """

    #: Placeholder marker the driver expects in place of `?`.
    placeholder: str = QMARK
    #: Backslash escapes the next character inside quoted strings (MySQL).
    backslash_escapes: bool = False
    #: $tag$...$tag$ strings are literals (PostgreSQL).
    dollar_quotes: bool = False

    def __init__(self, profile: ConnectionProfile):
        self._profile = profile
        self._conn: Any = None

    @property
    def profile(self) -> ConnectionProfile:
        return self._profile

    @property
    def closed(self) -> bool:
        return self._conn is None

    @abstractmethod
    def connect(self) -> None:
        """Open the driver connection. Raises errors.ConnectionError on failure."""

    def close(self) -> None:
        """Close the driver connection; a no-op when already closed."""
        conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()

    @abstractmethod
    def run(
        self,
        sql: str,
        params: Sequence[BindParam],
        max_rows: int | None = None,
    ) -> StatementResult:
        """Execute one statement with positional params.

        At most `max_rows` rows are fetched when it is given; the rest are
        discarded with the cursor.
        """

    def _get_conn(self) -> Any:
        if self._conn is None:
            raise errors.ConnectionError(
                f"Connection {self._profile.name!r} is closed"
            )
        return self._conn

    def count_placeholders(self, sql: str) -> int:
        """Count `?` markers using this backend's quoting rules."""
        return count_placeholders(sql, self.backslash_escapes, self.dollar_quotes)

    def _translate(self, sql: str, params: Sequence[BindParam]) -> str:
        if not params:
            return sql
        return to_paramstyle(
            sql, self.placeholder, self.backslash_escapes, self.dollar_quotes
        )

    @staticmethod
    def _collect(cursor: Any, max_rows: int | None) -> list[Any]:
        if max_rows is None:
            return list(cursor.fetchall())
        return list(cursor.fetchmany(max_rows))


def create_backend(profile: ConnectionProfile) -> Backend:
    """Create the Backend adapter for a profile's kind (not yet connected)."""
    if profile.kind is BackendKind.SQLITE:
        from dbconn.sqlite_backend import SQLiteBackend

        return SQLiteBackend(profile)
    elif profile.kind is BackendKind.POSTGRESQL:
        from dbconn.postgres_backend import PostgresBackend

        return PostgresBackend(profile)
    elif profile.kind is BackendKind.MYSQL:
        from dbconn.mysql_backend import MySQLBackend

        return MySQLBackend(profile)
    else:
        raise errors.ConfigurationError(
            f"Unsupported backend kind {profile.kind!r} for connection: {profile.name}"
        )
