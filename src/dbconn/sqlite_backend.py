"""SQLite implementation of Backend."""

import sqlite3
from typing import Sequence

from dbconn import errors
from dbconn.backend import Backend, StatementResult
from dbconn.types import BindParam

# SQLite reports these while compiling the statement, before any row is touched.
_PREPARE_MARKERS = (
    "syntax error",
    "incomplete input",
    "unrecognized token",
    "no such table",
    "no such column",
    "has no column named",
    "ambiguous column name",
    "one statement at a time",
)


class SQLiteBackend(Backend):
    """SQLite backend using stdlib sqlite3 in autocommit mode."""

    def connect(self) -> None:
        try:
            conn = sqlite3.connect(
                self._profile.database,
                check_same_thread=False,
                isolation_level=None,
            )
        except sqlite3.Error as e:
            raise self._connection_error(e) from e
        try:
            conn.execute("PRAGMA foreign_keys=ON")
        except sqlite3.Error as e:
            conn.close()
            raise self._connection_error(e) from e
        self._conn = conn

    def _connection_error(self, e: sqlite3.Error) -> errors.ConnectionError:
        return errors.ConnectionError(
            f"Could not connect to database properly using connection: "
            f"{self._profile.name} ({e})"
        )

    def run(
        self,
        sql: str,
        params: Sequence[BindParam],
        max_rows: int | None = None,
    ) -> StatementResult:
        conn = self._get_conn()
        values = tuple(p.value for p in params)
        try:
            cursor = conn.execute(sql, values)
            try:
                if cursor.description is None:
                    return StatementResult([], max(cursor.rowcount, 0))
                columns = [desc[0] for desc in cursor.description]
                rows = [dict(zip(columns, row)) for row in self._collect(cursor, max_rows)]
                return StatementResult(rows, len(rows))
            finally:
                cursor.close()
        except (sqlite3.Error, sqlite3.Warning) as e:
            raise self._map_error(e, sql) from e

    @staticmethod
    def _map_error(e: Exception, sql: str) -> errors.DatabaseError:
        message = str(e)
        lowered = message.lower()
        if any(marker in lowered for marker in _PREPARE_MARKERS):
            return errors.PreparationError(f"Prepare failed: {message}", sql)
        if isinstance(e, sqlite3.ProgrammingError) and "binding" in lowered:
            return errors.ParameterBindingError(
                f"Binding parameters failed: {message}", sql
            )
        return errors.ExecutionError(f"Execute failed: {message}", sql)
