"""PostgreSQL implementation of Backend."""

from typing import Sequence

import psycopg2
import psycopg2.extras

from dbconn import errors
from dbconn.backend import Backend, StatementResult
from dbconn.sql import FORMAT
from dbconn.types import BindParam

# SQLSTATE class 42: syntax error or access rule violation.
_PREPARE_SQLSTATE_CLASS = "42"


class PostgresBackend(Backend):
    """PostgreSQL backend using psycopg2 with RealDictCursor rows."""

    placeholder = FORMAT
    dollar_quotes = True

    def connect(self) -> None:
        profile = self._profile
        kwargs = {
            "host": profile.host,
            "user": profile.user,
            "password": profile.password,
            "dbname": profile.database,
            "client_encoding": "UTF8",
        }
        if profile.port is not None:
            kwargs["port"] = profile.port
        try:
            conn = psycopg2.connect(**kwargs)
        except psycopg2.Error as e:
            raise errors.ConnectionError(
                f"Could not connect to database properly using connection: "
                f"{profile.name} ({e})"
            ) from e
        conn.autocommit = True
        self._conn = conn

    def run(
        self,
        sql: str,
        params: Sequence[BindParam],
        max_rows: int | None = None,
    ) -> StatementResult:
        conn = self._get_conn()
        values = tuple(p.value for p in params)
        try:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(self._translate(sql, params), values or None)
                if cur.description is None:
                    return StatementResult([], max(cur.rowcount, 0))
                rows = [dict(row) for row in self._collect(cur, max_rows)]
                return StatementResult(rows, len(rows))
        except psycopg2.Error as e:
            raise self._map_error(e, sql) from e

    @staticmethod
    def _map_error(e: psycopg2.Error, sql: str) -> errors.DatabaseError:
        message = str(e).strip()
        pgcode = getattr(e, "pgcode", None) or ""
        if isinstance(e, psycopg2.ProgrammingError) or pgcode.startswith(
            _PREPARE_SQLSTATE_CLASS
        ):
            return errors.PreparationError(f"Prepare failed: {message}", sql)
        return errors.ExecutionError(f"Execute failed: {message}", sql)
