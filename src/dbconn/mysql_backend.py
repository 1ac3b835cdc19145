"""MySQL implementation of Backend."""

from typing import Sequence

import pymysql
import pymysql.cursors

from dbconn import errors
from dbconn.backend import Backend, StatementResult
from dbconn.sql import FORMAT
from dbconn.types import BindParam

DEFAULT_PORT = 3306

# Server errors raised while parsing or resolving names, before execution:
# 1054 bad field, 1064 parse error, 1146 no such table, 1149 syntax error.
_PREPARE_ERRNOS = frozenset({1054, 1064, 1146, 1149})


class MySQLBackend(Backend):
    """MySQL backend using PyMySQL with DictCursor rows."""

    placeholder = FORMAT
    backslash_escapes = True

    def connect(self) -> None:
        profile = self._profile
        try:
            conn = pymysql.connect(
                host=profile.host,
                port=profile.port or DEFAULT_PORT,
                user=profile.user,
                password=profile.password,
                database=profile.database,
                charset="utf8mb4",
                cursorclass=pymysql.cursors.DictCursor,
                autocommit=True,
            )
        except pymysql.err.Error as e:
            raise errors.ConnectionError(
                f"Could not connect to database properly using connection: "
                f"{profile.name} ({e})"
            ) from e
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
            with conn.cursor() as cur:
                cur.execute(self._translate(sql, params), values or None)
                if cur.description is None:
                    return StatementResult([], max(cur.rowcount, 0))
                rows = [dict(row) for row in self._collect(cur, max_rows)]
                return StatementResult(rows, len(rows))
        except pymysql.err.Error as e:
            raise self._map_error(e, sql) from e

    @staticmethod
    def _map_error(e: pymysql.err.Error, sql: str) -> errors.DatabaseError:
        errno = e.args[0] if e.args and isinstance(e.args[0], int) else None
        message = e.args[1] if len(e.args) > 1 else str(e)
        if isinstance(e, pymysql.err.ProgrammingError) or errno in _PREPARE_ERRNOS:
            return errors.PreparationError(f"Prepare failed: ({errno}) {message}", sql)
        return errors.ExecutionError(f"Execute failed: ({errno}) {message}", sql)
