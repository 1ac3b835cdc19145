"""QueryFacade: parameterized statements over a single named connection."""

import logging
import threading
from typing import Any, Mapping, Sequence

from dbconn import errors
from dbconn.backend import Backend, StatementResult, create_backend
from dbconn.profiles import ConnectionProfile, get_profile, load_profiles
from dbconn.types import BindParam, Row, bind_params, bind_type_string

logger = logging.getLogger(__name__)


def _render_param(value: Any) -> str:
    if isinstance(value, BindParam):
        value = value.value
    if isinstance(value, bool):
        return str(int(value))
    return str(value)


def format_last_query(sql: str, params: Sequence[Any]) -> str:
    """Render "<sql>; with params: a, b" or "<sql>;" when there are no params."""
    if params:
        return f"{sql}; with params: " + ", ".join(_render_param(p) for p in params)
    return f"{sql};"


class QueryFacade:
    """Thin facade over one backend connection chosen by profile name.

    Every call goes through the same path: validate the params container,
    record the last query, tag each param with its bind kind, check the
    placeholder count, then hand the statement to the backend. Nothing reaches
    the backend unless every parameter can be bound.

    Usage:
        with QueryFacade("website") as db:
            db.execute("insert into blah (name) values (?)", ["testing"])
            rows = db.fetch_all("SELECT * FROM timezones WHERE id IN (?, ?, ?)", [77, 13, 5])
    """

    def __init__(
        self,
        connection_name: str,
        profiles: Mapping[str, ConnectionProfile] | None = None,
    ):
        if profiles is None:
            profiles = load_profiles()
        self._profile = get_profile(connection_name, profiles)
        self._last_query: str | None = None
        self._lock = threading.Lock()
        self._backend: Backend = create_backend(self._profile)
        try:
            self._backend.connect()
        except errors.ConnectionError as e:
            logger.warning("%s", e)
            raise
        logger.info(
            "Connected to %s (%s)", self._profile.name, self._profile.kind.value
        )

    @property
    def profile(self) -> ConnectionProfile:
        return self._profile

    @property
    def closed(self) -> bool:
        return self._backend.closed

    @property
    def last_query(self) -> str | None:
        return self._last_query

    def get_last_query(self) -> str | None:
        """The most recent SQL text with its rendered params, or None before any call."""
        return self._last_query

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> bool:
        """Run a statement without returning rows. Useful for inserts, updates, deletes."""
        self._run(sql, params)
        return True

    def fetch_row(self, sql: str, params: Sequence[Any] | None = None) -> Row:
        """Return the first row of the result, or {} if there is none."""
        result = self._run(sql, params, max_rows=1)
        return result.rows[0] if result.rows else {}

    def fetch_all(self, sql: str, params: Sequence[Any] | None = None) -> list[Row]:
        """Return every row of the result in backend order."""
        return self._run(sql, params).rows

    def get_num_rows(self, sql: str, params: Sequence[Any] | None = None) -> int:
        """Return the number of rows the statement returned or affected."""
        return max(int(self._run(sql, params).rowcount), 0)

    def close(self) -> None:
        with self._lock:
            if not self._backend.closed:
                self._backend.close()
                logger.info("Closed connection %s", self._profile.name)

    def __enter__(self) -> "QueryFacade":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _run(
        self,
        sql: str,
        params: Sequence[Any] | None,
        max_rows: int | None = None,
    ) -> StatementResult:
        if params is None:
            params = []
        if not isinstance(params, (list, tuple)):
            raise errors.ParameterBindingError(
                "You must pass a list or tuple as the params argument", sql
            )

        with self._lock:
            self._last_query = format_last_query(sql, params)
            try:
                bound = bind_params(params)
                expected = self._backend.count_placeholders(sql)
                if expected != len(bound):
                    raise errors.ParameterBindingError(
                        f"Statement has {expected} placeholders but "
                        f"{len(bound)} params were supplied",
                    )
            except errors.ParameterBindingError as e:
                e.sql = sql
                logger.warning("%s : %s", e, self._last_query)
                raise

            logger.debug(
                "Running on %s [%s]: %s",
                self._profile.name,
                bind_type_string(bound),
                self._last_query,
            )
            try:
                return self._backend.run(sql, bound, max_rows)
            except errors.DatabaseError as e:
                logger.warning("%s : %s", e, self._last_query)
                raise
