"""Parameterized-query facade over MySQL, PostgreSQL and SQLite: public API."""

from typing import Mapping

from dbconn.backend import Backend, StatementResult, create_backend
from dbconn.errors import (
    ConfigurationError,
    ConnectionError,
    DatabaseError,
    ExecutionError,
    ParameterBindingError,
    PreparationError,
)
from dbconn.facade import QueryFacade, format_last_query
from dbconn.profiles import (
    DEFAULT_PROFILES,
    BackendKind,
    ConnectionProfile,
    load_profiles,
    profile_from_url,
)
from dbconn.types import BindKind, BindParam, Row, bind_params, infer_bind_param


def connect(
    connection_name: str,
    profiles: Mapping[str, ConnectionProfile] | None = None,
) -> QueryFacade:
    """Open a QueryFacade on a named profile.

    When `profiles` is None the table comes from load_profiles(): built-in
    defaults, then $DBCONN_PROFILES, then DBCONN_URL_<NAME> variables.
    """
    return QueryFacade(connection_name, profiles)


__all__ = [
    "Backend",
    "BackendKind",
    "BindKind",
    "BindParam",
    "ConfigurationError",
    "ConnectionError",
    "ConnectionProfile",
    "DEFAULT_PROFILES",
    "DatabaseError",
    "ExecutionError",
    "ParameterBindingError",
    "PreparationError",
    "QueryFacade",
    "Row",
    "StatementResult",
    "bind_params",
    "connect",
    "create_backend",
    "format_last_query",
    "infer_bind_param",
    "load_profiles",
    "profile_from_url",
]
