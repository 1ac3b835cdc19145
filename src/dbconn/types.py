"""Shared types: rows, parameter lists and tagged bind values."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from dbconn.errors import ParameterBindingError

Row = dict[str, Any]
Params = list | tuple


class BindKind(Enum):
    """Scalar kind of a bind parameter, valued by its mysqli type code."""

    TEXT = "s"
    INTEGER = "i"
    FLOAT = "d"

    @property
    def code(self) -> str:
        return self.value


@dataclass(frozen=True)
class BindParam:
    """One positional parameter tagged with its bind kind."""

    kind: BindKind
    value: str | int | float

    @classmethod
    def text(cls, value: str) -> "BindParam":
        return cls(BindKind.TEXT, str(value))

    @classmethod
    def integer(cls, value: int | bool) -> "BindParam":
        return cls(BindKind.INTEGER, int(value))

    @classmethod
    def floating(cls, value: float) -> "BindParam":
        return cls(BindKind.FLOAT, float(value))


def infer_bind_param(value: Any) -> BindParam:
    """Tag a native scalar with its bind kind.

    bool is checked before int since it is an int subclass; both bind as
    INTEGER. Values of any other type raise ParameterBindingError.
    """
    if isinstance(value, BindParam):
        return value
    if isinstance(value, str):
        return BindParam.text(value)
    if isinstance(value, bool):
        return BindParam.integer(value)
    if isinstance(value, int):
        return BindParam.integer(value)
    if isinstance(value, float):
        return BindParam.floating(value)
    raise ParameterBindingError(
        f"Cannot bind parameter of type {type(value).__name__}: {value!r}"
    )


def bind_params(params: Sequence[Any]) -> list[BindParam]:
    """Tag every parameter in order. Fails as a whole if any one cannot be tagged."""
    bound = [infer_bind_param(p) for p in params]
    if len(bound) != len(params):
        raise ParameterBindingError(
            "One or more of the params is not the proper bind type for a query"
        )
    return bound


def bind_type_string(params: Sequence[BindParam]) -> str:
    """Concatenated type codes, e.g. "isd"."""
    return "".join(p.kind.code for p in params)
