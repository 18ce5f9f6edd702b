"""
Row mapping for get/select and parameter binding for named_exec.

Row types: dict, pydantic models (SQLModel included), or any class accepting
column names as keyword arguments (dataclasses, NamedTuple, plain classes).
"""

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from pydantic import BaseModel
from sqlalchemy.engine import CursorResult, RowMapping


class ExecResult(NamedTuple):
    """Outcome of exec/named_exec, captured before the connection is released."""

    rowcount: int
    lastrowid: int | None


def exec_result(result: CursorResult[Any]) -> ExecResult:
    rowcount = result.rowcount if result.rowcount is not None else 0
    try:
        lastrowid = result.lastrowid
    except AttributeError:
        # Driver cursor without lastrowid (e.g. psycopg)
        lastrowid = None
    return ExecResult(rowcount=rowcount, lastrowid=lastrowid)


def scan_row(row_type: Any, row: RowMapping | Mapping[str, Any]) -> Any:
    """Build one *row_type* instance from a column-name mapping."""
    values = dict(row)
    if row_type is dict:
        return values
    if isinstance(row_type, type) and issubclass(row_type, BaseModel):
        return row_type.model_validate(values)
    return row_type(**values)


def scan_rows(row_type: Any, rows: Sequence[RowMapping]) -> list[Any]:
    return [scan_row(row_type, r) for r in rows]


def bind_params(arg: Any) -> dict[str, Any] | list[dict[str, Any]]:
    """
    Turn a named_exec argument into bind parameters for ``text()``.

    A list or tuple of arguments becomes a list of dicts (executemany).
    """
    if isinstance(arg, (list, tuple)):
        return [_bind_one(a) for a in arg]
    return _bind_one(arg)


def _bind_one(arg: Any) -> dict[str, Any]:
    if isinstance(arg, Mapping):
        return dict(arg)
    if isinstance(arg, BaseModel):
        return arg.model_dump()
    if dataclasses.is_dataclass(arg) and not isinstance(arg, type):
        return dataclasses.asdict(arg)
    if hasattr(arg, "__dict__"):
        return {k: v for k, v in vars(arg).items() if not k.startswith("_")}
    raise TypeError(
        f"named parameters must be a mapping or an object with attributes, got {type(arg).__name__}"
    )
