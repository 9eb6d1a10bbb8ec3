from __future__ import annotations

from dataclasses import MISSING, fields
from typing import Any, Mapping, TypeVar

from househelp.application.exceptions import BackendContractError

T = TypeVar("T")


def entity_from_row(cls: type[T], row: Mapping[str, Any], **overrides: Any) -> T:
    """
    Build a dataclass entity from a backend row.
    Unknown columns are dropped; a null column falls back to the field default when there is one.
    """
    if not isinstance(row, Mapping):
        raise BackendContractError(f"Expected a row for {cls.__name__}, got {type(row).__name__}")

    values: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if f.name in overrides:
            values[f.name] = overrides[f.name]
            continue
        if f.name not in row:
            continue
        has_default = f.default is not MISSING or f.default_factory is not MISSING
        if row[f.name] is None and has_default:
            continue
        values[f.name] = row[f.name]
    try:
        return cls(**values)
    except TypeError as e:
        raise BackendContractError(f"Row does not match {cls.__name__}: {e}") from e


def entities_from_rows(cls: type[T], rows: Any) -> list[T]:
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise BackendContractError(f"Expected a list of rows for {cls.__name__}")
    return [entity_from_row(cls, row) for row in rows]
