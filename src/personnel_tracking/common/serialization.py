from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_json(entity: Any, *, exclude: Iterable[str] = ()) -> dict:
    """Dataclass entity -> JSON-ready dict with camelCase keys (API contract)."""
    if not is_dataclass(entity):
        raise TypeError(f"Not a dataclass instance: {type(entity)!r}")
    skip = set(exclude)
    return {
        camel_case(f.name): _json_value(getattr(entity, f.name))
        for f in fields(entity)
        if f.name not in skip
    }


def to_json_list(entities: Iterable[Any], *, exclude: Iterable[str] = ()) -> list[dict]:
    skip = tuple(exclude)
    return [to_json(e, exclude=skip) for e in entities]
