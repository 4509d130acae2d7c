"""Helpers mapping request schemas onto model columns.

Create requests are copied field by field. Update requests are Pydantic
"patch" schemas where every field is optional: only fields the client
actually sent are applied, omitted fields keep their stored value, and an
explicit ``null`` clears a nullable field.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


def _to_column_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_to_column_value(v) for v in value]
    return value


def apply_patch(
    instance: Any,
    patch: BaseModel,
    *,
    exclude: set[str] | None = None,
    non_nullable: set[str] | None = None,
) -> dict[str, Any]:
    """Copy the fields present in ``patch`` onto ``instance``.

    Fields in ``non_nullable`` ignore an explicit ``null`` instead of clearing
    the column. Returns the applied changes.
    """
    exclude = exclude or set()
    non_nullable = non_nullable or set()
    changes = {}
    for field in patch.model_fields_set:
        if field in exclude:
            continue
        value = getattr(patch, field)
        if value is None and field in non_nullable:
            continue
        value = _to_column_value(value)
        setattr(instance, field, value)
        changes[field] = value
    return changes


def column_values(schema: BaseModel, *, exclude: set[str] | None = None) -> dict[str, Any]:
    """Every field of a create schema, converted for assignment to model columns."""
    exclude = exclude or set()
    return {
        name: _to_column_value(getattr(schema, name))
        for name in type(schema).model_fields
        if name not in exclude
    }
