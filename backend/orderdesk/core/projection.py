"""Allow-list Projection — copies only declared fields from an entity into a DTO.

Invariants:
    - Only fields DECLARED on the shape are read from the source; nothing else
      can reach the output (primary guard against leaking internal columns)
    - A string validation_alias names the source field a DTO field is read from
    - Fields listed in `skip` are never read (keeps lazy relations untouched)
    - Missing source fields fall back to the shape's defaults

Design Decisions:
    - Pydantic models as shapes over decorator-marked classes: the field list is
      the allow-list, validation comes for free
    - Source read field-by-field (mapping key or attribute) instead of
      from_attributes on the whole entity, so skipped relations are never touched
"""

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

_MISSING = object()


class Projection(BaseModel):
    """Base class for output shapes. Declared fields are the allow-list."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


Shape = TypeVar("Shape", bound=BaseModel)


@dataclass(frozen=True)
class RelatedProjection:
    """Related entity to attach: source relation field + its output shape."""
    relation_field: str
    shape: type[BaseModel]


def project(
    source: Any,
    shape: type[Shape],
    *,
    skip: Collection[str] = (),
    attach: Mapping[str, Any] | None = None,
) -> Shape:
    """Map source onto shape, copying declared fields only.

    `attach` supplies values for declared fields that are not read from the
    source (e.g. an already-projected related DTO).
    """
    attach = attach or {}
    values: dict[str, Any] = {}
    for name, info in shape.model_fields.items():
        if name in attach:
            values[name] = attach[name]
            continue
        if name in skip:
            continue
        source_name = info.validation_alias if isinstance(info.validation_alias, str) else name
        value = _read(source, source_name)
        if value is not _MISSING:
            values[source_name] = value
    return shape.model_validate(values)


def _read(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, _MISSING)
    return getattr(source, name, _MISSING)
