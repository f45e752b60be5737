# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Composite construction of nested entity data.

A parent entity's nested fields may arrive as raw server records (dicts)
or as objects that already expose the child's fields (a built child
entity, or any object with the right attributes). Both are normalized
here, once, into plain records; pydantic then builds a fresh typed child
from each record. The parent therefore always owns its own copy of every
child, and child sequences keep their input order.
"""

import types
import typing
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any, NamedTuple

from pydantic import BaseModel


class CompositeField(NamedTuple):
    """A model field holding one nested model or a sequence of them."""

    name: str
    model: type[BaseModel]
    many: bool


def as_record(value: Any, model: type[BaseModel]) -> dict[str, Any]:
    """Normalize one value into a plain record for ``model``.

    Args:
        value: A mapping, a pydantic model, or any object exposing the
            model's required field names as attributes.
        model: The model class the record is for.

    Returns:
        A new dict; the caller may mutate it freely.

    Raises:
        ValueError: If the object lacks one of the model's required fields.
    """
    if isinstance(value, Mapping):
        return dict(value)

    if isinstance(value, BaseModel):
        return value.model_dump()

    missing = [
        name
        for name, info in model.model_fields.items()
        if info.is_required() and not hasattr(value, name)
    ]
    if missing:
        raise ValueError(
            f"Cannot build {model.__name__} from {type(value).__name__}: "
            f"missing {', '.join(missing)}"
        )

    return {
        name: getattr(value, name)
        for name in model.model_fields
        if hasattr(value, name)
    }


@lru_cache(maxsize=None)
def composite_fields(model: type[BaseModel]) -> tuple[CompositeField, ...]:
    """List the fields of ``model`` that hold nested models.

    Optional wrappers (``X | None``) are looked through.
    """
    found = []
    for name, info in model.model_fields.items():
        annotation = _strip_optional(info.annotation)
        origin = typing.get_origin(annotation)

        if origin in (list, tuple) or (
            isinstance(origin, type) and issubclass(origin, Sequence)
        ):
            args = typing.get_args(annotation)
            child = args[0] if args else None
            if _is_model(child):
                found.append(CompositeField(name, child, True))
        elif _is_model(annotation):
            found.append(CompositeField(name, annotation, False))

    return tuple(found)


def build_record(model: type[BaseModel], value: Any) -> dict[str, Any]:
    """Normalize ``value`` and all of its nested children into records.

    Args:
        model: The model class the top-level record is for.
        value: Raw record or object exposing the model's fields.

    Returns:
        A record whose nested entries are themselves plain records.
    """
    record = as_record(value, model)

    for field in composite_fields(model):
        raw = record.get(field.name)
        if raw is None:
            continue
        if field.many:
            record[field.name] = [build_record(field.model, item) for item in raw]
        else:
            record[field.name] = build_record(field.model, raw)

    return record


def _strip_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_model(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseModel)
