"""Unique indexes of a model, as exposed to generated code."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


@dataclass
class Index:
    """A unique index or primary key usable for unique lookups."""

    name: str
    internal_name: str
    fields: list[str] = field(default_factory=list)


def to_pascal_case(text: str) -> str:
    """Convert an identifier in any common casing to PascalCase."""
    return "".join(word[:1].upper() + word[1:].lower() for word in _WORD.findall(text))


def get_name(field: str, fields: list[str]) -> str:
    """Return ``field`` if set, otherwise the PascalCase join of ``fields``."""
    if field:
        return field
    return "".join(to_pascal_case(f) for f in fields)


def model_indexes(model: Any) -> list[Index]:
    """Collect the unique indexes and the compound primary key of a model."""
    indexes = [
        Index(
            name=get_name(unique.internal_name, unique.fields),
            internal_name=unique.internal_name or "_".join(unique.fields),
            fields=list(unique.fields),
        )
        for unique in model.unique_indexes
    ]

    primary_key_fields = list(model.primary_key.fields) if model.primary_key else []
    if primary_key_fields:
        joined = "_".join(primary_key_fields)
        indexes.append(
            Index(
                name=get_name(joined, primary_key_fields),
                internal_name=joined,
                fields=primary_key_fields,
            )
        )

    return indexes