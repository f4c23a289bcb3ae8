"""Shared Pydantic configuration for schema models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gutenberg.errors import InvalidIdentifier
from gutenberg.utils import normalize

# Identifiers that cannot name a Move package, module or struct.
MOVE_KEYWORDS = frozenset(
    {
        "abort", "acquires", "as", "break", "const", "continue", "copy",
        "else", "entry", "enum", "false", "friend", "fun", "has", "if",
        "let", "loop", "match", "module", "move", "mut", "native",
        "public", "return", "spec", "struct", "true", "type", "use",
        "while",
    }
)


class SchemaModel(BaseModel):
    """Base for aggregates: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class ValueModel(SchemaModel):
    """Base for immutable value types."""

    model_config = ConfigDict(frozen=True)


def identifier(raw: str, *, what: str) -> str:
    """Normalise *raw* and reject results that cannot be a Move identifier."""
    name = normalize(raw)
    if not name:
        raise InvalidIdentifier(raw, f"{what} has no ASCII letters or digits")
    if not name[0].isalpha():
        raise InvalidIdentifier(raw, f"{what} must start with a letter")
    if name.lower() in MOVE_KEYWORDS:
        raise InvalidIdentifier(raw, f"{what} is a reserved Move keyword")
    return name
