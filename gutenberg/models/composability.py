"""Composable NFT blueprint: marker types and parent/child relationships."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from gutenberg.models.base import ValueModel, identifier


def marker_name(raw: str) -> str:
    """Move struct name of a composable marker type."""
    return identifier(raw, what="composable type").upper()


class Relationship(ValueModel):
    """A parent type may hold up to ``limit`` children of ``child_type``."""

    parent_type: str
    child_type: str
    order: int = Field(default=1, ge=0)
    limit: int = Field(default=1, ge=1)

    @field_validator("parent_type", "child_type")
    @classmethod
    def _normalise(cls, value: str) -> str:
        return marker_name(value)


class Composability(ValueModel):
    """Marker types and the blueprint that relates them.

    ``types`` behaves as a set: it is deduplicated and sorted.  Relationship
    order is kept as given.
    """

    types: tuple[str, ...]
    blueprint: tuple[Relationship, ...] = ()

    @field_validator("types")
    @classmethod
    def _normalise_types(cls, types: tuple[str, ...]) -> tuple[str, ...]:
        names = {marker_name(t) for t in types}
        return tuple(sorted(names))

    @model_validator(mode="after")
    def _check_blueprint(self) -> "Composability":
        known = set(self.types)
        for rel in self.blueprint:
            for name in (rel.parent_type, rel.child_type):
                if name not in known:
                    raise ValueError(f"blueprint type {name!r} is not one of {sorted(known)}")
        return self

    @classmethod
    def from_traits(cls, types: list[str], core_trait: str) -> "Composability":
        """Make every other trait a single child of *core_trait*, ordered by name."""
        core = marker_name(core_trait)
        others = sorted({marker_name(t) for t in types} - {core})
        blueprint = tuple(
            Relationship(parent_type=core, child_type=child, order=index, limit=1)
            for index, child in enumerate(others, start=1)
        )
        return cls(types=tuple(types) + (core_trait,), blueprint=blueprint)
