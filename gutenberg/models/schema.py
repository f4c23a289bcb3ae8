"""Top-level schema: the unit exchanged with the CLI and API callers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator

from gutenberg.errors import SchemaLoadError
from gutenberg.models.base import SchemaModel, identifier
from gutenberg.models.collection import CollectionData
from gutenberg.models.nft import NftData
from gutenberg.utils import dump_document, load_document


class Schema(SchemaModel):
    """Full declarative description of one NFT collection contract."""

    package_name: str
    collection: CollectionData
    nft: NftData

    @field_validator("package_name")
    @classmethod
    def _check_package_name(cls, value: str) -> str:
        identifier(value, what="package name")
        return value

    def package_name_normalized(self) -> str:
        return identifier(self.package_name, what="package name").lower()

    def requires_collection(self) -> bool:
        return self.collection.requires_collection()

    def enforce_demo(self) -> None:
        """Clamp the schema to the restricted demo feature set, in place."""
        self.collection.enforce_demo()
        self.nft.enforce_demo()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    @classmethod
    def from_json(cls, raw: str) -> "Schema":
        return cls.model_validate_json(raw)

    @classmethod
    def from_yaml(cls, raw: str) -> "Schema":
        return cls.model_validate(yaml.safe_load(raw))

    @classmethod
    def load(cls, path: str | Path) -> "Schema":
        """Load and validate a ``.json`` / ``.yaml`` / ``.yml`` schema file.

        Raises:
            SchemaLoadError: If the file is missing, malformed or invalid.
        """
        try:
            data = load_document(path)
        except FileNotFoundError as exc:
            raise SchemaLoadError(path, "file not found") from exc
        except ValueError as exc:
            raise SchemaLoadError(path, str(exc)) from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise SchemaLoadError(path, _format_validation_error(exc)) from exc

    def save(self, path: str | Path) -> Path:
        return dump_document(self.to_dict(), path)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
