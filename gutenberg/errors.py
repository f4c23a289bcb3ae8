"""Exception hierarchy for schema construction, registry lookups and uploads.

Code generation itself never raises: every failure is surfaced while a
value is being built or loaded, before any Move text is produced.
"""

from __future__ import annotations

from pathlib import Path


class GutenbergError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Value construction
# ---------------------------------------------------------------------------


class AddressError(GutenbergError, ValueError):
    """An address string could not be parsed."""


class InvalidEncoding(AddressError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid address encoding, expected hexadecimal, got {value}"
        )


class InvalidLength(AddressError):
    def __init__(self, value: str, byte_length: int) -> None:
        self.value = value
        self.byte_length = byte_length
        super().__init__(
            f"Invalid address length, expected 32 bytes, got {byte_length}"
        )


class InvalidIdentifier(GutenbergError, ValueError):
    """A name cannot be turned into a Move identifier."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid identifier {value!r}: {reason}")


class InvalidSymbol(GutenbergError, ValueError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid collection symbol {value!r}: expected 1 to 10 ASCII "
            "alphanumeric characters"
        )


class InvalidRoyalty(GutenbergError, ValueError):
    """Basis points are out of range or shares add up to more than 100%."""


class InvalidFieldName(GutenbergError, ValueError):
    def __init__(self, value: str, reason: str | None = None) -> None:
        self.value = value
        self.reason = reason or (
            "expected a lowercase letter followed by letters, digits or underscores"
        )
        super().__init__(f"Invalid field name {value!r}: {self.reason}")


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


class SchemaLoadError(GutenbergError):
    """A schema file could not be read, parsed or validated."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class RegistryError(GutenbergError):
    """A package, version, revision or object id is not in the registry."""


class UploadError(GutenbergError):
    """An asset failed to upload after all retries."""

    def __init__(self, asset_id: str, message: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Failed to upload asset {asset_id}: {message}")


class StorageAuthError(GutenbergError):
    """A storage backend rejected the configured credentials."""
