"""32-byte Sui address value type."""

from __future__ import annotations

import string
from functools import total_ordering
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from gutenberg.errors import InvalidEncoding, InvalidLength

ADDRESS_HEX_LENGTH = 64

_HEX_DIGITS = frozenset(string.hexdigits)


@total_ordering
class Address:
    """A 32-byte address held as 64 lowercase hex characters.

    Input may carry a ``0x`` prefix and may omit leading zeroes; both are
    normalised away so ``Address("0x2") == Address("0002")``.  ``str()``
    always yields the ``0x``-prefixed, fully padded form.

    Raises:
        InvalidEncoding: If the input contains non-hex characters.
        InvalidLength: If the input is longer than 32 bytes.
    """

    __slots__ = ("_hex",)

    def __init__(self, value: str) -> None:
        raw = value.strip()
        if raw[:2].lower() == "0x":
            raw = raw[2:]

        if not all(char in _HEX_DIGITS for char in raw):
            raise InvalidEncoding(value)
        if len(raw) > ADDRESS_HEX_LENGTH:
            raise InvalidLength(value, (len(raw) + 1) // 2)

        self._hex = raw.lower().rjust(ADDRESS_HEX_LENGTH, "0")

    @classmethod
    def zero(cls) -> "Address":
        return cls("0x0")

    @property
    def hex(self) -> str:
        """The 64 hex characters without prefix."""
        return self._hex

    def __str__(self) -> str:
        return f"0x{self._hex}"

    def __repr__(self) -> str:
        return f"Address('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._hex == other._hex

    def __lt__(self, other: "Address") -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._hex < other._hex

    def __hash__(self) -> int:
        return hash(self._hex)

    # ------------------------------------------------------------------
    # Pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def _coerce(cls, value: Any) -> "Address":
        if isinstance(value, Address):
            return value
        if not isinstance(value, str):
            raise InvalidEncoding(repr(value))
        return cls(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )
