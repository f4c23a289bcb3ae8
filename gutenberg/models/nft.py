"""NFT-level configuration: field layout and mint, burn and trading policies."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import Field as PydanticField
from pydantic import RootModel, field_validator, model_serializer, model_validator

from gutenberg.errors import InvalidFieldName, InvalidIdentifier
from gutenberg.models.base import MOVE_KEYWORDS, SchemaModel, ValueModel, identifier
from gutenberg.models.collection import U64_MAX
from gutenberg.models.composability import Composability

_FIELD_NAME = re.compile(r"^[a-z][A-Za-z0-9_]*$")

# Struct members that every generated NFT already has.
RESERVED_FIELD_NAMES = frozenset({"id"})

# Parameters and locals the generated functions declare next to field
# parameters.  A field parameter with one of these names would shadow or
# duplicate it.
RESERVED_PARAM_NAMES = frozenset(
    {
        "borrow",
        "collection",
        "ctx",
        "delegated_witness",
        "guard",
        "inventory_id",
        "kiosk",
        "listing",
        "mint_cap",
        "nft",
        "nft_id",
        "policy",
        "publisher",
        "receiver",
        "warehouse",
        "withdraw_request",
        "witness",
    }
)

# Suffixes of the dynamic setters generated for every field.
SETTER_SUFFIXES = ("_as_publisher", "_in_kiosk", "_in_kiosk_as_publisher")

# Types every generated module declares itself.
RESERVED_TYPE_NAMES = frozenset({"Witness"})


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class FieldType(str, Enum):
    STRING = "string"
    URL = "url"
    ATTRIBUTES = "attributes"

    @classmethod
    def _missing_(cls, value: object) -> "FieldType | None":
        # Accept the capitalised variant spelling, e.g. "String".
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class Field(ValueModel):
    """One NFT attribute, serialized as ``[name, type]``."""

    name: str
    type: FieldType

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"expected [name, type], got {list(data)!r}")
            return {"name": data[0], "type": data[1]}
        return data

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _FIELD_NAME.match(value):
            raise InvalidFieldName(value)
        if value in RESERVED_FIELD_NAMES or value in MOVE_KEYWORDS:
            raise InvalidFieldName(value, "name is reserved in Move")
        return value

    @model_validator(mode="after")
    def _check_params(self) -> "Field":
        for param in {self.name, *self.params()}:
            if param in RESERVED_PARAM_NAMES:
                raise InvalidFieldName(
                    self.name, f"{param!r} is a parameter of the generated functions"
                )
        return self

    @model_serializer(mode="plain")
    def _to_pair(self) -> list[str]:
        return [self.name, self.type.value]

    def params(self) -> list[str]:
        """Parameter names this field contributes to constructor signatures."""
        if self.type is FieldType.ATTRIBUTES:
            return [f"{self.name}_keys", f"{self.name}_values"]
        return [self.name]


class Fields(RootModel[list[Field]]):
    """Ordered field list.

    Order is load-bearing: it fixes the parameter order of every generated
    constructor and the member order of the NFT struct.
    """

    root: list[Field] = PydanticField(default_factory=list)

    @field_validator("root")
    @classmethod
    def _unique_names(cls, fields: list[Field]) -> list[Field]:
        seen: set[str] = set()
        for field in fields:
            if field.name in seen:
                raise ValueError(f"duplicate field name {field.name!r}")
            seen.add(field.name)

        params: set[str] = set()
        for field in fields:
            for param in field.params():
                if param in params:
                    raise ValueError(f"field {field.name!r} repeats the parameter {param!r}")
                params.add(param)

        for field in fields:
            for suffix in SETTER_SUFFIXES:
                if field.name + suffix in seen:
                    raise ValueError(
                        f"setters of {field.name!r} collide with field {field.name + suffix!r}"
                    )
        return fields

    @classmethod
    def demo(cls) -> "Fields":
        return cls(
            [
                Field(name="name", type=FieldType.STRING),
                Field(name="description", type=FieldType.STRING),
                Field(name="url", type=FieldType.URL),
                Field(name="attributes", type=FieldType.ATTRIBUTES),
            ]
        )

    def __iter__(self):  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def keys(self) -> list[str]:
        return [field.name for field in self.root]

    def params(self) -> list[str]:
        return [param for field in self.root for param in field.params()]

    def find(self, field_type: FieldType) -> Field | None:
        """First field of *field_type*, if any."""
        return next((field for field in self.root if field.type is field_type), None)


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class Burn(str, Enum):
    PERMISSIONED = "permissioned"
    PERMISSIONLESS = "permissionless"

    @classmethod
    def _missing_(cls, value: object) -> "Burn | None":
        if isinstance(value, str):
            return next((m for m in cls if m.value == value.lower()), None)
        return None


class Orderbook(str, Enum):
    UNPROTECTED = "unprotected"
    PROTECTED = "protected"

    @classmethod
    def _missing_(cls, value: object) -> "Orderbook | None":
        if isinstance(value, str):
            return next((m for m in cls if m.value == value.lower()), None)
        return None


class Dynamic(RootModel[bool]):
    """Whether NFT fields may be mutated after mint."""

    model_config = {"frozen": True}

    root: bool = False

    def is_dynamic(self) -> bool:
        return self.root


class MintCap(ValueModel):
    """Supply limit of the mint capability; ``None`` means unlimited.

    Wire form is ``"unlimited"`` or an integer.
    """

    supply: int | None = PydanticField(default=None, ge=0, le=U64_MAX)

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        if isinstance(data, str) and data.lower() == "unlimited":
            return {"supply": None}
        if isinstance(data, int) and not isinstance(data, bool):
            return {"supply": data}
        return data

    @model_serializer(mode="plain")
    def _to_wire(self) -> str | int:
        return "unlimited" if self.supply is None else self.supply

    @classmethod
    def unlimited(cls) -> "MintCap":
        return cls(supply=None)

    @classmethod
    def limited(cls, supply: int) -> "MintCap":
        return cls(supply=supply)

    def is_limited(self) -> bool:
        return self.supply is not None


class MintPolicies(ValueModel):
    launchpad: bool = False
    airdrop: bool = True


class RequestPolicies(ValueModel):
    transfer: bool = False
    withdraw: bool = False
    borrow: bool = False


# ---------------------------------------------------------------------------
# NftData
# ---------------------------------------------------------------------------


class NftData(SchemaModel):
    """Shape and policies of the NFT type a collection mints."""

    type_name: str
    burn: Burn | None = None
    dynamic: Dynamic = PydanticField(default_factory=Dynamic)
    mint_cap: MintCap = PydanticField(default_factory=MintCap.unlimited)
    mint_policies: MintPolicies = PydanticField(default_factory=MintPolicies)
    request_policies: RequestPolicies = PydanticField(default_factory=RequestPolicies)
    orderbook: Orderbook | None = None
    fields: Fields = PydanticField(default_factory=Fields)
    composability: Composability | None = None

    @field_validator("type_name")
    @classmethod
    def _check_type_name(cls, value: str) -> str:
        name = identifier(value, what="NFT type name")
        if name in RESERVED_TYPE_NAMES:
            raise InvalidIdentifier(value, f"{name} is declared by every generated module")
        if not name[0].isupper():
            raise InvalidIdentifier(value, "struct names must start with an uppercase letter")
        if name == name.upper():
            raise InvalidIdentifier(
                value, "type name must contain a lowercase letter to differ from its witness"
            )
        return value

    @model_validator(mode="after")
    def _check_markers(self) -> "NftData":
        if self.composability is not None and self.witness_name() in self.composability.types:
            raise InvalidIdentifier(
                self.witness_name(), "composable type collides with the module witness"
            )
        return self

    @field_validator("orderbook", mode="before")
    @classmethod
    def _none_orderbook(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() == "none":
            return None
        return value

    # ------------------------------------------------------------------
    # Derived names
    # ------------------------------------------------------------------

    def type_name_normalized(self) -> str:
        return identifier(self.type_name, what="NFT type name")

    def module_name(self) -> str:
        return self.type_name_normalized().lower()

    def witness_name(self) -> str:
        return self.type_name_normalized().upper()

    # ------------------------------------------------------------------
    # Derived requirements
    # ------------------------------------------------------------------

    def requires_transfer(self) -> bool:
        return self.request_policies.transfer or self.orderbook is not None

    def requires_withdraw(self) -> bool:
        return self.request_policies.withdraw or self.burn is not None

    def requires_borrow(self) -> bool:
        return self.request_policies.borrow or self.dynamic.is_dynamic()

    def requires_confirm(self) -> bool:
        """Whether burning must sign the withdraw request with the contract witness.

        True when the withdraw policy exists only to guard burning, in which
        case it is locked to this contract.
        """
        return not self.request_policies.withdraw

    def requires_listing(self) -> bool:
        """Whether burn entry points for NFTs held in launchpad listings are needed."""
        return self.mint_policies.launchpad

    def enforce_demo(self) -> None:
        """Clamp every feature that is not available in demo mode."""
        self.burn = None
        self.dynamic = Dynamic(False)
        self.mint_cap = MintCap.limited(100)
        self.request_policies = RequestPolicies(transfer=False, withdraw=False, borrow=False)
        self.orderbook = None
        self.composability = None
        self.fields = Fields.demo()
