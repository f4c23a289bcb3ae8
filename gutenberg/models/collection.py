"""Collection-level configuration: metadata, tags, supply and royalties."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    AnyHttpUrl,
    Field,
    RootModel,
    SerializerFunctionWrapHandler,
    TypeAdapter,
    field_validator,
    model_serializer,
    model_validator,
)

from gutenberg.errors import InvalidRoyalty, InvalidSymbol
from gutenberg.models.address import Address
from gutenberg.models.base import SchemaModel, ValueModel
from gutenberg.utils import sanitize_display

MAX_BPS = 10_000
U64_MAX = 2**64 - 1
MAX_SYMBOL_LENGTH = 10

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------

# Tag spelling -> constructor in ``nft_protocol::tags``.
KNOWN_TAGS: dict[str, str] = {
    "Art": "art",
    "ProfilePicture": "profile_picture",
    "Collectible": "collectible",
    "GameAsset": "game_asset",
    "TokenisedAsset": "tokenised_asset",
    "DomainName": "domain_name",
    "Music": "music",
    "Video": "video",
    "Ticket": "ticket",
    "License": "license",
}


class Tag(RootModel[str]):
    """A collection category; unknown spellings are kept as custom tags."""

    model_config = {"frozen": True}

    @property
    def function_name(self) -> str | None:
        """The ``nft_protocol::tags`` constructor, or ``None`` for custom tags."""
        return KNOWN_TAGS.get(self.root)

    @property
    def is_custom(self) -> bool:
        return self.root not in KNOWN_TAGS

    def __str__(self) -> str:
        return self.root


class Tags(RootModel[list[Tag]]):
    """Ordered tag list; duplicates are allowed and order is preserved."""

    root: list[Tag] = Field(default_factory=list)

    @classmethod
    def new(cls, tags: list[str]) -> "Tags":
        return cls([Tag(tag) for tag in tags])

    def has_tags(self) -> bool:
        return bool(self.root)

    def __iter__(self):  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)


# ---------------------------------------------------------------------------
# Supply
# ---------------------------------------------------------------------------


class SupplyKind(str, Enum):
    UNTRACKED = "untracked"
    TRACKED = "tracked"
    ENFORCED = "enforced"


class Supply(ValueModel):
    """Collection-level supply accounting.

    Wire form is ``"untracked"``, ``"tracked"`` or ``{"enforced": n}``.
    """

    kind: SupplyKind = SupplyKind.UNTRACKED
    limit: int | None = Field(default=None, ge=0, le=U64_MAX)

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"kind": data.lower()}
        if isinstance(data, dict) and len(data) == 1:
            (key, value), = data.items()
            if isinstance(key, str) and key.lower() == SupplyKind.ENFORCED.value:
                return {"kind": SupplyKind.ENFORCED, "limit": value}
        return data

    @model_validator(mode="after")
    def _check_limit(self) -> "Supply":
        if self.kind is SupplyKind.ENFORCED and self.limit is None:
            raise ValueError("enforced supply requires a limit")
        if self.kind is not SupplyKind.ENFORCED and self.limit is not None:
            raise ValueError(f"{self.kind.value} supply does not take a limit")
        return self

    @model_serializer(mode="plain")
    def _to_wire(self) -> str | dict[str, int]:
        if self.kind is SupplyKind.ENFORCED:
            return {"enforced": self.limit}
        return self.kind.value

    @classmethod
    def untracked(cls) -> "Supply":
        return cls(kind=SupplyKind.UNTRACKED)

    @classmethod
    def tracked(cls) -> "Supply":
        return cls(kind=SupplyKind.TRACKED)

    @classmethod
    def enforced(cls, limit: int) -> "Supply":
        return cls(kind=SupplyKind.ENFORCED, limit=limit)

    def requires_collection(self) -> bool:
        """Whether mint and burn must take ``&mut Collection`` to count supply."""
        return self.kind is not SupplyKind.UNTRACKED

    @property
    def max_supply(self) -> int:
        """Ceiling written on chain; tracked supply uses the u64 maximum."""
        return self.limit if self.limit is not None else U64_MAX


# ---------------------------------------------------------------------------
# Royalties
# ---------------------------------------------------------------------------


class Share(ValueModel):
    """One royalty beneficiary and their share of the royalty in basis points."""

    address: Address
    share_bps: int = Field(ge=0)

    @field_validator("share_bps")
    @classmethod
    def _check_bps(cls, value: int) -> int:
        if value > MAX_BPS:
            raise InvalidRoyalty(f"Share of {value} bps exceeds {MAX_BPS} bps")
        return value

    def sort_key(self) -> tuple[str, int]:
        return (self.address.hex, self.share_bps)


class RoyaltyPolicy(ValueModel):
    """Proportional royalty split.

    Shares form a set: duplicates collapse and the result is ordered by
    address then bps, so generated code never depends on input order.  The
    sum of all shares may not exceed 10,000 bps.
    """

    shares: tuple[Share, ...] = ()
    collection_royalty_bps: int = Field(ge=0)

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and set(data) == {"proportional"}:
            return data["proportional"]
        return data

    @field_validator("shares")
    @classmethod
    def _as_set(cls, shares: tuple[Share, ...]) -> tuple[Share, ...]:
        unique = sorted(set(shares), key=Share.sort_key)
        total = sum(share.share_bps for share in unique)
        if total > MAX_BPS:
            raise InvalidRoyalty(
                f"Royalty shares add up to {total} bps, at most {MAX_BPS} bps allowed"
            )
        return tuple(unique)

    @field_validator("collection_royalty_bps")
    @classmethod
    def _check_collection_bps(cls, value: int) -> int:
        if value > MAX_BPS:
            raise InvalidRoyalty(
                f"Collection royalty of {value} bps exceeds {MAX_BPS} bps"
            )
        return value

    @model_serializer(mode="wrap")
    def _wrap(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {"proportional": handler(self)}

    @classmethod
    def proportional(
        cls, shares: list[Share] | tuple[Share, ...], collection_royalty_bps: int
    ) -> "RoyaltyPolicy":
        return cls(shares=tuple(shares), collection_royalty_bps=collection_royalty_bps)

    def beneficiaries(self) -> list[Address]:
        return [share.address for share in self.shares]


# ---------------------------------------------------------------------------
# CollectionData
# ---------------------------------------------------------------------------


class CollectionData(SchemaModel):
    """Metadata and collection-wide policies of one NFT collection.

    ``name`` and ``description`` are stored as given; use
    :attr:`display_name` / :attr:`display_description` for text that is
    embedded in generated source.
    """

    name: str
    description: str | None = None
    symbol: str | None = None
    url: str | None = None
    creators: list[Address] = Field(default_factory=list)
    tags: Tags | None = None
    supply: Supply = Field(default_factory=Supply.untracked)
    royalties: RoyaltyPolicy | None = None

    @field_validator("symbol")
    @classmethod
    def _check_symbol(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if not (
            1 <= len(value) <= MAX_SYMBOL_LENGTH
            and value.isascii()
            and value.isalnum()
        ):
            raise InvalidSymbol(value)
        return value

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return str(_URL_ADAPTER.validate_python(value))

    @field_validator("supply", mode="before")
    @classmethod
    def _default_supply(cls, value: Any) -> Any:
        return Supply.untracked() if value is None else value

    # ------------------------------------------------------------------
    # Sanitised accessors
    # ------------------------------------------------------------------

    @property
    def display_name(self) -> str:
        return sanitize_display(self.name)

    @property
    def display_description(self) -> str | None:
        if self.description is None:
            return None
        return sanitize_display(self.description)

    @property
    def display_url(self) -> str | None:
        if self.url is None:
            return None
        return sanitize_display(self.url)

    # ------------------------------------------------------------------
    # Derived requirements
    # ------------------------------------------------------------------

    def has_royalties(self) -> bool:
        return self.royalties is not None

    def has_tags(self) -> bool:
        return self.tags is not None and self.tags.has_tags()

    def requires_collection(self) -> bool:
        """Whether ``&mut Collection`` must be passed into mint and burn."""
        return self.supply.requires_collection()

    def enforce_demo(self) -> None:
        """Disable collection features unavailable in demo mode."""
        self.supply = Supply.untracked()
        self.royalties = None
