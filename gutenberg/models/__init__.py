"""Schema value model: collection metadata, NFT layout and policies."""

from gutenberg.models.address import Address
from gutenberg.models.collection import (
    CollectionData,
    RoyaltyPolicy,
    Share,
    Supply,
    SupplyKind,
    Tag,
    Tags,
)
from gutenberg.models.composability import Composability, Relationship
from gutenberg.models.nft import (
    Burn,
    Dynamic,
    Field,
    Fields,
    FieldType,
    MintCap,
    MintPolicies,
    NftData,
    Orderbook,
    RequestPolicies,
)
from gutenberg.models.schema import Schema

__all__ = [
    "Address",
    "Burn",
    "CollectionData",
    "Composability",
    "Dynamic",
    "Field",
    "FieldType",
    "Fields",
    "MintCap",
    "MintPolicies",
    "NftData",
    "Orderbook",
    "Relationship",
    "RequestPolicies",
    "RoyaltyPolicy",
    "Schema",
    "Share",
    "Supply",
    "SupplyKind",
    "Tag",
    "Tags",
]
