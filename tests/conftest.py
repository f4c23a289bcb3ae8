"""Shared pytest fixtures for the gutenberg test suite.

Provides reusable fixtures for:
- Schema dictionaries in wire form (full-featured and minimal)
- Validated ``Schema`` instances built from them
- The bundled package registry and a small in-memory registry
- Temporary contract output directories
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from gutenberg.config import GeneratorConfig
from gutenberg.models import Schema
from gutenberg.registry import PackageRegistry

CREATOR = "0x1225dd576b9fa621fb2aab078f82b88bf6c5a9260dbac34f7b1010917bd795ed"
SECOND_CREATOR = "0x30f1ee29f5d8763a75c042122eaa795fb60c25ca256c5ee469a57c33590c59d3"

NFT_PROTOCOL_V1_REV = "95d16538dc7688dd4c4a5e7c3348bf3addf9c310"
NFT_PROTOCOL_V1_2_REV = "93f6cd0b8966354b1b00e7d798cbfddaa867a07b"


# ---------------------------------------------------------------------------
# Schema dictionaries
# ---------------------------------------------------------------------------

SUIMARINES: dict[str, Any] = {
    "packageName": "suimarines",
    "collection": {
        "name": "Suimarines",
        "description": "A unique NFT collection of Suimarines on Sui",
        "symbol": "SUIM",
        "url": "https://originbyte.io/",
        "creators": [CREATOR],
        "tags": ["Art", "ProfilePicture"],
        "supply": {"enforced": 600},
        "royalties": {
            "proportional": {
                "shares": [{"address": CREATOR, "shareBps": 10000}],
                "collectionRoyaltyBps": 100,
            }
        },
    },
    "nft": {
        "typeName": "Submarine",
        "burn": "permissionless",
        "dynamic": True,
        "mintCap": "unlimited",
        "mintPolicies": {"launchpad": True, "airdrop": True},
        "requestPolicies": {"transfer": True, "withdraw": False, "borrow": False},
        "orderbook": "protected",
        "fields": [
            ["name", "string"],
            ["description", "string"],
            ["url", "url"],
            ["attributes", "attributes"],
        ],
    },
}

MINIMAL: dict[str, Any] = {
    "packageName": "plain",
    "collection": {"name": "Plain"},
    "nft": {"typeName": "Token"},
}


@pytest.fixture
def suimarines_dict() -> dict[str, Any]:
    """Fully featured schema in wire form (deep copy, safe to mutate)."""
    return copy.deepcopy(SUIMARINES)


@pytest.fixture
def minimal_dict() -> dict[str, Any]:
    """Schema with every optional feature left at its default."""
    return copy.deepcopy(MINIMAL)


@pytest.fixture
def suimarines(suimarines_dict: dict[str, Any]) -> Schema:
    return Schema.model_validate(suimarines_dict)


@pytest.fixture
def minimal_schema(minimal_dict: dict[str, Any]) -> Schema:
    return Schema.model_validate(minimal_dict)


@pytest.fixture
def make_schema(suimarines_dict: dict[str, Any]):
    """Factory: the suimarines schema with NFT-level overrides applied."""

    def _make(**nft_overrides: Any) -> Schema:
        data = copy.deepcopy(suimarines_dict)
        data["nft"].update(nft_overrides)
        return Schema.model_validate(data)

    return _make


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def registry() -> PackageRegistry:
    """The mainnet registry shipped with the package."""
    return PackageRegistry.load()


def _package(name: str, version: str, rev: str, published_at: str | None) -> dict[str, Any]:
    return {
        "package": {
            "name": name,
            "version": version,
            "flavor": "Mainnet",
            "publishedAt": published_at,
        },
        "contractRef": {
            "path": {
                "git": "https://example.com/protocol.git",
                "subdir": f"contracts/{name.lower()}",
                "rev": rev,
            },
            "objectId": published_at,
        },
        "dependencies": {},
    }


@pytest.fixture
def registry_dict() -> dict[str, Any]:
    """Two-release registry covering every package a manifest needs."""
    data: dict[str, Any] = {}
    for name in ("NftProtocol", "Launchpad", "LiquidityLayerV1"):
        data[name] = {
            "1.0.0": _package(name, "1.0.0", "aaa111", "0x1"),
            "2.0.0": _package(name, "2.0.0", "bbb222", "0x2"),
        }
    for version, rev in (("1.0.0", "sui-old"), ("2.0.0", "sui-new")):
        data["NftProtocol"][version]["dependencies"] = {
            "Sui": {
                "path": {"git": "https://example.com/sui.git", "subdir": "framework", "rev": rev},
                "objectId": "0x2",
            },
            "Originmate": {
                "path": {"git": "https://example.com/originmate.git", "subdir": "", "rev": rev},
                "objectId": None,
            },
        }
    return data


@pytest.fixture
def small_registry(registry_dict: dict[str, Any]) -> PackageRegistry:
    return PackageRegistry.from_dict(registry_dict)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@pytest.fixture
def contract_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated contract packages."""
    return tmp_path / "contract"


@pytest.fixture
def generator_config(contract_dir: Path) -> GeneratorConfig:
    return GeneratorConfig(output_dir=contract_dir)
