"""Assets, upload results and storage backend settings."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class Asset(BaseModel):
    """A local file destined for off-chain storage."""

    id: str = Field(..., description="Caller-chosen key, e.g. the NFT index")
    name: str = Field(..., description="File name used on the storage side")
    path: Path
    content_type: str = Field(default="application/octet-stream")

    @classmethod
    def from_path(cls, asset_id: str, path: Path, content_type: str) -> "Asset":
        return cls(id=asset_id, name=path.name, path=path, content_type=content_type)


class UploadedAsset(BaseModel):
    id: str
    link: str = Field(..., description="Public retrieval URL")


class PinataConfig(BaseModel):
    kind: Literal["pinata"] = "pinata"
    jwt: str = Field(..., repr=False)
    upload_gateway: str = Field(default="https://api.pinata.cloud")
    retrieval_gateway: str = Field(default="https://gateway.pinata.cloud")


class NftStorageConfig(BaseModel):
    kind: Literal["nft_storage"] = "nft_storage"
    auth_token: str = Field(..., repr=False)
    api_url: str = Field(default="https://api.nft.storage")
    retrieval_gateway: str = Field(default="https://nftstorage.link/ipfs")


StorageConfig = Annotated[Union[PinataConfig, NftStorageConfig], Field(discriminator="kind")]
