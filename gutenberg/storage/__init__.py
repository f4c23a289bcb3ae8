"""Off-chain asset storage for NFT media."""

from __future__ import annotations

import httpx

from gutenberg.config import UploadConfig
from gutenberg.storage.models import (
    Asset,
    NftStorageConfig,
    PinataConfig,
    StorageConfig,
    UploadedAsset,
)
from gutenberg.storage.nft_storage import NftStorageUploader
from gutenberg.storage.pinata import PinataUploader
from gutenberg.storage.uploader import StorageUploader, upload_assets, upload_with_retries


def make_uploader(
    config: PinataConfig | NftStorageConfig,
    upload: UploadConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> StorageUploader:
    """Uploader for the backend *config* selects."""
    timeout = (upload or UploadConfig()).timeout
    if isinstance(config, PinataConfig):
        return PinataUploader(config, timeout, transport)
    return NftStorageUploader(config, timeout, transport)


__all__ = [
    "Asset",
    "NftStorageConfig",
    "NftStorageUploader",
    "PinataConfig",
    "PinataUploader",
    "StorageConfig",
    "StorageUploader",
    "UploadedAsset",
    "make_uploader",
    "upload_assets",
    "upload_with_retries",
]
