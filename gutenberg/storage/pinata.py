"""Pinata IPFS pinning backend."""

from __future__ import annotations

import httpx

from gutenberg.storage.models import Asset, PinataConfig, UploadedAsset
from gutenberg.storage.uploader import StorageUploader

UPLOAD_ENDPOINT = "/pinning/pinFileToIPFS"
AUTH_ENDPOINT = "/data/testAuthentication"


class PinataUploader(StorageUploader):
    """Pins each asset inside its own directory so links keep the file name."""

    name = "Pinata"
    auth_path = AUTH_ENDPOINT

    def __init__(
        self,
        config: PinataConfig,
        timeout: int = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config.jwt, timeout, transport)
        self.base_url = config.upload_gateway.rstrip("/")
        self.retrieval_gateway = config.retrieval_gateway

    async def upload(self, asset: Asset) -> UploadedAsset:
        content = await self._read(asset)
        async with self._client() as client:
            response = await client.post(
                UPLOAD_ENDPOINT,
                files={"file": (asset.name, content, asset.content_type)},
                data={"pinataOptions": '{"wrapWithDirectory": true}'},
            )
            response.raise_for_status()
            ipfs_hash = response.json()["IpfsHash"]

        link = httpx.URL(self.retrieval_gateway).join(f"/ipfs/{ipfs_hash}/{asset.name}")
        return UploadedAsset(id=asset.id, link=str(link))
