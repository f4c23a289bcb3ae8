"""nft.storage backend."""

from __future__ import annotations

import httpx

from gutenberg.errors import UploadError
from gutenberg.storage.models import Asset, NftStorageConfig, UploadedAsset
from gutenberg.storage.uploader import StorageUploader

UPLOAD_ENDPOINT = "/upload"


class NftStorageUploader(StorageUploader):
    name = "nft.storage"
    auth_path = "/"
    size_limit = 100 * 1024 * 1024

    def __init__(
        self,
        config: NftStorageConfig,
        timeout: int = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config.auth_token, timeout, transport)
        self.base_url = config.api_url.rstrip("/")
        self.retrieval_gateway = config.retrieval_gateway.rstrip("/")

    async def upload(self, asset: Asset) -> UploadedAsset:
        content = await self._read(asset)
        async with self._client() as client:
            response = await client.post(
                UPLOAD_ENDPOINT,
                files={"file": (asset.name, content, asset.content_type)},
            )
            response.raise_for_status()
            body = response.json()

        if not body.get("ok"):
            raise UploadError(asset.id, f"nft.storage rejected the upload: {body}")
        cid = body["value"]["cid"]
        return UploadedAsset(id=asset.id, link=f"{self.retrieval_gateway}/{cid}")
