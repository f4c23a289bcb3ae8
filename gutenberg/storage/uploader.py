"""Bounded-concurrency asset upload.

Each backend implements :meth:`StorageUploader.upload` for a single asset;
:func:`upload_assets` fans a batch out over an ``asyncio.Semaphore`` and
retries failed assets before giving up.

Typical usage::

    uploader = make_uploader(PinataConfig(jwt=token), UploadConfig())
    await uploader.authenticate()
    uploaded = await upload_assets(uploader, assets, UploadConfig())
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

import httpx

from gutenberg.config import UploadConfig
from gutenberg.errors import StorageAuthError, UploadError
from gutenberg.storage.models import Asset, UploadedAsset
from gutenberg.utils import create_progress, print_success, print_warning


class StorageUploader:
    """Base class for HTTP storage backends.

    Subclasses set ``name``, ``base_url`` and ``auth_path`` and implement
    :meth:`upload`. ``transport`` lets tests swap in ``httpx.MockTransport``.
    """

    name = "storage"
    base_url = ""
    auth_path = "/"
    size_limit = 10 * 1024 * 1024

    def __init__(
        self,
        token: str,
        timeout: int = 60,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.timeout = timeout
        self.transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` carrying the bearer token."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self.transport,
        )

    @staticmethod
    async def _read(asset: Asset) -> bytes:
        return await asyncio.to_thread(Path(asset.path).read_bytes)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def authenticate(self) -> None:
        """Check the credentials against the backend.

        Raises:
            StorageAuthError: If the backend rejects the token or is unreachable.
        """
        try:
            async with self._client() as client:
                response = await client.get(self.auth_path)
        except httpx.HTTPError as exc:
            raise StorageAuthError(f"Cannot reach {self.name}: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise StorageAuthError(f"Invalid {self.name} authentication token")
        if response.is_error:
            raise StorageAuthError(
                f"Error while initializing {self.name} client: HTTP {response.status_code}"
            )

    def prepare(self, assets: Sequence[Asset]) -> None:
        """Reject assets the backend would refuse before uploading anything.

        Raises:
            UploadError: If an asset is missing or exceeds ``size_limit``.
        """
        for asset in assets:
            path = Path(asset.path)
            if not path.is_file():
                raise UploadError(asset.id, f"file not found: {path}")
            size = path.stat().st_size
            if size > self.size_limit:
                raise UploadError(
                    asset.id,
                    f"{path} is {size} bytes, over the {self.size_limit} byte limit of {self.name}",
                )

    async def upload(self, asset: Asset) -> UploadedAsset:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Batch upload
# ---------------------------------------------------------------------------


async def upload_with_retries(
    uploader: StorageUploader, asset: Asset, retries: int
) -> UploadedAsset:
    """Upload one asset, retrying up to *retries* extra times.

    Raises:
        UploadError: Once every attempt has failed.
    """
    last_error: Exception | None = None
    for attempt in range(retries + 1):
        try:
            return await uploader.upload(asset)
        except (httpx.HTTPError, UploadError, KeyError, ValueError) as exc:
            last_error = exc
            if attempt < retries:
                print_warning(f"Retrying {asset.name} ({attempt + 1}/{retries}): {exc}")
    raise UploadError(asset.id, f"{last_error} after {retries + 1} attempts")


async def upload_assets(
    uploader: StorageUploader,
    assets: Sequence[Asset],
    config: UploadConfig | None = None,
    *,
    show_progress: bool = True,
) -> list[UploadedAsset]:
    """Upload *assets* with at most ``config.concurrency`` requests in flight.

    Returns:
        One :class:`UploadedAsset` per input, in input order.

    Raises:
        UploadError: If any asset fails validation or exhausts its retries.
            Uploads still in flight are cancelled.
    """
    config = config or UploadConfig()
    uploader.prepare(assets)
    semaphore = asyncio.Semaphore(config.concurrency)

    async def _upload(index: int, asset: Asset) -> tuple[int, UploadedAsset]:
        async with semaphore:
            return index, await upload_with_retries(uploader, asset, config.retries)

    tasks = [asyncio.create_task(_upload(index, asset)) for index, asset in enumerate(assets)]
    results: dict[int, UploadedAsset] = {}
    try:
        with create_progress(disable=not show_progress) as progress:
            tid = progress.add_task(f"Uploading to {uploader.name}...", total=len(tasks))
            for coro in asyncio.as_completed(tasks):
                index, uploaded = await coro
                results[index] = uploaded
                progress.advance(tid)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    print_success(f"Uploaded {len(results)} assets to {uploader.name}.")
    return [results[index] for index in range(len(assets))]
