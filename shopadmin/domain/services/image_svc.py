# shopadmin/domain/services/image_svc.py

from __future__ import annotations
from typing import Optional
from urllib.parse import urlparse
import logging
import posixpath

import httpx

from shopadmin.db.content_store import ContentStore

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    pass


class ImageService:
    """
    Turns incoming images (uploaded bytes or a remote URL) into assets stored
    next to the content, and returns the asset id to reference.
    """

    def __init__(
        self,
        store: ContentStore,
        timeout_s: float = 15,
        max_bytes: int = 10 * 1024 * 1024,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.timeout_s = timeout_s
        self.max_bytes = max_bytes
        self.transport = transport  # injectable for tests

    async def upload_bytes(self, data: bytes, filename: str, content_type: Optional[str]) -> str:
        if not data:
            raise ImageUploadError("empty file")
        if len(data) > self.max_bytes:
            raise ImageUploadError(f"file too large ({len(data)} bytes)")
        ctype = content_type or "application/octet-stream"
        if not ctype.startswith("image/"):
            raise ImageUploadError(f"not an image: {ctype}")
        return await self.store.upload_asset(data, filename or "image", ctype)

    async def import_from_url(self, url: str) -> str:
        """
        Fetch `url` and store it as an asset. URLs that already point at one of
        our assets are referenced as-is (edit forms send the current image back).
        """
        own = self.store.asset_id_from_url(url)
        if own:
            logger.debug("image url is a local asset id=%s", own)
            return own

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport, follow_redirects=True) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("image fetch failed url=%s err=%s", url, e)
            raise ImageUploadError(f"Failed to fetch image: {e}") from e

        ctype = response.headers.get("content-type", "image/jpeg").split(";", 1)[0].strip()
        filename = posixpath.basename(urlparse(url).path) or "image.jpg"
        asset_id = await self.upload_bytes(response.content, filename, ctype)
        logger.info("image imported url=%s asset_id=%s bytes=%s", url, asset_id, len(response.content))
        return asset_id
