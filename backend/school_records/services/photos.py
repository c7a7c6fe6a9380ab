"""
School Records - Photo Service
Student photo upload to the image host and bounded-time retrieval for reports
"""
import asyncio
import logging
from collections.abc import Sequence

import aiohttp

from school_records.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")


class PhotoError(Exception):
    """Base photo handling error."""
    pass


class PhotoUploadError(PhotoError):
    """The image host rejected or failed the upload."""
    pass


class PhotoFetchError(PhotoError):
    """A photo could not be downloaded."""
    pass


class PhotoFetcher:
    """
    Downloads student photos for report thumbnails.

    Every fetch is bounded by ``timeout`` seconds. Failures are logged and
    reported as ``None`` so a missing photo never blocks a report.
    """

    def __init__(self, timeout: float | None = None, max_bytes: int | None = None):
        self.timeout = timeout if timeout is not None else settings.PHOTO_FETCH_TIMEOUT_SECONDS
        self.max_bytes = max_bytes if max_bytes is not None else settings.MAX_PHOTO_BYTES * 4

    async def _download(self, http: aiohttp.ClientSession, url: str) -> bytes:
        async with http.get(url) as response:
            if response.status != 200:
                raise PhotoFetchError(f"HTTP {response.status} for {url}")
            content = await response.read()
            if len(content) > self.max_bytes:
                raise PhotoFetchError(f"Photo too large ({len(content)} bytes)")
            return content

    async def fetch(self, http: aiohttp.ClientSession, url: str) -> bytes | None:
        if not url.startswith(("http://", "https://")):
            logger.warning("Skipping photo with unsupported URL: %s", url)
            return None
        try:
            return await asyncio.wait_for(self._download(http, url), timeout=self.timeout)
        except (asyncio.TimeoutError, aiohttp.ClientError, PhotoFetchError) as e:
            logger.warning("Photo fetch failed for %s: %s", url, e)
            return None

    async def fetch_many(self, urls: Sequence[str | None]) -> list[bytes | None]:
        """
        Fetch photos concurrently.

        The result is positionally aligned with ``urls`` whatever order the
        downloads finish in; ``None`` entries stay ``None``.
        """
        if not any(urls):
            return [None] * len(urls)

        async def _one(http: aiohttp.ClientSession, url: str | None) -> bytes | None:
            if not url:
                return None
            return await self.fetch(http, url)

        async with aiohttp.ClientSession() as http:
            return list(await asyncio.gather(*(_one(http, url) for url in urls)))


class ImageHostClient:
    """Multipart upload client for the external image host."""

    def __init__(
        self,
        upload_url: str | None = None,
        api_key: str | None = None,
        folder: str | None = None,
        max_bytes: int | None = None,
    ):
        self.upload_url = upload_url if upload_url is not None else settings.IMAGE_HOST_UPLOAD_URL
        self.api_key = api_key if api_key is not None else settings.IMAGE_HOST_API_KEY
        self.folder = folder or settings.IMAGE_HOST_FOLDER
        self.max_bytes = max_bytes or settings.MAX_PHOTO_BYTES

    def validate(self, content: bytes, content_type: str | None) -> None:
        """Reject uploads before any network call."""
        if not content:
            raise ValueError("Photo file is empty")
        if len(content) > self.max_bytes:
            raise ValueError(f"Photo exceeds the {self.max_bytes // 1024} KB limit")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValueError(f"Unsupported photo type: {content_type}")

    async def upload(self, content: bytes, filename: str, content_type: str) -> str:
        """
        Upload a photo and return its stable URL.

        Raises:
            ValueError: If the file fails validation
            PhotoUploadError: If the host is not configured or the upload fails
        """
        self.validate(content, content_type)
        if not self.upload_url:
            raise PhotoUploadError("Image host is not configured")

        form = aiohttp.FormData()
        form.add_field("file", content, filename=filename, content_type=content_type)
        form.add_field("folder", self.folder)
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        try:
            timeout = aiohttp.ClientTimeout(total=settings.PHOTO_FETCH_TIMEOUT_SECONDS * 4)
            async with aiohttp.ClientSession(timeout=timeout) as http:
                async with http.post(self.upload_url, data=form, headers=headers) as response:
                    if response.status >= 300:
                        body = await response.text()
                        raise PhotoUploadError(f"Image host returned {response.status}: {body[:200]}")
                    payload = await response.json(content_type=None)
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            logger.error("Photo upload failed: %s", e)
            raise PhotoUploadError("Failed to upload photo") from e

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise PhotoUploadError("Image host response did not include a URL")
        logger.info("Uploaded photo %s to %s", filename, url)
        return url
