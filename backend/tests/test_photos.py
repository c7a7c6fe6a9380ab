"""
School Records - Photo Service Tests
"""
import asyncio

import pytest
from httpx import AsyncClient

from school_records.services.photos import ImageHostClient, PhotoFetcher, PhotoFetchError


class ScriptedFetcher(PhotoFetcher):
    """Serves downloads from a script instead of the network."""

    def __init__(self, script, timeout=0.2):
        super().__init__(timeout=timeout)
        self.script = script

    async def _download(self, http, url):
        delay, result = self.script[url]
        await asyncio.sleep(delay)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.mark.asyncio
async def test_fetch_many_keeps_order_and_drops_failures():
    fetcher = ScriptedFetcher({
        "https://img.test/slow.png": (0.05, b"slow"),
        "https://img.test/fast.png": (0, b"fast"),
        "https://img.test/missing.png": (0, PhotoFetchError("HTTP 404")),
        "https://img.test/hung.png": (5, b"never"),
    })
    urls = [
        "https://img.test/slow.png",
        None,
        "https://img.test/missing.png",
        "https://img.test/hung.png",
        "https://img.test/fast.png",
        "ftp://img.test/other.png",
    ]

    photos = await fetcher.fetch_many(urls)
    assert photos == [b"slow", None, None, None, b"fast", None]


@pytest.mark.asyncio
async def test_fetch_many_without_urls():
    assert await PhotoFetcher().fetch_many([None, None]) == [None, None]


def test_upload_validation():
    client = ImageHostClient(upload_url="https://img.test/upload", max_bytes=10)
    client.validate(b"123", "image/png")
    with pytest.raises(ValueError, match="empty"):
        client.validate(b"", "image/png")
    with pytest.raises(ValueError, match="limit"):
        client.validate(b"x" * 11, "image/png")
    with pytest.raises(ValueError, match="Unsupported"):
        client.validate(b"123", "application/pdf")


@pytest.mark.asyncio
async def test_upload_endpoint_rejects_non_images(client: AsyncClient, teacher_headers):
    response = await client.post(
        "/api/photos",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=teacher_headers,
    )
    assert response.status_code == 400
    assert "Unsupported photo type" in response.json()["message"]
