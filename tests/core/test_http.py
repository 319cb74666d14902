"""Tests for enrollhub/core/http.py - HTTP client factory."""

import anyio
import httpx
import pytest

from enrollhub.core import http as http_module


async def _close_and_reset_image_client_async() -> None:
    if http_module._image_client is not None:
        await http_module._image_client.aclose()
    http_module._image_client = None


def _close_and_reset_image_client() -> None:
    """Close and reset the image client singleton (for test cleanup)."""
    anyio.run(_close_and_reset_image_client_async)


class TestCreateHttpClient:
    """Unit tests for create_http_client factory."""

    @pytest.mark.asyncio
    async def test_returns_async_client(self):
        client = http_module.create_http_client(base_url="https://example.com")
        try:
            assert isinstance(client, httpx.AsyncClient)
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_default_timeouts(self):
        client = http_module.create_http_client(base_url="https://example.com")
        try:
            timeout = client.timeout

            assert timeout.connect == http_module.DEFAULT_CONNECT_TIMEOUT
            assert timeout.read == http_module.DEFAULT_READ_TIMEOUT
            assert timeout.write == http_module.DEFAULT_WRITE_TIMEOUT
            assert timeout.pool == http_module.DEFAULT_POOL_TIMEOUT
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_custom_timeouts(self):
        client = http_module.create_http_client(
            base_url="https://example.com",
            connect_timeout=1.0,
            read_timeout=2.0,
            write_timeout=3.0,
            pool_timeout=4.0,
        )
        try:
            timeout = client.timeout

            assert timeout.connect == 1.0
            assert timeout.read == 2.0
            assert timeout.write == 3.0
            assert timeout.pool == 4.0
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_empty_base_url_by_default(self):
        client = http_module.create_http_client()
        try:
            assert client.base_url == httpx.URL("")
        finally:
            await client.aclose()


class TestImageClient:
    """Unit tests for the Cloudinary client singleton."""

    @pytest.fixture(autouse=True)
    def reset_image_client(self):
        _close_and_reset_image_client()
        yield
        _close_and_reset_image_client()

    @pytest.mark.asyncio
    async def test_has_cloudinary_base_url(self):
        client = http_module.get_image_client()
        assert client.base_url == httpx.URL(http_module.CLOUDINARY_BASE_URL)

    @pytest.mark.asyncio
    async def test_is_singleton(self):
        assert http_module.get_image_client() is http_module.get_image_client()

    @pytest.mark.asyncio
    async def test_close_resets_singleton(self):
        client = http_module.get_image_client()

        await http_module.close_image_client()

        assert client.is_closed
        assert http_module._image_client is None

    @pytest.mark.asyncio
    async def test_close_is_safe_without_client(self):
        assert http_module._image_client is None

        await http_module.close_image_client()

        assert http_module._image_client is None

    @pytest.mark.asyncio
    async def test_creates_new_client_after_close(self):
        client1 = http_module.get_image_client()
        await http_module.close_image_client()

        client2 = http_module.get_image_client()

        assert client1 is not client2
        assert not client2.is_closed
