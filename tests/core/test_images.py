"""Tests for enrollhub/core/images.py - Cloudinary avatar storage."""

import hashlib
import io

import httpx
import pytest
from fastapi import UploadFile

from enrollhub.core.exceptions import ImageUploadError
from enrollhub.core.http import CLOUDINARY_BASE_URL
from enrollhub.core.images import CloudinaryImageStore, sign_params


def _upload_file(name: str = "me.png") -> UploadFile:
    return UploadFile(file=io.BytesIO(b"\x89PNG fake"), filename=name)


def _store(handler) -> CloudinaryImageStore:
    client = httpx.AsyncClient(
        base_url=CLOUDINARY_BASE_URL, transport=httpx.MockTransport(handler)
    )
    return CloudinaryImageStore("demo", "key-123", "shh", client=client)


def test_sign_params_sorts_keys_and_appends_secret():
    expected = hashlib.sha1(b"folder=avatars&timestamp=1700000000shh").hexdigest()

    signature = sign_params({"timestamp": "1700000000", "folder": "avatars"}, "shh")

    assert signature == expected


@pytest.mark.asyncio
async def test_upload_returns_secure_url():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "secure_url": "https://res.cloudinary.com/demo/avatars/me.png",
                "public_id": "avatars/me",
            },
        )

    image = await _store(handler).upload(_upload_file(), "avatars")

    assert image.secure_url == "https://res.cloudinary.com/demo/avatars/me.png"
    assert image.public_id == "avatars/me"
    assert seen[0].url.path == "/v1_1/demo/image/upload"
    body = seen[0].content
    assert b"key-123" in body
    assert b"signature" in body


@pytest.mark.asyncio
async def test_upload_error_message_is_surfaced():
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "Invalid image file"}})

    with pytest.raises(ImageUploadError, match="Invalid image file"):
        await _store(handler).upload(_upload_file(), "avatars")


@pytest.mark.asyncio
async def test_upload_unreachable_raises_image_upload_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(ImageUploadError):
        await _store(handler).upload(_upload_file(), "avatars")


@pytest.mark.asyncio
async def test_upload_without_url_raises():
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"public_id": "x"})

    with pytest.raises(ImageUploadError, match="no URL"):
        await _store(handler).upload(_upload_file(), "avatars")


@pytest.mark.asyncio
async def test_unconfigured_store_refuses_upload():
    store = CloudinaryImageStore(None, None, None)

    with pytest.raises(ImageUploadError, match="not configured"):
        await store.upload(_upload_file(), "avatars")
