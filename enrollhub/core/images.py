"""Avatar storage on Cloudinary.

Uploads go straight to Cloudinary's signed upload REST endpoint through the
shared httpx client; nothing is written to local disk and nothing is retried.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import httpx
from fastapi import UploadFile

from enrollhub.core.exceptions import ImageUploadError
from enrollhub.core.http import get_image_client
from enrollhub.core.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    secure_url: str
    public_id: str | None = None


class ImageStore(Protocol):
    async def upload(self, file: UploadFile, folder: str) -> UploadedImage:
        """Store ``file`` under ``folder`` or raise ImageUploadError."""
        ...


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: SHA-1 of sorted ``k=v`` pairs plus secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryImageStore:
    def __init__(
        self,
        cloud_name: str | None,
        api_key: str | None,
        api_secret: str | None,
        client: httpx.AsyncClient | None = None,
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._client = client

    def _ensure_configured(self) -> tuple[str, str, str]:
        if not (self._cloud_name and self._api_key and self._api_secret):
            raise ImageUploadError("Image storage is not configured")
        return self._cloud_name, self._api_key, self._api_secret

    async def upload(self, file: UploadFile, folder: str) -> UploadedImage:
        cloud_name, api_key, api_secret = self._ensure_configured()
        params = {"folder": folder, "timestamp": str(int(time.time()))}
        data = {
            **params,
            "api_key": api_key,
            "signature": sign_params(params, api_secret),
        }
        content = await file.read()
        files = {
            "file": (
                file.filename or "upload",
                content,
                file.content_type or "application/octet-stream",
            )
        }
        client = self._client or get_image_client()

        try:
            response = await client.post(
                f"/v1_1/{cloud_name}/image/upload", data=data, files=files
            )
        except httpx.RequestError as e:
            raise ImageUploadError("Image storage unavailable") from e

        if response.status_code != 200:
            raise ImageUploadError(_error_message(response))

        body = response.json()
        secure_url = body.get("secure_url")
        if not secure_url:
            raise ImageUploadError("Image storage returned no URL")

        logger.info("Uploaded %s to folder %s", body.get("public_id"), folder)
        return UploadedImage(secure_url=secure_url, public_id=body.get("public_id"))


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"Image upload failed with status {response.status_code}"


@lru_cache
def get_image_store() -> ImageStore:
    """Get cached image store instance."""
    settings = get_settings()
    return CloudinaryImageStore(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
    )
