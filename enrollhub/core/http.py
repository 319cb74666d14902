"""HTTP client factory for external API calls.

Provides per-service HTTP clients with connection pooling, timeouts,
and proper resource management.
"""

import httpx

# Default timeout configuration (seconds)
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 30.0
DEFAULT_WRITE_TIMEOUT = 30.0
DEFAULT_POOL_TIMEOUT = 5.0

CLOUDINARY_BASE_URL = "https://api.cloudinary.com"

# Module-level client storage for singleton pattern
_image_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str = "",
    max_connections: int = 20,
    max_keepalive_connections: int = 10,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Read and write timeouts default higher than usual because avatar
    uploads stream whole image files.
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=write_timeout,
            pool=pool_timeout,
        ),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
    )


def get_image_client() -> httpx.AsyncClient:
    """Get singleton HTTP client for the Cloudinary upload API.

    The client should be closed via close_image_client() during shutdown.
    """
    global _image_client
    if _image_client is None:
        _image_client = create_http_client(base_url=CLOUDINARY_BASE_URL)
    return _image_client


async def close_image_client() -> None:
    """Close the image store HTTP client and release resources."""
    global _image_client
    if _image_client is not None:
        await _image_client.aclose()
        _image_client = None
