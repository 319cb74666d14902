"""Error response schema shared by every route's OpenAPI documentation."""

from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error envelope returned by the global exception handlers."""

    success: Literal[False] = False
    type: str
    message: str
