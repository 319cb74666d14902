"""Course domain schemas."""

from datetime import datetime

from pydantic import BaseModel, Field
from sqlmodel import SQLModel


class CourseRead(SQLModel):
    id: int
    title: str
    description: str
    category: str
    level: str
    instructor: str
    price: float
    duration: int
    status: str
    popularity: int
    created_at: datetime
    updated_at: datetime


class CourseCreate(SQLModel):
    """Required fields are checked by the route so that missing ones are a 400."""

    title: str | None = None
    description: str | None = None
    category: str | None = None
    level: str | None = None
    instructor: str | None = None
    price: float | None = Field(default=None, ge=0)
    duration: int | None = None
    status: str | None = None
    popularity: int | None = Field(default=None, ge=0)


class CourseUpdate(SQLModel):
    """Only non-null fields are applied."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1)
    level: str | None = None
    instructor: str | None = None
    price: float | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, gt=0)
    status: str | None = Field(default=None, min_length=1)
    popularity: int | None = Field(default=None, ge=0)


class Pagination(BaseModel):
    totalItems: int
    totalPages: int
    currentPage: int
    pageSize: int


class CourseResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: CourseRead


class CourseListResponse(BaseModel):
    success: bool = True
    data: list[CourseRead]
    pagination: Pagination


class CourseDeletedResponse(BaseModel):
    success: bool = True
    message: str
