"""Enrollment domain schemas."""

from datetime import datetime

from pydantic import BaseModel
from sqlmodel import SQLModel

from enrollhub.course.schemas import CourseRead


class EnrollmentCreate(SQLModel):
    course_id: int | None = None
    user_id: int | None = None


class EnrollmentRead(SQLModel):
    id: int
    user_id: int
    course_id: int
    created_at: datetime


class EnrollmentResponse(BaseModel):
    success: bool = True
    message: str
    data: EnrollmentRead


class EnrolledCoursesResponse(BaseModel):
    success: bool = True
    data: list[CourseRead]
