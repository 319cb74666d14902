"""Course domain router.

Catalog CRUD. Reads need a session; mutations need the Admin role.
"""

import logging
import math
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import func, select

from enrollhub.auth.dependencies import require_admin, require_auth
from enrollhub.core.constants import CommonResponses, Routes
from enrollhub.core.deps import SessionDep
from enrollhub.core.exceptions import RequiredFieldsError
from enrollhub.course.exceptions import CourseNotFoundError, InvalidDurationError
from enrollhub.course.models import Course
from enrollhub.course.schemas import (
    CourseCreate,
    CourseDeletedResponse,
    CourseListResponse,
    CourseRead,
    CourseResponse,
    CourseUpdate,
    Pagination,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.COURSE.prefix,
    tags=[Routes.COURSE.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.post(
    "/create-course",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.FORBIDDEN},
)
async def create_course(course_in: CourseCreate, session: SessionDep):
    """Create a course. Admin only."""
    if (
        not course_in.title
        or not course_in.category
        or course_in.price is None
        or not course_in.status
    ):
        raise RequiredFieldsError()
    if not course_in.duration or course_in.duration <= 0:
        raise InvalidDurationError()

    course = Course(
        title=course_in.title,
        description=course_in.description or "",
        category=course_in.category,
        level=course_in.level or "",
        instructor=course_in.instructor or "",
        price=course_in.price,
        duration=course_in.duration,
        status=course_in.status,
        popularity=course_in.popularity or 0,
    )
    session.add(course)
    session.commit()
    session.refresh(course)
    logger.info("Created course %s", course.id, extra={"course_id": course.id})

    return CourseResponse(
        message="Course created successfully", data=CourseRead.model_validate(course)
    )


@router.get("/get-courses", response_model=CourseListResponse)
async def list_courses(
    session: SessionDep,
    category: str | None = None,
    level: str | None = None,
    popularity: int | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 10,
):
    """List courses with exact-match filters and page/pageSize pagination."""
    statement = select(Course)
    count_statement = select(func.count()).select_from(Course)
    filters = []
    if category:
        filters.append(Course.category == category)
    if level:
        filters.append(Course.level == level)
    if popularity is not None:
        filters.append(Course.popularity == popularity)
    for condition in filters:
        statement = statement.where(condition)
        count_statement = count_statement.where(condition)

    courses = session.exec(
        statement.order_by(Course.id).limit(page_size).offset((page - 1) * page_size)
    ).all()
    total = session.exec(count_statement).one()

    return CourseListResponse(
        data=[CourseRead.model_validate(course) for course in courses],
        pagination=Pagination(
            totalItems=total,
            totalPages=math.ceil(total / page_size),
            currentPage=page,
            pageSize=page_size,
        ),
    )


@router.get(
    "/get-course/{course_id}",
    response_model=CourseResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_course(course_id: int, session: SessionDep):
    """Get a course by ID."""
    course = session.get(Course, course_id)
    if not course:
        raise CourseNotFoundError()
    return CourseResponse(data=CourseRead.model_validate(course))


@router.put(
    "/update-course/{course_id}",
    response_model=CourseResponse,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.FORBIDDEN},
)
async def update_course(
    course_id: int, course_update: CourseUpdate, session: SessionDep
):
    """Update a course by ID. Admin only; omitted fields are kept."""
    course = session.get(Course, course_id)
    if not course:
        raise CourseNotFoundError()

    update_data = course_update.model_dump(exclude_none=True)
    for key, value in update_data.items():
        setattr(course, key, value)

    session.add(course)
    session.commit()
    session.refresh(course)
    return CourseResponse(
        message="Course updated successfully", data=CourseRead.model_validate(course)
    )


@router.delete(
    "/delete-course/{course_id}",
    response_model=CourseDeletedResponse,
    dependencies=[Depends(require_admin)],
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.FORBIDDEN},
)
async def delete_course(course_id: int, session: SessionDep):
    """Delete a course by ID. Admin only."""
    course = session.get(Course, course_id)
    if not course:
        raise CourseNotFoundError()
    session.delete(course)
    session.commit()
    logger.info("Deleted course %s", course_id, extra={"course_id": course_id})
    return CourseDeletedResponse(message="Course deleted successfully")
