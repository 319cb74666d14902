"""Enrollment domain router."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from enrollhub.auth.dependencies import require_auth
from enrollhub.core.constants import CommonResponses, Routes
from enrollhub.core.deps import MailerDep, SessionDep
from enrollhub.core.email import enrollment_message
from enrollhub.core.exceptions import RequiredFieldsError
from enrollhub.course.exceptions import CourseNotFoundError
from enrollhub.course.models import Course
from enrollhub.course.schemas import CourseRead
from enrollhub.enrollment.exceptions import AlreadyEnrolledError
from enrollhub.enrollment.models import Enrollment
from enrollhub.enrollment.schemas import (
    EnrolledCoursesResponse,
    EnrollmentCreate,
    EnrollmentRead,
    EnrollmentResponse,
)
from enrollhub.user.exceptions import UnknownUserIdError
from enrollhub.user.models import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.ENROLLMENT.prefix,
    tags=[Routes.ENROLLMENT.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.post(
    "/",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.NOT_FOUND,
        **CommonResponses.CONFLICT,
        **CommonResponses.SERVER_ERROR,
    },
)
async def enroll(
    enrollment_in: EnrollmentCreate, session: SessionDep, mailer: MailerDep
):
    """Enroll a user in a course and email a confirmation.

    The enrollment is stored before the email is sent; a mail failure is
    reported as 500 but the enrollment stays.
    """
    if not enrollment_in.course_id or not enrollment_in.user_id:
        raise RequiredFieldsError("Provide courseID and userID to proceed.")

    existing = session.exec(
        select(Enrollment).where(
            Enrollment.user_id == enrollment_in.user_id,
            Enrollment.course_id == enrollment_in.course_id,
        )
    ).first()
    if existing:
        raise AlreadyEnrolledError()

    course = session.get(Course, enrollment_in.course_id)
    if not course:
        raise CourseNotFoundError()

    user = session.get(User, enrollment_in.user_id)
    if not user:
        raise UnknownUserIdError()

    enrollment = Enrollment(user_id=user.id, course_id=course.id)
    session.add(enrollment)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise AlreadyEnrolledError() from e
    session.refresh(enrollment)
    logger.info(
        "User %s enrolled in course %s",
        user.id,
        course.id,
        extra={"user_id": user.id, "course_id": course.id},
    )

    mailer.send(
        enrollment_message(
            email=user.email, first_name=user.first_name, course_title=course.title
        )
    )

    return EnrollmentResponse(
        message=(
            f'Enrolled in the course "{course.title}" successfully. '
            f"Enrollment confirmation has been sent to {user.email}."
        ),
        data=EnrollmentRead.model_validate(enrollment),
    )


@router.get("/{user_id}", response_model=EnrolledCoursesResponse)
async def list_enrolled_courses(user_id: int, session: SessionDep):
    """List the courses a user is enrolled in."""
    courses = session.exec(
        select(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .where(Enrollment.user_id == user_id)
        .order_by(Enrollment.created_at, Course.id)
    ).all()
    return EnrolledCoursesResponse(
        data=[CourseRead.model_validate(course) for course in courses]
    )
