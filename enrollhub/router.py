"""Central API router aggregating all domain routers."""

from fastapi import APIRouter

from enrollhub.auth.router import router as auth_router
from enrollhub.course.router import router as course_router
from enrollhub.enrollment.router import router as enrollment_router
from enrollhub.models.error import ErrorResponse
from enrollhub.user.router import router as user_router

# Mounted under settings.api_prefix (default /api/v1).
api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)

api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(course_router)
api_router.include_router(enrollment_router)
