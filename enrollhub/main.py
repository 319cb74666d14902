from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqladmin import Admin

from enrollhub.admin.auth import AdminAuth
from enrollhub.admin.views import CourseAdmin, EnrollmentAdmin, UserAdmin
from enrollhub.core.cors import add_cors_middleware
from enrollhub.core.email import init_resend
from enrollhub.core.exception_handlers import register_exception_handlers
from enrollhub.core.http import close_image_client
from enrollhub.core.logging import configure_logging
from enrollhub.core.request_logging import add_request_logging_middleware
from enrollhub.core.settings import get_settings
from enrollhub.db.engine import engine
from enrollhub.health.router import router as health_router
from enrollhub.router import api_router

configure_logging()

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_resend()
    yield
    await close_image_client()


app = FastAPI(
    title="EnrollHub",
    version="0.1.0",
    description="Course enrollment backend: accounts, courses and enrollments.",
    docs_url="/api-docs",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(api_router, prefix=settings.api_prefix)

add_request_logging_middleware(app)
add_cors_middleware(app, settings)
register_exception_handlers(app)

# Mount SQLAdmin UI at /admin (SQLAdmin enables sessions via auth backend secret)
admin = Admin(
    app=app,
    engine=engine,
    authentication_backend=AdminAuth(),
)
admin.add_view(UserAdmin)
admin.add_view(CourseAdmin)
admin.add_view(EnrollmentAdmin)
