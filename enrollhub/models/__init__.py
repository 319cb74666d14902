"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate relies on `SQLModel.metadata`, which is populated only
  when the table models are imported.
- `alembic/env.py` imports `enrollhub.models`, so this module must import all
  SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from enrollhub.course.models import Course  # noqa: F401
from enrollhub.enrollment.models import Enrollment  # noqa: F401
from enrollhub.user.models import User  # noqa: F401
