"""Course domain models."""

from sqlmodel import Field, SQLModel

from enrollhub.core.mixins import TimestampMixin


class Course(TimestampMixin, SQLModel, table=True):
    __tablename__: str = "courses"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: str = Field(default="")
    category: str = Field(index=True, max_length=100)
    level: str = Field(default="", index=True, max_length=50)
    instructor: str = Field(default="", max_length=255)
    price: float
    duration: int
    status: str = Field(max_length=50)
    popularity: int = Field(default=0, index=True)
