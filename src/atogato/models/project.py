"""Project model - the listing creators recruit collaborators through."""

from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.atogato.models.base import utc_now, utc_today
from src.atogato.models.enums import RemoteStatus

DEFAULT_LOCATION = "Unknown"


class Project(SQLModel, table=True):
    """Project entity.

    Images are stored inside the row as an ordered list of
    ``{"url": ..., "position": ...}`` records, so deleting the project
    removes them with it.
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    owner_id: str = Field(max_length=255, index=True)
    name: str = Field(max_length=200)
    category: str = Field(max_length=50)
    location: str = Field(default=DEFAULT_LOCATION, max_length=200)
    created_date: date = Field(default_factory=utc_today, index=True)
    project_deadline: date
    application_deadline: date = Field(index=True)
    required_categories: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    required_people: int = Field(default=0, ge=0)
    swipe_algorithm_enabled: bool = Field(default=True)
    description: str = Field(max_length=5000)
    ongoing_status: bool = Field(default=True)
    remote_status: str = Field(default=RemoteStatus.BOTH.value, max_length=20)
    liked: int = Field(default=0, ge=0)
    images: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
