"""Project schemas for API request/response."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from src.atogato.models.enums import ProjectCategory, RemoteStatus, RequiredCategory
from src.atogato.models.project import DEFAULT_LOCATION


def _strip_required(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label} cannot be empty or whitespace only")
    return v


def _dedupe(categories: list[RequiredCategory]) -> list[RequiredCategory]:
    """Drop repeated categories, keeping first-seen order."""
    return list(dict.fromkeys(categories))


class ProjectImage(BaseModel):
    """Image attached to a project, in upload order."""

    url: str
    position: int = Field(ge=0)


class ProjectCreate(BaseModel):
    """Schema for creating a project.

    ``required_people`` is accepted for compatibility but the stored value is
    always the number of distinct ``required_categories``.
    """

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=200)
    category: ProjectCategory
    location: str = Field(default=DEFAULT_LOCATION, max_length=200)
    project_deadline: date
    application_deadline: date
    required_categories: list[RequiredCategory] = Field(min_length=1)
    required_people: int = Field(default=0, ge=0)
    swipe_algorithm_enabled: bool = True
    description: str = Field(min_length=1, max_length=5000)
    ongoing_status: bool = True
    remote_status: RemoteStatus = RemoteStatus.BOTH

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_required(v, "Project name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _strip_required(v, "Description")

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        return v.strip() or DEFAULT_LOCATION

    @field_validator("required_categories")
    @classmethod
    def validate_required_categories(cls, v: list[RequiredCategory]) -> list[RequiredCategory]:
        return _dedupe(v)


class ProjectReplace(ProjectCreate):
    """Schema for a full replace of every mutable project field."""


class ProjectUpdate(BaseModel):
    """Schema for a sparse update.

    Only the fields present in the request are applied. Unknown keys are
    ignored. Fields may be omitted but not explicitly set to null.

    Each field also accepts the camelCase key older clients send
    (``projectName``, ``requiredCategory``, ``swipeAlgorithm``...).
    """

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("name", "projectName"),
    )
    category: ProjectCategory | None = Field(
        default=None, validation_alias=AliasChoices("category", "projectArtCategory")
    )
    location: str | None = Field(default=None, max_length=200)
    project_deadline: date | None = Field(
        default=None, validation_alias=AliasChoices("project_deadline", "projectDeadline")
    )
    application_deadline: date | None = Field(
        default=None,
        validation_alias=AliasChoices("application_deadline", "applicationDeadline"),
    )
    required_categories: list[RequiredCategory] | None = Field(
        default=None,
        min_length=1,
        validation_alias=AliasChoices("required_categories", "requiredCategory"),
    )
    required_people: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("required_people", "requiredPeople")
    )
    swipe_algorithm_enabled: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("swipe_algorithm_enabled", "swipeAlgorithm"),
    )
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    ongoing_status: bool | None = Field(
        default=None, validation_alias=AliasChoices("ongoing_status", "ongoingStatus")
    )
    remote_status: RemoteStatus | None = Field(
        default=None, validation_alias=AliasChoices("remote_status", "remoteStatus")
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = _strip_required(v, "Project name")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is not None:
            v = _strip_required(v, "Description")
        return v

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip() or DEFAULT_LOCATION
        return v

    @field_validator("required_categories")
    @classmethod
    def validate_required_categories(
        cls, v: list[RequiredCategory] | None
    ) -> list[RequiredCategory] | None:
        if v is not None:
            v = _dedupe(v)
        return v

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> Self:
        nulls = sorted(f for f in self.model_fields_set if getattr(self, f) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        """Return only the fields the caller set."""
        return self.model_dump(exclude_unset=True)


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    owner_id: str
    name: str
    category: ProjectCategory
    location: str
    created_date: date
    project_deadline: date
    application_deadline: date
    required_categories: list[RequiredCategory]
    required_people: int
    swipe_algorithm_enabled: bool
    description: str
    ongoing_status: bool
    remote_status: RemoteStatus
    liked: int
    images: list[ProjectImage]
    updated_at: datetime

    model_config = {"from_attributes": True}


class ImageUploadResult(BaseModel):
    """Outcome of uploading one image during project creation."""

    filename: str
    ok: bool
    url: str | None = None
    error: str | None = None


class ProjectCreateResponse(ProjectRead):
    """Created project plus the per-image upload outcome."""

    image_uploads: list[ImageUploadResult] = []
