"""Project endpoints - creation, retrieval, updates and deletion.

Mutating endpoints require a bearer token; only the owner may change or
delete a project.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from src.atogato.api.dependencies import CurrentPrincipal, ProjectServiceDep
from src.atogato.models import DEFAULT_LOCATION
from src.atogato.models.enums import ProjectCategory, RemoteStatus, RequiredCategory
from src.atogato.schemas.project import (
    ProjectCreate,
    ProjectCreateResponse,
    ProjectRead,
    ProjectReplace,
    ProjectUpdate,
)
from src.atogato.services import ImageUpload

router = APIRouter(prefix="/projects", tags=["projects"])

NOT_FOUND = {404: {"description": "Project not found"}}
OWNER_ONLY = {
    401: {"description": "Missing or invalid token"},
    403: {"description": "Requester is not the project owner"},
}


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects by recency",
    description="List all projects, most recently created first.",
)
async def list_recent_projects(service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.list_recent()
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/all",
    response_model=list[ProjectRead],
    summary="List all projects",
    description="List all projects in storage order.",
)
async def list_all_projects(service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.list_projects()
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/sorted",
    response_model=list[ProjectRead],
    summary="List open projects by deadline",
    description=(
        "List projects still accepting applications, soonest application "
        "deadline first and most liked first among equal deadlines."
    ),
)
async def list_upcoming_projects(service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.list_upcoming()
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses=NOT_FOUND,
)
async def get_project(project_id: UUID, service: ProjectServiceDep) -> ProjectRead:
    """Get a project by ID."""
    project = await service.get_project(project_id)
    return ProjectRead.model_validate(project)


@router.post(
    "",
    response_model=ProjectCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description=(
        "Create a project from form fields and zero or more `image` files. "
        "Images that fail to upload are reported in `image_uploads` and "
        "left out of the project."
    ),
    responses={401: {"description": "Missing or invalid token"}},
)
async def create_project(
    principal: CurrentPrincipal,
    service: ProjectServiceDep,
    name: Annotated[str, Form(min_length=1, max_length=200)],
    category: Annotated[ProjectCategory, Form()],
    project_deadline: Annotated[date, Form()],
    application_deadline: Annotated[date, Form()],
    required_categories: Annotated[list[RequiredCategory], Form()],
    description: Annotated[str, Form(min_length=1)],
    location: Annotated[str, Form(max_length=200)] = DEFAULT_LOCATION,
    swipe_algorithm_enabled: Annotated[bool, Form()] = True,
    ongoing_status: Annotated[bool, Form()] = True,
    remote_status: Annotated[RemoteStatus, Form()] = RemoteStatus.BOTH,
    required_people: Annotated[int, Form(ge=0)] = 0,
    image: Annotated[list[UploadFile], File(description="Project images")] = [],
) -> ProjectCreateResponse:
    """Create a new project owned by the caller."""
    try:
        data = ProjectCreate(
            name=name,
            category=category,
            location=location,
            project_deadline=project_deadline,
            application_deadline=application_deadline,
            required_categories=required_categories,
            required_people=required_people,
            swipe_algorithm_enabled=swipe_algorithm_enabled,
            description=description,
            ongoing_status=ongoing_status,
            remote_status=remote_status,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e

    # At most max_image_bytes + 1 bytes of each file are held in memory
    limit = service.max_image_bytes
    uploads = [
        ImageUpload(
            filename=f.filename or "image",
            data=await f.read(limit + 1 if limit is not None else -1),
            content_type=f.content_type,
        )
        for f in image
    ]

    result = await service.create_project(principal, data, uploads)

    response = ProjectCreateResponse.model_validate(result.project)
    response.image_uploads = result.image_uploads
    return response


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Replace project",
    description="Overwrite every mutable field of a project.",
    responses={**NOT_FOUND, **OWNER_ONLY},
)
async def replace_project(
    project_id: UUID,
    request: ProjectReplace,
    principal: CurrentPrincipal,
    service: ProjectServiceDep,
) -> ProjectRead:
    """Replace a project's mutable fields."""
    project = await service.replace_project(principal, project_id, request)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Change only the fields present in the request body.",
    responses={**NOT_FOUND, **OWNER_ONLY},
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    principal: CurrentPrincipal,
    service: ProjectServiceDep,
) -> ProjectRead:
    """Apply a sparse update to a project."""
    project = await service.update_project(principal, project_id, request)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={**NOT_FOUND, **OWNER_ONLY},
)
async def delete_project(
    project_id: UUID,
    principal: CurrentPrincipal,
    service: ProjectServiceDep,
) -> None:
    """Delete a project and its images."""
    await service.delete_project(principal, project_id)
