"""Project lifecycle service - creation, updates, deletion and retrieval."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.atogato.core.exceptions import (
    FieldValidationError,
    ForbiddenError,
    NotFoundError,
    UploadError,
)
from src.atogato.core.logging import get_logger
from src.atogato.core.storage import ImageStore
from src.atogato.models import Project
from src.atogato.models.base import utc_now, utc_today
from src.atogato.repositories import ProjectRepository
from src.atogato.schemas.auth import Principal
from src.atogato.schemas.project import (
    ImageUploadResult,
    ProjectCreate,
    ProjectImage,
    ProjectReplace,
    ProjectUpdate,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    """Raw image file received with a create request."""

    filename: str
    data: bytes
    content_type: str | None = None


@dataclass
class ProjectCreateResult:
    """A newly created project and what happened to each of its images."""

    project: Project
    image_uploads: list[ImageUploadResult]


def ensure_owner(principal: Principal, project: Project) -> None:
    """Raise ForbiddenError unless the principal owns the project."""
    if project.owner_id != principal.id:
        raise ForbiddenError("You are not the owner of this project")


def check_deadlines(application_deadline: date, project_deadline: date) -> None:
    """Applications must close no later than the project itself."""
    if application_deadline > project_deadline:
        raise FieldValidationError(
            "application_deadline",
            "Application deadline cannot be after the project deadline",
        )


class ProjectService:
    """Project service - business logic only."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        image_store: ImageStore,
        session: AsyncSession,
        max_image_bytes: int | None = None,
    ):
        self.project_repo = project_repo
        self.image_store = image_store
        self.session = session
        self.max_image_bytes = max_image_bytes

    # --- Retrieval ---

    async def get_project(self, project_id: UUID) -> Project:
        """Get a project by ID.

        Raises:
            NotFoundError: If no project has this ID
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def list_projects(self) -> list[Project]:
        """List every project in storage order."""
        return await self.project_repo.list_all()

    async def list_recent(self) -> list[Project]:
        """List projects by creation date, newest first."""
        return await self.project_repo.list_by_created_date_desc()

    async def list_upcoming(self) -> list[Project]:
        """List projects whose application deadline is still ahead.

        Ordered by soonest deadline, then by popularity.
        """
        return await self.project_repo.list_by_application_deadline_after(utc_today())

    # --- Create ---

    async def create_project(
        self,
        principal: Principal,
        data: ProjectCreate,
        uploads: Sequence[ImageUpload] = (),
    ) -> ProjectCreateResult:
        """Create a project owned by the principal.

        Images are uploaded one at a time before the project is saved. An
        image that fails to upload is left out and reported in the result;
        it never aborts the creation.

        Raises:
            FieldValidationError: If the deadlines are out of order
        """
        check_deadlines(data.application_deadline, data.project_deadline)

        images, results = await self._upload_images(uploads)

        fields = data.model_dump(exclude={"required_people"})
        project = Project(
            **fields,
            owner_id=principal.id,
            required_people=len(data.required_categories),
            images=[image.model_dump() for image in images],
            created_date=utc_today(),
        )
        self.project_repo.add(project)
        await self._commit(project)

        logger.info(
            "project_created",
            project_id=str(project.id),
            images=len(images),
            failed_images=sum(1 for r in results if not r.ok),
        )
        return ProjectCreateResult(project=project, image_uploads=results)

    async def _upload_images(
        self, uploads: Sequence[ImageUpload]
    ) -> tuple[list[ProjectImage], list[ImageUploadResult]]:
        images: list[ProjectImage] = []
        results: list[ImageUploadResult] = []

        for upload in uploads:
            try:
                url = await self._store_image(upload)
            except UploadError as e:
                logger.warning("image_upload_failed", filename=upload.filename, error=e.detail)
                results.append(ImageUploadResult(filename=upload.filename, ok=False, error=e.detail))
                continue

            images.append(ProjectImage(url=url, position=len(images)))
            results.append(ImageUploadResult(filename=upload.filename, ok=True, url=url))

        return images, results

    async def _store_image(self, upload: ImageUpload) -> str:
        if not upload.data:
            raise UploadError(f"{upload.filename} is empty")
        if self.max_image_bytes is not None and len(upload.data) > self.max_image_bytes:
            raise UploadError(f"{upload.filename} exceeds {self.max_image_bytes} bytes")
        return await self.image_store.store(upload.data, upload.filename, upload.content_type)

    # --- Update ---

    async def replace_project(
        self, principal: Principal, project_id: UUID, data: ProjectReplace
    ) -> Project:
        """Overwrite every mutable field of a project.

        ``required_people`` is recomputed from the category list. ID, owner,
        creation date, likes and images are never touched.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the principal is not the owner
            FieldValidationError: If the deadlines are out of order
        """
        project = await self._get_owned_project(principal, project_id)
        check_deadlines(data.application_deadline, data.project_deadline)

        changes = data.model_dump(exclude={"required_people"})
        changes["required_people"] = len(data.required_categories)
        self._apply(project, changes)
        await self._commit(project)

        logger.info("project_replaced", project_id=str(project.id))
        return project

    async def update_project(
        self, principal: Principal, project_id: UUID, data: ProjectUpdate
    ) -> Project:
        """Apply a sparse update: only fields present in ``data`` change.

        When ``required_categories`` is present, ``required_people`` is set
        to its length, overriding any value sent alongside it.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the principal is not the owner
            FieldValidationError: If the merged deadlines are out of order
        """
        project = await self._get_owned_project(principal, project_id)

        changes = data.changes()
        if "required_categories" in changes:
            changes["required_people"] = len(changes["required_categories"])

        # Validate the merged state before writing anything
        check_deadlines(
            changes.get("application_deadline", project.application_deadline),
            changes.get("project_deadline", project.project_deadline),
        )

        if changes:
            self._apply(project, changes)
            await self._commit(project)

        logger.info("project_updated", project_id=str(project.id), fields=sorted(changes))
        return project

    # --- Delete ---

    async def delete_project(self, principal: Principal, project_id: UUID) -> None:
        """Delete a project and the images it owns.

        Raises:
            NotFoundError: If the project does not exist
            ForbiddenError: If the principal is not the owner
        """
        project = await self._get_owned_project(principal, project_id)

        try:
            await self.project_repo.delete(project)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("project_deleted", project_id=str(project_id))

    # --- Helpers ---

    async def _get_owned_project(self, principal: Principal, project_id: UUID) -> Project:
        project = await self.get_project(project_id)
        try:
            ensure_owner(principal, project)
        except ForbiddenError:
            logger.warning(
                "project_forbidden",
                project_id=str(project_id),
                owner_id=project.owner_id,
            )
            raise
        return project

    @staticmethod
    def _apply(project: Project, changes: dict[str, Any]) -> None:
        for field, value in changes.items():
            setattr(project, field, value)
        project.updated_at = utc_now()

    async def _commit(self, project: Project) -> None:
        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise
