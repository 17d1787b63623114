"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.atogato.api.dependencies.db import DBSession
from src.atogato.api.dependencies.repositories import ProjectRepo
from src.atogato.core.config import get_settings
from src.atogato.core.storage import ImageStore, get_image_store
from src.atogato.services.project_service import ProjectService

ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]


def get_project_service(
    project_repo: ProjectRepo,
    image_store: ImageStoreDep,
    session: DBSession,
) -> ProjectService:
    """Get project service."""
    settings = get_settings()
    return ProjectService(
        project_repo,
        image_store,
        session,
        max_image_bytes=settings.max_image_bytes,
    )


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
