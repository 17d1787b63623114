"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.atogato.api.dependencies.db import DBSession
from src.atogato.repositories import ProjectRepository


def get_project_repository(session: DBSession) -> ProjectRepository:
    """Get project repository bound to the request session."""
    return ProjectRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
