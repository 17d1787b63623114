"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.atogato.api.dependencies.auth import CurrentPrincipal, get_current_principal

# Database
from src.atogato.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.atogato.api.dependencies.repositories import ProjectRepo, get_project_repository

# Services
from src.atogato.api.dependencies.services import (
    ImageStoreDep,
    ProjectServiceDep,
    get_project_service,
)

__all__ = [
    # Auth
    "CurrentPrincipal",
    "get_current_principal",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ProjectRepo",
    "get_project_repository",
    # Services
    "ImageStoreDep",
    "ProjectServiceDep",
    "get_project_service",
]
