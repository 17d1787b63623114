"""Repository layer - data access abstraction."""

from src.atogato.repositories.base import BaseRepository
from src.atogato.repositories.project import ProjectRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
]
